from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import admin_required, current_user, json_body, login_required, sub_admin_required
from ..container import Container


def _login_payload(user, token: str) -> dict:
    return {
        "_id": user.user_id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "joiningDate": user.joining_date,
        "token": token,
    }


def register(app: Flask, container: Container) -> None:
    @app.post("/auth/login")
    def auth_login():
        data = json_body()
        user, token = container.auth_service.login(data.get("email", ""), data.get("password", ""))
        return jsonify(_login_payload(user, token))

    @app.post("/auth/register-admin")
    def auth_register_admin():
        data = json_body()
        user, token = container.auth_service.register_admin(
            name=data.get("name", ""),
            email=data.get("email", ""),
            password=data.get("password", ""),
        )
        return jsonify(_login_payload(user, token)), 201

    @app.get("/auth/me")
    @login_required
    def auth_me():
        user = container.auth_service.get_profile(current_user().user_id)
        return jsonify(user.to_public())

    @app.put("/auth/profile")
    @login_required
    def auth_update_profile():
        user, token = container.auth_service.update_profile(current_user().user_id, json_body())
        return jsonify({**user.to_public(), "token": token})

    @app.post("/auth/create-employee")
    @sub_admin_required
    def auth_create_employee():
        user = container.user_service.create_employee(creator=current_user(), data=json_body())
        return jsonify(user.to_public()), 201

    @app.post("/auth/create-subadmin")
    @admin_required
    def auth_create_subadmin():
        user = container.user_service.create_sub_admin(creator=current_user(), data=json_body())
        return jsonify(user.to_public()), 201

    @app.get("/auth/users")
    @sub_admin_required
    def auth_list_users():
        users = container.user_service.list_users(role=request.args.get("role"))
        return jsonify([u.to_public() for u in users])

    @app.put("/auth/users/<int:user_id>")
    @sub_admin_required
    def auth_update_user(user_id: int):
        user = container.user_service.update_user(user_id, json_body())
        return jsonify(user.to_public())

    @app.delete("/auth/users/<int:user_id>")
    @admin_required
    def auth_delete_user(user_id: int):
        container.user_service.delete_user(current_user=current_user(), user_id=user_id)
        return jsonify({"message": "User removed"})
