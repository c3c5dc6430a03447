from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_user, int_arg, json_body, login_required, sub_admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.post("/leaves/apply")
    @login_required
    def leaves_apply():
        leave = container.leave_service.apply(current_user(), json_body())
        return jsonify(leave.to_dict()), 201

    @app.get("/leaves/my")
    @login_required
    def leaves_my():
        user = current_user()
        leaves = container.leave_service.list_for_user(user, user.user_id)
        return jsonify([leave.to_dict() for leave in leaves])

    @app.get("/leaves/list/<int:user_id>")
    @login_required
    def leaves_list(user_id: int):
        leaves = container.leave_service.list_for_user(current_user(), user_id)
        return jsonify([leave.to_dict() for leave in leaves])

    @app.get("/leaves/pending")
    @sub_admin_required
    def leaves_pending():
        return jsonify([leave.to_dict() for leave in container.leave_service.pending()])

    @app.get("/leaves/all")
    @sub_admin_required
    def leaves_all():
        leaves = container.leave_service.list_all(status=request.args.get("status"), search=request.args.get("search"))
        return jsonify([leave.to_dict() for leave in leaves])

    @app.post("/leaves/approve/<int:leave_id>")
    @sub_admin_required
    def leaves_approve(leave_id: int):
        leave = container.leave_service.approve(leave_id, approver=current_user())
        return jsonify(leave.to_dict())

    @app.post("/leaves/reject/<int:leave_id>")
    @sub_admin_required
    def leaves_reject(leave_id: int):
        leave = container.leave_service.reject(leave_id, approver=current_user())
        return jsonify(leave.to_dict())

    @app.get("/leaves/balance/<int:user_id>")
    @login_required
    def leaves_balance(user_id: int):
        balances = container.leave_service.balances(current_user(), user_id, year=int_arg("year"))
        return jsonify([b.to_dict() for b in balances])
