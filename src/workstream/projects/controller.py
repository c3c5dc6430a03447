from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_user, json_body, login_required, sub_admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.post("/projects")
    @sub_admin_required
    def projects_create():
        project = container.project_service.create(current_user(), json_body())
        return jsonify(project.to_dict()), 201

    @app.get("/projects")
    @sub_admin_required
    def projects_list():
        projects = container.project_service.list_projects(
            search=request.args.get("search"), status=request.args.get("status")
        )
        return jsonify([p.to_dict() for p in projects])

    @app.get("/projects/my")
    @login_required
    def projects_my():
        return jsonify([p.to_dict() for p in container.project_service.my_projects(current_user())])

    @app.get("/projects/<int:project_id>")
    @login_required
    def projects_get(project_id: int):
        return jsonify(container.project_service.get(current_user(), project_id).to_dict())

    @app.put("/projects/<int:project_id>")
    @sub_admin_required
    def projects_update(project_id: int):
        return jsonify(container.project_service.update(project_id, json_body()).to_dict())

    @app.post("/projects/<int:project_id>/assign")
    @sub_admin_required
    def projects_assign(project_id: int):
        project = container.project_service.assign(project_id, json_body().get("userIds"))
        return jsonify(project.to_dict())

    @app.delete("/projects/<int:project_id>")
    @sub_admin_required
    def projects_delete(project_id: int):
        container.project_service.delete(project_id)
        return jsonify({"message": "Project removed"})
