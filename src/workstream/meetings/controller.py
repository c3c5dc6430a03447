from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_user, json_body, login_required, sub_admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.post("/meetings")
    @sub_admin_required
    def meetings_create():
        meeting = container.meeting_service.create(current_user(), json_body())
        return jsonify(meeting.to_dict()), 201

    @app.get("/meetings")
    @sub_admin_required
    def meetings_list():
        return jsonify([m.to_dict() for m in container.meeting_service.list_all()])

    @app.get("/meetings/my")
    @login_required
    def meetings_my():
        return jsonify([m.to_dict() for m in container.meeting_service.my_meetings(current_user())])

    @app.put("/meetings/<int:meeting_id>")
    @login_required
    def meetings_update(meeting_id: int):
        meeting = container.meeting_service.update(current_user(), meeting_id, json_body())
        return jsonify(meeting.to_dict())

    @app.delete("/meetings/<int:meeting_id>")
    @login_required
    def meetings_delete(meeting_id: int):
        container.meeting_service.delete(current_user(), meeting_id)
        return jsonify({"message": "Meeting removed"})
