from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import admin_required, int_arg, json_body, login_required, sub_admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.post("/holidays")
    @sub_admin_required
    def holidays_create():
        holiday = container.holiday_service.create(json_body())
        return jsonify(holiday.to_dict()), 201

    @app.get("/holidays")
    @login_required
    def holidays_list():
        holidays = container.holiday_service.list_holidays(year=int_arg("year"))
        return jsonify([h.to_dict() for h in holidays])

    @app.get("/holidays/upcoming")
    @login_required
    def holidays_upcoming():
        holidays = container.holiday_service.upcoming(limit=int_arg("limit", 3))
        return jsonify([h.to_dict() for h in holidays])

    @app.put("/holidays/<int:holiday_id>")
    @admin_required
    def holidays_update(holiday_id: int):
        holiday = container.holiday_service.update(holiday_id, json_body())
        return jsonify(holiday.to_dict())

    @app.delete("/holidays/<int:holiday_id>")
    @admin_required
    def holidays_delete(holiday_id: int):
        container.holiday_service.delete(holiday_id)
        return jsonify({"message": "Holiday removed"})
