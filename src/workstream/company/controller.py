from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import json_body, login_required, sub_admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.get("/settings")
    @login_required
    def settings_get():
        return jsonify(container.settings_service.get_settings().to_dict())

    @app.put("/settings")
    @sub_admin_required
    def settings_update():
        return jsonify(container.settings_service.update_settings(json_body()).to_dict())
