from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import sub_admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.get("/auth/user-overview/<int:user_id>")
    @sub_admin_required
    def user_overview(user_id: int):
        return jsonify(container.overview_service.overview(user_id).to_dict())
