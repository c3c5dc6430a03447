from __future__ import annotations

import importlib
import logging
from types import ModuleType
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from flask_cors import CORS

from .attendance.controller import register as register_attendance
from .common.errors import register_error_handlers
from .common.serialization import ApiJSONProvider
from .company.controller import register as register_settings
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, ensure_admin_user, list_tables
from .holidays.controller import register as register_holidays
from .leaves.controller import register as register_leaves
from .meetings.controller import register as register_meetings
from .overview.controller import register as register_overview
from .payroll.controller import register as register_payroll
from .projects.controller import register as register_projects
from .users.controller import register as register_users

logger = logging.getLogger("workstream")


def _load_settings(settings_module: Optional[str]) -> ModuleType:
    return importlib.import_module(settings_module or get_settings_module())


def create_app(container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    settings = _load_settings(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app = Flask(__name__)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json = ApiJSONProvider(app)
    CORS(app, origins=getattr(settings, "CORS_ORIGINS", "*"), supports_credentials=True)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings.__name__,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config)
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            ensure_admin_user(
                db_config,
                email=getattr(settings, "ADMIN_EMAIL"),
                password=getattr(settings, "ADMIN_PASSWORD"),
                name=getattr(settings, "ADMIN_NAME", "Administrator"),
            )

        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_expires_days=int(getattr(settings, "JWT_EXPIRES_DAYS", 30)),
        )

    app.extensions["container"] = container
    register_error_handlers(app)

    @app.get("/")
    def index():
        return jsonify({"message": "API is running..."})

    @app.get("/favicon.ico")
    def favicon():
        return "", 204

    register_users(app, container)
    register_settings(app, container)
    register_holidays(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_projects(app, container)
    register_meetings(app, container)
    register_payroll(app, container)
    register_overview(app, container)

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000)
