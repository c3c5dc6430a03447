from __future__ import annotations

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({**e.payload, "message": str(e)}), e.status_code

    @app.errorhandler(404)
    def handle_not_found(e):
        return jsonify({"message": f"Not Found - {request.path}"}), 404

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        if bool(app.config.get("DEBUG", False)):
            return jsonify({"message": str(e)}), 500
        return jsonify({"message": "Internal server error"}), 500
