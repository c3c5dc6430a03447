from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_user, json_body, login_required, sub_admin_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.post("/salaries/generate")
    @sub_admin_required
    def salaries_generate():
        data = json_body()
        result = container.payroll_service.generate_batch(data.get("month"), data.get("year"))
        return jsonify({**result, "records": [r.to_dict() for r in result["records"]]}), 201

    @app.get("/salaries")
    @sub_admin_required
    def salaries_list():
        records = container.payroll_service.list_records(
            month=request.args.get("month"),
            year=request.args.get("year"),
            status=request.args.get("status"),
        )
        return jsonify([r.to_dict() for r in records])

    @app.get("/salaries/my")
    @login_required
    def salaries_my():
        return jsonify([r.to_dict() for r in container.payroll_service.my_records(current_user())])

    @app.get("/salaries/summary")
    @sub_admin_required
    def salaries_summary():
        return jsonify(container.payroll_service.summary(request.args.get("month"), request.args.get("year")))

    @app.put("/salaries/<int:salary_id>")
    @sub_admin_required
    def salaries_update(salary_id: int):
        return jsonify(container.payroll_service.update(salary_id, json_body()).to_dict())
