from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_user, date_arg, int_arg, json_body, login_required, sub_admin_required
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.post("/attendance/checkin")
    @login_required
    def attendance_checkin():
        record = container.attendance_service.check_in(current_user().user_id)
        return jsonify(record.to_dict()), 201

    @app.post("/attendance/checkout")
    @login_required
    def attendance_checkout():
        confirm = json_body().get("confirmEarly", False)
        if not isinstance(confirm, bool):
            raise ValidationError("confirmEarly must be true or false")
        record = container.attendance_service.check_out(current_user().user_id, confirm_early=confirm)
        return jsonify(record.to_dict())

    @app.get("/attendance/daily/<int:user_id>")
    @login_required
    def attendance_daily(user_id: int):
        record = container.attendance_service.daily(current_user(), user_id)
        return jsonify(record.to_dict() if record else None)

    @app.get("/attendance/monthly/<int:user_id>")
    @login_required
    def attendance_monthly(user_id: int):
        entries = container.attendance_service.monthly(
            current_user(), user_id, request.args.get("month"), request.args.get("year")
        )
        return jsonify([e.to_dict() for e in entries])

    @app.get("/attendance/calendar/<int:user_id>")
    @login_required
    def attendance_calendar(user_id: int):
        days = container.attendance_service.calendar(
            current_user(), user_id, request.args.get("month"), request.args.get("year")
        )
        return jsonify([d.to_dict() for d in days])

    @app.get("/attendance/summary")
    @sub_admin_required
    def attendance_summary():
        return jsonify(container.attendance_service.summary())

    @app.get("/attendance/logs")
    @sub_admin_required
    def attendance_logs():
        rows = container.attendance_service.logs(
            start=date_arg("startDate"),
            end=date_arg("endDate"),
            status=request.args.get("status"),
        )
        return jsonify([r.to_dict() for r in rows])

    @app.get("/attendance/export")
    @sub_admin_required
    def attendance_export():
        start = date_arg("startDate")
        end = date_arg("endDate")
        text = container.attendance_service.export_csv(start=start, end=end)

        suffix = "_".join(d.strftime("%Y%m%d") for d in (start, end) if d) or "all"
        return app.response_class(
            text.encode("utf-8-sig"),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=attendance_{suffix}.csv"},
        )

    @app.get("/reports/attendance")
    @sub_admin_required
    def attendance_report():
        start = date_arg("startDate")
        end = date_arg("endDate")
        if not start or not end:
            raise ValidationError("Please provide startDate and endDate")
        data = container.attendance_report_service.build_attendance_report(
            start=start, end=end, user_id=int_arg("userId")
        )
        return jsonify(data.to_dict())
