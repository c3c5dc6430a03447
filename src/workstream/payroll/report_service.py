from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_hours
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]

    def to_dict(self) -> dict:
        return {"rows": self.rows, "summary": self.summary}


class AttendanceReportService:
    """Worked-time report per attendance row, plus a per-employee summary."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._calculator = calculator or StandardPayrollCalculator()

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        user_id: Optional[int] = None,
    ) -> ReportData:
        if end < start:
            raise ValidationError("End date cannot be before start date")

        query_rows = self._attendance.list_log_rows(start=start, end=end, user_id=user_id)

        summary_map: dict[int, dict] = {}
        out_rows: list[dict] = []

        for row in query_rows:
            r = row.record
            minutes = self._calculator.worked_minutes(r)

            out_rows.append(
                {
                    "userId": r.user_id,
                    "name": row.user_name,
                    "email": row.user_email,
                    "designation": row.designation or "-",
                    "date": r.work_date,
                    "checkIn": r.check_in_time.strftime("%H:%M") if r.check_in_time else "-",
                    "checkOut": r.check_out_time.strftime("%H:%M") if r.check_out_time else "-",
                    "workedHours": format_hours(minutes),
                    "overtimeHours": r.overtime_hours,
                    "status": r.status.value,
                }
            )

            s = summary_map.get(r.user_id)
            if not s:
                s = {
                    "userId": r.user_id,
                    "name": row.user_name,
                    "email": row.user_email,
                    "totalMinutes": 0,
                    "daysPresent": 0,
                    "daysLate": 0,
                    "overtimeHours": 0.0,
                }
                summary_map[r.user_id] = s
            s["totalMinutes"] += minutes
            s["overtimeHours"] += r.overtime_hours
            if r.status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE):
                s["daysPresent"] += 1
            if r.status == AttendanceStatus.LATE:
                s["daysLate"] += 1

        summary = sorted(summary_map.values(), key=lambda x: x["totalMinutes"], reverse=True)
        for s in summary:
            s["totalHours"] = format_hours(int(s.pop("totalMinutes")))
            s["overtimeHours"] = round(s["overtimeHours"], 2)
        return ReportData(rows=out_rows, summary=summary)
