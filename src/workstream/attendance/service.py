from __future__ import annotations

import csv
import io
import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import format_hours, hours_between, month_bounds
from ..company.service import CompanySettingsService
from ..core.enums import AttendanceStatus, EmployeeStatus, LeaveStatus, Role
from ..core.exceptions import NotFoundError, ValidationError
from ..holidays.repository import HolidayRepository
from ..leaves.repository import LeaveRepository
from ..users.access import ensure_can_view
from ..users.model import User
from ..users.repository import UserRepository
from .day_status import build_month_calendar, missing_record
from .factory import AttendanceStrategyFactory
from .model import AttendanceLogRow, AttendanceRecord, CalendarDay
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

EXPORT_HEADER = [
    "Date",
    "Employee",
    "Email",
    "Designation",
    "Check In",
    "Check Out",
    "Working Hours",
    "Overtime",
    "Status",
]


def parse_period(month, year) -> tuple[int, int]:
    if not month or not year:
        raise ValidationError("Please provide month and year")
    try:
        return int(month), int(year)
    except (TypeError, ValueError):
        raise ValidationError("Month and year must be numbers")


def parse_status_filter(value: Optional[str]) -> Optional[AttendanceStatus]:
    if not value or value.lower() == "all":
        return None
    try:
        return AttendanceStatus(value.lower())
    except ValueError:
        raise ValidationError(f"Unknown attendance status: {value!r}")


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        holidays: HolidayRepository,
        leaves: LeaveRepository,
        settings: CompanySettingsService,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._users = users
        self._holidays = holidays
        self._leaves = leaves
        self._settings = settings
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def check_in(self, user_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or datetime.now()
        today = now.date()

        if self._attendance.get_for_user_and_date(user_id, today):
            raise ValidationError("You have already checked in today.")

        hours = self._settings.get_settings().working_hours
        strategy = self._factory.for_checkin(now=now, hours=hours)
        decision = strategy.decide_checkin(now=now, hours=hours)

        self._attendance.create_checkin(user_id=user_id, work_date=today, check_in_time=now, status=decision.status)
        logger.info("User %s checked in at %s (%s)", user_id, now.strftime("%H:%M"), decision.status.value)
        return self._attendance.get_for_user_and_date(user_id, today)

    def check_out(self, user_id: int, *, confirm_early: bool = False, now: datetime | None = None) -> AttendanceRecord:
        """Close today's record.

        Leaving before the configured shift length requires ``confirm_early``;
        a confirmed check-out before half the shift marks the day as half_day.
        """
        now = now or datetime.now()
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.check_in_time is None:
            raise ValidationError("You have not checked in today.")
        if record.check_out_time is not None:
            raise ValidationError("You have already checked out today.")

        shift_hours = self._settings.get_settings().shift_hours
        elapsed = max(0.0, hours_between(record.check_in_time, now))

        if elapsed < shift_hours and not confirm_early:
            remaining_minutes = int(round((shift_hours - elapsed) * 60))
            raise ValidationError(
                f"Your shift is not complete yet ({format_hours(remaining_minutes)} remaining). "
                "Please confirm to check out early.",
                payload={
                    "requiresConfirmation": True,
                    "remainingHours": round(shift_hours - elapsed, 2),
                    "halfDay": elapsed < shift_hours / 2,
                },
            )

        strategy = self._factory.for_checkout(elapsed_hours=elapsed, shift_hours=shift_hours)
        decision = strategy.decide_checkout(elapsed_hours=elapsed, shift_hours=shift_hours, current=record.status)
        overtime = round(elapsed - shift_hours, 2) if elapsed > shift_hours else 0.0

        self._attendance.update_checkout(
            attendance_id=record.attendance_id,
            check_out_time=now,
            working_hours=round(elapsed, 2),
            overtime_hours=overtime,
            status=decision.status,
        )
        logger.info(
            "User %s checked out after %.2fh (%s)%s",
            user_id,
            elapsed,
            decision.status.value,
            f": {decision.note}" if decision.note else "",
        )
        return self._attendance.get_for_user_and_date(user_id, today)

    def daily(self, viewer: User, user_id: int, *, today: date | None = None) -> Optional[AttendanceRecord]:
        ensure_can_view(viewer, user_id)
        return self._attendance.get_for_user_and_date(user_id, today or date.today())

    def monthly(self, viewer: User, user_id: int, month, year, *, today: date | None = None) -> list[AttendanceRecord]:
        ensure_can_view(viewer, user_id)
        month, year = parse_period(month, year)
        today = today or date.today()
        start, end = month_bounds(year, month)

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        entries = list(self._attendance.list_for_user(user_id, start=start, end=end))
        logged = {r.work_date for r in entries}

        for holiday in self._holidays.list_between(start, end):
            if holiday.holiday_date not in logged:
                entries.append(missing_record(user_id, holiday.holiday_date, holiday=holiday))
                logged.add(holiday.holiday_date)

        if start <= today <= end and today not in logged and user.joined_by(today):
            leaves = self._leaves.list_overlapping(
                start=today, end=today, statuses=[LeaveStatus.APPROVED], user_id=user_id
            )
            settings = self._settings.get_settings()
            entries.append(
                missing_record(
                    user_id,
                    today,
                    leave=leaves[0] if leaves else None,
                    weekend=settings.is_weekend(today),
                )
            )

        entries.sort(key=lambda r: r.work_date)
        return entries

    def calendar(self, viewer: User, user_id: int, month, year, *, today: date | None = None) -> list[CalendarDay]:
        ensure_can_view(viewer, user_id)
        month, year = parse_period(month, year)
        start, end = month_bounds(year, month)

        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        return build_month_calendar(
            year,
            month,
            today=today or date.today(),
            settings=self._settings.get_settings(),
            records=self._attendance.list_for_user(user_id, start=start, end=end),
            holidays=self._holidays.list_between(start, end),
            approved_leaves=self._leaves.list_overlapping(
                start=start, end=end, statuses=[LeaveStatus.APPROVED], user_id=user_id
            ),
            joining_date=user.joining_date,
        )

    def _active_employees(self) -> list[User]:
        return [u for u in self._users.list_users(role=Role.EMPLOYEE) if u.status == EmployeeStatus.ACTIVE]

    def summary(self, *, today: date | None = None) -> dict:
        today = today or date.today()
        employees = {u.user_id for u in self._active_employees()}
        rows = [r for r in self._attendance.list_log_rows(start=today, end=today) if r.record.user_id in employees]

        counts = {status: 0 for status in AttendanceStatus}
        for row in rows:
            counts[row.record.status] += 1

        total = len(employees)
        present = counts[AttendanceStatus.PRESENT] + counts[AttendanceStatus.LATE]
        half_day = counts[AttendanceStatus.HALF_DAY]
        on_leave = counts[AttendanceStatus.LEAVE] + counts[AttendanceStatus.UNPAID_LEAVE]

        return {
            "date": today,
            "totalEmployees": total,
            "present": present,
            "late": counts[AttendanceStatus.LATE],
            "halfDay": half_day,
            "onLeave": on_leave,
            "absent": max(0, total - present - half_day - on_leave),
        }

    def logs(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[str] = None,
    ) -> list[AttendanceLogRow]:
        if start and end and end < start:
            raise ValidationError("End date cannot be before start date")
        status_filter = parse_status_filter(status)
        if start is not None and end is None:
            end = start

        rows = list(self._attendance.list_log_rows(start=start, end=end, status=status_filter))
        if start is None or end != start:
            return rows

        # Single-day view: every eligible employee appears once.
        day = start
        stored = rows if status_filter is None else self._attendance.list_log_rows(start=day, end=day)
        logged = {r.record.user_id for r in stored}
        missing = [u for u in self._active_employees() if u.joined_by(day) and u.user_id not in logged]
        if not missing:
            return rows

        holidays = self._holidays.list_between(day, day)
        holiday = holidays[0] if holidays else None
        weekend = self._settings.get_settings().is_weekend(day)
        leave_by_user = {
            leave.user_id: leave
            for leave in self._leaves.list_overlapping(start=day, end=day, statuses=[LeaveStatus.APPROVED])
        }

        for user in missing:
            record = missing_record(
                user.user_id,
                day,
                holiday=holiday,
                leave=leave_by_user.get(user.user_id),
                weekend=weekend,
            )
            if status_filter is not None and record.status != status_filter:
                continue
            rows.append(
                AttendanceLogRow(record=record, user_name=user.name, user_email=user.email, designation=user.designation)
            )
        return rows

    def export_csv(self, *, start: Optional[date] = None, end: Optional[date] = None) -> str:
        """CSV text of stored logs in the given range."""
        rows: Sequence[AttendanceLogRow] = self._attendance.list_log_rows(start=start, end=end)

        buf = io.StringIO()
        writer = csv.writer(buf)
        writer.writerow(EXPORT_HEADER)
        for row in rows:
            r = row.record
            writer.writerow(
                [
                    r.work_date.isoformat(),
                    row.user_name,
                    row.user_email,
                    row.designation or "",
                    r.check_in_time.strftime("%H:%M") if r.check_in_time else "",
                    r.check_out_time.strftime("%H:%M") if r.check_out_time else "",
                    f"{r.working_hours:.2f}",
                    f"{r.overtime_hours:.2f}",
                    r.status.value,
                ]
            )
        return buf.getvalue()
