from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import iter_days, parse_iso_date, year_bounds
from ..common.validators import require_non_empty
from ..company.model import CompanySettings
from ..company.service import CompanySettingsService
from ..core.constants import FULL_DAY, HALF_DAY
from ..core.enums import AttendanceStatus, LeaveStatus, LeaveType
from ..core.exceptions import NotFoundError, ValidationError
from ..holidays.repository import HolidayRepository
from ..users.access import ensure_can_view
from ..users.model import User
from .model import LeaveBalance, LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_BLOCKING_STATUSES = (LeaveStatus.PENDING, LeaveStatus.APPROVED)


def parse_leave_status(value: Optional[str]) -> Optional[LeaveStatus]:
    if not value or value.lower() == "all":
        return None
    try:
        return LeaveStatus(value.lower())
    except ValueError:
        raise ValidationError(f"Unknown leave status: {value!r}")


class LeaveService:
    def __init__(
        self,
        leaves: LeaveRepository,
        attendance: AttendanceRepository,
        holidays: HolidayRepository,
        settings: CompanySettingsService,
    ):
        self._leaves = leaves
        self._attendance = attendance
        self._holidays = holidays
        self._settings = settings

    def apply(self, user: User, data: dict, *, today: Optional[date] = None) -> LeaveRequest:
        today = today or date.today()
        settings = self._settings.get_settings()

        leave_type = require_non_empty(data.get("leaveType"), "Leave type")
        reason = require_non_empty(data.get("reason"), "Reason")
        start = parse_iso_date(require_non_empty(data.get("startDate"), "Start date"))

        try:
            duration = float(data.get("leaveDuration") or FULL_DAY)
        except (TypeError, ValueError):
            raise ValidationError("Leave duration must be 1 or 0.5")
        if duration not in (FULL_DAY, HALF_DAY):
            raise ValidationError("Leave duration must be 1 or 0.5")

        if start < today:
            raise ValidationError("Cannot apply for leave on past dates.")
        if duration == FULL_DAY and start == today:
            raise ValidationError(
                "Full-day leave must be requested at least one day in advance. "
                "Same-day full-day applications are not permitted."
            )

        if duration == HALF_DAY:
            if not settings.leave_policy.enable_half_day:
                raise ValidationError("Half-day leave is not enabled by company policy.")
            end = start
        else:
            end = parse_iso_date(data["endDate"]) if data.get("endDate") else start
            if end < start:
                raise ValidationError("End date cannot be before start date.")

        overlapping = self._leaves.list_overlapping(
            start=start, end=end, statuses=_BLOCKING_STATUSES, user_id=user.user_id
        )
        if overlapping:
            other = overlapping[0]
            raise ValidationError(
                f"You already have a {other.status.value} leave request for these dates "
                f"({other.start_date.isoformat()} - {other.end_date.isoformat()})."
            )

        leave_id = self._leaves.create(
            user_id=user.user_id,
            leave_type=leave_type,
            reason=reason,
            start_date=start,
            end_date=end,
            leave_duration=duration,
        )
        logger.info("User %s applied for %s leave %s (%s..%s)", user.user_id, leave_type, leave_id, start, end)

        leave = self._get(leave_id)
        if not settings.leave_policy.require_approval:
            return self._approve(leave, approver_id=user.user_id, settings=settings)
        return leave

    def list_for_user(self, viewer: User, user_id: int) -> Sequence[LeaveRequest]:
        ensure_can_view(viewer, user_id)
        return self._leaves.list_requests(user_id=user_id)

    def pending(self) -> Sequence[LeaveRequest]:
        return self._leaves.list_requests(status=LeaveStatus.PENDING)

    def list_all(self, *, status: Optional[str] = None, search: Optional[str] = None) -> Sequence[LeaveRequest]:
        return self._leaves.list_requests(status=parse_leave_status(status), search=(search or "").strip() or None)

    def approve(self, leave_id: int, *, approver: User) -> LeaveRequest:
        leave = self._get(leave_id)
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError(f"Leave request is already {leave.status.value}.")
        return self._approve(leave, approver_id=approver.user_id, settings=self._settings.get_settings())

    def reject(self, leave_id: int, *, approver: User) -> LeaveRequest:
        leave = self._get(leave_id)
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError(f"Leave request is already {leave.status.value}.")
        self._leaves.set_status(leave_id, status=LeaveStatus.REJECTED, approved_by=approver.user_id)
        logger.info("Leave %s rejected by %s", leave_id, approver.user_id)
        return self._get(leave_id)

    def balances(self, viewer: User, user_id: int, *, year: Optional[int] = None) -> list[LeaveBalance]:
        """Used vs quota per leave category for one calendar year."""
        ensure_can_view(viewer, user_id)
        year = year or date.today().year
        start, end = year_bounds(year)
        settings = self._settings.get_settings()

        approved = [
            leave
            for leave in self._leaves.list_requests(user_id=user_id, status=LeaveStatus.APPROVED)
            if start <= leave.start_date <= end
        ]
        span_end = max([end] + [leave.end_date for leave in approved])
        holiday_dates = {h.holiday_date for h in self._holidays.list_between(start, span_end)}

        used: dict[LeaveType, float] = {t: 0.0 for t in LeaveType}
        for leave in approved:
            if leave.is_half_day:
                used[leave.category] += HALF_DAY
            else:
                used[leave.category] += len(self._working_days(leave, settings, holiday_dates))

        return [
            LeaveBalance(leave_type=t, total=settings.quota_for(t), used=used[t])
            for t in LeaveType
            if settings.quota_for(t) > 0
        ]

    def _approve(self, leave: LeaveRequest, *, approver_id: int, settings: CompanySettings) -> LeaveRequest:
        self._leaves.set_status(leave.leave_id, status=LeaveStatus.APPROVED, approved_by=approver_id)

        category = leave.category
        quota = settings.quota_for(category)
        year_start, year_end = year_bounds(leave.start_date.year)
        used = self._attendance.sum_leave_duration(
            user_id=leave.user_id,
            start=year_start,
            end=year_end,
            status=AttendanceStatus.LEAVE,
            leave_type=category.value,
        )

        holiday_dates = {h.holiday_date for h in self._holidays.list_between(leave.start_date, leave.end_date)}
        duration = float(leave.leave_duration or FULL_DAY)
        paid = unpaid = 0
        for day in self._working_days(leave, settings, holiday_dates):
            if used + duration > quota:
                status = AttendanceStatus.UNPAID_LEAVE
                unpaid += 1
            else:
                status = AttendanceStatus.LEAVE
                used += duration
                paid += 1
            self._attendance.upsert_leave_day(
                user_id=leave.user_id,
                work_date=day,
                status=status,
                leave_type=category.value,
                leave_duration=duration,
            )

        logger.info(
            "Leave %s approved by %s: %s paid day(s), %s unpaid day(s)", leave.leave_id, approver_id, paid, unpaid
        )
        return self._get(leave.leave_id)

    @staticmethod
    def _working_days(leave: LeaveRequest, settings: CompanySettings, holiday_dates: set[date]) -> list[date]:
        return [
            day
            for day in iter_days(leave.start_date, leave.end_date)
            if not settings.is_weekend(day) and day not in holiday_dates
        ]

    def _get(self, leave_id: int) -> LeaveRequest:
        leave = self._leaves.get_by_id(leave_id)
        if not leave:
            raise NotFoundError("Leave request not found")
        return leave
