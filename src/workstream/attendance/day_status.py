"""Per-day attendance status derivation.

A stored log always wins. Days without a log are derived from the joining
date, the holiday list, approved leave and the weekend policy, in that order.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import iter_days, month_bounds
from ..company.model import CompanySettings
from ..core.constants import FULL_DAY
from ..core.enums import AttendanceStatus
from ..holidays.model import Holiday
from ..leaves.model import LeaveRequest
from .model import AttendanceRecord, CalendarDay


def _leave_on(day: date, leaves: Iterable[LeaveRequest]) -> Optional[LeaveRequest]:
    for leave in leaves:
        if leave.covers(day):
            return leave
    return None


def derive_day(
    day: date,
    *,
    today: date,
    record: Optional[AttendanceRecord] = None,
    joining_date: Optional[date] = None,
    holiday: Optional[Holiday] = None,
    leave: Optional[LeaveRequest] = None,
    weekend: bool = False,
) -> CalendarDay:
    if record is not None:
        return CalendarDay(day=day, status=record.status, leave_type=record.leave_type, record=record)
    if joining_date is not None and day < joining_date:
        return CalendarDay(day=day, status=AttendanceStatus.FUTURE)
    if holiday is not None:
        return CalendarDay(day=day, status=AttendanceStatus.HOLIDAY, leave_type=holiday.name)
    if leave is not None:
        return CalendarDay(day=day, status=AttendanceStatus.LEAVE, leave_type=leave.category.value)
    if weekend:
        return CalendarDay(day=day, status=AttendanceStatus.WEEKEND)
    if day > today:
        return CalendarDay(day=day, status=AttendanceStatus.FUTURE)
    return CalendarDay(day=day, status=AttendanceStatus.ABSENT)


def build_month_calendar(
    year: int,
    month: int,
    *,
    today: date,
    settings: CompanySettings,
    records: Iterable[AttendanceRecord],
    holidays: Iterable[Holiday],
    approved_leaves: Iterable[LeaveRequest],
    joining_date: Optional[date] = None,
) -> list[CalendarDay]:
    start, end = month_bounds(year, month)
    by_day = {r.work_date: r for r in records}
    holiday_by_day = {h.holiday_date: h for h in holidays}
    leaves = list(approved_leaves)

    return [
        derive_day(
            day,
            today=today,
            record=by_day.get(day),
            joining_date=joining_date,
            holiday=holiday_by_day.get(day),
            leave=_leave_on(day, leaves),
            weekend=settings.is_weekend(day),
        )
        for day in iter_days(start, end)
    ]


def missing_record(
    user_id: int,
    day: date,
    *,
    holiday: Optional[Holiday] = None,
    leave: Optional[LeaveRequest] = None,
    weekend: bool = False,
) -> AttendanceRecord:
    """Virtual entry for an employee-day with no stored log."""
    if holiday is not None:
        status, leave_type, duration = AttendanceStatus.HOLIDAY, holiday.name, 0.0
    elif leave is not None:
        status, leave_type, duration = AttendanceStatus.LEAVE, leave.leave_type, float(leave.leave_duration or FULL_DAY)
    elif weekend:
        status, leave_type, duration = AttendanceStatus.WEEKEND, None, 0.0
    else:
        status, leave_type, duration = AttendanceStatus.ABSENT, None, 0.0

    return AttendanceRecord(
        attendance_id=None,
        user_id=user_id,
        work_date=day,
        status=status,
        leave_type=leave_type,
        leave_duration=duration,
        is_missing_record=True,
    )
