from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import day_name
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One employee-day of attendance.

    ``attendance_id`` is None for virtual entries that are derived for a
    response (holidays, leave, absence) and never stored.
    """

    attendance_id: Optional[int]
    user_id: int
    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    working_hours: float = 0.0
    overtime_hours: float = 0.0
    leave_type: Optional[str] = None
    leave_duration: float = 0.0
    is_missing_record: bool = False

    def to_dict(self) -> dict:
        return {
            "_id": self.attendance_id,
            "user": self.user_id,
            "date": self.work_date,
            "checkIn": self.check_in_time,
            "checkOut": self.check_out_time,
            "workingHours": self.working_hours,
            "overtimeHours": self.overtime_hours,
            "status": self.status.value,
            "leaveType": self.leave_type,
            "leaveDuration": self.leave_duration,
            "isMissingRecord": self.is_missing_record,
        }


@dataclass(frozen=True)
class AttendanceLogRow:
    """Read-model for admin logs, exports and reports (record joined with its employee)."""

    record: AttendanceRecord
    user_name: str
    user_email: str
    designation: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            **self.record.to_dict(),
            "user": {
                "_id": self.record.user_id,
                "name": self.user_name,
                "email": self.user_email,
                "designation": self.designation,
            },
        }


@dataclass(frozen=True)
class CalendarDay:
    day: date
    status: AttendanceStatus
    leave_type: Optional[str] = None
    record: Optional[AttendanceRecord] = None

    def to_dict(self) -> dict:
        return {
            "date": self.day,
            "dayName": day_name(self.day),
            "status": self.status.value,
            "leaveType": self.leave_type,
            "checkIn": self.record.check_in_time if self.record else None,
            "checkOut": self.record.check_out_time if self.record else None,
            "workingHours": self.record.working_hours if self.record else 0.0,
        }
