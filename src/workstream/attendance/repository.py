from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceLogRow, AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        """Stored records of one user in [start, end], oldest first."""
        raise NotImplementedError

    def list_log_rows(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceLogRow]:
        """Records joined with their employee, newest first."""
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> int:
        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        working_hours: float,
        overtime_hours: float,
        status: AttendanceStatus,
    ) -> bool:
        raise NotImplementedError

    def upsert_leave_day(
        self,
        *,
        user_id: int,
        work_date: date,
        status: AttendanceStatus,
        leave_type: str,
        leave_duration: float,
    ) -> None:
        raise NotImplementedError

    def sum_leave_duration(
        self,
        *,
        user_id: int,
        start: date,
        end: date,
        status: AttendanceStatus,
        leave_type: Optional[str] = None,
    ) -> float:
        raise NotImplementedError
