from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        leave_type: str,
        reason: str,
        start_date: date,
        end_date: date,
        leave_duration: float,
    ) -> int:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        search: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        """Newest first; ``search`` is a case-insensitive match on the reason."""
        raise NotImplementedError

    def list_overlapping(
        self,
        *,
        start: date,
        end: date,
        statuses: Iterable[LeaveStatus],
        user_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def set_status(self, leave_id: int, *, status: LeaveStatus, approved_by: Optional[int]) -> bool:
        raise NotImplementedError
