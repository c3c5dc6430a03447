from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.constants import HALF_DAY
from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    user_id: int
    leave_type: str
    reason: str
    start_date: date
    end_date: date
    leave_duration: float = 1.0
    status: LeaveStatus = LeaveStatus.PENDING
    approved_by: Optional[int] = None
    created_at: Optional[datetime] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None

    @property
    def category(self) -> LeaveType:
        return LeaveType.parse(self.leave_type)

    @property
    def is_half_day(self) -> bool:
        return float(self.leave_duration) == HALF_DAY

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def to_dict(self) -> dict:
        return {
            "_id": self.leave_id,
            "user": {"_id": self.user_id, "name": self.user_name, "email": self.user_email},
            "leaveType": self.leave_type,
            "reason": self.reason,
            "startDate": self.start_date,
            "endDate": self.end_date,
            "leaveDuration": self.leave_duration,
            "status": self.status.value,
            "approvedBy": self.approved_by,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class LeaveBalance:
    leave_type: LeaveType
    total: float
    used: float

    @property
    def remaining(self) -> float:
        return max(0.0, self.total - self.used)

    def to_dict(self) -> dict:
        return {
            "type": self.leave_type.value,
            "total": self.total,
            "used": self.used,
            "remaining": self.remaining,
        }
