from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Account role used for authorization."""

    ADMIN = "admin"
    SUB_ADMIN = "sub-admin"
    EMPLOYEE = "employee"

    @classmethod
    def parse(cls, value: Optional[str], default: Optional["Role"] = None) -> Optional["Role"]:
        v = (value or "").strip().lower()
        for member in cls:
            if member.value == v:
                return member
        return default


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"
    TERMINATED = "terminated"
    BLOCKED = "blocked"

    @classmethod
    def parse(cls, value: Optional[str], default: Optional["EmployeeStatus"] = None) -> Optional["EmployeeStatus"]:
        # Dashboards send "Active" / "On Leave"; the API stores snake_case.
        v = (value or "").strip().lower().replace(" ", "_")
        for member in cls:
            if member.value == v:
                return member
        return default


class SalaryType(str, Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"


class WorkMode(str, Enum):
    WFH = "WFH"
    WFO = "WFO"


class AttendanceStatus(str, Enum):
    """Per-day attendance status.

    FUTURE is only produced by calendar derivation and is never stored.
    """

    PRESENT = "present"
    LATE = "late"
    HALF_DAY = "half_day"
    ABSENT = "absent"
    LEAVE = "leave"
    UNPAID_LEAVE = "unpaid_leave"
    WEEKEND = "weekend"
    HOLIDAY = "holiday"
    FUTURE = "future"


class LeaveStatus(str, Enum):
    """Approval workflow state of a leave request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveType(str, Enum):
    CASUAL = "Casual"
    SICK = "Sick"
    ANNUAL = "Annual"
    MATERNITY = "Maternity"

    @classmethod
    def parse(cls, value: Optional[str]) -> "LeaveType":
        """Map free text like "Sick Leave" or "Personal" to a policy category."""
        v = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() in v:
                return member
        return cls.CASUAL


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"

    @classmethod
    def parse(cls, value: Optional[str], default: Optional["ProjectStatus"] = None) -> Optional["ProjectStatus"]:
        v = (value or "").strip().lower()
        aliases = {
            "pending": cls.ON_HOLD,
            "on hold": cls.ON_HOLD,
            "in progress": cls.ACTIVE,
        }
        if v in aliases:
            return aliases[v]
        for member in cls:
            if member.value == v:
                return member
        return default


class SalaryStatus(str, Enum):
    PAID = "Paid"
    UNPAID = "Unpaid"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["SalaryStatus"]:
        v = (value or "").strip().lower()
        for member in cls:
            if member.value.lower() == v:
                return member
        return None
