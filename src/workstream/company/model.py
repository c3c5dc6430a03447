from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import day_name
from ..core.constants import (
    DEFAULT_CHECK_IN,
    DEFAULT_CHECK_OUT,
    DEFAULT_COMPANY_NAME,
    DEFAULT_GRACE_MINUTES,
    DEFAULT_SHIFT_HOURS,
    DEFAULT_WEEKEND,
)
from ..core.enums import LeaveType


@dataclass(frozen=True)
class WorkingHours:
    check_in: str = DEFAULT_CHECK_IN
    grace_period: int = DEFAULT_GRACE_MINUTES
    check_out: str = DEFAULT_CHECK_OUT

    @property
    def shift_hours(self) -> float:
        """Length of the configured shift in hours.

        A check-out earlier than the check-in is a night shift (+24h).
        Anything that still comes out non-positive falls back to the default.
        """
        start = _minutes(self.check_in)
        end = _minutes(self.check_out)
        if start is None or end is None:
            return DEFAULT_SHIFT_HOURS
        hours = (end - start) / 60
        if hours < 0:
            hours += 24
        return hours if hours > 0 else DEFAULT_SHIFT_HOURS

    def to_dict(self) -> dict:
        return {"checkIn": self.check_in, "gracePeriod": self.grace_period, "checkOut": self.check_out}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "WorkingHours":
        data = data or {}
        return cls(
            check_in=str(data.get("checkIn") or DEFAULT_CHECK_IN),
            grace_period=int(data.get("gracePeriod", DEFAULT_GRACE_MINUTES) or 0),
            check_out=str(data.get("checkOut") or DEFAULT_CHECK_OUT),
        )


def _minutes(hhmm: str) -> Optional[int]:
    try:
        hh, mm = str(hhmm).split(":")[:2]
        return int(hh) * 60 + int(mm)
    except ValueError:
        return None


@dataclass(frozen=True)
class LeavePolicy:
    casual_leave: float = 12
    sick_leave: float = 10
    annual_leave: float = 18
    maternity_leave: float = 12
    require_approval: bool = True
    notify_staff: bool = True
    enable_half_day: bool = False

    def quota_for(self, leave_type: LeaveType) -> float:
        return {
            LeaveType.CASUAL: self.casual_leave,
            LeaveType.SICK: self.sick_leave,
            LeaveType.ANNUAL: self.annual_leave,
            LeaveType.MATERNITY: self.maternity_leave,
        }[leave_type]

    def to_dict(self) -> dict:
        return {
            "casualLeave": self.casual_leave,
            "sickLeave": self.sick_leave,
            "annualLeave": self.annual_leave,
            "maternityLeave": self.maternity_leave,
            "requireApproval": self.require_approval,
            "notifyStaff": self.notify_staff,
            "enableHalfDay": self.enable_half_day,
        }

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "LeavePolicy":
        data = data or {}
        default = cls()
        return cls(
            casual_leave=float(data.get("casualLeave", default.casual_leave)),
            sick_leave=float(data.get("sickLeave", default.sick_leave)),
            annual_leave=float(data.get("annualLeave", default.annual_leave)),
            maternity_leave=float(data.get("maternityLeave", default.maternity_leave)),
            require_approval=bool(data.get("requireApproval", default.require_approval)),
            notify_staff=bool(data.get("notifyStaff", default.notify_staff)),
            enable_half_day=bool(data.get("enableHalfDay", default.enable_half_day)),
        )


@dataclass(frozen=True)
class PayrollPolicy:
    monthly_budget: float = 0.0
    salary_date: int = 1

    def to_dict(self) -> dict:
        return {"monthlyBudget": self.monthly_budget, "salaryDate": self.salary_date}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "PayrollPolicy":
        data = data or {}
        return cls(
            monthly_budget=float(data.get("monthlyBudget", 0) or 0),
            salary_date=int(data.get("salaryDate", 1) or 1),
        )


@dataclass(frozen=True)
class CompanySettings:
    """Company-wide configuration (single row)."""

    settings_id: Optional[int] = None
    company_name: str = DEFAULT_COMPANY_NAME
    admin_email: Optional[str] = None
    company_logo: Optional[str] = None
    working_hours: WorkingHours = field(default_factory=WorkingHours)
    weekend_policy: tuple[str, ...] = DEFAULT_WEEKEND
    leave_policy: LeavePolicy = field(default_factory=LeavePolicy)
    payroll: PayrollPolicy = field(default_factory=PayrollPolicy)
    updated_at: Optional[datetime] = None

    @property
    def shift_hours(self) -> float:
        return self.working_hours.shift_hours

    def is_weekend(self, day: date) -> bool:
        return day_name(day) in self.weekend_policy

    def quota_for(self, leave_type: LeaveType) -> float:
        return self.leave_policy.quota_for(leave_type)

    def to_dict(self) -> dict:
        return {
            "_id": self.settings_id,
            "companyName": self.company_name,
            "adminEmail": self.admin_email,
            "companyLogo": self.company_logo,
            "workingHours": self.working_hours.to_dict(),
            "weekendPolicy": list(self.weekend_policy),
            "leavePolicy": self.leave_policy.to_dict(),
            "payroll": self.payroll.to_dict(),
            "updatedAt": self.updated_at,
        }
