from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any

from ..common.datetime_utils import parse_hhmm
from ..common.validators import require_email, require_int_range, require_non_empty, require_non_negative
from ..core.constants import DAY_NAMES
from ..core.exceptions import ValidationError
from .model import CompanySettings, LeavePolicy, PayrollPolicy, WorkingHours
from .repository import CompanySettingsRepository

logger = logging.getLogger(__name__)

_QUOTA_KEYS = {
    "casualLeave": "Casual leave quota",
    "sickLeave": "Sick leave quota",
    "annualLeave": "Annual leave quota",
    "maternityLeave": "Maternity leave quota",
}


def _section(data: dict, key: str) -> dict:
    value = data[key]
    if not isinstance(value, dict):
        raise ValidationError(f"{key} must be an object")
    return value


class CompanySettingsService:
    """Reads and updates the single company settings row."""

    def __init__(self, settings: CompanySettingsRepository):
        self._settings = settings

    def get_settings(self) -> CompanySettings:
        current = self._settings.get()
        if current is None:
            current = self._settings.save(CompanySettings())
            logger.info("Created default company settings")
        return current

    def update_settings(self, data: dict) -> CompanySettings:
        current = self.get_settings()
        changes: dict[str, Any] = {}

        if data.get("companyName"):
            changes["company_name"] = require_non_empty(data["companyName"], "Company name")
        if data.get("adminEmail"):
            changes["admin_email"] = require_email(data["adminEmail"])
        if "companyLogo" in data:
            changes["company_logo"] = data["companyLogo"] or None

        if data.get("workingHours") is not None:
            changes["working_hours"] = self._working_hours(_section(data, "workingHours"))
        if data.get("weekendPolicy") is not None:
            changes["weekend_policy"] = self._weekend_policy(data["weekendPolicy"])
        if data.get("leavePolicy") is not None:
            changes["leave_policy"] = self._leave_policy(_section(data, "leavePolicy"))
        if data.get("payroll") is not None:
            changes["payroll"] = self._payroll(_section(data, "payroll"))

        updated = self._settings.save(replace(current, **changes))
        logger.info("Company settings updated: %s", ", ".join(sorted(changes)) or "no changes")
        return updated

    @staticmethod
    def _working_hours(section: dict) -> WorkingHours:
        hours = WorkingHours.from_dict(
            {
                **section,
                "gracePeriod": int(require_non_negative(section.get("gracePeriod", 15), "Grace period")),
            }
        )
        parse_hhmm(hours.check_in)
        parse_hhmm(hours.check_out)
        return hours

    @staticmethod
    def _weekend_policy(value: Any) -> tuple[str, ...]:
        if not isinstance(value, (list, tuple)):
            raise ValidationError("weekendPolicy must be a list of day names")
        days: list[str] = []
        for raw in value:
            name = str(raw).strip()[:3].title()
            if name not in DAY_NAMES:
                raise ValidationError(f"Unknown weekday: {raw!r}")
            if name not in days:
                days.append(name)
        return tuple(days)

    @staticmethod
    def _leave_policy(section: dict) -> LeavePolicy:
        for key, label in _QUOTA_KEYS.items():
            if key in section:
                require_non_negative(section[key], label)
        return LeavePolicy.from_dict(section)

    @staticmethod
    def _payroll(section: dict) -> PayrollPolicy:
        budget = require_non_negative(section.get("monthlyBudget", 0), "Monthly budget")
        salary_date = require_int_range(section.get("salaryDate", 1), "Salary date", 1, 31)
        return PayrollPolicy(monthly_budget=budget, salary_date=salary_date)
