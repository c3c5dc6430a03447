from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import iter_days, month_bounds
from ..common.validators import require_int_range, require_non_negative
from ..company.service import CompanySettingsService
from ..core.enums import AttendanceStatus, EmployeeStatus, Role, SalaryStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import SalaryRecord
from .repository import SalaryRepository

logger = logging.getLogger(__name__)

_PAYABLE_STATUSES = (EmployeeStatus.ACTIVE, EmployeeStatus.ON_LEAVE)


def _period(month, year) -> tuple[int, int]:
    if month in (None, "") or year in (None, ""):
        raise ValidationError("Please provide month and year")
    return require_int_range(month, "Month", 1, 12), require_int_range(year, "Year", 1970, 9999)


def _parse_salary_status(value: Optional[str]) -> Optional[SalaryStatus]:
    if not value or value == "All":
        return None
    status = SalaryStatus.parse(value)
    if status is None:
        raise ValidationError(f"Unknown salary status: {value!r}")
    return status


class PayrollService:
    """Monthly payroll batches and their budget summary."""

    def __init__(
        self,
        salaries: SalaryRepository,
        users: UserRepository,
        attendance: AttendanceRepository,
        settings: CompanySettingsService,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._salaries = salaries
        self._users = users
        self._attendance = attendance
        self._settings = settings
        self._calculator = calculator or StandardPayrollCalculator()

    def _payable_users(self, period_end: date) -> list[User]:
        return [
            u
            for u in self._users.list_users()
            if u.role != Role.ADMIN and u.status in _PAYABLE_STATUSES and u.joined_by(period_end)
        ]

    def generate_batch(self, month, year) -> dict:
        """Create one Unpaid salary record per payable employee for the period.

        Employees that already have a record for the period are skipped.
        """
        month, year = _period(month, year)
        start, end = month_bounds(year, month)
        settings = self._settings.get_settings()
        working_days = sum(1 for d in iter_days(start, end) if not settings.is_weekend(d))

        existing = {r.user_id for r in self._salaries.list_records(month=month, year=year)}
        created: list[SalaryRecord] = []
        skipped = 0

        for user in self._payable_users(end):
            if user.user_id in existing:
                skipped += 1
                continue

            unpaid_days = self._attendance.sum_leave_duration(
                user_id=user.user_id, start=start, end=end, status=AttendanceStatus.UNPAID_LEAVE
            )
            pay = self._calculator.monthly_pay(
                base_salary=user.monthly_salary, working_days=working_days, unpaid_days=unpaid_days
            )
            salary_id = self._salaries.create(
                user_id=user.user_id,
                month=month,
                year=year,
                base_salary=pay.base_salary,
                deductions=pay.deductions,
                net_pay=pay.net_pay,
                unpaid_days=unpaid_days,
                status=SalaryStatus.UNPAID,
            )
            created.append(self._get(salary_id))

        logger.info("Payroll %02d/%d: %s created, %s skipped", month, year, len(created), skipped)
        return {"created": len(created), "skipped": skipped, "records": created}

    def list_records(self, *, month=None, year=None, status: Optional[str] = None) -> Sequence[SalaryRecord]:
        return self._salaries.list_records(
            month=require_int_range(month, "Month", 1, 12) if month not in (None, "") else None,
            year=require_int_range(year, "Year", 1970, 9999) if year not in (None, "") else None,
            status=_parse_salary_status(status),
        )

    def my_records(self, user: User) -> Sequence[SalaryRecord]:
        return self._salaries.list_records(user_id=user.user_id)

    def update(self, salary_id: int, data: dict) -> SalaryRecord:
        record = self._get(salary_id)

        base = record.base_salary
        if data.get("baseSalary") is not None:
            base = require_non_negative(data["baseSalary"], "Base salary")
        deductions = record.deductions
        if data.get("deductions") is not None:
            deductions = require_non_negative(data["deductions"], "Deductions")
        status = record.status
        if data.get("status"):
            status = _parse_salary_status(data["status"]) or record.status

        net_pay = max(0.0, round(base - deductions, 2))
        self._salaries.update(
            salary_id,
            base_salary=round(base, 2),
            deductions=round(deductions, 2),
            net_pay=net_pay,
            status=status,
        )
        if status != record.status:
            logger.info("Salary %s marked %s", salary_id, status.value)
        return self._get(salary_id)

    def summary(self, month, year) -> dict:
        month, year = _period(month, year)
        _, end = month_bounds(year, month)
        payroll = self._settings.get_settings().payroll
        records = self._salaries.list_records(month=month, year=year)

        budget = float(payroll.monthly_budget)
        total_net = round(sum(r.net_pay for r in records), 2)
        total_paid = round(sum(r.net_pay for r in records if r.status == SalaryStatus.PAID), 2)

        return {
            "month": month,
            "year": year,
            "monthlyBudget": budget,
            "totalNet": total_net,
            "totalPaid": total_paid,
            "totalPending": round(total_net - total_paid, 2),
            "remainingBudget": round(budget - total_net, 2),
            "overBudget": budget > 0 and total_net > budget,
            "records": len(records),
            "payday": date(year, month, min(payroll.salary_date, end.day)),
        }

    def _get(self, salary_id: int) -> SalaryRecord:
        record = self._salaries.get_by_id(salary_id)
        if not record:
            raise NotFoundError("Salary record not found")
        return record
