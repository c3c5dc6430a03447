from __future__ import annotations

from ...attendance.model import AttendanceRecord
from .base import PayBreakdown, PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: pro-rata deduction per unpaid working day, net never below 0."""

    def worked_minutes(self, record: AttendanceRecord) -> int:
        if not record.check_in_time or not record.check_out_time:
            return 0
        minutes = int((record.check_out_time - record.check_in_time).total_seconds() // 60)
        return max(minutes, 0)

    def monthly_pay(self, *, base_salary: float, working_days: int, unpaid_days: float) -> PayBreakdown:
        base = round(float(base_salary), 2)
        if working_days > 0 and unpaid_days > 0:
            deductions = round(base / working_days * float(unpaid_days), 2)
        else:
            deductions = 0.0
        return PayBreakdown(base_salary=base, deductions=deductions, net_pay=max(0.0, round(base - deductions, 2)))
