from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...attendance.model import AttendanceRecord


@dataclass(frozen=True)
class PayBreakdown:
    base_salary: float
    deductions: float
    net_pay: float


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_minutes(self, record: AttendanceRecord) -> int:
        raise NotImplementedError

    @abstractmethod
    def monthly_pay(self, *, base_salary: float, working_days: int, unpaid_days: float) -> PayBreakdown:
        raise NotImplementedError
