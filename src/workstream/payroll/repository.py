from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import SalaryStatus
from .model import SalaryRecord


class SalaryRepository(Protocol):
    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        status: Optional[SalaryStatus] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[SalaryRecord]:
        """Newest period first."""
        raise NotImplementedError

    def create(
        self,
        *,
        user_id: int,
        month: int,
        year: int,
        base_salary: float,
        deductions: float,
        net_pay: float,
        unpaid_days: float,
        status: SalaryStatus,
    ) -> int:
        raise NotImplementedError

    def update(
        self,
        salary_id: int,
        *,
        base_salary: float,
        deductions: float,
        net_pay: float,
        status: SalaryStatus,
    ) -> bool:
        raise NotImplementedError
