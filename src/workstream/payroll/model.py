from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import SalaryStatus


@dataclass(frozen=True)
class SalaryRecord:
    salary_id: int
    user_id: int
    month: int
    year: int
    base_salary: float
    deductions: float
    net_pay: float
    unpaid_days: float = 0.0
    status: SalaryStatus = SalaryStatus.UNPAID
    created_at: Optional[datetime] = None
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    designation: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "_id": self.salary_id,
            "user": {
                "_id": self.user_id,
                "name": self.user_name,
                "email": self.user_email,
                "designation": self.designation,
            },
            "month": self.month,
            "year": self.year,
            "baseSalary": self.base_salary,
            "deductions": self.deductions,
            "netPay": self.net_pay,
            "unpaidDays": self.unpaid_days,
            "status": self.status.value,
            "createdAt": self.created_at,
        }
