from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import EmployeeStatus, Role, SalaryType, WorkMode


@dataclass(frozen=True)
class User:
    """Employee record and login account.

    Plain data object; persistence lives in the repository.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role = Role.EMPLOYEE
    designation: Optional[str] = None
    salary: float = 0.0
    salary_type: SalaryType = SalaryType.MONTHLY
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    image: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    work_mode: WorkMode = WorkMode.WFO
    joining_date: Optional[date] = None
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    @property
    def is_manager(self) -> bool:
        return self.role in (Role.ADMIN, Role.SUB_ADMIN)

    @property
    def monthly_salary(self) -> float:
        if self.salary_type == SalaryType.ANNUAL:
            return float(self.salary) / 12
        return float(self.salary)

    def joined_by(self, day: date) -> bool:
        return self.joining_date is None or self.joining_date <= day

    def to_public(self) -> dict:
        return {
            "_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "designation": self.designation,
            "salary": self.salary,
            "salaryType": self.salary_type.value,
            "status": self.status.value,
            "image": self.image,
            "phone": self.phone,
            "location": self.location,
            "workMode": self.work_mode.value,
            "joiningDate": self.joining_date,
            "createdBy": self.created_by,
            "createdAt": self.created_at,
        }
