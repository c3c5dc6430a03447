from __future__ import annotations

from typing import Any, Optional, Sequence

from ..core.enums import SalaryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SalaryRecord
from .repository import SalaryRepository

_SELECT = """
    SELECT s.salary_id, s.user_id, s.month, s.year, s.base_salary, s.deductions, s.net_pay,
           s.unpaid_days, s.status, s.created_at,
           u.name AS user_name, u.email AS user_email, u.designation
    FROM salaries s
    JOIN users u ON u.user_id = s.user_id
"""


def _row_to_salary(r: dict) -> SalaryRecord:
    return SalaryRecord(
        salary_id=int(r["salary_id"]),
        user_id=int(r["user_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        base_salary=float(r["base_salary"]),
        deductions=float(r["deductions"]),
        net_pay=float(r["net_pay"]),
        unpaid_days=float(r.get("unpaid_days") or 0),
        status=SalaryStatus(r["status"]),
        created_at=r.get("created_at"),
        user_name=r.get("user_name"),
        user_email=r.get("user_email"),
        designation=r.get("designation"),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, salary_id: int) -> Optional[SalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.salary_id=%s", (salary_id,))
            r = fetchone(cur)
            return _row_to_salary(r) if r else None

    def list_records(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        status: Optional[SalaryStatus] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[SalaryRecord]:
        where: list[str] = []
        params: list[Any] = []
        for column, value in (("s.month", month), ("s.year", year), ("s.user_id", user_id)):
            if value is not None:
                where.append(f"{column}=%s")
                params.append(value)
        if status is not None:
            where.append("s.status=%s")
            params.append(status.value)

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY s.year DESC, s.month DESC, u.name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_salary(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO salaries (user_id, month, year, base_salary, deductions, net_pay, unpaid_days, status)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
                """,
                (user_id, month, year, base_salary, deductions, net_pay, unpaid_days, status.value),
            )
            return int(cur.lastrowid)

    def update(
        self,
        salary_id: int,
        *,
        base_salary: float,
        deductions: float,
        net_pay: float,
        status: SalaryStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE salaries SET base_salary=%s, deductions=%s, net_pay=%s, status=%s WHERE salary_id=%s",
                (base_salary, deductions, net_pay, status.value, salary_id),
            )
            return cur.rowcount > 0
