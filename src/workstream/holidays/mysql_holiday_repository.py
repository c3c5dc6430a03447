from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Holiday
from .repository import HolidayRepository


def _row_to_holiday(row: dict) -> Holiday:
    return Holiday(
        holiday_id=int(row["holiday_id"]),
        name=row["name"],
        holiday_date=row["holiday_date"],
        holiday_type=row.get("holiday_type") or "Public",
    )


class MySQLHolidayRepository(HolidayRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, holiday_id: int) -> Optional[Holiday]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT holiday_id, name, holiday_date, holiday_type FROM holidays WHERE holiday_id=%s",
                (holiday_id,),
            )
            row = fetchone(cur)
            return _row_to_holiday(row) if row else None

    def list_between(self, start: Optional[date] = None, end: Optional[date] = None) -> Sequence[Holiday]:
        where: list[str] = []
        params: list[Any] = []
        if start is not None:
            where.append("holiday_date >= %s")
            params.append(start)
        if end is not None:
            where.append("holiday_date <= %s")
            params.append(end)

        sql = "SELECT holiday_id, name, holiday_date, holiday_type FROM holidays"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY holiday_date, holiday_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_holiday(r) for r in fetchall(cur)]

    def create(self, *, name: str, holiday_date: date, holiday_type: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO holidays (name, holiday_date, holiday_type) VALUES (%s, %s, %s)",
                (name, holiday_date, holiday_type),
            )
            return int(cur.lastrowid)

    def update(self, holiday_id: int, *, name: str, holiday_date: date, holiday_type: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE holidays SET name=%s, holiday_date=%s, holiday_type=%s WHERE holiday_id=%s",
                (name, holiday_date, holiday_type, holiday_id),
            )
            return cur.rowcount > 0

    def delete_by_id(self, holiday_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM holidays WHERE holiday_id=%s", (holiday_id,))
            return cur.rowcount > 0
