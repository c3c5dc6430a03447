from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import LeaveRequest
from .repository import LeaveRepository

_SELECT = """
    SELECT l.leave_id, l.user_id, l.leave_type, l.reason, l.start_date, l.end_date,
           l.leave_duration, l.status, l.approved_by, l.created_at,
           u.name AS user_name, u.email AS user_email
    FROM leave_requests l
    JOIN users u ON u.user_id = l.user_id
"""


def _row_to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        user_id=int(r["user_id"]),
        leave_type=r["leave_type"],
        reason=r["reason"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        leave_duration=float(r.get("leave_duration") or 1),
        status=LeaveStatus(r["status"]),
        approved_by=r.get("approved_by"),
        created_at=r.get("created_at"),
        user_name=r.get("user_name"),
        user_email=r.get("user_email"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE l.leave_id=%s", (leave_id,))
            r = fetchone(cur)
            return _row_to_leave(r) if r else None

    def create(
        self,
        *,
        user_id: int,
        leave_type: str,
        reason: str,
        start_date: date,
        end_date: date,
        leave_duration: float,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests (user_id, leave_type, reason, start_date, end_date, leave_duration, status)
                VALUES (%s, %s, %s, %s, %s, %s, 'pending')
                """,
                (user_id, leave_type, reason, start_date, end_date, leave_duration),
            )
            return int(cur.lastrowid)

    def list_requests(
        self,
        *,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        search: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        where: list[str] = []
        params: list[Any] = []
        if user_id is not None:
            where.append("l.user_id=%s")
            params.append(user_id)
        if status is not None:
            where.append("l.status=%s")
            params.append(status.value)
        if search:
            where.append("LOWER(l.reason) LIKE %s")
            params.append(f"%{search.lower()}%")

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY l.created_at DESC, l.leave_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_leave(r) for r in fetchall(cur)]

    def list_overlapping(
        self,
        *,
        start: date,
        end: date,
        statuses: Iterable[LeaveStatus],
        user_id: Optional[int] = None,
    ) -> Sequence[LeaveRequest]:
        status_values = [s.value for s in statuses]
        if not status_values:
            return []
        sql = _SELECT + f" WHERE l.start_date <= %s AND l.end_date >= %s AND l.status IN ({in_clause(status_values)})"
        params: list[Any] = [end, start, *status_values]
        if user_id is not None:
            sql += " AND l.user_id=%s"
            params.append(user_id)
        sql += " ORDER BY l.start_date"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_leave(r) for r in fetchall(cur)]

    def set_status(self, leave_id: int, *, status: LeaveStatus, approved_by: Optional[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE leave_requests SET status=%s, approved_by=%s WHERE leave_id=%s",
                (status.value, approved_by, leave_id),
            )
            return cur.rowcount > 0
