from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_datetime, db_cursor, fetchall, fetchone
from .model import AttendanceLogRow, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = (
    "a.attendance_id, a.user_id, a.work_date, a.check_in_time, a.check_out_time, "
    "a.working_hours, a.overtime_hours, a.status, a.leave_type, a.leave_duration"
)


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in_time=as_datetime(r.get("check_in_time")),
        check_out_time=as_datetime(r.get("check_out_time")),
        working_hours=float(r.get("working_hours") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        leave_type=r.get("leave_type"),
        leave_duration=float(r.get("leave_duration") or 0),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records a WHERE a.user_id=%s AND a.work_date=%s",
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def list_for_user(self, user_id: int, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records a
                WHERE a.user_id=%s AND a.work_date BETWEEN %s AND %s
                ORDER BY a.work_date
                """,
                (user_id, start, end),
            )
            return [_row_to_record(r) for r in fetchall(cur)]

    def list_log_rows(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
        user_id: Optional[int] = None,
    ) -> Sequence[AttendanceLogRow]:
        where: list[str] = []
        params: list[Any] = []
        if start is not None:
            where.append("a.work_date >= %s")
            params.append(start)
        if end is not None:
            where.append("a.work_date <= %s")
            params.append(end)
        if status is not None:
            where.append("a.status = %s")
            params.append(status.value)
        if user_id is not None:
            where.append("a.user_id = %s")
            params.append(user_id)

        sql = f"""
            SELECT {_COLUMNS}, u.name AS user_name, u.email AS user_email, u.designation
            FROM attendance_records a
            JOIN users u ON u.user_id = a.user_id
        """
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY a.work_date DESC, u.name"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                AttendanceLogRow(
                    record=_row_to_record(r),
                    user_name=r["user_name"],
                    user_email=r["user_email"],
                    designation=r.get("designation"),
                )
                for r in fetchall(cur)
            ]

    def create_checkin(
        self,
        *,
        user_id: int,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records (user_id, work_date, check_in_time, status)
                VALUES (%s, %s, %s, %s)
                """,
                (user_id, work_date, check_in_time, status.value),
            )
            return int(cur.lastrowid)

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        working_hours: float,
        overtime_hours: float,
        status: AttendanceStatus,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET check_out_time=%s, working_hours=%s, overtime_hours=%s, status=%s
                WHERE attendance_id=%s AND check_out_time IS NULL
                """,
                (check_out_time, working_hours, overtime_hours, status.value, attendance_id),
            )
            return cur.rowcount > 0

    def upsert_leave_day(
        self,
        *,
        user_id: int,
        work_date: date,
        status: AttendanceStatus,
        leave_type: str,
        leave_duration: float,
    ) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records (user_id, work_date, status, leave_type, leave_duration)
                VALUES (%s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    status=VALUES(status), leave_type=VALUES(leave_type), leave_duration=VALUES(leave_duration)
                """,
                (user_id, work_date, status.value, leave_type, leave_duration),
            )

    def sum_leave_duration(
        self,
        *,
        user_id: int,
        start: date,
        end: date,
        status: AttendanceStatus,
        leave_type: Optional[str] = None,
    ) -> float:
        sql = """
            SELECT COALESCE(SUM(leave_duration), 0) AS total
            FROM attendance_records
            WHERE user_id=%s AND work_date BETWEEN %s AND %s AND status=%s
        """
        params: list[Any] = [user_id, start, end, status.value]
        if leave_type is not None:
            sql += " AND leave_type=%s"
            params.append(leave_type)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            row = fetchone(cur)
            return float(row["total"]) if row else 0.0
