from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, Optional, Sequence

from ..core.enums import EmployeeStatus, Role, SalaryType, WorkMode
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import User
from .repository import UserRepository

_COLUMNS = (
    "user_id, name, email, password_hash, role, designation, salary, salary_type, status, "
    "image, phone, location, work_mode, joining_date, created_by, created_at"
)

_WRITABLE = {
    "name",
    "email",
    "password_hash",
    "role",
    "designation",
    "salary",
    "salary_type",
    "status",
    "image",
    "phone",
    "location",
    "work_mode",
    "joining_date",
    "created_by",
}


def _row_to_user(row: dict) -> User:
    return User(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row["email"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        designation=row.get("designation"),
        salary=float(row.get("salary") or 0),
        salary_type=SalaryType(row.get("salary_type") or "monthly"),
        status=EmployeeStatus(row.get("status") or "active"),
        image=row.get("image"),
        phone=row.get("phone"),
        location=row.get("location"),
        work_mode=WorkMode(row.get("work_mode") or "WFO"),
        joining_date=row.get("joining_date"),
        created_by=row.get("created_by"),
        created_at=row.get("created_at"),
    )


def _db_value(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email.strip().lower(),))
            row = fetchone(cur)
            return _row_to_user(row) if row else None

    def list_users(self, *, role: Optional[Role] = None) -> Sequence[User]:
        sql = f"SELECT {_COLUMNS} FROM users"
        params: list[Any] = []
        if role is not None:
            sql += " WHERE role=%s"
            params.append(role.value)
        sql += " ORDER BY created_at DESC, user_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_row_to_user(r) for r in fetchall(cur)]

    def list_by_ids(self, user_ids: Iterable[int]) -> Sequence[User]:
        ids = sorted({int(i) for i in user_ids})
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id IN ({in_clause(ids)})", tuple(ids))
            return [_row_to_user(r) for r in fetchall(cur)]

    def exists_with_role(self, role: Role) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT 1 AS found FROM users WHERE role=%s LIMIT 1", (role.value,))
            return fetchone(cur) is not None

    def create_user(self, **fields: Any) -> int:
        unknown = set(fields) - _WRITABLE
        if unknown:
            raise ValueError(f"Unknown user columns: {sorted(unknown)}")
        cols = sorted(fields)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"INSERT INTO users ({', '.join(cols)}) VALUES ({in_clause(cols)})",
                tuple(_db_value(fields[c]) for c in cols),
            )
            return int(cur.lastrowid)

    def update_user(self, user_id: int, **changes: Any) -> bool:
        unknown = set(changes) - _WRITABLE
        if unknown:
            raise ValueError(f"Unknown user columns: {sorted(unknown)}")
        if not changes:
            return False
        cols = sorted(changes)
        assignments = ", ".join(f"{c}=%s" for c in cols)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE users SET {assignments} WHERE user_id=%s",
                tuple(_db_value(changes[c]) for c in cols) + (user_id,),
            )
            return cur.rowcount > 0

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0
