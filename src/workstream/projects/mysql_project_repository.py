from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional, Sequence

from ..core.enums import ProjectStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Project, ProjectMember
from .repository import ProjectRepository

_WRITABLE = {"name", "description", "start_date", "end_date", "status", "progress"}


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load_members(self, cur, project_ids: list[int]) -> dict[int, list[ProjectMember]]:
        members: dict[int, list[ProjectMember]] = {pid: [] for pid in project_ids}
        if not project_ids:
            return members
        cur.execute(
            f"""
            SELECT pm.project_id, u.user_id, u.name, u.email
            FROM project_members pm
            JOIN users u ON u.user_id = pm.user_id
            WHERE pm.project_id IN ({in_clause(project_ids)})
            ORDER BY u.name
            """,
            tuple(project_ids),
        )
        for r in fetchall(cur):
            members[int(r["project_id"])].append(
                ProjectMember(user_id=int(r["user_id"]), name=r["name"], email=r.get("email"))
            )
        return members

    @staticmethod
    def _row_to_project(r: dict, members: list[ProjectMember]) -> Project:
        return Project(
            project_id=int(r["project_id"]),
            name=r["name"],
            description=r.get("description"),
            start_date=r.get("start_date"),
            end_date=r.get("end_date"),
            status=ProjectStatus(r["status"]),
            progress=int(r.get("progress") or 0),
            assigned_by=r.get("assigned_by"),
            members=tuple(members),
            created_at=r.get("created_at"),
        )

    def get_by_id(self, project_id: int) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM projects WHERE project_id=%s", (project_id,))
            r = fetchone(cur)
            if not r:
                return None
            members = self._load_members(cur, [int(r["project_id"])])
            return self._row_to_project(r, members[int(r["project_id"])])

    def list_projects(
        self,
        *,
        search: Optional[str] = None,
        status: Optional[ProjectStatus] = None,
        member_id: Optional[int] = None,
    ) -> Sequence[Project]:
        where: list[str] = []
        params: list[Any] = []
        if search:
            where.append("LOWER(p.name) LIKE %s")
            params.append(f"%{search.lower()}%")
        if status is not None:
            where.append("p.status=%s")
            params.append(status.value)
        if member_id is not None:
            where.append("EXISTS (SELECT 1 FROM project_members pm WHERE pm.project_id=p.project_id AND pm.user_id=%s)")
            params.append(member_id)

        sql = "SELECT p.* FROM projects p"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY p.created_at DESC, p.project_id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            rows = fetchall(cur)
            members = self._load_members(cur, [int(r["project_id"]) for r in rows])
            return [self._row_to_project(r, members[int(r["project_id"])]) for r in rows]

    def create(
        self,
        *,
        name: str,
        description: Optional[str],
        start_date: Optional[date],
        end_date: Optional[date],
        status: ProjectStatus,
        progress: int,
        assigned_by: Optional[int],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO projects (name, description, start_date, end_date, status, progress, assigned_by)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                """,
                (name, description, start_date, end_date, status.value, progress, assigned_by),
            )
            return int(cur.lastrowid)

    def update(self, project_id: int, **changes) -> bool:
        unknown = set(changes) - _WRITABLE
        if unknown:
            raise ValueError(f"Unknown project columns: {sorted(unknown)}")
        if not changes:
            return False
        cols = sorted(changes)
        values = [changes[c].value if isinstance(changes[c], ProjectStatus) else changes[c] for c in cols]
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE projects SET {', '.join(f'{c}=%s' for c in cols)} WHERE project_id=%s",
                tuple(values) + (project_id,),
            )
            return cur.rowcount > 0

    def set_members(self, project_id: int, user_ids: Iterable[int]) -> None:
        ids = sorted({int(i) for i in user_ids})
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM project_members WHERE project_id=%s", (project_id,))
            if ids:
                cur.executemany(
                    "INSERT INTO project_members (project_id, user_id) VALUES (%s, %s)",
                    [(project_id, uid) for uid in ids],
                )

    def delete_by_id(self, project_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM projects WHERE project_id=%s", (project_id,))
            return cur.rowcount > 0
