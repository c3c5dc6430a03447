from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Attendee, Meeting
from .repository import MeetingRepository

_WRITABLE = {"title", "description", "meeting_date", "meeting_time", "platform", "meeting_link"}


class MySQLMeetingRepository(MeetingRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load_attendees(self, cur, meeting_ids: list[int]) -> dict[int, list[Attendee]]:
        attendees: dict[int, list[Attendee]] = {mid: [] for mid in meeting_ids}
        if not meeting_ids:
            return attendees
        cur.execute(
            f"""
            SELECT ma.meeting_id, u.user_id, u.name, u.email
            FROM meeting_attendees ma
            JOIN users u ON u.user_id = ma.user_id
            WHERE ma.meeting_id IN ({in_clause(meeting_ids)})
            ORDER BY u.name
            """,
            tuple(meeting_ids),
        )
        for r in fetchall(cur):
            attendees[int(r["meeting_id"])].append(
                Attendee(user_id=int(r["user_id"]), name=r["name"], email=r.get("email"))
            )
        return attendees

    @staticmethod
    def _row_to_meeting(r: dict, attendees: list[Attendee]) -> Meeting:
        return Meeting(
            meeting_id=int(r["meeting_id"]),
            title=r["title"],
            description=r.get("description"),
            meeting_date=r["meeting_date"],
            meeting_time=r["meeting_time"],
            platform=r.get("platform") or "Google Meet",
            meeting_link=r.get("meeting_link"),
            created_by=r.get("created_by"),
            attendees=tuple(attendees),
            created_at=r.get("created_at"),
        )

    def get_by_id(self, meeting_id: int) -> Optional[Meeting]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT * FROM meetings WHERE meeting_id=%s", (meeting_id,))
            r = fetchone(cur)
            if not r:
                return None
            attendees = self._load_attendees(cur, [int(r["meeting_id"])])
            return self._row_to_meeting(r, attendees[int(r["meeting_id"])])

    def list_meetings(self, *, involving: Optional[int] = None) -> Sequence[Meeting]:
        sql = "SELECT m.* FROM meetings m"
        params: tuple = ()
        if involving is not None:
            sql += """
                WHERE m.created_by=%s
                   OR EXISTS (SELECT 1 FROM meeting_attendees ma WHERE ma.meeting_id=m.meeting_id AND ma.user_id=%s)
            """
            params = (involving, involving)
        sql += " ORDER BY m.meeting_date, m.meeting_time"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            rows = fetchall(cur)
            attendees = self._load_attendees(cur, [int(r["meeting_id"]) for r in rows])
            return [self._row_to_meeting(r, attendees[int(r["meeting_id"])]) for r in rows]

    def create(
        self,
        *,
        title: str,
        description: Optional[str],
        meeting_date: date,
        meeting_time: str,
        platform: str,
        meeting_link: Optional[str],
        created_by: int,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO meetings (title, description, meeting_date, meeting_time, platform, meeting_link, created_by)
                VALUES (%s, %s, %s, %s, %s, %s, %s)
                """,
                (title, description, meeting_date, meeting_time, platform, meeting_link, created_by),
            )
            return int(cur.lastrowid)

    def update(self, meeting_id: int, **changes) -> bool:
        unknown = set(changes) - _WRITABLE
        if unknown:
            raise ValueError(f"Unknown meeting columns: {sorted(unknown)}")
        if not changes:
            return False
        cols = sorted(changes)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE meetings SET {', '.join(f'{c}=%s' for c in cols)} WHERE meeting_id=%s",
                tuple(changes[c] for c in cols) + (meeting_id,),
            )
            return cur.rowcount > 0

    def set_attendees(self, meeting_id: int, user_ids: Iterable[int]) -> None:
        ids = sorted({int(i) for i in user_ids})
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM meeting_attendees WHERE meeting_id=%s", (meeting_id,))
            if ids:
                cur.executemany(
                    "INSERT INTO meeting_attendees (meeting_id, user_id) VALUES (%s, %s)",
                    [(meeting_id, uid) for uid in ids],
                )

    def delete_by_id(self, meeting_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM meetings WHERE meeting_id=%s", (meeting_id,))
            return cur.rowcount > 0
