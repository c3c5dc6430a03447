from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from .model import Meeting


class MeetingRepository(Protocol):
    def get_by_id(self, meeting_id: int) -> Optional[Meeting]:
        raise NotImplementedError

    def list_meetings(self, *, involving: Optional[int] = None) -> Sequence[Meeting]:
        """Sorted by date and time; ``involving`` keeps meetings a user created or attends."""
        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, meeting_id: int, **changes) -> bool:
        raise NotImplementedError

    def set_attendees(self, meeting_id: int, user_ids: Iterable[int]) -> None:
        raise NotImplementedError

    def delete_by_id(self, meeting_id: int) -> bool:
        raise NotImplementedError
