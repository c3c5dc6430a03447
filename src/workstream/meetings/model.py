from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Attendee:
    user_id: int
    name: str
    email: Optional[str] = None


@dataclass(frozen=True)
class Meeting:
    meeting_id: int
    title: str
    meeting_date: date
    meeting_time: str
    description: Optional[str] = None
    platform: str = "Google Meet"
    meeting_link: Optional[str] = None
    created_by: Optional[int] = None
    attendees: tuple[Attendee, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None

    @property
    def attendee_ids(self) -> tuple[int, ...]:
        return tuple(a.user_id for a in self.attendees)

    def involves(self, user_id: int) -> bool:
        return self.created_by == int(user_id) or int(user_id) in self.attendee_ids

    def to_dict(self) -> dict:
        return {
            "_id": self.meeting_id,
            "title": self.title,
            "description": self.description,
            "date": self.meeting_date,
            "time": self.meeting_time,
            "platform": self.platform,
            "meetingLink": self.meeting_link,
            "createdBy": self.created_by,
            "attendees": [{"_id": a.user_id, "name": a.name, "email": a.email} for a in self.attendees],
            "createdAt": self.created_at,
        }
