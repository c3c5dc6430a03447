from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from ..common.datetime_utils import parse_hhmm, parse_iso_date
from ..common.validators import parse_id_list, require_non_empty
from ..core.constants import DEFAULT_MEETING_PLATFORM
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .model import Meeting
from .repository import MeetingRepository

logger = logging.getLogger(__name__)


def _meeting_time(value: Any) -> str:
    return parse_hhmm(require_non_empty(value, "Meeting time")).strftime("%H:%M")


class MeetingService:
    def __init__(self, meetings: MeetingRepository, users: UserRepository):
        self._meetings = meetings
        self._users = users

    def create(self, creator: User, data: dict) -> Meeting:
        title = require_non_empty(data.get("title"), "Title")
        meeting_date = parse_iso_date(require_non_empty(data.get("date"), "Meeting date"))
        meeting_time = _meeting_time(data.get("time"))
        attendees = self._existing_attendees(parse_id_list(data.get("attendees"), "attendees"))

        meeting_id = self._meetings.create(
            title=title,
            description=(data.get("description") or None),
            meeting_date=meeting_date,
            meeting_time=meeting_time,
            platform=(data.get("platform") or DEFAULT_MEETING_PLATFORM).strip(),
            meeting_link=(data.get("meetingLink") or None),
            created_by=creator.user_id,
        )
        if attendees:
            self._meetings.set_attendees(meeting_id, attendees)
        logger.info("Meeting %s scheduled by %s for %s %s", meeting_id, creator.user_id, meeting_date, meeting_time)
        return self._get(meeting_id)

    def list_all(self) -> Sequence[Meeting]:
        return self._meetings.list_meetings()

    def my_meetings(self, user: User) -> Sequence[Meeting]:
        return self._meetings.list_meetings(involving=user.user_id)

    def update(self, editor: User, meeting_id: int, data: dict) -> Meeting:
        meeting = self._get(meeting_id)
        self._ensure_owner(editor, meeting, "edit")

        changes: dict[str, Any] = {}
        if data.get("title"):
            changes["title"] = require_non_empty(data["title"], "Title")
        if "description" in data:
            changes["description"] = data["description"] or None
        if data.get("date"):
            changes["meeting_date"] = parse_iso_date(data["date"])
        if data.get("time"):
            changes["meeting_time"] = _meeting_time(data["time"])
        if data.get("platform"):
            changes["platform"] = str(data["platform"]).strip()
        if "meetingLink" in data:
            changes["meeting_link"] = data["meetingLink"] or None

        attendees = None
        if "attendees" in data:
            attendees = self._existing_attendees(parse_id_list(data["attendees"], "attendees"))

        if changes:
            self._meetings.update(meeting_id, **changes)
        if attendees is not None:
            self._meetings.set_attendees(meeting_id, attendees)
        return self._get(meeting_id)

    def delete(self, editor: User, meeting_id: int) -> None:
        meeting = self._get(meeting_id)
        self._ensure_owner(editor, meeting, "delete")
        self._meetings.delete_by_id(meeting_id)
        logger.info("Meeting %s cancelled by %s", meeting_id, editor.user_id)

    @staticmethod
    def _ensure_owner(user: User, meeting: Meeting, action: str) -> None:
        if user.role != Role.ADMIN and meeting.created_by != user.user_id:
            raise AuthorizationError(f"Only the organizer or an admin can {action} this meeting")

    def _existing_attendees(self, user_ids: Iterable[int]) -> list[int]:
        wanted = sorted(set(user_ids))
        found = {u.user_id for u in self._users.list_by_ids(wanted)}
        missing = [uid for uid in wanted if uid not in found]
        if missing:
            raise ValidationError(f"Unknown attendee id(s): {', '.join(map(str, missing))}")
        return wanted

    def _get(self, meeting_id: int) -> Meeting:
        meeting = self._meetings.get_by_id(meeting_id)
        if not meeting:
            raise NotFoundError("Meeting not found")
        return meeting
