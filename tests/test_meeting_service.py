from __future__ import annotations

import pytest

from workstream.core.enums import Role
from workstream.core.exceptions import AuthorizationError, ValidationError


def test_create_and_my_meetings(container, fakes, admin, employee):
    outsider = fakes.users.add("Bob")
    meeting = container.meeting_service.create(
        admin,
        {"title": "Sprint review", "date": "2025-03-14", "time": "14:30", "attendees": [employee.user_id]},
    )

    assert meeting.platform == "Google Meet"
    assert meeting.attendee_ids == (employee.user_id,)
    assert [m.title for m in container.meeting_service.my_meetings(employee)] == ["Sprint review"]
    assert [m.title for m in container.meeting_service.my_meetings(admin)] == ["Sprint review"]
    assert container.meeting_service.my_meetings(outsider) == []


def test_create_rejects_bad_time_and_unknown_attendees(container, admin):
    with pytest.raises(ValidationError, match="Invalid time"):
        container.meeting_service.create(admin, {"title": "X", "date": "2025-03-14", "time": "2pm"})
    with pytest.raises(ValidationError, match="Unknown attendee"):
        container.meeting_service.create(admin, {"title": "X", "date": "2025-03-14", "time": "14:00", "attendees": [77]})


def test_only_organizer_or_admin_can_change(container, fakes, admin):
    organizer = fakes.users.add("Sub", role=Role.SUB_ADMIN)
    other = fakes.users.add("Other", role=Role.SUB_ADMIN)
    meeting = container.meeting_service.create(organizer, {"title": "1:1", "date": "2025-03-14", "time": "10:00"})

    with pytest.raises(AuthorizationError):
        container.meeting_service.update(other, meeting.meeting_id, {"title": "Hijack"})

    updated = container.meeting_service.update(organizer, meeting.meeting_id, {"time": "11:15", "platform": "Zoom"})
    assert (updated.meeting_time, updated.platform) == ("11:15", "Zoom")

    container.meeting_service.delete(admin, meeting.meeting_id)
    assert container.meeting_service.list_all() == []


def test_list_all_sorted_by_date_and_time(container, admin):
    container.meeting_service.create(admin, {"title": "Late", "date": "2025-03-14", "time": "16:00"})
    container.meeting_service.create(admin, {"title": "Early", "date": "2025-03-14", "time": "09:00"})
    container.meeting_service.create(admin, {"title": "Before", "date": "2025-03-13", "time": "18:00"})

    assert [m.title for m in container.meeting_service.list_all()] == ["Before", "Early", "Late"]
