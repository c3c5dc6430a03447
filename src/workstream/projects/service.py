from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Optional, Sequence

from ..common.datetime_utils import parse_optional_date
from ..common.validators import parse_id_list, require_int_range, require_non_empty
from ..core.enums import ProjectStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository
from .model import Project
from .repository import ProjectRepository

logger = logging.getLogger(__name__)


def _parse_status(value: Any) -> ProjectStatus:
    status = ProjectStatus.parse(value)
    if status is None:
        raise ValidationError(f"Unknown project status: {value!r}")
    return status


class ProjectService:
    def __init__(self, projects: ProjectRepository, users: UserRepository):
        self._projects = projects
        self._users = users

    def create(self, creator: User, data: dict) -> Project:
        name = require_non_empty(data.get("name"), "Project name")
        start = parse_optional_date(data.get("startDate"))
        end = parse_optional_date(data.get("deadline") or data.get("endDate"))
        self._check_dates(start, end)

        status = _parse_status(data["status"]) if data.get("status") else ProjectStatus.ACTIVE
        progress = require_int_range(data.get("progress", 0) or 0, "Progress", 0, 100)
        members = self._existing_members(parse_id_list(data.get("assignedTo"), "assignedTo"))

        project_id = self._projects.create(
            name=name,
            description=(data.get("description") or None),
            start_date=start,
            end_date=end,
            status=status,
            progress=progress,
            assigned_by=creator.user_id,
        )
        if members:
            self._projects.set_members(project_id, members)
        logger.info("Project %s created by %s with %s member(s)", project_id, creator.user_id, len(members))
        return self._get(project_id)

    def list_projects(self, *, search: Optional[str] = None, status: Optional[str] = None) -> Sequence[Project]:
        parsed = None if not status or status == "All" else _parse_status(status)
        return self._projects.list_projects(search=(search or "").strip() or None, status=parsed)

    def my_projects(self, user: User) -> Sequence[Project]:
        return self._projects.list_projects(member_id=user.user_id)

    def get(self, viewer: User, project_id: int) -> Project:
        project = self._get(project_id)
        if not viewer.is_manager and not project.has_member(viewer.user_id):
            raise AuthorizationError("Not authorized to view this project")
        return project

    def update(self, project_id: int, data: dict) -> Project:
        project = self._get(project_id)
        changes: dict[str, Any] = {}

        if data.get("name"):
            changes["name"] = require_non_empty(data["name"], "Project name")
        if "description" in data:
            changes["description"] = data["description"] or None
        if data.get("status"):
            changes["status"] = _parse_status(data["status"])
        if data.get("progress") is not None:
            changes["progress"] = require_int_range(data["progress"], "Progress", 0, 100)

        start = parse_optional_date(data.get("startDate")) or project.start_date
        end = parse_optional_date(data.get("deadline") or data.get("endDate")) or project.end_date
        self._check_dates(start, end)
        if start != project.start_date:
            changes["start_date"] = start
        if end != project.end_date:
            changes["end_date"] = end

        members = None
        if "assignedTo" in data:
            members = self._existing_members(parse_id_list(data["assignedTo"], "assignedTo"))

        if changes:
            self._projects.update(project_id, **changes)
        if members is not None:
            self._projects.set_members(project_id, members)
        return self._get(project_id)

    def assign(self, project_id: int, user_ids: Any) -> Project:
        self._get(project_id)
        self._projects.set_members(project_id, self._existing_members(parse_id_list(user_ids, "userIds")))
        return self._get(project_id)

    def delete(self, project_id: int) -> None:
        self._get(project_id)
        self._projects.delete_by_id(project_id)
        logger.info("Project %s removed", project_id)

    @staticmethod
    def _check_dates(start: Optional[date], end: Optional[date]) -> None:
        if start and end and end < start:
            raise ValidationError("Deadline cannot be before the start date")

    def _existing_members(self, user_ids: Iterable[int]) -> list[int]:
        wanted = sorted(set(user_ids))
        found = {u.user_id for u in self._users.list_by_ids(wanted)}
        missing = [uid for uid in wanted if uid not in found]
        if missing:
            raise ValidationError(f"Unknown user id(s): {', '.join(map(str, missing))}")
        return wanted

    def _get(self, project_id: int) -> Project:
        project = self._projects.get_by_id(project_id)
        if not project:
            raise NotFoundError("Project not found")
        return project
