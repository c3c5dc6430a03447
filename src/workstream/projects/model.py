from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import ProjectStatus


@dataclass(frozen=True)
class ProjectMember:
    user_id: int
    name: str
    email: Optional[str] = None


@dataclass(frozen=True)
class Project:
    project_id: int
    name: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    progress: int = 0
    assigned_by: Optional[int] = None
    members: tuple[ProjectMember, ...] = field(default_factory=tuple)
    created_at: Optional[datetime] = None

    @property
    def member_ids(self) -> tuple[int, ...]:
        return tuple(m.user_id for m in self.members)

    def has_member(self, user_id: int) -> bool:
        return int(user_id) in self.member_ids

    def to_dict(self) -> dict:
        return {
            "_id": self.project_id,
            "name": self.name,
            "description": self.description,
            "startDate": self.start_date,
            "deadline": self.end_date,
            "status": self.status.value,
            "progress": self.progress,
            "assignedBy": self.assigned_by,
            "assignedTo": [{"_id": m.user_id, "name": m.name, "email": m.email} for m in self.members],
            "createdAt": self.created_at,
        }
