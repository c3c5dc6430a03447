from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import ProjectStatus
from .model import Project


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    def list_projects(
        self,
        *,
        search: Optional[str] = None,
        status: Optional[ProjectStatus] = None,
        member_id: Optional[int] = None,
    ) -> Sequence[Project]:
        raise NotImplementedError

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
        raise NotImplementedError

    def update(self, project_id: int, **changes) -> bool:
        raise NotImplementedError

    def set_members(self, project_id: int, user_ids: Iterable[int]) -> None:
        raise NotImplementedError

    def delete_by_id(self, project_id: int) -> bool:
        raise NotImplementedError
