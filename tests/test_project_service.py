from __future__ import annotations

from datetime import date

import pytest

from workstream.core.enums import ProjectStatus
from workstream.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_create_with_members(container, admin, employee):
    project = container.project_service.create(
        admin,
        {
            "name": "Payroll revamp",
            "startDate": "2025-03-01",
            "deadline": "2025-06-30",
            "status": "In Progress",
            "assignedTo": [{"_id": employee.user_id}],
        },
    )

    assert project.status == ProjectStatus.ACTIVE
    assert project.end_date == date(2025, 6, 30)
    assert project.assigned_by == admin.user_id
    assert project.member_ids == (employee.user_id,)
    assert project.to_dict()["assignedTo"] == [{"_id": employee.user_id, "name": "Alice", "email": "alice@example.com"}]


def test_create_validates_input(container, admin):
    with pytest.raises(ValidationError, match="Unknown user id"):
        container.project_service.create(admin, {"name": "X", "assignedTo": [999]})
    with pytest.raises(ValidationError, match="Deadline cannot be before"):
        container.project_service.create(admin, {"name": "X", "startDate": "2025-03-02", "deadline": "2025-03-01"})
    with pytest.raises(ValidationError, match="Progress"):
        container.project_service.create(admin, {"name": "X", "progress": 120})


def test_members_only_visibility(container, fakes, admin, employee):
    project = container.project_service.create(admin, {"name": "Secret", "assignedTo": [employee.user_id]})
    outsider = fakes.users.add("Bob")

    assert container.project_service.get(employee, project.project_id).name == "Secret"
    assert container.project_service.get(admin, project.project_id).name == "Secret"
    with pytest.raises(AuthorizationError):
        container.project_service.get(outsider, project.project_id)

    assert [p.name for p in container.project_service.my_projects(employee)] == ["Secret"]
    assert container.project_service.my_projects(outsider) == []


def test_update_assign_and_delete(container, fakes, admin, employee):
    bob = fakes.users.add("Bob")
    project = container.project_service.create(admin, {"name": "Portal"})

    updated = container.project_service.update(project.project_id, {"progress": 40, "status": "on-hold"})
    assert (updated.progress, updated.status) == (40, ProjectStatus.ON_HOLD)

    assigned = container.project_service.assign(project.project_id, [bob.user_id, employee.user_id])
    assert [m.name for m in assigned.members] == ["Alice", "Bob"]

    container.project_service.delete(project.project_id)
    with pytest.raises(NotFoundError):
        container.project_service.get(admin, project.project_id)


def test_list_filters(container, admin):
    container.project_service.create(admin, {"name": "Mobile app", "status": "completed"})
    container.project_service.create(admin, {"name": "Web app"})

    assert [p.name for p in container.project_service.list_projects(search="MOBILE")] == ["Mobile app"]
    assert [p.name for p in container.project_service.list_projects(status="active")] == ["Web app"]
    assert len(container.project_service.list_projects(status="All")) == 2
