from __future__ import annotations

from datetime import date

import pytest

from workstream.core.enums import EmployeeStatus, Role, SalaryType
from workstream.core.exceptions import AuthorizationError, NotFoundError, ValidationError


def test_create_employee_with_defaults(container, admin):
    user = container.user_service.create_employee(
        creator=admin,
        data={"name": "Erin", "email": "Erin@Example.com", "password": "secret1", "salary": "4500"},
        today=date(2025, 3, 1),
    )

    assert user.email == "erin@example.com"
    assert user.role == Role.EMPLOYEE
    assert user.salary == 4500
    assert user.salary_type == SalaryType.MONTHLY
    assert user.status == EmployeeStatus.ACTIVE
    assert user.joining_date == date(2025, 3, 1)
    assert user.created_by == admin.user_id


def test_create_employee_rejects_duplicates_and_bad_input(container, admin, employee):
    with pytest.raises(ValidationError, match="User already exists"):
        container.user_service.create_employee(
            creator=admin, data={"name": "A", "email": employee.email, "password": "secret1"}
        )
    with pytest.raises(ValidationError, match="Email is invalid"):
        container.user_service.create_employee(creator=admin, data={"name": "A", "email": "nope", "password": "secret1"})
    with pytest.raises(ValidationError, match="cannot be negative"):
        container.user_service.create_employee(
            creator=admin, data={"name": "A", "email": "a@example.com", "password": "secret1", "salary": -1}
        )


def test_sub_admin_cannot_create_admin(container, fakes):
    sub = fakes.users.add("Sub", role=Role.SUB_ADMIN)
    with pytest.raises(AuthorizationError):
        container.user_service.create_employee(
            creator=sub, data={"name": "X", "email": "x@example.com", "password": "secret1", "role": "admin"}
        )


def test_create_sub_admin(container, admin):
    user = container.user_service.create_sub_admin(
        creator=admin, data={"name": "Sam", "email": "sam@example.com", "password": "secret1"}
    )
    assert user.role == Role.SUB_ADMIN


def test_list_users_by_role(container, fakes, admin, employee):
    fakes.users.add("Sub", role=Role.SUB_ADMIN)

    assert len(container.user_service.list_users()) == 3
    assert [u.name for u in container.user_service.list_users(role="employee")] == ["Alice"]
    assert container.user_service.list_users(role="ghost") == []


def test_update_user_status_and_salary(container, employee):
    user = container.user_service.update_user(
        employee.user_id, {"status": "On Leave", "salary": 32000, "salaryType": "annual"}
    )

    assert user.status == EmployeeStatus.ON_LEAVE
    assert user.salary == 32000
    assert user.salary_type == SalaryType.ANNUAL

    with pytest.raises(ValidationError, match="Unknown status"):
        container.user_service.update_user(employee.user_id, {"status": "retired"})


def test_delete_user(container, admin, employee):
    with pytest.raises(ValidationError, match="cannot delete your own account"):
        container.user_service.delete_user(current_user=admin, user_id=admin.user_id)

    container.user_service.delete_user(current_user=admin, user_id=employee.user_id)

    with pytest.raises(NotFoundError, match="User not found"):
        container.user_service.delete_user(current_user=admin, user_id=employee.user_id)
