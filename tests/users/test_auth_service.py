from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import jwt
import pytest

from workstream.core.enums import EmployeeStatus, Role
from workstream.core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from workstream.users.token_service import TokenService
from tests.fakes import TEST_SECRET


def test_login_returns_token_for_user(container, employee):
    user, token = container.auth_service.login("ALICE@example.com ", "secret1")

    assert user.user_id == employee.user_id
    assert container.token_service.decode(token) == employee.user_id


def test_login_wrong_password_raises(container, employee):
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        container.auth_service.login("alice@example.com", "wrong")


def test_login_unknown_email_raises(container):
    with pytest.raises(AuthenticationError, match="Invalid email or password"):
        container.auth_service.login("nobody@example.com", "secret1")


@pytest.mark.parametrize(
    "status, message",
    [
        (EmployeeStatus.BLOCKED, "blocked"),
        (EmployeeStatus.INACTIVE, "inactive"),
        (EmployeeStatus.TERMINATED, "inactive"),
    ],
)
def test_login_refuses_disabled_accounts(container, fakes, status, message):
    fakes.users.add("Dave", status=status)
    with pytest.raises(AuthenticationError, match=message):
        container.auth_service.login("dave@example.com", "secret1")


def test_register_admin_only_once(container):
    user, token = container.auth_service.register_admin(
        name="Root", email="root@example.com", password="secret1", today=date(2025, 1, 1)
    )

    assert user.role == Role.ADMIN
    assert user.joining_date == date(2025, 1, 1)
    assert token

    with pytest.raises(ValidationError, match="User already exists"):
        container.auth_service.register_admin(name="Root", email="root@example.com", password="secret1")
    with pytest.raises(AuthorizationError):
        container.auth_service.register_admin(name="Other", email="other@example.com", password="secret1")


def test_register_admin_validates_password(container):
    with pytest.raises(ValidationError, match="at least 6"):
        container.auth_service.register_admin(name="Root", email="root@example.com", password="123")


def test_update_profile_changes_password_and_email(container, fakes, employee):
    fakes.users.add("Bob")

    with pytest.raises(ValidationError, match="already in use"):
        container.auth_service.update_profile(employee.user_id, {"email": "bob@example.com"})

    user, _ = container.auth_service.update_profile(
        employee.user_id, {"phone": "555-0101", "workMode": "WFH", "password": "new-secret"}
    )
    assert user.phone == "555-0101"
    assert user.work_mode.value == "WFH"
    container.auth_service.login("alice@example.com", "new-secret")


def test_get_profile_unknown_user(container):
    with pytest.raises(NotFoundError):
        container.auth_service.get_profile(42)


def test_token_rejects_wrong_secret_and_expired():
    other = TokenService("other-secret")
    with pytest.raises(AuthenticationError, match="token failed"):
        TokenService(TEST_SECRET).decode(other.issue(1))

    expired = TokenService(TEST_SECRET, expires_days=1).issue(
        1, now=datetime.now(timezone.utc) - timedelta(days=2)
    )
    with pytest.raises(AuthenticationError):
        TokenService(TEST_SECRET).decode(expired)


def test_token_carries_user_id_claim():
    token = TokenService(TEST_SECRET).issue(7)
    assert jwt.decode(token, TEST_SECRET, algorithms=["HS256"])["id"] == 7
