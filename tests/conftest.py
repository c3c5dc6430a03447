from __future__ import annotations

from datetime import datetime

import pytest

from workstream.core.enums import Role
from workstream.main import create_app

from tests.fakes import Fakes


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2025, 3, 12, 9, 0, 0)


@pytest.fixture
def fakes() -> Fakes:
    return Fakes()


@pytest.fixture
def container(fakes):
    return fakes.container()


@pytest.fixture
def admin(fakes):
    return fakes.users.add("Admin", role=Role.ADMIN)


@pytest.fixture
def employee(fakes):
    return fakes.users.add("Alice", designation="Engineer", salary=30000)


@pytest.fixture
def app(container):
    app = create_app(container=container, settings_module="workstream.config.testing")
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(container):
    def _headers(user) -> dict:
        return {"Authorization": f"Bearer {container.token_service.issue(user.user_id)}"}

    return _headers
