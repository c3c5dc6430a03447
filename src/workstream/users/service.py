from __future__ import annotations

import logging
from datetime import date
from typing import Any, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import parse_optional_date
from ..common.validators import require_email, require_min_length, require_non_empty, require_non_negative
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import EmployeeStatus, Role, SalaryType, WorkMode
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository
from .token_service import TokenService

logger = logging.getLogger(__name__)

_LOGIN_STATUSES = (EmployeeStatus.ACTIVE, EmployeeStatus.ON_LEAVE)


def _parse_enum(enum_cls, value: Any, default):
    v = (str(value) if value is not None else "").strip()
    for member in enum_cls:
        if member.value == v:
            return member
    return default


class AuthService:
    """Use case: login, first admin registration and own-profile management."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def login(self, email: str, password: str) -> tuple[User, str]:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not password:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # unknown hash scheme stored by hand
            ok = False
        if not ok:
            raise AuthenticationError("Invalid email or password")

        if user.status == EmployeeStatus.BLOCKED:
            raise AuthenticationError("Your account has been blocked. Please contact admin.")
        if user.status not in _LOGIN_STATUSES:
            raise AuthenticationError("Account is inactive. Please contact admin.")

        logger.info("User %s logged in", user.user_id)
        return user, self._tokens.issue(user.user_id)

    def register_admin(self, *, name: str, email: str, password: str, today: Optional[date] = None) -> tuple[User, str]:
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("User already exists")
        if self._users.exists_with_role(Role.ADMIN):
            raise AuthorizationError("An admin account already exists")

        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.ADMIN,
            status=EmployeeStatus.ACTIVE,
            work_mode=WorkMode.WFO,
            joining_date=today or date.today(),
        )
        logger.info("Registered initial admin %s", user_id)
        user = self.get_profile(user_id)
        return user, self._tokens.issue(user.user_id)

    def get_profile(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: int, data: dict) -> tuple[User, str]:
        user = self.get_profile(user_id)
        changes: dict[str, Any] = {}

        for key in ("name", "phone", "location", "image"):
            value = data.get(key)
            if value:
                changes[key] = str(value).strip()

        if data.get("email"):
            email = require_email(data["email"])
            other = self._users.get_by_email(email)
            if other and other.user_id != user.user_id:
                raise ValidationError("Email is already in use")
            changes["email"] = email

        if data.get("workMode"):
            changes["work_mode"] = _parse_enum(WorkMode, data["workMode"], user.work_mode)

        if data.get("password"):
            require_min_length(data["password"], "Password", MIN_PASSWORD_LENGTH)
            changes["password_hash"] = generate_password_hash(data["password"])

        if changes:
            self._users.update_user(user.user_id, **changes)
        user = self.get_profile(user.user_id)
        return user, self._tokens.issue(user.user_id)


class UserService:
    """Use case: employee records managed by admins and sub-admins."""

    def __init__(self, users: UserRepository):
        self._users = users

    def create_employee(self, *, creator: User, data: dict, today: Optional[date] = None) -> User:
        name = require_non_empty(data.get("name"), "Name")
        email = require_email(data.get("email"))
        password = require_min_length(data.get("password"), "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("User already exists")

        role = Role.parse(data.get("role"), Role.EMPLOYEE)
        if role == Role.ADMIN and creator.role != Role.ADMIN:
            raise AuthorizationError("Only admins can create admin accounts")

        salary = data.get("salary")
        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=role,
            designation=(data.get("designation") or None),
            salary=require_non_negative(salary, "Salary") if salary not in (None, "") else 0.0,
            salary_type=_parse_enum(SalaryType, data.get("salaryType"), SalaryType.MONTHLY),
            status=EmployeeStatus.parse(data.get("status"), EmployeeStatus.ACTIVE),
            phone=(data.get("phone") or None),
            location=(data.get("location") or None),
            work_mode=_parse_enum(WorkMode, data.get("workMode"), WorkMode.WFO),
            joining_date=parse_optional_date(data.get("joiningDate")) or today or date.today(),
            created_by=creator.user_id,
        )
        logger.info("User %s created %s account %s", creator.user_id, role.value, user_id)
        return self._get(user_id)

    def create_sub_admin(self, *, creator: User, data: dict, today: Optional[date] = None) -> User:
        return self.create_employee(creator=creator, data={**data, "role": Role.SUB_ADMIN.value}, today=today)

    def list_users(self, *, role: Optional[str] = None) -> Sequence[User]:
        if not role or role == "All":
            return self._users.list_users()
        parsed = Role.parse(role)
        if parsed is None:
            return []
        return self._users.list_users(role=parsed)

    def update_user(self, user_id: int, data: dict) -> User:
        user = self._get(user_id)
        changes: dict[str, Any] = {}

        for key in ("name", "designation", "image", "phone", "location"):
            value = data.get(key)
            if value:
                changes[key] = str(value).strip()

        if data.get("email"):
            email = require_email(data["email"])
            other = self._users.get_by_email(email)
            if other and other.user_id != user.user_id:
                raise ValidationError("Email is already in use")
            changes["email"] = email

        role = Role.parse(data.get("role"))
        if role is not None:
            changes["role"] = role

        if data.get("status"):
            status = EmployeeStatus.parse(data["status"])
            if status is None:
                raise ValidationError(f"Unknown status: {data['status']!r}")
            changes["status"] = status

        if data.get("salary") not in (None, ""):
            changes["salary"] = require_non_negative(data["salary"], "Salary")

        salary_type = _parse_enum(SalaryType, data.get("salaryType"), None)
        if salary_type is not None:
            changes["salary_type"] = salary_type

        work_mode = _parse_enum(WorkMode, data.get("workMode"), None)
        if work_mode is not None:
            changes["work_mode"] = work_mode

        joining_date = parse_optional_date(data.get("joiningDate"))
        if joining_date is not None:
            changes["joining_date"] = joining_date

        if data.get("password"):
            require_min_length(data["password"], "Password", MIN_PASSWORD_LENGTH)
            changes["password_hash"] = generate_password_hash(data["password"])

        if changes:
            self._users.update_user(user.user_id, **changes)
        return self._get(user.user_id)

    def delete_user(self, *, current_user: User, user_id: int) -> None:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        if user.user_id == current_user.user_id:
            raise ValidationError("You cannot delete your own account")

        self._users.delete_by_id(user_id)
        logger.info("User %s removed account %s", current_user.user_id, user_id)

    def _get(self, user_id: int) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user
