"""Request helpers shared by the JSON controllers.

Authentication is a Bearer JWT; the decoded user is stored on ``flask.g``.
"""

from __future__ import annotations

from datetime import date
from functools import wraps
from typing import TYPE_CHECKING, Any, Optional

from flask import current_app, g, request

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from .datetime_utils import parse_optional_date

if TYPE_CHECKING:
    from ..container import Container
    from ..users.model import User


def get_container() -> "Container":
    return current_app.extensions["container"]


def current_user() -> "User":
    return g.current_user


def _bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    if header.startswith("Bearer "):
        return header.split(" ", 1)[1].strip() or None
    return None


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if not token:
            raise AuthenticationError("Not authorized, no token")

        container = get_container()
        user_id = container.token_service.decode(token)
        user = container.users_repo.get_by_id(user_id)
        if not user:
            raise AuthenticationError("Not authorized, user not found")

        g.current_user = user
        return view(*args, **kwargs)

    return wrapper


def roles_required(*roles: Role, message: str = "Not authorized"):
    def decorator(view):
        @wraps(view)
        def checked(*args, **kwargs):
            if g.current_user.role not in roles:
                raise AuthorizationError(message)
            return view(*args, **kwargs)

        return login_required(checked)

    return decorator


admin_required = roles_required(Role.ADMIN, message="Not authorized as an admin")
sub_admin_required = roles_required(Role.ADMIN, Role.SUB_ADMIN, message="Not authorized as a sub-admin")


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def int_arg(name: str, default: Optional[int] = None) -> Optional[int]:
    raw = request.args.get(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValidationError(f"Query parameter {name!r} must be an integer")


def date_arg(name: str) -> Optional[date]:
    return parse_optional_date(request.args.get(name))
