from __future__ import annotations

from ..core.exceptions import AuthorizationError
from .model import User


def ensure_can_view(viewer: User, user_id: int) -> None:
    """Employees may only read their own data; admins and sub-admins read anyone's."""
    if not viewer.is_manager and viewer.user_id != int(user_id):
        raise AuthorizationError("Not authorized to view this data")
