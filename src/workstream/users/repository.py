from __future__ import annotations

from typing import Any, Iterable, Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for users.

    Services depend on this protocol, never on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_users(self, *, role: Optional[Role] = None) -> Sequence[User]:
        raise NotImplementedError

    def list_by_ids(self, user_ids: Iterable[int]) -> Sequence[User]:
        raise NotImplementedError

    def exists_with_role(self, role: Role) -> bool:
        raise NotImplementedError

    def create_user(self, **fields: Any) -> int:
        raise NotImplementedError

    def update_user(self, user_id: int, **changes: Any) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError
