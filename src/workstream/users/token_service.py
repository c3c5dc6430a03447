from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import DEFAULT_TOKEN_DAYS
from ..core.exceptions import AuthenticationError

JWT_ALGORITHM = "HS256"


class TokenService:
    """Issues and verifies the bearer tokens handed out at login."""

    def __init__(self, secret: str, *, expires_days: int = DEFAULT_TOKEN_DAYS):
        self._secret = secret
        self._expires_days = int(expires_days)

    def issue(self, user_id: int, *, now: Optional[datetime] = None) -> str:
        issued = now or datetime.now(timezone.utc)
        payload = {
            "id": int(user_id),
            "iat": issued,
            "exp": issued + timedelta(days=self._expires_days),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def decode(self, token: str) -> int:
        try:
            payload = jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM])
        except jwt.InvalidTokenError:
            raise AuthenticationError("Not authorized, token failed")

        try:
            return int(payload["id"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Not authorized, token failed")
