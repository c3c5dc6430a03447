from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations.

    ``payload`` holds extra JSON fields returned next to the message.
    """

    status_code = 400

    def __init__(self, message: str = "", *, payload: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.payload = payload or {}


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    status_code = 400


class AuthenticationError(DomainError):
    """Raised when credentials or tokens are invalid."""

    status_code = 401


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    status_code = 403


class NotFoundError(DomainError):
    """Raised when the requested record does not exist."""

    status_code = 404
