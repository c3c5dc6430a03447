from __future__ import annotations

import re
from typing import Optional

from ..core.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_email(value: Optional[str]) -> str:
    email = require_non_empty(value, "Email").lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError("Email is invalid")
    return email


def require_non_negative(value, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if number < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return number


def require_int_range(value, field_name: str, low: int, high: int) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if not low <= number <= high:
        raise ValidationError(f"{field_name} must be between {low} and {high}")
    return number


def parse_id_list(value, field_name: str) -> list[int]:
    """Accept ``[1, 2]`` or ``[{"_id": 1}, ...]`` as sent by the dashboards."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValidationError(f"{field_name} must be a list of user ids")
    ids: list[int] = []
    for item in value:
        raw = item.get("_id") if isinstance(item, dict) else item
        try:
            ids.append(int(raw))
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid user id in {field_name}: {raw!r}")
    return ids
