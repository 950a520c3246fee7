"""Field checks shared by the entity models.

Each helper raises ``ValidationError`` naming the offending field; nothing is
clamped or trimmed silently.
"""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from typing import TypeVar

from petcare.core.exceptions import ValidationError

E = TypeVar("E", bound=StrEnum)


def require_text(field: str, value: str, max_length: int) -> None:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(field, "must not be empty")
    if len(value.strip()) > max_length:
        raise ValidationError(field, f"must be at most {max_length} characters")


def optional_text(field: str, value: str | None, max_length: int) -> None:
    if value is None:
        return
    if not isinstance(value, str):
        raise ValidationError(field, "must be a string")
    if len(value.strip()) > max_length:
        raise ValidationError(field, f"must be at most {max_length} characters")


def require_datetime(field: str, value: datetime | None, optional: bool = False) -> None:
    if value is None and optional:
        return
    if not isinstance(value, datetime):
        raise ValidationError(field, f"must be a datetime, got {value!r}")
    if value.tzinfo is None or value.utcoffset() is None:
        raise ValidationError(field, "must be timezone-aware")


def coerce_enum(field: str, enum_type: type[E], value: E | str) -> E:
    try:
        return enum_type(value)
    except ValueError as e:
        raise ValidationError(field, f"unknown value {value!r}") from e
