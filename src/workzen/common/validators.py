from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional, TypeVar

from ..core.exceptions import ValidationError

E = TypeVar("E", bound=Enum)


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_month(value) -> int:
    try:
        month = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Month must be a number between 1 and 12")
    if not 1 <= month <= 12:
        raise ValidationError("Month must be a number between 1 and 12")
    return month


def require_year(value) -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Year is not valid")
    if not 1900 <= year <= 9999:
        raise ValidationError("Year is not valid")
    return year


def require_date_range(start: date, end: date) -> None:
    if end < start:
        raise ValidationError("End date must be on or after start date")


def require_enum(enum_cls: type[E], value, field_name: str) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field_name} '{value}'. Allowed: {allowed}")


def optional_int(value) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"'{value}' is not a valid number")


def positive_int(value, field_name: str, *, default: int, maximum: Optional[int] = None) -> int:
    number = optional_int(value)
    if number is None:
        return default
    if number < 1:
        raise ValidationError(f"{field_name} must be at least 1")
    return min(number, maximum) if maximum else number
