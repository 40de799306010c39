from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_month(value: Any) -> int:
    try:
        month = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Month must be a number between 1 and 12")
    if not 1 <= month <= 12:
        raise ValidationError("Month must be a number between 1 and 12")
    return month


def require_year(value: Any) -> int:
    try:
        year = int(value)
    except (TypeError, ValueError):
        raise ValidationError("Year is invalid")
    if not 1900 <= year <= 9999:
        raise ValidationError("Year is invalid")
    return year


def optional_id(value: Any, field_name: str) -> Optional[int]:
    """Blank or zero means "not given" (e.g. all campuses)."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} is invalid")
    if parsed < 0:
        raise ValidationError(f"{field_name} is invalid")
    return parsed or None


def require_non_negative(value: Any, field_name: str) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")
    if parsed < 0:
        raise ValidationError(f"{field_name} must not be negative")
    return parsed
