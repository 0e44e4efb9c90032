from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Any, field_name: str) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    value = value.strip()
    return value or None


def require_int(value: Any, field_name: str, *, min_value: Optional[int] = None) -> int:
    # bool is an int subclass; JSON true/false is never a valid number here
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int):
        raise ValidationError(f"{field_name} must be a number")
    if min_value is not None and value < min_value:
        raise ValidationError(f"{field_name} must be >= {min_value}")
    return value


def optional_timestamp(value: Any, field_name: str) -> Optional[int]:
    if value is None:
        return None
    return require_int(value, field_name, min_value=0)
