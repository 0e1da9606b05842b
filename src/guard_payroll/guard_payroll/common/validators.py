from __future__ import annotations

import math
from typing import Any, Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def require_number(value: Any, field_name: str) -> float:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be a number")
    if not math.isfinite(number):
        raise ValidationError(f"{field_name} must be a finite number")
    return number


def require_int_in_range(value: Any, field_name: str, *, min_value: int, max_value: int) -> int:
    number = require_number(value, field_name)
    if not number.is_integer():
        raise ValidationError(f"{field_name} must be a whole number")
    if number < min_value or number > max_value:
        raise ValidationError(f"{field_name} must be between {min_value} and {max_value}")
    return int(number)


def as_float(value: Any, default: float = 0.0) -> float:
    """Lenient numeric read for backend payloads (numbers may arrive as strings)."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    return number if math.isfinite(number) else default


def as_optional_float(value: Any) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    number = as_float(value, default=math.nan)
    return None if math.isnan(number) else number


def as_optional_int(value: Any) -> Optional[int]:
    number = as_optional_float(value)
    return None if number is None else int(number)


def as_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    text = str(value).strip()
    return text or default
