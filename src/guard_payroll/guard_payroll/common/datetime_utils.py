from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def coerce_date(value: Any) -> Optional[date]:
    """Best-effort conversion of a backend date value; None when unusable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return parse_iso_date(text[:10])
    except ValueError:
        return None


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_month(value: str) -> date:
    """Parse YYYY-MM into the first day of that month."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m").date()
    except ValueError:
        raise ValidationError(f"Invalid month {value!r} (expected YYYY-MM)")


def format_month(value: date) -> str:
    return value.strftime("%Y-%m")


def shift_month(value: date, months: int) -> date:
    """First day of the month `months` away from the month of `value`."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
