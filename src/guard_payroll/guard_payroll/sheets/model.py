from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Optional

from ..core.enums import OverrideField


@dataclass(frozen=True)
class OverrideValues:
    """Manual corrections for one employee. None means "use the baseline".

    Shared by persisted sheet entries and in-memory session edits.
    """

    pre_days_override: Optional[int] = None
    cur_days_override: Optional[int] = None
    ot_rate_override: Optional[float] = None
    allow_other: Optional[float] = None
    eobi: Optional[float] = None
    fine_adv_extra: Optional[float] = None
    bank_cash: Optional[str] = None
    remarks: Optional[str] = None

    def get(self, f: OverrideField) -> Any:
        return getattr(self, f.value)

    def with_value(self, f: OverrideField, value: Any) -> "OverrideValues":
        return replace(self, **{f.value: value})


@dataclass(frozen=True)
class SheetEntryOverride:
    """Persisted override row, keyed by (employee_db_id, from_date, to_date)."""

    employee_db_id: int
    from_date: date
    to_date: date
    values: OverrideValues = field(default_factory=OverrideValues)


@dataclass(frozen=True)
class ResolvedOverrides:
    """Effective value of every overridable field after the three-tier chain."""

    pre_days: int
    cur_days: int
    ot_rate: float
    allow_other: float
    eobi: float
    fine_adv_extra: float
    bank_cash: str
    remarks: str
