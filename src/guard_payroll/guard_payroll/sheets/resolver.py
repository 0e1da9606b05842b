"""Three-tier override resolution.

effective = session edit ?? persisted override ?? baseline

Only None falls through: a zero or an empty string entered by a user is a real value.
"""

from __future__ import annotations

from typing import Optional, TypeVar

from ..attendance.model import AttendanceSummary
from ..core.constants import DEFAULT_BANK_CASH, DEFAULT_OT_RATE
from ..core.enums import OverrideField
from .model import OverrideValues, ResolvedOverrides

T = TypeVar("T")


def resolve(baseline: T, persisted: Optional[T] = None, session_edit: Optional[T] = None) -> T:
    if session_edit is not None:
        return session_edit
    if persisted is not None:
        return persisted
    return baseline


def resolve_field(
    f: OverrideField,
    baseline: T,
    persisted: Optional[OverrideValues] = None,
    session: Optional[OverrideValues] = None,
) -> T:
    return resolve(
        baseline,
        persisted.get(f) if persisted is not None else None,
        session.get(f) if session is not None else None,
    )


def resolve_overrides(
    summary: AttendanceSummary,
    persisted: Optional[OverrideValues] = None,
    session: Optional[OverrideValues] = None,
    *,
    default_ot_rate: float = DEFAULT_OT_RATE,
) -> ResolvedOverrides:
    def pick(f: OverrideField, baseline):
        return resolve_field(f, baseline, persisted, session)

    return ResolvedOverrides(
        pre_days=pick(OverrideField.PRE_DAYS, summary.pre_days_count),
        cur_days=pick(OverrideField.CUR_DAYS, summary.cur_days_count),
        ot_rate=pick(OverrideField.OT_RATE, default_ot_rate),
        allow_other=pick(OverrideField.ALLOW_OTHER, 0.0),
        eobi=pick(OverrideField.EOBI, 0.0),
        fine_adv_extra=pick(OverrideField.FINE_ADV_EXTRA, 0.0),
        bank_cash=pick(OverrideField.BANK_CASH, DEFAULT_BANK_CASH),
        remarks=pick(OverrideField.REMARKS, ""),
    )
