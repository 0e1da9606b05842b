from __future__ import annotations

from datetime import date

from ..common.datetime_utils import shift_month
from ..core.constants import PERIOD_END_DAY, PERIOD_START_DAY
from .model import PayPeriod, PeriodPair


def period_ending_in(month: date) -> PayPeriod:
    """The pay period that closes on the 25th of `month`."""
    return PayPeriod(
        from_date=shift_month(month, -1).replace(day=PERIOD_START_DAY),
        to_date=shift_month(month, 0).replace(day=PERIOD_END_DAY),
    )


def compute_periods(reference: date) -> PeriodPair:
    """Current and previous pay periods for the month containing `reference`."""
    month = shift_month(reference, 0)
    return PeriodPair(
        reference_month=month,
        current=period_ending_in(month),
        previous=period_ending_in(shift_month(month, -1)),
    )
