from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PayPeriod:
    """A 26th-to-25th pay period (both ends inclusive)."""

    from_date: date
    to_date: date

    @property
    def working_days(self) -> int:
        return (self.to_date - self.from_date).days + 1

    @property
    def split_date(self) -> date:
        """First day of the calendar month the period ends in."""
        return self.to_date.replace(day=1)

    def contains(self, day: date) -> bool:
        return self.from_date <= day <= self.to_date


@dataclass(frozen=True)
class PeriodPair:
    reference_month: date
    current: PayPeriod
    previous: PayPeriod
