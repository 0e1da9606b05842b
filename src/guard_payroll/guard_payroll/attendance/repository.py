from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_range(self, *, from_date: date, to_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
