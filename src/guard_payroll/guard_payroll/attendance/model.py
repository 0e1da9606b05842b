from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one day (read-only here)."""

    employee_id: str
    date: Optional[date]
    status: AttendanceStatus
    fine_amount: float = 0.0
    late_deduction: float = 0.0
    overtime_minutes: float = 0.0
    overtime_in: Optional[str] = None
    overtime_out: Optional[str] = None

    @property
    def is_ot_day(self) -> bool:
        return bool((self.overtime_in or "").strip()) and bool((self.overtime_out or "").strip())


@dataclass(frozen=True)
class AttendanceSummary:
    """Period-level counters for one employee."""

    present_days: int = 0
    absent_days: int = 0
    leave_days: int = 0
    late_days: int = 0
    pre_days_count: int = 0
    cur_days_count: int = 0
    total_fines: float = 0.0
    total_overtime_minutes: float = 0.0
    ot_days_count: int = 0
    record_count: int = 0
