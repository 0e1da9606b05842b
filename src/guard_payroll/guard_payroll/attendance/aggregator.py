from __future__ import annotations

from datetime import date
from typing import Iterable

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceSummary


def aggregate_attendance(records: Iterable[AttendanceRecord], *, split_date: date) -> AttendanceSummary:
    """Reduce one employee's daily rows into period counters.

    Present/late days are split on `split_date` (the calendar month boundary, not the
    pay-period boundary) into pre/cur counts. Rows without a date count as current.
    Overtime minutes are tallied for display; pay uses the OT-day count.
    """
    present = absent = leave = late = pre = cur = ot_days = count = 0
    fines = 0.0
    overtime_minutes = 0.0

    for r in records:
        count += 1
        status = r.status
        if status in (AttendanceStatus.PRESENT, AttendanceStatus.LATE):
            present += 1
            if r.date is not None and r.date < split_date:
                pre += 1
            else:
                cur += 1
        if status == AttendanceStatus.ABSENT:
            absent += 1
        if status == AttendanceStatus.LEAVE:
            leave += 1
        if status == AttendanceStatus.LATE:
            late += 1

        fines += (r.fine_amount or 0.0) + (r.late_deduction or 0.0)
        overtime_minutes += r.overtime_minutes or 0.0
        if r.is_ot_day:
            ot_days += 1

    return AttendanceSummary(
        present_days=present,
        absent_days=absent,
        leave_days=leave,
        late_days=late,
        pre_days_count=pre,
        cur_days_count=cur,
        total_fines=fines,
        total_overtime_minutes=overtime_minutes,
        ot_days_count=ot_days,
        record_count=count,
    )
