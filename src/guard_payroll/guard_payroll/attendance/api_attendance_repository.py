from __future__ import annotations

from datetime import date
from typing import Any, Optional, Sequence

from ..backend.api_base import get_json, unwrap_list
from ..backend.connection import BackendConnection
from ..common.datetime_utils import coerce_date, format_iso_date
from ..common.validators import as_float, as_text
from ..core.enums import AttendanceStatus
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _optional_text(value: Any) -> Optional[str]:
    return as_text(value) or None


class ApiAttendanceRepository(AttendanceRepository):
    def __init__(self, conn: BackendConnection):
        self._conn = conn

    def get_range(self, *, from_date: date, to_date: date) -> Sequence[AttendanceRecord]:
        data = get_json(
            self._conn,
            "/api/attendance/range",
            params={"from_date": format_iso_date(from_date), "to_date": format_iso_date(to_date)},
        )
        return [self._to_record(r) for r in unwrap_list(data, "attendance", "data")]

    @staticmethod
    def _to_record(r: dict[str, Any]) -> AttendanceRecord:
        return AttendanceRecord(
            employee_id=as_text(r.get("employee_id")),
            date=coerce_date(r.get("date")),
            status=AttendanceStatus.parse(r.get("status")),
            fine_amount=as_float(r.get("fine_amount")),
            late_deduction=as_float(r.get("late_deduction")),
            overtime_minutes=as_float(r.get("overtime_minutes")),
            overtime_in=_optional_text(r.get("overtime_in")),
            overtime_out=_optional_text(r.get("overtime_out")),
        )
