from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..backend.api_base import get_json, put_json, unwrap_list
from ..backend.connection import BackendConnection
from ..common.datetime_utils import coerce_date, format_iso_date
from ..common.validators import as_optional_float, as_optional_int
from .model import OverrideValues, SheetEntryOverride
from .repository import SheetEntryRepository

logger = logging.getLogger(__name__)


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


class ApiSheetEntryRepository(SheetEntryRepository):
    def __init__(self, conn: BackendConnection):
        self._conn = conn

    def list_entries(self, *, from_date: date, to_date: date) -> Sequence[SheetEntryOverride]:
        data = get_json(
            self._conn,
            "/api/payroll/sheet-entries",
            params={"from_date": format_iso_date(from_date), "to_date": format_iso_date(to_date)},
        )
        entries = []
        for r in unwrap_list(data, "entries", "data"):
            db_id = as_optional_int(r.get("employee_db_id"))
            if db_id is None:
                logger.warning("Ignoring sheet entry without employee_db_id (id=%r)", r.get("id"))
                continue
            entries.append(
                SheetEntryOverride(
                    employee_db_id=db_id,
                    from_date=coerce_date(r.get("from_date")) or from_date,
                    to_date=coerce_date(r.get("to_date")) or to_date,
                    values=self._to_values(r),
                )
            )
        return entries

    def upsert_entries(self, *, from_date: date, to_date: date, entries: Sequence[Mapping[str, Any]]) -> None:
        put_json(
            self._conn,
            "/api/payroll/sheet-entries",
            {
                "from_date": format_iso_date(from_date),
                "to_date": format_iso_date(to_date),
                "entries": [dict(e) for e in entries],
            },
        )

    @staticmethod
    def _to_values(r: dict[str, Any]) -> OverrideValues:
        return OverrideValues(
            pre_days_override=as_optional_int(r.get("pre_days_override")),
            cur_days_override=as_optional_int(r.get("cur_days_override")),
            ot_rate_override=as_optional_float(r.get("ot_rate_override")),
            allow_other=as_optional_float(r.get("allow_other")),
            eobi=as_optional_float(r.get("eobi")),
            fine_adv_extra=as_optional_float(r.get("fine_adv_extra")),
            bank_cash=_optional_str(r.get("bank_cash")),
            remarks=_optional_str(r.get("remarks")),
        )
