from __future__ import annotations

from typing import Sequence

from ..backend.api_base import get_json, put_json, unwrap_list
from ..backend.connection import BackendConnection
from ..common.validators import as_optional_int, as_text
from ..core.enums import PaymentStatus
from .repository import PaymentStatusRepository


class ApiPaymentStatusRepository(PaymentStatusRepository):
    def __init__(self, conn: BackendConnection):
        self._conn = conn

    def list_for_month(self, *, month: str) -> dict[str, str]:
        data = get_json(self._conn, "/api/payroll/payment-statuses", params={"month": month})
        return {
            as_text(r.get("employee_id")): as_text(r.get("status"), PaymentStatus.UNPAID.value)
            for r in unwrap_list(data, "statuses")
        }

    def upsert(self, *, month: str, employee_id: str, status: str) -> None:
        put_json(
            self._conn,
            "/api/payroll/payment-status",
            {"month": month, "employee_id": employee_id, "status": status},
        )

    def bulk_upsert(self, *, month: str, employee_ids: Sequence[str], status: str) -> int:
        data = put_json(
            self._conn,
            "/api/payroll/payment-status/bulk",
            {"month": month, "employee_ids": list(employee_ids), "status": status},
        )
        updated = as_optional_int(data.get("updated")) if isinstance(data, dict) else None
        return updated if updated is not None else len(employee_ids)
