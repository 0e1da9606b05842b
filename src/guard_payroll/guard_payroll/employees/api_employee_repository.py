from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..backend.api_base import get_json, unwrap_list
from ..backend.connection import BackendConnection
from ..common.validators import as_float, as_optional_int, as_text
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class ApiEmployeeRepository(EmployeeRepository):
    def __init__(self, conn: BackendConnection):
        self._conn = conn

    def list_employees(self, *, limit: int) -> Sequence[Employee]:
        data = get_json(self._conn, "/api/employees", params={"limit": str(int(limit))})
        employees = []
        for r in unwrap_list(data, "employees", "data"):
            emp = self._to_employee(r)
            if emp is not None:
                employees.append(emp)
        return employees

    @staticmethod
    def _to_employee(r: dict[str, Any]) -> Optional[Employee]:
        db_id = as_optional_int(r.get("id"))
        if db_id is None:
            logger.warning("Skipping employee row without database id: %r", r.get("employee_id"))
            return None

        basic = as_float(r.get("basic_salary")) or as_float(r.get("salary")) or as_float(r.get("pay_rs"))
        total = as_float(r.get("total_salary"))
        if not total and not basic:
            logger.debug("Employee %s has no salary on record", r.get("employee_id"))

        return Employee(
            db_id=db_id,
            employee_id=as_text(r.get("employee_id")),
            full_name=as_text(r.get("full_name")),
            status=as_text(r.get("status")),
            total_salary=total,
            basic_salary=basic,
            fss_no=as_text(r.get("fss_no")),
            department=as_text(r.get("department"), "-"),
            designation=as_text(r.get("designation"), "-"),
            account_no=as_text(r.get("account_no") or r.get("account_number"), "-"),
            mobile_no=as_text(r.get("mobile_no") or r.get("mobile_number"), "-"),
        )
