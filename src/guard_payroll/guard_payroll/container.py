from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

import httpx

from .attendance.api_attendance_repository import ApiAttendanceRepository
from .backend.connection import BackendConfig, BackendConnection
from .clients.api_client_repository import ApiClientRepository
from .core.constants import DEFAULT_EMPLOYEE_FETCH_LIMIT, DEFAULT_OT_RATE, DEFAULT_PERSIST_WORKERS
from .employees.api_employee_repository import ApiEmployeeRepository
from .payroll.api_payment_status_repository import ApiPaymentStatusRepository
from .payroll.service import PayrollSheetService
from .sheets.api_sheet_repository import ApiSheetEntryRepository


@dataclass(frozen=True)
class Container:
    conn: BackendConnection

    employees_repo: ApiEmployeeRepository
    attendance_repo: ApiAttendanceRepository
    clients_repo: ApiClientRepository
    sheets_repo: ApiSheetEntryRepository
    payments_repo: ApiPaymentStatusRepository

    payroll_sheet_service: PayrollSheetService


def build_container(
    *,
    backend_config: dict,
    default_ot_rate: float = DEFAULT_OT_RATE,
    employee_limit: int = DEFAULT_EMPLOYEE_FETCH_LIMIT,
    persist_workers: int = DEFAULT_PERSIST_WORKERS,
    transport: Optional[httpx.BaseTransport] = None,
) -> Container:
    config = BackendConfig(
        base_url=str(backend_config["base_url"]),
        token=backend_config.get("token") or None,
        timeout=float(backend_config.get("timeout", 10.0)),
    )
    conn = BackendConnection(config, transport=transport) if transport else BackendConnection.get_instance(config)

    employees_repo = ApiEmployeeRepository(conn)
    attendance_repo = ApiAttendanceRepository(conn)
    clients_repo = ApiClientRepository(conn)
    sheets_repo = ApiSheetEntryRepository(conn)
    payments_repo = ApiPaymentStatusRepository(conn)

    payroll_sheet_service = PayrollSheetService(
        employees_repo,
        attendance_repo,
        clients_repo,
        sheets_repo,
        payments_repo,
        default_ot_rate=default_ot_rate,
        employee_limit=employee_limit,
        executor=ThreadPoolExecutor(max_workers=int(persist_workers), thread_name_prefix="sheet-persist"),
    )

    return Container(
        conn=conn,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        clients_repo=clients_repo,
        sheets_repo=sheets_repo,
        payments_repo=payments_repo,
        payroll_sheet_service=payroll_sheet_service,
    )
