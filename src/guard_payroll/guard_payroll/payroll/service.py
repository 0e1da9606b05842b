from __future__ import annotations

import logging
import threading
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from datetime import date
from typing import Mapping, Optional, Sequence, Union

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..clients.model import Client, ClientAssignment
from ..clients.repository import ClientRepository
from ..common.datetime_utils import format_month
from ..core.constants import DEFAULT_EMPLOYEE_FETCH_LIMIT, DEFAULT_OT_RATE
from ..core.enums import OverrideField, PaymentStatus
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..periods.calculator import compute_periods
from ..periods.model import PayPeriod, PeriodPair
from ..reports.model import ClientSummary, ComparisonRow
from ..reports.service import compare_periods, compute_totals, group_by_client
from ..sheets.gateway import OverridePersistenceGateway
from ..sheets.model import OverrideValues, SheetEntryOverride
from ..sheets.repository import SheetEntryRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .engine import filter_lines, run_payroll
from .model import PayrollLine, PayrollRun, PayrollSheet, PayrollSnapshot
from .repository import PaymentStatusRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadedDataset:
    """Server state fetched for one reference month."""

    periods: PeriodPair
    employees: tuple[Employee, ...] = ()
    attendance: tuple[AttendanceRecord, ...] = ()
    prev_attendance: tuple[AttendanceRecord, ...] = ()
    assignments: tuple[ClientAssignment, ...] = ()
    clients: tuple[Client, ...] = ()
    sheet_entries: tuple[SheetEntryOverride, ...] = ()
    prev_sheet_entries: tuple[SheetEntryOverride, ...] = ()
    payment_statuses: Mapping[str, str] = field(default_factory=dict)


class PayrollSheetService:
    """Payroll sheet for one reference month: load, derive, edit, report.

    Lines are always re-derived from a fresh snapshot; nothing derived is cached.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        clients: ClientRepository,
        sheets: SheetEntryRepository,
        payments: PaymentStatusRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        default_ot_rate: float = DEFAULT_OT_RATE,
        employee_limit: int = DEFAULT_EMPLOYEE_FETCH_LIMIT,
        executor: Optional[Executor] = None,
    ):
        self._employees = employees
        self._attendance = attendance
        self._clients = clients
        self._sheets = sheets
        self._payments = payments
        self._calculator = calculator or StandardPayrollCalculator()
        self._default_ot_rate = float(default_ot_rate)
        self._employee_limit = int(employee_limit)
        self._gateway = OverridePersistenceGateway(sheets, reload=self.reload, executor=executor)
        self._lock = threading.RLock()
        self._data: Optional[LoadedDataset] = None

    @property
    def gateway(self) -> OverridePersistenceGateway:
        return self._gateway

    @property
    def periods(self) -> Optional[PeriodPair]:
        with self._lock:
            return self._data.periods if self._data else None

    # ---- loading ----

    def load(self, month: date) -> PeriodPair:
        """Full-state reset: refetch every dataset for `month` and drop session edits."""
        periods = compute_periods(month)
        data = self._fetch(periods)
        with self._lock:
            self._data = data
            self._gateway.reset(periods.current, data.sheet_entries)
        logger.info(
            "Loaded payroll %s (%s..%s): %d employees, %d attendance rows, %d sheet entries",
            format_month(periods.reference_month),
            periods.current.from_date,
            periods.current.to_date,
            len(data.employees),
            len(data.attendance),
            len(data.sheet_entries),
        )
        return periods

    def ensure_loaded(self, month: date) -> PeriodPair:
        current = self.periods
        if current is not None and current.reference_month == compute_periods(month).reference_month:
            return current
        return self.load(month)

    def reload(self) -> PeriodPair:
        return self.load(self._require_data().periods.reference_month)

    def _fetch(self, periods: PeriodPair) -> LoadedDataset:
        cur, prev = periods.current, periods.previous
        return LoadedDataset(
            periods=periods,
            employees=tuple(self._employees.list_employees(limit=self._employee_limit)),
            attendance=tuple(self._attendance.get_range(from_date=cur.from_date, to_date=cur.to_date)),
            prev_attendance=tuple(self._attendance.get_range(from_date=prev.from_date, to_date=prev.to_date)),
            assignments=tuple(self._clients.list_active_assignments()),
            clients=tuple(self._clients.list_clients()),
            sheet_entries=tuple(self._sheets.list_entries(from_date=cur.from_date, to_date=cur.to_date)),
            prev_sheet_entries=tuple(self._sheets.list_entries(from_date=prev.from_date, to_date=prev.to_date)),
            payment_statuses=dict(self._payments.list_for_month(month=format_month(periods.reference_month))),
        )

    def _require_data(self) -> LoadedDataset:
        with self._lock:
            if self._data is None:
                raise ValidationError("No payroll month loaded")
            return self._data

    # ---- derivation ----

    def current_snapshot(self) -> PayrollSnapshot:
        data = self._require_data()
        return self._snapshot(
            data,
            data.periods.current,
            data.attendance,
            sheet_entries=self._gateway.persisted_overrides(),
            session_edits=self._gateway.session_edits(),
            payment_statuses=data.payment_statuses,
        )

    def previous_snapshot(self) -> PayrollSnapshot:
        data = self._require_data()
        return self._snapshot(
            data,
            data.periods.previous,
            data.prev_attendance,
            sheet_entries={e.employee_db_id: e.values for e in data.prev_sheet_entries},
        )

    def _snapshot(
        self,
        data: LoadedDataset,
        period: PayPeriod,
        attendance: Sequence[AttendanceRecord],
        *,
        sheet_entries: Mapping[int, OverrideValues],
        session_edits: Optional[Mapping[int, OverrideValues]] = None,
        payment_statuses: Optional[Mapping[str, str]] = None,
    ) -> PayrollSnapshot:
        return PayrollSnapshot(
            period=period,
            split_date=period.split_date,
            employees=data.employees,
            attendance=tuple(attendance),
            assignments=data.assignments,
            sheet_entries=sheet_entries,
            session_edits=session_edits or {},
            payment_statuses=payment_statuses or {},
            default_ot_rate=self._default_ot_rate,
        )

    def current_run(self) -> PayrollRun:
        return run_payroll(self.current_snapshot(), calculator=self._calculator)

    def previous_run(self) -> PayrollRun:
        return run_payroll(self.previous_snapshot(), calculator=self._calculator)

    def build_sheet(self, *, search: str = "") -> PayrollSheet:
        run = self.current_run()
        lines = filter_lines(run.lines, search)
        return PayrollSheet(
            periods=self._require_data().periods,
            lines=tuple(lines),
            totals=compute_totals(run.lines),
            failed_employee_ids=run.failed_employee_ids,
        )

    def line_for(self, employee_db_id: int) -> Optional[PayrollLine]:
        for line in self.current_run().lines:
            if line.employee_db_id == int(employee_db_id):
                return line
        return None

    def client_summary(self) -> list[ClientSummary]:
        return group_by_client(self.current_run().lines)

    def comparison(self) -> list[ComparisonRow]:
        return compare_periods(self.current_run().lines, self.previous_run().lines, self._require_data().clients)

    # ---- writes ----

    def apply_edit(self, employee_db_id: int, field_name: Union[OverrideField, str], value) -> "Future[None]":
        try:
            f = OverrideField(field_name)
        except ValueError:
            raise ValidationError(f"Field {field_name!r} cannot be edited")

        data = self._require_data()
        if not any(e.db_id == int(employee_db_id) for e in data.employees):
            raise ValidationError(f"Employee {employee_db_id} is not on this payroll")
        return self._gateway.apply_edit(int(employee_db_id), f, value)

    def mark_paid(self, employee_id: str) -> None:
        self.set_payment_status(employee_id, PaymentStatus.PAID)

    def set_payment_status(self, employee_id: str, status: Union[PaymentStatus, str]) -> None:
        status = self._parse_payment_status(status)
        month = format_month(self._require_data().periods.reference_month)
        self._payments.upsert(month=month, employee_id=str(employee_id), status=status.value)
        self.reload()

    def bulk_update_payment_status(self, employee_ids: Sequence[str], status: Union[PaymentStatus, str]) -> int:
        status = self._parse_payment_status(status)
        if not employee_ids:
            return 0
        month = format_month(self._require_data().periods.reference_month)
        updated = self._payments.bulk_upsert(
            month=month, employee_ids=[str(e) for e in employee_ids], status=status.value
        )
        self.reload()
        return updated

    @staticmethod
    def _parse_payment_status(status: Union[PaymentStatus, str]) -> PaymentStatus:
        try:
            return PaymentStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown payment status {status!r}")
