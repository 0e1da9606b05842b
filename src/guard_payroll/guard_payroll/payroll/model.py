from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from ..attendance.model import AttendanceRecord
from ..clients.model import ClientAssignment
from ..core.constants import DEFAULT_OT_RATE
from ..employees.model import Employee
from ..periods.model import PayPeriod, PeriodPair
from ..sheets.model import OverrideValues


@dataclass(frozen=True)
class PayrollSnapshot:
    """Everything one period's payroll is derived from. Never mutated."""

    period: PayPeriod
    split_date: date
    employees: tuple[Employee, ...] = ()
    attendance: tuple[AttendanceRecord, ...] = ()
    assignments: tuple[ClientAssignment, ...] = ()
    sheet_entries: Mapping[int, OverrideValues] = field(default_factory=dict)
    session_edits: Mapping[int, OverrideValues] = field(default_factory=dict)
    payment_statuses: Mapping[str, str] = field(default_factory=dict)
    default_ot_rate: float = DEFAULT_OT_RATE


@dataclass(frozen=True)
class PayrollLine:
    """One employee's fully derived pay line.

    Monetary outputs are whole currency units. per_day_salary, gross_salary and
    net_salary are None when the period has no working days.
    """

    employee_db_id: int
    employee_id: str
    full_name: str
    fss_no: str
    department: str
    designation: str
    account_no: str
    mobile_no: str
    status: str
    client_id: Optional[int]
    client_name: str
    site_name: str
    present_days: int
    late_days: int
    absent_days: int
    leave_days: int
    pre_days: int
    cur_days: int
    total_paid_days: int
    total_overtime_minutes: float
    ot_days_count: int
    total_fines: float
    total_salary: float
    per_day_salary: Optional[int]
    ot_rate: float
    overtime_pay: int
    allow_other: float
    eobi: float
    fine_adv_extra: float
    gross_salary: Optional[int]
    deductions: int
    net_salary: Optional[int]
    bank_cash: str
    remarks: str
    payment_status: str

    @property
    def is_computable(self) -> bool:
        return self.net_salary is not None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class PayrollTotals:
    employee_count: int = 0
    total_gross: int = 0
    total_overtime: int = 0
    total_deductions: float = 0
    total_net: int = 0


@dataclass(frozen=True)
class PayrollSheet:
    periods: PeriodPair
    lines: tuple[PayrollLine, ...]
    totals: PayrollTotals
    failed_employee_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class PayrollRun:
    """Result of deriving one snapshot: the lines plus employees that failed."""

    lines: tuple[PayrollLine, ...]
    failed_employee_ids: tuple[str, ...] = ()
