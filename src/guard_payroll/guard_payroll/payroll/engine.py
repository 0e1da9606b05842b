from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable, Optional, Sequence

from ..attendance.aggregator import aggregate_attendance
from ..attendance.model import AttendanceRecord
from ..clients.model import ClientAssignment
from ..core.enums import PaymentStatus
from ..employees.model import Employee
from ..sheets.resolver import resolve_overrides
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollLine, PayrollRun, PayrollSnapshot

logger = logging.getLogger(__name__)


def eligible_employees(employees: Iterable[Employee]) -> list[Employee]:
    return [e for e in employees if e.is_payroll_eligible]


def group_attendance(records: Iterable[AttendanceRecord]) -> dict[str, list[AttendanceRecord]]:
    grouped: dict[str, list[AttendanceRecord]] = defaultdict(list)
    for r in records:
        grouped[r.employee_id].append(r)
    return grouped


def index_assignments(assignments: Iterable[ClientAssignment]) -> dict[str, ClientAssignment]:
    """Map employee id to its active assignment; the last one wins on duplicates."""
    index: dict[str, ClientAssignment] = {}
    for a in assignments:
        if a.employee_id in index:
            logger.warning("Employee %s has more than one active assignment; using the last", a.employee_id)
        index[a.employee_id] = a
    return index


def run_payroll(snapshot: PayrollSnapshot, *, calculator: Optional[PayrollCalculator] = None) -> PayrollRun:
    """Derive every eligible employee's pay line from the snapshot.

    Employees are computed independently: a failure is logged and reported in
    failed_employee_ids without stopping the rest of the period.
    """
    calculator = calculator or StandardPayrollCalculator()
    attendance = group_attendance(snapshot.attendance)
    assignments = index_assignments(snapshot.assignments)
    working_days = snapshot.period.working_days

    lines: list[PayrollLine] = []
    failed: list[str] = []
    for emp in eligible_employees(snapshot.employees):
        try:
            summary = aggregate_attendance(attendance.get(emp.employee_id, ()), split_date=snapshot.split_date)
            resolved = resolve_overrides(
                summary,
                snapshot.sheet_entries.get(emp.db_id),
                snapshot.session_edits.get(emp.db_id),
                default_ot_rate=snapshot.default_ot_rate,
            )
            assignment = assignments.get(emp.employee_id)
            if assignment is None:
                logger.debug("Employee %s has no active assignment", emp.employee_id)
            lines.append(
                calculator.compute_line(
                    employee=emp,
                    summary=summary,
                    resolved=resolved,
                    working_days=working_days,
                    assignment=assignment,
                    payment_status=snapshot.payment_statuses.get(emp.employee_id, PaymentStatus.UNPAID.value),
                )
            )
        except Exception:
            logger.exception("Could not compute payroll line for employee %s", emp.employee_id)
            failed.append(emp.employee_id)

    return PayrollRun(lines=tuple(lines), failed_employee_ids=tuple(failed))


def compute_payroll_lines(
    snapshot: PayrollSnapshot, *, calculator: Optional[PayrollCalculator] = None
) -> list[PayrollLine]:
    return list(run_payroll(snapshot, calculator=calculator).lines)


def filter_lines(lines: Sequence[PayrollLine], text: str) -> list[PayrollLine]:
    """Name/employee id match case-insensitively; FSS number by substring."""
    needle = (text or "").strip()
    if not needle:
        return list(lines)
    lowered = needle.lower()
    return [
        line
        for line in lines
        if lowered in line.full_name.lower() or lowered in line.employee_id.lower() or needle in line.fss_no
    ]
