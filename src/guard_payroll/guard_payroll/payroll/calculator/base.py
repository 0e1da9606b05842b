from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import AttendanceSummary
from ...clients.model import ClientAssignment
from ...employees.model import Employee
from ...sheets.model import ResolvedOverrides
from ..model import PayrollLine


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def compute_line(
        self,
        *,
        employee: Employee,
        summary: AttendanceSummary,
        resolved: ResolvedOverrides,
        working_days: int,
        assignment: Optional[ClientAssignment] = None,
        payment_status: str = "unpaid",
    ) -> PayrollLine:
        raise NotImplementedError
