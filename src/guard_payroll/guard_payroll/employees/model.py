from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import PAYROLL_ELIGIBLE_STATUSES


@dataclass(frozen=True)
class Employee:
    """Domain entity: employee master data as far as payroll needs it."""

    db_id: int
    employee_id: str
    full_name: str
    status: str
    total_salary: float = 0.0
    basic_salary: float = 0.0
    fss_no: str = ""
    department: str = "-"
    designation: str = "-"
    account_no: str = "-"
    mobile_no: str = "-"

    @property
    def salary(self) -> float:
        """Monthly salary used for pay: total salary, else basic salary."""
        return self.total_salary or self.basic_salary

    @property
    def is_payroll_eligible(self) -> bool:
        return self.status in PAYROLL_ELIGIBLE_STATUSES
