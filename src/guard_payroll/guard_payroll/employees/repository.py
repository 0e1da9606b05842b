from __future__ import annotations

from typing import Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Read access to employee master data.

    Note: returns every status; the payroll engine applies its own eligibility filter.
    """

    def list_employees(self, *, limit: int) -> Sequence[Employee]:
        raise NotImplementedError
