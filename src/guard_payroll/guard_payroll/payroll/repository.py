from __future__ import annotations

from typing import Protocol, Sequence


class PaymentStatusRepository(Protocol):
    """Per-month paid/unpaid flags. Orthogonal to the pay computation."""

    def list_for_month(self, *, month: str) -> dict[str, str]:
        """Employee id -> status for a YYYY-MM month."""

        raise NotImplementedError

    def upsert(self, *, month: str, employee_id: str, status: str) -> None:
        raise NotImplementedError

    def bulk_upsert(self, *, month: str, employee_ids: Sequence[str], status: str) -> int:
        raise NotImplementedError
