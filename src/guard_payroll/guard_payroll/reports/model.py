from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class SiteSummary:
    site_name: str
    guard_count: int
    total_net: int


@dataclass(frozen=True)
class ClientSummary:
    client_id: Optional[int]
    client_name: str
    guard_count: int
    total_net: int
    sites: tuple[SiteSummary, ...]


@dataclass(frozen=True)
class ComparisonRow:
    """One (client, site) row of the period-over-period report."""

    client_id: Optional[int]
    client_name: str
    site_name: str
    current_employees: int
    prev_employees: int
    current_amount: int
    prev_amount: int

    @property
    def difference(self) -> int:
        return self.current_amount - self.prev_amount
