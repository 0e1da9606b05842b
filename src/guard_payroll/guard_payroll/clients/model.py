from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Client:
    client_id: int
    name: str


@dataclass(frozen=True)
class ClientAssignment:
    """Active placement of one guard at one client site."""

    employee_id: str
    client_id: Optional[int]
    client_name: str
    site_name: str
