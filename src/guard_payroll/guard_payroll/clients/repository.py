from __future__ import annotations

from typing import Protocol, Sequence

from .model import Client, ClientAssignment


class ClientRepository(Protocol):
    def list_clients(self) -> Sequence[Client]:
        raise NotImplementedError

    def list_active_assignments(self) -> Sequence[ClientAssignment]:
        raise NotImplementedError
