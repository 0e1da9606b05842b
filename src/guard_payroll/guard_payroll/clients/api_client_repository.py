from __future__ import annotations

from typing import Sequence

from ..backend.api_base import get_json, unwrap_list
from ..backend.connection import BackendConnection
from ..common.validators import as_optional_int, as_text
from ..core.constants import UNASSIGNED_CLIENT_NAME, UNASSIGNED_SITE_NAME
from .model import Client, ClientAssignment
from .repository import ClientRepository


class ApiClientRepository(ClientRepository):
    def __init__(self, conn: BackendConnection):
        self._conn = conn

    def list_clients(self) -> Sequence[Client]:
        data = get_json(self._conn, "/api/client-management/clients")
        clients = []
        for r in unwrap_list(data, "clients", "data"):
            client_id = as_optional_int(r.get("id"))
            if client_id is not None:
                clients.append(Client(client_id=client_id, name=as_text(r.get("name"))))
        return clients

    def list_active_assignments(self) -> Sequence[ClientAssignment]:
        data = get_json(self._conn, "/api/client-management/assignments/active")
        return [
            ClientAssignment(
                employee_id=as_text(r.get("employee_id")),
                client_id=as_optional_int(r.get("client_id")),
                client_name=as_text(r.get("client_name"), UNASSIGNED_CLIENT_NAME),
                site_name=as_text(r.get("site_name"), UNASSIGNED_SITE_NAME),
            )
            for r in unwrap_list(data, "assignments", "data")
        ]
