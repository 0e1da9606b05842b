from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import httpx

from ..core.exceptions import AuthenticationError, BackendError
from .connection import BackendConnection

logger = logging.getLogger(__name__)


def _error_message(resp: httpx.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(data, dict):
        return str(data.get("message") or data.get("error") or data.get("detail") or data)
    return str(data)


def request_json(
    conn: BackendConnection,
    method: str,
    path: str,
    *,
    params: Optional[Mapping[str, Any]] = None,
    payload: Any = None,
) -> Any:
    """Send one request and return the decoded JSON body (None for 204)."""
    try:
        resp = conn.client().request(method, path, params=params, json=payload)
    except httpx.HTTPError as exc:
        logger.warning("%s %s failed: %s", method, path, exc)
        raise BackendError(f"{method} {path} failed: {exc}") from exc

    if resp.status_code in (401, 403):
        raise AuthenticationError(f"{method} {path} unauthorized", status_code=resp.status_code)
    if resp.is_error:
        message = _error_message(resp)
        logger.warning("%s %s returned %s: %s", method, path, resp.status_code, message)
        raise BackendError(f"{method} {path} failed: {message}", status_code=resp.status_code)
    if resp.status_code == 204 or not resp.content:
        return None
    try:
        return resp.json()
    except ValueError as exc:
        raise BackendError(f"{method} {path} returned invalid JSON", status_code=resp.status_code) from exc


def get_json(conn: BackendConnection, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
    return request_json(conn, "GET", path, params=params)


def put_json(conn: BackendConnection, path: str, payload: Any) -> Any:
    return request_json(conn, "PUT", path, payload=payload)


def unwrap_list(data: Any, *keys: str) -> list[dict[str, Any]]:
    """Accept either a bare JSON list or an object wrapping it under one of `keys`."""
    if isinstance(data, dict):
        for key in keys:
            if isinstance(data.get(key), list):
                data = data[key]
                break
    if not isinstance(data, list):
        return []
    return [row for row in data if isinstance(row, dict)]
