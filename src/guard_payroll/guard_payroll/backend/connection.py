from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Optional

import httpx


@dataclass
class BackendConfig:
    base_url: str
    token: Optional[str] = None
    timeout: float = 10.0


class BackendConnection:
    """Singleton-like HTTP client factory for the REST backend.

    Note: One pooled httpx.Client is shared by every repository (httpx.Client is thread-safe).
    """

    _instance: Optional["BackendConnection"] = None

    def __init__(self, config: BackendConfig, *, transport: Optional[httpx.BaseTransport] = None):
        self._config = config
        self._transport = transport
        self._client: Optional[httpx.Client] = None
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls, config: BackendConfig) -> "BackendConnection":
        if cls._instance is None:
            cls._instance = BackendConnection(config)
        return cls._instance

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    def headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._config.token:
            headers["Authorization"] = f"Bearer {self._config.token}"
        return headers

    def client(self) -> httpx.Client:
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(
                    base_url=self.base_url,
                    headers=self.headers(),
                    timeout=float(self._config.timeout),
                    transport=self._transport,
                )
            return self._client

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
