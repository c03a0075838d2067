"""HTTP transport returning ``(status, payload)`` pairs."""

import logging
from typing import Any, Protocol

import httpx

logger = logging.getLogger(__name__)

# Reported when no HTTP response was received at all.
STATUS_NO_RESPONSE = 0


class Transport(Protocol):
    """Minimal GET capability used by data sources."""

    async def get(
        self, path: str, params: dict[str, Any] | None = None
    ) -> tuple[int, Any | None]:
        """Return the HTTP status and decoded JSON body (None if unavailable)."""
        ...


class HttpxTransport:
    """``Transport`` backed by a shared ``httpx.AsyncClient``."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 15.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout)
        return self._client

    async def get(
        self, path: str, params: dict[str, Any] | None = None
    ) -> tuple[int, Any | None]:
        try:
            resp = await self._get_client().get(path, params=params)
        except httpx.RequestError as e:
            logger.warning("GET %s failed: %s", path, e)
            return STATUS_NO_RESPONSE, None

        if not resp.is_success:
            return resp.status_code, None

        try:
            return resp.status_code, resp.json()
        except ValueError as e:
            logger.warning("GET %s returned undecodable body: %s", path, e)
            return resp.status_code, None

    async def aclose(self) -> None:
        """Close the underlying client if this transport created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
