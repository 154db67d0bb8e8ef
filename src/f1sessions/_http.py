"""Low-level HTTP transport layer wrapping httpx."""

from __future__ import annotations

from typing import Any

import httpx

from f1sessions.exceptions import (
    ProviderAPIError,
    ProviderConnectionError,
    ProviderTimeoutError,
    ProviderValidationError,
)

OPENF1_BASE_URL = "https://api.openf1.org/v1"
JOLPICA_BASE_URL = "https://api.jolpi.ca/ergast/f1"
DEFAULT_TIMEOUT = 30.0


def translate_transport_error(exc: httpx.TransportError) -> Exception:
    """Map an httpx transport failure onto the package's exception types."""
    if isinstance(exc, httpx.TimeoutException):
        return ProviderTimeoutError(str(exc))
    return ProviderConnectionError(str(exc))


def parse_response(response: httpx.Response) -> Any | None:
    """Return parsed JSON, or None when the provider has nothing for us.

    HTTP 429 is the only error status treated as a failure: every other
    non-2xx status means the data is absent (not published yet, unknown
    round, provider-side outage of that endpoint).
    """
    if response.status_code == 429:
        raise ProviderAPIError(status_code=429, message=response.text)
    if response.status_code >= 400:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise ProviderValidationError(f"Invalid JSON from {response.url}: {exc}") from exc


def build_client(base_url: str, timeout: float = DEFAULT_TIMEOUT) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout,
        headers={"Accept": "application/json"},
    )


class AsyncTransport:
    """Asynchronous transport for providers that are not rate limited."""

    def __init__(
        self,
        base_url: str = JOLPICA_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or build_client(base_url, timeout)

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> Any | None:
        """Perform an async GET request and return parsed JSON or None."""
        try:
            response = await self._client.get(endpoint, params=params)
        except httpx.TransportError as exc:
            raise translate_transport_error(exc) from exc
        return parse_response(response)

    async def close(self) -> None:
        await self._client.aclose()
