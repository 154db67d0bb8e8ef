"""Rate-limited fetch gate for the lap-telemetry provider.

Every request to the lap-telemetry provider goes through a :class:`RateGate`,
which spaces request starts at least ``min_interval`` seconds apart and retries
rate-limit responses and transport failures with exponential backoff.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx

from f1sessions._http import translate_transport_error

MIN_INTERVAL = 0.6
MAX_RETRIES = 4
BASE_DELAY = 2.0

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[Any]]


@dataclass(frozen=True)
class RetryPolicy:
    """Exponential backoff settings.

    Usage:
        RetryPolicy().delay_for(1)  # 2.0
        RetryPolicy().delay_for(3)  # 8.0
    """

    max_retries: int = MAX_RETRIES
    base_delay: float = BASE_DELAY

    def delay_for(self, attempt: int) -> float:
        """Delay before retry number *attempt* (1-based)."""
        return self.base_delay * 2 ** (attempt - 1)


class RateLimiter:
    """Spaces request starts at least ``min_interval`` seconds apart.

    The next start slot is reserved before awaiting, so coroutines sharing one
    event loop are serialised without a lock. Each client owns its limiter;
    threads must not share one.
    """

    def __init__(
        self,
        min_interval: float = MIN_INTERVAL,
        clock: Clock = time.monotonic,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last_start: float | None = None

    @property
    def last_start(self) -> float | None:
        return self._last_start

    async def acquire(self) -> None:
        """Wait until the caller may start its request."""
        now = self._clock()
        start = now
        if self._last_start is not None:
            start = max(now, self._last_start + self.min_interval)
        self._last_start = start
        if start > now:
            await self._sleep(start - now)


class RateGate:
    """Serialises and retries GET requests against one provider."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        limiter: RateLimiter | None = None,
        policy: RetryPolicy | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._client = client
        self.limiter = limiter or RateLimiter()
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    async def fetch(self, endpoint: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """GET *endpoint*, retrying HTTP 429 and transport errors.

        Statuses other than 429 are returned unmodified. Once retries are
        exhausted the last 429 response is returned, or the last transport
        error is raised as a ProviderConnectionError / ProviderTimeoutError.
        """
        attempt = 0
        while True:
            await self.limiter.acquire()
            try:
                response = await self._client.get(endpoint, params=params)
            except httpx.TransportError as exc:
                if attempt >= self.policy.max_retries:
                    raise translate_transport_error(exc) from exc
            else:
                if response.status_code != 429 or attempt >= self.policy.max_retries:
                    return response
            attempt += 1
            await self._sleep(self.policy.delay_for(attempt))

    async def close(self) -> None:
        await self._client.aclose()
