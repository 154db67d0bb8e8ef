"""Public client for session classifications."""

from __future__ import annotations

from typing import Iterable

from f1sessions._http import (
    DEFAULT_TIMEOUT,
    JOLPICA_BASE_URL,
    OPENF1_BASE_URL,
    AsyncTransport,
    build_client,
)
from f1sessions.builder import ClassificationBuilder
from f1sessions.classifications import ClassificationClient
from f1sessions.gate import MIN_INTERVAL, RateGate, RateLimiter, RetryPolicy
from f1sessions.identity import DEFAULT_ROSTER, IdentityNormalizer, RosterEntry
from f1sessions.models.classification import WeekendSessions
from f1sessions.orchestrator import SessionOrchestrator
from f1sessions.resolver import SessionResolver
from f1sessions.telemetry import TelemetryClient


class F1SessionsClient(SessionOrchestrator):
    """Asynchronous client wiring both providers, the rate gate and the normalizer.

    Usage:
        async with F1SessionsClient() as f1:
            weekend = await f1.fetch_all_sessions(2025, 6)
            if weekend.has_race:
                print(weekend.race[0].driver)

    Each client owns its own rate limiter, so separate clients never throttle
    each other.
    """

    def __init__(
        self,
        openf1_base_url: str = OPENF1_BASE_URL,
        jolpica_base_url: str = JOLPICA_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        min_interval: float = MIN_INTERVAL,
        retry_policy: RetryPolicy | None = None,
        roster: Iterable[RosterEntry] = DEFAULT_ROSTER,
        team_aliases: dict[str, tuple[str, ...]] | None = None,
    ) -> None:
        self.normalizer = IdentityNormalizer(roster, team_aliases)
        self.gate = RateGate(
            build_client(openf1_base_url, timeout),
            limiter=RateLimiter(min_interval),
            policy=retry_policy,
        )
        self.telemetry = TelemetryClient(self.gate)
        self.classifications = ClassificationClient(
            AsyncTransport(base_url=jolpica_base_url, timeout=timeout),
            self.normalizer,
        )
        super().__init__(
            self.classifications,
            SessionResolver(self.telemetry),
            ClassificationBuilder(self.telemetry, self.normalizer),
        )

    async def __aenter__(self) -> F1SessionsClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close both underlying HTTP connections."""
        await self.telemetry.close()
        await self.classifications.close()


async def fetch_all_sessions(season: int, round: int) -> WeekendSessions:
    """One-shot convenience wrapper around :meth:`F1SessionsClient.fetch_all_sessions`."""
    async with F1SessionsClient() as f1:
        return await f1.fetch_all_sessions(season, round)
