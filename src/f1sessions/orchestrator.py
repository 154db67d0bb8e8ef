"""Assemble every session of a race weekend with per-session fault isolation."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import Any, TypeVar

from f1sessions._logging import get_logger, log_service_call
from f1sessions.builder import ClassificationBuilder
from f1sessions.classifications import ClassificationClient
from f1sessions.identity import RosterEntry
from f1sessions.models.classification import (
    ConstructorStandingRow,
    DriverStandingRow,
    LapTimedRow,
    LastRaceSessions,
    QualifyingRow,
    RaceRow,
    SessionLabel,
    SprintRow,
    WeekendSessions,
)
from f1sessions.resolver import SessionResolver

SPRINT_WEEKEND = (SessionLabel.FP1, SessionLabel.SPRINT_QUALIFYING)
CONVENTIONAL_WEEKEND = (SessionLabel.FP1, SessionLabel.FP2, SessionLabel.FP3)

T = TypeVar("T")

Rows = list[Any]


class SessionOrchestrator:
    """Top-level entry point for session classifications.

    The per-session coroutines (``fetch_qualifying`` ... ``fetch_fp3``) return
    None for absent data but let transient provider failures propagate.
    ``fetch_all_sessions`` catches those per session and never raises.
    """

    def __init__(
        self,
        classifications: ClassificationClient,
        resolver: SessionResolver,
        builder: ClassificationBuilder,
    ) -> None:
        self._classifications = classifications
        self._resolver = resolver
        self._builder = builder

    # ── Single sessions ───────────────────────────────────────

    async def fetch_qualifying(self, season: int, round: int) -> list[QualifyingRow] | None:
        return await self._classifications.qualifying(season, round)

    async def fetch_sprint(self, season: int, round: int) -> list[SprintRow] | None:
        return await self._classifications.sprint(season, round)

    async def fetch_race(self, season: int, round: int) -> list[RaceRow] | None:
        return await self._classifications.race(season, round)

    async def fetch_lap_timed(
        self, season: int, round: int, label: SessionLabel,
    ) -> list[LapTimedRow] | None:
        """Resolve the session on the telemetry provider and rank personal bests."""
        session_key = await self._resolver.resolve(season, round, label)
        if session_key is None:
            return None
        return await self._builder.build(session_key)

    async def fetch_fp1(self, season: int, round: int) -> list[LapTimedRow] | None:
        return await self.fetch_lap_timed(season, round, SessionLabel.FP1)

    async def fetch_fp2(self, season: int, round: int) -> list[LapTimedRow] | None:
        return await self.fetch_lap_timed(season, round, SessionLabel.FP2)

    async def fetch_fp3(self, season: int, round: int) -> list[LapTimedRow] | None:
        return await self.fetch_lap_timed(season, round, SessionLabel.FP3)

    async def fetch_sprint_qualifying(self, season: int, round: int) -> list[LapTimedRow] | None:
        return await self.fetch_lap_timed(season, round, SessionLabel.SPRINT_QUALIFYING)

    async def fetch_session(self, season: int, round: int, label: SessionLabel) -> Rows | None:
        if label is SessionLabel.QUALIFYING:
            return await self.fetch_qualifying(season, round)
        if label is SessionLabel.SPRINT:
            return await self.fetch_sprint(season, round)
        if label is SessionLabel.RACE:
            return await self.fetch_race(season, round)
        return await self.fetch_lap_timed(season, round, label)

    # ── Aggregate ─────────────────────────────────────────────

    async def _guarded(self, season: int, round: int, label: SessionLabel) -> Rows | None:
        """Fetch one session, degrading any failure to None for that session only."""
        try:
            rows = await self.fetch_session(season, round, label)
        except Exception as exc:
            get_logger().error(
                "FAILED: %s %s R%s -> %s: %s",
                label.value, season, round, type(exc).__name__, exc,
            )
            return None
        logger = get_logger()
        if rows is None:
            logger.warning("UNAVAILABLE: %s %s R%s", label.value, season, round)
        else:
            logger.info("AVAILABLE: %s %s R%s -> %d rows", label.value, season, round, len(rows))
        return rows

    @log_service_call
    async def fetch_all_sessions(self, season: int, round: int) -> WeekendSessions:
        """Every session of a weekend; never raises.

        Qualifying, sprint and race are fetched together first. A published
        sprint marks a sprint weekend (FP1 + sprint qualifying); otherwise the
        weekend is conventional (FP1, FP2, FP3). Labels outside the detected
        format are never requested and stay None.
        """
        qualifying, sprint, race = await asyncio.gather(
            self._guarded(season, round, SessionLabel.QUALIFYING),
            self._guarded(season, round, SessionLabel.SPRINT),
            self._guarded(season, round, SessionLabel.RACE),
        )
        extra = SPRINT_WEEKEND if sprint is not None else CONVENTIONAL_WEEKEND
        extra_rows = await asyncio.gather(
            *(self._guarded(season, round, label) for label in extra)
        )
        return WeekendSessions(
            qualifying=qualifying,
            sprint=sprint,
            race=race,
            **{label.value: rows for label, rows in zip(extra, extra_rows)},
        )

    async def are_sessions_available(self, season: int, round: int) -> bool:
        sessions = await self.fetch_all_sessions(season, round)
        return sessions.any_available()

    # ── Latest race and standings ─────────────────────────────

    async def _quietly(self, description: str, call: Awaitable[T]) -> T | None:
        try:
            return await call
        except Exception as exc:
            get_logger().error("FAILED: %s -> %s: %s", description, type(exc).__name__, exc)
            return None

    @log_service_call
    async def fetch_last_race_sessions(self) -> LastRaceSessions | None:
        """Sessions of the latest weekend whose race result is published."""
        race = await self._quietly("last race", self._classifications.last_race())
        if race is None or race.season is None or race.round is None:
            get_logger().warning("UNAVAILABLE: last race")
            return None
        sessions = await self.fetch_all_sessions(race.season, race.round)
        return LastRaceSessions(
            season=race.season,
            round=race.round,
            race_name=race.race_name,
            date=race.date,
            sessions=sessions,
        )

    @log_service_call
    async def sync_roster(self, season: int | str = "current") -> list[RosterEntry] | None:
        """Refresh driver identities from the season's driver standings.

        Entries merge into the static roster; on failure the roster is left
        as it was.
        """
        entries = await self._quietly(
            f"roster {season}", self._classifications.sync_roster(season),
        )
        if entries is None:
            get_logger().warning("UNAVAILABLE: roster %s", season)
        else:
            get_logger().info("AVAILABLE: roster %s -> %d drivers", season, len(entries))
        return entries

    @log_service_call
    async def fetch_driver_standings(
        self, season: int | str = "current",
    ) -> list[DriverStandingRow] | None:
        return await self._quietly(
            f"driver standings {season}", self._classifications.driver_standings(season),
        )

    @log_service_call
    async def fetch_constructor_standings(
        self, season: int | str = "current",
    ) -> list[ConstructorStandingRow] | None:
        return await self._quietly(
            f"constructor standings {season}",
            self._classifications.constructor_standings(season),
        )
