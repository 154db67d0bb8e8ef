"""Direct-classification fetchers for the Ergast-compatible provider.

Qualifying, sprint and race classifications, championship standings and the
latest race are published ready-made; these adapters map them onto the
package's row models. Every fetcher returns None when nothing is published.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from f1sessions._http import AsyncTransport
from f1sessions.exceptions import ProviderValidationError
from f1sessions.identity import IdentityNormalizer, RosterEntry
from f1sessions.models.classification import (
    ConstructorStandingRow,
    DriverStandingRow,
    QualifyingRow,
    RaceRow,
    SprintRow,
)
from f1sessions.models.ergast import ErgastResponse, Race, RaceResult, StandingsList
from f1sessions.timing import (
    GAP_PLACEHOLDER,
    format_gap,
    short_status,
    time_to_ms,
)


def _parse(data: Any) -> ErgastResponse:
    try:
        return ErgastResponse.model_validate(data)
    except ValidationError as exc:
        raise ProviderValidationError(f"Failed to validate classification response: {exc}") from exc


def race_gap(result: RaceResult, leader: RaceResult | None) -> str:
    """Gap column for a race or sprint finisher."""
    if result.position == 1:
        return GAP_PLACEHOLDER
    millis = result.time.millis if result.time else None
    leader_millis = leader.time.millis if leader and leader.time else None
    if millis and leader_millis:
        return format_gap(leader_millis, millis)
    text = result.time.time if result.time else None
    if text and text.startswith("+"):
        return text
    if result.status and result.status != "Finished":
        return short_status(result.status)
    return GAP_PLACEHOLDER


def _timed_leader(results: list[RaceResult]) -> RaceResult | None:
    for result in results:
        if result.time and (result.time.millis or result.time.time):
            return result
    return None


class ClassificationClient:
    """Thin adapter over the classification provider's JSON endpoints."""

    def __init__(self, transport: AsyncTransport, normalizer: IdentityNormalizer) -> None:
        self._transport = transport
        self._normalizer = normalizer

    async def _race(self, path: str) -> Race | None:
        data = await self._transport.get(path)
        if data is None:
            return None
        races = _parse(data).races
        return races[0] if races else None

    async def _standings(self, path: str) -> StandingsList | None:
        data = await self._transport.get(path)
        if data is None:
            return None
        return _parse(data).standings

    def _driver(self, result: Any) -> str | None:
        constructor = result.constructor.name if result.constructor else None
        identity = result.driver.to_identity() if result.driver else None
        return self._normalizer.resolve_driver(identity, constructor)

    def _team(self, result: Any) -> str:
        return self._normalizer.resolve_team(result.constructor.name if result.constructor else None)

    def _finisher(self, result: RaceResult, index: int, leader: RaceResult | None) -> dict[str, Any]:
        return {
            "position": result.position or index,
            "driver": self._driver(result),
            "constructor": self._team(result),
            "time": (result.time.time if result.time else None) or GAP_PLACEHOLDER,
            "gap": race_gap(result, leader),
            "points": result.points or 0,
            "status": result.status,
        }

    async def qualifying(self, season: int, round: int) -> list[QualifyingRow] | None:
        race = await self._race(f"/{season}/{round}/qualifying.json")
        if race is None or not race.qualifying_results:
            return None
        results = race.qualifying_results
        leader_ms = time_to_ms(results[0].best_time)
        return [
            QualifyingRow(
                position=result.position or index,
                driver=self._driver(result),
                constructor=self._team(result),
                time=result.best_time or GAP_PLACEHOLDER,
                gap=format_gap(leader_ms, time_to_ms(result.best_time)),
                q1=result.q1 or GAP_PLACEHOLDER,
                q2=result.q2 or GAP_PLACEHOLDER,
                q3=result.q3 or GAP_PLACEHOLDER,
            )
            for index, result in enumerate(results, start=1)
        ]

    async def sprint(self, season: int, round: int) -> list[SprintRow] | None:
        race = await self._race(f"/{season}/{round}/sprint.json")
        if race is None or not race.sprint_results:
            return None
        leader = _timed_leader(race.sprint_results)
        return [
            SprintRow(**self._finisher(result, index, leader))
            for index, result in enumerate(race.sprint_results, start=1)
        ]

    async def race(self, season: int, round: int) -> list[RaceRow] | None:
        race = await self._race(f"/{season}/{round}/results.json")
        if race is None or not race.results:
            return None
        leader = _timed_leader(race.results)
        return [
            RaceRow(
                **self._finisher(result, index, leader),
                fastest_lap=bool(result.fastest_lap and result.fastest_lap.rank == 1),
            )
            for index, result in enumerate(race.results, start=1)
        ]

    async def last_race(self) -> Race | None:
        """Most recent race with a published result, in the current season."""
        return await self._race("/current/last/results.json")

    async def driver_standings(self, season: int | str = "current") -> list[DriverStandingRow] | None:
        standings = await self._standings(f"/{season}/driverStandings.json")
        if standings is None or not standings.driver_standings:
            return None
        rows = []
        for standing in standings.driver_standings:
            constructor = standing.constructors[0].name if standing.constructors else None
            identity = standing.driver.to_identity() if standing.driver else None
            rows.append(
                DriverStandingRow(
                    position=standing.position,
                    points=standing.points or 0,
                    wins=standing.wins or 0,
                    driver=self._normalizer.resolve_driver(identity, constructor),
                    constructor=self._normalizer.resolve_team(constructor),
                )
            )
        return rows

    async def constructor_standings(
        self, season: int | str = "current",
    ) -> list[ConstructorStandingRow] | None:
        standings = await self._standings(f"/{season}/constructorStandings.json")
        if standings is None or not standings.constructor_standings:
            return None
        return [
            ConstructorStandingRow(
                position=standing.position,
                points=standing.points or 0,
                wins=standing.wins or 0,
                constructor=self._team(standing),
            )
            for standing in standings.constructor_standings
        ]

    async def roster(self, season: int | str = "current") -> list[RosterEntry] | None:
        """Roster entries for every driver in the season's driver standings.

        Drivers without a permanent number or a constructor are skipped.
        """
        standings = await self._standings(f"/{season}/driverStandings.json")
        if standings is None or not standings.driver_standings:
            return None
        entries = []
        for standing in standings.driver_standings:
            driver = standing.driver
            if driver is None or driver.permanent_number is None or not standing.constructors:
                continue
            entries.append(
                RosterEntry(
                    permanent_number=driver.permanent_number,
                    given_name=driver.given_name or "",
                    family_name=driver.family_name or "",
                    current_team=self._normalizer.resolve_team(standing.constructors[0].name),
                    code=driver.code,
                )
            )
        return entries or None

    async def sync_roster(self, season: int | str = "current") -> list[RosterEntry] | None:
        """Merge the season's standings roster into the identity normalizer."""
        entries = await self.roster(season)
        if entries is not None:
            self._normalizer.merge_roster(entries)
        return entries

    async def close(self) -> None:
        await self._transport.close()
