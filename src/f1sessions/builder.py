"""Rebuild a session classification from raw lap records.

Practice and sprint-qualifying sessions have no published classification on
either provider, so the order is reconstructed from each driver's personal
best lap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from f1sessions.identity import IdentityNormalizer
from f1sessions.models.classification import LapTimedRow
from f1sessions.models.driver import Driver, DriverIdentity
from f1sessions.models.lap import Lap
from f1sessions.telemetry import TelemetryClient
from f1sessions.timing import GAP_PLACEHOLDER, format_delta, format_lap_time


@dataclass(frozen=True)
class PersonalBest:
    driver_number: int
    best_lap: float
    laps: int


def personal_bests(laps: Iterable[Lap]) -> list[PersonalBest] | None:
    """Fastest timed lap per driver, fastest first; None if nobody set a time."""
    best: dict[int, float] = {}
    counts: dict[int, int] = {}
    for lap in laps:
        # pit-out and untimed laps are not representative attempts
        if lap.driver_number is None or not lap.lap_duration or lap.is_pit_out_lap:
            continue
        number, duration = lap.driver_number, lap.lap_duration
        counts[number] = counts.get(number, 0) + 1
        if number not in best or duration < best[number]:
            best[number] = duration
    if not best:
        return None
    return [
        PersonalBest(driver_number=number, best_lap=duration, laps=counts[number])
        for number, duration in sorted(best.items(), key=lambda item: (item[1], item[0]))
    ]


def build_rows(
    bests: list[PersonalBest],
    drivers: Iterable[Driver],
    normalizer: IdentityNormalizer,
) -> list[LapTimedRow]:
    """Turn ranked personal bests into classification rows."""
    snapshot = {d.driver_number: d for d in drivers if d.driver_number is not None}
    leader = bests[0].best_lap
    rows = []
    for position, pb in enumerate(bests, start=1):
        driver = snapshot.get(pb.driver_number)
        if driver is not None:
            name = normalizer.resolve_driver(driver.to_identity(), driver.team_name)
            team = driver.team_name
        else:
            name = normalizer.resolve_driver(DriverIdentity(number=pb.driver_number))
            team = None
        if team is None:
            entry = normalizer.roster_entry(pb.driver_number)
            team = entry.current_team if entry else None
        rows.append(
            LapTimedRow(
                position=position,
                driver=name,
                constructor=normalizer.resolve_team(team),
                time=format_lap_time(pb.best_lap),
                gap=GAP_PLACEHOLDER if position == 1 else format_delta(pb.best_lap - leader),
                best_lap=pb.best_lap,
                laps=pb.laps,
            )
        )
    return rows


class ClassificationBuilder:
    """Fetches a session's laps and driver snapshot and ranks personal bests."""

    def __init__(self, telemetry: TelemetryClient, normalizer: IdentityNormalizer) -> None:
        self._telemetry = telemetry
        self._normalizer = normalizer

    async def build(self, session_key: int) -> list[LapTimedRow] | None:
        laps = await self._telemetry.laps(session_key)
        bests = personal_bests(laps or [])
        if bests is None:
            return None
        drivers = await self._telemetry.drivers(session_key)
        return build_rows(bests, drivers or [], self._normalizer)
