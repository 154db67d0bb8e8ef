"""Shared test fixtures and sample API responses."""

from __future__ import annotations

import logging
from typing import Any

import pytest

OPENF1_URL = "https://api.openf1.org/v1"
JOLPICA_URL = "https://api.jolpi.ca/ergast/f1"


def make_session(
    session_key: int,
    meeting_key: int,
    session_name: str,
    date_start: str | None,
    session_type: str | None = None,
) -> dict[str, Any]:
    return {
        "circuit_short_name": "Sakhir",
        "country_name": "Bahrain",
        "date_end": None,
        "date_start": date_start,
        "location": "Sakhir",
        "meeting_key": meeting_key,
        "session_key": session_key,
        "session_name": session_name,
        "session_type": session_type or session_name,
        "year": 2024,
    }


def make_lap(
    driver_number: int,
    lap_duration: float | None,
    lap_number: int = 1,
    is_pit_out_lap: bool = False,
    session_key: int = 9001,
) -> dict[str, Any]:
    return {
        "driver_number": driver_number,
        "is_pit_out_lap": is_pit_out_lap,
        "lap_duration": lap_duration,
        "lap_number": lap_number,
        "session_key": session_key,
    }


def ergast_races(*races: dict[str, Any]) -> dict[str, Any]:
    return {"MRData": {"RaceTable": {"Races": list(races)}}}


def ergast_driver(driver_id: str, number: str | None, given: str, family: str) -> dict[str, Any]:
    driver = {"driverId": driver_id, "givenName": given, "familyName": family}
    if number is not None:
        driver["permanentNumber"] = number
    return driver


VERSTAPPEN = ergast_driver("max_verstappen", "33", "Max", "Verstappen")
NORRIS = ergast_driver("norris", "4", "Lando", "Norris")
HULKENBERG = ergast_driver("hulkenberg", "27", "Nico", "Hülkenberg")

RED_BULL = {"constructorId": "red_bull", "name": "Red Bull"}
MCLAREN = {"constructorId": "mclaren", "name": "McLaren"}
SAUBER = {"constructorId": "sauber", "name": "Sauber"}


# Season 2024 on the telemetry provider: three meetings listed out of order.
SEASON_SESSIONS = [
    make_session(9201, 1230, "Practice 1", "2024-03-22T01:30:00+00:00"),
    make_session(9202, 1230, "Practice 2", "2024-03-22T05:00:00+00:00"),
    make_session(9203, 1230, "Practice 3", "2024-03-23T01:30:00+00:00"),
    make_session(9204, 1230, "Qualifying", "2024-03-23T05:00:00+00:00"),
    make_session(9205, 1230, "Race", "2024-03-24T04:00:00+00:00"),
    make_session(9001, 1229, "Practice 1", "2024-02-29T11:30:00+00:00"),
    make_session(9002, 1229, "Practice 2", "2024-02-29T15:00:00+00:00"),
    make_session(9003, 1229, "Practice 3", "2024-03-01T12:30:00+00:00"),
    make_session(9004, 1229, "Qualifying", "2024-03-01T16:00:00+00:00"),
    make_session(9005, 1229, "Race", "2024-03-02T15:00:00+00:00"),
    make_session(9101, 1231, "Practice 1", "2024-03-08T13:30:00+00:00"),
    make_session(9102, 1231, "Sprint Qualifying", "2024-03-08T17:30:00+00:00", "Qualifying"),
    make_session(9103, 1231, "Sprint", "2024-03-09T14:00:00+00:00", "Race"),
    make_session(9104, 1231, "Qualifying", "2024-03-09T18:00:00+00:00"),
    make_session(9105, 1231, "Race", "2024-03-10T17:00:00+00:00"),
    # not offered on a real sprint weekend; present to prove it is never requested
    make_session(9106, 1231, "Practice 2", "2024-03-08T15:00:00+00:00"),
]

SAMPLE_DRIVERS = [
    {
        "broadcast_name": "M VERSTAPPEN",
        "driver_number": 1,
        "first_name": "Max",
        "full_name": "Max VERSTAPPEN",
        "last_name": "Verstappen",
        "name_acronym": "VER",
        "session_key": 9001,
        "team_name": "Red Bull Racing",
    },
    {
        "broadcast_name": "L NORRIS",
        "driver_number": 4,
        "first_name": "Lando",
        "full_name": "Lando NORRIS",
        "last_name": "Norris",
        "name_acronym": "NOR",
        "session_key": 9001,
        "team_name": "McLaren",
    },
    {
        "broadcast_name": "N HULKENBERG",
        "driver_number": 27,
        "first_name": "Nico",
        "full_name": "Nico HULKENBERG",
        "last_name": "Hulkenberg",
        "name_acronym": "HUL",
        "session_key": 9001,
        "team_name": "Stake F1 Team Kick Sauber",
    },
]

SAMPLE_LAPS = [
    make_lap(1, 92.5, lap_number=2),
    make_lap(1, 91.0, lap_number=1, is_pit_out_lap=True),
    make_lap(1, 90.8, lap_number=3),
    make_lap(4, 91.2, lap_number=2),
    make_lap(4, None, lap_number=3),
    make_lap(27, 93.1, lap_number=2),
]

SAMPLE_QUALIFYING = ergast_races({
    "season": "2024",
    "round": "1",
    "raceName": "Bahrain Grand Prix",
    "date": "2024-03-02",
    "QualifyingResults": [
        {
            "number": "1", "position": "1", "Driver": VERSTAPPEN, "Constructor": RED_BULL,
            "Q1": "1:30.031", "Q2": "1:29.374", "Q3": "1:29.179",
        },
        {
            "number": "4", "position": "2", "Driver": NORRIS, "Constructor": MCLAREN,
            "Q1": "1:30.143", "Q2": "1:29.941", "Q3": "1:29.407",
        },
        {
            "number": "27", "position": "3", "Driver": HULKENBERG, "Constructor": SAUBER,
            "Q1": "1:30.502",
        },
    ],
})

SAMPLE_RACE = ergast_races({
    "season": "2024",
    "round": "1",
    "raceName": "Bahrain Grand Prix",
    "date": "2024-03-02",
    "Results": [
        {
            "number": "1", "position": "1", "points": "26", "Driver": VERSTAPPEN,
            "Constructor": RED_BULL, "grid": "1", "laps": "57", "status": "Finished",
            "Time": {"millis": "5504742", "time": "1:31:44.742"},
            "FastestLap": {"rank": "1"},
        },
        {
            "number": "4", "position": "2", "points": "18", "Driver": NORRIS,
            "Constructor": MCLAREN, "grid": "2", "laps": "57", "status": "Finished",
            "Time": {"millis": "5527199", "time": "+22.457"},
            "FastestLap": {"rank": "3"},
        },
        {
            "number": "27", "position": "3", "points": "0", "Driver": HULKENBERG,
            "Constructor": SAUBER, "grid": "15", "laps": "56", "status": "+1 Lap",
        },
        {
            "number": "2", "position": "4", "points": "0",
            "Driver": ergast_driver("sargeant", "2", "Logan", "Sargeant"),
            "Constructor": {"constructorId": "williams", "name": "Williams"},
            "grid": "20", "laps": "30", "status": "Retired",
        },
    ],
})

SAMPLE_SPRINT = ergast_races({
    "season": "2024",
    "round": "2",
    "raceName": "Chinese Grand Prix",
    "date": "2024-03-10",
    "SprintResults": [
        {
            "number": "1", "position": "1", "points": "8", "Driver": VERSTAPPEN,
            "Constructor": RED_BULL, "status": "Finished",
            "Time": {"millis": "1924660", "time": "32:04.660"},
        },
        {
            "number": "4", "position": "2", "points": "7", "Driver": NORRIS,
            "Constructor": MCLAREN, "status": "Finished",
            "Time": {"millis": "1927849", "time": "+3.189"},
        },
    ],
})

EMPTY_RACES = ergast_races()


class FakeClock:
    """Deterministic monotonic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 0.0, advance_on_sleep: bool = True) -> None:
        self.now = start
        self.sleeps: list[float] = []
        self._advance = advance_on_sleep

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if self._advance:
            self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(autouse=True)
def session_log(tmp_path, monkeypatch):
    """Redirect the session log file into tmp_path for every test."""
    import f1sessions._logging as mod

    named_logger = logging.getLogger(mod.LOGGER_NAME)
    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)

    log_dir = tmp_path / "logs"
    monkeypatch.setattr(mod, "_logger", None)
    monkeypatch.setattr(mod, "_LOG_DIR", str(log_dir))
    monkeypatch.setattr(mod, "_LOG_FILE", str(log_dir / "sessions.log"))

    yield log_dir / "sessions.log"

    # Close file handlers to release file locks (important on Windows)
    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)
