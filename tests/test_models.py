"""Tests for Pydantic model deserialization."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from f1sessions.models.classification import (
    LapTimedRow,
    QualifyingRow,
    RaceRow,
    SessionLabel,
    SessionResult,
    WeekendSessions,
)
from f1sessions.models.driver import Driver, DriverIdentity
from f1sessions.models.ergast import ErgastResponse, QualifyingResult
from f1sessions.models.lap import Lap
from f1sessions.models.session import Session
from tests.conftest import (
    SAMPLE_DRIVERS,
    SAMPLE_QUALIFYING,
    SAMPLE_RACE,
    SEASON_SESSIONS,
    make_lap,
)


class TestSessionModel:
    def test_parse(self) -> None:
        session = Session.model_validate(SEASON_SESSIONS[0])
        assert session.session_key == 9201
        assert session.meeting_key == 1230
        assert session.date_start == datetime(2024, 3, 22, 1, 30, tzinfo=timezone.utc)

    def test_frozen(self) -> None:
        session = Session.model_validate(SEASON_SESSIONS[0])
        with pytest.raises(Exception):
            session.session_key = 1  # type: ignore[misc]


class TestLapModel:
    def test_parse(self) -> None:
        lap = Lap.model_validate(make_lap(1, 90.8, lap_number=3, is_pit_out_lap=True))
        assert lap.driver_number == 1
        assert lap.lap_duration == 90.8
        assert lap.is_pit_out_lap is True

    def test_optional_fields(self) -> None:
        lap = Lap.model_validate({"driver_number": 1})
        assert lap.lap_duration is None
        assert lap.is_pit_out_lap is None


class TestDriverModel:
    def test_identity(self) -> None:
        identity = Driver.model_validate(SAMPLE_DRIVERS[2]).to_identity()
        assert identity == DriverIdentity(
            number=27, given_name="Nico", family_name="Hulkenberg", code="HUL",
        )
        assert identity.full_name == "Nico Hulkenberg"

    def test_empty_identity_has_no_name(self) -> None:
        assert DriverIdentity(number=3).full_name is None


class TestErgastModels:
    def test_race_results(self) -> None:
        race = ErgastResponse.model_validate(SAMPLE_RACE).races[0]
        assert race.season == 2024
        assert race.race_name == "Bahrain Grand Prix"
        leader = race.results[0]
        assert leader.points == 26
        assert leader.time.millis == 5504742
        assert leader.fastest_lap.rank == 1
        assert leader.driver.permanent_number == 33
        assert leader.constructor.constructor_id == "red_bull"

    def test_qualifying_best_time(self) -> None:
        results = ErgastResponse.model_validate(SAMPLE_QUALIFYING).races[0].qualifying_results
        assert results[0].best_time == "1:29.179"
        assert results[2].best_time == "1:30.502"

    def test_populate_by_field_name(self) -> None:
        result = QualifyingResult(position=1, q1="1:30.000")
        assert result.best_time == "1:30.000"

    def test_no_races(self) -> None:
        assert ErgastResponse.model_validate({"MRData": {}}).races == []

    def test_no_standings(self) -> None:
        assert ErgastResponse.model_validate({"MRData": {}}).standings is None


class TestRowModels:
    def test_session_result_parses_rows_by_kind(self) -> None:
        result = SessionResult.model_validate({
            "label": "race",
            "rows": [
                {"kind": "race", "position": 1, "driver": "Max Verstappen",
                 "constructor": "Red Bull", "points": 25, "fastest_lap": True},
            ],
        })
        assert isinstance(result.rows[0], RaceRow)
        assert result.rows[0].fastest_lap is True
        assert result.available

    def test_row_defaults(self) -> None:
        row = QualifyingRow(position=1, driver=None, constructor="—")
        assert (row.time, row.gap, row.q1, row.q2, row.q3) == ("—",) * 5

    def test_weekend_flags(self) -> None:
        row = LapTimedRow(position=1, driver="Lando Norris", constructor="McLaren",
                          best_lap=90.0, laps=12)
        weekend = WeekendSessions(fp1=[row], qualifying=[])
        assert weekend.has_fp1
        # an empty published classification still counts as present
        assert weekend.has_qualifying
        assert not weekend.has_race
        assert not weekend.is_sprint_weekend
        assert weekend.get(SessionLabel.FP1).rows == [row]
        assert [r.label for r in weekend.results()] == list(SessionLabel)

    def test_empty_weekend(self) -> None:
        weekend = WeekendSessions()
        assert not weekend.any_available()
        dumped = weekend.model_dump()
        assert {k for k in dumped if k.startswith("has_")} == {
            "has_fp1", "has_fp2", "has_fp3", "has_sprint_qualifying",
            "has_qualifying", "has_sprint", "has_race",
        }
