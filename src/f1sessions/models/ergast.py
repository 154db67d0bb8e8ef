"""Classification provider (Ergast-compatible) response models.

The provider returns every scalar as a string and nests payloads under an
``MRData`` envelope; field aliases keep the provider's spelling while the
attribute names stay snake_case.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from f1sessions.models.driver import DriverIdentity


class _ErgastModel(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ErgastDriver(_ErgastModel):
    """Driver as embedded in results and standings."""

    driver_id: str | None = Field(default=None, alias="driverId")
    permanent_number: int | None = Field(default=None, alias="permanentNumber")
    code: str | None = None
    given_name: str | None = Field(default=None, alias="givenName")
    family_name: str | None = Field(default=None, alias="familyName")

    def to_identity(self) -> DriverIdentity:
        return DriverIdentity(
            number=self.permanent_number,
            given_name=self.given_name,
            family_name=self.family_name,
            code=self.code,
        )


class ErgastConstructor(_ErgastModel):
    constructor_id: str | None = Field(default=None, alias="constructorId")
    name: str | None = None


class ResultTime(_ErgastModel):
    millis: int | None = None
    time: str | None = None


class FastestLap(_ErgastModel):
    rank: int | None = None


class QualifyingResult(_ErgastModel):
    number: int | None = None
    position: int | None = None
    driver: ErgastDriver | None = Field(default=None, alias="Driver")
    constructor: ErgastConstructor | None = Field(default=None, alias="Constructor")
    q1: str | None = Field(default=None, alias="Q1")
    q2: str | None = Field(default=None, alias="Q2")
    q3: str | None = Field(default=None, alias="Q3")

    @property
    def best_time(self) -> str | None:
        """Latest segment time reached: Q3, then Q2, then Q1."""
        return self.q3 or self.q2 or self.q1


class RaceResult(_ErgastModel):
    """Race or sprint result row; both endpoints share this shape."""

    number: int | None = None
    position: int | None = None
    points: float | None = None
    driver: ErgastDriver | None = Field(default=None, alias="Driver")
    constructor: ErgastConstructor | None = Field(default=None, alias="Constructor")
    grid: int | None = None
    laps: int | None = None
    status: str | None = None
    time: ResultTime | None = Field(default=None, alias="Time")
    fastest_lap: FastestLap | None = Field(default=None, alias="FastestLap")


class Race(_ErgastModel):
    season: int | None = None
    round: int | None = None
    race_name: str | None = Field(default=None, alias="raceName")
    date: str | None = None
    results: list[RaceResult] = Field(default_factory=list, alias="Results")
    sprint_results: list[RaceResult] = Field(default_factory=list, alias="SprintResults")
    qualifying_results: list[QualifyingResult] = Field(
        default_factory=list, alias="QualifyingResults",
    )


class RaceTable(_ErgastModel):
    races: list[Race] = Field(default_factory=list, alias="Races")


class DriverStanding(_ErgastModel):
    position: int | None = None
    points: float | None = None
    wins: int | None = None
    driver: ErgastDriver | None = Field(default=None, alias="Driver")
    constructors: list[ErgastConstructor] = Field(default_factory=list, alias="Constructors")


class ConstructorStanding(_ErgastModel):
    position: int | None = None
    points: float | None = None
    wins: int | None = None
    constructor: ErgastConstructor | None = Field(default=None, alias="Constructor")


class StandingsList(_ErgastModel):
    season: int | None = None
    round: int | None = None
    driver_standings: list[DriverStanding] = Field(default_factory=list, alias="DriverStandings")
    constructor_standings: list[ConstructorStanding] = Field(
        default_factory=list, alias="ConstructorStandings",
    )


class StandingsTable(_ErgastModel):
    standings_lists: list[StandingsList] = Field(default_factory=list, alias="StandingsLists")


class MRData(_ErgastModel):
    race_table: RaceTable | None = Field(default=None, alias="RaceTable")
    standings_table: StandingsTable | None = Field(default=None, alias="StandingsTable")


class ErgastResponse(_ErgastModel):
    """Top-level ``{"MRData": {...}}`` envelope."""

    mr_data: MRData = Field(alias="MRData")

    @property
    def races(self) -> list[Race]:
        table = self.mr_data.race_table
        return table.races if table else []

    @property
    def standings(self) -> StandingsList | None:
        table = self.mr_data.standings_table
        if table is None or not table.standings_lists:
            return None
        return table.standings_lists[0]
