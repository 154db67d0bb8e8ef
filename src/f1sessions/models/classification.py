"""Output models: classification rows and the per-weekend aggregate."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from f1sessions.timing import GAP_PLACEHOLDER


class SessionLabel(str, Enum):
    """Sessions that make up a race weekend."""

    FP1 = "fp1"
    FP2 = "fp2"
    FP3 = "fp3"
    SPRINT_QUALIFYING = "sprint_qualifying"
    QUALIFYING = "qualifying"
    SPRINT = "sprint"
    RACE = "race"


class ClassificationRow(BaseModel):
    """One classified driver. Rows are ordered by ascending position."""

    model_config = ConfigDict(frozen=True)

    position: int
    driver: str | None
    constructor: str
    time: str = GAP_PLACEHOLDER
    gap: str = GAP_PLACEHOLDER


class QualifyingRow(ClassificationRow):
    kind: Literal["qualifying"] = "qualifying"
    q1: str = GAP_PLACEHOLDER
    q2: str = GAP_PLACEHOLDER
    q3: str = GAP_PLACEHOLDER


class SprintRow(ClassificationRow):
    kind: Literal["sprint"] = "sprint"
    points: float = 0
    status: str | None = None


class RaceRow(SprintRow):
    kind: Literal["race"] = "race"  # type: ignore[assignment]
    fastest_lap: bool = False


class LapTimedRow(ClassificationRow):
    """Row rebuilt from personal-best laps for sessions with no published result."""

    kind: Literal["lap_timed"] = "lap_timed"
    best_lap: float
    laps: int


AnyRow = Annotated[
    QualifyingRow | SprintRow | RaceRow | LapTimedRow,
    Field(discriminator="kind"),
]


class SessionResult(BaseModel):
    """Rows for one session; ``rows`` is None while the session has no data."""

    model_config = ConfigDict(frozen=True)

    label: SessionLabel
    rows: list[AnyRow] | None = None

    @property
    def available(self) -> bool:
        return self.rows is not None


class WeekendSessions(BaseModel):
    """Every session of one race weekend plus ``has_<label>`` flags."""

    model_config = ConfigDict(frozen=True)

    fp1: list[LapTimedRow] | None = None
    fp2: list[LapTimedRow] | None = None
    fp3: list[LapTimedRow] | None = None
    sprint_qualifying: list[LapTimedRow] | None = None
    qualifying: list[QualifyingRow] | None = None
    sprint: list[SprintRow] | None = None
    race: list[RaceRow] | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_fp1(self) -> bool:
        return self.fp1 is not None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_fp2(self) -> bool:
        return self.fp2 is not None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_fp3(self) -> bool:
        return self.fp3 is not None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_sprint_qualifying(self) -> bool:
        return self.sprint_qualifying is not None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_qualifying(self) -> bool:
        return self.qualifying is not None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_sprint(self) -> bool:
        return self.sprint is not None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_race(self) -> bool:
        return self.race is not None

    @property
    def is_sprint_weekend(self) -> bool:
        return self.sprint is not None

    def get(self, label: SessionLabel) -> SessionResult:
        return SessionResult(label=label, rows=getattr(self, label.value))

    def results(self) -> list[SessionResult]:
        return [self.get(label) for label in SessionLabel]

    def any_available(self) -> bool:
        return any(result.available for result in self.results())


class LastRaceSessions(BaseModel):
    """Sessions of the most recent race weekend with a published race result."""

    model_config = ConfigDict(frozen=True)

    season: int
    round: int
    race_name: str | None = None
    date: str | None = None
    sessions: WeekendSessions


class DriverStandingRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: int | None
    points: float
    wins: int
    driver: str | None
    constructor: str


class ConstructorStandingRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: int | None
    points: float
    wins: int
    constructor: str
