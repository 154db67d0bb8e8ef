"""Provider and output data models."""

from f1sessions.models.classification import (
    ClassificationRow,
    ConstructorStandingRow,
    DriverStandingRow,
    LapTimedRow,
    LastRaceSessions,
    QualifyingRow,
    RaceRow,
    SessionLabel,
    SessionResult,
    SprintRow,
    WeekendSessions,
)
from f1sessions.models.driver import Driver, DriverIdentity
from f1sessions.models.lap import Lap
from f1sessions.models.session import Session

__all__ = [
    "ClassificationRow",
    "ConstructorStandingRow",
    "Driver",
    "DriverIdentity",
    "DriverStandingRow",
    "Lap",
    "LapTimedRow",
    "LastRaceSessions",
    "QualifyingRow",
    "RaceRow",
    "Session",
    "SessionLabel",
    "SessionResult",
    "SprintRow",
    "WeekendSessions",
]
