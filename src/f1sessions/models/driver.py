"""Driver models: the lap-telemetry roster snapshot and the neutral identity."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DriverIdentity(BaseModel):
    """Provider-neutral driver identity handed to the identity normalizer."""

    model_config = ConfigDict(frozen=True)

    number: int | None = None
    given_name: str | None = None
    family_name: str | None = None
    code: str | None = None

    @property
    def full_name(self) -> str | None:
        parts = [p for p in (self.given_name, self.family_name) if p]
        return " ".join(parts) or None


class Driver(BaseModel):
    """Driver info for a specific session, from ``/drivers``."""

    model_config = ConfigDict(frozen=True)

    broadcast_name: str | None = None
    driver_number: int | None = None
    first_name: str | None = None
    full_name: str | None = None
    last_name: str | None = None
    name_acronym: str | None = None
    session_key: int | None = None
    team_name: str | None = None

    def to_identity(self) -> DriverIdentity:
        return DriverIdentity(
            number=self.driver_number,
            given_name=self.first_name,
            family_name=self.last_name,
            code=self.name_acronym,
        )
