"""Lap record model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Lap(BaseModel):
    """Raw lap record from ``/laps``; provider-owned and immutable."""

    model_config = ConfigDict(frozen=True)

    driver_number: int | None = None
    is_pit_out_lap: bool | None = None
    lap_duration: float | None = None
    lap_number: int | None = None
    session_key: int | None = None
