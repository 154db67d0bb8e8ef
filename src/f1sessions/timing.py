"""Lap-time parsing and gap formatting helpers."""

from __future__ import annotations

import math

GAP_PLACEHOLDER = "—"

_STATUS_ABBREVIATIONS: dict[str, str] = {
    "Retired": "RET",
    "Accident": "ACC",
    "Collision": "COL",
    "Spun off": "OFF",
    "Engine": "ENG",
    "Disqualified": "DSQ",
}


def time_to_ms(text: str | None) -> int | None:
    """Convert "1:23.456", "83.456" or "1:23:45.678" to milliseconds.

    Returns None for missing or unparseable input.
    """
    if not text:
        return None
    try:
        seconds = 0.0
        for part in text.strip().split(":"):
            seconds = seconds * 60 + float(part)
    except ValueError:
        return None
    if not math.isfinite(seconds):
        return None
    return round(seconds * 1000)


def format_delta(seconds: float) -> str:
    """Format a positive delta as +s.fff."""
    return f"+{seconds:.3f}"


def format_gap(leader_ms: int | None, driver_ms: int | None) -> str:
    """Gap to the leader as +s.fff, or the placeholder when not computable."""
    if not leader_ms or not driver_ms:
        return GAP_PLACEHOLDER
    gap = (driver_ms - leader_ms) / 1000
    return format_delta(gap) if gap > 0 else GAP_PLACEHOLDER


def format_lap_time(seconds: float | None) -> str:
    """Format seconds as m:ss.fff or the placeholder if None."""
    if seconds is None:
        return GAP_PLACEHOLDER
    mins, secs = divmod(seconds, 60)
    return f"{int(mins)}:{secs:06.3f}"


def short_status(status: str) -> str:
    """Abbreviate a non-finishing status for display in the gap column."""
    if status.startswith("+"):
        # lapped: "+1 Lap", "+2 Laps"
        return status
    return _STATUS_ABBREVIATIONS.get(status, status[:3].upper())
