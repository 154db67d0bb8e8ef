"""Map (season, round, session label) onto a lap-telemetry session key."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterable

from pydantic import BaseModel, ConfigDict

from f1sessions.models.classification import SessionLabel
from f1sessions.models.session import Session
from f1sessions.telemetry import TelemetryClient

_UNDATED = datetime.max.replace(tzinfo=timezone.utc)

# Provider session names per label, in lookup priority order. Sprint
# qualifying has been renamed across seasons.
SESSION_NAMES: dict[SessionLabel, tuple[str, ...]] = {
    SessionLabel.FP1: ("Practice 1",),
    SessionLabel.FP2: ("Practice 2",),
    SessionLabel.FP3: ("Practice 3",),
    SessionLabel.SPRINT_QUALIFYING: (
        "Sprint Shootout",
        "Sprint Qualifying",
        "Sprint Quali",
        "Shootout",
    ),
    SessionLabel.QUALIFYING: ("Qualifying",),
    SessionLabel.SPRINT: ("Sprint",),
    SessionLabel.RACE: ("Race",),
}


class MeetingSummary(BaseModel):
    """Sessions of one meeting, started at its earliest session."""

    model_config = ConfigDict(frozen=True)

    meeting_key: int
    earliest_start: datetime
    sessions: list[Session]


def _as_utc(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def group_meetings(sessions: Iterable[Session]) -> list[MeetingSummary]:
    """Group sessions by meeting and sort meetings by their first session."""
    grouped: dict[int, list[Session]] = {}
    for session in sessions:
        if session.meeting_key is None:
            continue
        grouped.setdefault(session.meeting_key, []).append(session)

    meetings = []
    for meeting_key, members in grouped.items():
        starts = [_as_utc(s.date_start) for s in members if s.date_start is not None]
        meetings.append(
            MeetingSummary(
                meeting_key=meeting_key,
                earliest_start=min(starts, default=_UNDATED),
                sessions=members,
            )
        )
    meetings.sort(key=lambda m: m.earliest_start)
    return meetings


def select_meeting(meetings: list[MeetingSummary], round: int) -> MeetingSummary | None:
    """Return the meeting for a 1-based championship round."""
    if round < 1 or round > len(meetings):
        return None
    return meetings[round - 1]


def find_session(meeting: MeetingSummary, label: SessionLabel) -> Session | None:
    for name in SESSION_NAMES[label]:
        for session in meeting.sessions:
            if session.session_name == name:
                return session
    if label is SessionLabel.SPRINT_QUALIFYING:
        for session in meeting.sessions:
            if session.session_name == "Sprint" and session.session_type == "Qualifying":
                return session
    return None


class SessionResolver:
    """Resolves human round numbers to opaque session keys.

    Meetings are matched to rounds purely by chronological order of their
    first session, so a provider-side meeting that is not a championship
    round shifts every later round of that season.
    """

    def __init__(self, telemetry: TelemetryClient) -> None:
        self._telemetry = telemetry

    async def meeting(self, season: int, round: int) -> MeetingSummary | None:
        sessions = await self._telemetry.sessions(season)
        if not sessions:
            return None
        return select_meeting(group_meetings(sessions), round)

    async def resolve(self, season: int, round: int, label: SessionLabel) -> int | None:
        meeting = await self.meeting(season, round)
        if meeting is None:
            return None
        session = find_session(meeting, label)
        return session.session_key if session else None
