"""Reconcile driver and constructor names across both providers.

The two providers disagree on car numbers (a champion races with #1 but keeps
a different permanent number), on accents ("Hülkenberg" vs "Hulkenberg") and
on team names (full sponsor titles vs short names). Everything is mapped onto
the display names the application uses.
"""

from __future__ import annotations

import json
import re
import unicodedata
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, ConfigDict, TypeAdapter

from f1sessions.models.driver import DriverIdentity
from f1sessions.timing import GAP_PLACEHOLDER

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


class RosterEntry(BaseModel):
    """A driver on the current grid."""

    model_config = ConfigDict(frozen=True)

    permanent_number: int
    given_name: str
    family_name: str
    current_team: str
    code: str | None = None
    display_override: str | None = None

    @property
    def display_name(self) -> str:
        return self.display_override or f"{self.given_name} {self.family_name}"


def _entry(
    number: int, code: str, given: str, family: str, team: str, display: str | None = None,
) -> RosterEntry:
    return RosterEntry(
        permanent_number=number,
        given_name=given,
        family_name=family,
        current_team=team,
        code=code,
        display_override=display,
    )


DEFAULT_ROSTER: tuple[RosterEntry, ...] = (
    _entry(4, "NOR", "Lando", "Norris", "McLaren"),
    _entry(81, "PIA", "Oscar", "Piastri", "McLaren"),
    _entry(1, "VER", "Max", "Verstappen", "Red Bull"),
    _entry(22, "TSU", "Yuki", "Tsunoda", "Red Bull"),
    _entry(16, "LEC", "Charles", "Leclerc", "Ferrari"),
    _entry(44, "HAM", "Lewis", "Hamilton", "Ferrari"),
    _entry(63, "RUS", "George", "Russell", "Mercedes"),
    _entry(12, "ANT", "Andrea Kimi", "Antonelli", "Mercedes"),
    _entry(14, "ALO", "Fernando", "Alonso", "Aston Martin"),
    _entry(18, "STR", "Lance", "Stroll", "Aston Martin"),
    _entry(10, "GAS", "Pierre", "Gasly", "Alpine"),
    _entry(43, "COL", "Franco", "Colapinto", "Alpine"),
    _entry(87, "BEA", "Oliver", "Bearman", "Haas"),
    _entry(31, "OCO", "Esteban", "Ocon", "Haas"),
    _entry(27, "HUL", "Nico", "Hülkenberg", "Sauber"),
    _entry(5, "BOR", "Gabriel", "Bortoleto", "Sauber"),
    _entry(30, "LAW", "Liam", "Lawson", "Vcarb"),
    _entry(6, "HAD", "Isack", "Hadjar", "Vcarb"),
    _entry(23, "ALB", "Alexander", "Albon", "Williams"),
    _entry(55, "SAI", "Carlos", "Sainz", "Williams", display="Carlos Sainz Jr."),
)

# Display name -> names and constructor ids the providers use for it.
TEAM_ALIASES: dict[str, tuple[str, ...]] = {
    "Red Bull": ("Red Bull", "Red Bull Racing", "Oracle Red Bull Racing", "red_bull"),
    "Ferrari": ("Ferrari", "Scuderia Ferrari", "Scuderia Ferrari HP"),
    "Mercedes": ("Mercedes", "Mercedes-AMG Petronas F1 Team", "Mercedes-AMG"),
    "McLaren": ("McLaren", "McLaren F1 Team", "McLaren Formula 1 Team"),
    "Aston Martin": (
        "Aston Martin",
        "Aston Martin Aramco",
        "Aston Martin Aramco F1 Team",
        "Aston Martin F1 Team",
        "aston_martin",
    ),
    "Alpine": ("Alpine", "Alpine F1 Team", "BWT Alpine F1 Team"),
    "Haas": ("Haas", "Haas F1 Team", "MoneyGram Haas F1 Team"),
    "Sauber": ("Sauber", "Kick Sauber", "Stake F1 Team Kick Sauber", "Alfa Romeo"),
    "Vcarb": (
        "Vcarb",
        "RB",
        "RB F1 Team",
        "Racing Bulls",
        "Visa Cash App RB",
        "Visa Cash App RB F1 Team",
        "Visa Cash App Racing Bulls F1 Team",
        "AlphaTauri",
    ),
    "Williams": ("Williams", "Williams Racing", "Atlassian Williams Racing"),
}


def normalize_name(text: str) -> str:
    """Fold accents, case and punctuation: "Hülkenberg" -> "hulkenberg"."""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(c for c in decomposed if not unicodedata.combining(c))
    return _NON_ALNUM_RE.sub(" ", stripped.casefold()).strip()


def load_roster(path: str | Path) -> tuple[RosterEntry, ...]:
    """Read a roster from a JSON list of entries."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return tuple(TypeAdapter(list[RosterEntry]).validate_python(data))


class IdentityNormalizer:
    """Resolves provider driver/team names to application display names."""

    def __init__(
        self,
        roster: Iterable[RosterEntry] = DEFAULT_ROSTER,
        team_aliases: dict[str, tuple[str, ...]] | None = None,
    ) -> None:
        self._teams: dict[str, str] = {}
        for display, aliases in (team_aliases or TEAM_ALIASES).items():
            self._teams[normalize_name(display)] = display
            for alias in aliases:
                self._teams[normalize_name(alias)] = display
        self._index(roster)

    def _index(self, roster: Iterable[RosterEntry]) -> None:
        self.roster = tuple(roster)
        self._by_number = {e.permanent_number: e for e in self.roster}
        self._by_code = {e.code.upper(): e for e in self.roster if e.code}
        self._by_family: dict[str, list[RosterEntry]] = {}
        for entry in self.roster:
            self._by_family.setdefault(normalize_name(entry.family_name), []).append(entry)

    def merge_roster(self, entries: Iterable[RosterEntry]) -> None:
        """Replace roster entries by permanent number and add new drivers.

        Drivers missing from *entries* are kept. A display override or code
        already on the roster survives when the incoming entry has none.
        """
        merged = dict(self._by_number)
        for entry in entries:
            current = merged.get(entry.permanent_number)
            if current is not None:
                entry = entry.model_copy(update={
                    "code": entry.code or current.code,
                    "display_override": entry.display_override or current.display_override,
                })
            merged[entry.permanent_number] = entry
        self._index(merged.values())

    def roster_entry(self, number: int | None) -> RosterEntry | None:
        if number is None:
            return None
        return self._by_number.get(number)

    def match_driver(
        self, raw: DriverIdentity, raw_constructor: str | None = None,
    ) -> RosterEntry | None:
        """Find the roster entry by permanent number, driver code, then family name."""
        entry = self.roster_entry(raw.number)
        if entry is not None:
            return entry
        if raw.code:
            entry = self._by_code.get(raw.code.upper())
            if entry is not None:
                return entry
        if not raw.family_name:
            return None
        candidates = self._by_family.get(normalize_name(raw.family_name), [])
        if len(candidates) > 1 and raw_constructor:
            team = self.resolve_team(raw_constructor)
            for candidate in candidates:
                if candidate.current_team == team:
                    return candidate
        return candidates[0] if candidates else None

    def resolve_driver(
        self, raw: DriverIdentity | None, raw_constructor: str | None = None,
    ) -> str | None:
        """Display name for a provider driver; never None when a number is known."""
        if raw is None:
            return None
        entry = self.match_driver(raw, raw_constructor)
        if entry is not None:
            return entry.display_name
        if raw.number is not None:
            return f"Driver #{raw.number}"
        return raw.full_name

    def resolve_team(self, raw_team_name: str | None) -> str:
        """Display name for a provider team name, or the raw name if unknown."""
        if not raw_team_name or not raw_team_name.strip():
            return GAP_PLACEHOLDER
        return self._teams.get(normalize_name(raw_team_name), raw_team_name)
