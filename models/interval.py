"""Zeitintervalle eines Tages in Minuten seit Mitternacht.

Alle Intervalle sind halboffen: [start, end).
Immutable (frozen=True) damit sie als Dict-Key / Set-Element nutzbar sind.
"""

from dataclasses import dataclass
from enum import Enum


class BusyReason(str, Enum):
    """Herkunft einer Belegung. Alle Gründe fließen in denselben Sweep."""

    CLASS = "class"          # Lehrveranstaltung aus dem Stundenplan
    HOLIDAY = "holiday"      # Ganzer Tag gesperrt
    BLOCKED = "blocked"      # Sonstige Sperre (z.B. Prüfung)


@dataclass(frozen=True)
class OperatingHours:
    """Tagesfenster, in dem frei/belegt berechnet wird (z.B. 09:00–17:00)."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start >= self.end:
            raise ValueError(
                f"OperatingHours: start ({self.start}) muss < end ({self.end}) sein")

    def contains(self, minute: int) -> bool:
        return self.start <= minute < self.end

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class BusyInterval:
    """Belegtes Intervall einer Gruppe an einem Tag."""

    start: int
    end: int
    reason: BusyReason = BusyReason.CLASS
    label: str = ""

    def contains(self, minute: int) -> bool:
        return self.start <= minute < self.end

    def __repr__(self) -> str:
        return f"BusyInterval({self.start}-{self.end}, {self.reason.value})"


@dataclass(frozen=True)
class FreeInterval:
    """Freies Intervall innerhalb der Collegezeit (Länge immer > 0)."""

    start: int
    end: int

    @property
    def duration(self) -> int:
        return self.end - self.start

    def overlap(self, other: "FreeInterval") -> "FreeInterval | None":
        """Schnittmenge zweier freier Intervalle oder None."""
        start = max(self.start, other.start)
        end = min(self.end, other.end)
        if end > start:
            return FreeInterval(start, end)
        return None

    def __repr__(self) -> str:
        return f"FreeInterval({self.start}-{self.end})"
