"""Freizeit-Berechnung: Belegungen eines Tages → freie Intervalle.

Sweep über die nach Beginn sortierten Belegungen mit laufendem Cursor.
Überlappende oder enthaltene Belegungen werden dabei absorbiert, leere
Lücken (Länge 0) werden nie ausgegeben.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from engine.timeutil import parse_time
from models.interval import BusyInterval, BusyReason, FreeInterval, OperatingHours

if TYPE_CHECKING:
    from config.schema import MatchingConfig
    from data.store import TimetableStore
    from models.blocked_period import BlockedPeriod
    from models.class_record import ClassRecord

logger = logging.getLogger(__name__)


# ─── Belegungen ───────────────────────────────────────────────────────────────

def class_to_busy(record: "ClassRecord") -> BusyInterval:
    """Projiziert einen Stundenplan-Eintrag auf Minuten.

    Ungültige Uhrzeiten brechen mit InvalidTimeFormat ab, statt still als 0
    gewertet zu werden.
    """
    return BusyInterval(
        start=parse_time(record.start_time),
        end=parse_time(record.end_time),
        reason=BusyReason.CLASS,
        label=record.subject,
    )


def blocked_to_busy(period: "BlockedPeriod") -> BusyInterval:
    return BusyInterval(
        start=parse_time(period.start_time),
        end=parse_time(period.end_time),
        reason=BusyReason.BLOCKED,
        label=period.label,
    )


def busy_intervals_for(
    records: Iterable["ClassRecord"],
    hours: OperatingHours,
    blocked: Iterable["BlockedPeriod"] = (),
    is_holiday: bool = False,
) -> list[BusyInterval]:
    """Sammelt alle Belegungen einer Gruppe an einem Tag.

    Abgesagte Veranstaltungen zählen nicht. Ein Feiertag belegt das gesamte
    Tagesfenster.
    """
    busy: list[BusyInterval] = []
    for record in records:
        if record.is_cancelled:
            continue
        busy.append(class_to_busy(record))
    busy.extend(blocked_to_busy(p) for p in blocked)
    if is_holiday:
        busy.append(BusyInterval(hours.start, hours.end, BusyReason.HOLIDAY, "Feiertag"))
    return busy


# ─── Sweep ────────────────────────────────────────────────────────────────────

def calculate_free_slots(
    busy: Iterable[BusyInterval],
    hours: OperatingHours,
) -> list[FreeInterval]:
    """Berechnet die freien Intervalle innerhalb der Collegezeit.

    1. Belegungen stabil nach Beginn sortieren
    2. Cursor ab hours.start; Lücke [cursor, start) ausgeben wenn start > cursor,
       danach cursor = max(cursor, end)
    3. Rest [cursor, hours.end) ausgeben wenn cursor < hours.end

    Belegungen werden auf das Tagesfenster beschnitten, damit keine Lücken
    außerhalb der Collegezeit entstehen.
    """
    free: list[FreeInterval] = []
    cursor = hours.start

    for interval in sorted(busy, key=lambda b: b.start):
        start = min(interval.start, hours.end)
        end = min(interval.end, hours.end)
        if start > cursor:
            free.append(FreeInterval(cursor, start))
        cursor = max(cursor, end)

    if cursor < hours.end:
        free.append(FreeInterval(cursor, hours.end))

    return free


def group_busy_by_section(
    records: Iterable["ClassRecord"],
    blocked: Iterable["BlockedPeriod"] = (),
) -> tuple[dict[str, list[BusyInterval]], list[BusyInterval]]:
    """Gruppiert die Belegungen eines Tages nach Gruppen-Schlüssel.

    Returns:
        (Belegungen je Gruppe, gruppenübergreifende Belegungen)
    """
    by_section: dict[str, list[BusyInterval]] = defaultdict(list)
    campus_wide: list[BusyInterval] = []
    for record in records:
        if record.is_cancelled:
            continue
        by_section[record.section_key].append(class_to_busy(record))
    for period in blocked:
        if period.section_key is None:
            campus_wide.append(blocked_to_busy(period))
        else:
            by_section[period.section_key].append(blocked_to_busy(period))
    return dict(by_section), campus_wide


# ─── Tagesübersicht ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class AgendaItem:
    """Eintrag der Tagesübersicht: Veranstaltung oder freies Intervall."""

    kind: str                       # "class" | "free"
    start: int
    end: int
    subject: Optional[str] = None
    location: Optional[str] = None

    @property
    def duration(self) -> int:
        return self.end - self.start


def build_day_agenda(
    records: Sequence["ClassRecord"],
    hours: OperatingHours,
    blocked: Iterable["BlockedPeriod"] = (),
    is_holiday: bool = False,
) -> list[AgendaItem]:
    """Veranstaltungen und freie Intervalle eines Tages in zeitlicher Reihenfolge."""
    items: list[AgendaItem] = [
        AgendaItem("class", r.start_minutes, r.end_minutes, r.subject, r.location)
        for r in records
        if not r.is_cancelled
    ]
    busy = busy_intervals_for(records, hours, blocked, is_holiday)
    items.extend(AgendaItem("free", f.start, f.end) for f in calculate_free_slots(busy, hours))
    # Bei gleichem Beginn: Veranstaltung vor freiem Intervall
    items.sort(key=lambda i: (i.start, i.kind != "class"))
    return items


# ─── Anbindung an den Stundenplan-Speicher ────────────────────────────────────

class FreeSlotCalculator:
    """Berechnet freie Intervalle je Gruppe und Tag aus dem Stundenplan-Speicher.

    Ergebnisse werden pro Instanz zwischengespeichert; eine Instanz lebt
    nur für eine Anfrage.
    """

    def __init__(self, timetable: "TimetableStore", config: "MatchingConfig") -> None:
        self.timetable = timetable
        self.hours = config.operating_hours
        self._cache: dict[tuple[str, str], list[FreeInterval]] = {}

    def busy_for(self, section_key: str, day: str) -> list[BusyInterval]:
        """Alle Belegungen einer Gruppe an einem Tag."""
        return busy_intervals_for(
            self.timetable.find(section_key, day),
            self.hours,
            blocked=self.timetable.blocked(section_key, day),
            is_holiday=self.timetable.is_holiday(day),
        )

    def for_section(self, section_key: str, day: str) -> list[FreeInterval]:
        """Freie Intervalle einer Gruppe an einem Tag."""
        key = (section_key, day)
        if key not in self._cache:
            free = calculate_free_slots(self.busy_for(section_key, day), self.hours)
            logger.debug(f"{section_key} {day}: {len(free)} freie Intervalle")
            self._cache[key] = free
        return self._cache[key]
