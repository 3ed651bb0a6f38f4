"""Verfügbarkeits-Index: Wer ist gerade frei?

Eine Gruppe ist belegt, wenn der Abfragezeitpunkt in einer ihrer
Belegungen liegt ([start, end)). Studierende aller anderen Gruppen gelten
als frei, allerdings nur innerhalb der Collegezeit. Außerhalb wird
niemand als frei gemeldet.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional, Sequence

from models.interval import BusyInterval, OperatingHours
from models.profile import StudentProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FreePeer:
    """Vorschau-Eintrag eines gerade freien Peers."""

    user_id: str
    name: str
    batch: Optional[str]
    sub_batch: Optional[str]


@dataclass
class FreeNowResult:
    """Anzahl freier Peers plus gekürzte Vorschau."""

    count: int
    peers: list[FreePeer] = field(default_factory=list)


def busy_sections_at(
    busy_by_section: Mapping[str, Sequence[BusyInterval]],
    minute: int,
) -> set[str]:
    """Schlüssel aller Gruppen, die zum Zeitpunkt minute belegt sind."""
    return {
        key
        for key, intervals in busy_by_section.items()
        if any(b.contains(minute) for b in intervals)
    }


def find_free_now(
    busy_by_section: Mapping[str, Sequence[BusyInterval]],
    roster: Iterable[StudentProfile],
    minute: int,
    hours: OperatingHours,
    preview_limit: int = 5,
    exclude_user_id: Optional[str] = None,
    campus_wide: Sequence[BusyInterval] = (),
) -> FreeNowResult:
    """Zählt die gerade freien Studierenden.

    Args:
        busy_by_section: Belegungen des Tages je Gruppen-Schlüssel
        roster: alle Profile
        minute: Abfragezeitpunkt in Minuten seit Mitternacht
        hours: Collegezeit; außerhalb ist count immer 0
        preview_limit: maximale Länge der Vorschau
        exclude_user_id: anfragender Studierender (nie in Zählung oder Vorschau)
        campus_wide: Belegungen, die alle Gruppen betreffen (Feiertag, Sperrzeit)
    """
    if not hours.contains(minute):
        logger.debug(f"free-now: {minute} außerhalb der Collegezeit")
        return FreeNowResult(count=0)
    if any(b.contains(minute) for b in campus_wide):
        logger.debug(f"free-now: {minute} campusweit belegt")
        return FreeNowResult(count=0)

    busy = busy_sections_at(busy_by_section, minute)
    free: list[FreePeer] = []
    for profile in roster:
        if profile.user_id == exclude_user_id:
            continue
        if profile.section_key in busy:
            continue
        free.append(FreePeer(
            user_id=profile.user_id,
            name=profile.name,
            batch=profile.batch,
            sub_batch=profile.sub_batch,
        ))

    logger.info(f"free-now: {len(free)} frei, {len(busy)} Gruppen belegt")
    return FreeNowResult(count=len(free), peers=free[:preview_limit])


# ─── Aktueller Status einer Gruppe ────────────────────────────────────────────

class StatusKind(str, Enum):
    IN_CLASS = "in_class"
    FREE = "free"
    OUTSIDE_HOURS = "outside_hours"


@dataclass(frozen=True)
class CurrentStatus:
    """Status zum Abfragezeitpunkt.

    until: Ende der laufenden Belegung bzw. Beginn der nächsten Belegung
    (oder Collegeende). Bei OUTSIDE_HOURS None.
    """

    kind: StatusKind
    label: Optional[str] = None
    until: Optional[int] = None


def current_status(
    busy: Sequence[BusyInterval],
    minute: int,
    hours: OperatingHours,
) -> CurrentStatus:
    """Bestimmt, ob eine Gruppe gerade belegt oder frei ist und wie lange noch."""
    if not hours.contains(minute):
        return CurrentStatus(StatusKind.OUTSIDE_HOURS)

    ordered = sorted(busy, key=lambda b: b.start)
    running = [b for b in ordered if b.contains(minute)]
    if running:
        # Aneinandergrenzende Belegungen verlängern den belegten Block
        until = max(b.end for b in running)
        for b in ordered:
            if b.start <= until < b.end:
                until = b.end
        return CurrentStatus(
            StatusKind.IN_CLASS,
            label=running[0].label,
            until=min(until, hours.end),
        )

    upcoming = [b.start for b in ordered if b.start > minute]
    until = min(upcoming) if upcoming else hours.end
    return CurrentStatus(StatusKind.FREE, until=min(until, hours.end))
