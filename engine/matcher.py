"""Peer-Matching: findet Studierende mit gemeinsamen Interessen und Freizeit.

Kandidaten: gleicher Batch, anderer Sub-Batch, nicht man selbst.
Studierende desselben Sub-Batches teilen ohnehin ihre gesamte Freizeit
und werden deshalb nie vorgeschlagen.

Ablauf je Kandidat:
  1. Gemeinsame Interessen bestimmen; leer → kein Match
  2. Freie Intervalle beider Gruppen am Referenztag berechnen
  3. Paare (mein Intervall, sein Intervall) in natürlicher Reihenfolge
     durchlaufen; das erste Overlap ≥ Mindestdauer gewinnt
  4. Ohne passendes Overlap fällt der Kandidat weg
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

from config.schema import MatchingConfig, OverlapPolicy
from engine.errors import IncompleteProfile
from engine.free_slots import FreeSlotCalculator
from engine.timeutil import format_time
from models.interval import FreeInterval
from models.match import Match, OverlapWindow
from models.profile import StudentProfile

if TYPE_CHECKING:
    from data.store import ProfileStore, TimetableStore

logger = logging.getLogger(__name__)


# ─── Bausteine ────────────────────────────────────────────────────────────────

def common_interests(mine: Sequence[str], theirs: Sequence[str]) -> list[str]:
    """Schnittmenge der Interessen in der Reihenfolge der eigenen Liste."""
    other = set(theirs)
    return [tag for tag in mine if tag in other]


def find_best_overlap(
    my_slots: Sequence[FreeInterval],
    their_slots: Sequence[FreeInterval],
    min_minutes: int,
    policy: OverlapPolicy = OverlapPolicy.FIRST,
) -> Optional[FreeInterval]:
    """Sucht das gemeinsame freie Fenster zweier Intervall-Listen.

    FIRST: erstes Overlap ≥ min_minutes in Iterationsreihenfolge
    (meine Intervalle außen, seine innen). Die Suche endet beim ersten
    Treffer, auch wenn später ein längeres Overlap käme.
    LONGEST: längstes Overlap ≥ min_minutes; bei Gleichstand das frühere.
    """
    best: Optional[FreeInterval] = None
    for mine in my_slots:
        for theirs in their_slots:
            overlap = mine.overlap(theirs)
            if overlap is None or overlap.duration < min_minutes:
                continue
            if policy == OverlapPolicy.FIRST:
                return overlap
            if best is None or overlap.duration > best.duration:
                best = overlap
    return best


def build_interest_index(
    profiles: Iterable[StudentProfile],
) -> dict[tuple[str, str], set[str]]:
    """Index (Batch, Interesse) → User-IDs zum Vorfiltern der Kandidaten."""
    index: dict[tuple[str, str], set[str]] = defaultdict(set)
    for p in profiles:
        if not p.batch:
            continue
        for tag in p.interests:
            index[(p.batch, tag)].add(p.user_id)
    return dict(index)


def prefilter_candidates(
    candidates: Sequence[StudentProfile],
    index: dict[tuple[str, str], set[str]],
    batch: str,
    interests: Sequence[str],
) -> list[StudentProfile]:
    """Behält nur Kandidaten mit mindestens einem gemeinsamen Interesse.

    Reihenfolge der Kandidaten bleibt erhalten; das Ergebnis des Matchings
    ändert sich dadurch nicht.
    """
    allowed: set[str] = set()
    for tag in interests:
        allowed |= index.get((batch, tag), set())
    return [c for c in candidates if c.user_id in allowed]


# ─── Matcher ──────────────────────────────────────────────────────────────────

class PeerMatcher:
    """Erzeugt Peer-Vorschläge für einen Studierenden."""

    def __init__(
        self,
        timetable: "TimetableStore",
        profiles: "ProfileStore",
        config: MatchingConfig,
        interest_index: Optional[dict[tuple[str, str], set[str]]] = None,
    ) -> None:
        self.timetable = timetable
        self.profiles = profiles
        self.config = config
        # Optionaler, vorab gebauter Index (build_interest_index) zum Vorfiltern
        self.interest_index = interest_index

    def find_matches_for(self, user_id: str) -> list[Match]:
        """Lädt das Profil aus dem Speicher und berechnet die Matches."""
        return self.find_matches(self.profiles.get(user_id))

    def find_matches(self, profile: StudentProfile) -> list[Match]:
        """Berechnet die Matches für ein Profil.

        Raises:
            IncompleteProfile: Batch oder Sub-Batch fehlt.
        """
        if not profile.has_section:
            raise IncompleteProfile(profile.user_id)

        cfg = self.config
        day = cfg.reference_day
        calculator = FreeSlotCalculator(self.timetable, cfg)
        my_slots = calculator.for_section(profile.section_key, day)

        candidates = self._candidates(profile)
        if len(candidates) > cfg.max_candidates:
            logger.warning(
                f"Matching {profile.user_id}: {len(candidates)} Kandidaten, "
                f"scanne nur die ersten {cfg.max_candidates}")
            candidates = candidates[:cfg.max_candidates]

        matches: list[Match] = []
        for candidate in candidates:
            shared = common_interests(profile.interests, candidate.interests)
            if not shared:
                continue

            their_slots = calculator.for_section(candidate.section_key, day)
            overlap = find_best_overlap(
                my_slots, their_slots, cfg.min_overlap_minutes, cfg.overlap_policy
            )
            if overlap is None:
                logger.debug(f"  {candidate.user_id}: kein Overlap ≥ {cfg.min_overlap_minutes} min")
                continue

            matches.append(Match(
                user_id=candidate.user_id,
                name=candidate.name,
                batch=candidate.batch,
                sub_batch=candidate.sub_batch,
                common_interests=shared,
                common_free_slot=OverlapWindow(
                    start=format_time(overlap.start),
                    end=format_time(overlap.end),
                    duration=overlap.duration,
                ),
            ))

        logger.info(
            f"Matching {profile.user_id} ({profile.section_key}, {day}): "
            f"{len(candidates)} Kandidaten, {len(matches)} Matches")
        return matches

    def _candidates(self, profile: StudentProfile) -> list[StudentProfile]:
        """Gleicher Batch, anderer Sub-Batch, nicht man selbst."""
        found = self.profiles.find(
            batch=profile.batch,
            exclude_sub_batch=profile.sub_batch,
            exclude_user_id=profile.user_id,
        )
        # Speicher-Filter nicht blind vertrauen
        candidates = [
            c for c in found
            if c.has_section
            and c.batch == profile.batch
            and c.sub_batch != profile.sub_batch
            and c.user_id != profile.user_id
        ]
        if self.interest_index is not None:
            candidates = prefilter_candidates(
                candidates, self.interest_index, profile.batch, profile.interests
            )
        return candidates
