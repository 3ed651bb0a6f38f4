"""Speicher-Schicht über einem CampusData-Datensatz (JSON-Datei).

Die Engine sieht nur die find()-Schnittstellen. Reihenfolgen sind nicht
garantiert; die Engine sortiert selbst.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from engine.errors import ProfileNotFound
from engine.matcher import build_interest_index
from engine.timeutil import DAY_CODES, normalize_day
from models.blocked_period import BlockedPeriod
from models.campus_data import CampusData
from models.class_record import ClassRecord
from models.group import InterestGroup
from models.profile import StudentProfile

logger = logging.getLogger(__name__)


class TimetableStore:
    """Stundenplan-Abfragen."""

    def __init__(self, data: CampusData) -> None:
        self.data = data

    def find(self, section_key: Optional[str] = None,
             day: Optional[str] = None) -> list[ClassRecord]:
        """Einträge einer Gruppe (oder aller Gruppen) an einem Tag (oder allen Tagen)."""
        day = normalize_day(day) if day is not None else None
        return [
            c for c in self.data.classes
            if (section_key is None or c.section_key == section_key)
            and (day is None or c.day == day)
        ]

    def find_sorted(self, section_key: str, day: Optional[str] = None) -> list[ClassRecord]:
        """Wie find(), nach Tag und Beginn sortiert (Anzeige)."""
        return sorted(
            self.find(section_key, day),
            key=lambda c: (DAY_CODES.index(c.day), c.start_minutes),
        )

    def blocked(self, section_key: Optional[str], day: str) -> list[BlockedPeriod]:
        """Sperrzeiten eines Tages, die für die Gruppe gelten.

        section_key=None liefert alle Sperrzeiten des Tages.
        """
        day = normalize_day(day)
        return [
            p for p in self.data.blocked_periods
            if p.day == day and (section_key is None or p.applies_to(section_key))
        ]

    def is_holiday(self, day: str) -> bool:
        return normalize_day(day) in self.data.holidays

    def add(self, record: ClassRecord) -> ClassRecord:
        self.data.classes.append(record)
        logger.info(f"Stundenplan: {record.section_key} {record.day} "
                    f"{record.start_time}–{record.end_time} {record.subject}")
        return record


class ProfileStore:
    """Profil-Abfragen."""

    def __init__(self, data: CampusData) -> None:
        self.data = data

    def find(
        self,
        batch: Optional[str] = None,
        sub_batch: Optional[str] = None,
        exclude_sub_batch: Optional[str] = None,
        exclude_user_id: Optional[str] = None,
    ) -> list[StudentProfile]:
        """Profile nach Filter. Alle Filter sind optional und werden UND-verknüpft."""
        return [
            p for p in self.data.profiles
            if (batch is None or p.batch == batch)
            and (sub_batch is None or p.sub_batch == sub_batch)
            and (exclude_sub_batch is None or p.sub_batch != exclude_sub_batch)
            and (exclude_user_id is None or p.user_id != exclude_user_id)
        ]

    def get(self, user_id: str) -> StudentProfile:
        """Profil zur User-ID.

        Raises:
            ProfileNotFound: Keine passende User-ID.
        """
        for p in self.data.profiles:
            if p.user_id == user_id:
                return p
        raise ProfileNotFound(user_id)

    def upsert(self, profile: StudentProfile) -> StudentProfile:
        """Legt ein Profil an oder ersetzt das vorhandene mit gleicher User-ID."""
        for i, p in enumerate(self.data.profiles):
            if p.user_id == profile.user_id:
                self.data.profiles[i] = profile
                return profile
        self.data.profiles.append(profile)
        return profile

    def update(self, user_id: str, **changes) -> StudentProfile:
        """Ändert nur die übergebenen Felder eines vorhandenen Profils.

        Felder mit Wert None bleiben unverändert. Das Ergebnis wird neu
        validiert (Interessen werden wieder bereinigt).

        Raises:
            ProfileNotFound: Keine passende User-ID.
        """
        current = self.get(user_id)
        fields = {k: v for k, v in changes.items() if v is not None}
        if "user_id" in fields:
            raise ValueError("Die User-ID kann nicht geändert werden.")
        updated = StudentProfile.model_validate(
            current.model_copy(update=fields).model_dump())
        logger.info(f"Profil {user_id} aktualisiert: {', '.join(sorted(fields)) or '-'}")
        return self.upsert(updated)

    def interest_index(self) -> dict[tuple[str, str], set[str]]:
        """Index (Batch, Interesse) → User-IDs über alle Profile."""
        return build_interest_index(self.data.profiles)


class GroupStore:
    """Ablage der Interessengruppen."""

    def __init__(self, data: CampusData) -> None:
        self.data = data

    def all(self) -> list[InterestGroup]:
        return list(self.data.groups)

    def get(self, group_id: str) -> Optional[InterestGroup]:
        return next((g for g in self.data.groups if g.id == group_id), None)

    def add(self, group: InterestGroup) -> InterestGroup:
        self.data.groups.append(group)
        return group

    def replace(self, group: InterestGroup) -> InterestGroup:
        for i, g in enumerate(self.data.groups):
            if g.id == group.id:
                self.data.groups[i] = group
                return group
        raise KeyError(group.id)

    def remove(self, group_ids: set[str]) -> int:
        before = len(self.data.groups)
        self.data.groups = [g for g in self.data.groups if g.id not in group_ids]
        return before - len(self.data.groups)


class CampusRepository:
    """Bündelt die Stores über einer JSON-Datei."""

    def __init__(self, data: CampusData, path: Optional[Path] = None) -> None:
        self.data = data
        self.path = Path(path) if path is not None else None
        self.timetable = TimetableStore(data)
        self.profiles = ProfileStore(data)
        self.groups = GroupStore(data)

    @classmethod
    def open(cls, path: Path, create: bool = False) -> "CampusRepository":
        """Öffnet den Datensatz. Mit create=True wird ein leerer angelegt."""
        path = Path(path)
        if not path.exists() and create:
            logger.info(f"Neuer leerer Datensatz: {path}")
            return cls(CampusData(), path)
        return cls(CampusData.load_json(path), path)

    def save(self) -> None:
        if self.path is None:
            raise ValueError("Kein Speicherpfad gesetzt.")
        self.data.save_json(self.path)
