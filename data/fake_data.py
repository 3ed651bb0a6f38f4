"""Testdaten-Generator für den Peer-Optimiser.

Erzeugt einen Wochen-Stundenplan pro Sub-Batch und Studierendenprofile
mit zufälligen Interessen. Reproduzierbar über den Seed.

Eigenschaften:
  - Pro Tag 5–6 von 6 Rasterstunden belegt → 0–1 freie Rasterstunde
    plus die festen Lücken 11:00–11:15 (zu kurz) und 13:15–14:30
  - Studierenden-IDs passen zur Gruppe (assign_section liefert
    denselben Sub-Batch zurück)
  - Jeder Studierende hat 2–4 Interessen aus INTEREST_TAGS
"""

import random
from typing import Optional

from config.defaults import (
    INTEREST_TAGS,
    SEED_DAYS,
    SEED_SUB_BATCHES,
    SEED_SUBJECTS,
    SEED_TIME_SLOTS,
)
from config.schema import CampusConfig
from models.campus_data import CampusData
from models.class_record import ClassRecord
from models.profile import StudentProfile

# ─── Namens-Listen ────────────────────────────────────────────────────────────

_FIRST_NAMES = [
    "Aarav", "Aditi", "Ananya", "Arjun", "Diya", "Ishaan", "Kabir", "Kavya",
    "Meera", "Neha", "Nikhil", "Priya", "Rahul", "Riya", "Rohan", "Saanvi",
    "Sahil", "Sneha", "Tanvi", "Varun", "Vihaan", "Yash", "Zara", "Aditya",
]

_LAST_NAMES = [
    "Sharma", "Verma", "Gupta", "Singh", "Jain", "Agarwal", "Mehta", "Patel",
    "Reddy", "Nair", "Iyer", "Kumar", "Chauhan", "Joshi", "Mishra", "Rao",
]

# Batch → Zweigcode in der ID
_BATCH_BRANCH_CODE = {"A": "kucp", "B": "kucp", "C": "kuec", "D": "kuec"}

# Position des Sub-Batches im Batch (1..3) → Rollennummern-Block
_BLOCK_SIZE = 30


class FakeDataGenerator:
    """Erzeugt einen vollständigen CampusData-Datensatz."""

    def __init__(
        self,
        config: CampusConfig,
        seed: int = 42,
        students_per_sub_batch: int = 5,
        sub_batches: Optional[list[str]] = None,
        year: str = "2024",
    ) -> None:
        self.config = config
        self.rng = random.Random(seed)
        self.students_per_sub_batch = students_per_sub_batch
        self.sub_batches = sub_batches or list(SEED_SUB_BATCHES)
        self.year = year

    # ─── Stundenplan ──────────────────────────────────────────────────────────

    def _generate_classes(self) -> list[ClassRecord]:
        """5–6 zufällige Rasterstunden pro Sub-Batch und Tag."""
        subjects = list(SEED_SUBJECTS)
        classes: list[ClassRecord] = []
        for sub_batch in self.sub_batches:
            batch = sub_batch[0]
            for day in SEED_DAYS:
                count = self.rng.randint(5, 6)
                slots = self.rng.sample(SEED_TIME_SLOTS, count)
                for start, end in sorted(slots):
                    subject = self.rng.choice(subjects)
                    faculty, room = SEED_SUBJECTS[subject]
                    classes.append(ClassRecord(
                        batch=batch,
                        sub_batch=sub_batch,
                        day=day,
                        start_time=start,
                        end_time=end,
                        subject=subject,
                        location=f"{faculty} | {room}",
                    ))
        return classes

    # ─── Profile ──────────────────────────────────────────────────────────────

    def _student_id(self, sub_batch: str, index: int) -> str:
        """ID deren Rollennummer im Block des Sub-Batches liegt."""
        batch = sub_batch[0]
        code = _BATCH_BRANCH_CODE.get(batch, "kucp")
        position = int(sub_batch[1:]) - 1
        # B und D setzen die Nummerierung von A bzw. C fort
        offset = 3 if batch in ("B", "D") else 0
        roll = (offset + position) * _BLOCK_SIZE + index + 1
        return f"{self.year}{code}{1000 + roll}"

    def _generate_profiles(self) -> list[StudentProfile]:
        profiles: list[StudentProfile] = []
        for sub_batch in self.sub_batches:
            for i in range(self.students_per_sub_batch):
                user_id = self._student_id(sub_batch, i)
                name = f"{self.rng.choice(_FIRST_NAMES)} {self.rng.choice(_LAST_NAMES)}"
                interests = self.rng.sample(INTEREST_TAGS, self.rng.randint(2, 4))
                profiles.append(StudentProfile(
                    user_id=user_id,
                    name=name,
                    email=f"{user_id}@{self.config.email_domain}",
                    roll_no=user_id.upper(),
                    batch=sub_batch[0],
                    sub_batch=sub_batch,
                    interests=interests,
                ))
        return profiles

    # ─── Vollständiger Datensatz ──────────────────────────────────────────────

    def generate(self) -> CampusData:
        """Erzeugt den vollständigen Datensatz als CampusData-Objekt."""
        return CampusData(
            classes=self._generate_classes(),
            profiles=self._generate_profiles(),
        )

    def print_summary(self, data: CampusData) -> None:
        """Gibt eine Übersicht über Rich aus."""
        from rich.console import Console
        from rich.table import Table
        from rich import box

        console = Console()
        table = Table(title="Generierte Testdaten", box=box.ROUNDED)
        table.add_column("Sub-Batch", style="bold")
        table.add_column("Einträge/Woche", justify="right")
        table.add_column("Studierende", justify="right")
        for sub_batch in self.sub_batches:
            n_classes = sum(1 for c in data.classes if c.sub_batch == sub_batch)
            n_students = sum(1 for p in data.profiles if p.sub_batch == sub_batch)
            table.add_row(sub_batch, str(n_classes), str(n_students))
        console.print(table)
