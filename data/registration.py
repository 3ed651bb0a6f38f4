"""Registrierung: leitet Zweig, Jahrgang und Gruppe aus der Studierenden-ID ab.

Studierenden-IDs haben die Form "<Jahr><Zweigcode><Rollennummer>",
z.B. "2024kucp1042" → Zweig CSE, 2. Jahr, Rollennummer 42 → Batch A, A2.
"""

import re
from dataclasses import dataclass
from typing import Optional

from config.defaults import BRANCH_CODES, SECTION_LADDERS, YEAR_LABELS
from config.schema import CampusConfig
from models.profile import StudentProfile

_ROLL_RE = re.compile(r"(\d+)$")


@dataclass(frozen=True)
class SectionAssignment:
    """Aus der ID abgeleitete Stammdaten."""

    branch: str
    year: str
    roll_number: int
    batch: Optional[str]
    sub_batch: Optional[str]


def detect_branch(student_id: str) -> str:
    """Zweig aus dem Zweigcode der ID; unbekannt → "Other"."""
    sid = student_id.lower()
    for code, branch in BRANCH_CODES.items():
        if code in sid:
            return branch
    return "Other"


def roll_number(student_id: str) -> int:
    """Rollennummer = letzte Ziffernfolge modulo 1000, Default 1."""
    m = _ROLL_RE.search(student_id)
    return int(m.group(1)) % 1000 if m else 1


def assign_section(student_id: str) -> SectionAssignment:
    """Bestimmt Batch und Sub-Batch anhand von Zweig und Rollennummer.

    Die Rollennummern werden in Blöcken zu je 30 auf die Sub-Batches
    verteilt; alles über dem letzten Block landet im letzten Sub-Batch.
    Zweige ohne Leiter (Other) bekommen keine Gruppe.
    """
    branch = detect_branch(student_id)
    roll = roll_number(student_id)
    year = YEAR_LABELS.get(student_id[:4], "Unknown")

    ladder = SECTION_LADDERS.get(branch)
    batch: Optional[str] = None
    sub_batch: Optional[str] = None
    if ladder:
        for upper, (b, sb) in ladder:
            if upper is None or roll <= upper:
                batch, sub_batch = b, sb
                break

    return SectionAssignment(
        branch=branch, year=year, roll_number=roll,
        batch=batch, sub_batch=sub_batch,
    )


def register_student(
    name: str,
    email: str,
    config: CampusConfig,
    interests: Optional[list[str]] = None,
) -> StudentProfile:
    """Erstellt ein Profil aus Name und Campus-E-Mail.

    Raises:
        ValueError: E-Mail gehört nicht zur erlaubten Domain.
    """
    email = email.strip().lower()
    local, _, domain = email.partition("@")
    if not local or domain != config.email_domain:
        raise ValueError(f"Nur @{config.email_domain}-Adressen sind erlaubt: {email}")

    assignment = assign_section(local)
    return StudentProfile(
        user_id=local,
        name=name.strip(),
        email=email,
        roll_no=local.upper(),
        branch=assignment.branch,
        year=assignment.year,
        batch=assignment.batch,
        sub_batch=assignment.sub_batch,
        interests=interests or [],
    )
