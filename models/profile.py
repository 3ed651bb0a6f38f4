"""Datenmodell für ein Studierendenprofil (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, field_validator

from models.class_record import section_key


class StudentProfile(BaseModel):
    """Profil eines Studierenden: Identität, Gruppe und Interessen."""

    user_id: str                         # "2024kucp1042"
    name: str                            # "Riya Sharma"
    batch: Optional[str] = None          # "A"
    sub_batch: Optional[str] = None      # "A1"
    interests: list[str] = []            # ["DSA", "Chess"]
    email: Optional[str] = None
    roll_no: Optional[str] = None
    branch: Optional[str] = None         # "CSE", "ECE", "AI", "Other"
    year: Optional[str] = None           # "1st".."4th"
    bio: Optional[str] = None

    @field_validator("interests")
    @classmethod
    def _strip_interests(cls, v: list[str]) -> list[str]:
        # Reihenfolge bleibt erhalten, Leereinträge und Duplikate fallen weg
        seen: list[str] = []
        for tag in v:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen

    @property
    def has_section(self) -> bool:
        """True wenn Batch und Sub-Batch gesetzt sind."""
        return bool(self.batch) and bool(self.sub_batch)

    @property
    def section_key(self) -> str:
        return section_key(self.batch, self.sub_batch)
