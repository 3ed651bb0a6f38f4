"""Datenmodell für einen Stundenplan-Eintrag (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from engine.timeutil import normalize_day, parse_time


def section_key(batch: Optional[str], sub_batch: Optional[str]) -> str:
    """Schlüssel einer Gruppe, z.B. "A-A1"."""
    return f"{batch}-{sub_batch}"


class ClassRecord(BaseModel):
    """Eine Lehrveranstaltung einer Gruppe (Batch + Sub-Batch) an einem Wochentag."""

    batch: str                      # "A", "B", ...
    sub_batch: str                  # "A1", "A2", ...
    day: str                        # "MON".."SUN"
    start_time: str                 # "HH:MM"
    end_time: str                   # "HH:MM"
    subject: str
    location: Optional[str] = None  # "Dr. Arun Kumar | LT-1"
    is_cancelled: bool = False

    @field_validator("day")
    @classmethod
    def _normalize_day(cls, v: str) -> str:
        return normalize_day(v)

    @field_validator("start_time", "end_time")
    @classmethod
    def _validate_time(cls, v: str) -> str:
        parse_time(v)
        return v.strip()

    @model_validator(mode='after')
    def _check_order(self):
        if self.start_minutes >= self.end_minutes:
            raise ValueError(
                f"{self.subject}: Beginn {self.start_time} muss vor "
                f"Ende {self.end_time} liegen")
        return self

    @property
    def section_key(self) -> str:
        return section_key(self.batch, self.sub_batch)

    @property
    def start_minutes(self) -> int:
        return parse_time(self.start_time)

    @property
    def end_minutes(self) -> int:
        return parse_time(self.end_time)
