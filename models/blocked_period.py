"""Datenmodell für eine Sperrzeit außerhalb des Stundenplans (Pydantic v2)."""

from typing import Optional

from pydantic import BaseModel, field_validator, model_validator

from engine.timeutil import normalize_day, parse_time


class BlockedPeriod(BaseModel):
    """Zusätzliche Belegung, z.B. Prüfung oder Campus-Veranstaltung.

    section_key=None bedeutet: gilt für alle Gruppen.
    """

    day: str
    start_time: str
    end_time: str
    label: str = "Gesperrt"
    section_key: Optional[str] = None   # "A-A1" oder None

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
        if parse_time(self.start_time) >= parse_time(self.end_time):
            raise ValueError(
                f"Sperrzeit '{self.label}': Beginn muss vor Ende liegen")
        return self

    def applies_to(self, key: str) -> bool:
        return self.section_key is None or self.section_key == key
