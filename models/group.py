"""Datenmodell für eine kurzlebige Interessengruppe (Pydantic v2)."""

from datetime import datetime

from pydantic import BaseModel


class InterestGroup(BaseModel):
    """Spontane Gruppe zu einem Interessen-Tag, läuft nach duration_minutes ab."""

    id: str
    creator_id: str
    interest_tag: str
    start_time: datetime
    expiry_time: datetime
    duration_minutes: int
    members: list[str] = []
    is_active: bool = True

    def is_expired(self, now: datetime) -> bool:
        return self.expiry_time < now
