"""Ergebnis-Modelle des Matchings (Pydantic v2). Werden nie gespeichert."""

from pydantic import BaseModel


class OverlapWindow(BaseModel):
    """Gemeinsames freies Fenster zweier Studierender."""

    start: str        # "HH:MM"
    end: str          # "HH:MM"
    duration: int     # Minuten


class Match(BaseModel):
    """Ein Peer-Vorschlag für den anfragenden Studierenden."""

    user_id: str
    name: str
    batch: str
    sub_batch: str
    common_interests: list[str]
    common_free_slot: OverlapWindow
