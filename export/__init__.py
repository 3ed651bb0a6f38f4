"""Export-Modul: JSON-Antwortformen und Rich-Tabellen."""

from export.responses import (
    free_now_response,
    free_slots_response,
    group_response,
    matches_response,
)

__all__ = [
    "free_now_response",
    "free_slots_response",
    "group_response",
    "matches_response",
]
