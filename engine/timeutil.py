"""Zeitarithmetik: "HH:MM" ↔ Minuten seit Mitternacht.

Reine Funktionen ohne Abhängigkeiten. Die Validierung ist strikt:
Stunden 0–23, Minuten 0–59, genau zwei durch ":" getrennte Ganzzahlen.
"""

import re
from datetime import datetime

from engine.errors import InvalidDayCode, InvalidTimeFormat

MINUTES_PER_DAY = 24 * 60

# Wochentags-Codes in datetime.weekday()-Reihenfolge (0=Montag)
DAY_CODES: tuple[str, ...] = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")

_DAY_ALIASES = {
    "monday": "MON", "tuesday": "TUE", "wednesday": "WED", "thursday": "THU",
    "friday": "FRI", "saturday": "SAT", "sunday": "SUN",
    "mo": "MON", "tu": "TUE", "we": "WED", "th": "THU", "fr": "FRI",
    "sa": "SAT", "su": "SUN",
}

_TIME_RE = re.compile(r"^([0-9]{1,2}):([0-9]{1,2})$")


def parse_time(value: str) -> int:
    """Wandelt "HH:MM" in Minuten seit Mitternacht um.

    Raises:
        InvalidTimeFormat: Kein String, falsches Format oder Bereich verletzt.
    """
    if not isinstance(value, str):
        raise InvalidTimeFormat(value, "kein String")
    m = _TIME_RE.match(value.strip())
    if m is None:
        raise InvalidTimeFormat(value, "erwartet HH:MM")
    hours, minutes = int(m.group(1)), int(m.group(2))
    if hours > 23:
        raise InvalidTimeFormat(value, "Stunde außerhalb 0–23")
    if minutes > 59:
        raise InvalidTimeFormat(value, "Minute außerhalb 0–59")
    return hours * 60 + minutes


def format_time(minutes: int) -> str:
    """Minuten seit Mitternacht → "HH:MM" (24h, mit führenden Nullen)."""
    if isinstance(minutes, bool) or not isinstance(minutes, int):
        raise InvalidTimeFormat(minutes, "keine Ganzzahl")
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise InvalidTimeFormat(minutes, "außerhalb 0–1439")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_span(start: int, end: int) -> str:
    """Lesbares Intervall, z.B. "10:30–11:00"."""
    return f"{format_time(start)}–{format_time(end)}"


def minutes_of_day(dt: datetime) -> int:
    """Minuten seit Mitternacht eines Zeitpunkts (Sekunden werden verworfen)."""
    return dt.hour * 60 + dt.minute


def day_code(dt: datetime) -> str:
    """Wochentags-Code ("MON".."SUN") eines Zeitpunkts."""
    return DAY_CODES[dt.weekday()]


def normalize_day(raw: str) -> str:
    """Normalisiert Tagesangaben: "mon", "Monday", "MON" → "MON"."""
    if not isinstance(raw, str):
        raise InvalidDayCode(raw)
    token = raw.strip()
    if token.upper() in DAY_CODES:
        return token.upper()
    alias = _DAY_ALIASES.get(token.lower())
    if alias is None:
        raise InvalidDayCode(raw)
    return alias
