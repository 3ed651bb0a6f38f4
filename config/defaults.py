from config.schema import (
    CampusConfig,
    GroupConfig,
    MatchingConfig,
    OverlapPolicy,
)


def default_matching_config() -> MatchingConfig:
    """Standard-Matching eines Campus-Tages.

    Collegezeit 09:00 – 17:00
    Mindest-Overlap 30 Minuten
    Referenztag Montag
    Vorschau free-now: 5 Peers
    """
    return MatchingConfig(
        college_start="09:00",
        college_end="17:00",
        min_overlap_minutes=30,
        reference_day="MON",
        free_now_preview_limit=5,
        max_candidates=5000,
        overlap_policy=OverlapPolicy.FIRST,
    )


def default_campus_config() -> CampusConfig:
    """Vollständige Default-Konfiguration."""
    return CampusConfig(
        campus_name="IIIT Kota",
        email_domain="iiitkota.ac.in",
        data_path="output/campus_data.json",
        matching=default_matching_config(),
        groups=GroupConfig(),
    )


# ─── Registrierung ───────────────────────────────────────────────────────────

# Zweigcode in der Studierenden-ID → Zweig
BRANCH_CODES: dict[str, str] = {
    "kucp": "CSE",
    "kuec": "ECE",
    "kuad": "AI",
}

# Immatrikulationsjahr (erste vier Zeichen der ID) → Studienjahr
YEAR_LABELS: dict[str, str] = {
    "2025": "1st",
    "2024": "2nd",
    "2023": "3rd",
    "2022": "4th",
}

# Rollennummer-Obergrenze → (Batch, Sub-Batch); None = alles darüber.
# AI wird gemeinsam mit CSE eingeteilt.
_CSE_LADDER: list[tuple[int | None, tuple[str, str]]] = [
    (30, ("A", "A1")),
    (60, ("A", "A2")),
    (90, ("A", "A3")),
    (120, ("B", "B1")),
    (150, ("B", "B2")),
    (None, ("B", "B3")),
]

_ECE_LADDER: list[tuple[int | None, tuple[str, str]]] = [
    (30, ("C", "C1")),
    (60, ("C", "C2")),
    (90, ("C", "C3")),
    (120, ("D", "D1")),
    (150, ("D", "D2")),
    (None, ("D", "D3")),
]

SECTION_LADDERS: dict[str, list[tuple[int | None, tuple[str, str]]]] = {
    "CSE": _CSE_LADDER,
    "AI": _CSE_LADDER,
    "ECE": _ECE_LADDER,
}


# ─── Testdaten (Seed) ────────────────────────────────────────────────────────

SEED_SUB_BATCHES: list[str] = [
    "A1", "A2", "A3", "B1", "B2", "B3", "C1", "C2", "C3", "D1", "D2", "D3",
]

SEED_DAYS: list[str] = ["MON", "TUE", "WED", "THU", "FRI"]

# Fach → (Dozent, Raum)
SEED_SUBJECTS: dict[str, tuple[str, str]] = {
    "DSA": ("Dr. Arun Kumar", "LT-1"),
    "DBMS": ("Prof. S. Sharma", "LT-2"),
    "OS": ("Dr. Vivek Singh", "LT-3"),
    "COA": ("Dr. Meena Gupta", "Lab-1"),
    "Maths-III": ("Prof. K. Raj", "LT-4"),
    "AI": ("Dr. Pooja Jain", "LT-1"),
    "CN": ("Mr. Rahul Verma", "Lab-2"),
}

# Stundenraster (Beginn, Ende); Lücken 11:00–11:15 und 13:15–14:30
SEED_TIME_SLOTS: list[tuple[str, str]] = [
    ("09:00", "10:00"),
    ("10:00", "11:00"),
    ("11:15", "12:15"),
    ("12:15", "13:15"),
    ("14:30", "15:30"),
    ("15:30", "16:30"),
]

INTEREST_TAGS: list[str] = [
    "DSA", "Web Dev", "Machine Learning", "Competitive Programming",
    "Chess", "Badminton", "Music", "Photography", "Open Source",
    "Robotics", "Cricket", "Design",
]
