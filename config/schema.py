from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from engine.timeutil import normalize_day, parse_time
from models.interval import OperatingHours


class OverlapPolicy(str, Enum):
    # Erstes Overlap ≥ Mindestdauer in Iterationsreihenfolge (kompatibel)
    FIRST = "first"
    # Längstes Overlap ≥ Mindestdauer (bewusste Abweichung, opt-in)
    LONGEST = "longest"


# ─── MATCHING (Collegezeiten, Mindest-Overlap, Referenztag) ───

class MatchingConfig(BaseModel):
    """Parameter der Freizeit- und Matching-Berechnung.

    Wird explizit an jede Berechnung übergeben, es gibt keine globalen
    Konstanten. Unveränderlich (frozen), damit parallele Anfragen sich
    dieselbe Instanz teilen können.
    """
    model_config = ConfigDict(frozen=True)

    # Beginn der Collegezeit im Format "HH:MM"
    college_start: str = Field("09:00",
        description="Beginn der Collegezeit (HH:MM)")
    # Ende der Collegezeit im Format "HH:MM" (exklusiv)
    college_end: str = Field("17:00",
        description="Ende der Collegezeit (HH:MM, exklusiv)")
    # Minimale Dauer eines gemeinsamen freien Fensters
    min_overlap_minutes: int = Field(30, ge=1, le=720,
        description="Mindestdauer eines gemeinsamen freien Fensters (Minuten)")
    # Tag, für den Matches berechnet werden
    reference_day: str = Field("MON",
        description="Referenztag für das Matching (MON..SUN)")
    # Wie viele freie Peers die Vorschau von free-now höchstens zeigt
    free_now_preview_limit: int = Field(5, ge=0, le=100,
        description="Maximale Länge der Peer-Vorschau")
    # Obergrenze der Kandidaten pro Match-Anfrage
    max_candidates: int = Field(5000, ge=1,
        description="Maximale Anzahl gescannter Kandidaten pro Anfrage")
    # Auswahl des Overlap-Fensters
    overlap_policy: OverlapPolicy = Field(OverlapPolicy.FIRST,
        description="first = erstes passendes Fenster, longest = längstes")

    @field_validator("college_start", "college_end")
    @classmethod
    def _validate_time(cls, v: str) -> str:
        parse_time(v)
        return v.strip()

    @field_validator("reference_day")
    @classmethod
    def _validate_day(cls, v: str) -> str:
        return normalize_day(v)

    @model_validator(mode='after')
    def _check_hours_order(self):
        if parse_time(self.college_start) >= parse_time(self.college_end):
            raise ValueError(
                f"Collegebeginn {self.college_start} muss vor "
                f"Collegeende {self.college_end} liegen")
        return self

    @property
    def operating_hours(self) -> OperatingHours:
        """Collegezeiten als Minuten-Intervall."""
        return OperatingHours(
            start=parse_time(self.college_start),
            end=parse_time(self.college_end),
        )


# ─── INTERESSENGRUPPEN ───

class GroupConfig(BaseModel):
    """Konfiguration der kurzlebigen Interessengruppen."""
    model_config = ConfigDict(frozen=True)

    # Gruppen mit nur einem Mitglied werden nach dieser Zeit gelöscht
    solo_grace_minutes: int = Field(2, ge=0,
        description="Karenzzeit für Gruppen ohne weitere Mitglieder (Minuten)")
    # Intervall des Aufräum-Laufs
    sweep_interval_seconds: int = Field(60, ge=5,
        description="Intervall des Aufräum-Laufs (Sekunden)")
    # Standarddauer einer neuen Gruppe
    default_duration_minutes: int = Field(60, ge=1,
        description="Standarddauer neuer Gruppen (Minuten)")
    # Obergrenze für die Gruppendauer
    max_duration_minutes: int = Field(480, ge=1,
        description="Maximale Gruppendauer (Minuten)")

    @model_validator(mode='after')
    def _check_durations(self):
        if self.default_duration_minutes > self.max_duration_minutes:
            raise ValueError(
                f"default_duration_minutes ({self.default_duration_minutes}) > "
                f"max_duration_minutes ({self.max_duration_minutes})")
        return self


# ─── GESAMT-CONFIG ───

class CampusConfig(BaseModel):
    """Gesamtkonfiguration des Campus."""
    model_config = ConfigDict(frozen=True)

    # Name des Campus
    campus_name: str = Field("IIIT Kota",
        description="Name des Campus")
    # Nur E-Mail-Adressen dieser Domain dürfen sich registrieren
    email_domain: str = Field("iiitkota.ac.in",
        description="Erlaubte E-Mail-Domain")
    # Pfad zum JSON-Datensatz (Stundenpläne, Profile, Gruppen)
    data_path: str = Field("output/campus_data.json",
        description="Pfad zum JSON-Datensatz")
    # Matching-Parameter
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    # Gruppen-Parameter
    groups: GroupConfig = Field(default_factory=GroupConfig)

    @field_validator("email_domain")
    @classmethod
    def _normalize_domain(cls, v: str) -> str:
        return v.strip().lstrip("@").lower()
