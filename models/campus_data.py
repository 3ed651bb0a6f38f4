"""CampusData: Vollständiger Datensatz + Konsistenz-Check (Pydantic v2)."""

from collections import defaultdict
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, field_validator

from engine.timeutil import normalize_day
from models.blocked_period import BlockedPeriod
from models.class_record import ClassRecord
from models.group import InterestGroup
from models.profile import StudentProfile


class ConsistencyReport(BaseModel):
    """Ergebnis des Konsistenz-Checks."""

    is_consistent: bool
    errors: list[str]      # Daten widersprüchlich (z.B. doppelte User-IDs)
    warnings: list[str]    # Auffällig aber verwendbar

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel

        console = Console()
        if self.is_consistent:
            status = "[bold green]✓ KONSISTENT[/bold green]"
        else:
            status = "[bold red]✗ INKONSISTENT[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler:[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {e}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {w}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Daten-Check", border_style="cyan"))


class CampusData(BaseModel):
    """Vollständiger Datensatz: Stundenpläne, Profile, Gruppen, Sperrzeiten."""

    classes: list[ClassRecord] = []
    profiles: list[StudentProfile] = []
    groups: list[InterestGroup] = []
    blocked_periods: list[BlockedPeriod] = []
    holidays: list[str] = []                 # Tage ohne Collegebetrieb, z.B. ["SAT"]
    created_at: Optional[datetime] = None
    modified_at: Optional[datetime] = None
    data_version: str = "1.0"

    @field_validator("holidays")
    @classmethod
    def _normalize_holidays(cls, v: list[str]) -> list[str]:
        return [normalize_day(d) for d in v]

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Datensatz."""
        sections = {c.section_key for c in self.classes}
        batches = {c.batch for c in self.classes}
        active_groups = sum(1 for g in self.groups if g.is_active)
        no_section = sum(1 for p in self.profiles if not p.has_section)
        lines = [
            f"Stundenplan-Einträge: {len(self.classes)} "
            f"({len(sections)} Gruppen in {len(batches)} Batches)",
            f"Abgesagt: {sum(1 for c in self.classes if c.is_cancelled)}",
            f"Profile: {len(self.profiles)}"
            + (f" ({no_section} ohne Gruppe)" if no_section else ""),
            f"Interessengruppen: {len(self.groups)} ({active_groups} aktiv)",
            f"Sperrzeiten: {len(self.blocked_periods)}" if self.blocked_periods else "",
            f"Feiertage: {', '.join(self.holidays)}" if self.holidays else "",
        ]
        return "\n".join(l for l in lines if l)

    # ─── Konsistenz-Check ───

    def check_consistency(self) -> ConsistencyReport:
        """Prüft den Datensatz auf Widersprüche.

        Prüfungen:
        1. User-IDs sind eindeutig
        2. Profile ohne Batch/Sub-Batch (können nicht matchen)
        3. Profile deren Gruppe keinen Stundenplan hat
        4. Überlappende Veranstaltungen derselben Gruppe am selben Tag
        5. Sub-Batch passt nicht zum Batch (z.B. Batch "A", Sub-Batch "B1")
        """
        errors: list[str] = []
        warnings: list[str] = []

        # ── 1. Eindeutige User-IDs ──
        seen: set[str] = set()
        for p in self.profiles:
            if p.user_id in seen:
                errors.append(f"User-ID doppelt vergeben: {p.user_id}")
            seen.add(p.user_id)

        # ── 2./3. Profile ohne Gruppe oder ohne Stundenplan ──
        scheduled = {c.section_key for c in self.classes}
        for p in self.profiles:
            if not p.has_section:
                warnings.append(f"{p.user_id}: Kein Batch/Sub-Batch, kein Matching möglich.")
            elif p.section_key not in scheduled:
                warnings.append(
                    f"{p.user_id}: Gruppe {p.section_key} hat keinen Stundenplan "
                    f"(gilt als ganztägig frei).")

        # ── 4. Überlappungen innerhalb einer Gruppe ──
        by_group_day: dict[tuple[str, str], list[ClassRecord]] = defaultdict(list)
        for c in self.classes:
            if not c.is_cancelled:
                by_group_day[(c.section_key, c.day)].append(c)
        for (key, day), records in sorted(by_group_day.items()):
            records = sorted(records, key=lambda r: r.start_minutes)
            for prev, cur in zip(records, records[1:]):
                if cur.start_minutes < prev.end_minutes:
                    warnings.append(
                        f"{key} {day}: '{prev.subject}' {prev.start_time}–{prev.end_time} "
                        f"überlappt '{cur.subject}' {cur.start_time}–{cur.end_time}.")

        # ── 5. Sub-Batch-Präfix ──
        for key in sorted(scheduled):
            batch, _, sub_batch = key.partition("-")
            if not sub_batch.startswith(batch):
                warnings.append(f"Gruppe {key}: Sub-Batch gehört nicht zu Batch {batch}.")

        return ConsistencyReport(
            is_consistent=len(errors) == 0,
            errors=errors,
            warnings=warnings,
        )

    # ─── Persistenz ───

    def save_json(self, path: Path) -> None:
        """Speichert den kompletten Datensatz als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        now = datetime.now(timezone.utc)
        updated = self.model_copy(update={
            "modified_at": now,
            "created_at": self.created_at or now,
        })
        with open(path, "w", encoding="utf-8") as f:
            f.write(updated.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "CampusData":
        """Lädt einen Datensatz aus einer JSON-Datei."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"JSON-Datei nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            return cls.model_validate_json(f.read())
