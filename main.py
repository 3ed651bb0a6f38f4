"""Peer-Optimiser — Haupt-CLI.

Verwendung:
  python main.py config init              Standard-Konfiguration anlegen
  python main.py config show              Konfiguration anzeigen
  python main.py generate                 Testdaten erzeugen und speichern
  python main.py template                 Excel-Import-Vorlage erzeugen
  python main.py import <datei.xlsx>      Excel importieren
  python main.py validate                 Konsistenz-Check des Datensatzes
  python main.py timetable add|show       Stundenplan pflegen / anzeigen
  python main.py free-slots --user <id>   Freie Zeiten eines Tages
  python main.py free-now                 Wer ist gerade frei?
  python main.py match --user <id>        Peer-Vorschläge
  python main.py status --user <id>       Aktueller Status (Vorlesung/frei)
  python main.py profile add|show|update  Profile registrieren / anzeigen / ändern
  python main.py groups create|join|active|sweep   Interessengruppen
"""

import json
import logging
import sys
import time
from datetime import datetime
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from engine.errors import (
    GroupError,
    IncompleteProfile,
    InvalidDayCode,
    InvalidTimeFormat,
    ProfileNotFound,
)

console = Console()


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def _abort(message: str) -> None:
    console.print(f"[red]{message}[/red]")
    sys.exit(1)


def _load_config():
    """Lädt die Konfiguration; ohne Datei gelten die Defaults."""
    from config.manager import ConfigManager
    try:
        return ConfigManager().load_or_default()
    except ValueError as e:
        _abort(str(e))


def _data_path(ctx: click.Context, config) -> Path:
    return Path(ctx.obj.get("data_path") or config.data_path)


def _open_repo(ctx: click.Context, config, create: bool = False):
    """Öffnet den JSON-Datensatz oder bricht mit Hinweis ab."""
    from data.store import CampusRepository
    path = _data_path(ctx, config)
    try:
        return CampusRepository.open(path, create=create)
    except FileNotFoundError:
        _abort(
            f"Keine Datendatei gefunden: {path}\n"
            "Verwenden Sie zunächst 'python main.py generate' oder 'import --save-json'."
        )


def _echo_json(payload) -> None:
    click.echo(json.dumps(payload, ensure_ascii=False, indent=2))


def _day_option(ctx, param, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    from engine.timeutil import normalize_day
    try:
        return normalize_day(value)
    except InvalidDayCode as e:
        raise click.BadParameter(str(e)) from e


def _time_option(ctx, param, value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    from engine.timeutil import parse_time
    try:
        return parse_time(value)
    except InvalidTimeFormat as e:
        raise click.BadParameter(str(e)) from e


def _query_instant(day: Optional[str], at: Optional[int]) -> tuple[str, int]:
    """Tag und Minute der Abfrage; fehlende Angaben kommen von der Uhr."""
    from engine.timeutil import day_code, minutes_of_day
    now = datetime.now()
    return (day or day_code(now), at if at is not None else minutes_of_day(now))


def _setup_logging(verbose: bool) -> None:
    from rich.logging import RichHandler
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


# ─── CONFIG ───────────────────────────────────────────────────────────────────

@click.group("config")
def cmd_config():
    """Konfiguration anlegen oder anzeigen."""


@cmd_config.command("init")
@click.option("--force", is_flag=True, default=False,
              help="Vorhandene Konfiguration überschreiben.")
def config_init(force: bool):
    """Legt die Standard-Konfiguration als YAML an."""
    from config.defaults import default_campus_config
    from config.manager import ConfigManager

    mgr = ConfigManager()
    if not mgr.first_run_check() and not force:
        console.print(
            "[yellow]Eine Konfiguration existiert bereits.[/yellow]\n"
            "Mit [bold]--force[/bold] wird sie überschrieben."
        )
        return
    mgr.save(default_campus_config())


@cmd_config.command("show")
def config_show():
    """Zeigt die aktuelle Konfiguration an."""
    config = _load_config()

    console.print(Panel(
        f"[bold]{config.campus_name}[/bold]  |  @{config.email_domain}  |  "
        f"{config.data_path}",
        title="Campus-Konfiguration",
        border_style="cyan",
    ))

    m = config.matching
    table = Table(title="Matching", box=box.ROUNDED)
    table.add_column("Parameter")
    table.add_column("Wert")
    table.add_row("Collegezeit", f"{m.college_start}–{m.college_end}")
    table.add_row("Mindest-Overlap", f"{m.min_overlap_minutes} min")
    table.add_row("Referenztag", m.reference_day)
    table.add_row("Vorschau free-now", str(m.free_now_preview_limit))
    table.add_row("Max. Kandidaten", str(m.max_candidates))
    table.add_row("Overlap-Auswahl", m.overlap_policy.value)
    console.print(table)

    g = config.groups
    console.print(
        f"\n[bold]Gruppen:[/bold] Karenzzeit {g.solo_grace_minutes} min | "
        f"Aufräumen alle {g.sweep_interval_seconds}s | "
        f"Dauer {g.default_duration_minutes} min (max. {g.max_duration_minutes})"
    )


# ─── GENERATE ─────────────────────────────────────────────────────────────────

@click.command("generate")
@click.option("--seed", default=42, help="Zufalls-Seed für reproduzierbare Daten.")
@click.option("--students", default=5, type=click.IntRange(1, 30),
              help="Studierende pro Sub-Batch.")
@click.option("--validate/--no-validate", "run_validate", default=True,
              help="Konsistenz-Check nach Generierung.")
@click.pass_context
def cmd_generate(ctx: click.Context, seed: int, students: int, run_validate: bool):
    """Erzeugt Testdaten (Stundenpläne und Profile) und speichert sie als JSON."""
    config = _load_config()
    from data.fake_data import FakeDataGenerator

    console.print("[bold]Testdaten werden generiert...[/bold]")
    gen = FakeDataGenerator(config, seed=seed, students_per_sub_batch=students)
    data = gen.generate()
    gen.print_summary(data)
    console.print(f"\n[dim]{data.summary()}[/dim]")

    if run_validate:
        data.check_consistency().print_rich()

    out_path = _data_path(ctx, config)
    data.save_json(out_path)
    console.print(f"[green]✓[/green] JSON gespeichert: {out_path}")


# ─── TEMPLATE ─────────────────────────────────────────────────────────────────

@click.command("template")
@click.option("--output", "-o", default="output/import_vorlage.xlsx",
              help="Ausgabepfad für die Excel-Vorlage.")
def cmd_template(output: str):
    """Erzeugt eine leere Excel-Import-Vorlage."""
    from data.excel_import import generate_template

    out_path = Path(output)
    generate_template(out_path)
    console.print(f"[green]✓[/green] Vorlage gespeichert: {out_path}")
    console.print(
        "\nBlätter in der Vorlage:\n"
        "  [cyan]Stundenplan[/cyan]  – Batch, Sub-Batch, Tag, Beginn, Ende, Fach, Ort\n"
        "  [cyan]Profile[/cyan]      – User-ID, Name, Batch, Sub-Batch, Interessen"
    )


# ─── IMPORT ───────────────────────────────────────────────────────────────────

@click.command("import")
@click.argument("datei", type=click.Path(exists=True, path_type=Path))
@click.option("--save-json", is_flag=True, default=False,
              help="Importierte Daten als JSON-Datensatz speichern.")
@click.pass_context
def cmd_import(ctx: click.Context, datei: Path, save_json: bool):
    """Importiert Stundenplan und Profile aus einer Excel-Datei."""
    config = _load_config()
    from data.excel_import import ExcelImportError, import_from_excel

    console.print(f"[bold]Importiere:[/bold] {datei}")
    try:
        data, report = import_from_excel(datei)
    except ExcelImportError as e:
        console.print(f"[red bold]Import fehlgeschlagen:[/red bold]\n{e}")
        sys.exit(1)

    console.print("[green]✓[/green] Import erfolgreich!")
    console.print(f"\n{data.summary()}")
    report.print_rich()

    if save_json:
        out_path = _data_path(ctx, config)
        data.save_json(out_path)
        console.print(f"[green]✓[/green] Daten gespeichert: {out_path}")


# ─── VALIDATE ─────────────────────────────────────────────────────────────────

@click.command("validate")
@click.pass_context
def cmd_validate(ctx: click.Context):
    """Führt einen Konsistenz-Check auf dem gespeicherten Datensatz durch."""
    config = _load_config()
    repo = _open_repo(ctx, config)

    console.print(f"\n{repo.data.summary()}\n")
    report = repo.data.check_consistency()
    report.print_rich()
    sys.exit(0 if report.is_consistent else 1)


# ─── TIMETABLE ────────────────────────────────────────────────────────────────

@click.group("timetable")
def cmd_timetable():
    """Stundenplan-Einträge pflegen und anzeigen."""


@cmd_timetable.command("add")
@click.option("--batch", required=True)
@click.option("--sub-batch", required=True)
@click.option("--day", required=True)
@click.option("--start", "start_time", required=True, help="Beginn (HH:MM).")
@click.option("--end", "end_time", required=True, help="Ende (HH:MM).")
@click.option("--subject", required=True)
@click.option("--location", default=None)
@click.pass_context
def timetable_add(ctx, batch, sub_batch, day, start_time, end_time, subject, location):
    """Fügt eine Veranstaltung hinzu."""
    from models.class_record import ClassRecord

    config = _load_config()
    try:
        record = ClassRecord(
            batch=batch, sub_batch=sub_batch, day=day,
            start_time=start_time, end_time=end_time,
            subject=subject, location=location,
        )
    except ValidationError as e:
        _abort(f"Ungültiger Eintrag: {e.errors()[0]['msg']}")

    repo = _open_repo(ctx, config, create=True)
    repo.timetable.add(record)
    repo.save()
    console.print(
        f"[green]✓[/green] {record.section_key} {record.day} "
        f"{record.start_time}–{record.end_time} {record.subject}"
    )


@cmd_timetable.command("show")
@click.option("--user", "user_id", default=None, help="Stundenplan der Gruppe dieses Profils.")
@click.option("--section", default=None, help="Gruppen-Schlüssel, z.B. A-A1.")
@click.option("--day", default=None, callback=_day_option,
              help="Nur dieser Tag, als Tagesübersicht mit freien Zeiten.")
@click.pass_context
def timetable_show(ctx, user_id, section, day):
    """Zeigt den Stundenplan einer Gruppe (Woche oder Tag)."""
    from engine.free_slots import build_day_agenda
    from export.tui_renderer import render_agenda, render_timetable

    config = _load_config()
    repo = _open_repo(ctx, config)
    if user_id:
        try:
            profile = repo.profiles.get(user_id)
        except ProfileNotFound as e:
            _abort(str(e))
        if not profile.has_section:
            _abort(str(IncompleteProfile(user_id)))
        section = profile.section_key
    if not section:
        _abort("Bitte --user oder --section angeben.")

    records = repo.timetable.find_sorted(section, day)
    if day is None:
        console.print(render_timetable(f"Stundenplan {section}", records))
        return

    agenda = build_day_agenda(
        records,
        config.matching.operating_hours,
        blocked=repo.timetable.blocked(section, day),
        is_holiday=repo.timetable.is_holiday(day),
    )
    console.print(render_agenda(f"{section} am {day}", agenda))


# ─── FREE-SLOTS ───────────────────────────────────────────────────────────────

@click.command("free-slots")
@click.option("--user", "user_id", required=True)
@click.option("--day", default=None, callback=_day_option,
              help="Wochentag (Default: Referenztag der Konfiguration).")
@click.option("--json", "as_json", is_flag=True, default=False)
@click.pass_context
def cmd_free_slots(ctx, user_id: str, day: Optional[str], as_json: bool):
    """Freie Zeiten der Gruppe eines Studierenden an einem Tag."""
    from engine.free_slots import FreeSlotCalculator
    from export.responses import free_slots_response
    from export.tui_renderer import render_free_slots

    config = _load_config()
    repo = _open_repo(ctx, config)
    day = day or config.matching.reference_day
    try:
        profile = repo.profiles.get(user_id)
    except ProfileNotFound as e:
        _abort(str(e))
    if not profile.has_section:
        _abort(str(IncompleteProfile(user_id)))

    slots = FreeSlotCalculator(repo.timetable, config.matching).for_section(
        profile.section_key, day)
    if as_json:
        _echo_json(free_slots_response(day, slots))
    else:
        console.print(render_free_slots(day, slots))


# ─── FREE-NOW ─────────────────────────────────────────────────────────────────

@click.command("free-now")
@click.option("--user", "user_id", default=None,
              help="Anfragender Studierender (wird nicht mitgezählt).")
@click.option("--day", default=None, callback=_day_option, help="Default: heute.")
@click.option("--at", default=None, callback=_time_option,
              help="Uhrzeit HH:MM (Default: jetzt).")
@click.option("--json", "as_json", is_flag=True, default=False)
@click.pass_context
def cmd_free_now(ctx, user_id, day, at, as_json: bool):
    """Zählt die Studierenden, die gerade keine Vorlesung haben."""
    from engine.availability import find_free_now
    from engine.free_slots import group_busy_by_section
    from export.responses import free_now_response
    from export.tui_renderer import render_free_now
    from models.interval import BusyInterval, BusyReason

    config = _load_config()
    repo = _open_repo(ctx, config)
    day, minute = _query_instant(day, at)
    hours = config.matching.operating_hours

    busy_by_section, campus_wide = group_busy_by_section(
        repo.timetable.find(day=day), repo.timetable.blocked(None, day))
    if repo.timetable.is_holiday(day):
        campus_wide.append(BusyInterval(hours.start, hours.end, BusyReason.HOLIDAY, "Feiertag"))

    result = find_free_now(
        busy_by_section,
        repo.profiles.find(),
        minute,
        hours,
        preview_limit=config.matching.free_now_preview_limit,
        exclude_user_id=user_id,
        campus_wide=campus_wide,
    )
    if as_json:
        _echo_json(free_now_response(result))
    else:
        console.print(render_free_now(result))


# ─── MATCH ────────────────────────────────────────────────────────────────────

@click.command("match")
@click.option("--user", "user_id", required=True)
@click.option("--policy", type=click.Choice(["first", "longest"]), default=None,
              help="Auswahl des gemeinsamen Fensters (Default: Konfiguration).")
@click.option("--day", default=None, callback=_day_option,
              help="Referenztag überschreiben.")
@click.option("--use-index", is_flag=True, default=False,
              help="Kandidaten über den Interessen-Index vorfiltern.")
@click.option("--json", "as_json", is_flag=True, default=False)
@click.pass_context
def cmd_match(ctx, user_id: str, policy, day, use_index: bool, as_json: bool):
    """Schlägt Peers mit gemeinsamen Interessen und Freizeit vor."""
    from config.schema import OverlapPolicy
    from engine.matcher import PeerMatcher
    from export.responses import matches_response
    from export.tui_renderer import render_matches

    config = _load_config()
    repo = _open_repo(ctx, config)

    overrides = {}
    if policy:
        overrides["overlap_policy"] = OverlapPolicy(policy)
    if day:
        overrides["reference_day"] = day
    matching = config.matching.model_copy(update=overrides)

    matcher = PeerMatcher(
        repo.timetable, repo.profiles, matching,
        interest_index=repo.profiles.interest_index() if use_index else None,
    )
    try:
        matches = matcher.find_matches_for(user_id)
    except (ProfileNotFound, IncompleteProfile) as e:
        _abort(str(e))

    if as_json:
        _echo_json(matches_response(matches))
    elif not matches:
        console.print("[dim]Keine passenden Peers gefunden.[/dim]")
    else:
        console.print(render_matches(matches))


# ─── STATUS ───────────────────────────────────────────────────────────────────

@click.command("status")
@click.option("--user", "user_id", required=True)
@click.option("--day", default=None, callback=_day_option, help="Default: heute.")
@click.option("--at", default=None, callback=_time_option,
              help="Uhrzeit HH:MM (Default: jetzt).")
@click.option("--json", "as_json", is_flag=True, default=False)
@click.pass_context
def cmd_status(ctx, user_id: str, day, at, as_json: bool):
    """Zeigt, ob die Gruppe eines Studierenden gerade Vorlesung hat."""
    from engine.availability import StatusKind, current_status
    from engine.free_slots import FreeSlotCalculator
    from engine.timeutil import format_time
    from export.responses import status_response

    config = _load_config()
    repo = _open_repo(ctx, config)
    day, minute = _query_instant(day, at)
    try:
        profile = repo.profiles.get(user_id)
    except ProfileNotFound as e:
        _abort(str(e))
    if not profile.has_section:
        _abort(str(IncompleteProfile(user_id)))

    busy = FreeSlotCalculator(repo.timetable, config.matching).busy_for(
        profile.section_key, day)
    status = current_status(busy, minute, config.matching.operating_hours)

    if as_json:
        _echo_json(status_response(status))
    elif status.kind == StatusKind.IN_CLASS:
        console.print(f"[red]In Vorlesung:[/red] {status.label} bis {format_time(status.until)}")
    elif status.kind == StatusKind.FREE:
        console.print(f"[green]Frei[/green] bis {format_time(status.until)}")
    else:
        console.print("[dim]Außerhalb der Collegezeit.[/dim]")


# ─── PROFILE ──────────────────────────────────────────────────────────────────

@click.group("profile")
def cmd_profile():
    """Studierendenprofile registrieren, anzeigen und ändern."""


@cmd_profile.command("add")
@click.option("--name", required=True)
@click.option("--email", required=True, help="Campus-E-Mail, z.B. 2024kucp1042@iiitkota.ac.in")
@click.option("--interests", default="", help="Kommagetrennt, z.B. 'DSA, Chess'.")
@click.pass_context
def profile_add(ctx, name: str, email: str, interests: str):
    """Registriert (oder aktualisiert) ein Profil; die Gruppe folgt aus der ID."""
    from data.registration import register_student

    config = _load_config()
    try:
        profile = register_student(name, email, config, interests.split(","))
    except ValueError as e:
        _abort(str(e))

    repo = _open_repo(ctx, config, create=True)
    repo.profiles.upsert(profile)
    repo.save()
    section = profile.section_key if profile.has_section else "keine Gruppe"
    console.print(
        f"[green]✓[/green] {profile.user_id} ({profile.branch}, {profile.year}) → {section}"
    )


@cmd_profile.command("show")
@click.option("--user", "user_id", required=True)
@click.pass_context
def profile_show(ctx, user_id: str):
    """Zeigt ein Profil an."""
    config = _load_config()
    repo = _open_repo(ctx, config)
    try:
        p = repo.profiles.get(user_id)
    except ProfileNotFound as e:
        _abort(str(e))

    table = Table(title=p.name, box=box.ROUNDED, show_header=False)
    table.add_column("Feld", style="bold")
    table.add_column("Wert")
    table.add_row("User-ID", p.user_id)
    table.add_row("E-Mail", p.email or "—")
    table.add_row("Zweig / Jahr", f"{p.branch or '—'} / {p.year or '—'}")
    table.add_row("Gruppe", p.section_key if p.has_section else "—")
    table.add_row("Interessen", ", ".join(p.interests) or "—")
    if p.bio:
        table.add_row("Bio", p.bio)
    console.print(table)


@cmd_profile.command("update")
@click.option("--user", "user_id", required=True)
@click.option("--name", default=None)
@click.option("--interests", default=None,
              help="Ersetzt die Interessen, kommagetrennt, z.B. 'DSA, Chess'.")
@click.option("--bio", default=None)
@click.pass_context
def profile_update(ctx, user_id: str, name: Optional[str], interests: Optional[str],
                   bio: Optional[str]):
    """Ändert einzelne Felder eines Profils; nicht angegebene bleiben erhalten."""
    config = _load_config()
    repo = _open_repo(ctx, config)
    try:
        profile = repo.profiles.update(
            user_id,
            name=name.strip() if name is not None else None,
            interests=interests.split(",") if interests is not None else None,
            bio=bio,
        )
    except ProfileNotFound as e:
        _abort(str(e))
    except ValidationError as e:
        _abort(f"Ungültiges Profil: {e.errors()[0]['msg']}")
    repo.save()
    console.print(
        f"[green]✓[/green] {profile.user_id} aktualisiert "
        f"(Interessen: {', '.join(profile.interests) or '—'})"
    )


# ─── GROUPS ───────────────────────────────────────────────────────────────────

@click.group("groups")
def cmd_groups():
    """Kurzlebige Interessengruppen."""


def _registry(repo, config):
    from data.groups import GroupRegistry
    return GroupRegistry(repo.groups, config.groups)


@cmd_groups.command("create")
@click.option("--user", "user_id", required=True)
@click.option("--tag", required=True, help="Interessen-Tag, z.B. 'Chess'.")
@click.option("--duration", type=click.IntRange(min=1), default=None,
              help="Dauer in Minuten (Default: Konfiguration).")
@click.option("--json", "as_json", is_flag=True, default=False)
@click.pass_context
def groups_create(ctx, user_id: str, tag: str, duration: Optional[int], as_json: bool):
    """Legt eine Gruppe an; der Ersteller ist erstes Mitglied."""
    from export.responses import group_response

    config = _load_config()
    repo = _open_repo(ctx, config, create=True)
    try:
        group = _registry(repo, config).create(
            user_id, tag,
            duration if duration is not None else config.groups.default_duration_minutes,
            datetime.now(),
        )
    except (GroupError, ValueError) as e:
        _abort(str(e))
    repo.save()

    if as_json:
        _echo_json(group_response(group))
    else:
        console.print(f"[green]✓[/green] Gruppe {group.id} '{group.interest_tag}' "
                      f"bis {group.expiry_time:%H:%M}")


@cmd_groups.command("join")
@click.argument("group_id")
@click.option("--user", "user_id", required=True)
@click.option("--json", "as_json", is_flag=True, default=False)
@click.pass_context
def groups_join(ctx, group_id: str, user_id: str, as_json: bool):
    """Tritt einer aktiven Gruppe bei."""
    from export.responses import group_response

    config = _load_config()
    repo = _open_repo(ctx, config)
    try:
        group = _registry(repo, config).join(group_id, user_id)
    except GroupError as e:
        _abort(str(e))
    repo.save()

    if as_json:
        _echo_json(group_response(group))
    else:
        console.print(f"[green]✓[/green] {user_id} ist jetzt Mitglied von "
                      f"'{group.interest_tag}' ({len(group.members)} Mitglieder)")


@cmd_groups.command("active")
@click.option("--json", "as_json", is_flag=True, default=False)
@click.pass_context
def groups_active(ctx, as_json: bool):
    """Listet aktive Gruppen, neueste zuerst."""
    from export.responses import group_response
    from export.tui_renderer import render_groups

    config = _load_config()
    repo = _open_repo(ctx, config)
    groups = _registry(repo, config).active()
    if as_json:
        _echo_json([group_response(g) for g in groups])
    elif not groups:
        console.print("[dim]Keine aktiven Gruppen.[/dim]")
    else:
        console.print(render_groups(groups))


@cmd_groups.command("sweep")
@click.option("--loop", is_flag=True, default=False,
              help="Wiederholt den Aufräum-Lauf bis Strg+C.")
@click.option("--interval", type=int, default=None,
              help="Sekunden zwischen zwei Läufen (Default: Konfiguration).")
@click.pass_context
def groups_sweep(ctx, loop: bool, interval: Optional[int]):
    """Löscht verwaiste und deaktiviert abgelaufene Gruppen."""
    config = _load_config()
    interval = interval or config.groups.sweep_interval_seconds

    while True:
        repo = _open_repo(ctx, config)
        deleted, deactivated = _registry(repo, config).sweep(datetime.now())
        repo.save()
        console.print(f"[green]✓[/green] {deleted} gelöscht, {deactivated} deaktiviert")
        if not loop:
            break
        try:
            time.sleep(interval)
        except KeyboardInterrupt:
            console.print("[dim]Aufräumen beendet.[/dim]")
            break


# ─── HAUPT-CLI ────────────────────────────────────────────────────────────────

@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False,
              help="Ausführliches Logging (Debug).")
@click.option("--data", "data_path", default=None,
              help="Pfad zum JSON-Datensatz (Default: data_path der Konfiguration).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, data_path: Optional[str]):
    """Peer-Optimiser: freie Zeiten und Lernpartner auf dem Campus.

    Starten Sie mit: python main.py config init && python main.py generate
    """
    ctx.ensure_object(dict)
    ctx.obj["data_path"] = data_path
    _setup_logging(verbose)


def main():
    """Einstiegspunkt. Weist beim ersten Aufruf auf config init hin."""
    from config.manager import ConfigManager

    if len(sys.argv) == 1 and ConfigManager().first_run_check():
        console.print(Panel(
            "[bold]Willkommen beim Peer-Optimiser![/bold]\n\n"
            "Keine Konfiguration gefunden.\n"
            "Legen Sie eine an mit [bold]python main.py config init[/bold].",
            border_style="cyan",
        ))

    cli(obj={})


# Befehle registrieren
cli.add_command(cmd_config)
cli.add_command(cmd_generate)
cli.add_command(cmd_template)
cli.add_command(cmd_import)
cli.add_command(cmd_validate)
cli.add_command(cmd_timetable)
cli.add_command(cmd_free_slots)
cli.add_command(cmd_free_now)
cli.add_command(cmd_match)
cli.add_command(cmd_status)
cli.add_command(cmd_profile)
cli.add_command(cmd_groups)


if __name__ == "__main__":
    main()
