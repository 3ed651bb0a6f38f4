"""Rich-Tabellen für die Terminal-Ausgabe der CLI."""

from typing import TYPE_CHECKING, Sequence

from rich import box
from rich.table import Table

from engine.timeutil import format_time

if TYPE_CHECKING:
    from engine.availability import FreeNowResult
    from engine.free_slots import AgendaItem
    from models.class_record import ClassRecord
    from models.group import InterestGroup
    from models.interval import FreeInterval
    from models.match import Match


def render_free_slots(day: str, slots: Sequence["FreeInterval"]) -> Table:
    table = Table(title=f"Freie Zeiten ({day})", box=box.ROUNDED)
    table.add_column("Beginn")
    table.add_column("Ende")
    table.add_column("Dauer", justify="right")
    for s in slots:
        table.add_row(format_time(s.start), format_time(s.end), f"{s.duration} min")
    if not slots:
        table.add_row("—", "—", "ganztägig belegt")
    return table


def render_agenda(title: str, items: Sequence["AgendaItem"]) -> Table:
    """Tagesübersicht: Veranstaltungen und freie Intervalle."""
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Zeit")
    table.add_column("Was")
    table.add_column("Ort", style="dim")
    for item in items:
        when = f"{format_time(item.start)}–{format_time(item.end)}"
        if item.kind == "free":
            table.add_row(when, f"[green]Frei ({item.duration} min)[/green]", "")
        else:
            table.add_row(when, item.subject or "", item.location or "")
    return table


def render_timetable(title: str, records: Sequence["ClassRecord"]) -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Tag")
    table.add_column("Zeit")
    table.add_column("Fach")
    table.add_column("Ort", style="dim")
    for r in records:
        subject = f"[strike]{r.subject}[/strike] (abgesagt)" if r.is_cancelled else r.subject
        table.add_row(r.day, f"{r.start_time}–{r.end_time}", subject, r.location or "")
    return table


def render_matches(matches: Sequence["Match"]) -> Table:
    table = Table(title=f"Peer-Vorschläge ({len(matches)})", box=box.ROUNDED)
    table.add_column("Name", style="bold")
    table.add_column("Gruppe")
    table.add_column("Gemeinsame Interessen")
    table.add_column("Gemeinsam frei")
    table.add_column("Dauer", justify="right")
    for m in matches:
        slot = m.common_free_slot
        table.add_row(
            m.name,
            f"{m.batch}/{m.sub_batch}",
            ", ".join(m.common_interests),
            f"{slot.start}–{slot.end}",
            f"{slot.duration} min",
        )
    return table


def render_free_now(result: "FreeNowResult") -> Table:
    table = Table(title=f"Gerade frei: {result.count}", box=box.ROUNDED)
    table.add_column("Name", style="bold")
    table.add_column("Batch")
    table.add_column("Sub-Batch")
    for p in result.peers:
        table.add_row(p.name, p.batch or "—", p.sub_batch or "—")
    return table


def render_groups(groups: Sequence["InterestGroup"]) -> Table:
    table = Table(title="Aktive Gruppen", box=box.ROUNDED)
    table.add_column("ID", style="dim")
    table.add_column("Interesse", style="bold")
    table.add_column("Mitglieder", justify="right")
    table.add_column("Läuft ab")
    for g in groups:
        table.add_row(g.id, g.interest_tag, str(len(g.members)),
                      g.expiry_time.strftime("%H:%M"))
    return table
