"""Excel-Import und Template-Generator für Stundenpläne und Profile.

Template-Generator: Leere Excel-Vorlage mit Beispielzeilen.
Import-Funktion:    Excel → CampusData mit Validierung und ConsistencyReport.
"""

from datetime import datetime, time
from pathlib import Path

from pydantic import ValidationError

from config.defaults import SEED_DAYS
from models.campus_data import CampusData, ConsistencyReport
from models.class_record import ClassRecord
from models.profile import StudentProfile


class ExcelImportError(Exception):
    """Fehler beim Excel-Import."""


SHEET_TIMETABLE = "Stundenplan"
SHEET_PROFILES = "Profile"

_TIMETABLE_HEADERS = ["Batch", "Sub-Batch", "Tag", "Beginn", "Ende", "Fach", "Ort", "Abgesagt"]
_PROFILE_HEADERS = ["User-ID", "Name", "Batch", "Sub-Batch", "Interessen"]

_TRUE_VALUES = {"ja", "yes", "true", "1", "x"}


def _split_tags(raw: str) -> list[str]:
    """Parst Interessen 'DSA, Chess; Music' → ['DSA', 'Chess', 'Music']."""
    return [t.strip() for t in raw.replace(";", ",").split(",") if t.strip()]


def _cell_str(value) -> str:
    """Zellwert als String; Uhrzeit-Zellen werden zu "HH:MM"."""
    if value is None:
        return ""
    if isinstance(value, (time, datetime)):
        return value.strftime("%H:%M")
    return str(value).strip()


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    return str(err.get("msg", e))


def generate_template(path: Path) -> None:
    """Erzeugt eine Excel-Vorlage.

    Blätter:
      - Stundenplan: Batch, Sub-Batch, Tag, Beginn, Ende, Fach, Ort, Abgesagt
      - Profile:     User-ID, Name, Batch, Sub-Batch, Interessen
    """
    import openpyxl
    from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
    from openpyxl.utils import get_column_letter
    from openpyxl.worksheet.datavalidation import DataValidation

    wb = openpyxl.Workbook()

    # ── Hilfs-Styles ─────────────────────────────────────────────────────────
    hdr_font = Font(bold=True, color="FFFFFF", size=11)
    hdr_fill = PatternFill("solid", fgColor="2E6DA4")
    ex_font = Font(italic=True, color="888888")
    ex_fill = PatternFill("solid", fgColor="F5F5F5")
    center = Alignment(horizontal="center", vertical="center")
    thin = Side(style="thin", color="BBBBBB")
    border = Border(left=thin, right=thin, top=thin, bottom=thin)

    def style_header(cell):
        cell.font = hdr_font
        cell.fill = hdr_fill
        cell.alignment = center
        cell.border = border

    def style_example(cell):
        cell.font = ex_font
        cell.fill = ex_fill
        cell.border = border

    def write_sheet(ws, headers: list[str], widths: list[int], example: list):
        for col, (h, w) in enumerate(zip(headers, widths), 1):
            style_header(ws.cell(row=1, column=col, value=h))
            ws.column_dimensions[get_column_letter(col)].width = w
        for col, val in enumerate(example, 1):
            style_example(ws.cell(row=2, column=col, value=val))
        ws.freeze_panes = "A2"

    # ── Blatt 1: Stundenplan ──────────────────────────────────────────────────
    ws_tt = wb.active
    ws_tt.title = SHEET_TIMETABLE
    write_sheet(
        ws_tt, _TIMETABLE_HEADERS, [8, 11, 8, 9, 9, 16, 28, 10],
        ["A", "A1", "MON", "09:00", "10:00", "DSA", "Dr. Arun Kumar | LT-1", "nein"],
    )
    day_validation = DataValidation(
        type="list", formula1='"' + ",".join(SEED_DAYS + ["SAT", "SUN"]) + '"',
        allow_blank=False,
    )
    ws_tt.add_data_validation(day_validation)
    day_validation.add("C2:C2000")

    # ── Blatt 2: Profile ──────────────────────────────────────────────────────
    ws_pr = wb.create_sheet(SHEET_PROFILES)
    write_sheet(
        ws_pr, _PROFILE_HEADERS, [16, 24, 8, 11, 40],
        ["2024kucp1042", "Riya Sharma", "A", "A2", "DSA, Chess"],
    )

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    wb.save(str(path))


class ExcelImporter:
    """Importiert Stundenplan und Profile aus einer Excel-Vorlage.

    Beispielzeilen aus der Vorlage (kursiv, grau) werden nicht erkannt und
    müssen vor dem Import gelöscht oder überschrieben werden.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._wb = None
        self._errors: list[str] = []
        self._warnings: list[str] = []

    def _open(self):
        import openpyxl
        if not self.path.exists():
            raise ExcelImportError(f"Datei nicht gefunden: {self.path}")
        try:
            self._wb = openpyxl.load_workbook(
                str(self.path), read_only=True, data_only=True
            )
        except Exception as e:
            raise ExcelImportError(f"Fehler beim Öffnen der Excel-Datei: {e}") from e

    def _get_sheet(self, name: str):
        if self._wb is None:
            self._open()
        for sn in self._wb.sheetnames:
            if sn.strip().lower() == name.strip().lower():
                return self._wb[sn]
        return None

    def _sheet_rows(self, sheet) -> list[dict]:
        """Tabellenblatt → Liste von Dicts (erste Zeile = Header)."""
        rows = list(sheet.iter_rows(values_only=True))
        if not rows:
            return []
        headers = [
            str(h).strip().lower() if h is not None else f"col_{i}"
            for i, h in enumerate(rows[0])
        ]
        result = []
        for row in rows[1:]:
            if all(v is None or v == "" for v in row):
                continue
            result.append({
                headers[i]: _cell_str(v)
                for i, v in enumerate(row)
                if i < len(headers)
            })
        return result

    # ── Stundenplan ──────────────────────────────────────────────────────────

    def import_timetable(self) -> list[ClassRecord]:
        """Importiert Einträge aus Blatt 'Stundenplan' (Pflicht)."""
        sheet = self._get_sheet(SHEET_TIMETABLE)
        if sheet is None:
            raise ExcelImportError(f"Blatt '{SHEET_TIMETABLE}' fehlt.")

        records: list[ClassRecord] = []
        for n, row in enumerate(self._sheet_rows(sheet), 2):
            row_id = f"{SHEET_TIMETABLE} Zeile {n}"
            try:
                records.append(ClassRecord(
                    batch=row.get("batch", ""),
                    sub_batch=row.get("sub-batch", ""),
                    day=row.get("tag", ""),
                    start_time=row.get("beginn", ""),
                    end_time=row.get("ende", ""),
                    subject=row.get("fach", ""),
                    location=row.get("ort") or None,
                    is_cancelled=row.get("abgesagt", "").lower() in _TRUE_VALUES,
                ))
            except ValidationError as e:
                self._errors.append(f"{row_id}: {_first_error(e)}")
                continue
            if not records[-1].batch or not records[-1].sub_batch:
                self._errors.append(f"{row_id}: Batch/Sub-Batch fehlt.")
                records.pop()
        return records

    # ── Profile ──────────────────────────────────────────────────────────────

    def import_profiles(self) -> list[StudentProfile]:
        """Importiert Profile aus Blatt 'Profile' (optional)."""
        sheet = self._get_sheet(SHEET_PROFILES)
        if sheet is None:
            self._warnings.append(f"Blatt '{SHEET_PROFILES}' fehlt, keine Profile importiert.")
            return []

        profiles: list[StudentProfile] = []
        for n, row in enumerate(self._sheet_rows(sheet), 2):
            row_id = f"{SHEET_PROFILES} Zeile {n}"
            user_id = row.get("user-id", "")
            name = row.get("name", "")
            if not user_id or not name:
                self._errors.append(f"{row_id}: User-ID und Name sind Pflicht.")
                continue
            profile = StudentProfile(
                user_id=user_id,
                name=name,
                batch=row.get("batch") or None,
                sub_batch=row.get("sub-batch") or None,
                interests=_split_tags(row.get("interessen", "")),
            )
            if not profile.interests:
                self._warnings.append(f"{row_id}: {user_id} hat keine Interessen.")
            profiles.append(profile)
        return profiles

    def import_all(self) -> tuple[CampusData, ConsistencyReport]:
        """Importiert alle Daten → CampusData + ConsistencyReport."""
        self._open()
        self._errors = []
        self._warnings = []

        classes = self.import_timetable()
        profiles = self.import_profiles()

        if self._errors:
            raise ExcelImportError(
                f"Import mit {len(self._errors)} Fehlern:\n"
                + "\n".join(f"  • {e}" for e in self._errors)
            )

        data = CampusData(classes=classes, profiles=profiles)
        report = data.check_consistency()
        report = ConsistencyReport(
            is_consistent=report.is_consistent,
            errors=report.errors,
            warnings=report.warnings + self._warnings,
        )
        return data, report


def import_from_excel(path: Path) -> tuple[CampusData, ConsistencyReport]:
    """Importiert Stundenplan und Profile aus einer Excel-Datei.

    Raises:
        ExcelImportError: Bei kritischen Import-Fehlern.
    """
    return ExcelImporter(path).import_all()
