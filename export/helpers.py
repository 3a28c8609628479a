"""Gemeinsame Hilfsfunktionen für Terminal-, Excel- und PDF-Export."""

from datetime import date

from pydantic import BaseModel

from models.course import Course
from models.timeslot import Weekday, format_minutes
from solver.generator import Schedule

# ─── Farbpalette (RRGGBB, ohne #) ─────────────────────────────────────────────

COLORS: dict[str, str] = {
    "gap":      "FF9999",
    "free":     "F5F5F5",
    "header":   "4472C4",
}

_WORKDAYS = [Weekday.MO, Weekday.DI, Weekday.MI, Weekday.DO, Weekday.FR]


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Wandelt RRGGBB-String in (r, g, b)-Tupel um."""
    h = hex_color.lstrip("#")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def lighten(hex_color: str, factor: float = 0.6) -> str:
    """Hellt eine Farbe Richtung Weiß auf (factor 0 = unverändert, 1 = weiß)."""
    r, g, b = hex_to_rgb(hex_color)
    r, g, b = (int(c + (255 - c) * factor) for c in (r, g, b))
    return f"{r:02X}{g:02X}{b:02X}"


def today_str() -> str:
    """Gibt das heutige Datum als DD.MM.YYYY zurück."""
    return date.today().strftime("%d.%m.%Y")


# ─── Wochenraster ─────────────────────────────────────────────────────────────

class GridCell(BaseModel):
    """Eine Zelle (Tag × Stunde) des Wochenrasters."""

    courses: list[Course] = []
    is_gap: bool = False


class GridRow(BaseModel):
    """Eine Stundenzeile des Wochenrasters."""

    start: int   # Minuten seit Tagesbeginn
    end: int
    cells: list[GridCell]

    @property
    def label(self) -> str:
        return f"{format_minutes(self.start)}–{format_minutes(self.end)}"


def schedule_days(schedule: Schedule) -> list[Weekday]:
    """Mo–Fr, plus Sa/So falls der Stundenplan dort Termine hat."""
    used = {s.day for c in schedule.subjects for s in c.time_slots}
    days = list(_WORKDAYS)
    for extra in (Weekday.SA, Weekday.SO):
        if extra in used:
            days.append(extra)
    return days


def week_grid(schedule: Schedule) -> tuple[list[Weekday], list[GridRow]]:
    """Baut ein Stundenraster von der frühesten bis zur spätesten vollen Stunde.

    Ein Kurs erscheint in jeder Stundenzeile, die einer seiner Termine
    berührt. Leere Zeilen zwischen dem ersten und letzten Termin eines
    Tages werden als Lücke markiert.
    """
    days = schedule_days(schedule)
    slots = [(c, s) for c in schedule.subjects for s in c.time_slots]
    if not slots:
        return days, []

    first_hour = min(s.start_minutes for _, s in slots) // 60
    last_hour = -(-max(s.end_minutes for _, s in slots) // 60)   # aufrunden

    day_bounds: dict[Weekday, tuple[int, int]] = {}
    for _, s in slots:
        lo, hi = day_bounds.get(s.day, (s.start_minutes, s.end_minutes))
        day_bounds[s.day] = (min(lo, s.start_minutes), max(hi, s.end_minutes))

    rows: list[GridRow] = []
    for hour in range(first_hour, last_hour):
        start, end = hour * 60, (hour + 1) * 60
        cells: list[GridCell] = []
        for day in days:
            here = [
                c for c, s in slots
                if s.day == day and s.start_minutes < end and start < s.end_minutes
            ]
            # Kurse mit mehreren Terminen nur einmal pro Zelle
            unique = list({c.id: c for c in here}.values())
            bounds = day_bounds.get(day)
            is_gap = (
                not unique and bounds is not None
                and bounds[0] < start and end <= bounds[1]
            )
            cells.append(GridCell(courses=unique, is_gap=is_gap))
        rows.append(GridRow(start=start, end=end, cells=cells))
    return days, rows


# ─── Zelleninhalt ─────────────────────────────────────────────────────────────

def format_cell(cell: GridCell) -> str:
    """"CODE\\nName" pro Kurs, mehrere Kurse durch ── getrennt."""
    if not cell.courses:
        return "Lücke" if cell.is_gap else ""
    return "\n──\n".join(f"{c.code}\n{c.name}" for c in cell.courses)


def cell_color(cell: GridCell) -> str:
    """Hintergrundfarbe (RRGGBB) für eine Rasterzelle."""
    if cell.courses:
        return lighten(cell.courses[0].color)
    if cell.is_gap:
        return COLORS["gap"]
    return COLORS["free"]


def schedule_title(schedule: Schedule, rank: int) -> str:
    """Kurze Überschrift: "#1 – 5 Kurse | Score 165 | 0 Lücken | 18.0 h"."""
    return (
        f"#{rank} – {schedule.course_count} Kurse | Score {schedule.score} | "
        f"{schedule.gaps} Lücken | {schedule.total_hours} h"
    )
