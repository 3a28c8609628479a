"""PDF-Export der generierten Stundenpläne (fpdf2).

Jede Seite zeigt einen Stundenplan als Wochenkalender im A4-Querformat:
Stundenraster im Hintergrund (Lückenstunden rot hinterlegt), darüber die
Kurstermine minutengenau als farbige Blöcke, darunter Kursliste und Tags.
"""

from pathlib import Path
from typing import Optional, Sequence

from fpdf import FPDF

from config.schema import PlannerConfig
from models.course import Course
from models.timeslot import TimeSlot
from solver.generator import Schedule

from export.helpers import (
    COLORS, cell_color, hex_to_rgb, lighten, schedule_title, today_str, week_grid,
)

_REPLACEMENTS = {
    "—": " - ",
    "–": "-",
    "─": "-",
    "│": "|",
    "↕": "",
}


def _pdf_safe(text: str) -> str:
    """Ersetzt nicht-latin-1-fähige Zeichen für die eingebauten PDF-Fonts."""
    for char, repl in _REPLACEMENTS.items():
        text = text.replace(char, repl)
    return text.encode("latin-1", "replace").decode("latin-1")


# ─── Seitengeometrie (mm, A4 quer) ────────────────────────────────────────────

_MARGIN = 10.0
_GRID_TOP = 22.0
_GRID_MAX_H = 125.0
_TIME_COL_W = 18.0
_HEAD_H = 7.0
_HOUR_MAX_H = 16.0
_LINE_H = 3.2


class _WeekPlanPdf(FPDF):
    """FPDF mit Kopfzeile (Planername | Seitentitel) und Fußzeile."""

    def __init__(self, planner_name: str) -> None:
        super().__init__(orientation="L", unit="mm", format="A4")
        self.planner_name = planner_name
        self.page_title = ""
        self.set_margins(left=_MARGIN, top=_GRID_TOP, right=_MARGIN)
        self.set_auto_page_break(auto=False)
        self.alias_nb_pages()

    def header(self) -> None:
        self.set_font("Helvetica", "B", 11)
        self.set_xy(_MARGIN, 8)
        self.cell(90, 7, _pdf_safe(self.planner_name), align="L")
        self.cell(0, 7, _pdf_safe(self.page_title), align="R")
        self.set_draw_color(150, 150, 150)
        self.line(_MARGIN, 17, self.w - _MARGIN, 17)

    def footer(self) -> None:
        self.set_y(-12)
        self.set_font("Helvetica", "I", 7)
        self.set_text_color(90, 90, 90)
        self.cell(0, 6, f"Erstellt am {today_str()}  |  Seite {self.page_no()}/{{nb}}", align="C")
        self.set_text_color(0, 0, 0)

    # ─── Zeichenprimitive ───

    def draw_box(self, x: float, y: float, w: float, h: float, fill_hex: Optional[str]) -> None:
        if fill_hex:
            self.set_fill_color(*hex_to_rgb(fill_hex))
        self.set_draw_color(190, 190, 190)
        self.rect(x, y, w, h, style="DF" if fill_hex else "D")

    def fitted(self, text: str, width: float) -> str:
        """Kürzt Text, bis er in die gegebene Breite passt."""
        text = _pdf_safe(text)
        while text and self.get_string_width(text) > width - 1:
            text = text[:-1]
        return text

    def text_lines(
        self, x: float, y: float, w: float, h: float, lines: list[str],
        bold_first: bool = False,
    ) -> None:
        """Schreibt so viele Zeilen wie in die Höhe passen, vertikal zentriert."""
        lines = lines[: max(1, int(h // _LINE_H))]
        y_text = y + max(0.3, (h - len(lines) * _LINE_H) / 2)
        for i, line in enumerate(lines):
            self.set_font("Helvetica", "B" if bold_first and i == 0 else "", 7)
            self.set_xy(x, y_text)
            self.cell(w, _LINE_H, self.fitted(line, w), align="C")
            y_text += _LINE_H


class PdfExporter:
    """Eine Querformat-Seite pro Stundenplan, höchstens max_pages Seiten."""

    def __init__(
        self,
        schedules: Sequence[Schedule],
        config: Optional[PlannerConfig] = None,
        max_pages: int = 20,
    ):
        self.schedules = list(schedules)
        self.config = config or PlannerConfig()
        self.max_pages = max_pages

    def export(self, output_path: Path) -> Path:
        pdf = _WeekPlanPdf(self.config.planner_name)
        for rank, schedule in enumerate(self.schedules[: self.max_pages], start=1):
            pdf.page_title = schedule_title(schedule, rank)
            pdf.add_page()
            bottom = self._draw_week(pdf, schedule)
            self._draw_legend(pdf, schedule, bottom + 4)
        if not self.schedules:
            pdf.page_title = "Keine Stundenpläne"
            pdf.add_page()

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        pdf.output(str(output_path))
        return output_path

    # ─── Wochenkalender ───

    def _draw_week(self, pdf: _WeekPlanPdf, schedule: Schedule) -> float:
        """Zeichnet Raster und Kursblöcke; gibt die Unterkante zurück."""
        days, rows = week_grid(schedule)
        day_w = (pdf.w - 2 * _MARGIN - _TIME_COL_W) / len(days)
        hour_h = min(_HOUR_MAX_H, _GRID_MAX_H / max(len(rows), 1))
        x0, y0 = _MARGIN, _GRID_TOP + _HEAD_H

        # Kopfzeile
        pdf.set_text_color(255, 255, 255)
        pdf.draw_box(x0, _GRID_TOP, _TIME_COL_W, _HEAD_H, COLORS["header"])
        pdf.text_lines(x0, _GRID_TOP, _TIME_COL_W, _HEAD_H, ["Zeit"], bold_first=True)
        for i, day in enumerate(days):
            x = x0 + _TIME_COL_W + i * day_w
            pdf.draw_box(x, _GRID_TOP, day_w, _HEAD_H, COLORS["header"])
            pdf.text_lines(x, _GRID_TOP, day_w, _HEAD_H, [day.label], bold_first=True)
        pdf.set_text_color(0, 0, 0)

        # Stundenraster: freie Zellen grau, Lücken rot
        for r, row in enumerate(rows):
            y = y0 + r * hour_h
            pdf.draw_box(x0, y, _TIME_COL_W, hour_h, None)
            pdf.text_lines(x0, y, _TIME_COL_W, hour_h, [row.label])
            for i, cell in enumerate(row.cells):
                fill = COLORS["free"] if cell.courses else cell_color(cell)
                pdf.draw_box(x0 + _TIME_COL_W + i * day_w, y, day_w, hour_h, fill)

        if rows:
            origin = rows[0].start
            column = {day: i for i, day in enumerate(days)}
            for course in schedule.subjects:
                for slot in course.time_slots:
                    self._draw_block(
                        pdf, course, slot,
                        x=x0 + _TIME_COL_W + column[slot.day] * day_w,
                        y=y0 + (slot.start_minutes - origin) / 60 * hour_h,
                        w=day_w,
                        h=slot.duration_minutes / 60 * hour_h,
                    )
        return y0 + len(rows) * hour_h

    def _draw_block(
        self, pdf: _WeekPlanPdf, course: Course, slot: TimeSlot,
        x: float, y: float, w: float, h: float,
    ) -> None:
        pdf.draw_box(x + 0.6, y, w - 1.2, h, lighten(course.color, 0.45))
        lines = [course.code, course.name, f"{slot.start_time}-{slot.end_time}"]
        pdf.text_lines(x + 0.6, y, w - 1.2, h, lines, bold_first=True)

    # ─── Legende ───

    def _draw_legend(self, pdf: _WeekPlanPdf, schedule: Schedule, y: float) -> None:
        """Kursliste mit Terminen und Credits, danach die Ranking-Tags."""
        pdf.set_font("Helvetica", "", 7)
        for course in sorted(schedule.subjects, key=_first_slot_key):
            pdf.set_fill_color(*hex_to_rgb(course.color))
            pdf.rect(_MARGIN, y + 0.8, 2.4, 2.4, style="F")
            slots = ", ".join(str(s) for s in course.time_slots)
            pdf.set_xy(_MARGIN + 4, y)
            pdf.cell(0, 4, _pdf_safe(f"{course.code}  {course.name} ({course.credits} CP): {slots}"))
            y += 4
        if schedule.ranking:
            pdf.set_font("Helvetica", "I", 7)
            pdf.set_xy(_MARGIN, y + 1)
            pdf.cell(0, 4, _pdf_safe("Tags: " + ", ".join(schedule.ranking)))


def _first_slot_key(course: Course) -> tuple[int, int]:
    first = min(course.time_slots, key=lambda s: (s.day.ordinal, s.start_minutes))
    return first.day.ordinal, first.start_minutes
