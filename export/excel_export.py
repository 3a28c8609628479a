"""Excel-Export der generierten Stundenpläne (openpyxl)."""

from pathlib import Path
from typing import Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from config.schema import PlannerConfig
from solver.generator import Schedule

from export.helpers import (
    COLORS, cell_color, format_cell, schedule_title, today_str, week_grid,
)

_NO_GAPS_FILL = "CCFFCC"

_THIN = Side(border_style="thin", color="BBBBBB")
_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)


def _solid(hex_color: str) -> PatternFill:
    return PatternFill(start_color=hex_color, end_color=hex_color, fill_type="solid")


def _centered(wrap: bool = True) -> Alignment:
    return Alignment(wrap_text=wrap, horizontal="center", vertical="center")


def _header_row(ws: Worksheet, row: int, headers: list[str], height: float) -> None:
    for col, text in enumerate(headers, 1):
        cell = ws.cell(row=row, column=col, value=text)
        cell.fill = _solid(COLORS["header"])
        cell.font = Font(bold=True, color="FFFFFF", size=10)
        cell.alignment = _centered(wrap=False)
        cell.border = _BORDER
    ws.row_dimensions[row].height = height


# Übersicht: (Kopf, Breite, Wert aus Rang + Stundenplan)
_OVERVIEW_COLUMNS = (
    ("Rang", 6, lambda rank, s: rank),
    ("ID", 14, lambda rank, s: s.id),
    ("Kurse", 40, lambda rank, s: ", ".join(c.code for c in s.subjects)),
    ("Anzahl", 8, lambda rank, s: s.course_count),
    ("Score", 8, lambda rank, s: s.score),
    ("Lücken", 8, lambda rank, s: s.gaps),
    ("Stunden", 9, lambda rank, s: s.total_hours),
    ("Credits", 8, lambda rank, s: s.total_credits),
    ("Tags", 50, lambda rank, s: ", ".join(s.ranking)),
)


class ExcelExporter:
    """Schreibt eine Arbeitsmappe mit Übersicht und Wochenrastern.

    Blatt "Übersicht" listet alle Stundenpläne mit Kennzahlen; die ersten
    max_sheets Stundenpläne bekommen zusätzlich ein eigenes Blatt "Plan <Rang>",
    auf das der Rang in der Übersicht verlinkt.
    """

    TIME_COL_WIDTH = 13
    DAY_COL_WIDTH = 20
    HEADER_HEIGHT = 22
    HOUR_HEIGHT = 36

    def __init__(
        self,
        schedules: Sequence[Schedule],
        config: Optional[PlannerConfig] = None,
        max_sheets: int = 20,
    ):
        self.schedules = list(schedules)
        self.config = config or PlannerConfig()
        self.max_sheets = max_sheets

    def export(self, output_path: Path) -> Path:
        wb = Workbook()
        wb.remove(wb.active)

        self._write_overview(wb.create_sheet(title="Übersicht"))
        for rank, schedule in enumerate(self.schedules[: self.max_sheets], start=1):
            self._write_week(wb.create_sheet(title=f"Plan {rank}"), schedule, rank)

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(output_path)
        return output_path

    # ─── Übersicht ───

    def _write_overview(self, ws: Worksheet) -> None:
        ws["A1"] = self.config.planner_name
        ws["A1"].font = Font(bold=True, size=14)
        ws["A2"] = f"Erstellt: {today_str()}"
        ws["C2"] = f"Stundenpläne: {len(self.schedules)}"

        header_row = 4
        _header_row(ws, header_row, [c[0] for c in _OVERVIEW_COLUMNS], self.HEADER_HEIGHT)

        gaps_col = 1 + [c[0] for c in _OVERVIEW_COLUMNS].index("Lücken")
        for rank, schedule in enumerate(self.schedules, start=1):
            row = header_row + rank
            for col, (_, _, value) in enumerate(_OVERVIEW_COLUMNS, 1):
                ws.cell(row=row, column=col, value=value(rank, schedule)).border = _BORDER
            if schedule.gaps == 0:
                ws.cell(row=row, column=gaps_col).fill = _solid(_NO_GAPS_FILL)
            if rank <= self.max_sheets:
                rank_cell = ws.cell(row=row, column=1)
                rank_cell.hyperlink = f"#'Plan {rank}'!A1"
                rank_cell.font = Font(color="0563C1", underline="single")

        for col, (_, width, _) in enumerate(_OVERVIEW_COLUMNS, 1):
            ws.column_dimensions[get_column_letter(col)].width = width
        last_col = get_column_letter(len(_OVERVIEW_COLUMNS))
        ws.auto_filter.ref = f"A{header_row}:{last_col}{header_row + len(self.schedules)}"
        ws.freeze_panes = ws.cell(row=header_row + 1, column=1)

    # ─── Wochenraster ───

    def _write_week(self, ws: Worksheet, schedule: Schedule, rank: int) -> None:
        """Stundenzeilen × Wochentage, darunter die Kursliste."""
        days, rows = week_grid(schedule)

        ws["A1"] = schedule_title(schedule, rank)
        ws["A1"].font = Font(bold=True, size=12)
        _header_row(ws, 2, ["Zeit"] + [d.label for d in days], self.HEADER_HEIGHT)

        for offset, grid_row in enumerate(rows):
            row = 3 + offset
            time_cell = ws.cell(row=row, column=1, value=grid_row.label)
            time_cell.alignment = _centered(wrap=False)
            time_cell.border = _BORDER
            time_cell.font = Font(size=8)
            for col, cell in enumerate(grid_row.cells, start=2):
                target = ws.cell(row=row, column=col, value=format_cell(cell))
                target.fill = _solid(cell_color(cell))
                target.alignment = _centered()
                target.border = _BORDER
                target.font = Font(size=8, italic=cell.is_gap)
            ws.row_dimensions[row].height = self.HOUR_HEIGHT

        row = 3 + len(rows) + 1
        for course in schedule.subjects:
            slots = ", ".join(str(s) for s in course.time_slots)
            code_cell = ws.cell(row=row, column=1, value=course.code)
            code_cell.font = Font(bold=True)
            code_cell.fill = _solid(course.color.lstrip("#").upper())
            ws.cell(row=row, column=2, value=f"{course.name} ({course.credits} CP): {slots}")
            row += 1

        ws.column_dimensions["A"].width = self.TIME_COL_WIDTH
        for col in range(2, 2 + len(days)):
            ws.column_dimensions[get_column_letter(col)].width = self.DAY_COL_WIDTH
        ws.freeze_panes = "B3"
