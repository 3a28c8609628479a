"""Terminal-Darstellung von Stundenplänen (Rich).

Wird von `generate` (Top-N-Anzeige) und `validate` verwendet.
"""

from typing import TYPE_CHECKING, Optional, Sequence

if TYPE_CHECKING:
    from rich.console import Console
    from solver.generator import Schedule


def render_week_rows(schedule: "Schedule") -> list[list[str]]:
    """Gibt Tabellenzeilen für die Wochenansicht zurück.

    Jede Zeile: [zeit_label, Mo, Di, Mi, Do, Fr(, Sa, So)]
    Leere Stunden zwischen zwei Terminen desselben Tages → 'Lücke'.
    """
    from export.helpers import week_grid

    _, grid_rows = week_grid(schedule)
    rows: list[list[str]] = []
    for row in grid_rows:
        cells = [row.label]
        for cell in row.cells:
            if cell.courses:
                cells.append("\n".join(c.code for c in cell.courses))
            elif cell.is_gap:
                cells.append("↕ Lücke")
            else:
                cells.append("—")
        rows.append(cells)
    return rows


def print_schedule(
    schedule: "Schedule", rank: int = 1, console: Optional["Console"] = None
) -> None:
    """Gibt einen Stundenplan als Wochentabelle plus Kursliste aus."""
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table
    from rich import box

    from export.helpers import schedule_days, schedule_title

    console = console or Console()
    table = Table(title=escape(schedule_title(schedule, rank)), box=box.ROUNDED, show_lines=True)
    table.add_column("Zeit", style="dim")
    for day in schedule_days(schedule):
        table.add_column(day.value, justify="center")

    for cells in render_week_rows(schedule):
        styled = [cells[0]] + [
            f"[red]{c}[/red]" if c == "↕ Lücke" else escape(c) for c in cells[1:]
        ]
        table.add_row(*styled)
    console.print(table)

    for course in schedule.subjects:
        slots = ", ".join(str(s) for s in course.time_slots)
        console.print(
            f"  [bold {course.color}]■[/bold {course.color}] "
            f"{escape(f'{course.code:8s} {course.name}')} ({course.credits} CP) – {slots}"
        )
    if schedule.ranking:
        console.print(f"  [dim]Tags: {escape(', '.join(schedule.ranking))}[/dim]")


def print_schedule_list(
    schedules: Sequence["Schedule"], console: Optional["Console"] = None
) -> None:
    """Kompakte Übersichtstabelle über mehrere Stundenpläne."""
    from rich.console import Console
    from rich.markup import escape
    from rich.table import Table
    from rich import box

    console = console or Console()
    table = Table(title="Stundenpläne", box=box.ROUNDED)
    table.add_column("#", justify="right")
    table.add_column("ID", style="dim")
    table.add_column("Kurse")
    table.add_column("Score", justify="right")
    table.add_column("Lücken", justify="right")
    table.add_column("Stunden", justify="right")
    table.add_column("CP", justify="right")
    table.add_column("Tags")

    for rank, s in enumerate(schedules, start=1):
        gap_color = "green" if s.gaps == 0 else "yellow" if s.gaps <= 3 else "red"
        table.add_row(
            str(rank),
            escape(s.id),
            escape(", ".join(c.code for c in s.subjects)),
            f"[bold]{s.score}[/bold]",
            f"[{gap_color}]{s.gaps}[/{gap_color}]",
            f"{s.total_hours}",
            str(s.total_credits),
            escape(", ".join(s.ranking)),
        )
    console.print(table)
