"""Nachträgliche Validierung einzelner Stundenpläne.

Prüft einen (z.B. exportierten und wieder eingelesenen) Stundenplan
unabhängig vom Generator auf Überschneidungen und konsistente Kennzahlen.
Überschneidungen und Einzelkurs-Pläne sind Fehler, abweichende Kennzahlen
und Abweichungen vom Katalog nur Warnungen.
"""

from itertools import combinations
from typing import Iterator, Literal, Optional

from pydantic import BaseModel
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich import box

from config.schema import PlannerConfig
from models.catalog import CourseCatalog
from solver.generator import Schedule
from solver.scoring import ScheduleScorer

Severity = Literal["error", "warning"]


class ValidationViolation(BaseModel):
    severity: Severity
    constraint: str      # z.B. "slot_overlap"
    description: str
    entity: str          # Kurs-ID(s) oder Stundenplan-ID


class ValidationReport(BaseModel):
    schedule_id: str
    violations: list[ValidationViolation] = []

    @property
    def errors(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "error"]

    @property
    def warnings(self) -> list[ValidationViolation]:
        return [v for v in self.violations if v.severity == "warning"]

    @property
    def is_valid(self) -> bool:
        """Gültig, solange es keine Fehler gibt; Warnungen sind erlaubt."""
        return not self.errors

    def print_rich(self, console: Optional[Console] = None) -> None:
        console = console or Console()
        if self.is_valid:
            verdict = "[bold green]✓ gültig[/bold green]"
        else:
            verdict = "[bold red]✗ ungültig[/bold red]"
        console.print(
            f"\n[bold]Prüfung {escape(self.schedule_id)}:[/bold] {verdict}  "
            f"[dim]({len(self.errors)} Fehler, {len(self.warnings)} Warnungen)[/dim]"
        )
        if not self.violations:
            return

        table = Table(box=box.SIMPLE_HEAD)
        table.add_column("", width=2)
        table.add_column("Prüfung", style="bold")
        table.add_column("Betrifft")
        table.add_column("Details")
        for v in sorted(self.violations, key=lambda v: v.severity != "error"):
            marker = "[red]✗[/red]" if v.severity == "error" else "[yellow]![/yellow]"
            table.add_row(marker, v.constraint, escape(v.entity), escape(v.description))
        console.print(table)


def _violation(severity: Severity, constraint: str, entity: str, description: str) -> ValidationViolation:
    return ValidationViolation(
        severity=severity, constraint=constraint, entity=entity, description=description,
    )


class ScheduleValidator:
    """Prüft Stundenpläne gegen die Regeln des Generators."""

    def __init__(self, config: Optional[PlannerConfig] = None) -> None:
        self.config = config or PlannerConfig()
        self.scorer = ScheduleScorer(self.config.scoring, self.config.tags)

    def validate(
        self, schedule: Schedule, catalog: Optional[CourseCatalog] = None
    ) -> ValidationReport:
        """Alle Prüfungen; der Katalogabgleich nur, wenn ein Katalog übergeben wird."""
        violations = [
            *self._check_size(schedule),
            *self._check_overlaps(schedule),
            *self._check_metrics(schedule),
        ]
        if catalog is not None:
            violations.extend(self._check_catalog_membership(schedule, catalog))
        return ValidationReport(schedule_id=schedule.id, violations=violations)

    # ─── Einzelne Prüfungen ───

    def _check_size(self, schedule: Schedule) -> Iterator[ValidationViolation]:
        if schedule.course_count < 2:
            yield _violation(
                "error", "min_courses", schedule.id,
                f"Stundenplan enthält nur {schedule.course_count} Kurs(e).",
            )

    def _check_overlaps(self, schedule: Schedule) -> Iterator[ValidationViolation]:
        for a, b in combinations(schedule.subjects, 2):
            for sa in a.time_slots:
                for sb in b.time_slots:
                    if sa.overlaps(sb):
                        yield _violation(
                            "error", "slot_overlap", f"{a.id}/{b.id}",
                            f"{a.code} ({sa}) überschneidet sich mit {b.code} ({sb})",
                        )

    def _check_metrics(self, schedule: Schedule) -> Iterator[ValidationViolation]:
        """Gespeicherte Kennzahlen gegen eine Neuberechnung."""
        fresh = self.scorer.score(schedule.subjects)
        for name, stored, computed in (
            ("score", schedule.score, fresh.score),
            ("gaps", schedule.gaps, fresh.gaps),
            ("total_hours", schedule.total_hours, fresh.total_hours),
        ):
            if stored != computed:
                yield _violation(
                    "warning", f"{name}_mismatch", schedule.id,
                    f"{name}: gespeichert {stored}, berechnet {computed}",
                )

    def _check_catalog_membership(
        self, schedule: Schedule, catalog: CourseCatalog
    ) -> Iterator[ValidationViolation]:
        for course in schedule.subjects:
            current = catalog.get(course.id)
            if current is None:
                yield _violation(
                    "warning", "unknown_course", course.id,
                    f"Kurs {course.code} ist nicht (mehr) im Katalog.",
                )
            elif current.time_slots != course.time_slots:
                yield _violation(
                    "warning", "changed_course", course.id,
                    f"Termine von {course.code} wurden seit dem Export geändert.",
                )
