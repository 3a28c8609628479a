"""Qualitätsbericht für ein Generierungsergebnis.

Fasst die gefundenen Stundenpläne zu Kennzahlen zusammen: Score-Spanne,
Lücken, Größenverteilung und Tag-Häufigkeiten.
"""

from collections import Counter

from pydantic import BaseModel

from solver.generator import GenerationResult


class ResultQualityReport(BaseModel):
    """Kennzahlen über alle Stundenpläne eines Laufs."""

    schedule_count: int
    best_score: int
    worst_score: int
    avg_score: float
    avg_gaps: float
    gap_free_count: int
    size_distribution: dict[int, int]   # Kursanzahl → Anzahl Stundenpläne
    tag_counts: dict[str, int]
    strategy: str
    candidates_checked: int
    duration_seconds: float


class QualityAnalyzer:
    """Berechnet Kennzahlen für ein GenerationResult."""

    def analyze(self, result: GenerationResult) -> ResultQualityReport:
        schedules = result.schedules
        n = len(schedules)
        scores = [s.score for s in schedules]
        gaps = [s.gaps for s in schedules]

        sizes = Counter(s.course_count for s in schedules)
        tags = Counter(tag for s in schedules for tag in s.ranking)

        return ResultQualityReport(
            schedule_count=n,
            best_score=max(scores) if scores else 0,
            worst_score=min(scores) if scores else 0,
            avg_score=round(sum(scores) / n, 1) if n else 0.0,
            avg_gaps=round(sum(gaps) / n, 2) if n else 0.0,
            gap_free_count=sum(1 for g in gaps if g == 0),
            size_distribution=dict(sorted(sizes.items(), reverse=True)),
            tag_counts=dict(tags.most_common()),
            strategy=result.strategy.value,
            candidates_checked=result.candidates_checked,
            duration_seconds=result.duration_seconds,
        )

    def print_rich(self, report: ResultQualityReport) -> None:
        """Gibt den Bericht formatiert über Rich aus."""
        from rich.console import Console
        from rich.panel import Panel
        from rich.table import Table
        from rich import box

        console = Console()
        gap_color = (
            "green" if report.avg_gaps <= 1
            else "yellow" if report.avg_gaps <= 3
            else "red"
        )
        console.print(Panel(
            f"Stundenpläne: [bold]{report.schedule_count}[/bold]  |  "
            f"Score: {report.worst_score}–{report.best_score} "
            f"(Ø {report.avg_score})  |  "
            f"Ø Lücken: [{gap_color}]{report.avg_gaps}[/{gap_color}]  |  "
            f"lückenlos: {report.gap_free_count}\n"
            f"[dim]Strategie {report.strategy}, "
            f"{report.candidates_checked:,} Kandidaten, "
            f"{report.duration_seconds:.2f}s[/dim]",
            title="Qualitätsbericht",
            border_style="cyan",
        ))

        if report.tag_counts:
            table = Table(title="Ranking-Tags", box=box.ROUNDED)
            table.add_column("Tag")
            table.add_column("Anzahl", justify="right")
            for tag, count in report.tag_counts.items():
                table.add_row(tag, str(count))
            console.print(table)
