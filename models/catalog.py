"""CourseCatalog: Kandidaten-Kurse + Machbarkeits-Check (Pydantic v2)."""

import json
from collections import Counter
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from models.course import Course
from models.errors import CourseImportError, DuplicateCourseIdError


class CatalogReport(BaseModel):
    """Ergebnis des Katalog-Checks."""

    is_feasible: bool
    errors: list[str]      # Kritische Probleme (Generierung unmöglich)
    warnings: list[str]    # Hinweise (Generierung möglich, Ergebnis eingeschränkt)
    conflict_pairs: list[tuple[str, str]] = []

    def print_rich(self) -> None:
        """Gibt den Report formatiert über Rich aus."""
        from rich.console import Console
        from rich.markup import escape
        from rich.panel import Panel

        console = Console()
        if self.is_feasible:
            status = "[bold green]✓ GENERIERBAR[/bold green]"
        else:
            status = "[bold red]✗ NICHT GENERIERBAR[/bold red]"

        lines = [status]
        if self.errors:
            lines.append("\n[red bold]Fehler (kritisch):[/red bold]")
            for e in self.errors:
                lines.append(f"  [red]• {escape(e)}[/red]")
        if self.warnings:
            lines.append("\n[yellow bold]Warnungen:[/yellow bold]")
            for w in self.warnings:
                lines.append(f"  [yellow]• {escape(w)}[/yellow]")
        if not self.errors and not self.warnings:
            lines.append("[dim]Keine Probleme gefunden.[/dim]")

        console.print(Panel("\n".join(lines), title="Katalog-Check", border_style="cyan"))


class CourseCatalog(BaseModel):
    """Liste der Kandidaten-Kurse, aus der Stundenpläne kombiniert werden."""

    courses: list[Course] = []
    created_at: Optional[datetime] = None
    data_version: str = "1.0"

    def __len__(self) -> int:
        return len(self.courses)

    def get(self, course_id: str) -> Optional[Course]:
        return next((c for c in self.courses if c.id == course_id), None)

    def check_unique_ids(self) -> None:
        """Wirft DuplicateCourseIdError wenn eine ID mehrfach vorkommt."""
        counts = Counter(c.id for c in self.courses)
        duplicates = sorted(cid for cid, n in counts.items() if n > 1)
        if duplicates:
            raise DuplicateCourseIdError(duplicates)

    # ─── Übersicht ───

    def summary(self) -> str:
        """Kurze Übersicht über den Katalog."""
        total_credits = sum(c.credits for c in self.courses)
        total_slots = sum(len(c.time_slots) for c in self.courses)
        days = sorted(
            {s.day for c in self.courses for s in c.time_slots},
            key=lambda d: d.ordinal,
        )
        return "\n".join([
            f"Kurse: {len(self.courses)}",
            f"Termine: {total_slots}",
            f"Credits gesamt: {total_credits}",
            f"Tage: {', '.join(d.value for d in days) or '—'}",
        ])

    # ─── Machbarkeits-Check ───

    def validate_feasibility(self, target_count: Optional[int] = None) -> CatalogReport:
        """Prüft den Katalog vor der Generierung.

        Fehler verhindern die Generierung, Warnungen schränken nur das
        Ergebnis ein.
        """
        from solver.conflicts import courses_conflict

        errors: list[str] = []
        warnings: list[str] = []

        if not self.courses:
            errors.append("Katalog ist leer.")

        id_counts = Counter(c.id for c in self.courses)
        for cid, n in sorted(id_counts.items()):
            if n > 1:
                errors.append(f"Kurs-ID '{cid}' kommt {n}× vor.")

        code_counts = Counter(c.code.lower() for c in self.courses)
        for code, n in sorted(code_counts.items()):
            if n > 1:
                warnings.append(f"Kürzel '{code.upper()}' kommt {n}× vor.")

        conflict_pairs: list[tuple[str, str]] = []
        for i, a in enumerate(self.courses):
            for b in self.courses[i + 1:]:
                if courses_conflict(a, b):
                    conflict_pairs.append((a.id, b.id))
        if conflict_pairs:
            warnings.append(
                f"{len(conflict_pairs)} Kurspaar(e) überschneiden sich zeitlich "
                f"und werden nie gemeinsam kombiniert."
            )

        if target_count is not None and target_count > len(self.courses):
            warnings.append(
                f"Gewünschte Kursanzahl {target_count} > {len(self.courses)} "
                f"verfügbare Kurse – Ergebnis wird leer sein."
            )

        return CatalogReport(
            is_feasible=not errors,
            errors=errors,
            warnings=warnings,
            conflict_pairs=conflict_pairs,
        )

    # ─── JSON ───

    def save_json(self, path: Path) -> None:
        """Speichert den Katalog als JSON-Datei."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = self.model_copy(
            update={"created_at": self.created_at or datetime.now(timezone.utc)}
        )
        with open(path, "w", encoding="utf-8") as f:
            f.write(data.model_dump_json(indent=2))

    @classmethod
    def load_json(cls, path: Path) -> "CourseCatalog":
        """Lädt einen Katalog aus JSON.

        Akzeptiert sowohl das eigene Format ({"courses": [...]}) als auch
        eine bloße Kursliste mit camelCase-Feldern (alter Upload-Export).
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Katalog nicht gefunden: {path}")
        with open(path, "r", encoding="utf-8") as f:
            try:
                raw = json.load(f)
            except json.JSONDecodeError as e:
                raise CourseImportError(f"Ungültiges JSON in {path}: {e}") from e
        if isinstance(raw, list):
            raw = {"courses": raw}
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise CourseImportError(
                f"Katalogdatei ungültig: {path}\nPydantic-Fehler: {e}"
            ) from e
