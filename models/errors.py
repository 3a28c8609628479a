"""Fehlerhierarchie für Eingabe- und Machbarkeitsprobleme.

Alle Fehler erben von ValueError, damit Aufrufer, die nur ValueError
abfangen (z.B. die CLI), weiterhin funktionieren.
"""

from typing import Optional


class PlannerInputError(ValueError):
    """Basisklasse für alle ungültigen Eingaben an den Kursplaner."""

    pass


class InvalidTimeSlotError(PlannerInputError):
    """Zeitslot mit ungültigem Wochentag, Uhrzeitformat oder start >= ende."""

    pass


class DuplicateCourseIdError(PlannerInputError):
    """Zwei Kurse im selben Katalog tragen dieselbe ID."""

    def __init__(self, duplicate_ids: list[str]):
        self.duplicate_ids = duplicate_ids
        super().__init__(
            f"Doppelte Kurs-IDs im Katalog: {', '.join(duplicate_ids)}"
        )


class InvalidTargetCountError(PlannerInputError):
    """Gewünschte Kursanzahl ist keine positive ganze Zahl."""

    pass


class CombinationLimitError(PlannerInputError):
    """Vollständige Aufzählung würde die konfigurierte Obergrenze sprengen.

    Wird VOR der Aufzählung geworfen, nie mittendrin.
    """

    def __init__(self, candidate_count: int, limit: int):
        self.candidate_count = candidate_count
        self.limit = limit
        super().__init__(
            f"{candidate_count:,} Kombinationen überschreiten das Limit von "
            f"{limit:,}. Kursanzahl reduzieren oder Limit erhöhen."
        )


class CourseImportError(PlannerInputError):
    """Fehler beim Einlesen eines Kurskatalogs (Text oder JSON)."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"Zeile {line}: {message}"
        super().__init__(message)
