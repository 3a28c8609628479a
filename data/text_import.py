"""Import von Kursen aus einer Textliste (ein Kurs pro Zeile).

Format:
  CODE | Name | Credits | Tag HH:MM-HH:MM | Tag HH:MM-HH:MM ...

Ein Termin-Feld darf auch mehrere, durch Komma getrennte Termine enthalten:
  MAT101 | Analysis I | 4 | Mo 08:00-10:00, Mi 08:00-10:00

Doppelte Kürzel und Kurse mit Zeitkonflikten werden übersprungen und im
Ergebnis gemeldet; Formatfehler brechen den Import mit Zeilennummer ab.
"""

import logging
import re
from typing import Sequence

from pydantic import BaseModel, ValidationError

from config.defaults import COURSE_COLORS
from models.course import Course, Professor
from models.errors import CourseImportError, InvalidTimeSlotError
from models.timeslot import TimeSlot
from solver.conflicts import find_conflicts

logger = logging.getLogger(__name__)

_SLOT_RE = re.compile(r"^\s*(\S+)\s+(\d{1,2}:\d{2})\s*-\s*(\d{1,2}:\d{2})\s*$")


class TextImportResult(BaseModel):
    """Ergebnis eines Text-Imports."""

    added: list[Course]
    duplicates: list[str]     # "CODE - Name"
    conflicts: list[str]      # "CODE - Name: erste Konfliktmeldung"

    @property
    def skipped_count(self) -> int:
        return len(self.duplicates) + len(self.conflicts)


def parse_slot(text: str, line: int) -> TimeSlot:
    """Parst "Tag HH:MM-HH:MM" zu einem TimeSlot."""
    match = _SLOT_RE.match(text)
    if not match:
        raise CourseImportError(
            f"Ungültiges Terminformat '{text.strip()}'. Erwartet: Tag HH:MM-HH:MM",
            line=line,
        )
    day, start, end = match.groups()
    try:
        return TimeSlot.create(day, start, end)
    except InvalidTimeSlotError as e:
        raise CourseImportError(f"Ungültiger Termin '{text.strip()}': {e}", line=line) from e


def parse_line(line_text: str, line: int, course_id: str, color: str) -> Course:
    """Parst eine einzelne Kurszeile."""
    parts = [p.strip() for p in line_text.split("|")]
    if len(parts) < 4:
        raise CourseImportError(
            "Falsches Format: mindestens 4 durch | getrennte Felder erforderlich.",
            line=line,
        )
    code, name, credits_str, *slot_fields = parts
    try:
        credits = int(credits_str)
    except ValueError:
        raise CourseImportError(f"Credits müssen eine Zahl sein, nicht '{credits_str}'.", line=line) from None

    slots = [
        parse_slot(chunk, line)
        for field in slot_fields
        for chunk in field.split(",")
        if chunk.strip()
    ]
    try:
        return Course(
            id=course_id,
            name=name,
            code=code,
            credits=credits,
            professors=[Professor(id="prof1", name="N.N.")],
            time_slots=slots,
            color=color,
        )
    except ValidationError as e:
        raise CourseImportError(f"Ungültiger Kurs '{code}': {e}", line=line) from e


def parse_course_text(text: str, existing: Sequence[Course] = ()) -> TextImportResult:
    """Parst einen Textblock; prüft Duplikate und Konflikte gegen existing + bereits Geparstes."""
    added: list[Course] = []
    duplicates: list[str] = []
    conflicts: list[str] = []
    known_codes = {c.code.lower() for c in existing}
    used_ids = {c.id for c in existing}

    for line_no, raw in enumerate(text.splitlines(), start=1):
        if not raw.strip() or raw.lstrip().startswith("#"):
            continue

        n = len(added) + 1
        course_id = f"text-{n}"
        while course_id in used_ids:
            n += 1
            course_id = f"text-{n}"
        color = COURSE_COLORS[(len(existing) + len(added)) % len(COURSE_COLORS)]
        course = parse_line(raw, line_no, course_id, color)

        if course.code.lower() in known_codes:
            duplicates.append(f"{course.code} - {course.name}")
            continue

        messages = find_conflicts(course, [*existing, *added])
        if messages:
            conflicts.append(f"{course.code} - {course.name}: {messages[0]}")
            continue

        added.append(course)
        known_codes.add(course.code.lower())
        used_ids.add(course.id)

    logger.info(
        f"Text-Import: {len(added)} übernommen, {len(duplicates)} doppelt, "
        f"{len(conflicts)} mit Konflikt"
    )
    return TextImportResult(added=added, duplicates=duplicates, conflicts=conflicts)
