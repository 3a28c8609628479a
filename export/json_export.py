"""JSON-Export und -Import einzelner Stundenpläne.

Zwei Formate:
  - Kalender-Export ({title, subjects: [{name, code, timeSlots}]}) zum
    Weitergeben/Importieren in andere Werkzeuge
  - vollständiges Stundenplan-JSON in camelCase (wie die Zwischenablage-Kopie),
    das sich per load_schedule_json wieder einlesen und validieren lässt
"""

import json
from pathlib import Path

from pydantic import ValidationError

from models.course import Course
from models.errors import CourseImportError
from models.timeslot import TimeSlot
from solver.generator import Schedule

DEFAULT_TITLE = "Mein Stundenplan"


def _slot_to_dict(slot: TimeSlot) -> dict:
    return {"day": slot.day.value, "startTime": slot.start_time, "endTime": slot.end_time}


def _course_to_dict(course: Course) -> dict:
    return {
        "id": course.id,
        "name": course.name,
        "code": course.code,
        "credits": course.credits,
        "professors": [p.model_dump() for p in course.professors],
        "timeSlots": [_slot_to_dict(s) for s in course.time_slots],
        "color": course.color,
    }


def schedule_to_export_dict(schedule: Schedule, title: str = DEFAULT_TITLE) -> dict:
    """Reduzierte Kalenderdarstellung: nur Name, Kürzel und Termine je Kurs."""
    return {
        "title": title,
        "subjects": [
            {
                "name": c.name,
                "code": c.code,
                "timeSlots": [_slot_to_dict(s) for s in c.time_slots],
            }
            for c in schedule.subjects
        ],
    }


def schedule_to_clipboard_json(schedule: Schedule) -> str:
    """Vollständiger Stundenplan als camelCase-JSON (2 Leerzeichen Einrückung)."""
    data = {
        "id": schedule.id,
        "subjects": [_course_to_dict(c) for c in schedule.subjects],
        "score": schedule.score,
        "ranking": list(schedule.ranking),
        "gaps": schedule.gaps,
        "totalHours": schedule.total_hours,
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def save_schedule_json(
    schedule: Schedule, path: Path, title: str = DEFAULT_TITLE, full: bool = False
) -> Path:
    """Schreibt den Stundenplan als JSON. full=True → vollständiges Format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if full:
        text = schedule_to_clipboard_json(schedule)
    else:
        text = json.dumps(schedule_to_export_dict(schedule, title), indent=2, ensure_ascii=False)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path


def load_schedule_json(path: Path) -> Schedule:
    """Liest ein vollständiges Stundenplan-JSON (camelCase oder snake_case)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Stundenplan-Datei nicht gefunden: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return Schedule.model_validate(json.load(f))
    except json.JSONDecodeError as e:
        raise CourseImportError(f"{path.name}: kein gültiges JSON ({e.msg})", line=e.lineno) from e
    except ValidationError as e:
        raise CourseImportError(f"{path.name}: ungültiger Stundenplan – {e}") from e
