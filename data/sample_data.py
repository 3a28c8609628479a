"""Beispiel- und Testdaten für den Kursplaner.

sample_courses():          sechs feste Demo-Kurse (Mo–Fr, 08:00–18:00)
RandomCatalogGenerator:    reproduzierbare Zufalls-Kataloge beliebiger Größe,
                           z.B. um den Zufallsmodus (≥ 20 Kurse) zu testen
"""

import random
from typing import Optional

from config.defaults import COURSE_COLORS
from models.catalog import CourseCatalog
from models.course import Course, Professor
from models.timeslot import TimeSlot, Weekday, format_minutes


def sample_courses() -> list[Course]:
    """Feste Demo-Kurse. Kein Paar überschneidet sich."""
    def slot(day: str, start: str, end: str) -> TimeSlot:
        return TimeSlot(day=day, start_time=start, end_time=end)

    return [
        Course(
            id="1", name="Analysis I", code="MAT101", credits=4,
            professors=[Professor(id="p1", name="Dr. Becker", rating=4.5)],
            time_slots=[slot("Mo", "08:00", "10:00"), slot("Mi", "08:00", "10:00")],
            color="#3B82F6",
        ),
        Course(
            id="2", name="Programmierung I", code="INF101", credits=3,
            professors=[Professor(id="p2", name="Prof. Lang", rating=4.2)],
            time_slots=[slot("Di", "10:00", "12:00"), slot("Do", "10:00", "12:00")],
            color="#10B981",
        ),
        Course(
            id="3", name="Experimentalphysik", code="PHY101", credits=4,
            professors=[Professor(id="p3", name="Dr. Krause", rating=3.8)],
            time_slots=[slot("Mo", "14:00", "16:00"), slot("Fr", "08:00", "10:00")],
            color="#F59E0B",
        ),
        Course(
            id="4", name="Organische Chemie", code="CHE201", credits=3,
            professors=[Professor(id="p4", name="Dr. Roth", rating=4.7)],
            time_slots=[slot("Di", "14:00", "17:00"), slot("Do", "14:00", "16:00")],
            color="#8B5CF6",
        ),
        Course(
            id="5", name="Neuere Geschichte", code="GES101", credits=2,
            professors=[Professor(id="p5", name="Prof. Hartmann", rating=4.0)],
            time_slots=[slot("Mi", "16:00", "18:00")],
            color="#EF4444",
        ),
        Course(
            id="6", name="Technisches Englisch", code="ENG201", credits=2,
            professors=[Professor(id="p6", name="Prof. Smith", rating=4.3)],
            time_slots=[slot("Fr", "10:00", "12:00")],
            color="#06B6D4",
        ),
    ]


def sample_catalog() -> CourseCatalog:
    return CourseCatalog(courses=sample_courses())


# ─── Zufalls-Kataloge ─────────────────────────────────────────────────────────

_SUBJECT_STEMS = [
    ("MAT", "Mathematik"), ("INF", "Informatik"), ("PHY", "Physik"),
    ("CHE", "Chemie"), ("BIO", "Biologie"), ("GES", "Geschichte"),
    ("ENG", "Englisch"), ("WIW", "Wirtschaft"), ("PHI", "Philosophie"),
    ("STA", "Statistik"), ("ELT", "Elektrotechnik"), ("SOZ", "Soziologie"),
]

_LAST_NAMES = [
    "Müller", "Schmidt", "Schneider", "Fischer", "Weber", "Meyer",
    "Wagner", "Becker", "Schulz", "Hoffmann", "Koch", "Richter",
]

_WEEKDAYS = [Weekday.MO, Weekday.DI, Weekday.MI, Weekday.DO, Weekday.FR]

# Mögliche Startzeiten auf dem Halbstunden-Raster (08:00 – 17:30)
_START_MINUTES = list(range(8 * 60, 17 * 60 + 31, 30))


class RandomCatalogGenerator:
    """Erzeugt zufällige, aber reproduzierbare Kataloge.

    Jeder Kurs hat 1–2 Termine à 60–120 Minuten an verschiedenen Tagen.
    Überschneidungen sind ausdrücklich erlaubt.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.rng = random.Random(seed)

    def _slot(self, day: Weekday) -> TimeSlot:
        start = self.rng.choice(_START_MINUTES)
        duration = self.rng.choice([60, 90, 120])
        end = min(start + duration, 20 * 60)
        return TimeSlot(day=day, start_time=format_minutes(start), end_time=format_minutes(end))

    def generate_course(self, index: int) -> Course:
        prefix, stem = self.rng.choice(_SUBJECT_STEMS)
        level = self.rng.choice([1, 2, 3])
        days = self.rng.sample(_WEEKDAYS, self.rng.choice([1, 2]))
        return Course(
            id=f"rnd-{index}",
            name=f"{stem} {level}.{index}",
            code=f"{prefix}{level}{index:02d}",
            credits=self.rng.choice([2, 3, 4, 5, 6]),
            professors=[Professor(
                id=f"p{index}",
                name=f"Dr. {self.rng.choice(_LAST_NAMES)}",
                rating=round(self.rng.uniform(2.5, 5.0), 1),
            )],
            time_slots=[self._slot(d) for d in sorted(days, key=lambda d: d.ordinal)],
            color=COURSE_COLORS[index % len(COURSE_COLORS)],
        )

    def generate(self, n: int) -> CourseCatalog:
        """Katalog mit n Kursen."""
        return CourseCatalog(courses=[self.generate_course(i + 1) for i in range(n)])
