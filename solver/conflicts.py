"""Überschneidungsprüfung für Kurs-Termine.

Zwei Slots kollidieren genau dann, wenn sie am selben Tag liegen und sich
ihre halboffenen Intervalle [start, ende) schneiden. Uhrzeiten werden als
Minuten seit Tagesbeginn verglichen.
"""

from typing import Iterable, Sequence

from models.course import Course
from models.timeslot import TimeSlot

# (Wochentag, Beginn in Minuten, Ende in Minuten)
Interval = tuple[str, int, int]


def slots_overlap(a: TimeSlot, b: TimeSlot) -> bool:
    """Symmetrisch; Berührung (10:00 Ende / 10:00 Beginn) ist KEIN Konflikt."""
    return a.overlaps(b)


def course_intervals(course: Course) -> list[Interval]:
    """Alle Termine eines Kurses als (Tag, Beginn, Ende)-Tupel."""
    return [
        (s.day.value, s.start_minutes, s.end_minutes)
        for s in course.time_slots
    ]


def intervals_conflict_free(interval_lists: Iterable[Sequence[Interval]]) -> bool:
    """Prüft vorberechnete Intervall-Listen auf gegenseitige Überschneidung.

    Baut die Liste zugelassener Intervalle schrittweise auf; der erste
    Konflikt bricht ab. O(S²) in der Gesamtzahl der Termine.
    """
    admitted: list[Interval] = []
    for intervals in interval_lists:
        for day, start, end in intervals:
            for other_day, other_start, other_end in admitted:
                if day == other_day and start < other_end and other_start < end:
                    return False
            admitted.append((day, start, end))
    return True


def is_valid_combination(courses: Sequence[Course]) -> bool:
    """True wenn kein Termin eines Kurses einen anderen überschneidet."""
    return intervals_conflict_free(course_intervals(c) for c in courses)


def courses_conflict(a: Course, b: Course) -> bool:
    """True wenn sich mindestens ein Termin von a und b überschneidet."""
    return any(sa.overlaps(sb) for sa in a.time_slots for sb in b.time_slots)


def find_conflicts(candidate: Course, existing: Sequence[Course]) -> list[str]:
    """Sammelt ALLE Konflikte eines neuen Kurses mit bestehenden Kursen.

    Eine Meldung pro kollidierendem Slot-Paar. Kurse mit derselben ID wie
    der Kandidat werden übersprungen (Bearbeiten eines bestehenden Kurses).
    """
    messages: list[str] = []
    for other in existing:
        if other.id == candidate.id:
            continue
        for slot in candidate.time_slots:
            for other_slot in other.time_slots:
                if slot.overlaps(other_slot):
                    messages.append(
                        f"{candidate.name} ({candidate.code}) überschneidet sich mit "
                        f"{other.name} ({other.code}) am {slot.day.label}: "
                        f"{slot.start_time}-{slot.end_time} vs. "
                        f"{other_slot.start_time}-{other_slot.end_time}"
                    )
    return messages
