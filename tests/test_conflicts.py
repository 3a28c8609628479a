"""Tests für die Überschneidungsprüfung (solver/conflicts.py)."""

from models.course import Course
from models.timeslot import TimeSlot
from solver.conflicts import (
    course_intervals,
    courses_conflict,
    find_conflicts,
    intervals_conflict_free,
    is_valid_combination,
    slots_overlap,
)


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def make_course(cid: str, *slots: tuple[str, str, str], name: str = "") -> Course:
    """make_course("a", ("Mo", "09:00", "10:00"), ...)."""
    return Course(
        id=cid,
        name=name or f"Kurs {cid.upper()}",
        code=cid.upper() + "101",
        credits=3,
        time_slots=[TimeSlot(day=d, start_time=s, end_time=e) for d, s, e in slots],
    )


# ─── SLOT-PAARE ───────────────────────────────────────────────────────────────

class TestSlotsOverlap:
    def test_symmetry(self):
        pairs = [
            (("Mo", "09:00", "10:00"), ("Mo", "09:30", "11:00")),
            (("Mo", "09:00", "10:00"), ("Mo", "10:00", "11:00")),
            (("Di", "08:00", "12:00"), ("Di", "09:00", "09:30")),
            (("Mi", "08:00", "09:00"), ("Do", "08:00", "09:00")),
        ]
        for (d1, s1, e1), (d2, s2, e2) in pairs:
            a = TimeSlot(day=d1, start_time=s1, end_time=e1)
            b = TimeSlot(day=d2, start_time=s2, end_time=e2)
            assert slots_overlap(a, b) == slots_overlap(b, a)

    def test_touching_boundary_is_no_conflict(self):
        a = TimeSlot(day="Mo", start_time="09:00", end_time="10:00")
        b = TimeSlot(day="Mo", start_time="10:00", end_time="11:00")
        assert not slots_overlap(a, b)

    def test_identical_slots_conflict(self):
        a = TimeSlot(day="Fr", start_time="12:00", end_time="13:00")
        assert slots_overlap(a, a)


# ─── KOMBINATIONEN ────────────────────────────────────────────────────────────

class TestValidCombination:
    def test_touching_courses_valid(self):
        """Szenario: A 09-10, B 10-11 am Montag → gültig."""
        a = make_course("a", ("Mo", "09:00", "10:00"))
        b = make_course("b", ("Mo", "10:00", "11:00"))
        assert is_valid_combination([a, b])

    def test_overlapping_courses_invalid(self):
        """Szenario: A 09:00-10:30, B 10:00-11:00 am Montag → ungültig."""
        a = make_course("a", ("Mo", "09:00", "10:30"))
        b = make_course("b", ("Mo", "10:00", "11:00"))
        assert not is_valid_combination([a, b])
        assert courses_conflict(a, b)
        assert courses_conflict(b, a)

    def test_conflict_in_second_slot_detected(self):
        """Nicht zusammenhängende Termine: Konflikt erst im zweiten Slot."""
        a = make_course("a", ("Mo", "08:00", "10:00"), ("Mi", "08:00", "10:00"))
        b = make_course("b", ("Di", "08:00", "10:00"), ("Mi", "09:00", "11:00"))
        assert not is_valid_combination([a, b])

    def test_empty_and_single_combinations_valid(self):
        assert is_valid_combination([])
        assert is_valid_combination([make_course("a", ("Mo", "09:00", "10:00"))])

    def test_three_way_one_bad_pair(self):
        a = make_course("a", ("Mo", "08:00", "09:00"))
        b = make_course("b", ("Mo", "09:00", "10:00"))
        c = make_course("c", ("Mo", "08:30", "08:45"))
        assert is_valid_combination([a, b])
        assert not is_valid_combination([a, b, c])

    def test_intervals_match_slots(self):
        a = make_course("a", ("Di", "10:00", "11:30"))
        assert course_intervals(a) == [("Di", 600, 690)]
        assert intervals_conflict_free([course_intervals(a)])


# ─── KONFLIKTMELDUNGEN ────────────────────────────────────────────────────────

class TestFindConflicts:
    def test_single_message_references_both_courses(self):
        """Szenario: checkSubjectConflicts(B, [A]) liefert genau eine Meldung."""
        a = make_course("a", ("Mo", "09:00", "10:30"), name="Analysis")
        b = make_course("b", ("Mo", "10:00", "11:00"), name="Biologie")
        messages = find_conflicts(b, [a])
        assert len(messages) == 1
        msg = messages[0]
        assert "Biologie (B101)" in msg
        assert "Analysis (A101)" in msg
        assert "Montag" in msg
        assert "10:00-11:00 vs. 09:00-10:30" in msg

    def test_no_conflicts_returns_empty(self):
        a = make_course("a", ("Mo", "09:00", "10:00"))
        b = make_course("b", ("Mo", "10:00", "11:00"))
        assert find_conflicts(b, [a]) == []

    def test_one_message_per_slot_pair(self):
        a = make_course("a", ("Mo", "09:00", "10:00"), ("Mi", "09:00", "10:00"))
        b = make_course("b", ("Mo", "09:30", "10:30"), ("Mi", "09:30", "10:30"))
        c = make_course("c", ("Mi", "09:45", "11:00"))
        messages = find_conflicts(b, [a, c])
        assert len(messages) == 3

    def test_same_id_skipped(self):
        """Bearbeiten: der Kurs kollidiert nicht mit seiner alten Fassung."""
        old = make_course("a", ("Mo", "09:00", "10:00"))
        edited = make_course("a", ("Mo", "09:30", "10:30"))
        assert find_conflicts(edited, [old]) == []
