"""Tests für den Stundenplan-Generator (solver/generator.py).

Deckt die Kern-Eigenschaften ab: Konfliktfreiheit, keine Einzel-Kurs-Pläne,
exakte Kursanzahl, Sortierung, Determinismus und den Zufallsmodus.
"""

import random
from itertools import combinations

import pytest

from config.schema import EnumerationConfig, PlannerConfig
from data.sample_data import RandomCatalogGenerator, sample_courses
from models.catalog import CourseCatalog
from models.course import Course
from models.errors import (
    CombinationLimitError,
    DuplicateCourseIdError,
    InvalidTargetCountError,
)
from models.timeslot import TimeSlot
from solver.conflicts import is_valid_combination
from solver.enumerator import EnumerationStrategy
from solver.generator import GenerationOutcome, Schedule, ScheduleGenerator


# ─── Hilfsfunktionen ──────────────────────────────────────────────────────────

def make_course(cid: str, *slots: tuple[str, str, str], credits: int = 3) -> Course:
    return Course(
        id=cid,
        name=f"Kurs {cid}",
        code=f"{cid.upper()}100",
        credits=credits,
        time_slots=[TimeSlot(day=d, start_time=s, end_time=e) for d, s, e in slots],
    )


def make_disjoint_courses(n: int) -> list[Course]:
    """n Kurse à 1 Stunde, die sich paarweise nie überschneiden (max. 5×12)."""
    days = ["Mo", "Di", "Mi", "Do", "Fr"]
    courses = []
    for i in range(n):
        day = days[i % 5]
        hour = 8 + i // 5
        courses.append(make_course(f"d{i}", (day, f"{hour:02d}:00", f"{hour + 1:02d}:00")))
    return courses


def scenario_four_courses() -> list[Course]:
    """5 Kurse, von den 10 Dreier-Kombinationen ist genau eine konfliktfrei.

    A, B, C liegen überschneidungsfrei am Montag; D und E blockieren den
    ganzen Vormittag und kollidieren mit allen anderen.
    """
    return [
        make_course("a", ("Mo", "08:00", "09:00")),
        make_course("b", ("Mo", "10:00", "11:00")),
        make_course("c", ("Mo", "12:00", "13:00")),
        make_course("d", ("Mo", "08:00", "14:00")),
        make_course("e", ("Mo", "08:30", "13:30")),
    ]


def assert_pairwise_conflict_free(schedule: Schedule) -> None:
    for a, b in combinations(schedule.subjects, 2):
        for sa in a.time_slots:
            for sb in b.time_slots:
                assert not sa.overlaps(sb), f"{a.code}/{b.code}: {sa} vs {sb}"


# ─── SZENARIEN ────────────────────────────────────────────────────────────────

class TestScenarios:
    def test_touching_boundary_combination_valid(self):
        """Szenario 1: A 09-10, B 10-11 am Montag → gültig, 0 Lücken."""
        a = make_course("a", ("Mo", "09:00", "10:00"))
        b = make_course("b", ("Mo", "10:00", "11:00"))
        schedules = ScheduleGenerator([a, b]).generate_all_schedules()
        assert len(schedules) == 1
        assert schedules[0].course_ids == ["a", "b"]
        assert schedules[0].gaps == 0

    def test_overlap_produces_no_schedule(self):
        """Szenario 2: A 09:00-10:30, B 10:00-11:00 → kein Stundenplan."""
        a = make_course("a", ("Mo", "09:00", "10:30"))
        b = make_course("b", ("Mo", "10:00", "11:00"))
        generator = ScheduleGenerator([a, b])
        assert not is_valid_combination([a, b])
        assert generator.generate_all_schedules() == []
        messages = generator.check_subject_conflicts(b, [a])
        assert len(messages) == 1
        assert "Montag" in messages[0]

    def test_three_compatible_courses(self):
        """Szenario 3: Größen 2 und 3, Dreier-Kombination zuerst."""
        courses = make_disjoint_courses(3)
        schedules = ScheduleGenerator(courses).generate_all_schedules()
        sizes = [s.course_count for s in schedules]
        assert sorted(sizes) == [2, 2, 2, 3]
        assert sizes[0] == 3

    def test_exactly_one_valid_triple(self):
        """Szenario 4: C(5,3)=10 Kombinationen, genau eine gültig."""
        schedules = ScheduleGenerator(scenario_four_courses(), target_count=3).generate_all_schedules()
        assert len(schedules) == 1
        assert schedules[0].course_ids == ["a", "b", "c"]

    def test_target_exceeds_catalog(self):
        """Szenario 5: targetCount 6 bei 5 Kursen → leere Liste, keine Exception."""
        result = ScheduleGenerator(scenario_four_courses(), target_count=6).generate()
        assert result.schedules == []
        assert result.reason == GenerationOutcome.TARGET_EXCEEDS_CATALOG


# ─── EIGENSCHAFTEN ────────────────────────────────────────────────────────────

class TestProperties:
    def test_every_schedule_pairwise_conflict_free(self):
        catalog = RandomCatalogGenerator(seed=5).generate(12)
        for schedule in ScheduleGenerator(catalog).generate_all_schedules():
            assert_pairwise_conflict_free(schedule)

    def test_no_singleton_schedules(self):
        catalog = RandomCatalogGenerator(seed=8).generate(10)
        schedules = ScheduleGenerator(catalog).generate_all_schedules()
        assert schedules
        assert all(s.course_count >= 2 for s in schedules)

    @pytest.mark.parametrize("k", [2, 3, 4])
    def test_exact_count_contract(self, k):
        schedules = ScheduleGenerator(make_disjoint_courses(6), target_count=k).generate_all_schedules()
        assert len(schedules) == len(list(combinations(range(6), k)))
        assert all(s.course_count == k for s in schedules)

    def test_exact_count_one_yields_nothing(self):
        """k=1 ist gültig, aber Einzel-Kurs-Pläne werden verworfen."""
        result = ScheduleGenerator(make_disjoint_courses(3), target_count=1).generate()
        assert result.schedules == []
        assert result.valid_combinations == 3

    def test_sort_order(self):
        """Kursanzahl absteigend, bei Gleichstand Score absteigend."""
        catalog = RandomCatalogGenerator(seed=21).generate(12)
        schedules = ScheduleGenerator(catalog).generate_all_schedules()
        keys = [(s.course_count, s.score) for s in schedules]
        assert keys == sorted(keys, key=lambda k: (-k[0], -k[1]))

    def test_score_sorted_in_exact_mode(self):
        catalog = RandomCatalogGenerator(seed=13).generate(10)
        schedules = ScheduleGenerator(catalog, target_count=3).generate_all_schedules()
        scores = [s.score for s in schedules]
        assert scores == sorted(scores, reverse=True)

    def test_ties_broken_by_enumeration_order(self):
        """Gleicher Score → Reihenfolge der Aufzählung (ID-Index aufsteigend)."""
        courses = make_disjoint_courses(4)
        schedules = ScheduleGenerator(courses, target_count=2).generate_all_schedules()
        for prev, nxt in zip(schedules, schedules[1:]):
            if prev.score == nxt.score:
                assert int(prev.id.split("-")[1]) < int(nxt.id.split("-")[1])

    def test_metrics_non_negative(self):
        catalog = RandomCatalogGenerator(seed=2).generate(11)
        for s in ScheduleGenerator(catalog).generate_all_schedules():
            assert s.gaps >= 0
            assert s.total_hours >= 0
            assert s.score >= 0

    def test_deterministic_in_exhaustive_mode(self):
        catalog = RandomCatalogGenerator(seed=9).generate(12)
        first = ScheduleGenerator(catalog).generate_all_schedules()
        second = ScheduleGenerator(catalog).generate_all_schedules()
        assert [(s.id, s.score, s.gaps, s.total_hours) for s in first] == \
               [(s.id, s.score, s.gaps, s.total_hours) for s in second]

    def test_schedule_ids_unique(self):
        schedules = ScheduleGenerator(make_disjoint_courses(5)).generate_all_schedules()
        ids = [s.id for s in schedules]
        assert len(ids) == len(set(ids))
        assert all(i.startswith("schedule-") for i in ids)

    def test_sample_courses_all_compatible(self):
        """Die Demo-Kurse überschneiden sich nicht → größter Plan enthält alle 6."""
        schedules = ScheduleGenerator(sample_courses()).generate_all_schedules()
        assert len(schedules) == 2 ** 6 - 1 - 6
        assert schedules[0].course_count == 6


# ─── ZUFALLSMODUS ─────────────────────────────────────────────────────────────

class TestSampledMode:
    def test_large_catalog_uses_sampling(self):
        catalog = CourseCatalog(courses=make_disjoint_courses(25))
        result = ScheduleGenerator(catalog, rng=random.Random(4)).generate()
        assert result.strategy == EnumerationStrategy.SAMPLED
        assert result.candidates_checked <= 7 * 100

    def test_sample_size_coverage(self):
        """Alle Größen 2..8 kommen vor, keine größere."""
        catalog = CourseCatalog(courses=make_disjoint_courses(25))
        schedules = ScheduleGenerator(catalog, rng=random.Random(4)).generate_all_schedules()
        assert {s.course_count for s in schedules} == set(range(2, 9))

    def test_sampled_results_valid(self):
        catalog = RandomCatalogGenerator(seed=3).generate(24)
        for schedule in ScheduleGenerator(catalog, rng=random.Random(1)).generate_all_schedules():
            assert_pairwise_conflict_free(schedule)
            assert 2 <= schedule.course_count <= 8

    def test_seeded_sampling_reproducible(self):
        catalog = RandomCatalogGenerator(seed=3).generate(22)
        a = ScheduleGenerator(catalog, rng=random.Random(77)).generate_all_schedules()
        b = ScheduleGenerator(catalog, rng=random.Random(77)).generate_all_schedules()
        assert [s.id for s in a] == [s.id for s in b]

    def test_sampled_repeatable_on_same_instance(self):
        catalog = RandomCatalogGenerator(seed=3).generate(22)
        generator = ScheduleGenerator(catalog, rng=random.Random(77))
        first = generator.generate_all_schedules()
        second = generator.generate_all_schedules()
        assert first == second

    def test_caller_rng_not_advanced(self):
        rng = random.Random(77)
        before = rng.getstate()
        ScheduleGenerator(RandomCatalogGenerator(seed=3).generate(22), rng=rng).generate()
        assert rng.getstate() == before

    def test_target_count_forces_exact_mode(self):
        catalog = CourseCatalog(courses=make_disjoint_courses(22))
        result = ScheduleGenerator(catalog, target_count=2).generate()
        assert result.strategy == EnumerationStrategy.EXACT
        assert len(result.schedules) == 22 * 21 // 2


# ─── EINGABEFEHLER & ERGEBNISGRÜNDE ───────────────────────────────────────────

class TestInputAndOutcome:
    @pytest.mark.parametrize("bad", [0, -1, True, 2.5, "3"])
    def test_invalid_target_count(self, bad):
        with pytest.raises(InvalidTargetCountError):
            ScheduleGenerator(make_disjoint_courses(3), target_count=bad)

    def test_duplicate_ids_rejected(self):
        courses = [make_course("x", ("Mo", "08:00", "09:00")),
                   make_course("x", ("Di", "08:00", "09:00"))]
        with pytest.raises(DuplicateCourseIdError):
            ScheduleGenerator(courses)

    def test_empty_catalog(self):
        result = ScheduleGenerator([]).generate()
        assert result.schedules == []
        assert result.reason == GenerationOutcome.EMPTY_CATALOG
        assert result.message == "Keine Kurse angegeben."

    def test_all_conflicting(self):
        courses = [make_course(c, ("Mo", "09:00", "10:00")) for c in "abc"]
        result = ScheduleGenerator(courses).generate()
        assert result.reason == GenerationOutcome.NO_VALID_COMBINATION
        assert result.valid_combinations == 3   # nur Einzel-Kurse

    def test_ok_outcome_message(self):
        result = ScheduleGenerator(make_disjoint_courses(3)).generate()
        assert result.reason == GenerationOutcome.OK
        assert result.message.startswith("4 ")

    def test_combination_limit_from_config(self):
        config = PlannerConfig(enumeration=EnumerationConfig(max_exhaustive_combinations=20))
        with pytest.raises(CombinationLimitError):
            ScheduleGenerator(make_disjoint_courses(6), config=config).generate()

    def test_generate_repeatable_on_same_instance(self):
        generator = ScheduleGenerator(make_disjoint_courses(4))
        assert generator.generate().schedules == generator.generate().schedules

    def test_catalog_not_mutated(self):
        courses = make_disjoint_courses(4)
        snapshot = list(courses)
        ScheduleGenerator(courses).generate()
        assert courses == snapshot
