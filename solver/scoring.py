"""Bewertung konfliktfreier Kurs-Kombinationen.

Alle Werte sind reine Funktionen der Kurse und ihrer Termine: keine
Zufälligkeit, kein externer Zustand.
"""

from collections import defaultdict
from typing import Optional, Sequence

from pydantic import BaseModel

from config import defaults as tags
from config.schema import ScoringConfig, TagConfig
from models.course import Course
from models.timeslot import parse_time


class ScoreBreakdown(BaseModel):
    """Score einer Kombination inkl. aller Einzelterme."""

    score: int
    ranking: list[str]
    gaps: int
    total_hours: float
    total_credits: int
    gap_penalty: int
    course_bonus: int
    distribution_bonus: int
    credit_bonus: int
    early_penalty: int
    late_penalty: int


def _slots_by_day(courses: Sequence[Course]) -> dict[str, list[tuple[int, int]]]:
    by_day: dict[str, list[tuple[int, int]]] = defaultdict(list)
    for course in courses:
        for slot in course.time_slots:
            by_day[slot.day.value].append((slot.start_minutes, slot.end_minutes))
    return by_day


def calculate_gaps(courses: Sequence[Course]) -> int:
    """Summe der Lückenstunden pro Woche.

    Pro Tag nach Beginn sortiert; jede Lücke zählt in ganzen Stunden
    (Ganzzahl-Division), Lücken unter 60 Minuten zählen also nicht.
    """
    total = 0
    for slots in _slots_by_day(courses).values():
        slots.sort()
        for (_, prev_end), (next_start, _) in zip(slots, slots[1:]):
            gap = next_start - prev_end
            if gap > 0:
                total += gap // 60
    return total


def calculate_total_hours(courses: Sequence[Course]) -> float:
    """Wöchentliche Präsenzzeit in Stunden, auf eine Nachkommastelle gerundet."""
    minutes = sum(c.total_minutes for c in courses)
    return round(minutes / 60, 1)


def day_counts(courses: Sequence[Course]) -> dict[str, int]:
    """Anzahl Termine pro belegtem Wochentag."""
    counts: dict[str, int] = defaultdict(int)
    for course in courses:
        for slot in course.time_slots:
            counts[slot.day.value] += 1
    return dict(counts)


def day_spread(courses: Sequence[Course]) -> int:
    """max − min Termine über die belegten Tage (0 ohne Termine)."""
    counts = list(day_counts(courses).values())
    if not counts:
        return 0
    return max(counts) - min(counts)


class ScheduleScorer:
    """Berechnet Score, Ranking-Tags, Lücken und Wochenstunden.

    Zustandslos bis auf die (unveränderliche) Konfiguration; eine Instanz
    kann von mehreren Generierungsläufen parallel genutzt werden.
    """

    def __init__(
        self,
        scoring: Optional[ScoringConfig] = None,
        tag_config: Optional[TagConfig] = None,
    ) -> None:
        self.scoring = scoring or ScoringConfig()
        self.tag_config = tag_config or TagConfig()
        self._early = parse_time(self.scoring.early_threshold)
        self._late = parse_time(self.scoring.late_threshold)
        self._afternoon = parse_time(self.tag_config.afternoon_start)
        self._morning = parse_time(self.tag_config.morning_end)

    # ─── Einzelterme ──────────────────────────────────────────────────────────

    def distribution_bonus(self, courses: Sequence[Course]) -> int:
        spread = day_spread(courses)
        if spread <= 1:
            return self.scoring.distribution_bonus_tight
        if spread <= 2:
            return self.scoring.distribution_bonus_loose
        return 0

    def credit_bonus(self, total_credits: int) -> int:
        sc = self.scoring
        if sc.credit_band_min <= total_credits <= sc.credit_band_max:
            return sc.credit_band_bonus
        return 0

    def has_too_early(self, courses: Sequence[Course]) -> bool:
        return any(s.start_minutes < self._early for c in courses for s in c.time_slots)

    def has_too_late(self, courses: Sequence[Course]) -> bool:
        return any(s.end_minutes > self._late for c in courses for s in c.time_slots)

    # ─── Score ────────────────────────────────────────────────────────────────

    def score(self, courses: Sequence[Course]) -> ScoreBreakdown:
        """Vollständige Bewertung einer konfliktfreien Kombination."""
        sc = self.scoring
        gaps = calculate_gaps(courses)
        total_credits = sum(c.credits for c in courses)

        gap_penalty = gaps * sc.gap_penalty_per_hour
        course_bonus = len(courses) * sc.bonus_per_course
        distribution = self.distribution_bonus(courses)
        credit = self.credit_bonus(total_credits)
        early = sc.early_penalty if self.has_too_early(courses) else 0
        late = sc.late_penalty if self.has_too_late(courses) else 0

        raw = (
            sc.base_score - gap_penalty + course_bonus + distribution + credit
            - early - late
        )
        return ScoreBreakdown(
            score=max(sc.min_score, raw),
            ranking=self.get_ranking(courses, gaps=gaps, total_credits=total_credits),
            gaps=gaps,
            total_hours=calculate_total_hours(courses),
            total_credits=total_credits,
            gap_penalty=gap_penalty,
            course_bonus=course_bonus,
            distribution_bonus=distribution,
            credit_bonus=credit,
            early_penalty=early,
            late_penalty=late,
        )

    def calculate_score(self, courses: Sequence[Course]) -> int:
        return self.score(courses).score

    # ─── Ranking-Tags ─────────────────────────────────────────────────────────

    def get_ranking(
        self,
        courses: Sequence[Course],
        gaps: Optional[int] = None,
        total_credits: Optional[int] = None,
    ) -> list[str]:
        """Beschreibende Tags; ohne passenden Tag nur "Standard-Stundenplan"."""
        tc = self.tag_config
        if gaps is None:
            gaps = calculate_gaps(courses)
        if total_credits is None:
            total_credits = sum(c.credits for c in courses)
        ranking: list[str] = []

        if gaps == 0:
            ranking.append(tags.TAG_NO_GAPS)
        elif gaps <= tc.very_compact_max_gaps:
            ranking.append(tags.TAG_VERY_COMPACT)
        elif gaps <= tc.compact_max_gaps:
            ranking.append(tags.TAG_COMPACT)
        elif gaps >= tc.many_gaps_min:
            ranking.append(tags.TAG_MANY_GAPS)

        if total_credits <= tc.very_light_max_credits:
            ranking.append(tags.TAG_VERY_LIGHT_LOAD)
        elif total_credits <= tc.light_max_credits:
            ranking.append(tags.TAG_LIGHT_LOAD)
        elif total_credits < tc.heavy_min_credits:
            ranking.append(tags.TAG_NORMAL_LOAD)
        else:
            ranking.append(tags.TAG_HEAVY_LOAD)

        if len(courses) >= tc.many_courses_min:
            ranking.append(tags.TAG_MANY_COURSES)
        elif len(courses) >= tc.full_load_min_courses:
            ranking.append(tags.TAG_FULL_LOAD)
        else:
            ranking.append(tags.TAG_PARTIAL_LOAD)

        starts = [s.start_minutes for c in courses for s in c.time_slots]
        if starts and not any(m >= self._afternoon for m in starts):
            ranking.append(tags.TAG_FREE_AFTERNOONS)
        if starts and not any(m < self._morning for m in starts):
            ranking.append(tags.TAG_FREE_MORNINGS)
        if any(m <= self._early for m in starts):
            ranking.append(tags.TAG_EARLY_CLASSES)
        if starts and day_spread(courses) <= tc.balanced_max_spread:
            ranking.append(tags.TAG_WELL_DISTRIBUTED)

        return ranking or [tags.TAG_STANDARD]
