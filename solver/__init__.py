"""Solver-Modul: Kombinations-Aufzählung, Konfliktprüfung und Bewertung."""

from .conflicts import (
    find_conflicts,
    is_valid_combination,
    slots_overlap,
    courses_conflict,
)
from .enumerator import CombinationEnumerator, EnumerationStrategy
from .scoring import ScheduleScorer, ScoreBreakdown
from .generator import (
    GenerationOutcome,
    GenerationResult,
    Schedule,
    ScheduleGenerator,
)

__all__ = [
    "find_conflicts",
    "is_valid_combination",
    "slots_overlap",
    "courses_conflict",
    "CombinationEnumerator",
    "EnumerationStrategy",
    "ScheduleScorer",
    "ScoreBreakdown",
    "GenerationOutcome",
    "GenerationResult",
    "Schedule",
    "ScheduleGenerator",
]
