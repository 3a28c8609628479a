"""Filtern und Umsortieren einer generierten Stundenplan-Liste."""

from typing import Literal, Optional

from pydantic import BaseModel, Field

from solver.generator import Schedule

SortKey = Literal["score", "gaps", "hours", "subjects"]


class ScheduleQuery(BaseModel):
    """Ansichts-Filter: Tag, Suchbegriff, Sortierung, Begrenzung."""

    ranking_tag: Optional[str] = None
    search: Optional[str] = None
    sort_by: SortKey = "score"
    limit: Optional[int] = Field(None, ge=1)


_SORT_KEYS = {
    "score":    lambda s: -s.score,
    "gaps":     lambda s: s.gaps,
    "hours":    lambda s: s.total_hours,
    "subjects": lambda s: -s.course_count,
}


def available_tags(schedules: list[Schedule]) -> list[str]:
    """Alle vorkommenden Ranking-Tags in Reihenfolge des ersten Auftretens."""
    seen: dict[str, None] = {}
    for s in schedules:
        for tag in s.ranking:
            seen.setdefault(tag, None)
    return list(seen)


def matches_search(schedule: Schedule, term: str) -> bool:
    """Groß-/Kleinschreibung egal; durchsucht Kursname und Kürzel."""
    needle = term.lower()
    return any(
        needle in c.name.lower() or needle in c.code.lower()
        for c in schedule.subjects
    )


def filter_schedules(schedules: list[Schedule], query: ScheduleQuery) -> list[Schedule]:
    """Wendet den Filter an. Sortierung ist stabil (Gleichstände behalten die Generator-Reihenfolge)."""
    result = [
        s for s in schedules
        if (not query.ranking_tag or query.ranking_tag in s.ranking)
        and (not query.search or matches_search(s, query.search))
    ]
    result.sort(key=_SORT_KEYS[query.sort_by])
    if query.limit is not None:
        result = result[:query.limit]
    return result
