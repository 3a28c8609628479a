"""Stundenplan-Generator: Aufzählung → Konfliktfilter → Bewertung → Sortierung.

Verwendung:
    generator = ScheduleGenerator(courses, target_count=4)
    schedules = generator.generate_all_schedules()

Einzelne Kombinationen aus nur einem Kurs werden verworfen. Ein leeres
Ergebnis ist kein Fehler; den Grund liefert generate().reason.
"""

import logging
import random
import time
from enum import Enum
from typing import Optional, Sequence, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from config.schema import PlannerConfig
from models.catalog import CourseCatalog
from models.course import Course
from models.errors import InvalidTargetCountError
from solver.conflicts import course_intervals, find_conflicts, intervals_conflict_free
from solver.enumerator import CombinationEnumerator, EnumerationStrategy
from solver.scoring import ScheduleScorer

logger = logging.getLogger(__name__)


# ─── Ergebnis-Modelle ─────────────────────────────────────────────────────────

class Schedule(BaseModel):
    """Ein konfliktfreier Stundenplan (referenziert Kurse des Katalogs)."""

    model_config = ConfigDict(frozen=True)

    id: str
    subjects: list[Course]
    score: int
    ranking: list[str]
    gaps: int             # Lückenstunden pro Woche
    total_hours: float = Field(   # Präsenzstunden pro Woche
        validation_alias=AliasChoices("total_hours", "totalHours"),
    )

    @property
    def course_count(self) -> int:
        return len(self.subjects)

    @property
    def total_credits(self) -> int:
        return sum(c.credits for c in self.subjects)

    @property
    def course_ids(self) -> list[str]:
        return [c.id for c in self.subjects]


class GenerationOutcome(str, Enum):
    OK = "ok"
    EMPTY_CATALOG = "empty_catalog"
    TARGET_EXCEEDS_CATALOG = "target_exceeds_catalog"
    NO_VALID_COMBINATION = "no_valid_combination"


class GenerationResult(BaseModel):
    """Ergebnis eines Generierungslaufs inkl. Grund bei leerem Ergebnis."""

    schedules: list[Schedule]
    reason: GenerationOutcome
    strategy: EnumerationStrategy
    candidates_checked: int
    valid_combinations: int
    duration_seconds: float

    @property
    def message(self) -> str:
        """Nutzerlesbare Beschreibung des Ergebnisses."""
        return _OUTCOME_MESSAGES[self.reason].format(n=len(self.schedules))


_OUTCOME_MESSAGES = {
    GenerationOutcome.OK: "{n} gültige Stundenpläne gefunden.",
    GenerationOutcome.EMPTY_CATALOG: "Keine Kurse angegeben.",
    GenerationOutcome.TARGET_EXCEEDS_CATALOG:
        "Gewünschte Kursanzahl übersteigt die Anzahl verfügbarer Kurse.",
    GenerationOutcome.NO_VALID_COMBINATION:
        "Keine gültigen Stundenpläne – Kurse überschneiden sich. "
        "Bitte die Kursauswahl anpassen.",
}


# ─── Generator ────────────────────────────────────────────────────────────────

class ScheduleGenerator:
    """Erzeugt alle (bzw. im Zufallsmodus viele) gültigen Stundenpläne.

    Der Katalog wird beim Erzeugen als Snapshot übernommen. generate()
    verändert keinen Instanzzustand und kann beliebig oft aufgerufen werden.
    """

    def __init__(
        self,
        courses: Union[Sequence[Course], CourseCatalog],
        target_count: Optional[int] = None,
        config: Optional[PlannerConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        catalog = courses if isinstance(courses, CourseCatalog) else CourseCatalog(courses=list(courses))
        catalog.check_unique_ids()

        if target_count is not None and (
            isinstance(target_count, bool)
            or not isinstance(target_count, int)
            or target_count < 1
        ):
            raise InvalidTargetCountError(
                f"Kursanzahl muss eine positive ganze Zahl sein, ist {target_count!r}"
            )

        self.courses: tuple[Course, ...] = tuple(catalog.courses)
        self.target_count = target_count
        self.config = config or PlannerConfig()
        # Nur der Startzustand wird gemerkt; jeder Lauf zieht aus einer eigenen Kopie
        self._rng_state = (rng or random.Random()).getstate()
        self.scorer = ScheduleScorer(self.config.scoring, self.config.tags)
        self._intervals = [course_intervals(c) for c in self.courses]

    # ─── Öffentliche API ──────────────────────────────────────────────────────

    def generate_all_schedules(self) -> list[Schedule]:
        """Sortierte Liste aller gefundenen Stundenpläne (evtl. leer)."""
        return self.generate().schedules

    def generate(self) -> GenerationResult:
        """Führt einen vollständigen Generierungslauf durch."""
        start = time.time()
        enumerator = CombinationEnumerator(
            len(self.courses),
            target_count=self.target_count,
            config=self.config.enumeration,
            rng=self._fresh_rng(),
        )
        strategy = enumerator.strategy
        logger.info(
            f"Generierung: {len(self.courses)} Kurse, Strategie={strategy.value}, "
            f"Zielanzahl={self.target_count}, "
            f"bis zu {enumerator.candidate_count():,} Kandidaten"
        )

        ranked: list[tuple[int, Schedule]] = []
        checked = 0
        valid = 0
        for index, combo in enumerate(enumerator):
            checked += 1
            if not intervals_conflict_free(self._intervals[i] for i in combo):
                continue
            valid += 1
            if len(combo) < 2:
                continue
            ranked.append((index, self._build_schedule(index, combo)))

        ranked.sort(key=lambda item: (-item[1].course_count, -item[1].score, item[0]))
        schedules = [s for _, s in ranked]
        elapsed = time.time() - start

        reason = self._outcome(schedules)
        if reason == GenerationOutcome.OK:
            logger.info(
                f"  {len(schedules)} Stundenpläne aus {checked:,} Kandidaten "
                f"({valid:,} konfliktfrei) in {elapsed:.2f}s"
            )
        else:
            logger.warning(f"Keine Stundenpläne: {reason.value} ({checked:,} Kandidaten geprüft)")

        return GenerationResult(
            schedules=schedules,
            reason=reason,
            strategy=strategy,
            candidates_checked=checked,
            valid_combinations=valid,
            duration_seconds=round(elapsed, 3),
        )

    def check_subject_conflicts(
        self, candidate: Course, existing: Sequence[Course]
    ) -> list[str]:
        """Konflikt-Warnungen beim Hinzufügen eines Kurses (unabhängig von generate)."""
        return find_conflicts(candidate, existing)

    # ─── Intern ───────────────────────────────────────────────────────────────

    def _fresh_rng(self) -> random.Random:
        rng = random.Random()
        rng.setstate(self._rng_state)
        return rng

    def _build_schedule(self, index: int, combo: tuple[int, ...]) -> Schedule:
        subjects = [self.courses[i] for i in combo]
        result = self.scorer.score(subjects)
        return Schedule(
            id=f"schedule-{index}",
            subjects=subjects,
            score=result.score,
            ranking=result.ranking,
            gaps=result.gaps,
            total_hours=result.total_hours,
        )

    def _outcome(self, schedules: list[Schedule]) -> GenerationOutcome:
        if schedules:
            return GenerationOutcome.OK
        if not self.courses:
            return GenerationOutcome.EMPTY_CATALOG
        if self.target_count is not None and self.target_count > len(self.courses):
            return GenerationOutcome.TARGET_EXCEEDS_CATALOG
        return GenerationOutcome.NO_VALID_COMBINATION
