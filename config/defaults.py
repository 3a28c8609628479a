from config.schema import (
    EnumerationConfig,
    PlannerConfig,
    ScoringConfig,
    TagConfig,
)

# ─── Ranking-Tags ─────────────────────────────────────────────────────────────

TAG_NO_GAPS = "Keine Lücken"
TAG_VERY_COMPACT = "Sehr kompakt"
TAG_COMPACT = "Kompakt"
TAG_MANY_GAPS = "Viele Lücken"

TAG_VERY_LIGHT_LOAD = "Sehr leichte Last"
TAG_LIGHT_LOAD = "Leichte Last"
TAG_NORMAL_LOAD = "Normale Last"
TAG_HEAVY_LOAD = "Hohe Last"

TAG_MANY_COURSES = "Viele Kurse"
TAG_FULL_LOAD = "Volle Belegung"
TAG_PARTIAL_LOAD = "Teilbelegung"

TAG_FREE_AFTERNOONS = "Nachmittage frei"
TAG_FREE_MORNINGS = "Vormittage frei"
TAG_EARLY_CLASSES = "Frühe Kurse"
TAG_WELL_DISTRIBUTED = "Gut verteilt"

TAG_STANDARD = "Standard-Stundenplan"

ALL_TAGS = [
    TAG_NO_GAPS, TAG_VERY_COMPACT, TAG_COMPACT, TAG_MANY_GAPS,
    TAG_VERY_LIGHT_LOAD, TAG_LIGHT_LOAD, TAG_NORMAL_LOAD, TAG_HEAVY_LOAD,
    TAG_MANY_COURSES, TAG_FULL_LOAD, TAG_PARTIAL_LOAD,
    TAG_FREE_AFTERNOONS, TAG_FREE_MORNINGS, TAG_EARLY_CLASSES,
    TAG_WELL_DISTRIBUTED, TAG_STANDARD,
]

# ─── Kursfarben (Tailwind-Palette des Web-Frontends) ──────────────────────────

COURSE_COLORS = [
    "#3B82F6",  # blau
    "#10B981",  # grün
    "#F59E0B",  # bernstein
    "#8B5CF6",  # violett
    "#EF4444",  # rot
    "#06B6D4",  # cyan
    "#EC4899",  # pink
    "#84CC16",  # limette
]


def default_scoring() -> ScoringConfig:
    """Kanonische Gewichte.

    Lücken: −8 pro Stunde, +15 pro Kurs, Verteilung +20/+10,
    Credits 12–18: +20, Beginn vor 07:30 bzw. Ende nach 19:00: je −10.
    """
    return ScoringConfig()


def default_planner_config() -> PlannerConfig:
    """Vollständige Default-Konfiguration."""
    return PlannerConfig(
        planner_name="Mein Stundenplan",
        scoring=default_scoring(),
        tags=TagConfig(),
        enumeration=EnumerationConfig(),
    )
