from pydantic import BaseModel, Field, field_validator, model_validator

from models.timeslot import format_minutes, parse_time


def _normalize_hhmm(v: str) -> str:
    return format_minutes(parse_time(v))


# ─── BEWERTUNG ───

class ScoringConfig(BaseModel):
    """Gewichte der Stundenplan-Bewertung.

    Score = Basis − Lücken·Strafe + Kurse·Bonus + Verteilungsbonus
            + Credit-Bonus − Früh-/Spät-Strafe, nach unten auf min_score begrenzt.
    """
    # Ausgangswert jeder Bewertung
    base_score: int = Field(100, ge=0,
        description="Basis-Score")
    # Abzug pro ganzer Lückenstunde
    gap_penalty_per_hour: int = Field(8, ge=0,
        description="Abzug pro Lückenstunde")
    # Zuschlag pro Kurs im Stundenplan (0 = deaktiviert)
    bonus_per_course: int = Field(15, ge=0,
        description="Bonus pro Kurs")
    # Bonus wenn Tagesdifferenz (max − min Termine) ≤ 1
    distribution_bonus_tight: int = Field(20, ge=0,
        description="Verteilungsbonus bei Spannweite ≤ 1")
    # Bonus wenn Tagesdifferenz ≤ 2
    distribution_bonus_loose: int = Field(10, ge=0,
        description="Verteilungsbonus bei Spannweite ≤ 2")
    # Untere Grenze des sinnvollen Credit-Bereichs (inklusive)
    credit_band_min: int = Field(12, ge=0,
        description="Credit-Band Untergrenze")
    # Obere Grenze des sinnvollen Credit-Bereichs (inklusive)
    credit_band_max: int = Field(18, ge=0,
        description="Credit-Band Obergrenze")
    # Bonus wenn die Credits im Band liegen
    credit_band_bonus: int = Field(20, ge=0,
        description="Bonus für Credits im Band")
    # Termine, die VOR dieser Uhrzeit beginnen, gelten als zu früh
    early_threshold: str = Field("07:30",
        description="Früh-Schwelle (HH:MM)")
    early_penalty: int = Field(10, ge=0,
        description="Abzug für zu frühe Termine")
    # Termine, die NACH dieser Uhrzeit enden, gelten als zu spät
    late_threshold: str = Field("19:00",
        description="Spät-Schwelle (HH:MM)")
    late_penalty: int = Field(10, ge=0,
        description="Abzug für zu späte Termine")
    # Score wird nie kleiner als dieser Wert
    min_score: int = Field(0, ge=0,
        description="Untergrenze des Scores")

    @field_validator("early_threshold", "late_threshold")
    @classmethod
    def _normalize_times(cls, v: str) -> str:
        return _normalize_hhmm(v)

    @model_validator(mode='after')
    def _check_credit_band(self):
        if self.credit_band_min > self.credit_band_max:
            raise ValueError(
                f"credit_band_min ({self.credit_band_min}) > "
                f"credit_band_max ({self.credit_band_max})"
            )
        return self


# ─── RANKING-TAGS ───

class TagConfig(BaseModel):
    """Schwellen für die beschreibenden Ranking-Tags."""
    # Lücken-Buckets: 0 = keine, ≤ very_compact = sehr kompakt, ≤ compact = kompakt
    very_compact_max_gaps: int = Field(1, ge=0)
    compact_max_gaps: int = Field(3, ge=0)
    many_gaps_min: int = Field(6, ge=1)
    # Credit-Buckets (Obergrenzen inklusive, heavy ab heavy_min)
    very_light_max_credits: int = Field(6, ge=0)
    light_max_credits: int = Field(12, ge=0)
    heavy_min_credits: int = Field(18, ge=0)
    # Kursanzahl-Buckets
    full_load_min_courses: int = Field(5, ge=1)
    many_courses_min: int = Field(7, ge=1)
    # Kein Termin beginnt ab dieser Uhrzeit → "Nachmittage frei"
    afternoon_start: str = "14:00"
    # Kein Termin beginnt vor dieser Uhrzeit → "Vormittage frei"
    morning_end: str = "12:00"
    # Maximale Tages-Spannweite für "Gut verteilt"
    balanced_max_spread: int = Field(2, ge=0)

    @field_validator("afternoon_start", "morning_end")
    @classmethod
    def _normalize_times(cls, v: str) -> str:
        return _normalize_hhmm(v)

    @model_validator(mode='after')
    def _check_ascending(self):
        if not (self.very_compact_max_gaps <= self.compact_max_gaps < self.many_gaps_min):
            raise ValueError("Lücken-Schwellen müssen aufsteigend sein.")
        if not (self.very_light_max_credits <= self.light_max_credits < self.heavy_min_credits):
            raise ValueError("Credit-Schwellen müssen aufsteigend sein.")
        if self.full_load_min_courses > self.many_courses_min:
            raise ValueError("full_load_min_courses > many_courses_min")
        return self


# ─── AUFZÄHLUNG ───

class EnumerationConfig(BaseModel):
    """Steuerung der Kombinations-Aufzählung."""
    # Ab dieser Kursanzahl wird (ohne Zielanzahl) per Zufallsauswahl gesucht
    large_catalog_threshold: int = Field(20, ge=2, le=30,
        description="Schwelle für Zufallsmodus")
    # Größte Kombinationsgröße im Zufallsmodus
    max_sample_size: int = Field(8, ge=2,
        description="Max. Kurse pro Zufallsauswahl")
    # Zufallsauswahlen pro Kombinationsgröße
    samples_per_size: int = Field(100, ge=1,
        description="Zufallsauswahlen pro Größe")
    # Harte Obergrenze für vollständige Aufzählung (Schutz vor Hängern)
    max_exhaustive_combinations: int = Field(2_000_000, ge=1,
        description="Max. Kandidaten bei vollständiger Aufzählung")


# ─── GESAMT-CONFIG ───

class PlannerConfig(BaseModel):
    """Gesamtkonfiguration des Kursplaners."""
    # Anzeigename (erscheint in Exporten)
    planner_name: str = Field("Mein Stundenplan",
        description="Titel für Exporte")
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    tags: TagConfig = Field(default_factory=TagConfig)
    enumeration: EnumerationConfig = Field(default_factory=EnumerationConfig)
