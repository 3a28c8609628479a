"""Datenmodell für einen belegbaren Kurs (Pydantic v2)."""

import re
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from models.timeslot import TimeSlot, Weekday

_COLOR_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


class Professor(BaseModel):
    """Lehrende Person eines Kurses."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    rating: Optional[float] = Field(None, ge=0.0, le=5.0)


class Course(BaseModel):
    """Ein Kurs mit einem oder mehreren wöchentlichen Terminen.

    Die Terminliste darf nicht zusammenhängende Slots enthalten (z.B. Mo + Mi).
    Der Kern verändert Kurse nie; Bearbeiten/Löschen liegt beim Aufrufer.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    code: str
    credits: int = Field(gt=0)
    professors: list[Professor] = []
    time_slots: list[TimeSlot] = Field(
        min_length=1,
        validation_alias=AliasChoices("time_slots", "timeSlots"),
    )
    color: str = "#3B82F6"

    @field_validator("id", "code")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("ID und Kürzel dürfen nicht leer sein.")
        return v.strip()

    @field_validator("color")
    @classmethod
    def _check_color(cls, v: str) -> str:
        if not _COLOR_RE.match(v):
            raise ValueError(f"Ungültige Farbe '{v}' (erwartet #RRGGBB)")
        return v.upper()

    @property
    def total_minutes(self) -> int:
        """Wöchentliche Präsenzzeit in Minuten."""
        return sum(s.duration_minutes for s in self.time_slots)

    @property
    def days(self) -> list[Weekday]:
        """Sortierte Liste der Wochentage, an denen der Kurs stattfindet."""
        return sorted({s.day for s in self.time_slots}, key=lambda d: d.ordinal)

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"
