"""Datenmodell für einen Zeitslot im Wochenraster (Pydantic v2)."""

import re
from enum import Enum

from pydantic import (
    AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator,
)

from models.errors import InvalidTimeSlotError

_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class Weekday(str, Enum):
    MO = "Mo"
    DI = "Di"
    MI = "Mi"
    DO = "Do"
    FR = "Fr"
    SA = "Sa"
    SO = "So"

    @property
    def ordinal(self) -> int:
        """0=Montag … 6=Sonntag."""
        return list(Weekday).index(self)

    @property
    def label(self) -> str:
        """Ausgeschriebener Tagesname."""
        return _DAY_LABELS[self]

    @classmethod
    def parse(cls, value) -> "Weekday":
        """Akzeptiert Kürzel, deutsche, englische und spanische Tagesnamen."""
        if isinstance(value, Weekday):
            return value
        key = str(value).strip().lower()
        day = _DAY_ALIASES.get(key)
        if day is None:
            raise InvalidTimeSlotError(f"Unbekannter Wochentag: '{value}'")
        return day


_DAY_LABELS = {
    Weekday.MO: "Montag",
    Weekday.DI: "Dienstag",
    Weekday.MI: "Mittwoch",
    Weekday.DO: "Donnerstag",
    Weekday.FR: "Freitag",
    Weekday.SA: "Samstag",
    Weekday.SO: "Sonntag",
}

# Legacy-Exporte enthalten spanische Tagesnamen ("Lunes", "Miércoles")
_DAY_ALIASES: dict[str, Weekday] = {}
for _day, _names in {
    Weekday.MO: ["mo", "montag", "mon", "monday", "lunes"],
    Weekday.DI: ["di", "dienstag", "tue", "tues", "tuesday", "martes"],
    Weekday.MI: ["mi", "mittwoch", "wed", "wednesday", "miércoles", "miercoles"],
    Weekday.DO: ["do", "donnerstag", "thu", "thurs", "thursday", "jueves"],
    Weekday.FR: ["fr", "freitag", "fri", "friday", "viernes"],
    Weekday.SA: ["sa", "samstag", "sat", "saturday", "sábado", "sabado"],
    Weekday.SO: ["so", "sonntag", "sun", "sunday", "domingo"],
}.items():
    for _name in _names:
        _DAY_ALIASES[_name] = _day


def parse_time(text: str) -> int:
    """Wandelt "HH:MM" in Minuten seit Tagesbeginn um (h*60+m)."""
    match = _TIME_RE.match(str(text).strip())
    if not match:
        raise InvalidTimeSlotError(f"Ungültiges Uhrzeitformat: '{text}' (erwartet HH:MM)")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeSlotError(f"Ungültige Uhrzeit: '{text}'")
    return hours * 60 + minutes


def format_minutes(minutes: int) -> str:
    """Minuten seit Tagesbeginn → "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


class TimeSlot(BaseModel):
    """Ein wöchentlicher Termin eines Kurses.

    Uhrzeiten sind Wandzeit ohne Zeitzone. Immutable, damit Slots als
    Dict-Key / Set-Element nutzbar sind.
    """

    model_config = ConfigDict(frozen=True)

    day: Weekday
    start_time: str = Field(validation_alias=AliasChoices("start_time", "startTime"))
    end_time: str = Field(validation_alias=AliasChoices("end_time", "endTime"))

    @field_validator("day", mode="before")
    @classmethod
    def _parse_day(cls, v):
        return Weekday.parse(v)

    @field_validator("start_time", "end_time")
    @classmethod
    def _normalize_time(cls, v: str) -> str:
        return format_minutes(parse_time(v))

    @model_validator(mode="after")
    def _check_order(self):
        if parse_time(self.start_time) >= parse_time(self.end_time):
            raise InvalidTimeSlotError(
                f"Beginn {self.start_time} liegt nicht vor Ende {self.end_time}"
            )
        return self

    @classmethod
    def create(cls, day, start_time: str, end_time: str) -> "TimeSlot":
        """Baut einen Slot und wirft bei ungültigen Angaben InvalidTimeSlotError.

        Der Konstruktor selbst meldet Fehler aus den Validatoren als
        pydantic.ValidationError.
        """
        try:
            return cls(day=day, start_time=start_time, end_time=end_time)
        except ValidationError as e:
            reasons = "; ".join(
                str(err.get("ctx", {}).get("error", err["msg"])) for err in e.errors()
            )
            raise InvalidTimeSlotError(reasons) from e

    @property
    def start_minutes(self) -> int:
        return parse_time(self.start_time)

    @property
    def end_minutes(self) -> int:
        return parse_time(self.end_time)

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    def overlaps(self, other: "TimeSlot") -> bool:
        """Halboffene Intervalle: 09:00-10:00 und 10:00-11:00 überlappen NICHT."""
        return (
            self.day == other.day
            and self.start_minutes < other.end_minutes
            and other.start_minutes < self.end_minutes
        )

    def __str__(self) -> str:
        return f"{self.day.value} {self.start_time}-{self.end_time}"
