from models.errors import (
    PlannerInputError,
    InvalidTimeSlotError,
    DuplicateCourseIdError,
    InvalidTargetCountError,
    CombinationLimitError,
    CourseImportError,
)
from models.timeslot import TimeSlot, Weekday, parse_time, format_minutes
from models.course import Course, Professor
from models.catalog import CourseCatalog, CatalogReport

__all__ = [
    "PlannerInputError",
    "InvalidTimeSlotError",
    "DuplicateCourseIdError",
    "InvalidTargetCountError",
    "CombinationLimitError",
    "CourseImportError",
    "TimeSlot",
    "Weekday",
    "parse_time",
    "format_minutes",
    "Course",
    "Professor",
    "CourseCatalog",
    "CatalogReport",
]
