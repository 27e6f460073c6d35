"""
Input validation for course records.

Everything that enters the timetable engine passes through here first,
whether it was typed on the command line, imported from CSV or loaded
from a course file. The engine itself trusts its input.
"""

from __future__ import annotations

import re
import uuid
from typing import Iterable, List, Optional

from weekgrid.model import (
    DAYS_OF_WEEK,
    FRIDAY,
    MONDAY,
    SATURDAY,
    SUNDAY,
    THURSDAY,
    TUESDAY,
    WEDNESDAY,
    Course,
)

DEFAULT_COURSE_COLOR = "#3b82f6"

_TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")
_DIGITS_RE = re.compile(r"^\d{3,4}$")

_DAY_ALIASES = {
    "monday": MONDAY,
    "mon": MONDAY,
    "mo": MONDAY,
    "m": MONDAY,
    "tuesday": TUESDAY,
    "tue": TUESDAY,
    "tues": TUESDAY,
    "tu": TUESDAY,
    "wednesday": WEDNESDAY,
    "wed": WEDNESDAY,
    "we": WEDNESDAY,
    "w": WEDNESDAY,
    "thursday": THURSDAY,
    "thu": THURSDAY,
    "thurs": THURSDAY,
    "th": THURSDAY,
    "friday": FRIDAY,
    "fri": FRIDAY,
    "fr": FRIDAY,
    "f": FRIDAY,
    "saturday": SATURDAY,
    "sat": SATURDAY,
    "sa": SATURDAY,
    "sunday": SUNDAY,
    "sun": SUNDAY,
    "su": SUNDAY,
}


class CourseValidationError(ValueError):
    """
    Raised when a course record cannot be accepted.
    `errors` holds one human readable message per problem.
    """

    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = list(errors)


def generate_id() -> str:
    return uuid.uuid4().hex


def normalize_time(value: str) -> str:
    """
    '930' -> '09:30', '1415' -> '14:15', '9:30' -> '09:30'.
    Accepts a full-width colon. Anything else is returned stripped.
    """
    text = value.strip().replace("\uff1a", ":")
    if _DIGITS_RE.match(text):
        padded = text.zfill(4)
        return f"{padded[:2]}:{padded[2:]}"
    if _TIME_RE.match(text) and len(text) == 4:
        return "0" + text
    return text


def is_valid_time(value: str) -> bool:
    return bool(_TIME_RE.match(value))


def time_to_minutes(value: str) -> int:
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def validate_time_range(start_time: str, end_time: str) -> bool:
    """
    True if both times are valid and end is strictly after start.
    """
    if not (is_valid_time(start_time) and is_valid_time(end_time)):
        return False
    return time_to_minutes(end_time) > time_to_minutes(start_time)


def normalize_day(value: str) -> Optional[str]:
    """
    'thu' -> 'Thursday'. Returns None for unknown names.
    """
    return _DAY_ALIASES.get(value.strip().lower())


def split_days(value: str) -> List[str]:
    """
    'Mon, Wed' -> ['Mon', 'Wed'] (raw, not normalized).
    """
    return [part.strip() for part in value.split(",") if part.strip()]


def _sort_days(days: Iterable[str]) -> List[str]:
    return sorted(days, key=DAYS_OF_WEEK.index)


def validate_course_fields(
    name: str,
    days: Iterable[str],
    start_time: str,
    end_time: str,
) -> tuple[List[str], List[str], str, str]:
    """
    Check the scheduling fields of a course.

    Returns (errors, normalized_days, normalized_start, normalized_end).
    Error messages are unique and keep the order they were found in.
    """
    errors: List[str] = []

    def add(message: str) -> None:
        if message not in errors:
            errors.append(message)

    raw_days = list(days)

    if not name.strip():
        add("Course name is required")
    if not raw_days:
        add("Day of week is required")
    if not start_time.strip():
        add("Start time is required")
    if not end_time.strip():
        add("End time is required")

    normalized_days: List[str] = []
    for raw in raw_days:
        day = normalize_day(raw)
        if day is None:
            add(f'Invalid day of week "{raw}"')
            continue
        if day not in normalized_days:
            normalized_days.append(day)

    start = normalize_time(start_time)
    end = normalize_time(end_time)

    if start and not is_valid_time(start):
        add(f'Invalid start time format "{start}"')
    if end and not is_valid_time(end):
        add(f'Invalid end time format "{end}"')
    if is_valid_time(start) and is_valid_time(end) and not validate_time_range(start, end):
        add("End time must be after start time")

    return errors, _sort_days(normalized_days), start, end


def make_course(
    name: str,
    days: Iterable[str],
    start_time: str,
    end_time: str,
    section: Optional[str] = None,
    description: Optional[str] = None,
    color: Optional[str] = None,
    course_id: Optional[str] = None,
) -> Course:
    """
    Validate the fields and build a Course.
    Raises CourseValidationError listing every problem found.
    """
    errors, normalized_days, start, end = validate_course_fields(name, days, start_time, end_time)
    if errors:
        raise CourseValidationError(errors)

    return Course(
        id=course_id or generate_id(),
        name=name.strip(),
        days_of_week=normalized_days,
        start_time=start,
        end_time=end,
        section=(section or "").strip() or None,
        description=(description or "").strip() or None,
        color=color or DEFAULT_COURSE_COLOR,
    )


def validate_course(course: Course) -> Course:
    """
    Re-check a Course built elsewhere (e.g. loaded from a file) and return a
    normalized copy. Raises CourseValidationError.
    """
    return make_course(
        name=course.name,
        days=course.days_of_week,
        start_time=course.start_time,
        end_time=course.end_time,
        section=course.section,
        description=course.description,
        color=course.color,
        course_id=course.id,
    )
