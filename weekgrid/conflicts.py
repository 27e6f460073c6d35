"""
Conflict detection.

Courses are placed on the slot grid and compared day by day.
Overlap rule (half-open intervals, touching ends are fine):
    start < other_end AND other_start < end

Each day's list is sorted by start slot and swept once; the inner loop
stops at the first course that starts at or after the current one ends.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from weekgrid.grid import calculate_duration, time_to_slot_index
from weekgrid.model import DAYS_OF_WEEK, Course, TimetableCourse

logger = logging.getLogger(__name__)


def _time_to_minutes(hhmm: str) -> int:
    """
    Convert 'HH:MM' to minutes since midnight.
    Raises ValueError for invalid formats.
    """
    parts = hhmm.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {hhmm!r}")
    h = int(parts[0])
    m = int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time value: {hhmm!r}")
    return h * 60 + m


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and b_start < a_end


def _index_by_day(courses: Iterable[TimetableCourse]) -> Dict[str, List[TimetableCourse]]:
    """
    Day -> courses on that day. The same object goes into every bucket.
    Keys follow the canonical weekday order.
    """
    by_day: Dict[str, List[TimetableCourse]] = defaultdict(list)
    for course in courses:
        for day in course.days_of_week:
            by_day[day].append(course)
    order = {day: i for i, day in enumerate(DAYS_OF_WEEK)}
    return {day: by_day[day] for day in sorted(by_day, key=lambda d: order.get(d, len(order)))}


def _sweep_overlaps(day_courses: Sequence[TimetableCourse]) -> Iterator[Tuple[TimetableCourse, TimetableCourse]]:
    """
    Yield every overlapping pair of one day, earlier start first.
    """
    # sorted() is stable: equal start slots keep input order
    ordered = sorted(day_courses, key=lambda c: c.start_slot)

    for i, first in enumerate(ordered):
        for second in ordered[i + 1 :]:
            if second.start_slot >= first.end_slot:
                break
            if _overlaps(first.start_slot, first.end_slot, second.start_slot, second.end_slot):
                yield first, second


def place_courses(courses: Iterable[Course], start_hour: int, slot_minutes: int) -> List[TimetableCourse]:
    """
    Wrap each course in a fresh TimetableCourse with its slot position.
    The input courses are left untouched.
    """
    return [
        TimetableCourse.from_course(
            course,
            start_slot=time_to_slot_index(course.start_time, start_hour, slot_minutes),
            duration=calculate_duration(course.start_time, course.end_time, start_hour, slot_minutes),
        )
        for course in courses
    ]


def detect_conflicts(courses: Iterable[Course], start_hour: int, slot_minutes: int) -> List[TimetableCourse]:
    """
    Place courses on the grid and count, for each one, how many other
    occurrences it overlaps. Counts add up over all days of a course.

    Returns one TimetableCourse per input course, in input order.
    """
    placed = place_courses(courses, start_hour, slot_minutes)

    pairs = 0
    for day_courses in _index_by_day(placed).values():
        for first, second in _sweep_overlaps(day_courses):
            for course in (first, second):
                course.has_conflict = True
                course.conflict_level += 1
            pairs += 1

    logger.debug("placed %d courses, %d overlapping pairs", len(placed), pairs)
    return placed


def day_conflict_levels(courses: Iterable[TimetableCourse]) -> Dict[str, Dict[str, int]]:
    """
    Per day, the number of overlaps of each course's occurrence on that day.

    Unlike TimetableCourse.conflict_level this does not add up across days,
    so a Monday-only clash of a Monday/Wednesday course shows 0 on Wednesday.
    """
    levels: Dict[str, Dict[str, int]] = {}
    for day, day_courses in _index_by_day(courses).items():
        counts = {course.id: 0 for course in day_courses}
        for first, second in _sweep_overlaps(day_courses):
            counts[first.id] += 1
            counts[second.id] += 1
        levels[day] = counts
    return levels


def find_conflict_pairs(courses: Iterable[TimetableCourse]) -> List[Tuple[str, TimetableCourse, TimetableCourse]]:
    """
    Every overlapping (day, A, B) occurrence pair, days in canonical order,
    A starting no later than B.
    """
    out: List[Tuple[str, TimetableCourse, TimetableCourse]] = []
    for day, day_courses in _index_by_day(courses).items():
        for first, second in _sweep_overlaps(day_courses):
            out.append((day, first, second))
    return out


def find_conflicting_courses(course: Course, courses: Iterable[Course]) -> List[Course]:
    """
    Courses that clash with `course` on at least one shared day.

    Minute precise (no slot rounding), used to warn before adding a course.
    The course itself (same id) is never reported.
    """
    start = _time_to_minutes(course.start_time)
    end = _time_to_minutes(course.end_time)
    days = set(course.days_of_week)

    out: List[Course] = []
    for other in courses:
        if other.id == course.id:
            continue
        if not days.intersection(other.days_of_week):
            continue
        if _overlaps(start, end, _time_to_minutes(other.start_time), _time_to_minutes(other.end_time)):
            out.append(other)
    return out
