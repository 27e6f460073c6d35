"""
The full timetable pipeline.

    courses + settings
        -> time range (dynamic or manual)
        -> slot placement + conflict counts
        -> day buckets, visible days, grid rows

Everything is recomputed from scratch on every call; the input courses
are never modified.
"""

from __future__ import annotations

import logging
from typing import Sequence

from weekgrid.conflicts import day_conflict_levels, detect_conflicts
from weekgrid.days import get_visible_days, group_courses_by_day
from weekgrid.grid import generate_time_slots, resolve_time_range
from weekgrid.model import Course, Timetable, TimetableCourse
from weekgrid.settings import DEFAULT_SETTINGS, TimetableSettings

logger = logging.getLogger(__name__)


def create_timetable_courses(
    courses: Sequence[Course],
    start_hour: int,
    slot_minutes: int = 30,
) -> list[TimetableCourse]:
    """
    Courses placed on the grid with their conflict flags set.
    """
    return detect_conflicts(courses, start_hour, slot_minutes)


def build_timetable(courses: Sequence[Course], settings: TimetableSettings = DEFAULT_SETTINGS) -> Timetable:
    time_range = resolve_time_range(courses, settings.dynamic_time_range, settings.manual_range)

    placed = create_timetable_courses(courses, time_range.start_hour, settings.slot_duration)
    by_day = group_courses_by_day(placed)

    timetable = Timetable(
        time_range=time_range,
        slot_duration=settings.slot_duration,
        time_slots=generate_time_slots(time_range.start_hour, time_range.end_hour),
        visible_days=get_visible_days(settings.show_weekends, settings.start_with_sunday),
        courses=placed,
        courses_by_day=by_day,
        day_conflict_levels=day_conflict_levels(placed),
    )

    logger.debug(
        "timetable %02d:00-%02d:00, %d-minute slots, %d courses on %d days",
        time_range.start_hour,
        time_range.end_hour,
        settings.slot_duration,
        len(placed),
        len(by_day),
    )
    return timetable
