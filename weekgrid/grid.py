"""
Time grid arithmetic.

- resolve the displayed hour window (dynamic or manual)
- map 'HH:MM' wall-clock times onto slot indices of a given granularity
- generate the rows (TimeSlot) of the grid

All times are zone-less 24-hour 'HH:MM' strings that were validated
upstream (see weekgrid.validation). Nothing here re-validates them.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from weekgrid.model import Course, TimeRange, TimeSlot

logger = logging.getLogger(__name__)

# Window used when there is nothing to fit the range around
DEFAULT_TIME_RANGE = TimeRange(start_hour=7, end_hour=22)


def _split_time(hhmm: str) -> tuple[int, int]:
    hours, minutes = hhmm.split(":")
    return int(hours), int(minutes)


def format_time(hhmm: str) -> str:
    """
    '13:05' -> '1:05 PM', '00:00' -> '12:00 AM'.
    """
    hour, minute = _split_time(hhmm)
    suffix = "AM" if hour < 12 else "PM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d} {suffix}"


def calculate_time_range(courses: Iterable[Course]) -> TimeRange:
    """
    Fit the hour window around the given courses.

    Start hours are floored (minutes ignored), end hours are ceiled when
    they have minutes. One hour of padding is added before the earliest
    course; the result is clipped to [0, 23].
    """
    earliest = 24
    latest = 0
    seen = False

    for course in courses:
        seen = True
        start_hour, _ = _split_time(course.start_time)
        end_hour, end_minute = _split_time(course.end_time)
        ceiled_end = end_hour + 1 if end_minute > 0 else end_hour

        earliest = min(earliest, start_hour)
        latest = max(latest, ceiled_end)

    if not seen:
        return DEFAULT_TIME_RANGE

    return TimeRange(start_hour=max(0, earliest - 1), end_hour=min(23, latest))


def resolve_time_range(
    courses: Iterable[Course],
    dynamic: bool,
    manual_range: Optional[TimeRange] = None,
) -> TimeRange:
    """
    Return the window to display: computed from the courses in dynamic mode,
    the caller's manual window otherwise.
    """
    if dynamic:
        time_range = calculate_time_range(courses)
        logger.debug("dynamic time range: %s-%s", time_range.start_hour, time_range.end_hour)
        return time_range

    if manual_range is None:
        raise ValueError("manual_range is required when dynamic mode is off")
    return manual_range


def time_to_slot_index(time: str, start_hour: int, slot_minutes: int) -> int:
    """
    Slot index of a time, relative to the grid origin hour.

    Floors to the slot containing the time. Times before the origin give
    negative indices; callers are expected not to pass those.
    """
    hours, minutes = _split_time(time)
    total_minutes = (hours - start_hour) * 60 + minutes
    return total_minutes // slot_minutes


def calculate_duration(start_time: str, end_time: str, start_hour: int, slot_minutes: int) -> int:
    """
    Number of slots between two times, never less than one.
    """
    start_slot = time_to_slot_index(start_time, start_hour, slot_minutes)
    end_slot = time_to_slot_index(end_time, start_hour, slot_minutes)
    return max(1, end_slot - start_slot)


def _make_slot(hour: int, minute: int) -> TimeSlot:
    value = f"{hour:02d}:{minute:02d}"
    return TimeSlot(hour=hour, minute=minute, label=format_time(value), value=value)


def generate_time_slots(start_hour: int = 7, end_hour: int = 22) -> List[TimeSlot]:
    """
    Hourly display rows from start_hour to end_hour (inclusive).
    """
    return [_make_slot(hour, 0) for hour in range(start_hour, end_hour + 1)]


def generate_all_time_slots(start_hour: int = 7, end_hour: int = 22, slot_minutes: int = 60) -> List[TimeSlot]:
    """
    One row per slot of the given granularity, used for positioning.
    """
    slots: List[TimeSlot] = []
    for hour in range(start_hour, end_hour + 1):
        for minute in range(0, 60, slot_minutes):
            slots.append(_make_slot(hour, minute))
    return slots
