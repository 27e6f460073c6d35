"""
Day bucketing and visible-day selection.
"""

from __future__ import annotations

from typing import Iterable, List

from weekgrid.model import DAYS_OF_WEEK, SUNDAY, WEEKEND_DAYS, CoursesByDay, TimetableCourse


def group_courses_by_day(courses: Iterable[TimetableCourse]) -> CoursesByDay:
    """
    Put each course into the bucket of every day it runs on.

    Buckets hold references to the same objects (no copies) and keep the
    input order. Days without courses have no key.
    """
    by_day: CoursesByDay = {}
    for course in courses:
        for day in course.days_of_week:
            by_day.setdefault(day, []).append(course)
    return by_day


def get_visible_days(show_weekends: bool, start_with_sunday: bool) -> List[str]:
    """
    Days to display, in display order.

    Sunday-first only applies when weekends are shown. This is presentation
    only; slot and conflict computation always cover all seven days.
    """
    days = list(DAYS_OF_WEEK)

    if not show_weekends:
        days = [day for day in days if day not in WEEKEND_DAYS]

    if start_with_sunday and show_weekends and SUNDAY in days:
        days.remove(SUNDAY)
        days.insert(0, SUNDAY)

    return days
