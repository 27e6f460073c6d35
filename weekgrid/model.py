"""
Central data model definitions used across the project.

This module defines the canonical structure of Course and TimetableCourse
objects so that:
- all modules share the same field names
- the engine, the importers and the renderers agree on one weekday order
- the JSON course files keep a stable (camelCase) shape
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


MONDAY = "Monday"
TUESDAY = "Tuesday"
WEDNESDAY = "Wednesday"
THURSDAY = "Thursday"
FRIDAY = "Friday"
SATURDAY = "Saturday"
SUNDAY = "Sunday"

# Canonical order, used for every grouping/iteration over days
DAYS_OF_WEEK: List[str] = [MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY]
WEEKEND_DAYS = (SATURDAY, SUNDAY)


@dataclass
class Course:
    """
    Represents one course as entered by the user or imported from CSV.

    A course with several days is several identical weekly occurrences.
    """

    id: str
    name: str
    days_of_week: List[str]
    start_time: str
    end_time: str
    section: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "daysOfWeek": list(self.days_of_week),
            "startTime": self.start_time,
            "endTime": self.end_time,
        }
        if self.section:
            data["section"] = self.section
        if self.description:
            data["description"] = self.description
        if self.color:
            data["color"] = self.color
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Course":
        """
        Build a Course from a JSON dict (camelCase or snake_case keys).
        No validation happens here, see weekgrid.validation for that.
        """
        days = data.get("daysOfWeek", data.get("days_of_week", []))
        if isinstance(days, str):
            days = [days]
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            days_of_week=[str(d) for d in days],
            start_time=str(data.get("startTime", data.get("start_time", ""))),
            end_time=str(data.get("endTime", data.get("end_time", ""))),
            section=data.get("section") or None,
            description=data.get("description") or None,
            color=data.get("color") or None,
        )


@dataclass
class TimetableCourse(Course):
    """
    A Course placed on the slot grid, with its conflict bookkeeping.

    One instance exists per course; multi-day courses are shared (not copied)
    between the day buckets of a CoursesByDay mapping.
    """

    start_slot: int = 0
    duration: int = 1
    has_conflict: bool = False
    conflict_level: int = 0

    @property
    def end_slot(self) -> int:
        return self.start_slot + self.duration

    @classmethod
    def from_course(cls, course: Course, start_slot: int, duration: int) -> "TimetableCourse":
        return cls(
            id=course.id,
            name=course.name,
            days_of_week=list(course.days_of_week),
            start_time=course.start_time,
            end_time=course.end_time,
            section=course.section,
            description=course.description,
            color=course.color,
            start_slot=start_slot,
            duration=duration,
        )


@dataclass(frozen=True)
class TimeSlot:
    """
    One row of the grid. Rendering aid only.
    """

    hour: int
    minute: int
    label: str
    value: str


@dataclass(frozen=True)
class TimeRange:
    start_hour: int
    end_hour: int


CoursesByDay = Dict[str, List[TimetableCourse]]


@dataclass
class Timetable:
    """
    Everything a renderer or exporter needs for one pass of the pipeline.
    """

    time_range: TimeRange
    slot_duration: int
    time_slots: List[TimeSlot]
    visible_days: List[str]
    courses: List[TimetableCourse]
    courses_by_day: CoursesByDay
    day_conflict_levels: Dict[str, Dict[str, int]] = field(default_factory=dict)
