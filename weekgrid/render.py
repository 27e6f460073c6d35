"""
Terminal rendering with rich.

The grid has one row per slot (slot duration from the settings) and one
column per visible day. A course is written into the row of its first
visible slot; the remaining rows of its duration get a continuation marker.

Colours follow the conflict level of the occurrence on that day:
    1 overlap   -> yellow
    2+ overlaps -> red
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from weekgrid.grid import format_time, generate_all_time_slots
from weekgrid.model import Course, Timetable, TimetableCourse

CONTINUATION = "┆"


def _style_for_level(level: int) -> str:
    if level > 1:
        return "bold red"
    if level == 1:
        return "yellow"
    return "cyan"


def _course_label(course: Course) -> str:
    name = f"{course.name} ({course.section})" if course.section else course.name
    return f"{name} {course.start_time}-{course.end_time}"


def build_grid(timetable: Timetable) -> List[List[List[Tuple[str, str]]]]:
    """
    rows x visible days; each cell is a list of (text, style) pieces.
    Courses outside the displayed window are clipped.
    """
    slots = generate_all_time_slots(
        timetable.time_range.start_hour,
        timetable.time_range.end_hour,
        timetable.slot_duration,
    )
    grid: List[List[List[Tuple[str, str]]]] = [[[] for _ in timetable.visible_days] for _ in slots]

    for col, day in enumerate(timetable.visible_days):
        levels = timetable.day_conflict_levels.get(day, {})
        day_courses = sorted(timetable.courses_by_day.get(day, []), key=lambda c: c.start_slot)
        for course in day_courses:
            style = _style_for_level(levels.get(course.id, 0))
            # label goes in the first visible row, even when the start is clipped
            first_row = max(course.start_slot, 0)
            for row in range(first_row, course.end_slot):
                if row >= len(slots):
                    break
                text = _course_label(course) if row == first_row else CONTINUATION
                grid[row][col].append((text, style))
    return grid


def timetable_table(timetable: Timetable, title: Optional[str] = None) -> Table:
    table = Table(title=title, box=box.SIMPLE_HEAVY, show_lines=False)
    table.add_column("Time", justify="right", style="dim", no_wrap=True)
    for day in timetable.visible_days:
        table.add_column(day[:3])

    slots = generate_all_time_slots(
        timetable.time_range.start_hour,
        timetable.time_range.end_hour,
        timetable.slot_duration,
    )
    for slot, cells in zip(slots, build_grid(timetable)):
        row = [slot.label]
        for pieces in cells:
            row.append("\n".join(f"[{style}]{escape(text)}[/]" for text, style in pieces))
        table.add_row(*row)
    return table


def conflicts_table(pairs: Sequence[Tuple[str, TimetableCourse, TimetableCourse]]) -> Table:
    table = Table(title="Conflicts", box=box.SIMPLE)
    table.add_column("#", justify="right")
    table.add_column("Day")
    table.add_column("Course")
    table.add_column("Clashes with")

    for i, (day, first, second) in enumerate(pairs, start=1):
        table.add_row(str(i), day, escape(_course_label(first)), escape(_course_label(second)))
    return table


def courses_table(courses: Sequence[Course], conflict_levels: Optional[Dict[str, int]] = None) -> Table:
    """
    Plain course list. `conflict_levels` maps course id -> level (optional).
    """
    levels = conflict_levels or {}
    table = Table(title="Courses", box=box.SIMPLE)
    table.add_column("ID", style="dim")
    table.add_column("Course")
    table.add_column("Days")
    table.add_column("Time")
    table.add_column("Conflicts", justify="right")

    for course in courses:
        level = levels.get(course.id, 0)
        name = f"{course.name} ({course.section})" if course.section else course.name
        table.add_row(
            course.id,
            escape(name),
            ", ".join(day[:3] for day in course.days_of_week),
            f"{format_time(course.start_time)} - {format_time(course.end_time)}",
            f"[{_style_for_level(level)}]{level}[/]" if level else "",
        )
    return table


def print_renderable(renderable: Table, console: Optional[Console] = None) -> None:
    (console or Console()).print(renderable)
