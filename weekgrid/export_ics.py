"""
iCalendar (.ics) export.

Each course becomes one weekly-recurring event (RRULE with BYDAY), starting
in the week that contains `week_of`. Times are floating local times, so
the calendar app shows them in whatever zone the user is in.

The resulting file can be imported into:
- Google Calendar
- Outlook
- Apple Calendar
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from weekgrid.model import DAYS_OF_WEEK, Course

_BYDAY = {
    "Monday": "MO",
    "Tuesday": "TU",
    "Wednesday": "WE",
    "Thursday": "TH",
    "Friday": "FR",
    "Saturday": "SA",
    "Sunday": "SU",
}


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _dt_local(day: date, time_hh_mm: str) -> str:
    """
    Convert date + time to ICS local datetime string 'YYYYMMDDTHHMM00'.
    """
    dt = datetime.combine(day, datetime.strptime(time_hh_mm, "%H:%M").time())
    return dt.strftime("%Y%m%dT%H%M00")


def _first_occurrence(course: Course, week_start: date) -> date:
    first_day = min(course.days_of_week, key=DAYS_OF_WEEK.index)
    return week_start + timedelta(days=DAYS_OF_WEEK.index(first_day))


def course_to_vevent(course: Course, week_start: date, weeks: Optional[int] = None) -> List[str]:
    """
    VEVENT lines for one course. `week_start` must be a Monday.
    """
    first = _first_occurrence(course, week_start)
    byday = ",".join(_BYDAY[d] for d in sorted(course.days_of_week, key=DAYS_OF_WEEK.index))
    rrule = f"RRULE:FREQ=WEEKLY;BYDAY={byday}"
    if weeks:
        rrule += f";COUNT={weeks * len(course.days_of_week)}"

    summary = f"{course.name} ({course.section})" if course.section else course.name
    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    lines = [
        "BEGIN:VEVENT",
        f"UID:{_ics_escape(course.id)}@weekgrid",
        f"DTSTAMP:{dtstamp}",
        f"DTSTART:{_dt_local(first, course.start_time)}",
        f"DTEND:{_dt_local(first, course.end_time)}",
        rrule,
        f"SUMMARY:{_ics_escape(summary or 'WeekGrid Course')}",
    ]
    if course.description:
        lines.append(f"DESCRIPTION:{_ics_escape(course.description.strip())}")
    lines.append("END:VEVENT")
    return lines


def export_courses_to_ics(
    courses: Iterable[Course],
    out_path: str | Path,
    week_of: Optional[date] = None,
    weeks: Optional[int] = None,
) -> int:
    """
    Export courses to an .ics file. Returns number of exported courses.
    """
    if weeks is not None and weeks < 1:
        raise ValueError(f"weeks must be at least 1, got {weeks}")

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    anchor = week_of or date.today()
    week_start = anchor - timedelta(days=anchor.weekday())

    lines: List[str] = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//WeekGrid//EN",
        "CALSCALE:GREGORIAN",
    ]

    count = 0
    for course in courses:
        if not course.days_of_week:
            continue
        lines.extend(course_to_vevent(course, week_start, weeks=weeks))
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
