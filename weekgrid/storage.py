"""
Course files.

A course file is a plain JSON document:

    {"courses": [{"id": "...", "name": "...", "daysOfWeek": ["Monday"],
                  "startTime": "09:00", "endTime": "10:30"}, ...]}

CSV files (see weekgrid.csv_import) are accepted wherever a course file
is read, so a user can go straight from a spreadsheet to a timetable.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, List

from weekgrid.csv_import import read_courses_csv
from weekgrid.model import Course
from weekgrid.validation import CourseValidationError, validate_course

logger = logging.getLogger(__name__)


def load_courses(path: str | Path) -> List[Course]:
    """
    Load courses from a JSON course file.

    Returns an empty list if the file does not exist or is invalid.
    Entries that fail validation are skipped with a warning, so one broken
    record never hides the rest of the schedule.
    """
    courses_path = Path(path)

    # First run: file does not exist yet -> no courses
    if not courses_path.exists():
        return []

    try:
        data = json.loads(courses_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("could not read course file %s: %s", courses_path, exc)
        return []

    items = data.get("courses", []) if isinstance(data, dict) else data
    if not isinstance(items, list):
        return []

    out: List[Course] = []
    seen_ids: set[str] = set()
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            logger.warning("%s: entry %d is not an object, skipped", courses_path, i)
            continue
        try:
            course = validate_course(Course.from_dict(item))
        except CourseValidationError as exc:
            logger.warning("%s: entry %d skipped: %s", courses_path, i, exc)
            continue
        if course.id in seen_ids:
            logger.warning("%s: duplicate id %s skipped", courses_path, course.id)
            continue
        seen_ids.add(course.id)
        out.append(course)
    return out


def load_courses_any(path: str | Path) -> List[Course]:
    """
    Load courses from a .csv or JSON file, based on the extension.
    Invalid CSV rows are logged and left out.
    """
    p = Path(path)
    if p.suffix.lower() != ".csv":
        return load_courses(p)

    if not p.exists():
        return []
    result = read_courses_csv(p)
    for error in result.errors:
        logger.warning("%s: %s", p, error)
    return result.courses


def save_courses(courses: Iterable[Course], path: str | Path) -> None:
    """
    Save courses to a JSON course file. Creates parent directories if needed.
    """
    courses_path = Path(path)
    courses_path.parent.mkdir(parents=True, exist_ok=True)

    payload = {"courses": [course.to_dict() for course in courses]}
    courses_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
