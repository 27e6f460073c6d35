"""
CSV import / export of course lists.

Expected CSV (header names are matched loosely, see _HEADER_ALIASES):

    name,section,day,start,end,description
    Algorithms,A1,"Mon,Wed",09:00,10:30,Room 101

Important rules:
- 1 CSV row = 1 Course (several days in one cell -> one multi-day course)
- rows with errors are reported and skipped, never half-imported
- exact duplicate rows are imported once
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional

from weekgrid.model import Course
from weekgrid.validation import DEFAULT_COURSE_COLOR, generate_id, split_days, validate_course_fields

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["name", "section", "day", "startTime", "endTime", "description"]


# ---------------------------------------------------------------------------
# Header normalization
# ---------------------------------------------------------------------------

_HEADER_ALIASES = {
    "course name": "name",
    "coursename": "name",
    "name": "name",
    "section": "section",
    "course section": "section",
    "coursesection": "section",
    "day of week": "day",
    "dayofweek": "day",
    "day": "day",
    "days": "day",
    "start time": "startTime",
    "starttime": "startTime",
    "start": "startTime",
    "end time": "endTime",
    "endtime": "endTime",
    "end": "endTime",
    "description": "description",
    "details": "description",
    "location": "description",
    "room": "description",
}


def normalize_header(header: str) -> str:
    """
    Map a CSV header cell to one of CSV_COLUMNS. Unknown headers are kept.
    """
    text = header.strip().lstrip("\ufeff")
    return _HEADER_ALIASES.get(text.lower(), text)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass
class ImportRow:
    """
    One parsed CSV row, valid or not. `row_number` counts the header as 1.
    """

    row_number: int
    raw: Dict[str, str]
    course: Optional[Course]
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class ImportResult:
    courses: List[Course] = field(default_factory=list)
    rows: List[ImportRow] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Row parsing (CORE LOGIC)
# ---------------------------------------------------------------------------


def parse_course_row(
    row: Dict[str, str],
    row_number: int,
    id_factory: Callable[[], str] = generate_id,
) -> ImportRow:
    """
    Validate one normalized CSV row and turn it into a Course if possible.
    """
    raw = {key: (row.get(key) or "").strip() for key in CSV_COLUMNS}

    errors, days, start, end = validate_course_fields(
        name=raw["name"],
        days=split_days(raw["day"]),
        start_time=raw["startTime"],
        end_time=raw["endTime"],
    )

    course: Optional[Course] = None
    if not errors:
        course = Course(
            id=id_factory(),
            name=raw["name"],
            days_of_week=days,
            start_time=start,
            end_time=end,
            section=raw["section"] or None,
            description=raw["description"] or None,
            color=DEFAULT_COURSE_COLOR,
        )

    return ImportRow(row_number=row_number, raw=raw, course=course, errors=errors)


def _dedupe_key(raw: Dict[str, str]) -> str:
    return "|".join(raw[key].lower() for key in CSV_COLUMNS)


def parse_courses_csv(text: str, id_factory: Callable[[], str] = generate_id) -> ImportResult:
    """
    Parse CSV text (with header row) into courses plus a per-row report.
    """
    result = ImportResult()

    reader = csv.reader(io.StringIO(text.lstrip("\ufeff")))
    try:
        header = next(reader)
    except StopIteration:
        return result

    columns = [normalize_header(h) for h in header]
    seen: set[str] = set()

    for index, cells in enumerate(reader):
        row_number = index + 2
        if not any(cell.strip() for cell in cells):
            continue

        row = {columns[i]: cell for i, cell in enumerate(cells) if i < len(columns)}
        parsed = parse_course_row(row, row_number, id_factory=id_factory)

        key = _dedupe_key(parsed.raw)
        if key in seen:
            logger.debug("skipping duplicate CSV row %d", row_number)
            continue
        seen.add(key)

        result.rows.append(parsed)
        if parsed.course is not None:
            result.courses.append(parsed.course)
        else:
            result.errors.append(f"Row {row_number}: {'; '.join(parsed.errors)}")

    logger.info("CSV import: %d courses, %d rows with errors", len(result.courses), len(result.errors))
    return result


def read_courses_csv(path: str | Path, id_factory: Callable[[], str] = generate_id) -> ImportResult:
    """
    Read and parse a CSV file (UTF-8, BOM tolerated).
    """
    text = Path(path).read_text(encoding="utf-8-sig")
    return parse_courses_csv(text, id_factory=id_factory)


# ---------------------------------------------------------------------------
# Export
# ---------------------------------------------------------------------------


def course_to_csv_row(course: Course) -> Dict[str, str]:
    return {
        "name": course.name,
        "section": course.section or "",
        "day": ",".join(day[:3] for day in course.days_of_week),
        "startTime": course.start_time,
        "endTime": course.end_time,
        # one line per cell
        "description": (course.description or "").replace("\n", ";"),
    }


def write_courses_csv(courses: Iterable[Course], path: str | Path) -> int:
    """
    Write courses as CSV (same columns the importer reads). Returns row count.
    """
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)

    count = 0
    with out.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for course in courses:
            writer.writerow(course_to_csv_row(course))
            count += 1
    return count
