"""
CLI (Command Line Interface).

Quick terminal commands working on a course file (.json or .csv):

    weekgrid show <file>
    weekgrid list <file>
    weekgrid conflicts <file>
    weekgrid range <file>
    weekgrid import <file.csv> <out.json>
    weekgrid add <file.json> --name ... --days Mon,Wed --start 09:00 --end 10:30
    weekgrid remove <file.json> <course_id>
    weekgrid edit <file.json> <course_id> [--name ... --days ... --start ... --end ...]
    weekgrid clear <file.json>
    weekgrid export <file> <out.ics>

Display options (weekends, Sunday first, fixed hour range, slot size) come
from the settings file and can be overridden per call.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
from datetime import date, datetime
from pathlib import Path

from weekgrid.conflicts import find_conflict_pairs, find_conflicting_courses
from weekgrid.csv_import import read_courses_csv
from weekgrid.export_ics import export_courses_to_ics
from weekgrid.logging_config import setup_logging
from weekgrid.render import conflicts_table, courses_table, print_renderable, timetable_table
from weekgrid.settings import SLOT_DURATIONS, TimetableSettings, load_settings
from weekgrid.storage import load_courses, load_courses_any, save_courses
from weekgrid.timetable import build_timetable
from weekgrid.validation import CourseValidationError, make_course, split_days


def _resolve_settings(args: argparse.Namespace) -> TimetableSettings:
    """
    Settings file first, then command line overrides.
    """
    settings = load_settings(args.settings)

    if args.weekends:
        settings = replace(settings, show_weekends=True)
    if args.sunday_first:
        settings = replace(settings, start_with_sunday=True)
    if args.slot is not None:
        settings = replace(settings, slot_duration=args.slot)
    if args.fixed_range is not None:
        start, end = args.fixed_range
        settings = replace(settings, dynamic_time_range=False, start_hour=start, end_hour=end)
    return settings


def _require_json(path: Path) -> bool:
    if path.suffix.lower() == ".csv":
        print("This command needs a JSON course file (use 'import' to convert a CSV first).")
        return False
    return True


def _cmd_show(args: argparse.Namespace) -> int:
    """
    Render the weekly grid.
    """
    courses = load_courses_any(args.file)
    if not courses:
        print("No courses.")
        return 0

    timetable = build_timetable(courses, _resolve_settings(args))
    print_renderable(timetable_table(timetable, title=f"Timetable ({timetable.slot_duration}-minute slots)"))
    return 0


def _cmd_list(args: argparse.Namespace) -> int:
    courses = load_courses_any(args.file)
    if not courses:
        print("No courses.")
        return 0

    timetable = build_timetable(courses, _resolve_settings(args))
    levels = {course.id: course.conflict_level for course in timetable.courses}
    print_renderable(courses_table(courses, levels))
    return 0


def _cmd_conflicts(args: argparse.Namespace) -> int:
    """
    Print all overlapping course pairs, day by day.
    """
    courses = load_courses_any(args.file)
    timetable = build_timetable(courses, _resolve_settings(args))

    pairs = find_conflict_pairs(timetable.courses)
    if not pairs:
        print("No conflicts found.")
        return 0

    print(f"Conflicts found: {len(pairs)}")
    if args.plain:
        for day, a, b in pairs:
            print(f"- {day} {a.start_time}-{a.end_time} {a.name}  <->  {b.start_time}-{b.end_time} {b.name}")
    else:
        print_renderable(conflicts_table(pairs))
    return 0


def _cmd_range(args: argparse.Namespace) -> int:
    courses = load_courses_any(args.file)
    timetable = build_timetable(courses, _resolve_settings(args))
    print(f"{timetable.time_range.start_hour:02d}:00-{timetable.time_range.end_hour:02d}:00")
    return 0


def _cmd_import(args: argparse.Namespace) -> int:
    """
    Validate a CSV file and write the valid rows as a JSON course file.
    """
    src = Path(args.csv)
    if not src.exists():
        print(f"File not found: {src}")
        return 1

    result = read_courses_csv(src)
    for error in result.errors:
        print(error)

    if not result.courses:
        print("No valid courses to import.")
        return 1

    out = Path(args.out)
    existing = load_courses(out) if args.append else []
    save_courses(existing + result.courses, out)
    print(f"Imported {len(result.courses)} courses to: {out} ({len(result.errors)} rows skipped)")
    return 0


def _cmd_add(args: argparse.Namespace) -> int:
    path = Path(args.file)
    if not _require_json(path):
        return 1

    try:
        course = make_course(
            name=args.name or "",
            days=split_days(args.days or ""),
            start_time=args.start or "",
            end_time=args.end or "",
            section=args.section,
            description=args.description,
        )
    except CourseValidationError as exc:
        for error in exc.errors:
            print(error)
        return 1

    courses = load_courses(path)
    for other in find_conflicting_courses(course, courses):
        print(f"Warning: overlaps with {other.name} ({', '.join(other.days_of_week)} {other.start_time}-{other.end_time})")

    courses.append(course)
    save_courses(courses, path)
    print(f"Added: {course.name} [{course.id}] (courses: {len(courses)})")
    return 0


def _cmd_edit(args: argparse.Namespace) -> int:
    """
    Change fields of an existing course; the id stays the same.
    """
    path = Path(args.file)
    if not _require_json(path):
        return 1

    courses = load_courses(path)
    index = next((i for i, c in enumerate(courses) if c.id == args.course_id), None)
    if index is None:
        print(f"Not found: {args.course_id}")
        return 1

    current = courses[index]
    try:
        course = make_course(
            name=args.name if args.name is not None else current.name,
            days=split_days(args.days) if args.days is not None else current.days_of_week,
            start_time=args.start if args.start is not None else current.start_time,
            end_time=args.end if args.end is not None else current.end_time,
            section=args.section if args.section is not None else current.section,
            description=args.description if args.description is not None else current.description,
            color=current.color,
            course_id=current.id,
        )
    except CourseValidationError as exc:
        for error in exc.errors:
            print(error)
        return 1

    for other in find_conflicting_courses(course, courses):
        print(f"Warning: overlaps with {other.name} ({', '.join(other.days_of_week)} {other.start_time}-{other.end_time})")

    courses[index] = course
    save_courses(courses, path)
    print(f"Updated: {course.name} [{course.id}]")
    return 0


def _cmd_remove(args: argparse.Namespace) -> int:
    path = Path(args.file)
    if not _require_json(path):
        return 1

    cid = (args.course_id or "").strip()
    if not cid:
        print("Please provide a course id.")
        return 1

    courses = load_courses(path)
    remaining = [c for c in courses if c.id != cid]
    if len(remaining) == len(courses):
        print(f"Not found: {cid}")
        return 0

    save_courses(remaining, path)
    print(f"Removed: {cid} (courses: {len(remaining)})")
    return 0


def _cmd_clear(args: argparse.Namespace) -> int:
    path = Path(args.file)
    if not _require_json(path):
        return 1

    count = len(load_courses(path))
    save_courses([], path)
    print(f"Cleared {count} courses")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    """
    Export the courses as weekly recurring events into an .ics file.
    """
    courses = load_courses_any(args.file)
    if not courses:
        print("No courses to export.")
        return 0

    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .ics path.")
        return 1

    n = export_courses_to_ics(courses, out_path, week_of=args.week_of, weeks=args.weeks)
    print(f"Exported {n} courses to: {out_path}")
    return 0


def _iso_date(text: str) -> date:
    try:
        return datetime.strptime(text, "%Y-%m-%d").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {text!r}")


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}")
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return value


def _display_options() -> argparse.ArgumentParser:
    parent = argparse.ArgumentParser(add_help=False)
    parent.add_argument("--settings", type=Path, default=None, help="Settings JSON file")
    parent.add_argument("--weekends", action="store_true", help="Show Saturday and Sunday")
    parent.add_argument("--sunday-first", action="store_true", help="Start the week with Sunday")
    parent.add_argument("--slot", type=int, choices=SLOT_DURATIONS, default=None, help="Slot size in minutes")
    parent.add_argument(
        "--fixed-range",
        type=int,
        nargs=2,
        metavar=("START", "END"),
        default=None,
        help="Fixed hour window instead of fitting it to the courses",
    )
    return parent


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="weekgrid", description="WeekGrid weekly timetable")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)
    display = _display_options()

    p_show = sub.add_parser("show", parents=[display], help="Show the weekly timetable")
    p_show.add_argument("file", type=str, help="Course file (.json or .csv)")

    p_list = sub.add_parser("list", parents=[display], help="List courses with conflict counts")
    p_list.add_argument("file", type=str, help="Course file (.json or .csv)")

    p_conf = sub.add_parser("conflicts", parents=[display], help="Show schedule conflicts")
    p_conf.add_argument("file", type=str, help="Course file (.json or .csv)")
    p_conf.add_argument("--plain", action="store_true", help="Plain text output")

    p_range = sub.add_parser("range", parents=[display], help="Print the displayed hour window")
    p_range.add_argument("file", type=str, help="Course file (.json or .csv)")

    p_import = sub.add_parser("import", help="Import courses from CSV into a JSON course file")
    p_import.add_argument("csv", type=str, help="CSV file")
    p_import.add_argument("out", type=str, help="Output JSON course file")
    p_import.add_argument("--append", action="store_true", help="Keep courses already in the output file")

    p_add = sub.add_parser("add", help="Add a course to a JSON course file")
    p_add.add_argument("file", type=str, help="JSON course file")
    p_add.add_argument("--name", required=True)
    p_add.add_argument("--days", required=True, help="Comma separated, e.g. Mon,Wed")
    p_add.add_argument("--start", required=True, help="HH:MM")
    p_add.add_argument("--end", required=True, help="HH:MM")
    p_add.add_argument("--section", default=None)
    p_add.add_argument("--description", default=None)

    p_remove = sub.add_parser("remove", help="Remove a course by id")
    p_remove.add_argument("file", type=str, help="JSON course file")
    p_remove.add_argument("course_id", type=str, help="Course id")

    p_edit = sub.add_parser("edit", help="Change fields of a course, keeping its id")
    p_edit.add_argument("file", type=str, help="JSON course file")
    p_edit.add_argument("course_id", type=str, help="Course id")
    p_edit.add_argument("--name", default=None)
    p_edit.add_argument("--days", default=None, help="Comma separated, e.g. Mon,Wed")
    p_edit.add_argument("--start", default=None, help="HH:MM")
    p_edit.add_argument("--end", default=None, help="HH:MM")
    p_edit.add_argument("--section", default=None)
    p_edit.add_argument("--description", default=None)

    p_clear = sub.add_parser("clear", help="Remove all courses from a JSON course file")
    p_clear.add_argument("file", type=str, help="JSON course file")

    p_export = sub.add_parser("export", help="Export courses to .ics")
    p_export.add_argument("file", type=str, help="Course file (.json or .csv)")
    p_export.add_argument("out", type=str, help="Output file path (e.g. out.ics)")
    p_export.add_argument("--week-of", type=_iso_date, default=None, help="First week (YYYY-MM-DD), default today")
    p_export.add_argument("--weeks", type=_positive_int, default=None, help="Number of weeks (default: open ended)")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else None)

    handlers = {
        "show": _cmd_show,
        "list": _cmd_list,
        "conflicts": _cmd_conflicts,
        "range": _cmd_range,
        "import": _cmd_import,
        "add": _cmd_add,
        "remove": _cmd_remove,
        "edit": _cmd_edit,
        "clear": _cmd_clear,
        "export": _cmd_export,
    }
    handler = handlers.get(args.command)
    if handler is None:
        raise SystemExit(2)

    if args.command in ("show", "list", "conflicts", "range") and args.fixed_range is not None:
        start, end = args.fixed_range
        if not (0 <= start < end <= 23):
            print("--fixed-range needs 0 <= START < END <= 23")
            raise SystemExit(1)

    raise SystemExit(handler(args))
