import itertools
import tempfile
import unittest
from pathlib import Path

from tests.helpers import course
from weekgrid.csv_import import normalize_header, parse_courses_csv, read_courses_csv, write_courses_csv


def _ids():
    counter = itertools.count(1)
    return lambda: f"id{next(counter)}"


class TestParseCoursesCSV(unittest.TestCase):
    def test_normal_rows(self) -> None:
        text = (
            "Course Name,Section,Day of Week,Start Time,End Time,Location\n"
            'Algorithms,A1,"Mon,Wed",09:00,10:30,Room 101\n'
            "Databases,,Thu,1300,1430,\n"
        )
        result = parse_courses_csv(text, id_factory=_ids())

        self.assertEqual(result.errors, [])
        self.assertEqual(len(result.courses), 2)

        algo, db = result.courses
        self.assertEqual(algo.id, "id1")
        self.assertEqual(algo.days_of_week, ["Monday", "Wednesday"])
        self.assertEqual(algo.section, "A1")
        self.assertEqual(algo.description, "Room 101")
        self.assertEqual((db.start_time, db.end_time), ("13:00", "14:30"))
        self.assertIsNone(db.section)

    def test_invalid_rows_are_reported_with_row_numbers(self) -> None:
        text = (
            "name,day,start,end\n"
            "Good,Mon,09:00,10:00\n"
            "Bad Day,Funday,09:00,10:00\n"
            ",Tue,11:00,10:00\n"
        )
        result = parse_courses_csv(text, id_factory=_ids())

        self.assertEqual([c.name for c in result.courses], ["Good"])
        self.assertEqual(
            result.errors,
            [
                'Row 3: Invalid day of week "Funday"',
                "Row 4: Course name is required; End time must be after start time",
            ],
        )
        self.assertEqual([r.ok for r in result.rows], [True, False, False])

    def test_duplicate_rows_are_skipped(self) -> None:
        text = "name,day,start,end\nAlgo,Mon,09:00,10:00\nalgo,mon,09:00,10:00\nAlgo,Tue,09:00,10:00\n"
        result = parse_courses_csv(text, id_factory=_ids())
        self.assertEqual(len(result.courses), 2)

    def test_blank_lines_and_empty_input(self) -> None:
        self.assertEqual(parse_courses_csv("").courses, [])
        result = parse_courses_csv("name,day,start,end\n\n,,,\nAlgo,Fri,08:00,09:00\n", id_factory=_ids())
        self.assertEqual([c.name for c in result.courses], ["Algo"])

    def test_header_aliases(self) -> None:
        self.assertEqual(normalize_header(" StartTime "), "startTime")
        self.assertEqual(normalize_header("Room"), "description")
        self.assertEqual(normalize_header("\ufeffname"), "name")
        self.assertEqual(normalize_header("Teacher"), "Teacher")


class TestCSVFiles(unittest.TestCase):
    def test_write_and_read_back(self) -> None:
        courses = [
            course("a", ["Monday", "Wednesday"], "09:00", "10:30", name="Algorithms"),
            course("b", ["Friday"], "14:00", "15:00", name="Networks"),
        ]
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "courses.csv"
            self.assertEqual(write_courses_csv(courses, p), 2)
            result = read_courses_csv(p, id_factory=_ids())

        self.assertEqual(result.errors, [])
        self.assertEqual([c.name for c in result.courses], ["Algorithms", "Networks"])
        self.assertEqual(result.courses[0].days_of_week, ["Monday", "Wednesday"])

    def test_bom_is_tolerated(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "excel.csv"
            p.write_text("\ufeffname,day,start,end\nAlgo,Mon,09:00,10:00\n", encoding="utf-8")
            result = read_courses_csv(p)
        self.assertEqual(len(result.courses), 1)


if __name__ == "__main__":
    unittest.main()
