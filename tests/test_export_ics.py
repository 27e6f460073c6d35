import tempfile
import unittest
from datetime import date
from pathlib import Path

from tests.helpers import course
from weekgrid.export_ics import export_courses_to_ics


class TestExportICS(unittest.TestCase):
    def test_export_creates_file_and_contains_calendar(self) -> None:
        courses = [course("algo1", ["Wednesday", "Monday"], "09:00", "10:30", name="Algorithms")]

        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            # 2026-02-19 is a Thursday, the week starts Monday 2026-02-16
            n = export_courses_to_ics(courses, out, week_of=date(2026, 2, 19))
            self.assertEqual(n, 1)
            text = out.read_text(encoding="utf-8")

        self.assertIn("BEGIN:VCALENDAR", text)
        self.assertIn("BEGIN:VEVENT", text)
        self.assertIn("SUMMARY:Algorithms", text)
        self.assertIn("DTSTART:20260216T090000", text)
        self.assertIn("DTEND:20260216T103000", text)
        self.assertIn("RRULE:FREQ=WEEKLY;BYDAY=MO,WE", text)
        self.assertIn("UID:algo1@weekgrid", text)

    def test_weeks_limit_and_escaping(self) -> None:
        c = course("x", ["Friday"], "14:00", "15:00", name="Seminar; Part 1, intro")
        c.section = "B"
        c.description = "Room 3\nbring laptop"

        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            export_courses_to_ics([c], out, week_of=date(2026, 2, 16), weeks=12)
            text = out.read_text(encoding="utf-8")

        self.assertIn("DTSTART:20260220T140000", text)
        self.assertIn("RRULE:FREQ=WEEKLY;BYDAY=FR;COUNT=12", text)
        self.assertIn("SUMMARY:Seminar\\; Part 1\\, intro (B)", text)
        self.assertIn("DESCRIPTION:Room 3\\nbring laptop", text)

    def test_weeks_must_be_positive(self) -> None:
        c = course("x", ["Friday"], "14:00", "15:00")
        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            with self.assertRaises(ValueError):
                export_courses_to_ics([c], out, weeks=0)
            self.assertFalse(out.exists())


if __name__ == "__main__":
    unittest.main()
