"""
Unit tests for JSON course files.

Storage contract:
- Missing/invalid file -> empty list
- invalid entries are skipped, valid ones kept
- JSON schema: {"courses": [ {...camelCase...} ]}
"""

import json
import tempfile
import unittest
from pathlib import Path

from tests.helpers import course
from weekgrid.storage import load_courses, load_courses_any, save_courses


class TestStorage(unittest.TestCase):
    def test_load_missing_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            self.assertEqual(load_courses(Path(d) / "missing.json"), [])
            self.assertEqual(load_courses_any(Path(d) / "missing.csv"), [])

    def test_load_corrupt_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "courses.json"
            p.write_text("[{", encoding="utf-8")
            self.assertEqual(load_courses(p), [])

    def test_save_and_load_roundtrip(self) -> None:
        courses = [course("a", ["Monday", "Wednesday"], "09:00", "10:30", name="Algorithms")]
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "sub" / "courses.json"
            save_courses(courses, p)

            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertEqual(data["courses"][0]["daysOfWeek"], ["Monday", "Wednesday"])
            self.assertEqual(data["courses"][0]["startTime"], "09:00")

            loaded = load_courses(p)
        self.assertEqual(len(loaded), 1)
        self.assertEqual(loaded[0].id, "a")
        self.assertEqual(loaded[0].name, "Algorithms")

    def test_invalid_entries_are_skipped(self) -> None:
        payload = {
            "courses": [
                {"id": "ok", "name": "Fine", "daysOfWeek": ["mon"], "startTime": "9:00", "endTime": "10:00"},
                {"id": "bad", "name": "Broken", "daysOfWeek": ["Monday"], "startTime": "11:00", "endTime": "10:00"},
                {"id": "ok", "name": "Dup", "daysOfWeek": ["Tuesday"], "startTime": "09:00", "endTime": "10:00"},
                "not an object",
            ]
        }
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "courses.json"
            p.write_text(json.dumps(payload), encoding="utf-8")
            with self.assertLogs("weekgrid.storage", level="WARNING"):
                loaded = load_courses(p)

        self.assertEqual([c.name for c in loaded], ["Fine"])
        self.assertEqual(loaded[0].days_of_week, ["Monday"])
        self.assertEqual(loaded[0].start_time, "09:00")

    def test_load_any_reads_csv(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "courses.csv"
            p.write_text("name,day,start,end\nAlgo,Mon,09:00,10:00\nBad,Mon,x,10:00\n", encoding="utf-8")
            loaded = load_courses_any(p)
        self.assertEqual([c.name for c in loaded], ["Algo"])


if __name__ == "__main__":
    unittest.main()
