import unittest

from tests.helpers import course
from weekgrid.conflicts import detect_conflicts
from weekgrid.days import get_visible_days, group_courses_by_day


class TestGroupByDay(unittest.TestCase):
    def test_multi_day_course_is_shared_between_buckets(self) -> None:
        placed = detect_conflicts(
            [
                course("MW", ["Monday", "Wednesday"], "09:00", "10:00"),
                course("T", ["Tuesday"], "09:00", "10:00"),
            ],
            7,
            30,
        )
        by_day = group_courses_by_day(placed)
        self.assertEqual(set(by_day), {"Monday", "Tuesday", "Wednesday"})
        self.assertIs(by_day["Monday"][0], by_day["Wednesday"][0])

    def test_bucket_keeps_input_order(self) -> None:
        placed = detect_conflicts(
            [
                course("late", ["Monday"], "15:00", "16:00"),
                course("early", ["Monday"], "08:00", "09:00"),
            ],
            7,
            30,
        )
        by_day = group_courses_by_day(placed)
        self.assertEqual([c.id for c in by_day["Monday"]], ["late", "early"])

    def test_empty(self) -> None:
        self.assertEqual(group_courses_by_day([]), {})


class TestVisibleDays(unittest.TestCase):
    def test_weekdays_only(self) -> None:
        self.assertEqual(
            get_visible_days(show_weekends=False, start_with_sunday=False),
            ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
        )

    def test_all_days(self) -> None:
        days = get_visible_days(show_weekends=True, start_with_sunday=False)
        self.assertEqual(days[0], "Monday")
        self.assertEqual(days[-1], "Sunday")
        self.assertEqual(len(days), 7)

    def test_sunday_first(self) -> None:
        self.assertEqual(
            get_visible_days(show_weekends=True, start_with_sunday=True),
            ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"],
        )

    def test_sunday_first_without_weekends_has_no_effect(self) -> None:
        self.assertEqual(
            get_visible_days(show_weekends=False, start_with_sunday=True),
            get_visible_days(show_weekends=False, start_with_sunday=False),
        )


if __name__ == "__main__":
    unittest.main()
