import unittest

from weekgrid.validation import (
    CourseValidationError,
    is_valid_time,
    make_course,
    normalize_day,
    normalize_time,
    validate_course_fields,
    validate_time_range,
)


class TestNormalize(unittest.TestCase):
    def test_normalize_time(self) -> None:
        self.assertEqual(normalize_time("930"), "09:30")
        self.assertEqual(normalize_time("1415"), "14:15")
        self.assertEqual(normalize_time("9:30"), "09:30")
        self.assertEqual(normalize_time(" 10:00 "), "10:00")
        self.assertEqual(normalize_time("10：00"), "10:00")
        self.assertEqual(normalize_time("noon"), "noon")

    def test_is_valid_time(self) -> None:
        self.assertTrue(is_valid_time("00:00"))
        self.assertTrue(is_valid_time("23:59"))
        self.assertFalse(is_valid_time("24:00"))
        self.assertFalse(is_valid_time("12:60"))
        self.assertFalse(is_valid_time("1200"))

    def test_validate_time_range(self) -> None:
        self.assertTrue(validate_time_range("09:00", "09:01"))
        self.assertFalse(validate_time_range("09:00", "09:00"))
        self.assertFalse(validate_time_range("10:00", "09:00"))

    def test_normalize_day(self) -> None:
        self.assertEqual(normalize_day("thu"), "Thursday")
        self.assertEqual(normalize_day(" MONDAY "), "Monday")
        self.assertEqual(normalize_day("Su"), "Sunday")
        self.assertEqual(normalize_day("w"), "Wednesday")
        self.assertIsNone(normalize_day("someday"))


class TestValidateCourse(unittest.TestCase):
    def test_valid_fields(self) -> None:
        errors, days, start, end = validate_course_fields("Algo", ["Wed", "mon", "Monday"], "900", "10:30")
        self.assertEqual(errors, [])
        self.assertEqual(days, ["Monday", "Wednesday"])
        self.assertEqual((start, end), ("09:00", "10:30"))

    def test_required_fields(self) -> None:
        errors, _, _, _ = validate_course_fields("", [], "", "")
        self.assertEqual(
            errors,
            [
                "Course name is required",
                "Day of week is required",
                "Start time is required",
                "End time is required",
            ],
        )

    def test_invalid_values(self) -> None:
        errors, days, _, _ = validate_course_fields("Algo", ["Mon", "Funday"], "25:00", "10:00")
        self.assertIn('Invalid day of week "Funday"', errors)
        self.assertIn('Invalid start time format "25:00"', errors)
        self.assertEqual(days, ["Monday"])

    def test_end_before_start(self) -> None:
        errors, _, _, _ = validate_course_fields("Algo", ["Mon"], "11:00", "10:00")
        self.assertEqual(errors, ["End time must be after start time"])

    def test_make_course(self) -> None:
        c = make_course("  Algo ", ["Tue"], "08:00", "09:00", section=" A1 ", course_id="x1")
        self.assertEqual(c.id, "x1")
        self.assertEqual(c.name, "Algo")
        self.assertEqual(c.section, "A1")
        self.assertEqual(c.days_of_week, ["Tuesday"])
        self.assertIsNone(c.description)
        self.assertTrue(c.color)

    def test_make_course_generates_id(self) -> None:
        a = make_course("Algo", ["Tue"], "08:00", "09:00")
        b = make_course("Algo", ["Tue"], "08:00", "09:00")
        self.assertTrue(a.id)
        self.assertNotEqual(a.id, b.id)

    def test_make_course_raises_with_all_errors(self) -> None:
        with self.assertRaises(CourseValidationError) as ctx:
            make_course("", ["Tue"], "10:00", "09:00")
        self.assertEqual(ctx.exception.errors, ["Course name is required", "End time must be after start time"])
        self.assertIsInstance(ctx.exception, ValueError)


if __name__ == "__main__":
    unittest.main()
