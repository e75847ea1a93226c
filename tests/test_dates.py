import unittest
from datetime import date

from nbrb_convert.utils.dates import parse_date, to_ondate


class DateHelperTests(unittest.TestCase):
    def test_parse_date_formats(self) -> None:
        self.assertEqual(parse_date("2024-12-01"), date(2024, 12, 1))
        self.assertEqual(parse_date(" 01.12.2024 "), date(2024, 12, 1))
        self.assertEqual(parse_date(date(2024, 1, 2)), date(2024, 1, 2))

    def test_parse_date_invalid(self) -> None:
        with self.assertRaises(ValueError):
            parse_date("2024-13-01")
        with self.assertRaises(ValueError):
            parse_date("yesterday")

    def test_to_ondate(self) -> None:
        self.assertEqual(to_ondate("05.12.2024"), "2024-12-05")
        self.assertEqual(to_ondate("2024-12-05"), "2024-12-05")
        self.assertEqual(to_ondate("not-a-date"), "not-a-date")


if __name__ == "__main__":
    unittest.main()
