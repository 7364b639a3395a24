# -*- coding: utf-8 -*-

from __future__ import annotations

import unittest
from datetime import date, datetime, timezone

from fitaura.days import day_key, month_days, normalize_day, parse_day, shift_day
from fitaura.errors import InvalidInput


class TestDayKey(unittest.TestCase):
    def test_same_calendar_day_regardless_of_time(self) -> None:
        morning = datetime(2024, 5, 1, 0, 0, 1)
        night = datetime(2024, 5, 1, 23, 59, 59)
        self.assertEqual(day_key(morning, "UTC"), "2024-05-01")
        self.assertEqual(day_key(night, "UTC"), "2024-05-01")

    def test_aware_timestamp_converted_into_zone(self) -> None:
        # 03:30 UTC is still the previous evening in New York.
        ts = datetime(2024, 5, 2, 3, 30, tzinfo=timezone.utc)
        self.assertEqual(day_key(ts, "UTC"), "2024-05-02")
        self.assertEqual(day_key(ts, "America/New_York"), "2024-05-01")

    def test_naive_timestamp_read_as_wall_clock(self) -> None:
        ts = datetime(2024, 5, 1, 23, 30)
        self.assertEqual(day_key(ts, "Asia/Tokyo"), "2024-05-01")

    def test_iso_string_with_z_suffix(self) -> None:
        self.assertEqual(day_key("2024-05-01T23:00:00Z", "Europe/Berlin"), "2024-05-02")

    def test_bad_timestamp_raises_invalid_input(self) -> None:
        with self.assertRaises(InvalidInput):
            day_key("yesterday-ish", "UTC")


class TestDayHelpers(unittest.TestCase):
    def test_parse_day_is_strict(self) -> None:
        self.assertEqual(parse_day("2024-02-29"), date(2024, 2, 29))
        self.assertIsNone(parse_day("2023-02-29"))
        self.assertIsNone(parse_day("20240501"))
        self.assertIsNone(parse_day("not a day"))
        self.assertIsNone(parse_day(None))
        self.assertIsNone(parse_day(20240501))

    def test_normalize_day(self) -> None:
        self.assertEqual(normalize_day(date(2024, 1, 9)), "2024-01-09")
        self.assertEqual(normalize_day(" 2024-01-09 "), "2024-01-09")
        with self.assertRaises(InvalidInput):
            normalize_day("2024-13-01")

    def test_shift_day_crosses_month_and_year(self) -> None:
        self.assertEqual(shift_day("2024-03-01", -1), "2024-02-29")
        self.assertEqual(shift_day("2024-01-01", -1), "2023-12-31")

    def test_month_days(self) -> None:
        self.assertEqual(len(month_days(2024, 2)), 29)
        self.assertEqual(len(month_days(2023, 2)), 28)
        self.assertEqual(len(month_days(2024, 4)), 30)
        with self.assertRaises(InvalidInput):
            month_days(2024, 13)


if __name__ == "__main__":
    unittest.main()
