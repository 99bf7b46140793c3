from __future__ import annotations

import unittest
from datetime import date

from pocketledger.analytics.period import month_window, month_window_for


class MonthWindowTests(unittest.TestCase):
    def test_window_spans_first_to_last_day(self) -> None:
        window = month_window(date(2025, 1, 17))

        self.assertEqual(window.start, date(2025, 1, 1))
        self.assertEqual(window.end, date(2025, 1, 31))

    def test_handles_short_months_and_leap_years(self) -> None:
        self.assertEqual(month_window(date(2024, 2, 10)).end, date(2024, 2, 29))
        self.assertEqual(month_window(date(2025, 2, 10)).end, date(2025, 2, 28))
        self.assertEqual(month_window(date(1900, 2, 1)).end, date(1900, 2, 28))
        self.assertEqual(month_window(date(2000, 2, 1)).end, date(2000, 2, 29))
        self.assertEqual(month_window(date(2025, 4, 30)).end, date(2025, 4, 30))
        self.assertEqual(month_window(date(2025, 12, 31)).end, date(2025, 12, 31))

    def test_membership_is_inclusive(self) -> None:
        window = month_window(date(2025, 6, 15))

        self.assertTrue(window.contains(date(2025, 6, 1)))
        self.assertTrue(window.contains(date(2025, 6, 30)))
        self.assertFalse(window.contains(date(2025, 5, 31)))
        self.assertFalse(window.contains(date(2025, 7, 1)))

    def test_days_lists_every_calendar_day(self) -> None:
        days = month_window_for(2025, 2).days()

        self.assertEqual(len(days), 28)
        self.assertEqual(days[0], date(2025, 2, 1))
        self.assertEqual(days[-1], date(2025, 2, 28))

    def test_rejects_invalid_month_number(self) -> None:
        with self.assertRaises(ValueError):
            month_window_for(2025, 13)
        with self.assertRaises(ValueError):
            month_window_for(2025, 0)


if __name__ == "__main__":
    unittest.main()
