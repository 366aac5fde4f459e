import unittest
from datetime import datetime, timedelta, timezone

from dailyquiz.selector.daily import BrowseCursor, EmptyBankError, daily_index, daily_question, day_of_year
from dailyquiz.util.clock import epoch_day

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class DailyIndexTests(unittest.TestCase):
    def test_stable_within_one_utc_day(self) -> None:
        morning = datetime(2026, 10, 19, 0, 0, 1, tzinfo=timezone.utc)
        night = datetime(2026, 10, 19, 23, 59, 59, tzinfo=timezone.utc)
        for n in (1, 3, 7, 50):
            self.assertEqual(daily_index(morning, n), daily_index(night, n))

    def test_consecutive_days_advance_by_one(self) -> None:
        day = datetime(2026, 10, 19, 12, tzinfo=timezone.utc)
        n = 7
        self.assertEqual(daily_index(day + timedelta(days=1), n), (daily_index(day, n) + 1) % n)

    def test_epoch_day_ten_on_bank_of_three(self) -> None:
        now = EPOCH + timedelta(days=10, hours=5)
        self.assertEqual(epoch_day(now), 10)
        self.assertEqual(daily_index(now, 3), 1)
        self.assertEqual(daily_question(now, ["Q0", "Q1", "Q2"]), "Q1")

    def test_rolls_over_at_utc_midnight_not_local(self) -> None:
        tz = timezone(timedelta(hours=-5))
        # 20:00 local on day 10 is already 01:00Z on day 11.
        now = datetime(1970, 1, 11, 20, tzinfo=tz)
        self.assertEqual(epoch_day(now), 11)
        self.assertEqual(daily_index(now, 3), 2)

    def test_empty_bank_raises(self) -> None:
        with self.assertRaises(EmptyBankError):
            daily_index(datetime(2026, 1, 1, tzinfo=timezone.utc), 0)


class DayOfYearTests(unittest.TestCase):
    def test_first_and_last_day(self) -> None:
        self.assertEqual(day_of_year(datetime(2026, 1, 1, 9)), 1)
        self.assertEqual(day_of_year(datetime(2026, 12, 31, 23, 59)), 365)
        self.assertEqual(day_of_year(datetime(2028, 12, 31, 12)), 366)

    def test_uses_local_calendar(self) -> None:
        tz = timezone(timedelta(hours=9))
        self.assertEqual(day_of_year(datetime(2026, 2, 1, 0, 30, tzinfo=tz)), 32)


class BrowseCursorTests(unittest.TestCase):
    def test_clamps_out_of_range(self) -> None:
        self.assertEqual(BrowseCursor(-4, 5).index, 0)
        self.assertEqual(BrowseCursor(99, 5).index, 4)

    def test_never_wraps(self) -> None:
        c = BrowseCursor(4, 5)
        self.assertTrue(c.at_end)
        self.assertEqual(c.next().index, 4)
        c = BrowseCursor(0, 5)
        self.assertTrue(c.at_start)
        self.assertEqual(c.prev().index, 0)

    def test_jump(self) -> None:
        self.assertEqual(BrowseCursor(0, 5).jump_to(3).index, 3)
        self.assertEqual(BrowseCursor(0, 5).jump_to(7).index, 4)


if __name__ == "__main__":
    unittest.main()
