"""Unit tests for the statistics engine."""
import datetime
import os
import shutil
import tempfile
import unittest
from typing import List
from tempora.db import EventRepository, SQLiteBackend
from tempora.models import DateCount, Event, StatsSnapshot
from tempora.services.stats_service import StatsService, compute_stats, current_streak, longest_streak


def _events(*dates: str) -> List[Event]:
    return [Event(id=i + 1, title=f"m{i}", date=d) for i, d in enumerate(dates)]


def _counts(events: List[Event]) -> List[DateCount]:
    counts: dict[str, int] = {}
    for e in events:
        counts[e.date] = counts.get(e.date, 0) + 1
    return [DateCount(d, c) for d, c in counts.items()]


def _stats(today: datetime.date, *dates: str) -> StatsSnapshot:
    events = _events(*dates)
    return compute_stats(events, _counts(events), today)


class TestComputeStats(unittest.TestCase):
    """Test snapshot derivation."""

    def test_zero_state(self) -> None:
        stats = compute_stats([], [], datetime.date(2024, 1, 3))
        self.assertEqual(stats.as_dict(), {
            "total": 0, "daysWithEvents": 0, "oldestDate": None, "newestDate": None,
            "currentStreak": 0, "longestStreak": 0, "thisWeek": 0, "thisMonth": 0, "thisYear": 0,
        })

    def test_three_day_streak(self) -> None:
        stats = _stats(datetime.date(2024, 1, 3), "2024-01-01", "2024-01-02", "2024-01-03")
        self.assertEqual(stats.current_streak, 3)
        self.assertEqual(stats.longest_streak, 3)

    def test_streak_break(self) -> None:
        stats = _stats(datetime.date(2024, 1, 3), "2024-01-01", "2024-01-03")
        self.assertEqual(stats.current_streak, 1)
        self.assertEqual(stats.longest_streak, 1)

    def test_streak_ending_yesterday_counts(self) -> None:
        stats = _stats(datetime.date(2024, 1, 4), "2024-01-02", "2024-01-03")
        self.assertEqual(stats.current_streak, 2)

    def test_stale_streak_is_zero(self) -> None:
        """Most recent moment two days ago: no current streak."""
        stats = _stats(datetime.date(2024, 1, 10), "2024-01-01", "2024-01-02", "2024-01-08")
        self.assertEqual(stats.current_streak, 0)
        self.assertEqual(stats.longest_streak, 2)

    def test_longest_streak_in_history(self) -> None:
        stats = _stats(datetime.date(2024, 3, 1),
                       "2024-01-01", "2024-01-02", "2024-01-03", "2024-01-04",
                       "2024-02-10", "2024-02-29", "2024-03-01")
        self.assertEqual(stats.longest_streak, 4)
        self.assertEqual(stats.current_streak, 2)

    def test_multiple_events_same_day_count_once_for_streaks(self) -> None:
        stats = _stats(datetime.date(2024, 1, 2), "2024-01-01", "2024-01-01", "2024-01-02")
        self.assertEqual(stats.total, 3)
        self.assertEqual(stats.days_with_events, 2)
        self.assertEqual(stats.current_streak, 2)

    def test_streak_across_month_boundary(self) -> None:
        stats = _stats(datetime.date(2024, 3, 1), "2024-02-28", "2024-02-29", "2024-03-01")
        self.assertEqual(stats.current_streak, 3)

    def test_oldest_and_newest(self) -> None:
        stats = _stats(datetime.date(2024, 5, 1), "2023-12-31", "2024-04-01", "2021-06-15")
        self.assertEqual(stats.oldest_date, "2021-06-15")
        self.assertEqual(stats.newest_date, "2024-04-01")

    def test_period_counts(self) -> None:
        """Wednesday 2024-05-15: week starts Monday 05-13."""
        stats = _stats(datetime.date(2024, 5, 15),
                       "2024-05-15", "2024-05-13",   # this week
                       "2024-05-12", "2024-05-01",   # this month
                       "2024-01-01",                 # this year
                       "2023-12-31")
        self.assertEqual(stats.this_week, 2)
        self.assertEqual(stats.this_month, 4)
        self.assertEqual(stats.this_year, 5)
        self.assertEqual(stats.total, 6)

    def test_unparseable_dates_do_not_fail(self) -> None:
        stats = _stats(datetime.date(2024, 1, 2), "garbage", "2024-01-02")
        self.assertEqual(stats.total, 2)
        self.assertEqual(stats.days_with_events, 2)
        self.assertEqual(stats.current_streak, 1)

    def test_longest_never_below_current(self) -> None:
        days = [datetime.date(2024, 1, d) for d in (1, 2, 3)]
        self.assertGreaterEqual(longest_streak(days), current_streak(days, datetime.date(2024, 1, 3)))


class TestStatsService(unittest.IsolatedAsyncioTestCase):
    """StatsService reads the repository and fixes today once."""

    async def asyncSetUp(self) -> None:
        self.tmpdir = tempfile.mkdtemp()
        self.repo = EventRepository(SQLiteBackend(os.path.join(self.tmpdir, "tempora.db")))
        self.service = StatsService(self.repo)

    async def asyncTearDown(self) -> None:
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    async def test_empty_store(self) -> None:
        stats = await self.service.compute_stats(datetime.date(2024, 1, 3))
        self.assertEqual(stats, StatsSnapshot())

    async def test_snapshot_from_store(self) -> None:
        for date in ("2024-01-01", "2024-01-02", "2024-01-03", "2024-01-03"):
            await self.repo.create("x", "", date)

        stats = await self.service.compute_stats(datetime.date(2024, 1, 3))

        self.assertEqual(stats.total, 4)
        self.assertEqual(stats.days_with_events, 3)
        self.assertEqual(stats.current_streak, 3)
        self.assertEqual(stats.longest_streak, 3)
        self.assertEqual(stats.this_year, 4)

    async def test_defaults_to_today(self) -> None:
        await self.repo.create("today", "", datetime.date.today().isoformat())
        stats = await self.service.compute_stats()
        self.assertEqual(stats.current_streak, 1)
        self.assertEqual(stats.this_week, 1)


if __name__ == "__main__":
    unittest.main()
