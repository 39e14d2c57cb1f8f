"""Unit tests for MomentsService and group_by_date."""
import os
import shutil
import tempfile
import unittest
from tempora.db import BlobBackend, EventRepository, KeyValueStore
from tempora.models import DateCount, Event
from tempora.services.moments_service import MomentsService, group_by_date


class TestGroupByDate(unittest.TestCase):
    """Test bucketing moments under their days."""

    def test_newest_date_first_and_order_kept(self) -> None:
        events = [
            Event(id=3, title="c", date="2024-01-01"),
            Event(id=2, title="b", date="2024-03-05"),
            Event(id=1, title="a", date="2024-01-01"),
        ]
        counts = [DateCount("2024-01-01", 2), DateCount("2024-03-05", 1)]

        groups = group_by_date(events, counts)

        self.assertEqual([(g.date, g.count) for g in groups], [("2024-03-05", 1), ("2024-01-01", 2)])
        self.assertEqual([e.id for e in groups[1].moments], [3, 1])

    def test_count_follows_listed_moments(self) -> None:
        events = [Event(id=1, title="a", date="2024-01-01"), Event(id=2, title="b", date="2024-02-02")]
        counts = [DateCount("2024-01-01", 2), DateCount("2024-09-09", 1)]

        groups = group_by_date(events, counts)

        self.assertEqual([(g.date, g.count) for g in groups], [("2024-02-02", 1), ("2024-01-01", 1)])

    def test_empty(self) -> None:
        self.assertEqual(group_by_date([], []), [])


class TestMomentsService(unittest.IsolatedAsyncioTestCase):
    """Test the grouped overview against a real store."""

    async def asyncSetUp(self) -> None:
        self.tmpdir = tempfile.mkdtemp()
        backend = BlobBackend(KeyValueStore(os.path.join(self.tmpdir, "store.json")), "tempora_events_v1")
        self.repo = EventRepository(backend)
        self.service = MomentsService(self.repo)

    async def asyncTearDown(self) -> None:
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    async def test_grouped(self) -> None:
        await self.repo.create("Beach day", "", "2024-07-20")
        await self.repo.create("Concert", "", "2024-08-01")
        await self.repo.create("Dinner", "", "2024-07-20")

        groups = await self.service.grouped()

        self.assertEqual([(g.date, g.count) for g in groups], [("2024-08-01", 1), ("2024-07-20", 2)])
        self.assertEqual(
            sum(g.count for g in groups),
            sum(dc.count for dc in await self.repo.list_distinct_dates_with_counts()),
        )
        self.assertEqual({e.title for e in groups[1].moments}, {"Beach day", "Dinner"})

    async def test_empty_store(self) -> None:
        self.assertEqual(await self.service.grouped(), [])


if __name__ == "__main__":
    unittest.main()
