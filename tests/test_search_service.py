"""Unit tests for SearchService."""
import os
import shutil
import tempfile
import unittest
from tempora.db import BlobBackend, EventRepository, KeyValueStore
from tempora.services.search_service import SearchService


class TestSearchService(unittest.IsolatedAsyncioTestCase):
    """Test searching moments and history."""

    async def asyncSetUp(self) -> None:
        self.tmpdir = tempfile.mkdtemp()
        backend = BlobBackend(KeyValueStore(os.path.join(self.tmpdir, "store.json")), "tempora_events_v1")
        self.repo = EventRepository(backend)
        self.service = SearchService(self.repo)

        await self.repo.create("Beach day", "Swimming at the lake", "2024-07-20")
        await self.repo.create("Concert", "", "2024-08-01")

    async def asyncTearDown(self) -> None:
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    async def test_matches_title_case_insensitively(self) -> None:
        results = await self.service.search("BEACH")
        self.assertEqual([e.title for e in results.moments], ["Beach day"])

    async def test_matches_description(self) -> None:
        results = await self.service.search("lake")
        self.assertEqual([e.title for e in results.moments], ["Beach day"])

    async def test_includes_almanac_hits(self) -> None:
        results = await self.service.search("moon")
        self.assertEqual(results.moments, [])
        self.assertEqual([(key, e.year) for key, e in results.history], [("07-20", 1969)])

    async def test_blank_query_is_empty(self) -> None:
        results = await self.service.search("  ")
        self.assertTrue(results.is_empty())

    async def test_no_match(self) -> None:
        results = await self.service.search("zzzz")
        self.assertTrue(results.is_empty())


if __name__ == "__main__":
    unittest.main()
