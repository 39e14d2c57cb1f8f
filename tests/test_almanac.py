"""Unit tests for the static almanac."""
import datetime
import unittest
from tempora import almanac


class TestAlmanacLookup(unittest.TestCase):
    """Test month-day lookups."""

    def test_moon_landing_on_july_20(self) -> None:
        """07-20 includes the 1969 Moon landing whatever the year."""
        events = almanac.lookup("2024-07-20")

        moon = [e for e in events if e.year == 1969]
        self.assertEqual(len(moon), 1)
        self.assertIn("Moon", moon[0].title)

    def test_unknown_day_is_empty(self) -> None:
        """A key without entries returns an empty sequence, not an error."""
        self.assertEqual(len(almanac.lookup("2024-07-21")), 0)

    def test_year_is_ignored(self) -> None:
        """Same month-day in different years gives the same entries."""
        self.assertEqual(almanac.lookup("1999-12-25"), almanac.lookup("2030-12-25"))

    def test_accepts_date_objects(self) -> None:
        """datetime.date is normalized like the ISO string."""
        self.assertEqual(almanac.lookup(datetime.date(2024, 7, 20)), almanac.lookup("2024-07-20"))

    def test_repeated_lookups_are_stable(self) -> None:
        """Same entries in the same order on every call."""
        first = [e.title for e in almanac.lookup("2024-11-02")]
        second = [e.title for e in almanac.lookup("2024-11-02")]
        self.assertEqual(first, second)

    def test_display_order_is_year_descending(self) -> None:
        """lookup_for_display sorts newest year first."""
        years = [e.year for e in almanac.lookup_for_display("2024-12-25")]
        self.assertEqual(years, sorted(years, reverse=True))
        self.assertEqual(years[0], 1991)

    def test_bce_years_are_negative(self) -> None:
        """Caesar's assassination is stored as year -44."""
        years = [e.year for e in almanac.lookup("2024-03-15")]
        self.assertIn(-44, years)


class TestAlmanacSearch(unittest.TestCase):
    """Test free-text search over the table."""

    def test_matches_title_case_insensitively(self) -> None:
        hits = almanac.search("titanic")
        self.assertEqual([key for key, _ in hits], ["04-15"])

    def test_matches_description(self) -> None:
        hits = almanac.search("armstrong")
        self.assertEqual(len(hits), 1)
        self.assertEqual(hits[0][1].year, 1969)

    def test_blank_query_matches_nothing(self) -> None:
        self.assertEqual(almanac.search("   "), [])


if __name__ == "__main__":
    unittest.main()
