"""Service for statistics aggregations."""
import datetime
from typing import List, Optional, Sequence
from ..db.event_repository import EventRepository
from ..models import DateCount, Event, StatsSnapshot

ONE_DAY = datetime.timedelta(days=1)


def _parse_dates(dates: Sequence[str]) -> List[datetime.date]:
    """Sorted calendar dates, skipping strings that are not YYYY-MM-DD."""
    parsed = set()
    for value in dates:
        try:
            parsed.add(datetime.date.fromisoformat(value))
        except (TypeError, ValueError):
            continue
    return sorted(parsed)


def longest_streak(days: Sequence[datetime.date]) -> int:
    """Longest run of consecutive days in a sorted, distinct sequence."""
    longest = 0
    run = 0
    previous: Optional[datetime.date] = None
    for day in days:
        run = run + 1 if previous is not None and day - previous == ONE_DAY else 1
        longest = max(longest, run)
        previous = day
    return longest


def current_streak(days: Sequence[datetime.date], today: datetime.date) -> int:
    """
    Length of the run ending at the most recent day, provided that day is
    today or yesterday; 0 otherwise.
    """
    if not days or days[-1] not in (today, today - ONE_DAY):
        return 0
    streak = 1
    for i in range(len(days) - 1, 0, -1):
        if days[i] - days[i - 1] != ONE_DAY:
            break
        streak += 1
    return streak


def compute_stats(events: Sequence[Event], date_counts: Sequence[DateCount],
                  today: datetime.date) -> StatsSnapshot:
    """
    Derive a snapshot from the full event list and its per-date counts.

    Every period boundary is taken from the same ``today``. Week starts
    on Monday. Dates are compared as ``YYYY-MM-DD`` strings.
    """
    if not events:
        return StatsSnapshot()

    all_dates = [e.date for e in events]
    days = _parse_dates([dc.date for dc in date_counts])

    week_start = (today - datetime.timedelta(days=today.weekday())).isoformat()
    month_start = today.replace(day=1).isoformat()
    year_start = today.replace(month=1, day=1).isoformat()

    current = current_streak(days, today)
    return StatsSnapshot(
        total=len(events),
        days_with_events=len(date_counts),
        oldest_date=min(all_dates),
        newest_date=max(all_dates),
        current_streak=current,
        longest_streak=max(longest_streak(days), current),
        this_week=sum(1 for d in all_dates if d >= week_start),
        this_month=sum(1 for d in all_dates if d >= month_start),
        this_year=sum(1 for d in all_dates if d >= year_start),
    )


class StatsService:
    """Computes statistics over the moments in the store."""

    def __init__(self, repository: EventRepository) -> None:
        self.repository = repository

    async def compute_stats(self, today: Optional[datetime.date] = None) -> StatsSnapshot:
        """
        Snapshot of the current store contents.

        Args:
            today: Reference day, fixed once for the whole computation
                   (defaults to the local date)
        """
        if today is None:
            today = datetime.date.today()
        events = await self.repository.list_all()
        date_counts = await self.repository.list_distinct_dates_with_counts()
        return compute_stats(events, date_counts, today)
