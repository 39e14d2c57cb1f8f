"""Service for browsing every moment grouped by day."""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List
from ..db.event_repository import EventRepository
from ..models import DateCount, Event


@dataclass
class DayGroup:
    date: str
    count: int
    moments: List[Event] = field(default_factory=list)


def group_by_date(events: Iterable[Event], date_counts: Iterable[DateCount]) -> List[DayGroup]:
    """
    Bucket ``events`` under the dates reported by ``date_counts``.

    Groups come newest date first (plain string order, like the stats);
    moments inside a group keep the order they were given in. A group's
    count always matches its moments, and days with none left are dropped.
    """
    groups: Dict[str, DayGroup] = {dc.date: DayGroup(dc.date, dc.count) for dc in date_counts}
    for event in events:
        group = groups.get(event.date)
        if group is None:
            # Created between the two reads
            group = groups[event.date] = DayGroup(event.date, 0)
        group.moments.append(event)
    kept = [g for g in groups.values() if g.moments]
    for group in kept:
        group.count = len(group.moments)
    return sorted(kept, key=lambda g: g.date, reverse=True)


class MomentsService:
    """All moments grouped by day, for the overview tab."""

    def __init__(self, repository: EventRepository) -> None:
        self.repository = repository

    async def grouped(self) -> List[DayGroup]:
        date_counts = await self.repository.list_distinct_dates_with_counts()
        events = await self.repository.list_all()
        return group_by_date(events, date_counts)
