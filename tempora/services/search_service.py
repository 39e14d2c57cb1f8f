"""Service for searching moments and the almanac."""
from dataclasses import dataclass, field
from typing import List, Tuple
from .. import almanac
from ..db.event_repository import EventRepository
from ..models import Event, HistoricalEvent


@dataclass
class SearchResults:
    moments: List[Event] = field(default_factory=list)
    history: List[Tuple[str, HistoricalEvent]] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.moments and not self.history


class SearchService:
    """Case-insensitive substring search over titles and descriptions."""

    def __init__(self, repository: EventRepository) -> None:
        self.repository = repository

    async def search(self, query: str) -> SearchResults:
        """
        Search the user's moments and the historical table.

        A blank query matches nothing. Moments keep the store's
        newest-first order; almanac hits keep table order.
        """
        needle = query.strip().lower()
        if not needle:
            return SearchResults()

        moments = [
            e for e in await self.repository.list_all()
            if needle in e.title.lower() or needle in (e.description or "").lower()
        ]
        return SearchResults(moments=moments, history=almanac.search(needle))
