"""Base storage backend abstraction."""
import datetime
from abc import ABC, abstractmethod
from typing import Iterable, List, Tuple
from ..models import DateCount, Event

# Same text format as SQLite's datetime('now')
CREATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


def utc_timestamp() -> str:
    """Current UTC time formatted like SQLite's ``datetime('now')``."""
    return datetime.datetime.now(datetime.timezone.utc).strftime(CREATED_AT_FORMAT)


def recency_key(event: Event) -> Tuple[str, int]:
    return (event.created_at or "", event.id or 0)


def newest_first(events: Iterable[Event]) -> List[Event]:
    """Order by created_at descending, ties by id descending."""
    return sorted(events, key=recency_key, reverse=True)


class StoreBackend(ABC):
    """
    Abstract base for event persistence.

    Implementations must return identical results for identical call
    sequences: same fields, same filtering and the same ordering
    (see :func:`newest_first`).
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name for logging."""
        pass

    @abstractmethod
    def initialize(self) -> None:
        """Prepare storage. Must be idempotent."""
        pass

    @abstractmethod
    def create(self, title: str, description: str, date: str, source: str) -> int:
        """Insert an event and return its new id."""
        pass

    @abstractmethod
    def delete_by_id(self, event_id: int) -> None:
        """Delete an event. Unknown ids are ignored."""
        pass

    @abstractmethod
    def select_by_date(self, date: str) -> List[Event]:
        """Events on ``date``, newest first."""
        pass

    @abstractmethod
    def select_all(self) -> List[Event]:
        """All events, newest first."""
        pass

    @abstractmethod
    def select_distinct_dates_with_counts(self) -> List[DateCount]:
        """One (date, count) row per distinct date, in no particular order."""
        pass
