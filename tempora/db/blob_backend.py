"""Fallback backend: an event list persisted as one serialized blob."""
import dataclasses
import json
import logging
import threading
from collections import Counter
from typing import List
from ..models import DateCount, Event
from .base import StoreBackend, newest_first, utc_timestamp
from .kv_store import KeyValueStore

logger = logging.getLogger(__name__)


def _parse_entry(item: dict) -> Event:
    """Build an Event from one blob entry, rejecting wrongly typed fields."""
    event_id = item["id"]
    if isinstance(event_id, bool) or not isinstance(event_id, int):
        raise ValueError(f"event id {event_id!r} is not an integer")
    for field in ("title", "date"):
        if not isinstance(item[field], str):
            raise ValueError(f"event {event_id} has a non-text {field}")
    for field in ("description", "source", "createdAt"):
        if item.get(field) is not None and not isinstance(item[field], str):
            raise ValueError(f"event {event_id} has a non-text {field}")
    return Event.from_dict(item)


class BlobBackend(StoreBackend):
    """
    Keeps events in memory, newest inserted first, and rewrites the whole
    list to the key-value store after every mutation.

    A lock covers each load -> mutate -> persist sequence so only one
    mutation is in flight per process.
    """

    def __init__(self, kv_store: KeyValueStore, key: str) -> None:
        self.kv_store = kv_store
        self.key = key
        self._lock = threading.Lock()
        self._events: List[Event] = []
        self._next_id = 1
        self._loaded = False

    @property
    def name(self) -> str:
        return "blob"

    def initialize(self) -> None:
        with self._lock:
            self._ensure_loaded()

    def _ensure_loaded(self) -> None:
        """Load the blob once. Caller holds the lock."""
        if self._loaded:
            return
        self._events = self._load()
        self._next_id = max((e.id for e in self._events), default=0) + 1
        self._loaded = True
        logger.debug("Blob store loaded %d event(s) from key %s", len(self._events), self.key)

    def _load(self) -> List[Event]:
        """Read the blob; anything unreadable resets the store to empty."""
        try:
            raw = self.kv_store.get_item(self.key)
            if raw is None:
                return []
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError("event blob is not a list")
            events = [_parse_entry(item) for item in items]
            if len({e.id for e in events}) != len(events):
                raise ValueError("duplicate event id in blob")
            return events
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Discarding unreadable event blob %s: %s", self.key, e)
            return []

    def _persist(self, events: List[Event]) -> None:
        """Write ``events`` out, then adopt them as the current state."""
        self.kv_store.set_item(self.key, json.dumps([e.to_dict() for e in events], ensure_ascii=False))
        self._events = events

    def create(self, title: str, description: str, date: str, source: str) -> int:
        with self._lock:
            self._ensure_loaded()
            event_id = self._next_id
            event = Event(id=event_id, title=title, description=description,
                          date=date, source=source, created_at=utc_timestamp())
            self._persist([event] + self._events)
            self._next_id += 1
        logger.debug("Inserted event %s on %s", event_id, date)
        return event_id

    def delete_by_id(self, event_id: int) -> None:
        with self._lock:
            self._ensure_loaded()
            remaining = [e for e in self._events if e.id != event_id]
            if len(remaining) == len(self._events):
                return
            self._persist(remaining)
        logger.debug("Deleted event %s", event_id)

    def _snapshot(self) -> List[Event]:
        with self._lock:
            self._ensure_loaded()
            return [dataclasses.replace(e) for e in self._events]

    def select_by_date(self, date: str) -> List[Event]:
        return newest_first(e for e in self._snapshot() if e.date == date)

    def select_all(self) -> List[Event]:
        return newest_first(self._snapshot())

    def select_distinct_dates_with_counts(self) -> List[DateCount]:
        counts = Counter(e.date for e in self._snapshot())
        return [DateCount(date, count) for date, count in counts.items()]
