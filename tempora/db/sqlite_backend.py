"""Durable backend on a single SQLite file."""
import logging
import sqlite3
from typing import List
from ..errors import StoreUnavailableError
from ..models import DateCount, Event
from .base import StoreBackend
from .connection import ensure_db_exists, get_cursor

logger = logging.getLogger(__name__)

_COLUMNS = "id, title, description, date, source, createdAt"


class SQLiteBackend(StoreBackend):
    """Events table in SQLite, one connection per operation."""

    def __init__(self, db_path: str) -> None:
        self.db_path = db_path

    @property
    def name(self) -> str:
        return "sqlite"

    def initialize(self) -> None:
        try:
            ensure_db_exists(self.db_path)
        except (sqlite3.Error, OSError) as e:
            raise StoreUnavailableError(f"Cannot open event database at {self.db_path}: {e}") from e
        logger.debug("SQLite store ready at %s", self.db_path)

    def create(self, title: str, description: str, date: str, source: str) -> int:
        with get_cursor(self.db_path) as cur:
            cur.execute(
                "INSERT INTO events (title, description, date, source) VALUES (?, ?, ?, ?)",
                (title, description, date, source)
            )
            event_id = cur.lastrowid
        logger.debug("Inserted event %s on %s", event_id, date)
        return int(event_id)

    def delete_by_id(self, event_id: int) -> None:
        with get_cursor(self.db_path) as cur:
            cur.execute("DELETE FROM events WHERE id = ?", (event_id,))
            deleted = cur.rowcount
        logger.debug("Deleted event %s (%d row(s))", event_id, deleted)

    def select_by_date(self, date: str) -> List[Event]:
        with get_cursor(self.db_path) as cur:
            cur.execute(f"""
                SELECT {_COLUMNS}
                FROM events
                WHERE date = ?
                ORDER BY createdAt DESC, id DESC
            """, (date,))
            return [Event.from_dict(dict(r)) for r in cur.fetchall()]

    def select_all(self) -> List[Event]:
        with get_cursor(self.db_path) as cur:
            cur.execute(f"""
                SELECT {_COLUMNS}
                FROM events
                ORDER BY createdAt DESC, id DESC
            """)
            return [Event.from_dict(dict(r)) for r in cur.fetchall()]

    def select_distinct_dates_with_counts(self) -> List[DateCount]:
        with get_cursor(self.db_path) as cur:
            cur.execute("SELECT date, COUNT(*) AS count FROM events GROUP BY date")
            return [DateCount(r["date"], r["count"]) for r in cur.fetchall()]
