"""Database connection management."""
import sqlite3
import os
from contextlib import contextmanager
from typing import Iterator


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a database connection."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: str) -> Iterator[sqlite3.Cursor]:
    """Context manager for database operations."""
    conn = get_connection(db_path)
    try:
        cursor = conn.cursor()
        yield cursor
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def ensure_db_exists(db_path: str) -> None:
    """Ensure database directory, WAL journal mode, table and index exist."""
    directory = os.path.dirname(db_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with get_cursor(db_path) as cur:
        # Persistent for the file once set
        cur.execute("PRAGMA journal_mode=WAL")
        cur.execute("""
            CREATE TABLE IF NOT EXISTS events (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                title TEXT NOT NULL,
                description TEXT,
                date TEXT NOT NULL,
                source TEXT NOT NULL DEFAULT 'user',
                createdAt TEXT NOT NULL DEFAULT (datetime('now'))
            )
        """)
        # Create index for date-based queries
        cur.execute("""
            CREATE INDEX IF NOT EXISTS idx_events_date
            ON events(date)
        """)
