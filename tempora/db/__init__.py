"""Database layer and backend selection."""
import importlib.util
import logging
import os
from ..config import BACKEND, DB_PATH, STORE_PATH, WEB_EVENTS_KEY
from .base import StoreBackend
from .blob_backend import BlobBackend
from .event_repository import EventRepository
from .kv_store import KeyValueStore
from .sqlite_backend import SQLiteBackend

logger = logging.getLogger(__name__)


def sqlite_available(db_path: str) -> bool:
    """True if the sqlite3 module can be imported and the DB directory created."""
    if importlib.util.find_spec("sqlite3") is None:
        return False
    directory = os.path.dirname(db_path)
    if not directory:
        return True
    try:
        os.makedirs(directory, exist_ok=True)
    except OSError:
        return False
    return os.access(directory, os.W_OK)


def select_backend(kind: str = BACKEND, db_path: str = DB_PATH,
                   store_path: str = STORE_PATH) -> StoreBackend:
    """
    Build the storage backend for this process.

    ``kind`` is "sqlite", "blob" or "auto". Auto picks SQLite when the
    platform supports it and falls back to the blob store otherwise.
    Meant to be called once, from the composition root.
    """
    if kind not in ("auto", "sqlite", "blob"):
        raise ValueError(f"Unknown storage backend: {kind!r}")

    backend: StoreBackend
    if kind == "sqlite" or (kind == "auto" and sqlite_available(db_path)):
        backend = SQLiteBackend(db_path)
    else:
        backend = BlobBackend(KeyValueStore(store_path), WEB_EVENTS_KEY)

    logger.info("Selected storage backend: %s", backend.name)
    return backend


__all__ = [
    'StoreBackend', 'SQLiteBackend', 'BlobBackend', 'KeyValueStore',
    'EventRepository', 'select_backend', 'sqlite_available',
]
