"""Repository for event data access."""
import asyncio
import logging
from typing import Any, Callable, List, Optional, TypeVar
from ..models import SOURCE_USER, DateCount, Event
from .base import StoreBackend

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EventRepository:
    """
    Async CRUD surface over the active storage backend.

    Backend calls run in a worker thread so the caller's event loop is
    never blocked. Calls are not interleaved by the repository: each one
    completes before the awaiting caller continues.
    """

    def __init__(self, backend: StoreBackend) -> None:
        self.backend = backend
        self._init_lock = asyncio.Lock()
        self._initialized = False

    async def _run(self, func: Callable[..., T], *args: Any) -> T:
        return await asyncio.to_thread(func, *args)

    async def initialize(self) -> None:
        """Prepare the backend. Repeated calls are no-ops."""
        async with self._init_lock:
            if self._initialized:
                return
            await self._run(self.backend.initialize)
            self._initialized = True
            logger.info("Event store initialized (%s backend)", self.backend.name)

    async def create(self, title: str, description: Optional[str], date: str,
                     source: str = SOURCE_USER) -> int:
        """
        Store a new moment and return its id.

        Raises:
            ValueError: if ``title`` is blank. The title is stored as given.
        """
        if not title or not title.strip():
            raise ValueError("Event title must not be empty")
        await self.initialize()
        return await self._run(self.backend.create, title, description or "", date, source)

    async def delete_by_id(self, event_id: int) -> None:
        """Delete a moment. Unknown ids are ignored."""
        await self.initialize()
        await self._run(self.backend.delete_by_id, event_id)

    async def list_by_date(self, date: str) -> List[Event]:
        """Moments on ``date``, newest first."""
        await self.initialize()
        return await self._run(self.backend.select_by_date, date)

    async def list_all(self) -> List[Event]:
        """All moments, newest first."""
        await self.initialize()
        return await self._run(self.backend.select_all)

    async def list_distinct_dates_with_counts(self) -> List[DateCount]:
        """(date, count) per date with at least one moment, unordered."""
        await self.initialize()
        return await self._run(self.backend.select_distinct_dates_with_counts)
