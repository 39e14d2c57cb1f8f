"""Runs store coroutines off the Qt thread and hands results back to it."""
import asyncio
import logging
import threading
from concurrent.futures import Future
from typing import Any, Callable, Coroutine, Optional, TypeVar
from PyQt5.QtCore import QObject, pyqtSignal

logger = logging.getLogger(__name__)

T = TypeVar("T")
ResultCallback = Callable[[Any], None]
ErrorCallback = Callable[[BaseException], None]


class AsyncBridge(QObject):
    """
    Owns an asyncio loop on a daemon thread.

    Results of submitted coroutines are delivered through a queued signal,
    so callbacks always run on the thread that created the bridge.
    """
    _completed = pyqtSignal(object, object, object)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run_loop, name="tempora-store", daemon=True)
        self._completed.connect(self._dispatch)  # pyright: ignore[reportGeneralTypeIssues]

    def start(self) -> None:
        self._thread.start()

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    def run_blocking(self, coro: Coroutine[Any, Any, T]) -> T:
        """Run ``coro`` on the loop and wait for it. Startup use only."""
        return asyncio.run_coroutine_threadsafe(coro, self._loop).result()

    def submit(self, coro: Coroutine[Any, Any, Any],
               on_result: Optional[ResultCallback] = None,
               on_error: Optional[ErrorCallback] = None) -> None:
        """Schedule ``coro``; report its outcome on the Qt thread."""
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)

        def done(f: "Future[Any]") -> None:
            try:
                result = f.result()
            except Exception as e:
                self._completed.emit(on_error, None, e)
            else:
                self._completed.emit(on_result, result, None)

        future.add_done_callback(done)

    def _dispatch(self, callback: Optional[Callable[[Any], None]], result: Any,
                  error: Optional[BaseException]) -> None:
        if error is not None:
            if callback is None:
                logger.error("Store operation failed: %s", error)
            else:
                callback(error)
        elif callback is not None:
            callback(result)

    def stop(self) -> None:
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=2)
