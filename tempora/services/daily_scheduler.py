"""Daily "on this day" notification scheduling."""
import datetime
import logging
import threading
from typing import Callable, Optional, Tuple
from .. import almanac
from .notification_service import NotificationService, TEST_FALLBACK_BODY

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime.datetime]


def next_fire_time(now: datetime.datetime, hour: int, minute: int) -> datetime.datetime:
    """Next local occurrence of hour:minute strictly after ``now``."""
    candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if candidate <= now:
        candidate += datetime.timedelta(days=1)
    return candidate


class DailyNotificationScheduler:
    """
    Fires the almanac notification once a day at a fixed local time.

    Each firing reads today's almanac entries, sends them, and arms the
    timer for the following day. Nothing here touches the event store.
    """

    def __init__(self, notifier: NotificationService,
                 clock: Clock = datetime.datetime.now) -> None:
        self.notifier = notifier
        self.clock = clock
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._time: Optional[Tuple[int, int]] = None

    @property
    def is_scheduled(self) -> bool:
        return self._timer is not None

    def schedule(self, hour: int, minute: int) -> bool:
        """
        Replace any pending notification with a daily one at hour:minute.

        Returns:
            False if the time is out of range, True once armed
        """
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            logger.error("Invalid notification time %r:%r", hour, minute)
            return False
        with self._lock:
            self._cancel_locked()
            self._time = (hour, minute)
            self._arm_locked(hour, minute)
        logger.info("Daily notification scheduled for %d:%02d", hour, minute)
        return True

    def cancel_all(self) -> None:
        """Drop the pending notification, if any."""
        with self._lock:
            self._cancel_locked()
            self._time = None
        logger.info("All notifications cancelled")

    def send_test_notification(self) -> bool:
        """Send today's notification immediately."""
        today = self.clock().date()
        return self.notifier.notify_history(almanac.lookup(today), TEST_FALLBACK_BODY)

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _arm_locked(self, hour: int, minute: int) -> None:
        now = self.clock()
        fire_at = next_fire_time(now, hour, minute)
        delay = (fire_at - now).total_seconds()
        timer = threading.Timer(delay, self._fire)
        timer.daemon = True
        self._timer = timer
        timer.start()
        logger.debug("Next notification at %s (in %.0fs)", fire_at.isoformat(), delay)

    def _fire(self) -> None:
        today = self.clock().date()
        self.notifier.notify_history(almanac.lookup(today))
        with self._lock:
            # Cancelled or rescheduled while firing
            if self._time is None or self._timer is not threading.current_thread():
                return
            self._arm_locked(*self._time)
