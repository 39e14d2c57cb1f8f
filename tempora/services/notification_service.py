"""Desktop notification service."""
import logging
from typing import Optional, Sequence, Tuple
from ..config import NOTIFICATION_APP_NAME, NOTIFICATION_TITLE
from ..models import HistoricalEvent

logger = logging.getLogger(__name__)

ICON_HISTORY = "x-office-calendar"
FALLBACK_BODY = "Discover what happened on this day in history!"
TEST_FALLBACK_BODY = "This is a test notification!"


def build_history_message(events: Sequence[HistoricalEvent],
                          empty_body: str = FALLBACK_BODY) -> Tuple[str, str]:
    """
    Compose the daily notification from today's almanac entries.

    Returns:
        (title, body); the body names the first entry and how many more follow
    """
    if not events:
        return NOTIFICATION_TITLE, empty_body
    first = events[0]
    body = f"{first.year}: {first.title}"
    if len(events) > 1:
        body += f" and {len(events) - 1} more events..."
    return NOTIFICATION_TITLE, body


class NotificationService:
    """Sends freedesktop notifications over the session bus."""

    def __init__(self, app_name: str = NOTIFICATION_APP_NAME) -> None:
        self.app_name = app_name
        self._last_id = 0

    def notify(self, title: str, message: str, icon: str = ICON_HISTORY,
               timeout: int = -1) -> bool:
        """
        Send desktop notification.

        Args:
            title: Notification title
            message: Notification message
            icon: Icon name (theme icon)
            timeout: Timeout in ms (-1 = server default, 0 = no timeout)

        Returns:
            True if DBus notification succeeded, False otherwise
        """
        try:
            import dbus  # type: ignore[import-untyped]

            bus = dbus.SessionBus()  # type: ignore[reportUnknownMemberType]
            obj = bus.get_object("org.freedesktop.Notifications",  # type: ignore[reportUnknownMemberType]
                                 "/org/freedesktop/Notifications")
            interface = dbus.Interface(obj, "org.freedesktop.Notifications")  # type: ignore[reportUnknownMemberType]

            self._last_id = int(interface.Notify(self.app_name, 0, icon, title, message,  # type: ignore[reportUnknownMemberType]
                                                 [], {}, timeout))
            return True
        except Exception as e:
            logger.warning("DBus notification failed: %s", e)
            return False

    def notify_history(self, events: Sequence[HistoricalEvent],
                       empty_body: Optional[str] = None) -> bool:
        """Notify about the given almanac entries."""
        title, body = build_history_message(events, empty_body or FALLBACK_BODY)
        return self.notify(title, body)
