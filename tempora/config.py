import os
import json
import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)

DATA_DIR: str = os.path.expanduser(os.environ.get("TEMPORA_DATA_DIR", "~/.local/share/tempora"))
DB_PATH: str = os.path.expanduser(os.environ.get("TEMPORA_DB", os.path.join(DATA_DIR, "tempora.db")))
STORE_PATH: str = os.path.expanduser(os.environ.get("TEMPORA_STORE", os.path.join(DATA_DIR, "local_storage.json")))

# "auto", "sqlite" or "blob"
BACKEND: str = os.environ.get("TEMPORA_BACKEND", "auto").lower()

# Key of the serialized event list inside the key-value store
WEB_EVENTS_KEY: str = "tempora_events_v1"

# User configuration file path
USER_CONFIG_PATH: str = os.path.expanduser("~/.config/tempora/settings.json")

# Debug mode - writes detailed store and scheduler logs to a file
DEBUG_MODE: bool = os.environ.get("TEMPORA_DEBUG", "0") == "1"
DEBUG_LOG_PATH: str = os.path.expanduser(os.path.join(DATA_DIR, "tempora_debug.log"))

NOTIFICATION_APP_NAME = "Tempora"
NOTIFICATION_TITLE = "📅 Tempora · On this day"


# --- Dynamic Configuration Class ---

class Config:
    """
    Manages user settings loaded from the JSON settings file.

    Only the daily notification is configurable: whether it is enabled and
    the local time (hour, minute) it fires at.
    """
    DEFAULT_NOTIFICATIONS_ENABLED: bool = False
    DEFAULT_NOTIFICATION_HOUR: int = 9
    DEFAULT_NOTIFICATION_MINUTE: int = 0

    def __init__(self, config_path: str = USER_CONFIG_PATH):
        self.config_path = config_path
        self._user_config: Dict[str, Any] = {}

        self.notifications_enabled: bool = self.DEFAULT_NOTIFICATIONS_ENABLED
        self.notification_hour: int = self.DEFAULT_NOTIFICATION_HOUR
        self.notification_minute: int = self.DEFAULT_NOTIFICATION_MINUTE

        self.reload()

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user configuration from file."""
        if os.path.exists(self.config_path):
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                if isinstance(data, dict):
                    return data
                logger.warning("Ignoring settings file %s: not a JSON object", self.config_path)
            except (json.JSONDecodeError, IOError) as e:
                logger.warning("Ignoring broken settings file %s: %s", self.config_path, e)
        return {}

    @staticmethod
    def _bounded(value: Any, low: int, high: int, default: int) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            return default
        return value if low <= value <= high else default

    def reload(self) -> None:
        """
        Reload configuration from disk, updating this object's attributes.
        """
        self._user_config = self._load_user_config()

        self.notifications_enabled = bool(self._user_config.get(
            'notifications_enabled', self.DEFAULT_NOTIFICATIONS_ENABLED
        ))
        self.notification_hour = self._bounded(
            self._user_config.get('notification_hour'), 0, 23, self.DEFAULT_NOTIFICATION_HOUR
        )
        self.notification_minute = self._bounded(
            self._user_config.get('notification_minute'), 0, 59, self.DEFAULT_NOTIFICATION_MINUTE
        )

    def save(self) -> None:
        """Write current values back to the settings file."""
        self._user_config.update({
            'notifications_enabled': self.notifications_enabled,
            'notification_hour': self.notification_hour,
            'notification_minute': self.notification_minute,
        })
        os.makedirs(os.path.dirname(self.config_path), exist_ok=True)
        with open(self.config_path, 'w') as f:
            json.dump(self._user_config, f, indent=2)


# Shared instance used by the tray front end.
settings = Config()
