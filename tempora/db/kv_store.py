"""File-backed string key-value storage."""
import json
import logging
import os
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    A JSON object on disk mapping string keys to string values.

    Plays the role a browser's local storage plays for a web build: each
    value is an opaque serialized blob owned by whoever writes its key.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def _read_all(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, 'r', encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a JSON object")
        return data

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored value, or None when the key is absent."""
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, keeping the other keys."""
        try:
            data = self._read_all()
        except (ValueError, OSError) as e:
            logger.warning("Rewriting unreadable key-value file %s: %s", self.path, e)
            data = {}
        data[key] = value

        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = self.path + ".tmp"
        with open(tmp_path, 'w', encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False)
        os.replace(tmp_path, self.path)
