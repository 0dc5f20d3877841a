"""
Key-value stores for client-local state.

Values are kept as serialized strings under fixed keys, so a corrupted value
can be detected by the reader and removed without touching other keys.
"""
import json
import logging
import os
import threading
from typing import Dict, Optional

logger = logging.getLogger(__name__)

REMINDERS_KEY = 'reminders'
LAST_GENERATED_KEY = 'lastRemindersGeneratedDate'
NOTIFICATION_PREFERENCES_KEY = 'notificationPreferences'
USER_CONTACT_KEY = 'userContact'


class LocalStorage:
    """Interface shared by the storage backends."""

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class MemoryStorage(LocalStorage):

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage(LocalStorage):
    """
    Stores every key in one JSON object on disk.

    Each call reads or rewrites the whole file; writes go through a temporary
    file and an atomic rename.
    """

    def __init__(self, path: str):
        self.path = os.path.expanduser(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error(f"Storage file {self.path} unreadable, starting empty: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _dump(self, data: Dict[str, str]) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f)
        os.replace(tmp_path, self.path)

    def get_item(self, key: str) -> Optional[str]:
        with self._lock:
            return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        with self._lock:
            data = self._load()
            data[key] = value
            self._dump(data)

    def remove_item(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key in data:
                del data[key]
                self._dump(data)
