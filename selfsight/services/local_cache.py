"""
Local key-value cache used when the remote store is unreachable.

Each key is one JSON document on disk. Keys are namespaced per user
(``selfsight_entries_<user_id>``, ``selfsight_profile_<user_id>``,
``selfsight_recommendations_<user_id>``).
"""

import json
import logging
import re
import threading
from pathlib import Path
from typing import Any, Optional

from selfsight.core.config import settings

logger = logging.getLogger("SelfSight.LocalCache")

_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")


def entries_key(user_id: str) -> str:
    return f"selfsight_entries_{user_id}"


def profile_key(user_id: str) -> str:
    return f"selfsight_profile_{user_id}"


def recommendations_key(user_id: str) -> str:
    return f"selfsight_recommendations_{user_id}"


class LocalCache:
    """JSON documents under a directory, one file per key."""

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory or settings.LOCAL_CACHE_DIR)
        self._lock = threading.Lock()

    def _path(self, key: str) -> Path:
        return self.directory / f"{_SAFE_KEY.sub('_', key)}.json"

    def get(self, key: str, default: Any = None) -> Any:
        path = self._path(key)
        with self._lock:
            if not path.exists():
                return default
            try:
                return json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                logger.error("Unreadable cache document %s: %s", path.name, exc)
                return default

    def set(self, key: str, value: Any) -> None:
        path = self._path(key)
        with self._lock:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".tmp")
            tmp_path.write_text(json.dumps(value, default=str), encoding="utf-8")
            tmp_path.replace(path)
