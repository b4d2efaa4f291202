"""Dict-backed CacheRepository for a single process."""

import threading
from datetime import datetime
from typing import Optional

from brokerage_assistant.domain.models import CacheEntry, CacheKey


class InMemoryCacheRepository:
    """Cache store kept in a dict; safe to share between threads."""

    def __init__(self):
        self._entries: dict[CacheKey, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, key: CacheKey) -> Optional[CacheEntry]:
        with self._lock:
            return self._entries.get(key)

    def replace(self, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[entry.key] = entry

    def purge_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [k for k, e in self._entries.items() if not e.is_fresh(now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
