"""Cache repository protocol for fetched external data."""

from datetime import datetime
from typing import Protocol, Optional

from brokerage_assistant.domain.models import CacheEntry, CacheKey


class CacheRepository(Protocol):
    """Interface for storing cache entries keyed by (subject, kind, sub_key)."""

    def get(self, key: CacheKey) -> Optional[CacheEntry]:
        """Return the stored entry for key, expired or not."""
        ...

    def replace(self, entry: CacheEntry) -> None:
        """Store entry, replacing any previous entry with the same key."""
        ...

    def purge_expired(self, now: datetime) -> int:
        """Delete entries whose expires_at is at or before now; return count."""
        ...
