"""Cache models for previously fetched external data."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, NamedTuple, Optional


class CacheKey(NamedTuple):
    """Identifies a cached payload: (subject, kind, optional sub-key)."""

    subject: str
    kind: str
    sub_key: Optional[str] = None


@dataclass(frozen=True)
class CacheEntry:
    """
    Cached payload with its expiry.

    IMPORTANT: Never mutated in place; an expired entry is replaced
    by a fresh fetch.
    """

    key: CacheKey
    payload: Any
    fetched_at: datetime
    expires_at: datetime

    def is_fresh(self, now: datetime) -> bool:
        """True while now is strictly before expires_at."""
        return now < self.expires_at
