"""Expiry-based cache for previously fetched external data."""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Any, Callable, Iterator, Optional, Union

from brokerage_assistant.core.exceptions import AppError, ExternalFetchError
from brokerage_assistant.core.timezone import now_eastern
from brokerage_assistant.domain.models import CacheEntry, CacheKey
from brokerage_assistant.repositories.protocols import CacheRepository

logger = logging.getLogger(__name__)

Ttl = Union[int, float, timedelta]


def _as_timedelta(ttl: Ttl) -> timedelta:
    if isinstance(ttl, timedelta):
        return ttl
    return timedelta(seconds=ttl)


class _KeyLock:
    __slots__ = ("lock", "holders")

    def __init__(self):
        self.lock = threading.Lock()
        self.holders = 0


class TimeSeriesCache:
    """
    Generic TTL cache keyed by (subject, kind, sub_key).

    TTL is supplied per call by the caller. Expired entries are treated as
    misses on read and replaced after a successful fetch; a failed fetch
    writes nothing. Expired rows are also purged opportunistically every
    purge_interval.

    With dedupe_inflight, concurrent misses on the same key are serialized
    behind a per-key lock: the first caller fetches, the rest re-check and
    reuse its entry. Without it every concurrent miss fetches (stampede).
    """

    def __init__(
        self,
        repository: CacheRepository,
        clock: Callable[[], datetime] = now_eastern,
        dedupe_inflight: bool = True,
        purge_interval: Optional[Ttl] = 300,
    ):
        self._repo = repository
        self._clock = clock
        self._dedupe = dedupe_inflight
        self._purge_interval = _as_timedelta(purge_interval) if purge_interval else None
        self._last_purge: Optional[datetime] = None
        self._locks: dict[CacheKey, _KeyLock] = {}
        self._locks_guard = threading.Lock()

    def get(self, key: CacheKey, ttl: Ttl, fetcher: Callable[[], Any]) -> Any:
        """
        Return the cached payload for key, fetching it on a miss.

        Raises ExternalFetchError when fetcher fails.
        """
        self._maybe_purge()

        entry = self._fresh_entry(key)
        if entry is not None:
            logger.debug(f"Cache hit for {key}")
            return entry.payload

        if not self._dedupe:
            return self._fetch_and_store(key, ttl, fetcher)

        with self._inflight(key):
            # Another caller may have filled the entry while we waited
            entry = self._fresh_entry(key)
            if entry is not None:
                logger.debug(f"Cache hit for {key} after in-flight fetch")
                return entry.payload
            return self._fetch_and_store(key, ttl, fetcher)

    def peek(self, key: CacheKey) -> Optional[CacheEntry]:
        """Return the entry for key if it is still fresh, without fetching."""
        return self._fresh_entry(key)

    def purge_expired(self) -> int:
        """Delete every expired entry; returns the number removed."""
        now = self._clock()
        removed = self._repo.purge_expired(now)
        self._last_purge = now
        if removed:
            logger.info(f"Purged {removed} expired cache entries")
        return removed

    def _fresh_entry(self, key: CacheKey) -> Optional[CacheEntry]:
        entry = self._repo.get(key)
        if entry is not None and entry.is_fresh(self._clock()):
            return entry
        return None

    def _fetch_and_store(self, key: CacheKey, ttl: Ttl, fetcher: Callable[[], Any]) -> Any:
        logger.debug(f"Cache miss for {key}; fetching")
        try:
            payload = fetcher()
        except AppError:
            logger.error(f"Fetch failed for {key}")
            raise
        except Exception as e:
            logger.error(f"Fetch failed for {key}: {e}")
            raise ExternalFetchError(key.kind, str(e)) from e

        now = self._clock()
        self._repo.replace(
            CacheEntry(
                key=key,
                payload=payload,
                fetched_at=now,
                expires_at=now + _as_timedelta(ttl),
            )
        )
        return payload

    @contextmanager
    def _inflight(self, key: CacheKey) -> Iterator[None]:
        # Per-key lock shared by concurrent misses; dropped when the last holder leaves
        with self._locks_guard:
            slot = self._locks.get(key)
            if slot is None:
                slot = self._locks[key] = _KeyLock()
            slot.holders += 1
        try:
            with slot.lock:
                yield
        finally:
            with self._locks_guard:
                slot.holders -= 1
                if slot.holders == 0:
                    del self._locks[key]

    def _maybe_purge(self) -> None:
        if self._purge_interval is None:
            return
        now = self._clock()
        if self._last_purge is None:
            self._last_purge = now
            return
        if now - self._last_purge >= self._purge_interval:
            self.purge_expired()
