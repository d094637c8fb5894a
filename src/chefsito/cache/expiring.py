"""
Chefsito - Expiring Cache.

Key/value cache with a fixed TTL per cache, layered over a KeyValueStore.
Each value is stored under `key` with its write time (epoch ms) under
`key + "_timestamp"`.

Stale entries are ignored, not evicted; the next put overwrites them.
Store failures are logged and turn into misses (reads) or no-ops
(writes), never exceptions.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Callable

from chefsito.cache.store import KeyValueStore

logger = logging.getLogger(__name__)

CACHE_PREFIX = "cache_"
TIMESTAMP_SUFFIX = "_timestamp"


def _to_millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _from_millis(millis: int) -> datetime:
    return datetime.fromtimestamp(millis / 1000)


@dataclass
class CacheEntry:
    """A stored payload with its write time."""

    payload: Any
    created_at: datetime
    ttl: timedelta

    def is_valid(self, now: datetime) -> bool:
        return now - self.created_at <= self.ttl


class ExpiringCache:
    """TTL cache over a persistent key/value store."""

    def __init__(
        self,
        store: KeyValueStore,
        ttl: timedelta,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.ttl = ttl
        self._clock = clock

    def _entry(self, key: str) -> CacheEntry | None:
        payload = self.store.get(key)
        timestamp = self.store.get(key + TIMESTAMP_SUFFIX)
        if payload is None or timestamp is None:
            return None
        return CacheEntry(payload=payload, created_at=_from_millis(timestamp), ttl=self.ttl)

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if absent, stale, or unreadable."""
        try:
            entry = self._entry(key)
        except Exception as e:
            logger.warning(f"Cache read failed for {key}: {e}")
            return None

        if entry is None:
            return None
        if not entry.is_valid(self._clock()):
            logger.debug(f"Cache expired: {key}")
            return None
        return entry.payload

    def put(self, key: str, value: Any) -> None:
        """Store a value and reset its freshness window."""
        try:
            self.store.set(key, value)
            self.store.set(key + TIMESTAMP_SUFFIX, _to_millis(self._clock()))
        except Exception as e:
            logger.warning(f"Cache write failed for {key}: {e}")

    def invalidate(self, key: str) -> None:
        try:
            self.store.remove(key)
            self.store.remove(key + TIMESTAMP_SUFFIX)
        except Exception as e:
            logger.warning(f"Cache invalidate failed for {key}: {e}")

    def invalidate_all(self, prefix: str = CACHE_PREFIX) -> int:
        """Remove every key starting with prefix. Returns the number of keys removed."""
        removed = 0
        try:
            for key in sorted(self.store.keys()):
                if key.startswith(prefix):
                    self.store.remove(key)
                    removed += 1
        except Exception as e:
            logger.warning(f"Cache clear failed for prefix {prefix!r}: {e}")
        return removed

    def stats(self, prefix: str = CACHE_PREFIX) -> dict[str, dict[str, Any]]:
        """Age and write time of every cached key under prefix (empty if unreadable)."""
        now = self._clock()
        stats: dict[str, dict[str, Any]] = {}
        try:
            for key in sorted(self.store.keys()):
                if not key.startswith(prefix) or key.endswith(TIMESTAMP_SUFFIX):
                    continue
                timestamp = self.store.get(key + TIMESTAMP_SUFFIX)
                if timestamp is None:
                    continue
                cached_at = _from_millis(timestamp)
                stats[key] = {
                    "age_minutes": int((now - cached_at).total_seconds() // 60),
                    "cached_at": cached_at.isoformat(),
                    "fresh": now - cached_at <= self.ttl,
                }
        except Exception as e:
            logger.warning(f"Cache stats failed for prefix {prefix!r}: {e}")
            return {}
        return stats
