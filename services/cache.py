"""TTL-based in-memory cache shared by every request in the process.

Expiry is lazy: a read that finds a stale entry deletes it and reports a miss,
so correctness never depends on the periodic cleanup task.
"""

import asyncio
import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    key: str
    value: Any
    stored_at: float
    expires_at: float


@dataclass
class CacheStats:
    total: int
    active: int
    expired: int

    def to_dict(self) -> Dict[str, int]:
        return {"total": self.total, "active": self.active, "expired": self.expired}


@dataclass
class ClearResult:
    cleared_count: int


class TTLCache:
    """A dictionary-based TTL cache, safe to share between request threads."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._cache: Dict[str, CacheEntry] = {}
        self._lock = threading.Lock()
        self._clock = clock
        self._generations: Dict[str, int] = {}
        self._clear_epoch = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def get(self, key: str) -> Optional[Any]:
        """Retrieve a value from the cache if it exists and hasn't expired."""
        now = self._clock()
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            if now >= entry.expires_at:
                # Remove expired entry
                del self._cache[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl_ms: float):
        """Store a value under key for ttl_ms milliseconds.

        A zero or negative TTL stores an entry that is already stale.
        """
        entry = self._entry(key, value, ttl_ms)
        with self._lock:
            self._cache[key] = entry

    def _entry(self, key: str, value: Any, ttl_ms: float) -> CacheEntry:
        now = self._clock()
        return CacheEntry(key=key, value=value, stored_at=now, expires_at=now + ttl_ms / 1000.0)

    def delete(self, key: str) -> bool:
        """Remove key, returning whether anything was there."""
        with self._lock:
            return self._cache.pop(key, None) is not None

    def clear(self) -> ClearResult:
        """Clear all entries from the cache."""
        with self._lock:
            count = len(self._cache)
            self._cache.clear()
            self._clear_epoch += 1
        return ClearResult(cleared_count=count)

    def keys(self, prefix: Optional[str] = None) -> List[str]:
        """Return live keys, optionally only those starting with prefix.

        Expired entries found along the way are deleted.
        """
        now = self._clock()
        live = []
        with self._lock:
            for key, entry in list(self._cache.items()):
                if now >= entry.expires_at:
                    del self._cache[key]
                    continue
                if prefix is None or key.startswith(prefix):
                    live.append(key)
        return live

    def stats(self) -> CacheStats:
        """Count active and expired entries without removing anything."""
        now = self._clock()
        active = 0
        expired = 0
        with self._lock:
            for entry in self._cache.values():
                if now < entry.expires_at:
                    active += 1
                else:
                    expired += 1
        return CacheStats(total=active + expired, active=active, expired=expired)

    def invalidate_prefix(self, prefix: str) -> int:
        """Remove every entry whose key starts with prefix.

        Also bumps the generation of prefix, so a value computed before this
        call is not stored by a get_or_set guarded on the same prefix.
        """
        with self._lock:
            doomed = [key for key in self._cache if key.startswith(prefix)]
            for key in doomed:
                del self._cache[key]
            self._generations[prefix] = self._generations.get(prefix, 0) + 1
        return len(doomed)

    def generation(self, prefix: str) -> Tuple[int, int]:
        """Invalidation counter for prefix; changes on clear() too."""
        with self._lock:
            return self._clear_epoch, self._generations.get(prefix, 0)

    def cleanup_expired(self) -> int:
        """Remove expired entries from the cache."""
        now = self._clock()
        with self._lock:
            expired_keys = [
                key for key, entry in self._cache.items()
                if now >= entry.expires_at
            ]
            for key in expired_keys:
                del self._cache[key]
        return len(expired_keys)

    def get_or_set(self, key: str, compute: Callable[[], Any], ttl_ms: float,
                   guard_prefix: Optional[str] = None,
                   refresh: bool = False) -> Tuple[Any, bool]:
        """Return (value, hit) for key, computing and storing it on a miss.

        refresh skips the read and always recomputes. compute runs outside the
        lock, so two threads missing on the same key may both compute; the
        later set wins. With guard_prefix, the computed value is returned but
        not stored if guard_prefix was invalidated (or the cache cleared)
        while compute ran.
        """
        if not refresh:
            value = self.get(key)
            if value is not None:
                return value, True

        before = self.generation(guard_prefix) if guard_prefix is not None else None
        value = compute()
        entry = self._entry(key, value, ttl_ms)
        with self._lock:
            if before is not None and before != (self._clear_epoch, self._generations.get(guard_prefix, 0)):
                logger.info(f"{guard_prefix} invalidated while computing {key}, not caching")
                return value, False
            self._cache[key] = entry
        return value, False


async def run_periodic_cleanup(target: TTLCache, interval_seconds: float):
    """Sweep expired entries every interval_seconds until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        removed = target.cleanup_expired()
        if removed:
            logger.debug(f"Cache cleanup removed {removed} expired entries")


# Global cache instance
cache = TTLCache()


def get_cache() -> TTLCache:
    """Return the process-wide cache (FastAPI dependency)."""
    return cache
