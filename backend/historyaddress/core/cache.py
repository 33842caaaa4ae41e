import logging
import threading
import time
from typing import Any, Callable, Optional

from historyaddress.core.config import settings

logger = logging.getLogger(__name__)


class TTLCache:
    """
    bounded in-process key/value cache with per-entry expiry

    eviction is by insertion order: when full, the oldest quarter of the
    entries is dropped. there is no per-entity invalidation, writers call
    clear().
    """

    def __init__(self, max_size: int = 500, clock: Callable[[], float] = time.monotonic):
        self.max_size = max(1, max_size)
        self._clock = clock
        self._entries: dict[str, tuple[Any, float]] = {}
        # endpoints run in a threadpool and the janitor prunes from its own thread
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self.misses += 1
                return None
            value, expires_at = entry
            if expires_at <= self._clock():
                del self._entries[key]
                self.misses += 1
                return None
            self.hits += 1
            return value

    def set(self, key: str, value: Any, ttl_seconds: float) -> None:
        with self._lock:
            if key in self._entries:
                # re-inserting moves the key to the young end
                del self._entries[key]
            elif len(self._entries) >= self.max_size:
                self._evict_oldest()
            self._entries[key] = (value, self._clock() + ttl_seconds)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def prune(self) -> int:
        """drop expired entries, returns how many were removed"""
        with self._lock:
            now = self._clock()
            expired = [key for key, (_, expires_at) in self._entries.items() if expires_at <= now]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def stats(self) -> dict:
        with self._lock:
            return {
                "entries": len(self._entries),
                "max_size": self.max_size,
                "hits": self.hits,
                "misses": self.misses,
            }

    def __len__(self) -> int:
        return len(self._entries)

    def _evict_oldest(self) -> None:
        count = max(1, self.max_size // 4)
        for key in list(self._entries)[:count]:
            del self._entries[key]
        logger.debug(f"cache full, evicted {count} oldest entries")


cache = TTLCache(max_size=settings.CACHE_MAX_SIZE)


def get_cache() -> TTLCache:
    return cache
