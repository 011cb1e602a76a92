import logging
import os
import threading
import time
from typing import Any, Callable, Hashable, Optional

logger = logging.getLogger(__name__)

AUTHOR_SEARCH_CACHE_TTL = float(os.getenv("AUTHOR_SEARCH_CACHE_TTL") or 300)
AUTHOR_SEARCH_CACHE_MAX_ENTRIES = int(os.getenv("AUTHOR_SEARCH_CACHE_MAX_ENTRIES") or 512)


class AuthorSearchCache:
    """
    Memoises author search results for a fixed number of seconds.

    One instance is shared by the application. Any operation that creates or links an author calls
    ``invalidate`` so that newly created rows show up in the next search.

    Entries are kept in expiry order. Each ``set`` drops expired entries and, once ``max_entries``
    is reached, the entries closest to expiry.
    """

    def __init__(
        self,
        ttl: float = AUTHOR_SEARCH_CACHE_TTL,
        max_entries: int = AUTHOR_SEARCH_CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, Any]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def key(query: str, limit: int) -> tuple[str, int]:
        return (query.strip().lower(), limit)

    def get(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None

            return value

    def set(self, key: Hashable, value: Any) -> None:
        with self._lock:
            now = self._clock()
            self._entries.pop(key, None)
            self._purge_expired(now)

            while self._entries and len(self._entries) >= self.max_entries:
                del self._entries[next(iter(self._entries))]

            self._entries[key] = (now + self.ttl, value)

    def _purge_expired(self, now: float) -> None:
        expired = []
        for key, (expires_at, _) in self._entries.items():
            if expires_at > now:
                break
            expired.append(key)

        for key in expired:
            del self._entries[key]

    def invalidate(self) -> None:
        with self._lock:
            dropped = len(self._entries)
            self._entries.clear()

        logger.debug(msg=f"Invalidated author search cache ({dropped} entries).")

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def invalidate_search_cache(cache: Optional[AuthorSearchCache]) -> None:
    if cache is not None:
        cache.invalidate()
