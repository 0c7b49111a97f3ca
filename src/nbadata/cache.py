"""Thread-safe in-memory cache with per-region expirations."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Tuple


logger = logging.getLogger(__name__)

_MISSING = object()


class CacheRegion(str, Enum):
    """Classes of cached provider data, each with its own TTL."""

    SEARCH = "search"
    LISTING = "listing"
    STATS = "stats"
    SEASONS = "seasons"


DEFAULT_TTLS: Mapping[CacheRegion, int] = {
    CacheRegion.SEARCH: 5 * 60,
    CacheRegion.LISTING: 10 * 60,
    CacheRegion.STATS: 15 * 60,
    CacheRegion.SEASONS: 60 * 60,
}


@dataclass(frozen=True)
class CachePolicy:
    """TTL, in seconds, for every cache region."""

    search: int = DEFAULT_TTLS[CacheRegion.SEARCH]
    listing: int = DEFAULT_TTLS[CacheRegion.LISTING]
    stats: int = DEFAULT_TTLS[CacheRegion.STATS]
    seasons: int = DEFAULT_TTLS[CacheRegion.SEASONS]

    def ttl_for(self, region: CacheRegion) -> int:
        return int(getattr(self, region.value))


def normalize_term(term: str) -> str:
    return " ".join(term.split()).lower()


def search_key(term: str) -> str:
    return f"{CacheRegion.SEARCH.value}:{normalize_term(term)}"


def listing_key(per_page: int, max_pages: int) -> str:
    return f"{CacheRegion.LISTING.value}:{per_page}:{max_pages}"


def stats_key(player_id: int, season: int) -> str:
    return f"{CacheRegion.STATS.value}:{player_id}:{season}"


def seasons_key() -> str:
    return CacheRegion.SEASONS.value


class TTLCache:
    """Key/value store whose entries expire a fixed time after insertion.

    Entries are only evicted by expiration; there is no capacity bound. An
    expired entry is never returned: reading it counts as a miss and drops it.
    """

    def __init__(self, *, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[Any, float]] = {}

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key, _MISSING)
            if entry is _MISSING:
                return default
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return default
        logger.debug("cache hit %s", key)
        return value

    def set(self, key: str, value: Any, ttl: float) -> None:
        if ttl <= 0:
            return
        with self._lock:
            self._entries[key] = (value, self._clock() + ttl)

    def __contains__(self, key: str) -> bool:
        return self.get(key, _MISSING) is not _MISSING

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""

        now = self._clock()
        with self._lock:
            expired = [key for key, (_, expires_at) in self._entries.items() if now >= expires_at]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
