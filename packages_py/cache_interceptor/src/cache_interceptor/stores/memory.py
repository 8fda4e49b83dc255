"""
In-memory cache store for the HTTP cache interceptor.
"""
import time
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..entry import CacheEntry
from ..types import CachePriority, CacheStore, CacheStoreError


@dataclass
class MemoryCacheStats:
    """Memory cache statistics."""

    entries: int
    max_entries: int
    stale_entries: int
    utilization_percent: float


class MemoryCacheStore(CacheStore):
    """
    In-memory cache store with priority-aware LRU eviction.

    Stale entries are kept until evicted or cleaned, since the interceptor
    still serves them for forced-cache requests and revalidates them with 304
    responses. No operation awaits, so each one is atomic on the event loop.
    """

    def __init__(
        self,
        max_entries: int = 1000,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._cache: Dict[str, CacheEntry] = {}
        self._max_entries = max_entries
        self._clock = clock or time.time
        self._closed = False

    def _ensure_open(self) -> None:
        if self._closed:
            raise CacheStoreError("Memory cache store is closed")

    def _move_to_end(self, key: str) -> None:
        """Move an entry to the end of the LRU queue."""
        if key in self._cache:
            entry = self._cache.pop(key)
            self._cache[key] = entry

    def _evict_if_needed(self) -> None:
        """Evict the least recently used entry of the lowest priority."""
        while len(self._cache) >= self._max_entries and self._cache:
            victim = min(self._cache.values(), key=lambda e: e.priority.rank)
            # min keeps the first of equal ranks, which is the least recently used
            del self._cache[victim.key]

    async def get(self, key: str) -> Optional[CacheEntry]:
        """Get an entry by key."""
        self._ensure_open()
        entry = self._cache.get(key)
        if entry is None:
            return None
        self._move_to_end(key)
        return entry

    async def set(self, entry: CacheEntry) -> None:
        """Store an entry, replacing the previous entry for its key."""
        self._ensure_open()
        if self._max_entries <= 0:
            return
        self._cache.pop(entry.key, None)
        self._evict_if_needed()
        self._cache[entry.key] = entry

    async def update_expiry(self, key: str, expiry: float) -> None:
        """Move the expiry of an entry; missing keys are ignored."""
        self._ensure_open()
        entry = self._cache.get(key)
        if entry is not None:
            entry.expiry = expiry

    async def delete(self, key: str) -> bool:
        """Delete an entry."""
        self._ensure_open()
        return self._cache.pop(key, None) is not None

    async def clean(
        self,
        priority_or_below: CachePriority = CachePriority.HIGH,
        stale_only: bool = False,
    ) -> None:
        """Remove entries at or below a priority, optionally only stale ones."""
        self._ensure_open()
        now = self._clock()
        doomed = [
            key
            for key, entry in self._cache.items()
            if entry.priority.rank <= priority_or_below.rank
            and (not stale_only or entry.is_stale(now))
        ]
        for key in doomed:
            del self._cache[key]

    async def clear(self) -> None:
        """Remove all entries."""
        self._ensure_open()
        self._cache.clear()

    async def size(self) -> int:
        """Number of entries, stale ones included."""
        self._ensure_open()
        return len(self._cache)

    async def keys(self) -> List[str]:
        """All keys, least recently used first."""
        self._ensure_open()
        return list(self._cache.keys())

    async def close(self) -> None:
        """Close the store and drop its entries."""
        self._closed = True
        self._cache.clear()

    def get_stats(self) -> MemoryCacheStats:
        """Get cache statistics."""
        now = self._clock()
        return MemoryCacheStats(
            entries=len(self._cache),
            max_entries=self._max_entries,
            stale_entries=sum(1 for e in self._cache.values() if e.is_stale(now)),
            utilization_percent=(len(self._cache) / self._max_entries) * 100
            if self._max_entries > 0
            else 0,
        )


def create_memory_cache_store(
    max_entries: int = 1000,
    clock: Optional[Callable[[], float]] = None,
) -> MemoryCacheStore:
    """Create a memory cache store."""
    return MemoryCacheStore(max_entries=max_entries, clock=clock)
