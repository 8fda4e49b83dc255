"""
Types for the HTTP cache interceptor.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, Optional

if TYPE_CHECKING:
    from .entry import CacheEntry


CACHE_RESULT_EXTENSION = "cache_result"
"""Response extension key holding the CacheResult marker."""


class CachePriority(str, Enum):
    """Priority of a cache entry, used by stores when evicting."""

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK: Dict[CachePriority, int] = {
    CachePriority.LOW: 0,
    CachePriority.NORMAL: 1,
    CachePriority.HIGH: 2,
}


@dataclass(frozen=True)
class CacheResult:
    """Marker attached to responses that were produced by the interceptor."""

    is_from_cache: bool = False
    """Whether the response was synthesized from a cache entry."""

    @classmethod
    def from_extensions(cls, extensions: Optional[dict]) -> "CacheResult":
        """Read the marker from a response's extensions, defaulting to not-from-cache."""
        if not extensions:
            return cls()
        result = extensions.get(CACHE_RESULT_EXTENSION)
        if isinstance(result, cls):
            return result
        return cls()


class CacheStoreError(Exception):
    """Raised by the bundled stores when an operation cannot be performed."""


class CacheStore(ABC):
    """
    Cache store interface.

    Implementations own their eviction policy and whatever atomicity is
    needed for a single key. The interceptor performs get-then-set sequences
    without locking, so concurrent exchanges on the same key may race.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional["CacheEntry"]:
        """Get an entry by key, stale or not."""
        pass

    @abstractmethod
    async def set(self, entry: "CacheEntry") -> None:
        """Store an entry, replacing any entry with the same key."""
        pass

    @abstractmethod
    async def update_expiry(self, key: str, expiry: float) -> None:
        """Move the expiry of an existing entry."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete an entry."""
        pass

    @abstractmethod
    async def clean(
        self,
        priority_or_below: CachePriority = CachePriority.HIGH,
        stale_only: bool = False,
    ) -> None:
        """Remove entries at or below a priority, optionally only stale ones."""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Remove all entries."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the store and release resources."""
        pass
