"""
Cache store implementations.
"""
from .memory import (
    MemoryCacheStore,
    MemoryCacheStats,
    create_memory_cache_store,
)

__all__ = [
    "MemoryCacheStore",
    "MemoryCacheStats",
    "create_memory_cache_store",
]
