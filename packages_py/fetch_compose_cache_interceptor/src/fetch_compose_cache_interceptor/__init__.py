"""
Cache interceptor transport wrapper for httpx's compose pattern.

HTTP response caching with:
- Cache-Control max-age handling
- ETag and Last-Modified conditional revalidation (304 Not Modified)
- Per-request cache options through request extensions
- Cached fallback on transport errors
"""
from cache_interceptor import (
    CachePriority,
    CacheResult,
    CacheStore,
    CacheStoreError,
    CacheOptions,
    CacheEntry,
    CacheInterceptor,
    create_cache_interceptor,
    parse_cache_control,
    MemoryCacheStore,
    create_memory_cache_store,
)
from .transport import CacheInterceptorTransport
from .factory import (
    compose_transport,
    create_cache_interceptor_transport,
    create_cache_interceptor_client,
)


__all__ = [
    # Re-exported types from base package
    "CachePriority",
    "CacheResult",
    "CacheStore",
    "CacheStoreError",
    "CacheOptions",
    "CacheEntry",
    "CacheInterceptor",
    "create_cache_interceptor",
    "parse_cache_control",
    "MemoryCacheStore",
    "create_memory_cache_store",
    # Transport wrapper
    "CacheInterceptorTransport",
    # Factory functions
    "compose_transport",
    "create_cache_interceptor_transport",
    "create_cache_interceptor_client",
]

__version__ = "1.0.0"
