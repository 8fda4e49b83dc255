"""
HTTP response caching interceptor.

Serves stored responses while they are fresh, honours Cache-Control max-age
and revalidates entries through 304 Not Modified responses.
"""
from .types import (
    CACHE_RESULT_EXTENSION,
    CachePriority,
    CacheResult,
    CacheStore,
    CacheStoreError,
)
from .parser import (
    parse_cache_control,
    parse_max_age,
    parse_int,
    strip_quotes,
    is_valid_http_status_code,
)
from .keys import (
    CacheKeyBuilder,
    default_key_builder,
    resolve_cache_key,
)
from .options import (
    CACHE_OPTIONS_EXTENSION,
    DEFAULT_CACHE_OPTIONS,
    DEFAULT_EXPIRY_SECONDS,
    CacheOptions,
    merge_cache_options,
    resolve_request_options,
)
from .entry import (
    CACHE_ENTRY_EXTENSION,
    CacheEntry,
)
from .interceptor import (
    CacheInterceptor,
    create_cache_interceptor,
)
from .stores import (
    MemoryCacheStore,
    MemoryCacheStats,
    create_memory_cache_store,
)


__all__ = [
    # Types
    "CACHE_RESULT_EXTENSION",
    "CachePriority",
    "CacheResult",
    "CacheStore",
    "CacheStoreError",
    # Parser utilities
    "parse_cache_control",
    "parse_max_age",
    "parse_int",
    "strip_quotes",
    "is_valid_http_status_code",
    # Keys
    "CacheKeyBuilder",
    "default_key_builder",
    "resolve_cache_key",
    # Options
    "CACHE_OPTIONS_EXTENSION",
    "DEFAULT_CACHE_OPTIONS",
    "DEFAULT_EXPIRY_SECONDS",
    "CacheOptions",
    "merge_cache_options",
    "resolve_request_options",
    # Entries
    "CACHE_ENTRY_EXTENSION",
    "CacheEntry",
    # Interceptor
    "CacheInterceptor",
    "create_cache_interceptor",
    # Stores
    "MemoryCacheStore",
    "MemoryCacheStats",
    "create_memory_cache_store",
]

__version__ = "1.0.0"
