"""
Cache key resolution.
"""
from typing import TYPE_CHECKING, Callable

import httpx

if TYPE_CHECKING:
    from .options import CacheOptions


CacheKeyBuilder = Callable[[httpx.Request], str]
"""Builds a cache key from a request."""


def default_key_builder(request: httpx.Request) -> str:
    """Default cache key builder: upper-cased method and the normalised URL."""
    return f"{request.method.upper()}:{request.url}"


def resolve_cache_key(options: "CacheOptions", request: httpx.Request) -> str:
    """Build the cache key for a request with the options' key builder."""
    cache_key = options.key_builder(request)
    assert cache_key, "The cache key builder produced an empty key"
    return cache_key
