"""
Cache interceptor transport wrapper for httpx.

Runs the cache interceptor around another transport:
- Fresh cached responses are served without touching the wrapped transport
- Stale entries are revalidated with If-None-Match/If-Modified-Since
- Transport errors fall back to the cached entry when allowed
"""
import logging
from typing import Callable, Optional

import httpx

from cache_interceptor import (
    CacheInterceptor,
    CacheOptions,
    CacheStore,
    create_memory_cache_store,
)

logger = logging.getLogger(__name__)


class CacheInterceptorTransport(httpx.AsyncBaseTransport):
    """
    Cache interceptor transport wrapper for httpx.

    Wraps another transport and caches its responses. Per-request options
    can be attached with ``extensions=CacheOptions(...).to_extensions()``.

    Example:
        base = httpx.AsyncHTTPTransport()
        transport = CacheInterceptorTransport(base)
        client = httpx.AsyncClient(transport=transport)
    """

    def __init__(
        self,
        inner: httpx.AsyncBaseTransport,
        *,
        options: Optional[CacheOptions] = None,
        store: Optional[CacheStore] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        """
        Create a new CacheInterceptorTransport.

        Args:
            inner: The wrapped transport to delegate requests to
            options: Default cache options for requests without an override
            store: Global cache store. Default: a new memory store
            clock: Time source returning Unix timestamps. Default: time.time
        """
        self._inner = inner
        self._interceptor = CacheInterceptor(
            options,
            store or create_memory_cache_store(clock=clock),
            clock,
        )

    @property
    def interceptor(self) -> CacheInterceptor:
        return self._interceptor

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Handle an async HTTP request with caching capabilities."""
        cached = await self._interceptor.on_request(request)
        if cached is not None:
            return cached

        try:
            response = await self._inner.handle_async_request(request)
        except httpx.TransportError as error:
            logger.debug(f"[{request.url}] Transport failed: {error!r}")
            return await self._interceptor.on_error(request, error)

        await response.aread()
        return await self._interceptor.on_response(request, response)

    async def aclose(self) -> None:
        """Close the transport."""
        await self._interceptor.store.close()
        await self._inner.aclose()
