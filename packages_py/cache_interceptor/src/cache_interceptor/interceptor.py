"""
HTTP cache interceptor.

Decides, for each outgoing request, whether a stored response can be served
instead of going to the network, and for each incoming response whether and
until when it is stored.
"""
import logging
import time
from typing import Callable, Optional

import httpx

from .entry import CacheEntry
from .keys import resolve_cache_key
from .options import CacheOptions, merge_cache_options, resolve_request_options
from .parser import is_valid_http_status_code, parse_cache_control, parse_max_age
from .stores.memory import MemoryCacheStore
from .types import CacheResult, CacheStore

logger = logging.getLogger(__name__)


class CacheInterceptor:
    """
    Caching policy for a request/response pipeline.

    The interceptor exposes three interception points. A transport calls
    ``on_request`` before the network; a non-None result is the cached
    response to return instead. It then calls ``on_response`` with the
    network response, or ``on_error`` when the transport failed.

    Per-request options are taken from the explicit ``options`` argument,
    else from ``request.extensions["cache_options"]``, else the interceptor's
    defaults. Whichever wins is used as a whole.

    Example:
        interceptor = CacheInterceptor(CacheOptions(expiry=60))

        cached = await interceptor.on_request(request)
        if cached is not None:
            return cached

        try:
            response = await transport.handle_async_request(request)
        except httpx.TransportError as error:
            return await interceptor.on_error(request, error)

        await response.aread()
        return await interceptor.on_response(request, response)
    """

    def __init__(
        self,
        options: Optional[CacheOptions] = None,
        store: Optional[CacheStore] = None,
        clock: Optional[Callable[[], float]] = None,
    ) -> None:
        self._options = merge_cache_options(options)
        self._global_store = self._options.store or store or MemoryCacheStore()
        self._clock = clock or time.time

    @property
    def options(self) -> CacheOptions:
        return self._options

    @property
    def store(self) -> CacheStore:
        return self._global_store

    def options_for_request(
        self,
        request: httpx.Request,
        options: Optional[CacheOptions] = None,
    ) -> CacheOptions:
        """Effective options for a request."""
        return resolve_request_options(request, self._options, options)

    def store_for(self, options: CacheOptions) -> CacheStore:
        """Store used with the given options."""
        return options.store or self._global_store

    async def on_request(
        self,
        request: httpx.Request,
        options: Optional[CacheOptions] = None,
    ) -> Optional[httpx.Response]:
        """
        Handle an outgoing request.

        Returns:
            The cached response to serve, or None to send the request
        """
        request_options = self.options_for_request(request, options)

        if not request_options.is_cached:
            return None

        cache_key = resolve_cache_key(request_options, request)
        store = self.store_for(request_options)
        existing = await store.get(cache_key)

        carried = CacheEntry.from_request(request)
        if carried is not None and carried is not existing:
            carried.detach_request(request)

        if existing is not None:
            existing.update_request(request, not request_options.force_cache)

        if request_options.force_update:
            logger.debug(f"[{cache_key}][{request.url}] Update forced, cache is ignored")
            return None

        if existing is None:
            logger.debug(
                f"[{cache_key}][{request.url}] No existing cache, starting a new request"
            )
            return None

        if not request_options.force_cache and existing.is_stale(self._clock()):
            logger.debug(
                f"[{cache_key}][{request.url}] Cache expired since {existing.expiry}, "
                f"starting a new request"
            )
            return None

        logger.debug(
            f"[{cache_key}][{request.url}] Using existing response from "
            f"{existing.downloaded_at} expires at {existing.expiry}"
        )
        return existing.to_response(request)

    async def on_error(
        self,
        request: httpx.Request,
        error: Exception,
        options: Optional[CacheOptions] = None,
    ) -> httpx.Response:
        """
        Handle a failed request.

        Returns the entry carried by the request when falling back to the
        cache is allowed; otherwise re-raises the original error.
        """
        request_options = self.options_for_request(request, options)

        if request_options.return_cache_on_error:
            cache_key = resolve_cache_key(request_options, request)
            existing = CacheEntry.from_error(error, request, cache_key)
            if existing is not None:
                logger.warning(
                    f"[{cache_key}][{request.url}] An error occurred, "
                    f"but using an existing cache: {error}"
                )
                return existing.to_response(request)

        raise error

    async def on_response(
        self,
        request: httpx.Request,
        response: httpx.Response,
        options: Optional[CacheOptions] = None,
    ) -> httpx.Response:
        """
        Handle a response whose body has been read.

        Store errors propagate to the caller.
        """
        request_options = self.options_for_request(request, options)
        store = self.store_for(request_options)

        if CacheResult.from_extensions(response.extensions).is_from_cache:
            return response
        if not request_options.is_cached:
            return response

        directives = parse_cache_control(response.headers.get_list("cache-control"))
        max_age = parse_max_age(directives)

        if max_age == 0:
            logger.debug(
                f"[{request.url}] Not caching response because server wants it uncached"
            )
            return response

        cache_key = resolve_cache_key(request_options, request)
        now = self._clock()
        if max_age is not None:
            expiry = now + max_age
        else:
            expiry = now + request_options.expiry_seconds

        if response.status_code == httpx.codes.NOT_MODIFIED:
            existing = CacheEntry.from_request(request, cache_key) or await store.get(
                cache_key
            )
            if existing is None:
                logger.debug(
                    f"[{cache_key}][{request.url}] Not modified, but no cache to revalidate"
                )
                return response

            await store.update_expiry(cache_key, expiry)
            existing.expiry = expiry

            logger.debug(
                f"[{cache_key}][{request.url}] Not modified. Using existing response from "
                f"{existing.downloaded_at} now expires at {existing.expiry}"
            )
            return existing.to_response(request)

        if is_valid_http_status_code(response.status_code):
            entry = CacheEntry.from_response(
                cache_key,
                response,
                expiry,
                request_options.priority,
                downloaded_at=now,
            )
            logger.debug(
                f"[{cache_key}][{request.url}] Creating a new cache entry that expires on {expiry}"
            )
            await store.set(entry)

        return response


def create_cache_interceptor(
    options: Optional[CacheOptions] = None,
    store: Optional[CacheStore] = None,
    clock: Optional[Callable[[], float]] = None,
) -> CacheInterceptor:
    """Create a cache interceptor instance."""
    return CacheInterceptor(options, store, clock)
