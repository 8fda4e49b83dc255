"""
Factory functions for creating cache interceptor transports.
"""
from typing import Callable, Optional

import httpx

from cache_interceptor import CacheOptions, CacheStore

from .transport import CacheInterceptorTransport


def compose_transport(
    base: httpx.AsyncBaseTransport,
    *wrappers: Callable[[httpx.AsyncBaseTransport], httpx.AsyncBaseTransport],
) -> httpx.AsyncBaseTransport:
    """
    Compose multiple transport wrappers together.

    Args:
        base: The base transport
        wrappers: Transport wrapper functions to apply, innermost first

    Returns:
        Composed transport

    Example:
        base = httpx.AsyncHTTPTransport()
        transport = compose_transport(
            base,
            lambda inner: CacheInterceptorTransport(inner),
        )
    """
    transport = base
    for wrapper in wrappers:
        transport = wrapper(transport)
    return transport


def create_cache_interceptor_transport(
    inner: Optional[httpx.AsyncBaseTransport] = None,
    *,
    options: Optional[CacheOptions] = None,
    store: Optional[CacheStore] = None,
    clock: Optional[Callable[[], float]] = None,
) -> CacheInterceptorTransport:
    """
    Create a cache interceptor transport.

    Args:
        inner: The inner transport (defaults to AsyncHTTPTransport)
        options: Default cache options
        store: Global cache store
        clock: Time source returning Unix timestamps

    Returns:
        CacheInterceptorTransport instance
    """
    if inner is None:
        inner = httpx.AsyncHTTPTransport()

    return CacheInterceptorTransport(
        inner,
        options=options,
        store=store,
        clock=clock,
    )


def create_cache_interceptor_client(
    *,
    inner: Optional[httpx.AsyncBaseTransport] = None,
    options: Optional[CacheOptions] = None,
    store: Optional[CacheStore] = None,
    clock: Optional[Callable[[], float]] = None,
    base_url: Optional[str] = None,
    **client_kwargs,
) -> httpx.AsyncClient:
    """
    Create an httpx.AsyncClient with cache interceptor capabilities.

    Args:
        inner: The inner transport (defaults to AsyncHTTPTransport)
        options: Default cache options
        store: Global cache store
        clock: Time source returning Unix timestamps
        base_url: Base URL for the client
        **client_kwargs: Additional arguments for httpx.AsyncClient

    Returns:
        AsyncClient with cache interceptor transport
    """
    transport = create_cache_interceptor_transport(
        inner,
        options=options,
        store=store,
        clock=clock,
    )

    return httpx.AsyncClient(
        transport=transport,
        base_url=base_url or "",
        **client_kwargs,
    )
