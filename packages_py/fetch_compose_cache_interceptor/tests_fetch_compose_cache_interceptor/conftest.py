"""Pytest configuration and fixtures for fetch_compose_cache_interceptor tests."""
from typing import AsyncGenerator, List, Optional

import httpx
import pytest

from cache_interceptor import MemoryCacheStore, create_memory_cache_store
from fetch_compose_cache_interceptor import CacheInterceptorTransport


T0 = 1_700_000_000.0


class FakeClock:
    """Controllable time source returning Unix timestamps."""

    def __init__(self, now: float = T0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CacheableMockAsyncTransport(httpx.AsyncBaseTransport):
    """Mock async transport that returns cacheable responses and honours validators."""

    def __init__(
        self,
        response_status: int = 200,
        response_content: bytes = b'{"data": "cached"}',
        max_age: Optional[int] = 60,
        etag: Optional[str] = None,
        last_modified: Optional[str] = None,
    ) -> None:
        self.response_status = response_status
        self.response_content = response_content
        self.max_age = max_age
        self.etag = etag
        self.last_modified = last_modified
        self.requests: List[httpx.Request] = []
        self.closed = False

    def _cache_headers(self) -> dict:
        headers = {}
        if self.max_age is not None:
            headers["cache-control"] = f"max-age={self.max_age}"
        if self.etag:
            headers["etag"] = self.etag
        if self.last_modified:
            headers["last-modified"] = self.last_modified
        return headers

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Handle the async request, answering 304 when a validator matches."""
        self.requests.append(request)

        if_none_match = request.headers.get("if-none-match")
        if_modified_since = request.headers.get("if-modified-since")

        if (self.etag and if_none_match == self.etag) or (
            self.last_modified and if_modified_since == self.last_modified
        ):
            return httpx.Response(
                status_code=304,
                headers=self._cache_headers(),
                content=b"",
            )

        headers = {"content-type": "application/json", **self._cache_headers()}
        return httpx.Response(
            status_code=self.response_status,
            headers=headers,
            content=self.response_content,
        )

    async def aclose(self) -> None:
        """Close the transport."""
        self.closed = True


class ErrorMockAsyncTransport(httpx.AsyncBaseTransport):
    """Mock async transport that raises errors."""

    def __init__(self, error: Exception) -> None:
        self.error = error
        self.requests: List[httpx.Request] = []

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Raise the configured error."""
        self.requests.append(request)
        raise self.error

    async def aclose(self) -> None:
        """Close the transport."""
        pass


class SwitchableMockAsyncTransport(httpx.AsyncBaseTransport):
    """Delegates to a healthy transport until told to fail."""

    def __init__(self, healthy: httpx.AsyncBaseTransport, error: Exception) -> None:
        self.healthy = healthy
        self.error = error
        self.failing = False

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        if self.failing:
            raise self.error
        return await self.healthy.handle_async_request(request)

    async def aclose(self) -> None:
        await self.healthy.aclose()


@pytest.fixture
def clock() -> FakeClock:
    """Fake clock starting at T0."""
    return FakeClock()


@pytest.fixture
def cacheable_async_transport() -> CacheableMockAsyncTransport:
    """Create a cacheable mock async transport for testing."""
    return CacheableMockAsyncTransport(etag='"v1"')


@pytest.fixture
def memory_cache_store(clock) -> MemoryCacheStore:
    """Create a memory cache store for testing."""
    return create_memory_cache_store(clock=clock)


@pytest.fixture
async def cache_interceptor_transport(
    cacheable_async_transport: CacheableMockAsyncTransport,
    memory_cache_store: MemoryCacheStore,
    clock: FakeClock,
) -> AsyncGenerator[CacheInterceptorTransport, None]:
    """Create a cache interceptor transport for testing."""
    transport = CacheInterceptorTransport(
        cacheable_async_transport,
        store=memory_cache_store,
        clock=clock,
    )
    yield transport
    await transport.aclose()
