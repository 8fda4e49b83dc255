"""Pytest configuration for cache_interceptor tests."""
import pytest

from cache_interceptor import (
    CacheInterceptor,
    CacheOptions,
    MemoryCacheStore,
)


T0 = 1_700_000_000.0


class FakeClock:
    """Controllable time source returning Unix timestamps."""

    def __init__(self, now: float = T0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Fake clock starting at T0."""
    return FakeClock()


@pytest.fixture
async def store(clock):
    """Memory store sharing the fake clock."""
    s = MemoryCacheStore(max_entries=100, clock=clock)
    yield s
    await s.close()


@pytest.fixture
def interceptor(store, clock) -> CacheInterceptor:
    """Interceptor with a five minute default expiry."""
    return CacheInterceptor(CacheOptions(expiry=300), store, clock)

