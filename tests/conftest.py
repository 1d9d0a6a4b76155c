"""
Shared test fixtures for MoneyFlow Core.

Provides an async test client, a controllable clock, a counting profile
fetch double and a ProfileCache wired to both.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from moneyflow.services.profile_service import (
    MockProfileSource,
    ProfileCache,
    get_profile_cache,
    set_profile_source,
)


# --- Clock ---


class FakeClock:
    """Manually advanced clock returning seconds."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


# --- Fetch double ---


class CountingFetch:
    """Async fetch that records every call and serves MockProfileSource data."""

    def __init__(self, source=None):
        self.source = source or MockProfileSource()
        self.calls: list[str] = []
        self.error: Exception | None = None

    async def __call__(self, key: str) -> dict:
        self.calls.append(key)
        if self.error is not None:
            raise self.error
        return await self.source.fetch_profile(key)

    def count(self, key: str | None = None) -> int:
        if key is None:
            return len(self.calls)
        return self.calls.count(key)


@pytest.fixture
def fetch():
    return CountingFetch()


@pytest.fixture
def profile_cache(fetch, clock):
    """ProfileCache with a 60 second TTL, fake clock and counting fetch."""
    return ProfileCache(fetch, ttl_seconds=60, clock=clock)


@pytest.fixture(autouse=True)
def _use_mock_profile_source():
    """Ensure no test reaches a real profile store."""
    set_profile_source(MockProfileSource())
    yield
    set_profile_source(None)


# --- Dependency Override Helpers ---


@pytest_asyncio.fixture
async def client(profile_cache):
    """
    Async HTTP test client with get_profile_cache overridden to use the
    test cache.
    """
    from moneyflow.main import app

    app.dependency_overrides[get_profile_cache] = lambda: profile_cache

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
