"""
Profile lookups with a per-key TTL cache.

Architecture:
  - ProfileSource (protocol) defines the remote lookup
  - MockProfileSource returns test data for development
  - SupabaseProfileSource reads the ``profiles`` table over PostgREST
  - PROFILE_SOURCE_MOCK=true (default) selects the mock source
  - ProfileCache memoizes successful lookups per profile id

The cache evaluates staleness lazily on read. Concurrent misses for the
same id share one in-flight fetch. Failed fetches are never cached and
never retried here; retry policy belongs to the caller.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Protocol

import httpx
from cachetools import TTLCache

from moneyflow.config import settings

logger = logging.getLogger(__name__)

Profile = dict[str, Any]


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class RemoteFetchError(Exception):
    """Raised when the remote profile lookup fails."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Profile fetch failed for {key}: {reason}")


class ProfileNotFoundError(RemoteFetchError):
    """Raised when the profile store has no row for the requested id."""

    def __init__(self, key: str):
        super().__init__(key, "profile not found")


# ---------------------------------------------------------------------------
# Source protocol
# ---------------------------------------------------------------------------


class ProfileSource(Protocol):
    async def fetch_profile(self, key: str) -> Profile: ...


# ---------------------------------------------------------------------------
# Mock source (development / testing)
# ---------------------------------------------------------------------------

_MOCK_PROFILES: dict[str, Profile] = {
    "00000000-0000-0000-0000-000000000001": {
        "id": "00000000-0000-0000-0000-000000000001",
        "full_name": "Aminata Diallo",
        "phone": "+221771234567",
        "role": "user",
        "balance": 125000,
        "country": "Senegal",
        "is_verified": True,
        "avatar_url": None,
    },
    "00000000-0000-0000-0000-000000000002": {
        "id": "00000000-0000-0000-0000-000000000002",
        "full_name": "Jean-Paul Mbarga",
        "phone": "+237690123456",
        "role": "agent",
        "balance": 2500000,
        "country": "Cameroon",
        "is_verified": True,
        "avatar_url": None,
    },
    "00000000-0000-0000-0000-000000000003": {
        "id": "00000000-0000-0000-0000-000000000003",
        "full_name": "Fatou Ndiaye",
        "phone": "+221776543210",
        "role": "sub_admin",
        "balance": 0,
        "country": "Senegal",
        "is_verified": True,
        "avatar_url": None,
    },
}


class MockProfileSource:
    """Returns deterministic profiles. Unknown ids are reported as missing."""

    def __init__(self, profiles: dict[str, Profile] | None = None):
        self._profiles = _MOCK_PROFILES if profiles is None else profiles

    async def fetch_profile(self, key: str) -> Profile:
        record = self._profiles.get(key)
        if record is None:
            raise ProfileNotFoundError(key)
        return dict(record)


# ---------------------------------------------------------------------------
# Supabase source
# ---------------------------------------------------------------------------


class SupabaseProfileSource:
    """Reads one row of the ``profiles`` table via the PostgREST API."""

    def __init__(self, base_url: str, api_key: str, timeout: float = 10.0):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._timeout = timeout

    async def fetch_profile(self, key: str) -> Profile:
        url = f"{self._base_url}/rest/v1/profiles"
        headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
            "Accept": "application/json",
        }
        params = {"id": f"eq.{key}", "select": "*"}

        async with httpx.AsyncClient(timeout=self._timeout) as client:
            resp = await client.get(url, headers=headers, params=params)
            resp.raise_for_status()
            rows = resp.json()

        if not rows:
            raise ProfileNotFoundError(key)
        if len(rows) > 1:
            raise RemoteFetchError(key, f"expected one row, got {len(rows)}")
        return rows[0]


# Module-level source override (for tests)
_source: ProfileSource | None = None


def get_profile_source() -> ProfileSource:
    """Return the configured profile source."""
    if _source is not None:
        return _source
    if settings.PROFILE_SOURCE_MOCK:
        return MockProfileSource()
    return SupabaseProfileSource(
        base_url=settings.SUPABASE_URL,
        api_key=settings.SUPABASE_ANON_KEY,
        timeout=settings.PROFILE_FETCH_TIMEOUT_SECONDS,
    )


def set_profile_source(source: ProfileSource | None) -> None:
    """Override the profile source (for testing)."""
    global _source
    _source = source


async def fetch_from_source(key: str) -> Profile:
    """Fetch through whichever source is configured at call time."""
    return await get_profile_source().fetch_profile(key)


# ---------------------------------------------------------------------------
# ProfileCache
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CacheEntry:
    key: str
    payload: Profile
    fetched_at: float


class ProfileCache:
    """
    Memoize the latest successful profile lookup per key for ``ttl_seconds``.

    ``fetch`` is an async callable taking the key; ``clock`` returns the
    current time in seconds and defaults to ``time.monotonic``.
    """

    def __init__(
        self,
        fetch: Callable[[str], Awaitable[Profile]],
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
        maxsize: int | None = None,
    ):
        self._fetch = fetch
        self.ttl_seconds = (
            settings.PROFILE_CACHE_TTL_SECONDS if ttl_seconds is None else ttl_seconds
        )
        self._clock = clock
        # TTLCache evaluates expiry lazily against the injected clock
        self._entries: TTLCache = TTLCache(
            maxsize=settings.PROFILE_CACHE_MAXSIZE if maxsize is None else maxsize,
            ttl=self.ttl_seconds,
            timer=clock,
        )
        self._inflight: dict[str, asyncio.Task] = {}

    def __len__(self) -> int:
        self._entries.expire()
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        """True if ``key`` has an entry younger than the TTL."""
        return key in self._entries

    async def get_profile(self, key: str, force_refresh: bool = False) -> Profile:
        """
        Return the profile for ``key``.

        Served from cache when an entry is younger than the TTL and
        ``force_refresh`` is false; otherwise fetched once and stored.
        Raises ``RemoteFetchError`` if the fetch fails.
        """
        entry = None if force_refresh else self._entries.get(key)
        if entry is not None:
            logger.debug("Profile cache hit for %s", key)
            return entry.payload

        task = self._inflight.get(key)
        if task is None:
            logger.info("Fetching profile %s from source", key)
            task = asyncio.ensure_future(self._load(key))
            self._inflight[key] = task
            task.add_done_callback(lambda t, key=key: self._forget(key, t))
        else:
            logger.debug("Joining in-flight fetch for %s", key)

        # shield: one cancelled caller must not cancel the shared fetch
        return await asyncio.shield(task)

    def invalidate(self, key: str | None = None) -> None:
        """Drop the entry for ``key``, or every entry when ``key`` is None."""
        if key is None:
            logger.info("Clearing profile cache (%d entries)", len(self._entries))
            self._entries.clear()
            self._inflight.clear()
            return

        logger.info("Invalidating cached profile %s", key)
        self._entries.pop(key, None)
        self._inflight.pop(key, None)

    async def _load(self, key: str) -> Profile:
        try:
            payload = await self._fetch(key)
        except RemoteFetchError as exc:
            logger.warning("Profile fetch failed for %s: %s", key, exc.reason)
            raise
        except Exception as exc:
            logger.error("Profile fetch error for %s: %s", key, exc)
            raise RemoteFetchError(key, str(exc) or type(exc).__name__) from exc

        # An invalidate() while this fetch was running detaches it: the
        # waiters still get the payload but it is not stored.
        if self._inflight.get(key) is asyncio.current_task():
            self._entries[key] = CacheEntry(key, payload, self._clock())
        return payload

    def _forget(self, key: str, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        if not task.cancelled():
            # mark the exception retrieved; every waiter re-raises it
            task.exception()


# Module-level cache used by the API (override via set_profile_cache in tests)
_cache: ProfileCache | None = None


def get_profile_cache() -> ProfileCache:
    """FastAPI dependency that provides the shared profile cache."""
    global _cache
    if _cache is None:
        _cache = ProfileCache(fetch_from_source)
    return _cache


def set_profile_cache(cache: ProfileCache | None) -> None:
    """Replace the shared profile cache (for testing)."""
    global _cache
    _cache = cache
