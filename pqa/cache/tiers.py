"""Answer cache: Redis when configured and reachable, else an in-process TTL map.

The backend is chosen once, at construction. A failed Redis connection means
the in-process map serves the whole process lifetime; there is no per-call
fallback. Backend errors on get/set are logged and treated as a miss / no-op.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import timedelta
from typing import Protocol

import redis

from pqa.config import get_settings

logger = logging.getLogger(__name__)


class CacheBackend(Protocol):
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str, ttl_seconds: int) -> None: ...


# ---------------------------------------------------------------------------
# Redis implementation
# ---------------------------------------------------------------------------

class RedisCacheBackend:
    """String cache in Redis; expiry enforced by Redis (SET ... EX)."""

    name = "redis"

    def __init__(self, url: str, connect_timeout: float = 2.0, socket_timeout: float = 2.0):
        self._client = redis.Redis.from_url(
            url,
            decode_responses=True,
            socket_connect_timeout=connect_timeout,
            socket_timeout=socket_timeout,
        )
        self._client.ping()

    def get(self, key: str) -> str | None:
        return self._client.get(key)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._client.set(key, value, ex=ttl_seconds)


# ---------------------------------------------------------------------------
# In-process implementation (fallback when no Redis)
# ---------------------------------------------------------------------------

class MemoryCacheBackend:
    """Thread-safe dict with monotonic-clock expiry.

    Expired entries are dropped on read, and swept on write once the earliest
    known expiry has passed.
    """

    name = "memory"

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, tuple[float, str]] = {}
        self._next_expiry = float("inf")

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def _prune_expired(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for k in expired:
            del self._entries[k]
        self._next_expiry = min((e for e, _ in self._entries.values()), default=float("inf"))

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            now = self._clock()
            if now >= self._next_expiry:
                self._prune_expired(now)
            expires_at = now + ttl_seconds
            self._entries[key] = (expires_at, value)
            self._next_expiry = min(self._next_expiry, expires_at)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# ---------------------------------------------------------------------------
# Tier
# ---------------------------------------------------------------------------

def _ttl_seconds(ttl: timedelta | float | int) -> int:
    seconds = ttl.total_seconds() if isinstance(ttl, timedelta) else float(ttl)
    return max(1, int(seconds))


class CacheTier:
    """Best-effort get/set over the backend selected at construction."""

    def __init__(
        self,
        redis_url: str | None = None,
        *,
        connect_timeout: float = 2.0,
        socket_timeout: float = 2.0,
        backend: CacheBackend | None = None,
    ):
        if backend is not None:
            self._backend = backend
        else:
            self._backend = self._select_backend(redis_url, connect_timeout, socket_timeout)

    @staticmethod
    def _select_backend(
        redis_url: str | None,
        connect_timeout: float,
        socket_timeout: float,
    ) -> CacheBackend:
        if redis_url:
            try:
                backend = RedisCacheBackend(redis_url, connect_timeout, socket_timeout)
                logger.info("Using Redis answer cache")
                return backend
            except (redis.RedisError, ValueError, OSError) as e:
                logger.warning("Failed to connect to Redis (%s), falling back to in-memory cache", e)
        else:
            logger.info("Using in-memory answer cache (REDIS_CONNECTION not set)")
        return MemoryCacheBackend()

    @property
    def backend_name(self) -> str:
        return getattr(self._backend, "name", type(self._backend).__name__)

    def get(self, key: str) -> str | None:
        try:
            return self._backend.get(key)
        except Exception as e:
            logger.warning("Cache get failed for %s: %s", key, e)
            return None

    def set(self, key: str, value: str, ttl: timedelta | float | int) -> None:
        try:
            self._backend.set(key, value, _ttl_seconds(ttl))
        except Exception as e:
            logger.warning("Cache set failed for %s: %s", key, e)


def draft_key(query: str) -> str:
    """Key for the raw query text (checked before extraction)."""
    return f"product:{query.strip().lower()}"


def canonical_key(product: str, attribute: str) -> str:
    """Key for a resolved (product, attribute) pair."""
    return f"product:{product.strip().lower()}|attribute:{attribute.strip().lower()}"


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

_cache: CacheTier | None = None
_cache_lock = threading.Lock()


def get_cache_tier() -> CacheTier:
    """Return the process-wide cache tier (backend fixed on first call)."""
    global _cache
    if _cache is not None:
        return _cache
    with _cache_lock:
        if _cache is None:
            settings = get_settings()
            _cache = CacheTier(
                settings.redis_connection,
                connect_timeout=settings.cache_timeout_s,
                socket_timeout=settings.cache_timeout_s,
            )
    return _cache
