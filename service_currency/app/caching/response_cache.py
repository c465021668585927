"""
Response cache for upstream currency payloads.
"""

import json
import math
import time
from typing import Any, Callable, Dict, Optional, Protocol, Tuple

import redis.asyncio as redis

from shared.logging import get_logger


class CacheStore(Protocol):
    """Key-value store with absolute expiry used behind :class:`ResponseCache`."""

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str, expires_at: float) -> None:
        ...

    async def ping(self) -> bool:
        ...

    async def close(self) -> None:
        ...


class RedisCacheStore:
    """Redis-backed store; expiry is enforced by Redis via ``SET ... EXAT``."""

    def __init__(self, redis_url: str, client: Optional[redis.Redis] = None):
        self.redis_url = redis_url
        self._redis = client if client is not None else redis.from_url(
            redis_url,
            encoding="utf-8",
            decode_responses=True,
        )

    async def get(self, key: str) -> Optional[str]:
        return await self._redis.get(key)

    async def set(self, key: str, value: str, expires_at: float) -> None:
        await self._redis.set(key, value, exat=math.ceil(expires_at))

    async def ping(self) -> bool:
        return bool(await self._redis.ping())

    async def close(self) -> None:
        await self._redis.aclose()


class MemoryCacheStore:
    """In-process store for local runs and tests.

    Entries whose expiry is at or before ``clock()`` are treated as absent.
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at <= self._clock():
            self._entries.pop(key, None)
            return None
        return value

    async def set(self, key: str, value: str, expires_at: float) -> None:
        self._entries[key] = (value, expires_at)

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class ResponseCache:
    """JSON response cache in front of a :class:`CacheStore`.

    The cache is an optimization only: store failures are logged and
    reported as misses (``get``) or unsuccessful writes (``set``).
    """

    def __init__(self, store: CacheStore):
        self.store = store
        self.logger = get_logger("currency.cache")

    async def get(self, key: str) -> Optional[Any]:
        """Return the cached value for ``key`` or ``None`` on miss."""
        try:
            cached_data = await self.store.get(key)
            if cached_data is None:
                return None
            return json.loads(cached_data)
        except Exception as exc:
            self.logger.error("Cache fetch error", key=key, error=str(exc))
            return None

    async def set(self, key: str, value: Any, expires_at: float) -> bool:
        """Store ``value`` under ``key`` until the absolute ``expires_at`` timestamp."""
        try:
            await self.store.set(key, json.dumps(value), expires_at)
            self.logger.debug("Cached value", key=key, expires_at=expires_at)
            return True
        except Exception as exc:
            self.logger.error("Cache set error", key=key, error=str(exc))
            return False

    async def ping(self) -> bool:
        try:
            return await self.store.ping()
        except Exception as exc:
            self.logger.error("Cache ping error", error=str(exc))
            return False

    async def close(self) -> None:
        await self.store.close()


def create_cache_store(backend: str, redis_url: str) -> CacheStore:
    """Build the configured cache store backend."""
    if backend == "memory":
        return MemoryCacheStore()
    if backend == "redis":
        return RedisCacheStore(redis_url)
    raise ValueError(f"Unsupported cache backend: {backend}")
