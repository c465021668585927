"""
Currency service caching package.

Provides the order-insensitive cache key builder and the response cache
used to serve repeated currency queries without calling the upstream API.
Entries expire by TTL only; there is no explicit invalidation.
"""

from .cache_key import normalize
from .response_cache import (
    CacheStore,
    MemoryCacheStore,
    RedisCacheStore,
    ResponseCache,
    create_cache_store,
)

__all__ = [
    "normalize",
    "CacheStore",
    "MemoryCacheStore",
    "RedisCacheStore",
    "ResponseCache",
    "create_cache_store",
]
