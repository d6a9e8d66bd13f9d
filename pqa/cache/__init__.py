"""Answer cache: Redis or in-process TTL map, fixed at startup."""

from pqa.cache.tiers import (
    CacheTier,
    MemoryCacheBackend,
    RedisCacheBackend,
    canonical_key,
    draft_key,
    get_cache_tier,
)

__all__ = [
    "CacheTier",
    "MemoryCacheBackend",
    "RedisCacheBackend",
    "canonical_key",
    "draft_key",
    "get_cache_tier",
]
