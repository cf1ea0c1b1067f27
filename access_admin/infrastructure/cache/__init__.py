"""Consumer cache invalidation (Redis or HTTP)."""

from access_admin.infrastructure.cache.invalidation import (
    HttpCacheInvalidator,
    NullCacheInvalidator,
    RedisCacheInvalidator,
    create_cache_invalidator,
)
from access_admin.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheService",
    "HttpCacheInvalidator",
    "NullCacheInvalidator",
    "RedisCacheInvalidator",
    "create_cache_invalidator",
]
