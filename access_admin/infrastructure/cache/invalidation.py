"""Cache invalidators: tell the consumer service its cached access is stale.

Invalidation runs after the grant or catalog transaction has committed.
Failures are logged as warnings and never raised; a stale consumer cache
never reverses a committed change.
"""

import logging

import httpx

from access_admin.core.constants import CACHE_CLEAR_ALL_PATH, CACHE_CLEAR_USER_PATH
from access_admin.infrastructure.cache.keys import (
    all_user_access_pattern,
    user_access_key,
    user_access_pattern,
)
from access_admin.infrastructure.cache.redis_cache import CacheService

logger = logging.getLogger(__name__)


class NullCacheInvalidator:
    """No consumer cache configured."""

    async def invalidate_user(self, user_id: str) -> None:
        logger.debug("Cache invalidation disabled; skipping user %s", user_id)

    async def invalidate_all(self) -> None:
        logger.debug("Cache invalidation disabled; skipping full clear")


class RedisCacheInvalidator:
    """Deletes the consumer's user_access keys directly in the shared Redis."""

    def __init__(self, cache: CacheService) -> None:
        self.cache = cache

    async def invalidate_user(self, user_id: str) -> None:
        try:
            await self.cache.delete(user_access_key(user_id))
            await self.cache.delete_pattern(user_access_pattern(user_id))
        except ValueError as e:
            logger.warning("Skipping cache invalidation for user %r: %s", user_id, e)

    async def invalidate_all(self) -> None:
        await self.cache.delete_pattern(all_user_access_pattern())


class HttpCacheInvalidator:
    """Calls the consumer service's cache-clear endpoints."""

    def __init__(self, http_client: httpx.AsyncClient, base_url: str) -> None:
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    async def _post(self, path: str) -> None:
        url = f"{self.base_url}{path}"
        try:
            response = await self.http_client.post(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Cache invalidation request to %s failed: %s", url, e)

    async def invalidate_user(self, user_id: str) -> None:
        await self._post(CACHE_CLEAR_USER_PATH.format(user_id=user_id))

    async def invalidate_all(self) -> None:
        await self._post(CACHE_CLEAR_ALL_PATH)


def create_cache_invalidator(
    backend: str,
    *,
    cache: CacheService | None = None,
    http_client: httpx.AsyncClient | None = None,
    base_url: str | None = None,
):
    """Return the invalidator for backend ('none', 'redis' or 'http').

    A backend whose collaborator is missing falls back to NullCacheInvalidator.
    """
    if backend == "redis":
        if cache is None:
            logger.warning("Redis invalidation requested but Redis is not enabled")
            return NullCacheInvalidator()
        return RedisCacheInvalidator(cache)
    if backend == "http":
        if http_client is None or not base_url:
            logger.warning("HTTP invalidation requested without a client or URL")
            return NullCacheInvalidator()
        return HttpCacheInvalidator(http_client, base_url)
    return NullCacheInvalidator()
