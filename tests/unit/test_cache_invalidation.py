"""Cache invalidation tests: key builders, Redis and HTTP invalidators."""

import fnmatch
import logging
from unittest.mock import AsyncMock

import httpx
import pytest

from access_admin.core.config import Settings
from access_admin.infrastructure.cache import (
    CacheService,
    HttpCacheInvalidator,
    NullCacheInvalidator,
    RedisCacheInvalidator,
    create_cache_invalidator,
)
from access_admin.infrastructure.cache.keys import (
    all_user_access_pattern,
    user_access_key,
    user_access_pattern,
)


class _FakePipeline:
    def __init__(self, redis: "_FakeRedis") -> None:
        self.redis = redis
        self.pending: list[str] = []

    async def __aenter__(self) -> "_FakePipeline":
        return self

    async def __aexit__(self, *exc) -> None:
        return None

    def unlink(self, *keys: str) -> None:
        self.pending.extend(keys)

    async def execute(self) -> list[int]:
        removed = [k for k in self.pending if k in self.redis.keys]
        self.redis.keys.difference_update(removed)
        return [len(removed)]


class _FakeRedis:
    """Just enough of redis.asyncio.Redis for delete and SCAN/UNLINK."""

    def __init__(self, keys: set[str]) -> None:
        self.keys = set(keys)

    async def delete(self, key: str) -> int:
        existed = key in self.keys
        self.keys.discard(key)
        return int(existed)

    async def scan_iter(self, match: str):
        for key in sorted(self.keys):
            if fnmatch.fnmatchcase(key, match):
                yield key

    def pipeline(self, transaction: bool = True) -> _FakePipeline:
        return _FakePipeline(self)


def test_key_builders() -> None:
    assert user_access_key("u1") == "user_access:u1"
    assert user_access_pattern("u1") == "user_access:u1:*"
    assert all_user_access_pattern() == "user_access:*"


@pytest.mark.parametrize("bad", ["", "a:b"])
def test_user_access_key_rejects_bad_ids(bad: str) -> None:
    with pytest.raises(ValueError):
        user_access_key(bad)


@pytest.fixture
def redis_keys() -> set[str]:
    return {
        "user_access:u1",
        "user_access:u1:app-1",
        "user_access:u1:app-2",
        "user_access:u2",
        "other:u1",
    }


async def test_redis_invalidate_user(redis_keys) -> None:
    fake = _FakeRedis(redis_keys)
    invalidator = RedisCacheInvalidator(CacheService(redis_client=fake, settings=Settings()))

    await invalidator.invalidate_user("u1")

    assert fake.keys == {"user_access:u2", "other:u1"}


async def test_redis_invalidate_all(redis_keys) -> None:
    fake = _FakeRedis(redis_keys)
    invalidator = RedisCacheInvalidator(CacheService(redis_client=fake, settings=Settings()))

    await invalidator.invalidate_all()

    assert fake.keys == {"other:u1"}


async def test_redis_invalidate_user_with_unsafe_id_is_skipped(redis_keys, caplog) -> None:
    fake = _FakeRedis(redis_keys)
    invalidator = RedisCacheInvalidator(CacheService(redis_client=fake, settings=Settings()))

    with caplog.at_level(logging.WARNING):
        await invalidator.invalidate_user("u1:*")

    assert fake.keys == redis_keys
    assert "Skipping cache invalidation" in caplog.text


async def test_cache_service_unavailable_deletes_nothing() -> None:
    cache = CacheService(settings=Settings())

    assert cache.is_available() is False
    assert await cache.delete("user_access:u1") is False
    assert await cache.delete_pattern("user_access:*") == 0


async def test_http_invalidator_posts_clear_paths() -> None:
    seen: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path))
        return httpx.Response(200, json={"status": "ok"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        invalidator = HttpCacheInvalidator(client, "http://consumer.local/")
        await invalidator.invalidate_user("u1")
        await invalidator.invalidate_all()

    assert seen == [
        ("POST", "/api/v1/admin/clearSingleUserCache/u1"),
        ("POST", "/api/v1/admin/clearAllUsersCache"),
    ]


@pytest.mark.parametrize("failure", ["status", "transport"])
async def test_http_invalidator_failures_are_logged_not_raised(failure, caplog) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if failure == "transport":
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(503)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with caplog.at_level(logging.WARNING):
            await HttpCacheInvalidator(client, "http://consumer.local").invalidate_user("u1")

    assert "Cache invalidation request" in caplog.text


async def test_null_invalidator_is_a_no_op() -> None:
    invalidator = NullCacheInvalidator()
    await invalidator.invalidate_user("u1")
    await invalidator.invalidate_all()


def test_create_cache_invalidator_selection() -> None:
    cache = CacheService(redis_client=_FakeRedis(set()), settings=Settings())
    client = httpx.AsyncClient()

    assert isinstance(create_cache_invalidator("none"), NullCacheInvalidator)
    assert isinstance(create_cache_invalidator("redis", cache=cache), RedisCacheInvalidator)
    assert isinstance(create_cache_invalidator("redis"), NullCacheInvalidator)
    assert isinstance(
        create_cache_invalidator("http", http_client=client, base_url="http://c"),
        HttpCacheInvalidator,
    )
    assert isinstance(create_cache_invalidator("http", http_client=client), NullCacheInvalidator)


async def test_redis_invalidator_calls_cache_service() -> None:
    cache = AsyncMock(spec=CacheService)

    await RedisCacheInvalidator(cache).invalidate_user("u9")

    cache.delete.assert_awaited_once_with("user_access:u9")
    cache.delete_pattern.assert_awaited_once_with("user_access:u9:*")
