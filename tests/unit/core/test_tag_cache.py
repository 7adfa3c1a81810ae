"""Tests for the tagged read-through cache backends."""

from unittest.mock import AsyncMock

import fakeredis.aioredis
import pytest

from src.bilemo.core.services import RedisService
from src.bilemo.core.storage import (
    InMemoryTagAwareCache,
    NullTagCache,
    RedisTagAwareCache,
    build_tag_cache,
)
from src.bilemo.runtime.config.config_data import CacheConfig


@pytest.fixture
def fake_redis():
    return fakeredis.aioredis.FakeRedis(decode_responses=True)


@pytest.fixture(params=["memory", "redis"])
def cache(request, fake_redis):
    if request.param == "memory":
        return InMemoryTagAwareCache(ttl_seconds=60)
    return RedisTagAwareCache(fake_redis, ttl_seconds=60, prefix="test")


class TestReadThrough:
    @pytest.mark.asyncio
    async def test_miss_invokes_producer_and_stores(self, cache):
        producer = AsyncMock(return_value=[{"id": 1}])

        value = await cache.get("product_list_1_10", ["products"], producer)

        assert value == [{"id": 1}]
        producer.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_hit_skips_producer(self, cache):
        await cache.get("product_list_1_10", ["products"], AsyncMock(return_value=[{"id": 1}]))
        producer = AsyncMock(return_value=[{"id": 2}])

        value = await cache.get("product_list_1_10", ["products"], producer)

        assert value == [{"id": 1}]
        producer.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_list_is_cached(self, cache):
        await cache.get("product_list_9_10", ["products"], AsyncMock(return_value=[]))
        producer = AsyncMock(return_value=[{"id": 1}])

        assert await cache.get("product_list_9_10", ["products"], producer) == []
        producer.assert_not_awaited()


class TestInvalidation:
    @pytest.mark.asyncio
    async def test_invalidate_removes_every_tagged_entry(self, cache):
        for page in (1, 2):
            await cache.get(f"product_list_{page}_10", ["products"], AsyncMock(return_value=[page]))

        removed = await cache.invalidate_tags(["products"])

        assert removed == 2
        producer = AsyncMock(return_value=["fresh"])
        assert await cache.get("product_list_1_10", ["products"], producer) == ["fresh"]
        producer.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_invalidation_is_scoped_to_the_tag(self, cache):
        await cache.get("client_1_users_1_10", ["client_1"], AsyncMock(return_value=["a"]))
        await cache.get("client_2_users_1_10", ["client_2"], AsyncMock(return_value=["b"]))

        await cache.invalidate_tags(["client_1"])

        untouched = AsyncMock(return_value=["other"])
        assert await cache.get("client_2_users_1_10", ["client_2"], untouched) == ["b"]
        untouched.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_tag_is_noop(self, cache):
        assert await cache.invalidate_tags(["nothing"]) == 0

    @pytest.mark.asyncio
    async def test_delete_and_clear(self, cache):
        await cache.get("k1", ["t"], AsyncMock(return_value=1))
        await cache.get("k2", ["t"], AsyncMock(return_value=2))

        await cache.delete("k1")
        producer = AsyncMock(return_value=10)
        assert await cache.get("k1", ["t"], producer) == 10

        await cache.clear()
        producer = AsyncMock(return_value=20)
        assert await cache.get("k2", ["t"], producer) == 20


class TestInMemoryCache:
    @pytest.mark.asyncio
    async def test_cached_value_cannot_be_mutated_by_callers(self):
        cache = InMemoryTagAwareCache()
        value = await cache.get("k", [], AsyncMock(return_value=[{"id": 1}]))
        value[0]["id"] = 99

        assert await cache.get("k", [], AsyncMock()) == [{"id": 1}]

    @pytest.mark.asyncio
    async def test_tag_index_is_bounded_by_live_entries(self):
        cache = InMemoryTagAwareCache(ttl_seconds=60, max_entries=16)

        for page in range(1, 501):
            await cache.get(f"product_list_{page}_10", ["products"], AsyncMock(return_value=[page]))

        assert len(cache._tags["products"]) <= 16
        assert cache._tags["products"] <= set(cache._entries.keys())

    @pytest.mark.asyncio
    async def test_rejects_values_that_are_not_json(self):
        cache = InMemoryTagAwareCache()

        with pytest.raises(TypeError):
            await cache.get("k", [], AsyncMock(return_value={object()}))


class TestRedisCache:
    @pytest.mark.asyncio
    async def test_keys_are_namespaced_and_expire(self, fake_redis):
        cache = RedisTagAwareCache(fake_redis, ttl_seconds=30, prefix="bilemo")

        await cache.get("product_list_1_10", ["products"], AsyncMock(return_value=[1]))

        assert await fake_redis.exists("bilemo:entry:product_list_1_10")
        assert await fake_redis.sismember("bilemo:tag:products", "bilemo:entry:product_list_1_10")
        assert 0 < await fake_redis.ttl("bilemo:entry:product_list_1_10") <= 30

    @pytest.mark.asyncio
    async def test_invalidation_drops_tag_set(self, fake_redis):
        cache = RedisTagAwareCache(fake_redis, prefix="bilemo")
        await cache.get("product_list_1_10", ["products"], AsyncMock(return_value=[1]))

        await cache.invalidate_tags(["products"])

        assert not await fake_redis.exists("bilemo:tag:products")
        assert not await fake_redis.exists("bilemo:entry:product_list_1_10")

    @pytest.mark.asyncio
    async def test_entry_stored_during_invalidation_stays_tagged(self, fake_redis):
        cache = RedisTagAwareCache(fake_redis, prefix="bilemo")
        await cache.get("product_list_1_10", ["products"], AsyncMock(return_value=["old"]))
        read_members = fake_redis.smembers

        async def smembers_then_concurrent_store(key):
            members = await read_members(key)
            await cache.store("product_list_2_10", ["stale"], ["products"])
            return members

        fake_redis.smembers = smembers_then_concurrent_store
        await cache.invalidate_tags(["products"])
        fake_redis.smembers = read_members

        assert await fake_redis.sismember("bilemo:tag:products", "bilemo:entry:product_list_2_10")
        await cache.invalidate_tags(["products"])
        producer = AsyncMock(return_value=["fresh"])
        assert await cache.get("product_list_2_10", ["products"], producer) == ["fresh"]
        producer.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_ping(self, fake_redis):
        assert await RedisTagAwareCache(fake_redis).ping() is True


class TestNullCache:
    @pytest.mark.asyncio
    async def test_always_invokes_producer(self):
        cache = NullTagCache()
        producer = AsyncMock(return_value=[1])

        await cache.get("k", ["t"], producer)
        await cache.get("k", ["t"], producer)

        assert producer.await_count == 2


class TestBuildTagCache:
    @pytest.mark.asyncio
    async def test_disabled_cache_is_pass_through(self):
        cache = await build_tag_cache(CacheConfig(enabled=False))
        assert isinstance(cache, NullTagCache)

    @pytest.mark.asyncio
    async def test_in_memory_without_redis(self):
        cache = await build_tag_cache(CacheConfig(), RedisService())
        assert isinstance(cache, InMemoryTagAwareCache)

    @pytest.mark.asyncio
    async def test_redis_when_reachable(self, fake_redis):
        cache = await build_tag_cache(CacheConfig(), RedisService(client=fake_redis))
        assert isinstance(cache, RedisTagAwareCache)

    @pytest.mark.asyncio
    async def test_falls_back_to_memory_when_redis_is_down(self):
        client = AsyncMock()
        client.ping.side_effect = ConnectionError("down")

        cache = await build_tag_cache(CacheConfig(), RedisService(client=client))

        assert isinstance(cache, InMemoryTagAwareCache)
