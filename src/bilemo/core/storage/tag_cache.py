"""Read-through cache with tag-based invalidation.

Values are JSON-compatible structures. Every entry is stored with a set of
tags; invalidating a tag removes every entry that carries it, whatever its
key. Redis is used when configured and reachable, with an in-memory
fallback.
"""

from __future__ import annotations

import copy
import json
import threading
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from cachetools import TTLCache
from loguru import logger

from src.bilemo.runtime.config.config_data import CacheConfig

Producer = Callable[[], Awaitable[Any]]

_MISSING = object()


class TagAwareCache(ABC):
    """Abstract interface for tagged cache backends."""

    async def get(self, key: str, tags: Iterable[str], producer: Producer) -> Any:
        """Return the cached value for ``key``, computing and storing it on a miss.

        Args:
            key: Cache key of the value
            tags: Tags attached to the value when it is stored
            producer: Coroutine function computing the value on a miss

        Returns:
            The cached or freshly produced value
        """
        value = await self.fetch(key)
        if value is not _MISSING:
            logger.debug("Cache hit for {}", key)
            return value

        logger.debug("Cache miss for {}", key)
        value = await producer()
        await self.store(key, value, list(tags))
        return value

    @abstractmethod
    async def fetch(self, key: str) -> Any:
        """Return the stored value, or the ``_MISSING`` sentinel."""

    @abstractmethod
    async def store(self, key: str, value: Any, tags: list[str]) -> None:
        """Store ``value`` under ``key`` and index it by every tag."""

    @abstractmethod
    async def invalidate_tags(self, tags: Iterable[str]) -> int:
        """Remove every entry carrying any of ``tags``.

        Returns:
            Number of entries removed
        """

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove a single entry."""

    @abstractmethod
    async def clear(self) -> None:
        """Remove every entry."""

    @abstractmethod
    async def ping(self) -> bool:
        """Check if the backend is healthy."""

    @property
    def backend(self) -> str:
        return type(self).__name__


class InMemoryTagAwareCache(TagAwareCache):
    """Process-local cache on top of ``cachetools.TTLCache``.

    Values are stored as deep copies so callers can never mutate a cached
    page in place.
    """

    def __init__(self, ttl_seconds: int = 3600, max_entries: int = 1024) -> None:
        self._entries: TTLCache[str, Any] = TTLCache(maxsize=max_entries, ttl=ttl_seconds)
        self._tags: dict[str, set[str]] = {}
        self._lock = threading.Lock()

    async def fetch(self, key: str) -> Any:
        with self._lock:
            value = self._entries.get(key, _MISSING)
        if value is _MISSING:
            return _MISSING
        return copy.deepcopy(value)

    async def store(self, key: str, value: Any, tags: list[str]) -> None:
        # Round trip through JSON so only serializable values are accepted
        stored = json.loads(json.dumps(value))
        with self._lock:
            self._entries[key] = stored
            for tag in tags:
                # Drop keys the TTLCache already evicted or expired
                live = {k for k in self._tags.get(tag, ()) if k in self._entries}
                live.add(key)
                self._tags[tag] = live

    async def invalidate_tags(self, tags: Iterable[str]) -> int:
        removed = 0
        with self._lock:
            for tag in tags:
                for key in self._tags.pop(tag, set()):
                    if self._entries.pop(key, _MISSING) is not _MISSING:
                        removed += 1
        return removed

    async def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    async def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._tags.clear()

    async def ping(self) -> bool:
        """In-memory cache is always available."""
        return True


class RedisTagAwareCache(TagAwareCache):
    """Redis-backed cache.

    Entries live under ``{prefix}:entry:{key}`` and every tag is a Redis
    set ``{prefix}:tag:{tag}`` holding the keys it labels.
    """

    def __init__(self, redis_client, ttl_seconds: int = 3600, prefix: str = "bilemo") -> None:
        self._redis = redis_client
        self._ttl = ttl_seconds
        self._prefix = prefix

    def _entry_key(self, key: str) -> str:
        return f"{self._prefix}:entry:{key}"

    def _tag_key(self, tag: str) -> str:
        return f"{self._prefix}:tag:{tag}"

    async def fetch(self, key: str) -> Any:
        data = await self._redis.get(self._entry_key(key))
        if data is None:
            return _MISSING
        if isinstance(data, bytes):
            data = data.decode("utf-8")
        return json.loads(data)

    async def store(self, key: str, value: Any, tags: list[str]) -> None:
        entry_key = self._entry_key(key)
        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.set(entry_key, json.dumps(value), ex=self._ttl)
            for tag in tags:
                pipe.sadd(self._tag_key(tag), entry_key)
                pipe.expire(self._tag_key(tag), self._ttl)
            await pipe.execute()

    async def invalidate_tags(self, tags: Iterable[str]) -> int:
        # Remove only the members read above; entries stored meanwhile stay tagged
        members_by_tag: dict[str, list[str]] = {}
        for tag in tags:
            tag_key = self._tag_key(tag)
            members = await self._redis.smembers(tag_key)
            if members:
                members_by_tag[tag_key] = [
                    m.decode("utf-8") if isinstance(m, bytes) else m for m in members
                ]

        if not members_by_tag:
            return 0

        entry_keys = {key for keys in members_by_tag.values() for key in keys}
        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.delete(*entry_keys)
            for tag_key, members in members_by_tag.items():
                pipe.srem(tag_key, *members)
            results = await pipe.execute()

        return int(results[0])

    async def delete(self, key: str) -> None:
        await self._redis.delete(self._entry_key(key))

    async def clear(self) -> None:
        cursor = 0
        while True:
            cursor, batch = await self._redis.scan(
                cursor, match=f"{self._prefix}:*", count=100
            )
            if batch:
                await self._redis.delete(*batch)
            if cursor == 0:
                break

    async def ping(self) -> bool:
        try:
            await self._redis.ping()
            return True
        except Exception as e:
            logger.error("Redis cache ping failed: {}", e)
            return False


class NullTagCache(TagAwareCache):
    """Pass-through cache used when caching is disabled."""

    async def fetch(self, key: str) -> Any:
        return _MISSING

    async def store(self, key: str, value: Any, tags: list[str]) -> None:
        return None

    async def invalidate_tags(self, tags: Iterable[str]) -> int:
        return 0

    async def delete(self, key: str) -> None:
        return None

    async def clear(self) -> None:
        return None

    async def ping(self) -> bool:
        return True


async def build_tag_cache(config: CacheConfig, redis_service=None) -> TagAwareCache:
    """Pick the cache backend: Redis when reachable, in-memory otherwise."""
    if not config.enabled:
        logger.info("Collection cache disabled")
        return NullTagCache()

    redis_client = redis_service.get_client() if redis_service is not None else None
    if redis_client is not None:
        cache = RedisTagAwareCache(
            redis_client, ttl_seconds=config.ttl_seconds, prefix=config.key_prefix
        )
        if await cache.ping():
            logger.info("Collection cache: Redis connected")
            return cache
        logger.warning("Redis unavailable, using in-memory collection cache")

    return InMemoryTagAwareCache(
        ttl_seconds=config.ttl_seconds, max_entries=config.max_entries
    )
