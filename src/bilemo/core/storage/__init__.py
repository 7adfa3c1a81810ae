"""Tagged cache abstractions for paginated collections."""

from .tag_cache import (
    InMemoryTagAwareCache,
    NullTagCache,
    RedisTagAwareCache,
    TagAwareCache,
    build_tag_cache,
)

__all__ = [
    "TagAwareCache",
    "InMemoryTagAwareCache",
    "RedisTagAwareCache",
    "NullTagCache",
    "build_tag_cache",
]
