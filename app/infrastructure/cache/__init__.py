"""Cache: Redis service and cache key utilities.

Used by the cache-aside query service and the invalidation coordinator.
Key format is in keys.py.
"""

from app.infrastructure.cache.cache_protocol import CacheHealth, CacheProtocol
from app.infrastructure.cache.keys import (
    entity_key,
    entity_prefix,
    list_key,
    list_prefix,
)
from app.infrastructure.cache.redis_cache import CacheService

__all__ = [
    "CacheHealth",
    "CacheProtocol",
    "CacheService",
    "entity_key",
    "entity_prefix",
    "list_key",
    "list_prefix",
]
