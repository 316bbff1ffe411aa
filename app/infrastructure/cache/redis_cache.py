"""Redis-based lookaside cache service.

Provides async Redis get/set/delete with optional TTL and a health check.
Key format lives in app.infrastructure.cache.keys. Transport failures are
raised as CacheError after one reconnect attempt; callers decide whether to
degrade.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import redis.asyncio as redis

from app.core.config import Settings, get_settings
from app.infrastructure.cache.cache_protocol import CacheHealth
from app.infrastructure.exceptions import CacheError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def serialize(value: Any) -> str:
    """Strings are stored verbatim; everything else as JSON."""
    return value if isinstance(value, str) else json.dumps(value)


def deserialize(raw: str) -> Any:
    """JSON-parse a stored value, falling back to the raw string."""
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return raw


class CacheService:
    """Async Redis cache service.

    Holds one connection pool shared by all in-flight requests. Call
    connect() at startup and disconnect() at shutdown, or inject an already
    built client (tests use fakeredis).

    An owned client that cannot reach Redis is rebuilt on demand: after a
    failed connect, the next cache call past the retry interval
    (settings.redis_reconnect_interval_seconds) tries again, so the cache
    comes back without a restart. Calls in between fail fast with CacheError.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        settings: Settings | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize cache service.

        Args:
            redis_client: Optional Redis client for testing or DI.
            settings: Connection settings; defaults to get_settings().
            clock: Monotonic time source for the reconnect interval.
        """
        self.redis = redis_client
        self.settings = settings or get_settings()
        self._owns_client = redis_client is None
        self._connected = redis_client is not None
        self._clock = clock
        self._next_connect_at = 0.0
        self._connect_lock = asyncio.Lock()

    async def connect(self) -> None:
        """Establish Redis connection. Call on app startup."""
        if self.redis is not None:
            return
        client = redis.Redis(
            host=self.settings.redis_host,
            port=self.settings.redis_port,
            db=self.settings.redis_db,
            password=self.settings.redis_password.get_secret_value() if self.settings.redis_password else None,
            decode_responses=True,
            socket_connect_timeout=self.settings.redis_connect_timeout_seconds,
            socket_keepalive=True,
            max_connections=self.settings.redis_max_connections,
        )
        try:
            await client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as e:
            logger.warning(
                "Redis connection failed: %s. Reads will go to the record store; retrying in %ss.",
                e,
                self.settings.redis_reconnect_interval_seconds,
            )
            await client.aclose()
            self._connected = False
            self._next_connect_at = self._clock() + self.settings.redis_reconnect_interval_seconds
            return
        self.redis = client
        self._connected = True
        logger.info(
            "Redis cache connected: %s:%s",
            self.settings.redis_host,
            self.settings.redis_port,
        )

    async def disconnect(self) -> None:
        """Close Redis connection. Call on app shutdown."""
        if self.redis is not None and self._owns_client:
            await self.redis.aclose()
            logger.info("Redis cache disconnected")
        self.redis = None
        self._connected = False

    async def _ensure_client(self) -> redis.Redis | None:
        """Current client, connecting an owned one if the retry interval has passed."""
        if self.is_available():
            return self.redis
        if not self._owns_client:
            return None
        async with self._connect_lock:
            if not self.is_available() and self._clock() >= self._next_connect_at:
                await self.connect()
        return self.redis if self.is_available() else None

    async def _reconnect(self, broken: redis.Redis) -> bool:
        """Replace a client whose connection dropped. Returns True if a working client is in place.

        Only the first caller for a given broken client rebuilds it; callers
        queued on the lock reuse the replacement.
        """
        if not self._owns_client:
            return False
        async with self._connect_lock:
            if self.redis is not broken:
                return self.is_available()
            self.redis = None
            self._connected = False
            try:
                await broken.aclose()
            except redis.RedisError:
                logger.debug("Ignoring error while closing broken Redis client", exc_info=True)
            await self.connect()
            return self._connected

    def is_available(self) -> bool:
        """Return True if Redis is connected and usable."""
        return self._connected and self.redis is not None

    async def _execute(
        self,
        operation: str,
        key: str | None,
        command: Callable[[redis.Redis], Awaitable[T]],
    ) -> T:
        client = await self._ensure_client()
        if client is None:
            raise CacheError(operation, key, "cache not connected")
        try:
            return await command(client)
        except (redis.ConnectionError, redis.TimeoutError) as e:
            if await self._reconnect(client) and self.redis is not None:
                try:
                    return await command(self.redis)
                except redis.RedisError as retry_error:
                    raise CacheError(operation, key, str(retry_error)) from retry_error
            logger.warning("Cache %s unavailable for key %s (Redis disconnected)", operation, key)
            raise CacheError(operation, key, str(e)) from e
        except redis.RedisError as e:
            logger.error("Cache %s error for key %s: %s", operation, key, e)
            raise CacheError(operation, key, str(e)) from e

    async def get(self, key: str) -> Any | None:
        """Return cached value (JSON-deserialized) or None if missing.

        Args:
            key: Cache key (use app.infrastructure.cache.keys builders).

        Raises:
            CacheError: Redis unreachable.
        """
        value = await self._execute("get", key, lambda client: client.get(key))
        if value is None:
            logger.debug("Cache MISS: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return deserialize(value)

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store value, with expiry when ttl is given.

        Args:
            key: Cache key.
            value: Value to cache (str verbatim, otherwise JSON-serializable).
            ttl: Time-to-live in seconds; None keeps the entry until deleted.

        Raises:
            CacheError: Redis unreachable.
        """
        serialized = serialize(value)
        if ttl:
            await self._execute("set", key, lambda client: client.setex(key, ttl, serialized))
        else:
            await self._execute("set", key, lambda client: client.set(key, serialized))
        logger.debug("Cache SET: %s (TTL: %ss)", key, ttl)

    async def delete(self, key: str) -> None:
        """Remove key from cache. Absent keys are a no-op.

        Raises:
            CacheError: Redis unreachable.
        """
        await self._execute("delete", key, lambda client: client.delete(key))
        logger.debug("Cache DELETE: %s", key)

    async def health_check(self) -> CacheHealth:
        """PING round trip with latency; reports unhealthy instead of raising."""
        start = time.perf_counter()
        try:
            await self._execute("ping", None, lambda client: client.ping())
        except CacheError as e:
            logger.error("Redis health check failed: %s", e.details.get("reason", e.message))
            return CacheHealth(
                status="unhealthy",
                latency_ms=None,
                message=f"Redis connection failed: {e.details.get('reason', e.message)}",
            )
        latency_ms = round((time.perf_counter() - start) * 1000, 2)
        return CacheHealth(
            status="healthy",
            latency_ms=latency_ms,
            message=f"Redis is responding ({latency_ms}ms)",
        )
