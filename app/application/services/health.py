"""Combined health of the record store and the cache."""

from __future__ import annotations

from typing import Any

from app.application.interfaces.record_store import IRecordStore
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.shared.utils.datetime import utc_now


async def check_health(record_store: IRecordStore, cache: CacheProtocol | None) -> dict[str, Any]:
    """Check both backends. A disabled cache (None) does not make the service unhealthy."""
    database = await record_store.health_check()
    if cache is None:
        cache_status: dict[str, Any] = {"status": "disabled", "message": "Redis cache disabled"}
        cache_ok = True
    else:
        cache_health = await cache.health_check()
        cache_status = {
            "status": cache_health.status,
            "message": cache_health.message,
            "latencyMs": cache_health.latency_ms,
        }
        cache_ok = cache_health.healthy
    healthy = database.get("status") == "healthy" and cache_ok
    return {
        "timestamp": utc_now().isoformat(),
        "database": database,
        "cache": cache_status,
        "overall": "healthy" if healthy else "unhealthy",
    }
