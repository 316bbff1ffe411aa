"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic. Used by main.py; no business
logic here, only wiring of infrastructure: the shared Redis cache and the
shared PocketBase HTTP client, both stored on app.state and handed to
request handlers through app.api.v1.dependencies.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.pocketbase import PocketBaseClient
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, Redis cache (if enabled), record-store client,
    cache health report. Shutdown order: record-store HTTP client close,
    cache disconnect.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    if settings.redis_enabled:
        from app.infrastructure.cache.redis_cache import CacheService

        cache = CacheService(settings=settings)
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None
        logger.info("Redis cache disabled; every read goes to the record store")

    app.state.pocketbase_http_client = httpx.AsyncClient(
        timeout=settings.pocketbase_timeout_seconds
    )
    app.state.record_store = PocketBaseClient(
        settings.pocketbase_url,
        token=settings.pocketbase_token.get_secret_value() if settings.pocketbase_token else None,
        http_client=app.state.pocketbase_http_client,
    )
    logger.info("Record store client ready: %s", settings.pocketbase_url)

    if app.state.cache is not None:
        health = await app.state.cache.health_check()
        if health.healthy:
            logger.info("Redis is ready for caching operations (%s)", health.message)
        else:
            logger.warning("Redis is not healthy, caching may not work properly: %s", health.message)

    yield

    # ---- Shutdown ----
    if getattr(app.state, "pocketbase_http_client", None) is not None:
        await app.state.pocketbase_http_client.aclose()
        app.state.pocketbase_http_client = None
        logger.info("Record store HTTP client closed")

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")
