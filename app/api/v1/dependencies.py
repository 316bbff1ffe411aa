"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the shared infrastructure created in
app.core.lifespan (cache and record store on app.state) and for the
application services built on top of them. Routes depend only on these
dependencies, not on infrastructure directly; tests swap the two
infrastructure providers through app.dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query, Request

from app.application.dtos.record import ListQuery
from app.application.interfaces.record_store import IRecordStore
from app.application.services.cache_aside import CacheAsideQueryService
from app.application.services.invalidation import InvalidationCoordinator
from app.application.services.permission_service import PERMISSION_RESOURCE, PermissionService
from app.application.services.task_service import TASK_RESOURCE, TaskService
from app.core.config import Settings, get_settings
from app.core.constants import CACHE_BYPASS_VALUE
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.schemas.common import EXPAND_PATTERN, MAX_PAGE_SIZE, SORT_PATTERN


def get_cache(request: Request) -> CacheProtocol | None:
    """Shared cache from app.state; None when Redis is disabled."""
    return getattr(request.app.state, "cache", None)


def get_record_store(request: Request) -> IRecordStore:
    """Shared record-store client from app.state (created in lifespan)."""
    return request.app.state.record_store


def get_query_service(
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
    record_store: Annotated[IRecordStore, Depends(get_record_store)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CacheAsideQueryService:
    return CacheAsideQueryService(cache, record_store, ttl=settings.cache_ttl_seconds)


def get_invalidation_coordinator(
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> InvalidationCoordinator:
    return InvalidationCoordinator(cache, invalidate_by_id=settings.cache_invalidate_by_id)


def get_task_service(
    record_store: Annotated[IRecordStore, Depends(get_record_store)],
    query_service: Annotated[CacheAsideQueryService, Depends(get_query_service)],
    coordinator: Annotated[InvalidationCoordinator, Depends(get_invalidation_coordinator)],
) -> TaskService:
    return TaskService(TASK_RESOURCE, record_store, query_service, coordinator)


def get_permission_service(
    record_store: Annotated[IRecordStore, Depends(get_record_store)],
    query_service: Annotated[CacheAsideQueryService, Depends(get_query_service)],
    coordinator: Annotated[InvalidationCoordinator, Depends(get_invalidation_coordinator)],
) -> PermissionService:
    return PermissionService(PERMISSION_RESOURCE, record_store, query_service, coordinator)


def get_bypass(
    cache: Annotated[
        str | None,
        Query(description='Pass "none" to skip the cache and read the record store'),
    ] = None,
) -> bool:
    """True when the request asked for a fresh read (?cache=none)."""
    return cache == CACHE_BYPASS_VALUE


def get_list_query(
    settings: Annotated[Settings, Depends(get_settings)],
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int | None, Query(ge=1, le=MAX_PAGE_SIZE)] = None,
    sort: Annotated[str | None, Query(max_length=200, pattern=SORT_PATTERN)] = None,
    expand: Annotated[str | None, Query(max_length=200, pattern=EXPAND_PATTERN)] = None,
) -> ListQuery:
    """List options from the query string, with configured defaults."""
    return ListQuery(
        page=page,
        per_page=per_page or settings.default_page_size,
        sort=sort if sort is not None else settings.default_sort,
        expand=expand or "",
    )
