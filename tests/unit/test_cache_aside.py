"""Tests for CacheAsideQueryService (hit/miss, TTL, bypass, degraded cache)."""

import pytest

from app.application.dtos.record import ListQuery
from app.application.services.cache_aside import CacheAsideQueryService
from app.application.services.task_service import TASK_RESOURCE
from app.domain.exceptions import RecordNotFoundError, RecordRetrievalError, ValidationException
from app.domain.value_objects.filters import where
from app.infrastructure.exceptions import RecordStoreError


async def test_miss_then_hit(query_service: CacheAsideQueryService, record_store) -> None:
    record_store.seed("task", {"title": "a", "email": "a@x.com"})

    first = await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery())
    second = await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery())

    assert first.source == "database"
    assert second.source == "cache"
    assert first.data == second.data
    assert second.cache_key == "task_list:a@x.com"
    assert second.total_items == 1
    assert record_store.count("get_list") == 1


async def test_entry_stored_with_ttl(query_service: CacheAsideQueryService, cache) -> None:
    await query_service.get_page(TASK_RESOURCE, None, ListQuery())
    assert cache.ttls["task_list:all"] == 300


async def test_entry_expires_after_ttl(
    query_service: CacheAsideQueryService, record_store, clock
) -> None:
    record_store.seed("task", {"title": "a", "email": "a@x.com"})
    await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery())

    clock.advance(299)
    assert (await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery())).source == "cache"

    clock.advance(2)
    after = await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery())
    assert after.source == "database"
    assert record_store.count("get_list") == 2


async def test_list_is_scoped_to_email(query_service: CacheAsideQueryService, record_store) -> None:
    record_store.seed("task", {"title": "mine", "email": "a@x.com"})
    record_store.seed("task", {"title": "theirs", "email": "b@x.com"})

    mine = await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery())
    everything = await query_service.get_page(TASK_RESOURCE, None, ListQuery())

    assert [t["title"] for t in mine.data] == ["mine"]
    assert len(everything.data) == 2
    assert everything.cache_key == "task_list:all"


async def test_empty_list_message(query_service: CacheAsideQueryService) -> None:
    env = await query_service.get_page(TASK_RESOURCE, "nobody@x.com", ListQuery())
    assert env.data == []
    assert env.message == "No task found"


async def test_bypass_reads_fresh_and_leaves_no_entry(
    query_service: CacheAsideQueryService, record_store, cache
) -> None:
    record_store.seed("task", {"title": "a", "email": "a@x.com"})
    await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery())
    assert cache.has("task_list:a@x.com")

    bypassed = await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery(), bypass=True)

    assert bypassed.source == "database (cache bypassed)"
    assert not cache.has("task_list:a@x.com")
    following = await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery())
    assert following.source == "database"


async def test_cache_outage_degrades_to_record_store(
    query_service: CacheAsideQueryService, record_store, cache
) -> None:
    record_store.seed("task", {"title": "a", "email": "a@x.com"})
    cache.failing.update({"get", "set", "delete"})

    first = await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery())
    second = await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery())
    bypassed = await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery(), bypass=True)

    assert first.source == second.source == "database"
    assert bypassed.source == "database (cache bypassed)"
    assert len(second.data) == 1


async def test_malformed_entry_is_a_miss(query_service: CacheAsideQueryService, cache) -> None:
    await cache.set("task_list:all", "garbage", ttl=300)
    env = await query_service.get_page(TASK_RESOURCE, None, ListQuery())
    assert env.source == "database"


async def test_no_cache_configured(record_store) -> None:
    service = CacheAsideQueryService(None, record_store)
    record_store.seed("task", {"title": "a", "email": "a@x.com"})
    first = await service.get_page(TASK_RESOURCE, None, ListQuery())
    second = await service.get_page(TASK_RESOURCE, None, ListQuery())
    assert first.source == second.source == "database"


async def test_list_failure_is_retrieval_error(
    query_service: CacheAsideQueryService, record_store, cache
) -> None:
    record_store.errors["get_list"] = RecordStoreError("task", "list", status_code=500)
    with pytest.raises(RecordRetrievalError) as exc_info:
        await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery())
    assert exc_info.value.message == "Failed to retrieve task. Please try again."
    assert cache.entries == {}


async def test_full_list_is_unpaginated(query_service: CacheAsideQueryService, record_store) -> None:
    for i in range(3):
        record_store.seed("task", {"title": f"t{i}", "email": "a@x.com"})
    env = await query_service.get_full(TASK_RESOURCE, "a@x.com", ListQuery(per_page=1))
    assert len(env.data) == 3
    assert not env.is_paginated
    assert "page" not in env.to_dict()


async def test_page_and_full_reads_share_one_key(
    query_service: CacheAsideQueryService, record_store
) -> None:
    for i in range(3):
        record_store.seed("task", {"title": f"t{i}", "email": "a@x.com"})
    await query_service.get_page(TASK_RESOURCE, "a@x.com", ListQuery(per_page=1))

    full = await query_service.get_full(TASK_RESOURCE, "a@x.com", ListQuery())

    # The cached one-item page answers the full read until it expires or is evicted.
    assert full.source == "cache"
    assert len(full.data) == 1


async def test_get_by_id_hit_and_miss(query_service: CacheAsideQueryService, record_store) -> None:
    task = record_store.seed("task", {"title": "a", "email": "a@x.com"})

    first = await query_service.get_by_id(TASK_RESOURCE, task["id"])
    second = await query_service.get_by_id(TASK_RESOURCE, task["id"])

    assert first.source == "database"
    assert second.source == "cache"
    assert second.cache_key == f"task:{task['id']}"
    assert second.data == task
    assert second.message == "task retrieved successfully"


async def test_get_by_id_missing_is_not_found(query_service: CacheAsideQueryService, cache) -> None:
    with pytest.raises(RecordNotFoundError, match="task not found with the specified ID."):
        await query_service.get_by_id(TASK_RESOURCE, "missing")
    assert not cache.has("task:missing")


async def test_get_by_id_rejects_separator(query_service: CacheAsideQueryService) -> None:
    with pytest.raises(ValidationException):
        await query_service.get_by_id(TASK_RESOURCE, "a:b")


async def test_get_first_is_never_cached(
    query_service: CacheAsideQueryService, record_store, cache
) -> None:
    record_store.seed("task", {"title": "a", "email": "a@x.com"})
    record = await query_service.get_first(TASK_RESOURCE, where(email="a@x.com"))
    assert record["title"] == "a"
    assert cache.entries == {}


async def test_get_first_no_match(query_service: CacheAsideQueryService) -> None:
    with pytest.raises(RecordNotFoundError, match="with the specified filter"):
        await query_service.get_first(TASK_RESOURCE, where(email="nobody@x.com"))
