"""Pytest configuration and fixtures for task-track.

Unit tests run the services against in-memory doubles: FakeCache (TTL
driven by a FakeClock instead of wall time) and FakeRecordStore (a
dict-backed collection store that understands equality filters and
``-field`` sorts). HTTP tests use app.main:app with the cache and record
store dependencies overridden, so neither Redis nor PocketBase is needed.
"""

import copy
import json
import math
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.v1.dependencies import get_cache, get_record_store
from app.application.dtos.record import ListQuery, Record, RecordPage
from app.application.services.cache_aside import CacheAsideQueryService
from app.application.services.invalidation import InvalidationCoordinator
from app.application.services.permission_service import PERMISSION_RESOURCE, PermissionService
from app.application.services.task_service import TASK_RESOURCE, TaskService
from app.core.limiter import limiter
from app.domain.exceptions import RecordNotFoundError
from app.domain.value_objects.filters import And, FilterExpression
from app.infrastructure.cache.cache_protocol import CacheHealth
from app.infrastructure.exceptions import CacheError
from app.main import app as fastapi_app


class FakeClock:
    """Manually advanced monotonic clock (seconds)."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeCache:
    """In-memory CacheProtocol implementation.

    Values go through a JSON round trip like the Redis cache does. Put an
    operation name ("get", "set", "delete") in ``failing`` or a key in
    ``failing_keys`` to make calls raise CacheError.
    """

    def __init__(self, clock: FakeClock | None = None) -> None:
        self.clock = clock or FakeClock()
        self.entries: dict[str, tuple[Any, float | None]] = {}
        self.failing: set[str] = set()
        self.failing_keys: set[str] = set()
        self.deleted: list[str] = []
        self.ttls: dict[str, int | None] = {}

    def _check(self, operation: str, key: str) -> None:
        if operation in self.failing or key in self.failing_keys:
            raise CacheError(operation, key, "simulated outage")

    def has(self, key: str) -> bool:
        entry = self.entries.get(key)
        if entry is None:
            return False
        expires_at = entry[1]
        return expires_at is None or self.clock() < expires_at

    def is_available(self) -> bool:
        return not self.failing

    async def get(self, key: str) -> Any:
        self._check("get", key)
        if not self.has(key):
            self.entries.pop(key, None)
            return None
        return copy.deepcopy(self.entries[key][0])

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        self._check("set", key)
        expires_at = self.clock() + ttl if ttl else None
        self.entries[key] = (json.loads(json.dumps(value)), expires_at)
        self.ttls[key] = ttl

    async def delete(self, key: str) -> None:
        self._check("delete", key)
        self.deleted.append(key)
        self.entries.pop(key, None)

    async def health_check(self) -> CacheHealth:
        if self.failing:
            return CacheHealth("unhealthy", None, "Redis connection failed: simulated outage")
        return CacheHealth("healthy", 0.1, "Redis is responding (0.1ms)")


def _terms(expr: FilterExpression | None) -> tuple:
    if expr is None:
        return ()
    return expr.terms if isinstance(expr, And) else (expr,)


def _matches(record: Record, expr: FilterExpression | None) -> bool:
    for term in _terms(expr):
        value = record.get(term.field)
        if term.op == "=" and value != term.value:
            return False
        if term.op == "!=" and value == term.value:
            return False
    return True


def _sorted(records: list[Record], sort: str) -> list[Record]:
    out = list(records)
    for spec in reversed([s for s in sort.split(",") if s]):
        field = spec.lstrip("-+")
        out.sort(key=lambda r: str(r.get(field, "")), reverse=spec.startswith("-"))
    return out


class FakeRecordStore:
    """Dict-backed IRecordStore. ``calls`` records (operation, collection) pairs.

    Put an exception in ``errors[operation]`` to make that operation raise it.
    """

    def __init__(self) -> None:
        self.collections: dict[str, dict[str, Record]] = {}
        self.calls: list[tuple[str, str]] = []
        self.errors: dict[str, Exception] = {}
        self.healthy = True
        self._seq = 0

    def _enter(self, operation: str, collection: str) -> dict[str, Record]:
        self.calls.append((operation, collection))
        if operation in self.errors:
            raise self.errors[operation]
        return self.collections.setdefault(collection, {})

    def count(self, operation: str) -> int:
        return sum(1 for op, _ in self.calls if op == operation)

    def seed(self, collection: str, data: dict[str, Any]) -> Record:
        """Insert a record directly (not counted as a call)."""
        self._seq += 1
        stamp = f"2024-01-05 10:00:{self._seq:02d}.000Z"
        record = {"id": data.get("id") or f"rec{self._seq:012d}", "created": stamp, "updated": stamp}
        record.update({k: v for k, v in data.items() if k != "id"})
        self.collections.setdefault(collection, {})[record["id"]] = record
        return copy.deepcopy(record)

    def _select(self, records: dict[str, Record], query: ListQuery) -> list[Record]:
        matched = [r for r in records.values() if _matches(r, query.filter)]
        return _sorted(matched, query.sort)

    async def get_list(self, collection: str, query: ListQuery) -> RecordPage:
        records = self._select(self._enter("get_list", collection), query)
        start = (query.page - 1) * query.per_page
        return RecordPage(
            items=copy.deepcopy(records[start : start + query.per_page]),
            page=query.page,
            per_page=query.per_page,
            total_pages=math.ceil(len(records) / query.per_page),
            total_items=len(records),
        )

    async def get_full_list(self, collection: str, query: ListQuery) -> list[Record]:
        return copy.deepcopy(self._select(self._enter("get_full_list", collection), query))

    async def get_one(self, collection: str, record_id: str, expand: str = "") -> Record:
        records = self._enter("get_one", collection)
        if record_id not in records:
            raise RecordNotFoundError(f"{collection} record not found", collection=collection)
        return copy.deepcopy(records[record_id])

    async def get_first_list_item(
        self, collection: str, filter: FilterExpression, expand: str = ""
    ) -> Record:
        records = self._enter("get_first_list_item", collection)
        for record in records.values():
            if _matches(record, filter):
                return copy.deepcopy(record)
        raise RecordNotFoundError(f"{collection} record not found", collection=collection)

    async def create(self, collection: str, data: dict[str, Any]) -> Record:
        self._enter("create", collection)
        return self.seed(collection, data)

    async def update(self, collection: str, record_id: str, data: dict[str, Any]) -> Record:
        records = self._enter("update", collection)
        if record_id not in records:
            raise RecordNotFoundError(f"{collection} record not found", collection=collection)
        records[record_id].update(data)
        return copy.deepcopy(records[record_id])

    async def delete(self, collection: str, record_id: str) -> None:
        records = self._enter("delete", collection)
        if record_id not in records:
            raise RecordNotFoundError(f"{collection} record not found", collection=collection)
        del records[record_id]

    async def health_check(self) -> dict[str, Any]:
        if not self.healthy:
            return {"status": "unhealthy", "message": "Database connection failed", "error": "down"}
        return {"status": "healthy", "message": "Database connection is working", "latencyMs": 1.0}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock: FakeClock) -> FakeCache:
    return FakeCache(clock)


@pytest.fixture
def record_store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def query_service(cache: FakeCache, record_store: FakeRecordStore) -> CacheAsideQueryService:
    return CacheAsideQueryService(cache, record_store, ttl=300)


@pytest.fixture
def coordinator(cache: FakeCache) -> InvalidationCoordinator:
    return InvalidationCoordinator(cache)


@pytest.fixture
def task_service(
    record_store: FakeRecordStore,
    query_service: CacheAsideQueryService,
    coordinator: InvalidationCoordinator,
) -> TaskService:
    return TaskService(TASK_RESOURCE, record_store, query_service, coordinator)


@pytest.fixture
def permission_service(
    record_store: FakeRecordStore,
    query_service: CacheAsideQueryService,
    coordinator: InvalidationCoordinator,
) -> PermissionService:
    return PermissionService(PERMISSION_RESOURCE, record_store, query_service, coordinator)


@pytest.fixture
async def client(cache: FakeCache, record_store: FakeRecordStore) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI) with in-memory backends."""
    fastapi_app.dependency_overrides[get_cache] = lambda: cache
    fastapi_app.dependency_overrides[get_record_store] = lambda: record_store
    limiter.reset()
    transport = ASGITransport(app=fastapi_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    fastapi_app.dependency_overrides.clear()
