"""Cache-aside reads over the record store.

Every cached read follows the same policy:

1. Derive the key from (namespace, scope) or (namespace, id).
2. On bypass, evict the key best-effort, read the record store and return
   the result WITHOUT writing it back (a forced read never warms the cache
   for other readers).
3. Otherwise try the cache; a hit returns the stored envelope verbatim,
   re-tagged ``source="cache"``.
4. On a miss, read the record store, build a ``source="database"``
   envelope, store it with the configured TTL and return it.

Cache transport errors degrade to miss behaviour and are only logged.
Paginated and full list reads for the same scope share one key.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from app.application.dtos.envelope import ResponseEnvelope, build_envelope, found_message
from app.application.dtos.record import ListQuery, Record, Resource
from app.application.interfaces.record_store import IRecordStore
from app.core.constants import (
    SCOPE_FIELD,
    SOURCE_DATABASE,
    SOURCE_DATABASE_BYPASSED,
)
from app.domain.exceptions import (
    RecordNotFoundError,
    RecordRetrievalError,
    TaskTrackException,
    ValidationException,
)
from app.domain.value_objects.filters import Condition, FilterExpression
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import entity_key, list_key
from app.infrastructure.exceptions import CacheError

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL = 300

Loader = Callable[[str], Awaitable[ResponseEnvelope]]


def scope_filter(scope: str | None) -> FilterExpression | None:
    """Equality filter on the partition field, or None for the ``all`` scope."""
    return Condition(SCOPE_FIELD, "=", scope) if scope else None


class CacheAsideQueryService:
    """Cached reads for list, full-list and by-id shapes; first-match reads pass through."""

    def __init__(
        self,
        cache: CacheProtocol | None,
        record_store: IRecordStore,
        *,
        ttl: int = DEFAULT_CACHE_TTL,
    ) -> None:
        self.cache = cache
        self.record_store = record_store
        self.ttl = ttl

    async def get_page(
        self,
        resource: Resource,
        scope: str | None,
        query: ListQuery,
        bypass: bool = False,
    ) -> ResponseEnvelope:
        """One page of records for scope (an email) or all records."""
        cache_key = list_key(resource.name, scope)
        scoped = query.with_filter(scope_filter(scope))

        async def load(source: str) -> ResponseEnvelope:
            try:
                page = await self.record_store.get_list(resource.collection, scoped)
            except TaskTrackException as e:
                logger.error("Error listing %s: %s", resource.name, e.message)
                raise RecordRetrievalError(resource.name) from e
            return build_envelope(
                200,
                found_message(resource.name, bool(page.items)),
                page.items,
                source,
                cache_key,
                page=page.page,
                per_page=page.per_page,
                total_pages=page.total_pages,
                total_items=page.total_items,
            )

        return await self._read(
            cache_key, load, bypass, f"{resource.name} list (email: {scope or 'all'})"
        )

    async def get_full(
        self,
        resource: Resource,
        scope: str | None,
        query: ListQuery,
        bypass: bool = False,
    ) -> ResponseEnvelope:
        """Every record for scope, unpaginated. Shares get_page's cache key."""
        cache_key = list_key(resource.name, scope)
        scoped = query.with_filter(scope_filter(scope))

        async def load(source: str) -> ResponseEnvelope:
            try:
                records = await self.record_store.get_full_list(resource.collection, scoped)
            except TaskTrackException as e:
                logger.error("Error listing %s: %s", resource.name, e.message)
                raise RecordRetrievalError(resource.name) from e
            return build_envelope(
                200, found_message(resource.name, bool(records)), records, source, cache_key
            )

        return await self._read(
            cache_key, load, bypass, f"{resource.name} full list (email: {scope or 'all'})"
        )

    async def get_by_id(
        self, resource: Resource, record_id: str, bypass: bool = False
    ) -> ResponseEnvelope:
        """Single record by id. Any record-store failure reads as not found."""
        try:
            cache_key = entity_key(resource.name, record_id)
        except ValueError as e:
            raise ValidationException(str(e), field="id") from e

        async def load(source: str) -> ResponseEnvelope:
            try:
                record = await self.record_store.get_one(resource.collection, record_id)
            except TaskTrackException as e:
                logger.error("Error getting %s by ID %s: %s", resource.name, record_id, e.message)
                raise RecordNotFoundError(
                    f"{resource.name} not found with the specified ID.",
                    collection=resource.name,
                    record_id=record_id,
                ) from e
            return build_envelope(
                200, found_message(resource.name, True), record, source, cache_key
            )

        return await self._read(cache_key, load, bypass, f"{resource.name}: {record_id}")

    async def get_first(
        self,
        resource: Resource,
        filter: FilterExpression,
        expand: str = "",
    ) -> Record:
        """First record matching filter. Never cached."""
        try:
            return await self.record_store.get_first_list_item(
                resource.collection, filter, expand
            )
        except TaskTrackException as e:
            logger.error("Error getting first %s item: %s", resource.name, e.message)
            raise RecordNotFoundError(
                f"{resource.name} not found with the specified filter.",
                collection=resource.name,
            ) from e

    async def _read(
        self, cache_key: str, load: Loader, bypass: bool, label: str
    ) -> ResponseEnvelope:
        if bypass:
            logger.info("Cache bypassed for %s, deleting %s and reading the record store", label, cache_key)
            await self._evict(cache_key)
            return await load(SOURCE_DATABASE_BYPASSED)

        cached = await self._lookup(cache_key)
        if cached is not None:
            logger.debug("Cache hit for %s", label)
            return ResponseEnvelope.from_cached(cached, cache_key)

        logger.debug("Cache miss for %s, reading the record store", label)
        envelope = await load(SOURCE_DATABASE)
        await self._store(cache_key, envelope)
        return envelope

    async def _lookup(self, cache_key: str) -> dict[str, Any] | None:
        if self.cache is None:
            return None
        try:
            cached = await self.cache.get(cache_key)
        except CacheError as e:
            logger.warning("Cache lookup failed for %s, treating as miss: %s", cache_key, e.message)
            return None
        if cached is None:
            return None
        if not isinstance(cached, dict):
            logger.warning("Ignoring malformed cache entry at %s", cache_key)
            return None
        return cached

    async def _store(self, cache_key: str, envelope: ResponseEnvelope) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.set(cache_key, envelope.to_dict(), ttl=self.ttl)
        except CacheError as e:
            logger.warning("Could not cache %s: %s", cache_key, e.message)
            return
        logger.info("Cached result for key: %s", cache_key)

    async def _evict(self, cache_key: str) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.delete(cache_key)
        except CacheError as e:
            logger.warning("Could not delete cache key %s: %s", cache_key, e.message)
