"""CRUD over one record-store collection with cache-aside reads.

Reads go through CacheAsideQueryService. Writes go straight to the record
store, then through InvalidationCoordinator. Eviction problems are logged
and never fail a write that the record store already accepted.
"""

from __future__ import annotations

import logging
from typing import Any

from app.application.dtos.envelope import ResponseEnvelope, build_envelope
from app.application.dtos.record import ListQuery, Record, Resource
from app.application.interfaces.record_store import IRecordStore
from app.application.services.cache_aside import CacheAsideQueryService
from app.application.services.health import check_health
from app.application.services.invalidation import InvalidationCoordinator
from app.core.constants import SCOPE_FIELD, SOURCE_DATABASE
from app.domain.exceptions import (
    RecordConflictError,
    RecordNotFoundError,
    TaskTrackException,
)
from app.domain.value_objects.filters import FilterExpression

logger = logging.getLogger(__name__)


class RecordService:
    """Cached CRUD for a single resource (task, permission, ...)."""

    def __init__(
        self,
        resource: Resource,
        record_store: IRecordStore,
        query_service: CacheAsideQueryService,
        coordinator: InvalidationCoordinator,
    ) -> None:
        self.resource = resource
        self.record_store = record_store
        self.query_service = query_service
        self.coordinator = coordinator

    async def list(
        self,
        email: str | None = None,
        query: ListQuery | None = None,
        bypass: bool = False,
    ) -> ResponseEnvelope:
        """Paginated records for email (or all), cached under ``<ns>_list:<email|all>``."""
        return await self.query_service.get_page(
            self.resource, email, query or ListQuery(), bypass
        )

    async def list_all(
        self,
        email: str | None = None,
        query: ListQuery | None = None,
        bypass: bool = False,
    ) -> ResponseEnvelope:
        """Unpaginated records for email (or all); same key family as list()."""
        return await self.query_service.get_full(
            self.resource, email, query or ListQuery(), bypass
        )

    async def get(self, record_id: str, bypass: bool = False) -> ResponseEnvelope:
        return await self.query_service.get_by_id(self.resource, record_id, bypass)

    async def first(self, filter: FilterExpression, expand: str = "") -> Record:
        return await self.query_service.get_first(self.resource, filter, expand)

    async def create(self, data: dict[str, Any]) -> Record:
        """Create a record, then evict the list keys for its email."""
        name = self.resource.name
        try:
            record = await self.record_store.create(self.resource.collection, data)
        except TaskTrackException as e:
            logger.error("Error creating %s: %s", name, e.message)
            raise RecordConflictError(
                f"Failed to create {name}. Please check your input data.",
                collection=name,
            ) from e

        email = record.get(SCOPE_FIELD) or data.get(SCOPE_FIELD)
        result = await self.coordinator.on_write(self.resource, email, record.get("id"))
        result.log(logger, f"{name} create")
        logger.info("%s created and cache invalidated for email: %s", name, email or "unknown")
        return record

    async def update(self, record_id: str, data: dict[str, Any]) -> Record:
        """Patch a record, then evict list keys for the old and new email.

        When the payload changes the email, the stored record is read first so
        the previous owner's list is evicted too.

        The ``<ns>:<id>`` entry is left in place unless invalidate_by_id is on.
        """
        name = self.resource.name
        previous_email = None
        try:
            if SCOPE_FIELD in data:
                existing = await self.record_store.get_one(self.resource.collection, record_id)
                previous_email = existing.get(SCOPE_FIELD)
            record = await self.record_store.update(self.resource.collection, record_id, data)
        except TaskTrackException as e:
            logger.error("Error updating %s %s: %s", name, record_id, e.message)
            raise RecordNotFoundError(
                f"{name} not found with the specified ID.",
                collection=name,
                record_id=record_id,
            ) from e

        emails = [previous_email, data.get(SCOPE_FIELD), record.get(SCOPE_FIELD)]
        result = await self.coordinator.on_write(self.resource, emails, record_id)
        result.log(logger, f"{name} update")
        logger.info(
            "%s updated and cache invalidated for email: %s",
            name,
            data.get(SCOPE_FIELD) or record.get(SCOPE_FIELD) or "unknown",
        )
        return record

    async def delete(self, record_id: str) -> ResponseEnvelope:
        """Read the record (for its email), delete it, then evict.

        Not atomic: the read and the delete are separate record-store calls.
        """
        name = self.resource.name
        try:
            existing = await self.record_store.get_one(self.resource.collection, record_id)
            await self.record_store.delete(self.resource.collection, record_id)
        except TaskTrackException as e:
            logger.error("Error deleting %s %s: %s", name, record_id, e.message)
            raise RecordNotFoundError(
                f"{name} not found with the specified ID.",
                collection=name,
                record_id=record_id,
            ) from e

        email = existing.get(SCOPE_FIELD)
        result = await self.coordinator.on_write(self.resource, email, record_id)
        result.log(logger, f"{name} delete")
        logger.info("%s deleted and cache invalidated for email: %s", name, email or "unknown")
        return build_envelope(
            200, f"{name} deleted successfully", {"id": record_id}, SOURCE_DATABASE
        )

    async def health_check(self) -> dict[str, Any]:
        """Record store and cache status: ``{timestamp, database, cache, overall}``."""
        return await check_health(self.record_store, self.query_service.cache)
