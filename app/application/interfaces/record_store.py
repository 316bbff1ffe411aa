"""Record store interface (port) for the application layer.

The durable store is an external collaborator; services depend only on
this protocol. Implemented by app.infrastructure.pocketbase.PocketBaseClient.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.record import ListQuery, Record, RecordPage
    from app.domain.value_objects.filters import FilterExpression


class IRecordStore(Protocol):
    """Protocol for a collection-oriented record store with filter/sort/page queries.

    Failures raise RecordNotFoundError (no such record), RecordConflictError
    (create rejected) or RecordStoreError (anything else).
    """

    async def get_list(self, collection: str, query: ListQuery) -> RecordPage:
        """Return one page of records matching query."""

    async def get_full_list(self, collection: str, query: ListQuery) -> list[Record]:
        """Return every record matching query (unpaginated)."""

    async def get_one(self, collection: str, record_id: str, expand: str = "") -> Record:
        """Return a record by id."""

    async def get_first_list_item(
        self, collection: str, filter: FilterExpression, expand: str = ""
    ) -> Record:
        """Return the first record matching filter."""

    async def create(self, collection: str, data: dict[str, Any]) -> Record:
        """Create a record; the store assigns id/created/updated."""

    async def update(self, collection: str, record_id: str, data: dict[str, Any]) -> Record:
        """Patch a record and return its new state."""

    async def delete(self, collection: str, record_id: str) -> None:
        """Delete a record."""

    async def health_check(self) -> dict[str, Any]:
        """Check the store; never raises."""
