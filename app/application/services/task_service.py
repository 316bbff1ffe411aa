"""Task service: cached CRUD over the ``task`` collection."""

from __future__ import annotations

from app.application.dtos.envelope import ResponseEnvelope
from app.application.dtos.record import ListQuery, Resource
from app.application.services.record_service import RecordService
from app.core.constants import TASK_COLLECTION, TASK_NAMESPACE

TASK_RESOURCE = Resource(name=TASK_NAMESPACE, collection=TASK_COLLECTION)


class TaskService(RecordService):
    """Tasks, partitioned by owner email."""

    async def list_all(
        self,
        email: str | None = None,
        query: ListQuery | None = None,
        bypass: bool = True,
    ) -> ResponseEnvelope:
        """All tasks without pagination. Always read fresh; never fills the cache."""
        return await super().list_all(email, query, bypass=True)
