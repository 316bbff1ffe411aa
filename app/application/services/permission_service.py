"""Permission service: latest-permission lookup plus cached CRUD.

Permissions live in the ``control_system`` collection but are cached under
the ``permission`` namespace.
"""

from __future__ import annotations

from app.application.dtos.envelope import ResponseEnvelope, build_envelope
from app.application.dtos.record import ListQuery, Record, Resource
from app.application.services.record_service import RecordService
from app.core.constants import PERMISSION_COLLECTION, PERMISSION_NAMESPACE
from app.shared.utils.datetime import to_local_iso

PERMISSION_RESOURCE = Resource(name=PERMISSION_NAMESPACE, collection=PERMISSION_COLLECTION)

_LATEST_QUERY = ListQuery(page=1, per_page=1, sort="-created")


def with_local_timestamps(permission: Record) -> Record:
    """Copy of permission with created/updated shown in server-local time."""
    converted = dict(permission)
    for ts_field in ("created", "updated"):
        if converted.get(ts_field):
            converted[ts_field] = to_local_iso(converted[ts_field])
    return converted


class PermissionService(RecordService):
    """Permissions, partitioned by email."""

    async def get_latest_permission(self, email: str, bypass: bool = False) -> ResponseEnvelope:
        """Most recently created permission for email, or data=None.

        Reads a one-item page through the list cache (``permission_list:<email>``)
        and keeps that page's source and cache key.
        """
        page = await self.query_service.get_page(self.resource, email, _LATEST_QUERY, bypass)
        items = page.data or []
        latest = with_local_timestamps(items[0]) if items else None
        return build_envelope(
            page.status_code,
            "Latest permission retrieved successfully"
            if latest
            else "No permission found for this email",
            latest,
            page.source,
            page.cache_key,
        )
