"""Thin PocketBase REST API client (no SDK).

Talks to the records API of a PocketBase server with one shared
httpx.AsyncClient, so calls do not block the event loop and connections
are reused across requests. Filters arrive as structured expressions and
are rendered (with escaping) only here.
"""

from __future__ import annotations

import logging
import time
from typing import Any
from urllib.parse import quote

import httpx

from app.application.dtos.record import ListQuery, Record, RecordPage
from app.domain.exceptions import RecordConflictError, RecordNotFoundError
from app.domain.value_objects.filters import FilterExpression, render
from app.infrastructure.exceptions import RecordStoreError
from app.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)

# Page size used when walking a full list (same batch as the official SDK).
FULL_LIST_BATCH = 500


def _list_params(query: ListQuery, page: int, per_page: int, *, skip_total: bool = False) -> dict[str, Any]:
    """Query-string params for GET .../records; empty options are omitted."""
    params: dict[str, Any] = {"page": page, "perPage": per_page}
    rendered = render(query.filter)
    if rendered:
        params["filter"] = rendered
    if query.sort:
        params["sort"] = query.sort
    if query.expand:
        params["expand"] = query.expand
    if skip_total:
        params["skipTotal"] = 1
    return params


class PocketBaseClient:
    """Record store backed by the PocketBase REST API (implements IRecordStore)."""

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=timeout)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        """Close the HTTP client only if we created it (do not close injected client)."""
        if self._owns_http:
            await self._http.aclose()

    def _records_url(self, collection: str, record_id: str | None = None) -> str:
        url = f"{self._base_url}/api/collections/{quote(collection, safe='')}/records"
        if record_id is not None:
            url = f"{url}/{quote(record_id, safe='')}"
        return url

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = self._token
        return headers

    async def _request(
        self,
        method: str,
        url: str,
        *,
        collection: str,
        operation: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """Perform one HTTP call and map PocketBase error statuses to exceptions."""
        try:
            resp = await self._http.request(
                method, url, params=params, json=body, headers=self._headers()
            )
        except httpx.HTTPError as e:
            logger.error("PocketBase %s on %s failed: %s", operation, collection, e)
            raise RecordStoreError(collection, operation, reason=str(e)) from e

        if resp.status_code == 404:
            raise RecordNotFoundError(
                f"{collection} record not found", collection=collection
            )
        if resp.status_code == 400 and operation == "create":
            raise RecordConflictError(
                f"Failed to create {collection}: {_error_message(resp)}",
                collection=collection,
            )
        if resp.status_code >= 400:
            raise RecordStoreError(
                collection, operation, status_code=resp.status_code, reason=_error_message(resp)
            )
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    async def get_list(self, collection: str, query: ListQuery) -> RecordPage:
        out = await self._request(
            "GET",
            self._records_url(collection),
            collection=collection,
            operation="list",
            params=_list_params(query, query.page, query.per_page),
        ) or {}
        return RecordPage(
            items=list(out.get("items", [])),
            page=int(out.get("page", query.page)),
            per_page=int(out.get("perPage", query.per_page)),
            total_pages=int(out.get("totalPages", 0)),
            total_items=int(out.get("totalItems", 0)),
        )

    async def get_full_list(self, collection: str, query: ListQuery) -> list[Record]:
        """Walk pages of FULL_LIST_BATCH until a short page comes back."""
        items: list[Record] = []
        page = 1
        while True:
            out = await self._request(
                "GET",
                self._records_url(collection),
                collection=collection,
                operation="full_list",
                params=_list_params(query, page, FULL_LIST_BATCH, skip_total=True),
            ) or {}
            batch = list(out.get("items", []))
            items.extend(batch)
            if len(batch) < FULL_LIST_BATCH:
                return items
            page += 1

    async def get_one(self, collection: str, record_id: str, expand: str = "") -> Record:
        params = {"expand": expand} if expand else None
        out = await self._request(
            "GET",
            self._records_url(collection, record_id),
            collection=collection,
            operation="get",
            params=params,
        )
        return out or {}

    async def get_first_list_item(
        self, collection: str, filter: FilterExpression, expand: str = ""
    ) -> Record:
        query = ListQuery(page=1, per_page=1, filter=filter, sort="", expand=expand)
        out = await self._request(
            "GET",
            self._records_url(collection),
            collection=collection,
            operation="first",
            params=_list_params(query, 1, 1, skip_total=True),
        ) or {}
        items = out.get("items") or []
        if not items:
            raise RecordNotFoundError(
                f"{collection} record not found", collection=collection
            )
        return items[0]

    async def create(self, collection: str, data: dict[str, Any]) -> Record:
        out = await self._request(
            "POST",
            self._records_url(collection),
            collection=collection,
            operation="create",
            body=data,
        )
        return out or {}

    async def update(self, collection: str, record_id: str, data: dict[str, Any]) -> Record:
        out = await self._request(
            "PATCH",
            self._records_url(collection, record_id),
            collection=collection,
            operation="update",
            body=data,
        )
        return out or {}

    async def delete(self, collection: str, record_id: str) -> None:
        await self._request(
            "DELETE",
            self._records_url(collection, record_id),
            collection=collection,
            operation="delete",
        )

    async def health_check(self) -> dict[str, Any]:
        """GET /api/health; reports unhealthy instead of raising."""
        timestamp = utc_now().isoformat()
        start = time.perf_counter()
        try:
            resp = await self._http.get(f"{self._base_url}/api/health", headers=self._headers())
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("PocketBase health check failed: %s", e)
            return {
                "status": "unhealthy",
                "message": "Database connection failed",
                "error": str(e),
                "timestamp": timestamp,
            }
        return {
            "status": "healthy",
            "message": "Database connection is working",
            "latencyMs": round((time.perf_counter() - start) * 1000, 2),
            "timestamp": timestamp,
        }


def _error_message(resp: httpx.Response) -> str:
    """PocketBase error bodies are {"code", "message", "data"}; fall back to text."""
    try:
        payload = resp.json()
    except ValueError:
        return resp.text[:200]
    if isinstance(payload, dict):
        return str(payload.get("message", ""))
    return str(payload)[:200]
