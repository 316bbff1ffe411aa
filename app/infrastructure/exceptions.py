"""Infrastructure exceptions for the cache and record-store clients.

Both extend TaskTrackException so presentation can map them to HTTP
responses consistently. CacheError never leaves the services that
catch it.
"""

from typing import Any

from app.domain.exceptions import TaskTrackException


class CacheError(TaskTrackException):
    """Transport-level failure talking to the cache (connection loss, timeout)."""

    def __init__(self, operation: str, key: str | None = None, reason: str = "") -> None:
        details: dict[str, Any] = {"operation": operation}
        if key is not None:
            details["key"] = key
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Cache {operation} failed" + (f" for key {key}" if key else ""),
            "CACHE_ERROR",
            details,
        )


class RecordStoreError(TaskTrackException):
    """Record store returned an unexpected status or could not be reached."""

    def __init__(
        self,
        collection: str,
        operation: str,
        status_code: int | None = None,
        reason: str = "",
    ) -> None:
        details: dict[str, Any] = {"collection": collection, "operation": operation}
        if status_code is not None:
            details["status_code"] = status_code
        if reason:
            details["reason"] = reason
        super().__init__(
            f"Record store {operation} on {collection} failed",
            "RECORD_STORE_ERROR",
            details,
        )
        self.status_code = status_code
