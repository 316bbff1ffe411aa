"""Shared utilities: request context, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.context import get_request_id, reset_request_id, set_request_id
from app.shared.utils import ensure_utc, parse_record_timestamp, to_local_iso, utc_now

__all__ = [
    "ensure_utc",
    "get_request_id",
    "parse_record_timestamp",
    "reset_request_id",
    "set_request_id",
    "to_local_iso",
    "utc_now",
]
