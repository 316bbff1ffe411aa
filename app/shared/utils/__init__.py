"""Shared utilities: datetime helpers."""

from app.shared.utils.datetime import (
    ensure_utc,
    parse_record_timestamp,
    to_local_iso,
    utc_now,
)

__all__ = [
    "ensure_utc",
    "parse_record_timestamp",
    "to_local_iso",
    "utc_now",
]
