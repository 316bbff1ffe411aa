"""Response envelope: uniform wrapper carrying status, data and cache provenance.

Pure construction, no I/O. The dict form (camelCase keys) is what the API
returns and what the cache stores for list and by-id reads.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from app.core.constants import SOURCE_CACHE

_PAGINATION_KEYS = (
    ("page", "page"),
    ("per_page", "perPage"),
    ("total_pages", "totalPages"),
    ("total_items", "totalItems"),
)


@dataclass(frozen=True)
class ResponseEnvelope:
    """Canonical response shape. Pagination fields are None unless the result is a page."""

    status_code: int
    message: str
    data: Any
    source: str
    cache_key: str | None = None
    page: int | None = None
    per_page: int | None = None
    total_pages: int | None = None
    total_items: int | None = None

    @property
    def is_paginated(self) -> bool:
        return self.page is not None

    def to_dict(self) -> dict[str, Any]:
        """Serialize with camelCase keys; pagination keys only for paginated results."""
        out: dict[str, Any] = {
            "statusCode": self.status_code,
            "message": self.message,
            "data": self.data,
            "source": self.source,
            "cacheKey": self.cache_key,
        }
        if self.is_paginated:
            for attr, key in _PAGINATION_KEYS:
                out[key] = getattr(self, attr)
        return out

    def with_source(self, source: str, cache_key: str | None = None) -> ResponseEnvelope:
        """Copy with a different provenance tag (and optionally cache key)."""
        return replace(self, source=source, cache_key=cache_key or self.cache_key)

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> ResponseEnvelope:
        """Rebuild from to_dict() output; missing pagination keys stay None."""
        return cls(
            status_code=int(payload.get("statusCode", 200)),
            message=str(payload.get("message", "")),
            data=payload.get("data"),
            source=str(payload.get("source", "")),
            cache_key=payload.get("cacheKey"),
            **{attr: payload.get(key) for attr, key in _PAGINATION_KEYS},
        )

    @classmethod
    def from_cached(cls, payload: dict[str, Any], cache_key: str) -> ResponseEnvelope:
        """Envelope for a cache hit: stored fields verbatim, source/cacheKey overridden."""
        return cls.from_dict(payload).with_source(SOURCE_CACHE, cache_key)


def build_envelope(
    status_code: int,
    message: str,
    data: Any,
    source: str,
    cache_key: str | None = None,
    *,
    page: int | None = None,
    per_page: int | None = None,
    total_pages: int | None = None,
    total_items: int | None = None,
) -> ResponseEnvelope:
    """Build an envelope. Pass pagination fields only for paginated list results."""
    return ResponseEnvelope(
        status_code=status_code,
        message=message,
        data=data,
        source=source,
        cache_key=cache_key,
        page=page,
        per_page=per_page,
        total_pages=total_pages,
        total_items=total_items,
    )


def found_message(name: str, found: bool) -> str:
    """List/by-id message: found vs. not found variant."""
    return f"{name} retrieved successfully" if found else f"No {name} found"
