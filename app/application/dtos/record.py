"""DTOs for record-store reads (no dependency on the HTTP layer)."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from app.domain.value_objects.filters import FilterExpression, and_

Record = dict[str, Any]


@dataclass(frozen=True)
class Resource:
    """A cached resource: cache namespace plus record-store collection.

    ``name`` drives the cache keys (``task:``, ``task_list:``) and messages;
    ``collection`` is what the record store calls it.
    """

    name: str
    collection: str


@dataclass(frozen=True)
class ListQuery:
    """Options for a list read. page/per_page are ignored by full-list reads."""

    page: int = 1
    per_page: int = 50
    filter: FilterExpression | None = None
    sort: str = "-created"
    expand: str = ""

    def with_filter(self, extra: FilterExpression | None) -> ListQuery:
        """Return a copy with extra ANDed onto the existing filter."""
        return replace(self, filter=and_(self.filter, extra))


@dataclass(frozen=True)
class RecordPage:
    """One page of a paginated list read."""

    items: list[Record] = field(default_factory=list)
    page: int = 1
    per_page: int = 0
    total_pages: int = 0
    total_items: int = 0
