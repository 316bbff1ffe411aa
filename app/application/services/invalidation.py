"""Cache invalidation after writes.

A write to an entity evicts the list keys of every scope that could now
be stale: ``<ns>_list:<email>`` and ``<ns>_list:all``. The per-record key
``<ns>:<id>`` is only evicted when invalidate_by_id is on; otherwise it
converges when its TTL expires.

Eviction is a best-effort side effect. Failures are collected in an
EvictionResult for the caller to log and never undo the write.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from app.application.dtos.record import Resource
from app.infrastructure.cache.cache_protocol import CacheProtocol
from app.infrastructure.cache.keys import entity_key, list_key
from app.infrastructure.exceptions import CacheError

logger = logging.getLogger(__name__)


@dataclass
class EvictionResult:
    """Outcome of one invalidation pass."""

    evicted: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed

    def log(self, log: logging.Logger, context: str) -> None:
        """Report the pass: failures as errors, evictions as info."""
        for key, reason in self.failed.items():
            log.error("Error invalidating cache key %s after %s: %s", key, context, reason)
        if self.evicted:
            log.info("Invalidated cache keys after %s: %s", context, ", ".join(self.evicted))


def _emails(affected: str | Iterable[str | None] | None) -> list[str]:
    if affected is None:
        return []
    if isinstance(affected, str):
        affected = [affected]
    seen: list[str] = []
    for email in affected:
        if email and email not in seen:
            seen.append(email)
    return seen


class InvalidationCoordinator:
    """Computes and evicts the cache keys a write could have made stale."""

    def __init__(self, cache: CacheProtocol | None, *, invalidate_by_id: bool = False) -> None:
        self.cache = cache
        self.invalidate_by_id = invalidate_by_id

    def keys_for(
        self,
        resource: Resource,
        affected_email: str | Iterable[str | None] | None,
        record_id: str | None = None,
    ) -> list[str]:
        """Keys to evict; empty when no email is known."""
        emails = _emails(affected_email)
        if not emails:
            return []
        keys = [list_key(resource.name, email) for email in emails]
        keys.append(list_key(resource.name))
        if self.invalidate_by_id and record_id:
            keys.append(entity_key(resource.name, record_id))
        return keys

    async def on_write(
        self,
        resource: Resource,
        affected_email: str | Iterable[str | None] | None,
        record_id: str | None = None,
    ) -> EvictionResult:
        """Evict every key for the write; each key is attempted even if another fails."""
        result = EvictionResult()
        keys = self.keys_for(resource, affected_email, record_id)
        if not keys:
            logger.info("No email on %s write; nothing to invalidate", resource.name)
            return result
        if self.cache is None:
            return result
        for key in keys:
            try:
                await self.cache.delete(key)
            except CacheError as e:
                result.failed[key] = e.details.get("reason", e.message)
                continue
            result.evicted.append(key)
        return result
