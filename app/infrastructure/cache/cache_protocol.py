"""Cache protocol for the cache-aside services (DIP)."""

from dataclasses import dataclass
from typing import Any, Protocol


@dataclass(frozen=True)
class CacheHealth:
    """Result of a cache round-trip check."""

    status: str
    latency_ms: float | None
    message: str

    @property
    def healthy(self) -> bool:
        return self.status == "healthy"


class CacheProtocol(Protocol):
    """Protocol for cache backends (e.g. Redis).

    get/set/delete raise CacheError on transport failure; a missing key is
    not an error.
    """

    def is_available(self) -> bool:
        """Return True if cache is connected and usable."""
        ...

    async def get(self, key: str) -> Any:
        """Return cached value or None."""
        ...

    async def set(self, key: str, value: Any, ttl: int | None = None) -> None:
        """Store value; without ttl the entry lives until deleted."""
        ...

    async def delete(self, key: str) -> None:
        """Remove key from cache. Deleting an absent key is a no-op."""
        ...

    async def health_check(self) -> CacheHealth:
        """Check the cache; never raises."""
        ...
