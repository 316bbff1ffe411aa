"""PocketBase record store (REST, httpx)."""

from app.infrastructure.pocketbase._rest_client import FULL_LIST_BATCH, PocketBaseClient

__all__ = ["FULL_LIST_BATCH", "PocketBaseClient"]
