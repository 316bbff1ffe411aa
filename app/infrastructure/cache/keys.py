"""Cache key builders. Single place for key format.

Keys are ``<namespace>:<id>`` for single records and
``<namespace>_list:<scope>`` for list results, where scope is an email or
``all``. Namespace and record id must not contain CACHE_KEY_SEP.
"""

from app.core.constants import CACHE_KEY_SEP, CACHE_LIST_SUFFIX, CACHE_SCOPE_ALL


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator."""
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def entity_prefix(namespace: str) -> str:
    """Prefix for single-record keys (e.g. ``task:``)."""
    _validate_key_component(namespace, "namespace")
    return f"{namespace}{CACHE_KEY_SEP}"


def list_prefix(namespace: str) -> str:
    """Prefix for list keys (e.g. ``task_list:``)."""
    _validate_key_component(namespace, "namespace")
    return f"{namespace}{CACHE_LIST_SUFFIX}{CACHE_KEY_SEP}"


def entity_key(namespace: str, record_id: str) -> str:
    """Cache key for one record by id."""
    _validate_key_component(record_id, "record_id")
    return f"{entity_prefix(namespace)}{record_id}"


def list_key(namespace: str, scope: str | None = None) -> str:
    """Cache key for a list read; a falsy scope maps to ``all``."""
    return f"{list_prefix(namespace)}{scope or CACHE_SCOPE_ALL}"
