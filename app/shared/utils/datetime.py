"""
UTC datetime utilities for consistent timezone handling.

Record-store timestamps arrive as UTC strings (``2024-01-05 10:00:00.123Z``).
Use these helpers instead of datetime.now() or hand-rolled parsing.
"""

from datetime import UTC, datetime, tzinfo


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Args:
        dt: A datetime that may be naive or aware

    Returns:
        UTC-aware datetime or None
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def parse_record_timestamp(value: str) -> datetime | None:
    """Parse a record-store timestamp into an aware UTC datetime; None if unparseable."""
    try:
        return ensure_utc(datetime.fromisoformat(value.strip()))
    except (ValueError, AttributeError):
        return None


def to_local_iso(value: str, tz: tzinfo | None = None) -> str:
    """
    Convert a UTC timestamp string to local wall-clock time.

    The result is ISO 8601 with millisecond precision and no offset
    (``2024-01-05T15:30:00.123``). Strings that do not parse are returned
    unchanged.

    Args:
        value: Record-store timestamp (UTC)
        tz: Target zone; defaults to the server's local zone

    Returns:
        Local-time ISO string without timezone suffix
    """
    parsed = parse_record_timestamp(value)
    if parsed is None:
        return value
    local = parsed.astimezone(tz)
    return local.replace(tzinfo=None).isoformat(timespec="milliseconds")
