"""Shared field constraints for API schemas and query parameters."""

# Loose check only; the record store is the authority on email format.
EMAIL_PATTERN = r"^[^@\s:]+@[^@\s:]+$"

# Record-store ids (PocketBase: 15 chars [a-z0-9]); must not contain ':' (cache key separator).
RECORD_ID_PATTERN = r"^[A-Za-z0-9_-]{1,64}$"

# Comma-separated field list, each optionally prefixed with - or + (e.g. "-created,title").
SORT_PATTERN = r"^[-+]?@?[A-Za-z0-9_.]+(,[-+]?@?[A-Za-z0-9_.]+)*$"

# Comma-separated relation names (e.g. "owner,owner.team").
EXPAND_PATTERN = r"^[A-Za-z0-9_.]+(,[A-Za-z0-9_.]+)*$"

MAX_PAGE_SIZE = 500
