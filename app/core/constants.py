"""Core constants: cache key prefixes, sources and shared literal values.

Single source of truth for cache key structure. Used by
app.infrastructure.cache.keys and the cache-aside services.
"""

# Suffix that turns a namespace into its list-key prefix (task -> task_list)
CACHE_LIST_SUFFIX = "_list"

# Delimiter between prefix and scope
CACHE_KEY_SEP = ":"

# Scope used when a list read is not partitioned by email
CACHE_SCOPE_ALL = "all"

# Query value that forces a fresh read (?cache=none)
CACHE_BYPASS_VALUE = "none"

# Envelope provenance
SOURCE_CACHE = "cache"
SOURCE_DATABASE = "database"
SOURCE_DATABASE_BYPASSED = "database (cache bypassed)"

# Partition field used for list filtering and invalidation scope
SCOPE_FIELD = "email"

# Record-store collections
TASK_COLLECTION = "task"
PERMISSION_COLLECTION = "control_system"

# Cache namespaces
TASK_NAMESPACE = "task"
PERMISSION_NAMESPACE = "permission"
