"""Application-wide constants (cache key format, consumer cache-clear paths)."""

# Cache keys written by the consumer service; this service only invalidates them.
CACHE_KEY_SEP = ":"
CACHE_PREFIX_USER_ACCESS = "user_access"

# Cache-clear endpoints exposed by the consumer service (http invalidation backend).
CACHE_CLEAR_USER_PATH = "/api/v1/admin/clearSingleUserCache/{user_id}"
CACHE_CLEAR_ALL_PATH = "/api/v1/admin/clearAllUsersCache"

# Identity service admin validation path (central auth backend).
CENTRAL_AUTH_VALIDATE_PATH = "/api/v1/auth/validateAdmin"

# Audit query defaults for per-user / per-action listings.
AUDIT_SCOPED_DEFAULT_LIMIT = 50
