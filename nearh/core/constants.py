"""Core constants: cache key prefixes and shared literal values.

Single source of truth for cache key structure. Used by
infrastructure cache key builders and the cache services.
"""

# Cache key prefixes
CACHE_PREFIX_PROFILE = "profile"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Request gate paths
LOGIN_PATH = "/auth/login"
WAITING_ROOM_PATH = "/auth/waiting-room"
ADMIN_HOME_PATH = "/admin"
SUPERADMIN_HOME_PATH = "/superadmin"
PUBLIC_HOME_PATH = "/"
