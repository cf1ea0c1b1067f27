"""Cache key builders for the consumer-facing user access cache.

Keys are written by the consumer service as user_access:<user_id>[:...];
this service only deletes them. User ids must not contain CACHE_KEY_SEP.
"""

from access_admin.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_USER_ACCESS


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator."""
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def user_access_key(user_id: str) -> str:
    """Top-level cached access entry for one user."""
    _validate_key_component(user_id, "user_id")
    return f"{CACHE_PREFIX_USER_ACCESS}{CACHE_KEY_SEP}{user_id}"


def user_access_pattern(user_id: str) -> str:
    """SCAN pattern for every per-scope entry of one user."""
    return f"{user_access_key(user_id)}{CACHE_KEY_SEP}*"


def all_user_access_pattern() -> str:
    """SCAN pattern for every user's cached access."""
    return f"{CACHE_PREFIX_USER_ACCESS}{CACHE_KEY_SEP}*"
