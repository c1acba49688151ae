"""Cache key builders. Single place for key format.

Key components (identity, version, list type) must not contain
CACHE_KEY_SEP to avoid ambiguous or colliding keys.
"""

from nearh.core.constants import CACHE_KEY_SEP, CACHE_PREFIX_PROFILE
from nearh.domain.enums import MasterListType


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def profile_key(identity: str) -> str:
    """Cache key for the authorization profile of an identity."""
    _validate_key_component(identity, "identity")
    return f"{CACHE_PREFIX_PROFILE}{CACHE_KEY_SEP}{identity}"


def master_list_key(version: str, list_type: MasterListType) -> str:
    """Versioned cache key for a complete master-data list (e.g. v1:locations)."""
    _validate_key_component(version, "version")
    return f"{version}{CACHE_KEY_SEP}{list_type.value}"
