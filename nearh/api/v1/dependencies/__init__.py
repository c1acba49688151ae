"""Presentation-layer dependency injection (composition root).

Routes depend only on these providers; repositories and services are
built here from the request-scoped session and the process-wide cache.
"""

from nearh.api.v1.dependencies.auth import (
    get_current_identity,
    get_current_identity_optional,
    get_current_profile,
    require_approved_admin,
    require_superadmin,
)
from nearh.api.v1.dependencies.cache import (
    get_background,
    get_cache,
    get_master_data_cache_service,
    get_profile_cache_service,
    get_profile_invalidator,
)
from nearh.api.v1.dependencies.db import get_auth_db, get_db
from nearh.api.v1.dependencies.services import (
    get_approval_service,
    get_auth_service,
    get_hospital_profile_service,
    get_master_data_service,
)

__all__ = [
    "get_approval_service",
    "get_auth_db",
    "get_auth_service",
    "get_background",
    "get_cache",
    "get_current_identity",
    "get_current_identity_optional",
    "get_current_profile",
    "get_db",
    "get_hospital_profile_service",
    "get_master_data_cache_service",
    "get_master_data_service",
    "get_profile_cache_service",
    "get_profile_invalidator",
    "require_approved_admin",
    "require_superadmin",
]
