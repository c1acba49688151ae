"""Authentication and authorization dependencies.

Identity comes from the Bearer token or the access-token cookie; role and
status always come from the authorization profile cache, never from the
token, so approvals take effect on the next request.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from nearh.api.v1.dependencies.cache import get_profile_cache_service
from nearh.application.dtos.profile import CachedProfile
from nearh.application.services.profile_cache_service import ProfileCacheService
from nearh.core.config import get_settings
from nearh.domain.enums import UserRole
from nearh.domain.exceptions import AuthenticationException, AuthorizationException
from nearh.infrastructure.security.jwt import identity_from_token

_http_bearer = HTTPBearer(auto_error=False)


def get_current_identity_optional(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
) -> str | None:
    """Verified identity (JWT sub) or None."""
    if credentials is not None:
        return identity_from_token(credentials.credentials)
    cookie = request.cookies.get(get_settings().access_token_cookie_name)
    return identity_from_token(cookie)


def get_current_identity(
    identity: Annotated[str | None, Depends(get_current_identity_optional)],
) -> str:
    if identity is None:
        raise AuthenticationException("Not authenticated")
    return identity


async def get_current_profile(
    identity: Annotated[str, Depends(get_current_identity)],
    profile_cache: Annotated[ProfileCacheService, Depends(get_profile_cache_service)],
) -> CachedProfile:
    """Authorization profile of the caller; 403 when the identity has no profile."""
    profile = await profile_cache.get_authorized_profile(identity)
    if profile is None:
        raise AuthorizationException(message="No profile found for this account")
    return profile


async def require_superadmin(
    profile: Annotated[CachedProfile, Depends(get_current_profile)],
) -> CachedProfile:
    if profile.role is not UserRole.SUPERADMIN:
        raise AuthorizationException(required_role=UserRole.SUPERADMIN.value)
    return profile


async def require_approved_admin(
    profile: Annotated[CachedProfile, Depends(get_current_profile)],
) -> CachedProfile:
    if profile.role is not UserRole.ADMIN or not profile.is_approved:
        raise AuthorizationException(
            required_role=UserRole.ADMIN.value,
            message="An approved hospital admin account is required",
        )
    return profile
