"""Request gate: per-request authorization routing for the web pages.

On every HTTP request the gate resolves the caller's identity from the
access-token cookie (or a Bearer header), reads the authorization profile
through ProfileCacheService and either lets the request through or answers
307 with a Location header. API routes, docs and static assets pass
through untouched; the API enforces authorization in its own dependencies.

The profile lookup obeys the profile cache read timeout and never waits
for the cache backfill, so a slow or unavailable cache store does not slow
page loads beyond that bound.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from starlette.requests import cookie_parser

from nearh.application.dtos.profile import CachedProfile
from nearh.application.services.profile_cache_service import ProfileCacheService
from nearh.core.config import get_settings
from nearh.core.constants import (
    ADMIN_HOME_PATH,
    LOGIN_PATH,
    PUBLIC_HOME_PATH,
    SUPERADMIN_HOME_PATH,
    WAITING_ROOM_PATH,
)
from nearh.domain.enums import ApprovalStatus, UserRole
from nearh.infrastructure.persistence.database import get_session_factory
from nearh.infrastructure.persistence.repositories.profile_repo import ProfileRepository
from nearh.infrastructure.security.jwt import identity_from_token
from nearh.middleware.request_id import get_header

logger = logging.getLogger(__name__)

ProfileLookup = Callable[[dict, str], Awaitable[CachedProfile | None]]

_PASS_THROUGH_PREFIXES = ("/static/", "/api/", "/docs", "/redoc", "/openapi.json", "/favicon.ico")
_IMAGE_SUFFIXES = (".svg", ".png", ".jpg", ".jpeg", ".gif", ".webp", ".ico")


def is_pass_through(path: str) -> bool:
    """Static assets, API routes and API docs skip the gate."""
    return path.startswith(_PASS_THROUGH_PREFIXES) or path.lower().endswith(_IMAGE_SUFFIXES)


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix + "/")


def _is_superadmin(profile: CachedProfile | None) -> bool:
    return profile is not None and profile.role is UserRole.SUPERADMIN


def dashboard_for(profile: CachedProfile | None) -> str:
    return SUPERADMIN_HOME_PATH if _is_superadmin(profile) else ADMIN_HOME_PATH


def _is_approved_admin(profile: CachedProfile | None) -> bool:
    return profile is not None and profile.role is UserRole.ADMIN and profile.is_approved


def decide_route(path: str, identity: str | None, profile: CachedProfile | None) -> str | None:
    """Return the redirect target for a page request, or None to let it through.

    Rules, first match wins:
      1. signed in and pending -> waiting room (unless already there)
      2. signed in and approved on the waiting room -> dashboard
      3. signed in on any other /auth page -> dashboard
      4. /shared: anonymous -> login; not an approved admin or superadmin -> home
      5. /superadmin: anonymous -> login; not a superadmin -> home
      6. /admin: anonymous -> login; not an approved admin -> home
    """
    signed_in = identity is not None

    if signed_in and profile is not None and profile.status is ApprovalStatus.PENDING:
        return None if path == WAITING_ROOM_PATH else WAITING_ROOM_PATH

    # Covers rules 2 and 3: nobody who is signed in and not pending stays on /auth.
    if signed_in and _under(path, "/auth"):
        return dashboard_for(profile)

    if _under(path, "/shared"):
        if not signed_in:
            return LOGIN_PATH
        if not (_is_approved_admin(profile) or _is_superadmin(profile)):
            return PUBLIC_HOME_PATH
        return None

    if path.startswith(SUPERADMIN_HOME_PATH):
        if not signed_in:
            return LOGIN_PATH
        if not _is_superadmin(profile):
            return PUBLIC_HOME_PATH
        return None

    if path.startswith(ADMIN_HOME_PATH):
        if not signed_in:
            return LOGIN_PATH
        if not _is_approved_admin(profile):
            return PUBLIC_HOME_PATH
        return None

    return None


def identity_from_scope(scope: dict, cookie_name: str) -> str | None:
    """Verified identity from the access-token cookie, else from a Bearer header."""
    token: str | None = None
    cookie_header = get_header(scope, "cookie")
    if cookie_header:
        token = cookie_parser(cookie_header).get(cookie_name)
    if not token:
        auth = get_header(scope, "authorization")
        if auth and auth.lower().startswith("bearer "):
            token = auth[7:].strip()
    return identity_from_token(token)


async def lookup_profile_from_database(scope: dict, identity: str) -> CachedProfile | None:
    """Default lookup: ProfileCacheService over a short-lived session.

    Returns None when the SQL store is not configured.
    """
    factory = get_session_factory()
    if factory is None:
        return None
    state = scope["app"].state
    settings = get_settings()
    async with factory() as session:
        service = ProfileCacheService(
            ProfileRepository(session),
            cache=getattr(state, "cache", None),
            background=getattr(state, "background", None),
            ttl=settings.cache_ttl_profile,
            read_timeout=settings.profile_cache_timeout_seconds,
        )
        return await service.get_authorized_profile(identity)


async def _redirect(send: Callable, location: str) -> None:
    await send(
        {
            "type": "http.response.start",
            "status": 307,
            "headers": [
                (b"location", location.encode()),
                (b"content-length", b"0"),
                (b"cache-control", b"no-store"),
            ],
        }
    )
    await send({"type": "http.response.body", "body": b"", "more_body": False})


def RequestGateMiddleware(
    app: Callable,
    profile_lookup: ProfileLookup | None = None,
    cookie_name: str = "access_token",
) -> Callable:
    """Redirect page requests according to decide_route. Raw ASGI.

    Stores the resolved identity and profile on request.state (identity,
    profile) for downstream handlers.
    """
    lookup = profile_lookup or lookup_profile_from_database

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http" or is_pass_through(scope.get("path", "")):
            await app(scope, receive, send)
            return

        path = scope.get("path", "")
        identity = identity_from_scope(scope, cookie_name)
        profile: CachedProfile | None = None
        if identity is not None:
            try:
                profile = await lookup(scope, identity)
            except Exception:
                # ProfileCacheService is total; this guards custom lookups only.
                logger.exception("Profile lookup failed in request gate for %s", identity)
                profile = None

        state = scope.setdefault("state", {})
        state["identity"] = identity
        state["profile"] = profile

        target = decide_route(path, identity, profile)
        if target is not None and target != path:
            logger.debug("Request gate: %s -> %s", path, target)
            await _redirect(send, target)
            return
        await app(scope, receive, send)

    return asgi_app
