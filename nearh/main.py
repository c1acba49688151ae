"""FastAPI application entry point.

Wiring only: lifespan, exception handlers, middleware, routers, pages.
Settings are loaded inside create_app() so that tests can set env (and
clear the get_settings cache) before calling it.
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from nearh.api.v1 import api_router
from nearh.core.config import get_settings
from nearh.core.constants import (
    ADMIN_HOME_PATH,
    LOGIN_PATH,
    PUBLIC_HOME_PATH,
    SUPERADMIN_HOME_PATH,
    WAITING_ROOM_PATH,
)
from nearh.core.exception_handlers import register_exception_handlers
from nearh.core.lifespan import create_lifespan
from nearh.core.limiter import limiter
from nearh.middleware import RequestGateMiddleware, RequestIDMiddleware, TimeoutMiddleware
from nearh.middleware.request_gate import ProfileLookup
from nearh.pages import render_page
from nearh.shared.telemetry.logging import setup_logging

_PAGES: dict[str, tuple[str, str]] = {
    PUBLIC_HOME_PATH: ("NearH", "Find hospitals, services and specialties near you."),
    LOGIN_PATH: ("Sign in", "Sign in with your hospital admin account."),
    WAITING_ROOM_PATH: ("Waiting room", "Your hospital registration is awaiting approval."),
    ADMIN_HOME_PATH: ("Hospital dashboard", "Manage your hospital profile and services."),
    SUPERADMIN_HOME_PATH: ("Superadmin", "Approve hospitals and manage master data."),
    "/shared": ("Shared", "Pages shared by hospital admins and superadmins."),
}


def create_app(profile_lookup: ProfileLookup | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Args:
        profile_lookup: Optional replacement for the request gate's profile
            lookup (tests); defaults to the profile cache over the database.
    """
    settings = get_settings()
    setup_logging()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    register_exception_handlers(app)

    # Middleware: last added = outermost. Order: timeout -> request ID -> request gate -> CORS.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in settings.allowed_origins.split(",") if o.strip()],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        RequestGateMiddleware,
        profile_lookup=profile_lookup,
        cookie_name=settings.access_token_cookie_name,
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)
    app.add_middleware(TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds)

    app.include_router(api_router, prefix="/api/v1")

    for path, (title, message) in _PAGES.items():
        _add_page(app, path, title, message, settings.app_name)

    return app


def _add_page(app: FastAPI, path: str, title: str, message: str, app_name: str) -> None:
    async def page(request: Request) -> HTMLResponse:
        profile = getattr(request.state, "profile", None)
        return HTMLResponse(content=render_page(app_name, title, message, profile))

    app.add_api_route(
        path,
        page,
        methods=["GET"],
        response_class=HTMLResponse,
        include_in_schema=False,
        name=f"page:{path}",
    )


app = create_app()
