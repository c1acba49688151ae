"""Auth API: signup, login, logout and the caller's authorization profile.

Login and signup return the JWT and also set it as an HTTP-only cookie so
the request gate can read it on page requests.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from nearh.api.v1.dependencies import (
    get_auth_service,
    get_current_identity_optional,
    get_current_profile,
)
from nearh.application.dtos.auth import AuthResult, SignupData
from nearh.application.dtos.profile import CachedProfile
from nearh.application.services import AuthService
from nearh.core.config import get_settings
from nearh.core.limiter import limit_auth
from nearh.schemas.approvals import MessageResponse
from nearh.schemas.auth import LoginRequest, SignupRequest, TokenResponse
from nearh.schemas.profile import ProfileResponse

router = APIRouter()


def _set_token_cookie(response: Response, token: str) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.access_token_cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.access_token_cookie_secure,
        samesite="lax",
        path="/",
    )


def _token_response(response: Response, result: AuthResult) -> TokenResponse:
    _set_token_cookie(response, result.access_token)
    return TokenResponse(
        user_id=result.user_id,
        access_token=result.access_token,
        token_type=result.token_type,
    )


@router.post("/signup", response_model=TokenResponse, status_code=201)
@limit_auth
async def signup(
    request: Request,
    response: Response,
    body: SignupRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a hospital admin and their hospital. The account starts pending approval."""
    result = await auth_service.signup(SignupData(**body.model_dump()))
    return _token_response(response, result)


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    response: Response,
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Authenticate with email and password; return JWT and set the cookie."""
    result = await auth_service.login(body.email, body.password)
    return _token_response(response, result)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    identity: Annotated[str | None, Depends(get_current_identity_optional)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Clear the cookie and drop the caller's cached profile."""
    if identity is not None:
        await auth_service.logout(identity)
    response.delete_cookie(get_settings().access_token_cookie_name, path="/")
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=ProfileResponse)
async def get_me(profile: Annotated[CachedProfile, Depends(get_current_profile)]):
    """Return the caller's role, approval status and hospital."""
    return ProfileResponse.model_validate(profile)
