"""JWT access tokens for NearH identities.

The token subject (sub) is the identity: the user_account id, which is
also the profile id. Secret, algorithm and lifetime come from settings.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from nearh.core.config import get_settings

logger = logging.getLogger(__name__)


def create_access_token(
    subject: str,
    extra_claims: dict[str, Any] | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token for subject.

    Role and status are deliberately not embedded: they change on approval
    and are read through the profile cache on every request.

    Args:
        subject: Identity (user_account id).
        extra_claims: Optional additional claims (e.g. email).
        expires_delta: Optional TTL; else settings.access_token_expire_minutes.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = dict(extra_claims or {})
    claims["sub"] = subject
    claims["exp"] = datetime.now(UTC) + lifetime
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def verify_token(token: str) -> dict[str, Any]:
    """Decode and validate a token, requiring exp and sub.

    Raises:
        ValueError: If the token is malformed, expired or lacks sub.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if not payload.get("sub"):
        raise ValueError("Token missing required claim: sub")
    return payload


def identity_from_token(token: str | None) -> str | None:
    """Return the verified identity for token, or None when absent or invalid."""
    if not token:
        return None
    try:
        return str(verify_token(token)["sub"])
    except ValueError as e:
        logger.debug("Ignoring invalid access token: %s", e)
        return None
