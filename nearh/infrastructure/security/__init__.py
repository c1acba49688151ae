"""Security: JWT access tokens and password hashing."""

from nearh.infrastructure.security.jwt import (
    create_access_token,
    identity_from_token,
    verify_token,
)
from nearh.infrastructure.security.password import get_password_hash, verify_password

__all__ = [
    "create_access_token",
    "get_password_hash",
    "identity_from_token",
    "verify_password",
    "verify_token",
]
