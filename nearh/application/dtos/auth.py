"""DTOs for signup and login use cases."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SignupData:
    """Admin signup: account credentials plus the hospital being registered."""

    email: str
    password: str
    full_name: str
    hospital_name: str
    official_email: str
    official_phone: str
    location_id: str | None = None
    has_ayushman_bharat: bool = False
    emergency_contact: str | None = None


@dataclass(frozen=True)
class AuthResult:
    """Issued access token for an identity."""

    user_id: str
    access_token: str
    token_type: str = "bearer"
