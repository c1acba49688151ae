"""Auth API schemas."""

from pydantic import BaseModel, EmailStr, Field


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class SignupRequest(BaseModel):
    """Hospital admin signup: account plus the hospital being registered."""

    email: EmailStr
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    full_name: str = Field(..., min_length=1, max_length=255)
    hospital_name: str = Field(..., min_length=1, max_length=255)
    official_email: EmailStr
    official_phone: str = Field(..., min_length=5, max_length=32)
    location_id: str | None = None
    has_ayushman_bharat: bool = False
    emergency_contact: str | None = Field(default=None, max_length=32)


class TokenResponse(BaseModel):
    """JWT token response. The same token is also set as an HTTP-only cookie."""

    user_id: str
    access_token: str
    token_type: str = "bearer"
