"""Authorization profile API schemas."""

from pydantic import BaseModel, ConfigDict

from nearh.domain.enums import ApprovalStatus, UserRole


class ProfileResponse(BaseModel):
    """Caller's role, approval status and hospital (GET /auth/me)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    role: UserRole
    status: ApprovalStatus
    associated_hospital_id: str | None = None
