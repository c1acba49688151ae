"""Superadmin approval API schemas."""

from pydantic import BaseModel, Field

from nearh.domain.enums import ApprovalStatus


class ApprovalRequest(BaseModel):
    """Optional explicit hospital; defaults to the profile's associated hospital."""

    hospital_id: str | None = Field(default=None, min_length=1)


class StatusUpdate(BaseModel):
    status: ApprovalStatus


class MessageResponse(BaseModel):
    message: str
