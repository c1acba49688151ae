"""Superadmin approvals API: approve, reject-and-purge, status change.

Each action deletes the affected admin's cached profile, so the request
gate sees the new status on that admin's next page load.
"""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Request

from nearh.api.v1.dependencies import get_approval_service, require_superadmin
from nearh.application.services import ApprovalService
from nearh.core.limiter import limit_writes
from nearh.schemas.approvals import ApprovalRequest, MessageResponse, StatusUpdate
from nearh.schemas.profile import ProfileResponse

router = APIRouter(dependencies=[Depends(require_superadmin)])


@router.post("/{profile_id}/approve", response_model=ProfileResponse)
@limit_writes
async def approve_hospital(
    request: Request,
    profile_id: str,
    service: Annotated[ApprovalService, Depends(get_approval_service)],
    body: Annotated[ApprovalRequest | None, Body()] = None,
):
    """Verify the hospital and approve its admin. 409 if already approved."""
    profile = await service.approve_hospital(profile_id, body.hospital_id if body else None)
    return ProfileResponse.model_validate(profile)


@router.post("/{profile_id}/reject", response_model=MessageResponse)
@limit_writes
async def reject_and_purge(
    request: Request,
    profile_id: str,
    service: Annotated[ApprovalService, Depends(get_approval_service)],
    body: Annotated[ApprovalRequest | None, Body()] = None,
):
    """Delete an unverified hospital and its admin. 409 if the hospital is verified."""
    await service.reject_and_purge(profile_id, body.hospital_id if body else None)
    return MessageResponse(message="Application rejected and all associated data purged.")


@router.patch("/{profile_id}/status", response_model=ProfileResponse)
@limit_writes
async def update_status(
    request: Request,
    profile_id: str,
    body: StatusUpdate,
    service: Annotated[ApprovalService, Depends(get_approval_service)],
):
    profile = await service.set_status(profile_id, body.status)
    return ProfileResponse.model_validate(profile)
