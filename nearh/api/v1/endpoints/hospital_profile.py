"""Hospital profile API: an approved admin edits their own hospital."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from nearh.api.v1.dependencies import get_hospital_profile_service, require_approved_admin
from nearh.application.dtos.hospital import HospitalProfileChanges
from nearh.application.dtos.profile import CachedProfile
from nearh.application.services import HospitalProfileService
from nearh.core.limiter import limit_writes
from nearh.schemas.hospital import HospitalProfileResponse, HospitalProfileUpdate

router = APIRouter()


@router.patch("", response_model=HospitalProfileResponse)
@limit_writes
async def update_hospital_profile(
    request: Request,
    body: HospitalProfileUpdate,
    profile: Annotated[CachedProfile, Depends(require_approved_admin)],
    service: Annotated[HospitalProfileService, Depends(get_hospital_profile_service)],
):
    changes = HospitalProfileChanges(fields=body.hospital_fields(), service_ids=body.service_ids)
    hospital_id = await service.update_hospital_profile(profile, changes)
    return HospitalProfileResponse(hospital_id=hospital_id)
