"""Specialties API: public list (cached), superadmin create/update/delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, Response

from nearh.api.v1.dependencies import (
    get_master_data_cache_service,
    get_master_data_service,
    require_superadmin,
)
from nearh.application.services import MasterDataCacheService, MasterDataService
from nearh.core.limiter import limit_writes
from nearh.domain.enums import MasterListType
from nearh.schemas.master_data import SpecialtyCreate, SpecialtyResponse, SpecialtyUpdate

router = APIRouter()


@router.get("", response_model=list[SpecialtyResponse])
async def list_specialties(
    master_cache: Annotated[MasterDataCacheService, Depends(get_master_data_cache_service)],
):
    return await master_cache.get_cached_specialties()


@router.post(
    "",
    response_model=SpecialtyResponse,
    status_code=201,
    dependencies=[Depends(require_superadmin)],
)
@limit_writes
async def create_specialty(
    request: Request,
    body: SpecialtyCreate,
    service: Annotated[MasterDataService, Depends(get_master_data_service)],
):
    return await service.add_item(MasterListType.SPECIALTIES, **body.model_dump())


@router.patch(
    "/{specialty_id}",
    response_model=SpecialtyResponse,
    dependencies=[Depends(require_superadmin)],
)
@limit_writes
async def update_specialty(
    request: Request,
    specialty_id: str,
    body: SpecialtyUpdate,
    service: Annotated[MasterDataService, Depends(get_master_data_service)],
):
    return await service.update_item(
        MasterListType.SPECIALTIES, specialty_id, **body.model_dump(exclude_unset=True)
    )


@router.delete(
    "/{specialty_id}",
    status_code=204,
    dependencies=[Depends(require_superadmin)],
)
@limit_writes
async def delete_specialty(
    request: Request,
    specialty_id: str,
    service: Annotated[MasterDataService, Depends(get_master_data_service)],
):
    await service.delete_item(MasterListType.SPECIALTIES, specialty_id)
    return Response(status_code=204)
