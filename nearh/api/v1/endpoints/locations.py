"""Locations API: public list (cached), superadmin create/update/delete."""

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
from nearh.schemas.master_data import LocationCreate, LocationResponse, LocationUpdate

router = APIRouter()


@router.get("", response_model=list[LocationResponse])
async def list_locations(
    master_cache: Annotated[MasterDataCacheService, Depends(get_master_data_cache_service)],
):
    """All locations ordered by city. Served from the master-data cache."""
    return await master_cache.get_cached_locations()


@router.post(
    "",
    response_model=LocationResponse,
    status_code=201,
    dependencies=[Depends(require_superadmin)],
)
@limit_writes
async def create_location(
    request: Request,
    body: LocationCreate,
    service: Annotated[MasterDataService, Depends(get_master_data_service)],
):
    return await service.add_item(MasterListType.LOCATIONS, **body.model_dump())


@router.patch(
    "/{location_id}",
    response_model=LocationResponse,
    dependencies=[Depends(require_superadmin)],
)
@limit_writes
async def update_location(
    request: Request,
    location_id: str,
    body: LocationUpdate,
    service: Annotated[MasterDataService, Depends(get_master_data_service)],
):
    return await service.update_item(
        MasterListType.LOCATIONS, location_id, **body.model_dump(exclude_unset=True)
    )


@router.delete(
    "/{location_id}",
    status_code=204,
    dependencies=[Depends(require_superadmin)],
)
@limit_writes
async def delete_location(
    request: Request,
    location_id: str,
    service: Annotated[MasterDataService, Depends(get_master_data_service)],
):
    """Delete a location. 409 while hospitals are registered in it."""
    await service.delete_item(MasterListType.LOCATIONS, location_id)
    return Response(status_code=204)
