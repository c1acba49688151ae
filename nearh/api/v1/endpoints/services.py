"""Services catalog API: public list (cached), superadmin create/update/delete."""

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
from nearh.schemas.master_data import ServiceCreate, ServiceResponse, ServiceUpdate

router = APIRouter()


@router.get("", response_model=list[ServiceResponse])
async def list_services(
    master_cache: Annotated[MasterDataCacheService, Depends(get_master_data_cache_service)],
):
    """All services ordered by name."""
    return await master_cache.get_cached_services()


@router.post(
    "",
    response_model=ServiceResponse,
    status_code=201,
    dependencies=[Depends(require_superadmin)],
)
@limit_writes
async def create_service(
    request: Request,
    body: ServiceCreate,
    service: Annotated[MasterDataService, Depends(get_master_data_service)],
):
    return await service.add_item(MasterListType.SERVICES, **body.model_dump())


@router.patch(
    "/{service_id}",
    response_model=ServiceResponse,
    dependencies=[Depends(require_superadmin)],
)
@limit_writes
async def update_service(
    request: Request,
    service_id: str,
    body: ServiceUpdate,
    service: Annotated[MasterDataService, Depends(get_master_data_service)],
):
    return await service.update_item(
        MasterListType.SERVICES, service_id, **body.model_dump(exclude_unset=True)
    )


@router.delete(
    "/{service_id}",
    status_code=204,
    dependencies=[Depends(require_superadmin)],
)
@limit_writes
async def delete_service(
    request: Request,
    service_id: str,
    service: Annotated[MasterDataService, Depends(get_master_data_service)],
):
    """Delete a service. 409 while hospitals still offer it."""
    await service.delete_item(MasterListType.SERVICES, service_id)
    return Response(status_code=204)
