"""API v1 router aggregation."""

from fastapi import APIRouter

from nearh.api.v1.endpoints import (
    approvals,
    auth,
    health,
    hospital_profile,
    locations,
    services,
    specialties,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(locations.router, prefix="/locations", tags=["master-data"])
api_router.include_router(services.router, prefix="/services", tags=["master-data"])
api_router.include_router(specialties.router, prefix="/specialties", tags=["master-data"])
api_router.include_router(approvals.router, prefix="/approvals", tags=["approvals"])
api_router.include_router(
    hospital_profile.router, prefix="/hospital-profile", tags=["hospital-profile"]
)
