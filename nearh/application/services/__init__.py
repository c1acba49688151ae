"""Application services: read-through caches and the write flows that invalidate them."""

from nearh.application.services.approval_service import ApprovalService
from nearh.application.services.auth_service import AuthService
from nearh.application.services.hospital_profile_service import HospitalProfileService
from nearh.application.services.master_data_cache_service import MasterDataCacheService
from nearh.application.services.master_data_service import MasterDataService
from nearh.application.services.profile_cache_service import ProfileCacheService

__all__ = [
    "ApprovalService",
    "AuthService",
    "HospitalProfileService",
    "MasterDataCacheService",
    "MasterDataService",
    "ProfileCacheService",
]
