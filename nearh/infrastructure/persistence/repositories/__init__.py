"""Repositories over the NearH tables. Methods return application DTOs."""

from nearh.infrastructure.persistence.repositories.hospital_repo import HospitalRepository
from nearh.infrastructure.persistence.repositories.master_data_repo import (
    LocationRepository,
    MasterListRepository,
    ServiceListRepository,
    SpecialtyRepository,
    master_repositories,
)
from nearh.infrastructure.persistence.repositories.profile_repo import ProfileRepository
from nearh.infrastructure.persistence.repositories.user_account_repo import (
    UserAccountRepository,
)

__all__ = [
    "HospitalRepository",
    "LocationRepository",
    "MasterListRepository",
    "ProfileRepository",
    "ServiceListRepository",
    "SpecialtyRepository",
    "UserAccountRepository",
    "master_repositories",
]
