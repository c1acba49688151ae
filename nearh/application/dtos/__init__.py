"""Application DTOs (no dependency on ORM)."""

from nearh.application.dtos.auth import AuthResult, SignupData
from nearh.application.dtos.hospital import HospitalProfileChanges
from nearh.application.dtos.master_data import (
    LocationResult,
    MasterItem,
    ServiceResult,
    SpecialtyResult,
)
from nearh.application.dtos.profile import CachedProfile

__all__ = [
    "AuthResult",
    "CachedProfile",
    "HospitalProfileChanges",
    "LocationResult",
    "MasterItem",
    "ServiceResult",
    "SignupData",
    "SpecialtyResult",
]
