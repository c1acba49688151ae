"""ORM models. Importing this package registers every table on Base.metadata."""

from nearh.infrastructure.persistence.models.hospital import Hospital, HospitalService
from nearh.infrastructure.persistence.models.location import Location
from nearh.infrastructure.persistence.models.profile import Profile
from nearh.infrastructure.persistence.models.service import ServiceListItem
from nearh.infrastructure.persistence.models.specialty import Specialty
from nearh.infrastructure.persistence.models.user_account import UserAccount

__all__ = [
    "Hospital",
    "HospitalService",
    "Location",
    "Profile",
    "ServiceListItem",
    "Specialty",
    "UserAccount",
]
