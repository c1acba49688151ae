"""Domain layer: enums and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from nearh.domain.enums import ApprovalStatus, MasterListType, UserRole
from nearh.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    DuplicateResourceException,
    MasterDataFetchError,
    NearHException,
    ResourceInUseException,
    ResourceNotFoundException,
    SqlNotConfiguredException,
    ValidationException,
)

__all__ = [
    # Enums
    "ApprovalStatus",
    "MasterListType",
    "UserRole",
    # Exceptions
    "AuthenticationException",
    "AuthorizationException",
    "ConflictException",
    "DuplicateResourceException",
    "MasterDataFetchError",
    "NearHException",
    "ResourceInUseException",
    "ResourceNotFoundException",
    "SqlNotConfiguredException",
    "ValidationException",
]
