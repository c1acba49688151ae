"""Application interfaces (ports): repository and service protocols."""

from nearh.application.interfaces.repositories import (
    IHospitalRepository,
    IMasterListReader,
    IMasterListRepository,
    IProfileReader,
    IProfileRepository,
    IUserAccountRepository,
)
from nearh.application.interfaces.services import (
    ICacheService,
    IMasterListInvalidator,
    IProfileInvalidator,
    IUnitOfWork,
)

__all__ = [
    "ICacheService",
    "IHospitalRepository",
    "IMasterListInvalidator",
    "IMasterListReader",
    "IMasterListRepository",
    "IProfileInvalidator",
    "IProfileReader",
    "IProfileRepository",
    "IUnitOfWork",
    "IUserAccountRepository",
]
