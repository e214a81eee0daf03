"""
Domain layer - Enterprise Business Rules.

Entities, value objects, enums and domain exceptions of the farm provenance
registry. It has no dependencies on other layers.
"""

from farmledger.domain.entities import (ChickenEntity, EggEntity,
                                        FarmCertificationEntity, FarmEntity,
                                        TrackedChickenEntity, TrackedEggEntity)
from farmledger.domain.enums import (AuthorityAdmission, ContractKind,
                                     LedgerEventType)
from farmledger.domain.exceptions import (AlreadyExistsError,
                                          InvalidStateError, LedgerException,
                                          NotFoundError, UnauthorizedError,
                                          ValidationException)
from farmledger.domain.value_objects import Address

__all__ = [
    # Entities
    "FarmEntity",
    "ChickenEntity",
    "EggEntity",
    "FarmCertificationEntity",
    "TrackedChickenEntity",
    "TrackedEggEntity",
    # Value Objects
    "Address",
    # Enums
    "AuthorityAdmission",
    "ContractKind",
    "LedgerEventType",
    # Exceptions
    "LedgerException",
    "ValidationException",
    "UnauthorizedError",
    "AlreadyExistsError",
    "NotFoundError",
    "InvalidStateError",
]
