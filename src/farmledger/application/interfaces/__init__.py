"""
Application layer interfaces (ports).

These protocols define the contracts between the application layer
and the infrastructure layer, following the Dependency Inversion Principle.
"""

from farmledger.application.interfaces.repositories import (
    IAuthorityCenterRepository, IAuthorityRepository, IChickenRepository,
    IContractAccountRepository, IEggRepository, IFarmCertificationRepository,
    IFarmRepository, ILedgerEventRepository, IStorageRepository,
    ITrackedChickenRepository, ITrackedEggRepository, ITrackerRepository)
from farmledger.application.interfaces.services import (IAuthorizationCheck,
                                                        ICertificationReader,
                                                        IClock, IEventLog,
                                                        IFarmReader,
                                                        IHashService)

__all__ = [
    # Repository interfaces
    "IContractAccountRepository",
    "IStorageRepository",
    "IAuthorityCenterRepository",
    "IAuthorityRepository",
    "IFarmCertificationRepository",
    "IFarmRepository",
    "IChickenRepository",
    "IEggRepository",
    "ITrackerRepository",
    "ITrackedChickenRepository",
    "ITrackedEggRepository",
    "ILedgerEventRepository",
    # Service interfaces
    "IHashService",
    "IClock",
    "IEventLog",
    "IAuthorizationCheck",
    "IFarmReader",
    "ICertificationReader",
]
