""" Repository module for the persistence layer. """

from farmledger.infrastructure.persistence.repositories.authority_repo import (
    AuthorityCenterRepository, AuthorityRepository,
    FarmCertificationRepository)
from farmledger.infrastructure.persistence.repositories.base import \
    BaseRepository
from farmledger.infrastructure.persistence.repositories.contract_repo import \
    ContractAccountRepository
from farmledger.infrastructure.persistence.repositories.farm_repo import (
    ChickenRepository, EggRepository, FarmRepository)
from farmledger.infrastructure.persistence.repositories.ledger_event_repo import \
    LedgerEventRepository
from farmledger.infrastructure.persistence.repositories.tracker_repo import (
    ChickenEggTrackerRepository, TrackedChickenRepository,
    TrackedEggRepository)

__all__ = [
    "BaseRepository",
    "ContractAccountRepository",
    "AuthorityCenterRepository",
    "AuthorityRepository",
    "FarmCertificationRepository",
    "FarmRepository",
    "ChickenRepository",
    "EggRepository",
    "ChickenEggTrackerRepository",
    "TrackedChickenRepository",
    "TrackedEggRepository",
    "LedgerEventRepository",
]
