"""Application use cases: one class per ledger contract, plus deployment."""

from farmledger.application.use_cases.authority_center import \
    AuthorityCenterContract
from farmledger.application.use_cases.chicken_egg_tracker import \
    ChickenEggTrackerContract
from farmledger.application.use_cases.deployment import ContractDeployer
from farmledger.application.use_cases.farm import FarmContract

__all__ = [
    "AuthorityCenterContract",
    "FarmContract",
    "ChickenEggTrackerContract",
    "ContractDeployer",
]
