from farmledger.infrastructure.persistence.models.authority_center import (
    Authority, AuthorityCenter, FarmCertification)
from farmledger.infrastructure.persistence.models.contract_account import \
    ContractAccount
from farmledger.infrastructure.persistence.models.farm import Chicken, Egg, Farm
from farmledger.infrastructure.persistence.models.ledger_event import (
    LedgerEvent, LedgerHead)
# Mixins for model composition
from farmledger.infrastructure.persistence.models.mixins import (
    CenterScopedMixin, CuidMixin, FarmScopedMixin, TrackerScopedMixin)
from farmledger.infrastructure.persistence.models.tracker import (
    ChickenEggTracker, TrackedChicken, TrackedEgg)

__all__ = [
    # Models
    "ContractAccount",
    "AuthorityCenter",
    "Authority",
    "FarmCertification",
    "Farm",
    "Chicken",
    "Egg",
    "ChickenEggTracker",
    "TrackedChicken",
    "TrackedEgg",
    "LedgerEvent",
    "LedgerHead",
    # Mixins
    "CuidMixin",
    "CenterScopedMixin",
    "FarmScopedMixin",
    "TrackerScopedMixin",
]
