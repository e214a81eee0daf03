"""Domain enumerations for the FarmLedger registry."""

from enum import Enum


class ContractKind(str, Enum):
    """Kinds of contract that can be deployed on the ledger"""

    AUTHORITY_CENTER = "AuthorityCenter"
    FARM = "Farm"
    CHICKEN_EGG_TRACKER = "ChickenEggTracker"

    @classmethod
    def values(cls) -> list[str]:
        """Get all valid values"""
        return [kind.value for kind in cls]


class AuthorityAdmission(str, Enum):
    """Who may call AuthorityCenter.add_authority"""

    # Owner or any existing authority
    AUTHORITIES = "authorities"
    # Owner only (Ownable semantics)
    OWNER = "owner"

    @classmethod
    def values(cls) -> list[str]:
        return [policy.value for policy in cls]


class LedgerEventType(str, Enum):
    """Events emitted by ledger contracts, named like their on-chain logs"""

    AUTHORITY_ADDED = "AuthorityAdded"
    AUTHORITY_REMOVED = "AuthorityRemoved"
    FARM_REGISTERED = "FarmRegistered"
    FARM_REMOVED = "FarmRemoved"
    FARM_INFO_UPDATED = "FarmInfoUpdated"
    CHICKEN_REGISTERED = "ChickenRegistered"
    CHICKEN_INFO_UPDATED = "ChickenInfoUpdated"
    CHICKEN_REMOVED = "ChickenRemoved"
    EGG_REGISTERED = "EggRegistered"
    EGG_INFO_UPDATED = "EggInfoUpdated"
    EGG_REMOVED = "EggRemoved"

    @classmethod
    def values(cls) -> list[str]:
        return [event_type.value for event_type in cls]
