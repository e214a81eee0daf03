"""Domain entities."""

from farmledger.domain.entities.certification import FarmCertificationEntity
from farmledger.domain.entities.farm import ChickenEntity, EggEntity, FarmEntity
from farmledger.domain.entities.tracker import TrackedChickenEntity, TrackedEggEntity

__all__ = [
    "FarmCertificationEntity",
    "FarmEntity",
    "ChickenEntity",
    "EggEntity",
    "TrackedChickenEntity",
    "TrackedEggEntity",
]
