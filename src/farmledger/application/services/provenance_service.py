"""
Provenance lookups: follow an egg back to its chicken and farm.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from farmledger.domain.entities import ChickenEntity, EggEntity, FarmEntity

if TYPE_CHECKING:
    from farmledger.application.use_cases.farm import FarmContract


@dataclass
class EggProvenance:
    egg: EggEntity
    chicken: ChickenEntity
    farm: FarmEntity
    is_certified: bool


class ProvenanceService:
    def __init__(self, farm: "FarmContract") -> None:
        self.farm = farm

    async def trace_egg(self, egg_id: int) -> EggProvenance:
        """
        Egg, its parent chicken (alive or not) and the farm's current
        certification status.
        """
        egg = await self.farm.get_egg(egg_id)
        chicken = await self.farm.get_chicken(egg.chicken_id)
        return EggProvenance(
            egg=egg,
            chicken=chicken,
            farm=await self.farm.get_info(),
            is_certified=await self.farm.is_certified(),
        )
