"""
Farm use case.

Per-farm registry of chickens and eggs with integer ids handed out from the
farm's counters. Only the farm owner mutates; anyone reads.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from farmledger.domain.entities import ChickenEntity, EggEntity, FarmEntity
from farmledger.domain.enums import LedgerEventType
from farmledger.domain.exceptions import (ChickenNotAliveError,
                                          ChickenNotFoundError,
                                          ContractNotFoundError,
                                          EggNotFoundError, OnlyOwnerError)
from farmledger.domain.value_objects import Address
from farmledger.shared.logging import get_logger

if TYPE_CHECKING:
    from farmledger.application.interfaces.repositories import (
        IChickenRepository, IEggRepository, IFarmRepository)
    from farmledger.application.interfaces.services import (
        ICertificationReader, IClock, IEventLog)

logger = get_logger(__name__)


class FarmContract:
    """
    Operations of one deployed Farm.

    Every mutating call checks that the caller is the owner first, then checks
    the referenced chicken or egg, and only then writes.
    """

    def __init__(
        self,
        address: Address,
        farm_repo: "IFarmRepository",
        chicken_repo: "IChickenRepository",
        egg_repo: "IEggRepository",
        event_log: "IEventLog",
        clock: "IClock",
        certification_reader: "ICertificationReader | None" = None,
    ) -> None:
        self.address = address
        self.farm_repo = farm_repo
        self.chicken_repo = chicken_repo
        self.egg_repo = egg_repo
        self.event_log = event_log
        self.clock = clock
        self.certification_reader = certification_reader

    async def _load(self, *, for_update: bool = False):
        farm = await self.farm_repo.get(self.address.value, for_update=for_update)
        if farm is None:
            raise ContractNotFoundError(self.address.value, "Farm")
        return farm

    async def _require_owner(self, caller: Address | str):
        # Row lock serializes counter increments between concurrent writers
        caller = Address.parse(caller)
        farm = await self._load(for_update=True)
        if not farm.to_entity().is_owned_by(caller):
            raise OnlyOwnerError(caller.value)
        return farm, caller

    async def _get_chicken_row(self, farm, chicken_id: int):
        if not farm.to_entity().knows_chicken(chicken_id):
            raise ChickenNotFoundError(chicken_id)
        chicken = await self.chicken_repo.get((self.address.value, chicken_id))
        if chicken is None:
            raise ChickenNotFoundError(chicken_id)
        return chicken

    async def _get_egg_row(self, farm, egg_id: int):
        if not farm.to_entity().knows_egg(egg_id):
            raise EggNotFoundError(egg_id)
        egg = await self.egg_repo.get((self.address.value, egg_id))
        if egg is None:
            raise EggNotFoundError(egg_id)
        return egg

    # ------------------------------------------------------------------
    # Farm info
    # ------------------------------------------------------------------

    async def update_info(self, caller: Address | str, name: str, metadata_uri: str) -> None:
        """Overwrite name and metadata URI. Empty strings are accepted."""
        farm, caller = await self._require_owner(caller)
        farm.name = name
        farm.metadata_uri = metadata_uri
        await self.farm_repo.update(farm)

        await self.event_log.emit(
            self.address,
            LedgerEventType.FARM_INFO_UPDATED,
            name=name,
            metadata_uri=metadata_uri,
        )
        logger.info("Farm %s info updated", self.address)

    async def get_info(self) -> FarmEntity:
        return (await self._load()).to_entity()

    async def owner(self) -> Address:
        return (await self.get_info()).owner

    async def chicken_count(self) -> int:
        return (await self._load()).chicken_count

    async def egg_count(self) -> int:
        return (await self._load()).egg_count

    async def is_certified(self) -> bool:
        """Certification status in the referenced AuthorityCenter, if any"""
        farm = await self._load()
        if farm.authority_center is None or self.certification_reader is None:
            return False
        return await self.certification_reader.is_registered(
            farm.authority_center, self.address.value
        )

    # ------------------------------------------------------------------
    # Chickens
    # ------------------------------------------------------------------

    async def register_chicken(self, caller: Address | str, metadata_uri: str) -> int:
        """Register a live chicken born now. Returns its id (1-based, never reused)."""
        farm, caller = await self._require_owner(caller)

        chicken_id = farm.to_entity().next_chicken_id()
        birth_time = self.clock.now()
        farm.chicken_count = chicken_id
        await self.farm_repo.update(farm)
        await self.chicken_repo.add(self.address.value, chicken_id, birth_time, metadata_uri)

        await self.event_log.emit(
            self.address,
            LedgerEventType.CHICKEN_REGISTERED,
            chicken_id=chicken_id,
            metadata_uri=metadata_uri,
        )
        logger.info("Chicken %d registered on farm %s", chicken_id, self.address)
        return chicken_id

    async def remove_chicken(self, caller: Address | str, chicken_id: int) -> None:
        """
        Mark a chicken dead. The chicken count is not decremented.

        Removing an already dead chicken is a no-op so that clients can retry.
        """
        farm, caller = await self._require_owner(caller)
        chicken = await self._get_chicken_row(farm, chicken_id)

        if not chicken.is_alive:
            logger.debug("Chicken %d on farm %s already removed", chicken_id, self.address)
            return

        chicken.is_alive = False
        await self.chicken_repo.update(chicken)

        await self.event_log.emit(
            self.address, LedgerEventType.CHICKEN_REMOVED, chicken_id=chicken_id
        )
        logger.info("Chicken %d removed from farm %s", chicken_id, self.address)

    async def update_chicken_metadata(
        self, caller: Address | str, chicken_id: int, metadata_uri: str
    ) -> None:
        """Replace a live chicken's metadata URI. Birth data and id never change."""
        farm, caller = await self._require_owner(caller)
        chicken = await self._get_chicken_row(farm, chicken_id)
        if chicken.to_entity().is_read_only():
            raise ChickenNotAliveError(chicken_id)

        chicken.metadata_uri = metadata_uri
        await self.chicken_repo.update(chicken)

        await self.event_log.emit(
            self.address,
            LedgerEventType.CHICKEN_INFO_UPDATED,
            chicken_id=chicken_id,
            metadata_uri=metadata_uri,
        )

    async def get_chicken(self, chicken_id: int) -> ChickenEntity:
        farm = await self._load()
        return (await self._get_chicken_row(farm, chicken_id)).to_entity()

    async def list_chickens(self, skip: int = 0, limit: int = 100) -> list[ChickenEntity]:
        rows = await self.chicken_repo.get_by_farm(self.address.value, skip=skip, limit=limit)
        return [row.to_entity() for row in rows]

    # ------------------------------------------------------------------
    # Eggs
    # ------------------------------------------------------------------

    async def register_egg(self, caller: Address | str, chicken_id: int, metadata_uri: str) -> int:
        """
        Register an egg laid now by a live chicken. Returns the egg id.

        The parent must be alive at this moment only; the egg stays valid if
        the chicken is removed later.
        """
        farm, caller = await self._require_owner(caller)
        chicken = await self._get_chicken_row(farm, chicken_id)
        if not chicken.to_entity().can_lay_eggs():
            raise ChickenNotAliveError(chicken_id)

        egg_id = farm.to_entity().next_egg_id()
        farm.egg_count = egg_id
        await self.farm_repo.update(farm)
        await self.egg_repo.add(
            farm_address=self.address.value,
            egg_id=egg_id,
            chicken_id=chicken_id,
            birth_time=self.clock.now(),
            metadata_uri=metadata_uri,
        )

        await self.event_log.emit(
            self.address,
            LedgerEventType.EGG_REGISTERED,
            egg_id=egg_id,
            chicken_id=chicken_id,
            metadata_uri=metadata_uri,
        )
        logger.info("Egg %d of chicken %d registered on farm %s", egg_id, chicken_id, self.address)
        return egg_id

    async def update_egg_metadata(self, caller: Address | str, egg_id: int, metadata_uri: str) -> None:
        """Replace an egg's metadata URI. Parent and timestamp never change."""
        farm, caller = await self._require_owner(caller)
        egg = await self._get_egg_row(farm, egg_id)

        egg.metadata_uri = metadata_uri
        await self.egg_repo.update(egg)

        await self.event_log.emit(
            self.address,
            LedgerEventType.EGG_INFO_UPDATED,
            egg_id=egg_id,
            metadata_uri=metadata_uri,
        )

    async def get_egg(self, egg_id: int) -> EggEntity:
        farm = await self._load()
        return (await self._get_egg_row(farm, egg_id)).to_entity()

    async def list_eggs(
        self, chicken_id: int | None = None, skip: int = 0, limit: int = 100
    ) -> list[EggEntity]:
        rows = await self.egg_repo.get_by_farm(
            self.address.value, chicken_id=chicken_id, skip=skip, limit=limit
        )
        return [row.to_entity() for row in rows]
