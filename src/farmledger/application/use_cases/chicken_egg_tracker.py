"""
ChickenEggTracker use case.

Legacy string-keyed ledger of chickens and eggs bound to one Farm. It keeps its
own records (it is not a view over the Farm's storage) and delegates access
control to an injected check, by default "caller owns the Farm".
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from farmledger.domain.entities import TrackedChickenEntity, TrackedEggEntity
from farmledger.domain.enums import LedgerEventType
from farmledger.domain.exceptions import (ChickenAlreadyRegisteredError,
                                          ChickenNotAliveError,
                                          ChickenNotFoundError,
                                          ChickenNotRegisteredError,
                                          EggAlreadyRegisteredError,
                                          EggNotFoundError,
                                          ValidationException)
from farmledger.domain.value_objects import Address
from farmledger.shared.logging import get_logger

if TYPE_CHECKING:
    from farmledger.application.interfaces.repositories import (
        ITrackedChickenRepository, ITrackedEggRepository)
    from farmledger.application.interfaces.services import (
        IAuthorizationCheck, IClock, IEventLog)

logger = get_logger(__name__)


def _require_id(value: str, field: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValidationException(f"{field} must be a non-empty string", field=field)
    return value


class ChickenEggTrackerContract:
    def __init__(
        self,
        address: Address,
        farm_address: Address,
        chicken_repo: "ITrackedChickenRepository",
        egg_repo: "ITrackedEggRepository",
        authorization: "IAuthorizationCheck",
        event_log: "IEventLog",
        clock: "IClock",
        require_active_parent: bool = False,
    ) -> None:
        self.address = address
        self.farm_address = farm_address
        self.chicken_repo = chicken_repo
        self.egg_repo = egg_repo
        self.authorization = authorization
        self.event_log = event_log
        self.clock = clock
        self.require_active_parent = require_active_parent

    async def _authorize(self, caller: Address | str) -> Address:
        caller = Address.parse(caller)
        await self.authorization.require(caller)
        return caller

    async def _get_chicken_row(self, chicken_id: str):
        chicken = await self.chicken_repo.get((self.address.value, chicken_id))
        if chicken is None:
            raise ChickenNotFoundError(chicken_id)
        return chicken

    async def _get_egg_row(self, egg_id: str):
        egg = await self.egg_repo.get((self.address.value, egg_id))
        if egg is None:
            raise EggNotFoundError(egg_id)
        return egg

    # ------------------------------------------------------------------
    # Chickens
    # ------------------------------------------------------------------

    async def register_chicken(
        self,
        caller: Address | str,
        chicken_id: str,
        breed: str,
        birth_date: str,
        ipfs_hash: str,
    ) -> TrackedChickenEntity:
        await self._authorize(caller)
        _require_id(chicken_id, "chicken_id")
        if await self.chicken_repo.get((self.address.value, chicken_id)) is not None:
            raise ChickenAlreadyRegisteredError(chicken_id)

        chicken = await self.chicken_repo.add(
            tracker_address=self.address.value,
            chicken_id=chicken_id,
            breed=breed,
            birth_date=birth_date,
            ipfs_hash=ipfs_hash,
            registration_date=self.clock.now(),
        )
        await self.event_log.emit(
            self.address,
            LedgerEventType.CHICKEN_REGISTERED,
            chicken_id=chicken_id,
            breed=breed,
        )
        logger.info("Tracker %s registered chicken %s", self.address, chicken_id)
        return chicken.to_entity()

    async def update_chicken_info(self, caller: Address | str, chicken_id: str, ipfs_hash: str) -> None:
        """Overwrite the IPFS hash only"""
        await self._authorize(caller)
        chicken = await self._get_chicken_row(chicken_id)

        chicken.ipfs_hash = ipfs_hash
        await self.chicken_repo.update(chicken)
        await self.event_log.emit(
            self.address,
            LedgerEventType.CHICKEN_INFO_UPDATED,
            chicken_id=chicken_id,
            ipfs_hash=ipfs_hash,
        )

    async def remove_chicken(self, caller: Address | str, chicken_id: str) -> None:
        await self._authorize(caller)
        chicken = await self._get_chicken_row(chicken_id)

        chicken.is_active = False
        await self.chicken_repo.update(chicken)
        await self.event_log.emit(
            self.address, LedgerEventType.CHICKEN_REMOVED, chicken_id=chicken_id
        )
        logger.info("Tracker %s removed chicken %s", self.address, chicken_id)

    async def get_chicken_info(self, chicken_id: str) -> TrackedChickenEntity:
        """Raises ChickenNotFoundError for ids never registered"""
        return (await self._get_chicken_row(chicken_id)).to_entity()

    # ------------------------------------------------------------------
    # Eggs
    # ------------------------------------------------------------------

    async def register_egg(
        self,
        caller: Address | str,
        egg_id: str,
        chicken_id: str,
        production_date: str,
        ipfs_hash: str,
    ) -> TrackedEggEntity:
        """
        Register an egg against a chicken that was ever registered here.

        A removed parent is accepted unless require_active_parent is set, which
        lets eggs be backfilled for chickens already taken out of service.
        """
        await self._authorize(caller)
        _require_id(egg_id, "egg_id")

        parent = await self.chicken_repo.get((self.address.value, chicken_id))
        if parent is None:
            raise ChickenNotRegisteredError(chicken_id)
        if self.require_active_parent and not parent.is_active:
            raise ChickenNotAliveError(chicken_id)
        if await self.egg_repo.get((self.address.value, egg_id)) is not None:
            raise EggAlreadyRegisteredError(egg_id)

        egg = await self.egg_repo.add(
            tracker_address=self.address.value,
            egg_id=egg_id,
            chicken_id=chicken_id,
            production_date=production_date,
            ipfs_hash=ipfs_hash,
            registration_date=self.clock.now(),
        )
        await self.event_log.emit(
            self.address,
            LedgerEventType.EGG_REGISTERED,
            egg_id=egg_id,
            chicken_id=chicken_id,
        )
        logger.info("Tracker %s registered egg %s of chicken %s", self.address, egg_id, chicken_id)
        return egg.to_entity()

    async def update_egg_info(self, caller: Address | str, egg_id: str, ipfs_hash: str) -> None:
        """Overwrite the IPFS hash only"""
        await self._authorize(caller)
        egg = await self._get_egg_row(egg_id)

        egg.ipfs_hash = ipfs_hash
        await self.egg_repo.update(egg)
        await self.event_log.emit(
            self.address,
            LedgerEventType.EGG_INFO_UPDATED,
            egg_id=egg_id,
            ipfs_hash=ipfs_hash,
        )

    async def remove_egg(self, caller: Address | str, egg_id: str) -> None:
        await self._authorize(caller)
        egg = await self._get_egg_row(egg_id)

        egg.is_active = False
        await self.egg_repo.update(egg)
        await self.event_log.emit(self.address, LedgerEventType.EGG_REMOVED, egg_id=egg_id)
        logger.info("Tracker %s removed egg %s", self.address, egg_id)

    async def get_egg_info(self, egg_id: str) -> TrackedEggEntity:
        """Raises EggNotFoundError for ids never registered"""
        return (await self._get_egg_row(egg_id)).to_entity()
