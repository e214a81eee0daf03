"""
AuthorityCenter use case.

Root access-control contract: an immutable owner, a set of authorities and the
map of certified farms. Authorities certify and decertify Farm contracts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from farmledger.domain.entities import FarmCertificationEntity
from farmledger.domain.enums import AuthorityAdmission, LedgerEventType
from farmledger.domain.exceptions import (AlreadyAuthorityError,
                                          ContractNotFoundError,
                                          FarmAlreadyRegisteredError,
                                          FarmHasExistingChickensError,
                                          FarmNotRegisteredError,
                                          NotAuthorityError,
                                          OnlyAuthorityOrOwnerError,
                                          OnlyOwnerError)
from farmledger.domain.value_objects import Address
from farmledger.shared.logging import get_logger

if TYPE_CHECKING:
    from farmledger.application.interfaces.repositories import (
        IAuthorityRepository, IFarmCertificationRepository)
    from farmledger.application.interfaces.services import (IClock,
                                                            IEventLog,
                                                            IFarmReader)

logger = get_logger(__name__)


class AuthorityCenterContract:
    """
    Operations of one deployed AuthorityCenter.

    Mutating calls check the caller's role first, then the target's state, and
    write nothing until every check has passed.
    """

    def __init__(
        self,
        address: Address,
        owner: Address,
        authority_repo: "IAuthorityRepository",
        certification_repo: "IFarmCertificationRepository",
        farm_reader: "IFarmReader",
        event_log: "IEventLog",
        clock: "IClock",
        admission: AuthorityAdmission = AuthorityAdmission.AUTHORITIES,
    ) -> None:
        self.address = address
        self.owner = owner
        self.authority_repo = authority_repo
        self.certification_repo = certification_repo
        self.farm_reader = farm_reader
        self.event_log = event_log
        self.clock = clock
        self.admission = admission

    async def _is_authority_or_owner(self, caller: Address) -> bool:
        if caller == self.owner:
            return True
        return await self.authority_repo.exists(self.address.value, caller.value)

    async def _require_authority_or_owner(self, caller: Address) -> None:
        if not await self._is_authority_or_owner(caller):
            raise OnlyAuthorityOrOwnerError(caller.value)

    # ------------------------------------------------------------------
    # Authority management
    # ------------------------------------------------------------------

    async def add_authority(self, caller: Address | str, authority: Address | str) -> None:
        """
        Grant authority status.

        Under the AUTHORITIES admission policy any authority may add another;
        under OWNER only the owner may.
        """
        caller = Address.parse(caller)
        if self.admission == AuthorityAdmission.OWNER:
            if caller != self.owner:
                raise OnlyOwnerError(caller.value)
        else:
            await self._require_authority_or_owner(caller)

        authority = Address.parse(authority)
        if await self.authority_repo.exists(self.address.value, authority.value):
            raise AlreadyAuthorityError(authority.value)

        await self.authority_repo.add(self.address.value, authority.value, self.clock.now())
        await self.event_log.emit(
            self.address, LedgerEventType.AUTHORITY_ADDED, authority=authority, sender=caller
        )
        logger.info("Authority %s added to %s by %s", authority, self.address, caller)

    async def remove_authority(self, caller: Address | str, authority: Address | str) -> None:
        """Revoke authority status. Owner only, so authorities cannot evict each other."""
        caller = Address.parse(caller)
        if caller != self.owner:
            raise OnlyOwnerError(caller.value)

        authority = Address.parse(authority)
        membership = await self.authority_repo.get((self.address.value, authority.value))
        if membership is None:
            raise NotAuthorityError(authority.value)

        await self.authority_repo.remove(membership)
        await self.event_log.emit(
            self.address, LedgerEventType.AUTHORITY_REMOVED, authority=authority, sender=caller
        )
        logger.info("Authority %s removed from %s", authority, self.address)

    async def is_authority(self, address: Address | str) -> bool:
        address = Address.parse(address)
        return await self.authority_repo.exists(self.address.value, address.value)

    async def list_authorities(self) -> list[Address]:
        return [
            Address(value)
            for value in await self.authority_repo.list_addresses(self.address.value)
        ]

    # ------------------------------------------------------------------
    # Farm certification
    # ------------------------------------------------------------------

    async def register_farm(
        self,
        caller: Address | str,
        farm: Address | str,
        name: str = "",
        location: str = "",
        ipfs_hash: str = "",
    ) -> FarmCertificationEntity:
        """
        Certify a Farm contract.

        A farm that already holds chickens cannot be certified: its history
        predates certification. Re-registering a removed farm overwrites the
        old descriptive fields.
        """
        caller = Address.parse(caller)
        await self._require_authority_or_owner(caller)

        farm = Address.parse(farm)
        record = await self.certification_repo.get((self.address.value, farm.value))
        if record is not None and record.to_entity().is_active():
            raise FarmAlreadyRegisteredError(farm.value)

        # Cross-contract read, locked so no chicken is registered before commit.
        # The Farm is never mutated from here.
        chicken_count = await self.farm_reader.get_chicken_count(farm.value, for_update=True)
        if chicken_count is None:
            raise ContractNotFoundError(farm.value, "Farm")
        if chicken_count > 0:
            raise FarmHasExistingChickensError(farm.value, chicken_count)

        now = self.clock.now()
        if record is None:
            record = await self.certification_repo.add(
                center_address=self.address.value,
                farm_address=farm.value,
                name=name,
                location=location,
                ipfs_hash=ipfs_hash,
                registered_at=now,
            )
        else:
            record.name = name
            record.location = location
            record.ipfs_hash = ipfs_hash
            record.is_registered = True
            record.registered_at = now
            record.removed_at = None
            record = await self.certification_repo.update(record)

        await self.event_log.emit(self.address, LedgerEventType.FARM_REGISTERED, farm=farm)
        logger.info("Farm %s certified by %s at %s", farm, caller, self.address)
        return record.to_entity()

    async def remove_farm(self, caller: Address | str, farm: Address | str) -> None:
        """Decertify a farm. Its record stays readable."""
        caller = Address.parse(caller)
        await self._require_authority_or_owner(caller)

        farm = Address.parse(farm)
        record = await self.certification_repo.get((self.address.value, farm.value))
        if record is None or not record.to_entity().is_active():
            raise FarmNotRegisteredError(farm.value)

        record.is_registered = False
        record.removed_at = self.clock.now()
        await self.certification_repo.update(record)

        await self.event_log.emit(self.address, LedgerEventType.FARM_REMOVED, farm=farm)
        logger.info("Farm %s decertified by %s at %s", farm, caller, self.address)

    async def is_certified_farm(self, farm: Address | str) -> bool:
        farm = Address.parse(farm)
        return await self.certification_repo.is_registered(self.address.value, farm.value)

    async def get_farm_record(self, farm: Address | str) -> FarmCertificationEntity:
        """Certification record, including decertified ones"""
        farm = Address.parse(farm)
        record = await self.certification_repo.get((self.address.value, farm.value))
        if record is None:
            raise FarmNotRegisteredError(farm.value)
        return record.to_entity()

    async def list_certified_farms(self) -> list[Address]:
        """
        Currently certified farms, in order of first registration.

        Rebuilt from the FarmRegistered log and filtered by the current
        certification map, so decertified farms drop out.
        """
        events = await self.event_log.query(self.address, LedgerEventType.FARM_REGISTERED)

        farms: list[Address] = []
        seen: set[str] = set()
        for event in events:
            farm_value = event.args["farm"]
            if farm_value in seen:
                continue
            seen.add(farm_value)
            if await self.certification_repo.is_registered(self.address.value, farm_value):
                farms.append(Address(farm_value))
        return farms
