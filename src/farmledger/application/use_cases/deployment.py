"""
Contract deployment.

Creates the storage of a new AuthorityCenter, Farm or ChickenEggTracker at an
address derived from the deployer and the deployer's nonce.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from farmledger.domain.enums import ContractKind
from farmledger.domain.exceptions import ContractNotFoundError
from farmledger.domain.value_objects import Address
from farmledger.shared.logging import get_logger

if TYPE_CHECKING:
    from farmledger.application.interfaces.repositories import (
        IAuthorityCenterRepository, IAuthorityRepository,
        IContractAccountRepository, IFarmRepository, ITrackerRepository)
    from farmledger.application.interfaces.services import IClock

logger = get_logger(__name__)


class ContractDeployer:
    def __init__(
        self,
        contract_repo: "IContractAccountRepository",
        center_repo: "IAuthorityCenterRepository",
        authority_repo: "IAuthorityRepository",
        farm_repo: "IFarmRepository",
        tracker_repo: "ITrackerRepository",
        clock: "IClock",
    ) -> None:
        self.contract_repo = contract_repo
        self.center_repo = center_repo
        self.authority_repo = authority_repo
        self.farm_repo = farm_repo
        self.tracker_repo = tracker_repo
        self.clock = clock

    async def _create_account(self, deployer: Address, kind: ContractKind) -> tuple[Address, int]:
        nonce = await self.contract_repo.next_nonce(deployer.value)
        address = Address.for_contract(deployer, nonce)
        now = self.clock.now()
        await self.contract_repo.create_account(address.value, kind, deployer.value, nonce, now)
        return address, now

    async def _require_kind(self, address: Address, kind: ContractKind) -> None:
        if await self.contract_repo.get_of_kind(address.value, kind) is None:
            raise ContractNotFoundError(address.value, kind.value)

    async def deploy_authority_center(self, deployer: Address | str) -> Address:
        """The deployer becomes the owner and the first authority"""
        deployer = Address.parse(deployer)
        address, now = await self._create_account(deployer, ContractKind.AUTHORITY_CENTER)

        await self.center_repo.add(address.value, deployer.value)
        await self.authority_repo.add(address.value, deployer.value, now)
        logger.info("AuthorityCenter deployed at %s by %s", address, deployer)
        return address

    async def deploy_farm(
        self,
        deployer: Address | str,
        owner: Address | str,
        name: str,
        metadata_uri: str,
        authority_center: Address | str | None = None,
        location: str = "",
    ) -> Address:
        """
        Deploy a Farm owned by `owner`.

        The AuthorityCenter reference is optional and only used for
        certification lookups; a Farm works without ever being certified.
        """
        deployer = Address.parse(deployer)
        owner = Address.parse(owner)
        center = Address.parse(authority_center) if authority_center is not None else None
        if center is not None:
            await self._require_kind(center, ContractKind.AUTHORITY_CENTER)

        address, _ = await self._create_account(deployer, ContractKind.FARM)
        await self.farm_repo.add(
            address=address.value,
            owner=owner.value,
            name=name,
            metadata_uri=metadata_uri,
            authority_center=center.value if center else None,
            location=location,
        )
        logger.info("Farm %r deployed at %s for owner %s", name, address, owner)
        return address

    async def deploy_chicken_egg_tracker(self, deployer: Address | str, farm: Address | str) -> Address:
        deployer = Address.parse(deployer)
        farm = Address.parse(farm)
        await self._require_kind(farm, ContractKind.FARM)

        address, _ = await self._create_account(deployer, ContractKind.CHICKEN_EGG_TRACKER)
        await self.tracker_repo.add(address.value, farm.value)
        logger.info("ChickenEggTracker deployed at %s for farm %s", address, farm)
        return address
