"""
Repository interfaces (ports) for the application layer.

Only the operations the contract use cases rely on are declared here. Rows are
built behind these ports; use cases pass plain values in.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from farmledger.domain.enums import ContractKind
    from farmledger.infrastructure.persistence.models import (
        Authority, AuthorityCenter, Chicken, ChickenEggTracker,
        ContractAccount, Egg, Farm, FarmCertification, LedgerEvent,
        LedgerHead, TrackedChicken, TrackedEgg)


class IContractAccountRepository(Protocol):
    async def get_of_kind(self, address: str, kind: ContractKind) -> ContractAccount | None:
        ...

    async def next_nonce(self, deployer: str) -> int:
        ...

    async def create_account(
        self, address: str, kind: ContractKind, deployer: str, nonce: int, deployed_at: int
    ) -> ContractAccount:
        ...


class IStorageRepository(Protocol):
    """Keyed storage shared by every contract's rows"""

    async def get(self, primary_key: Any, *, for_update: bool = False) -> Any:
        ...

    async def update(self, obj: Any) -> Any:
        ...


class IAuthorityCenterRepository(IStorageRepository, Protocol):
    async def add(self, address: str, owner: str) -> AuthorityCenter:
        ...


class IAuthorityRepository(Protocol):
    async def get(self, primary_key: Any, *, for_update: bool = False) -> Authority | None:
        ...

    async def exists(self, center_address: str, address: str) -> bool:
        ...

    async def add(self, center_address: str, address: str, added_at: int) -> Authority:
        ...

    async def remove(self, authority: Authority) -> None:
        ...

    async def list_addresses(self, center_address: str) -> list[str]:
        ...


class IFarmCertificationRepository(Protocol):
    async def get(
        self, primary_key: Any, *, for_update: bool = False
    ) -> FarmCertification | None:
        ...

    async def add(
        self,
        center_address: str,
        farm_address: str,
        name: str,
        location: str,
        ipfs_hash: str,
        registered_at: int,
    ) -> FarmCertification:
        ...

    async def update(self, obj: FarmCertification) -> FarmCertification:
        ...

    async def is_registered(self, center_address: str, farm_address: str) -> bool:
        ...


class IFarmRepository(IStorageRepository, Protocol):
    async def add(
        self,
        address: str,
        owner: str,
        name: str,
        metadata_uri: str,
        authority_center: str | None = None,
        location: str = "",
    ) -> Farm:
        ...


class IChickenRepository(IStorageRepository, Protocol):
    async def add(
        self, farm_address: str, chicken_id: int, birth_time: int, metadata_uri: str
    ) -> Chicken:
        ...

    async def get_by_farm(self, farm_address: str, skip: int = 0, limit: int = 100) -> list[Chicken]:
        ...


class IEggRepository(IStorageRepository, Protocol):
    async def add(
        self,
        farm_address: str,
        egg_id: int,
        chicken_id: int,
        birth_time: int,
        metadata_uri: str,
    ) -> Egg:
        ...

    async def get_by_farm(
        self,
        farm_address: str,
        chicken_id: int | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Egg]:
        ...


class ITrackerRepository(IStorageRepository, Protocol):
    async def add(self, address: str, farm_address: str) -> ChickenEggTracker:
        ...


class ITrackedChickenRepository(IStorageRepository, Protocol):
    async def add(
        self,
        tracker_address: str,
        chicken_id: str,
        breed: str,
        birth_date: str,
        ipfs_hash: str,
        registration_date: int,
    ) -> TrackedChicken:
        ...


class ITrackedEggRepository(IStorageRepository, Protocol):
    async def add(
        self,
        tracker_address: str,
        egg_id: str,
        chicken_id: str,
        production_date: str,
        ipfs_hash: str,
        registration_date: int,
    ) -> TrackedEgg:
        ...


class ILedgerEventRepository(Protocol):
    async def lock_head(self) -> LedgerHead:
        ...

    async def append_event(
        self,
        head: LedgerHead,
        contract_address: str,
        event_type: str,
        args: dict[str, Any],
        block_time: int,
        event_hash: str,
    ) -> LedgerEvent:
        ...

    async def get_ordered(self, skip: int = 0, limit: int = 1000) -> list[LedgerEvent]:
        ...

    async def get_by_contract(
        self,
        contract_address: str,
        event_type: str | None = None,
        skip: int = 0,
        limit: int = 1000,
    ) -> list[LedgerEvent]:
        ...


__all__ = [
    "IContractAccountRepository",
    "IStorageRepository",
    "IAuthorityCenterRepository",
    "IAuthorityRepository",
    "IFarmCertificationRepository",
    "IFarmRepository",
    "IChickenRepository",
    "IEggRepository",
    "ITrackerRepository",
    "ITrackedChickenRepository",
    "ITrackedEggRepository",
    "ILedgerEventRepository",
]
