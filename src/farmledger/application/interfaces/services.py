"""
Service interfaces (ports) for the application layer.

These protocols define what the contract use cases need from their
collaborators. Cross-contract reads are ports too, so a contract can be
tested against a mock of the contract it calls.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from farmledger.domain.enums import LedgerEventType
    from farmledger.domain.value_objects import Address
    from farmledger.infrastructure.persistence.models.ledger_event import \
        LedgerEvent


class IHashService(Protocol):
    """Protocol for hash computation services (DIP)"""

    def compute_hash(
        self,
        sequence: int,
        contract_address: str,
        event_type: str,
        block_time: int,
        args: dict[str, Any],
        previous_hash: str | None,
    ) -> str:
        """Compute hash for an event log entry"""
        ...


class IClock(Protocol):
    """Source of block timestamps"""

    def now(self) -> int:
        """Current time as integer unix seconds"""
        ...


class IEventLog(Protocol):
    """Sink for contract events"""

    async def emit(
        self, contract: Address, event_type: LedgerEventType, **args: Any
    ) -> LedgerEvent:
        ...

    async def query(
        self, contract: Address, event_type: LedgerEventType | None = None
    ) -> list[LedgerEvent]:
        ...


class IAuthorizationCheck(Protocol):
    """
    Authorization check injected into a contract.

    require() returns normally when the caller may mutate, and raises
    UnauthorizedError otherwise.
    """

    async def require(self, caller: Address) -> None:
        ...


class IFarmReader(Protocol):
    """Read-only view of Farm contracts used by other contracts"""

    async def get_chicken_count(
        self, farm_address: str, *, for_update: bool = False
    ) -> int | None:
        ...

    async def get_owner(self, farm_address: str) -> str | None:
        ...


class ICertificationReader(Protocol):
    """Read-only view of an AuthorityCenter's certification map"""

    async def is_registered(self, center_address: str, farm_address: str) -> bool:
        ...
