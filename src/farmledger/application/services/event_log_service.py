"""
Event log service.

Contracts emit events through this service; each event becomes the next entry
of the hash-chained ledger log.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from farmledger.domain.value_objects import Address
from farmledger.shared.logging import get_logger

if TYPE_CHECKING:
    from farmledger.application.interfaces.repositories import \
        ILedgerEventRepository
    from farmledger.application.interfaces.services import (IClock,
                                                            IHashService)
    from farmledger.domain.enums import LedgerEventType
    from farmledger.infrastructure.persistence.models.ledger_event import \
        LedgerEvent

logger = get_logger(__name__)


class EventLogService:
    def __init__(
        self,
        event_repo: "ILedgerEventRepository",
        hash_service: "IHashService",
        clock: "IClock",
        batch_size: int = 1000,
    ) -> None:
        self.event_repo = event_repo
        self.hash_service = hash_service
        self.clock = clock
        self.batch_size = batch_size

    @staticmethod
    def _serialize(value: Any) -> Any:
        if isinstance(value, Address):
            return value.value
        return value

    async def emit(
        self, contract: Address, event_type: "LedgerEventType", **args: Any
    ) -> "LedgerEvent":
        """Append an event emitted by `contract` to the log"""
        payload = {key: self._serialize(value) for key, value in args.items()}

        # Held until commit; concurrent appends queue here
        head = await self.event_repo.lock_head()
        sequence = head.sequence + 1
        block_time = self.clock.now()

        event_hash = self.hash_service.compute_hash(
            sequence=sequence,
            contract_address=contract.value,
            event_type=event_type.value,
            block_time=block_time,
            args=payload,
            previous_hash=head.hash,
        )

        entry = await self.event_repo.append_event(
            head=head,
            contract_address=contract.value,
            event_type=event_type.value,
            args=payload,
            block_time=block_time,
            event_hash=event_hash,
        )
        logger.debug("Emitted %s #%d from %s", event_type.value, sequence, contract)
        return entry

    async def query(
        self, contract: Address, event_type: "LedgerEventType | None" = None
    ) -> list["LedgerEvent"]:
        """Events emitted by a contract, oldest first (like a log filter)"""
        events: list["LedgerEvent"] = []
        skip = 0
        while True:
            batch = await self.event_repo.get_by_contract(
                contract.value,
                event_type.value if event_type else None,
                skip=skip,
                limit=self.batch_size,
            )
            events.extend(batch)
            if len(batch) < self.batch_size:
                return events
            skip += self.batch_size
