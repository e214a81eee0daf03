from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from farmledger.infrastructure.persistence.models.ledger_event import (
    LedgerEvent, LedgerHead)
from farmledger.infrastructure.persistence.repositories.base import \
    BaseRepository

HEAD_ID = 1


class LedgerEventRepository(BaseRepository[LedgerEvent]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, LedgerEvent)

    async def get_last_event(self) -> LedgerEvent | None:
        """Get the most recent entry of the log"""
        result = await self.db.execute(
            select(LedgerEvent).order_by(desc(LedgerEvent.sequence)).limit(1)
        )
        return result.scalar_one_or_none()

    async def lock_head(self) -> LedgerHead:
        """
        Lock the log's head row and return it.

        The lock is held until the ledger transaction ends, so only one
        transaction at a time can append. A schema created without the seeded
        row gets one built from the last stored entry.
        """
        head = await self.db.get(LedgerHead, HEAD_ID, with_for_update=True)
        if head is None:
            last = await self.get_last_event()
            head = LedgerHead(
                id=HEAD_ID,
                sequence=last.sequence if last else 0,
                hash=last.hash if last else None,
            )
            self.db.add(head)
            await self.db.flush()
        return head

    async def append_event(
        self,
        head: LedgerHead,
        contract_address: str,
        event_type: str,
        args: dict[str, Any],
        block_time: int,
        event_hash: str,
    ) -> LedgerEvent:
        """Store the entry following `head` and move the head onto it"""
        entry = LedgerEvent(
            sequence=head.sequence + 1,
            contract_address=contract_address,
            event_type=event_type,
            args=args,
            block_time=block_time,
            hash=event_hash,
            previous_hash=head.hash,
        )
        head.sequence = entry.sequence
        head.hash = event_hash
        return await self.create(entry)

    async def get_ordered(self, skip: int = 0, limit: int = 1000) -> list[LedgerEvent]:
        """Entries oldest first"""
        result = await self.db.execute(
            select(LedgerEvent).order_by(LedgerEvent.sequence).offset(skip).limit(limit)
        )
        return list(result.scalars().all())

    async def get_by_contract(
        self,
        contract_address: str,
        event_type: str | None = None,
        skip: int = 0,
        limit: int = 1000,
    ) -> list[LedgerEvent]:
        """Entries emitted by one contract, oldest first, optionally of one type"""
        query = select(LedgerEvent).where(LedgerEvent.contract_address == contract_address)
        if event_type is not None:
            query = query.where(LedgerEvent.event_type == event_type)
        result = await self.db.execute(
            query.order_by(LedgerEvent.sequence).offset(skip).limit(limit)
        )
        return list(result.scalars().all())
