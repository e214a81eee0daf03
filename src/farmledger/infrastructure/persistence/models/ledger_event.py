from typing import Any

from sqlalchemy import (DDL, JSON, CheckConstraint, Connection, Index,
                        Integer, String, event)
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from farmledger.infrastructure.exceptions import EventLogImmutableError
from farmledger.infrastructure.persistence.database import Base
from farmledger.infrastructure.persistence.models.mixins import (
    ADDRESS_LENGTH, CuidMixin)


class LedgerEvent(CuidMixin, Base):
    """
    Append-only log of contract events.

    Entries are ordered by a gapless sequence number starting at 1 and each one
    stores the hash of its predecessor, forming a verifiable chain.
    """

    __tablename__ = "ledger_event"

    sequence: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)
    contract_address: Mapped[str] = mapped_column(
        String(ADDRESS_LENGTH), nullable=False, index=True
    )
    event_type: Mapped[str] = mapped_column(String, nullable=False, index=True)
    args: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    block_time: Mapped[int] = mapped_column(Integer, nullable=False)
    previous_hash: Mapped[str | None] = mapped_column(String)
    hash: Mapped[str] = mapped_column(String, nullable=False, unique=True, index=True)

    __table_args__ = (
        Index("ix_ledger_event_contract_type", "contract_address", "event_type"),
        CheckConstraint("sequence >= 1", name="ck_ledger_event_sequence"),
    )


# Log entries are append-only at ORM level
@event.listens_for(LedgerEvent, "before_update")
def prevent_ledger_event_updates(
    _mapper: Mapper[Any],
    _connection: Connection,
    _target: "LedgerEvent",
) -> None:
    raise EventLogImmutableError()


class LedgerHead(Base):
    """
    Tip of the event log: the last sequence number and hash.

    A single row. Appending locks it first, so concurrent transactions take
    sequence numbers one after another instead of racing for the same one.
    """

    __tablename__ = "ledger_head"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=1)
    sequence: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    hash: Mapped[str | None] = mapped_column(String)

    __table_args__ = (CheckConstraint("id = 1", name="ck_ledger_head_single_row"),)


event.listen(
    LedgerHead.__table__,
    "after_create",
    DDL("INSERT INTO ledger_head (id, sequence) VALUES (1, 0)"),
)
