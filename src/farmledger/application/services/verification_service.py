"""
Event log verification.

Recomputes every entry's hash and checks the links between entries, so any
edit, deletion or reordering of the stored log is detected.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from farmledger.shared.logging import get_logger

if TYPE_CHECKING:
    from farmledger.application.interfaces.repositories import \
        ILedgerEventRepository
    from farmledger.application.interfaces.services import IHashService
    from farmledger.infrastructure.persistence.models.ledger_event import \
        LedgerEvent

logger = get_logger(__name__)


@dataclass
class VerificationResult:
    """Outcome for a single log entry"""

    event_id: str
    sequence: int
    event_type: str
    is_valid: bool
    error_type: str | None = None
    error_message: str | None = None
    expected_hash: str | None = None
    actual_hash: str | None = None


@dataclass
class ChainVerificationResult:
    """Outcome for the whole log"""

    total_events: int
    valid_events: int
    invalid_events: int
    is_chain_valid: bool
    event_results: list[VerificationResult] = field(default_factory=list)

    @property
    def first_invalid(self) -> VerificationResult | None:
        return next((result for result in self.event_results if not result.is_valid), None)


class VerificationService:
    def __init__(
        self,
        event_repo: "ILedgerEventRepository",
        hash_service: "IHashService",
        batch_size: int = 1000,
    ) -> None:
        self.event_repo = event_repo
        self.hash_service = hash_service
        self.batch_size = batch_size

    def verify_event(
        self, event: "LedgerEvent", previous: "LedgerEvent | None"
    ) -> VerificationResult:
        """Check one entry against its predecessor"""
        expected_sequence = previous.sequence + 1 if previous else 1
        if event.sequence != expected_sequence:
            return VerificationResult(
                event_id=event.id,
                sequence=event.sequence,
                event_type=event.event_type,
                is_valid=False,
                error_type="SEQUENCE_GAP",
                error_message=f"Expected sequence {expected_sequence}, found {event.sequence}",
            )

        expected_previous = previous.hash if previous else None
        if event.previous_hash != expected_previous:
            return VerificationResult(
                event_id=event.id,
                sequence=event.sequence,
                event_type=event.event_type,
                is_valid=False,
                error_type="CHAIN_BREAK",
                error_message="previous_hash does not match the preceding entry",
                expected_hash=expected_previous,
                actual_hash=event.previous_hash,
            )

        computed = self.hash_service.compute_hash(
            sequence=event.sequence,
            contract_address=event.contract_address,
            event_type=event.event_type,
            block_time=event.block_time,
            args=event.args,
            previous_hash=event.previous_hash,
        )
        if computed != event.hash:
            return VerificationResult(
                event_id=event.id,
                sequence=event.sequence,
                event_type=event.event_type,
                is_valid=False,
                error_type="HASH_MISMATCH",
                error_message="Stored hash does not match entry contents",
                expected_hash=computed,
                actual_hash=event.hash,
            )

        return VerificationResult(
            event_id=event.id,
            sequence=event.sequence,
            event_type=event.event_type,
            is_valid=True,
        )

    async def verify_chain(self) -> ChainVerificationResult:
        """Verify the whole log, oldest entry first"""
        results: list[VerificationResult] = []
        previous: "LedgerEvent | None" = None
        skip = 0

        while True:
            batch = await self.event_repo.get_ordered(skip=skip, limit=self.batch_size)
            for event in batch:
                results.append(self.verify_event(event, previous))
                previous = event
            if len(batch) < self.batch_size:
                break
            skip += self.batch_size

        valid = sum(1 for result in results if result.is_valid)
        chain = ChainVerificationResult(
            total_events=len(results),
            valid_events=valid,
            invalid_events=len(results) - valid,
            is_chain_valid=valid == len(results),
            event_results=results,
        )
        if not chain.is_chain_valid:
            broken = chain.first_invalid
            logger.warning(
                "Event log verification failed at sequence %s: %s",
                broken.sequence if broken else "?",
                broken.error_message if broken else "",
            )
        return chain
