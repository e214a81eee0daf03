"""Unit tests for VerificationService"""

from unittest.mock import AsyncMock

import pytest

from farmledger.application.services.hash_service import HashService
from farmledger.application.services.verification_service import \
    VerificationService
from farmledger.infrastructure.persistence.models.ledger_event import \
    LedgerEvent

CONTRACT = "0x00000000000000000000000000000000000000A1"


@pytest.fixture
def hash_service():
    """Hash service for testing"""
    return HashService()


@pytest.fixture
def mock_event_repo():
    """Mock event repository"""
    return AsyncMock()


@pytest.fixture
def verification_service(mock_event_repo, hash_service):
    return VerificationService(event_repo=mock_event_repo, hash_service=hash_service)


def create_test_event(
    sequence: int,
    args: dict,
    previous: LedgerEvent | None = None,
    hash_service: HashService | None = None,
) -> LedgerEvent:
    """Helper to create a log entry with a valid hash"""
    hash_service = hash_service or HashService()
    previous_hash = previous.hash if previous else None
    block_time = 1_700_000_000 + sequence

    computed_hash = hash_service.compute_hash(
        sequence=sequence,
        contract_address=CONTRACT,
        event_type="ChickenRegistered",
        block_time=block_time,
        args=args,
        previous_hash=previous_hash,
    )
    return LedgerEvent(
        id=f"evt_{sequence}",
        sequence=sequence,
        contract_address=CONTRACT,
        event_type="ChickenRegistered",
        args=args,
        block_time=block_time,
        hash=computed_hash,
        previous_hash=previous_hash,
    )


def create_chain(length: int) -> list[LedgerEvent]:
    events: list[LedgerEvent] = []
    for sequence in range(1, length + 1):
        events.append(
            create_test_event(sequence, {"chicken_id": sequence}, events[-1] if events else None)
        )
    return events


class TestVerifyChain:
    """Tests for verify_chain method"""

    @pytest.mark.asyncio
    async def test_empty_log_is_valid(self, verification_service, mock_event_repo):
        """
        GIVEN no events
        WHEN verifying the log
        THEN the result is valid and empty
        """
        mock_event_repo.get_ordered.return_value = []

        result = await verification_service.verify_chain()

        assert result.is_chain_valid is True
        assert result.total_events == 0
        assert result.first_invalid is None

    @pytest.mark.asyncio
    async def test_valid_chain(self, verification_service, mock_event_repo):
        """
        GIVEN three correctly linked events
        WHEN verifying the log
        THEN every event is valid
        """
        mock_event_repo.get_ordered.return_value = create_chain(3)

        result = await verification_service.verify_chain()

        assert result.is_chain_valid is True
        assert result.total_events == 3
        assert result.valid_events == 3
        assert result.invalid_events == 0

    @pytest.mark.asyncio
    async def test_tampered_args_detected(self, verification_service, mock_event_repo):
        """
        GIVEN a chain whose second event's args were edited after hashing
        WHEN verifying the log
        THEN that event fails with HASH_MISMATCH
        """
        events = create_chain(3)
        events[1].args = {"chicken_id": 99}
        mock_event_repo.get_ordered.return_value = events

        result = await verification_service.verify_chain()

        assert result.is_chain_valid is False
        assert result.first_invalid.sequence == 2
        assert result.first_invalid.error_type == "HASH_MISMATCH"

    @pytest.mark.asyncio
    async def test_deleted_event_detected(self, verification_service, mock_event_repo):
        """
        GIVEN a chain with its middle event missing
        WHEN verifying the log
        THEN the gap is reported
        """
        events = create_chain(3)
        mock_event_repo.get_ordered.return_value = [events[0], events[2]]

        result = await verification_service.verify_chain()

        assert result.is_chain_valid is False
        assert result.first_invalid.error_type == "SEQUENCE_GAP"

    @pytest.mark.asyncio
    async def test_relinked_event_detected(self, verification_service, mock_event_repo):
        """An event pointing at the wrong predecessor breaks the chain"""
        events = create_chain(2)
        events[1].previous_hash = "f" * 64
        mock_event_repo.get_ordered.return_value = events

        result = await verification_service.verify_chain()

        assert result.first_invalid.error_type == "CHAIN_BREAK"
        assert result.first_invalid.expected_hash == events[0].hash

    @pytest.mark.asyncio
    async def test_reads_in_batches(self, mock_event_repo, hash_service):
        """
        GIVEN a batch size smaller than the log
        WHEN verifying the log
        THEN batches are fetched until a short one is returned
        """
        events = create_chain(5)
        mock_event_repo.get_ordered.side_effect = [events[:2], events[2:4], events[4:]]
        service = VerificationService(mock_event_repo, hash_service, batch_size=2)

        result = await service.verify_chain()

        assert result.total_events == 5
        assert result.is_chain_valid is True
        assert mock_event_repo.get_ordered.await_count == 3
        mock_event_repo.get_ordered.assert_awaited_with(skip=4, limit=2)
