"""Shared test fixtures for pytest"""
import pytest
from web3 import Web3

from farmledger.domain.value_objects import Address
from farmledger.infrastructure.config.settings import Settings
from farmledger.infrastructure.ledger import Ledger
from farmledger.infrastructure.persistence.database import (
    create_ledger_engine, create_schema, create_session_factory)

# In-memory database shared by every session of one test
TEST_DATABASE_URL = "sqlite+aiosqlite://"

GENESIS_TIME = 1_700_000_000


def make_address(n: int) -> Address:
    """Deterministic checksummed test address"""
    return Address(Web3.to_checksum_address(f"0x{n:040x}"))


class FakeClock:
    """Block clock that only moves when told to"""

    def __init__(self, start: int = GENESIS_TIME):
        self.current = start

    def now(self) -> int:
        return self.current

    def advance(self, seconds: int) -> None:
        self.current += seconds


@pytest.fixture
async def test_engine():
    """Create test database engine with a fresh schema"""
    engine = create_ledger_engine(TEST_DATABASE_URL)
    await create_schema(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_ledger(session_factory, clock):
    """Build a ledger over the test database with settings overrides"""

    def _make(**overrides) -> Ledger:
        settings = Settings(database_url=TEST_DATABASE_URL, **overrides)
        return Ledger(session_factory, settings=settings, clock=clock)

    return _make


@pytest.fixture
def ledger(make_ledger):
    return make_ledger()


@pytest.fixture
def owner():
    return make_address(0xA1)


@pytest.fixture
def inspector():
    return make_address(0xA2)


@pytest.fixture
def farmer():
    return make_address(0xF1)


@pytest.fixture
def outsider():
    return make_address(0xE1)


@pytest.fixture
async def center(ledger, owner):
    """AuthorityCenter deployed by `owner`"""
    async with ledger.transaction() as tx:
        return await tx.deployer.deploy_authority_center(owner)


@pytest.fixture
async def farm(ledger, farmer, center):
    """Farm owned by `farmer`, referencing `center`, with no chickens"""
    async with ledger.transaction() as tx:
        return await tx.deployer.deploy_farm(
            farmer,
            farmer,
            "Green Acres",
            "ipfs://farm-meta",
            authority_center=center,
            location="Valley Road 1",
        )


@pytest.fixture
async def tracker(ledger, farmer, farm):
    """ChickenEggTracker bound to `farm`"""
    async with ledger.transaction() as tx:
        return await tx.deployer.deploy_chicken_egg_tracker(farmer, farm)
