"""
Ledger transactions.

A ledger transaction is one database transaction. It commits when the block
inside `Ledger.transaction()` finishes and rolls back completely when it raises,
so a rejected contract call leaves no trace.

Usage:
    ledger = Ledger(create_session_factory(engine))

    async with ledger.transaction() as tx:
        center = await tx.deployer.deploy_authority_center(owner)

    async with ledger.transaction() as tx:
        authority_center = await tx.authority_center(center)
        await authority_center.add_authority(owner, inspector)
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from farmledger.application.interfaces.services import (IAuthorizationCheck,
                                                        IClock, IHashService)
from farmledger.application.services.authorization_service import \
    FarmOwnerAuthorization
from farmledger.application.services.event_log_service import EventLogService
from farmledger.application.services.hash_service import HashService
from farmledger.application.services.provenance_service import \
    ProvenanceService
from farmledger.application.services.verification_service import \
    VerificationService
from farmledger.application.use_cases.authority_center import \
    AuthorityCenterContract
from farmledger.application.use_cases.chicken_egg_tracker import \
    ChickenEggTrackerContract
from farmledger.application.use_cases.deployment import ContractDeployer
from farmledger.application.use_cases.farm import FarmContract
from farmledger.domain.enums import AuthorityAdmission
from farmledger.domain.exceptions import (ContractNotFoundError,
                                          LedgerException)
from farmledger.domain.value_objects import Address
from farmledger.infrastructure.clock import SystemClock
from farmledger.infrastructure.config.settings import Settings, get_settings
from farmledger.infrastructure.persistence.database import (
    create_ledger_engine, create_session_factory)
from farmledger.infrastructure.persistence.repositories import (
    AuthorityCenterRepository, AuthorityRepository, ChickenEggTrackerRepository,
    ChickenRepository, ContractAccountRepository, EggRepository,
    FarmCertificationRepository, FarmRepository, LedgerEventRepository,
    TrackedChickenRepository, TrackedEggRepository)
from farmledger.shared.logging import get_logger

logger = get_logger(__name__)


class LedgerContext:
    """Repositories and contract bindings for one ledger transaction"""

    def __init__(
        self,
        session: AsyncSession,
        settings: Settings,
        clock: IClock,
        hash_service: IHashService,
    ) -> None:
        self.session = session
        self.settings = settings
        self.clock = clock
        self.hash_service = hash_service

        self.contracts = ContractAccountRepository(session)
        self.centers = AuthorityCenterRepository(session)
        self.authorities = AuthorityRepository(session)
        self.certifications = FarmCertificationRepository(session)
        self.farms = FarmRepository(session)
        self.chickens = ChickenRepository(session)
        self.eggs = EggRepository(session)
        self.trackers = ChickenEggTrackerRepository(session)
        self.tracked_chickens = TrackedChickenRepository(session)
        self.tracked_eggs = TrackedEggRepository(session)
        self.events = LedgerEventRepository(session)

        self.event_log = EventLogService(self.events, hash_service, clock)

    @property
    def deployer(self) -> ContractDeployer:
        return ContractDeployer(
            contract_repo=self.contracts,
            center_repo=self.centers,
            authority_repo=self.authorities,
            farm_repo=self.farms,
            tracker_repo=self.trackers,
            clock=self.clock,
        )

    async def authority_center(self, address: Address | str) -> AuthorityCenterContract:
        address = Address.parse(address)
        center = await self.centers.get(address.value)
        if center is None:
            raise ContractNotFoundError(address.value, "AuthorityCenter")
        return AuthorityCenterContract(
            address=address,
            owner=Address(center.owner),
            authority_repo=self.authorities,
            certification_repo=self.certifications,
            farm_reader=self.farms,
            event_log=self.event_log,
            clock=self.clock,
            admission=AuthorityAdmission(self.settings.authority_admission),
        )

    async def farm(self, address: Address | str) -> FarmContract:
        address = Address.parse(address)
        if await self.farms.get(address.value) is None:
            raise ContractNotFoundError(address.value, "Farm")
        return FarmContract(
            address=address,
            farm_repo=self.farms,
            chicken_repo=self.chickens,
            egg_repo=self.eggs,
            event_log=self.event_log,
            clock=self.clock,
            certification_reader=self.certifications,
        )

    async def chicken_egg_tracker(
        self,
        address: Address | str,
        authorization: IAuthorizationCheck | None = None,
    ) -> ChickenEggTrackerContract:
        """
        Bind a deployed tracker.

        Without an explicit authorization check the tracker asks its Farm for
        the current owner on every mutating call.
        """
        address = Address.parse(address)
        tracker = await self.trackers.get(address.value)
        if tracker is None:
            raise ContractNotFoundError(address.value, "ChickenEggTracker")
        farm_address = Address(tracker.farm_address)
        return ChickenEggTrackerContract(
            address=address,
            farm_address=farm_address,
            chicken_repo=self.tracked_chickens,
            egg_repo=self.tracked_eggs,
            authorization=authorization or FarmOwnerAuthorization(self.farms, farm_address),
            event_log=self.event_log,
            clock=self.clock,
            require_active_parent=self.settings.tracker_require_active_parent,
        )

    async def provenance(self, farm_address: Address | str) -> ProvenanceService:
        return ProvenanceService(await self.farm(farm_address))

    def verification(self) -> VerificationService:
        return VerificationService(self.events, self.hash_service)


class Ledger:
    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings | None = None,
        clock: IClock | None = None,
        hash_service: IHashService | None = None,
    ) -> None:
        self.session_factory = session_factory
        self.settings = settings or get_settings()
        self.clock = clock or SystemClock()
        self.hash_service = hash_service or HashService.from_name(self.settings.hash_algorithm)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Ledger":
        settings = settings or get_settings()
        engine = create_ledger_engine(settings.database_url, echo=settings.database_echo)
        return cls(create_session_factory(engine), settings=settings)

    def _context(self, session: AsyncSession) -> LedgerContext:
        return LedgerContext(session, self.settings, self.clock, self.hash_service)

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[LedgerContext]:
        """
        Run contract calls atomically.
        - Begins transaction automatically
        - Commits on success
        - Rolls back on exception and re-raises
        """
        async with self.session_factory() as session:
            try:
                async with session.begin():
                    yield self._context(session)
            except LedgerException as exc:
                logger.warning("Transaction reverted: %s (%s)", exc.message, exc.error_code)
                raise

    @asynccontextmanager
    async def view(self) -> AsyncIterator[LedgerContext]:
        """
        Read-only access; anything written inside is discarded.

        Rows read inside stay readable after the block: they are detached
        before the rollback so it cannot expire them.
        """
        async with self.session_factory() as session:
            try:
                yield self._context(session)
            finally:
                session.expunge_all()
                await session.rollback()
