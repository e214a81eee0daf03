from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from farmledger.domain.enums import ContractKind
from farmledger.infrastructure.persistence.models.contract_account import \
    ContractAccount
from farmledger.infrastructure.persistence.repositories.base import \
    BaseRepository


class ContractAccountRepository(BaseRepository[ContractAccount]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, ContractAccount)

    async def get_of_kind(self, address: str, kind: ContractKind) -> ContractAccount | None:
        """Get a contract only if it is of the expected kind"""
        result = await self.db.execute(
            select(ContractAccount).where(
                ContractAccount.address == address,
                ContractAccount.kind == kind.value,
            )
        )
        return result.scalar_one_or_none()

    async def next_nonce(self, deployer: str) -> int:
        """Number of contracts the deployer has deployed so far"""
        result = await self.db.execute(
            select(func.count(ContractAccount.address)).where(
                ContractAccount.deployer == deployer
            )
        )
        return result.scalar() or 0

    async def create_account(
        self, address: str, kind: ContractKind, deployer: str, nonce: int, deployed_at: int
    ) -> ContractAccount:
        account = ContractAccount(
            address=address,
            kind=kind.value,
            deployer=deployer,
            nonce=nonce,
            deployed_at=deployed_at,
        )
        return await self.create(account)

    async def get_by_deployer(self, deployer: str) -> list[ContractAccount]:
        """Contracts deployed by an address, in deployment order"""
        result = await self.db.execute(
            select(ContractAccount)
            .where(ContractAccount.deployer == deployer)
            .order_by(ContractAccount.nonce)
        )
        return list(result.scalars().all())
