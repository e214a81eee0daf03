from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from farmledger.infrastructure.persistence.models.authority_center import (
    Authority, AuthorityCenter, FarmCertification)
from farmledger.infrastructure.persistence.repositories.base import \
    BaseRepository


class AuthorityCenterRepository(BaseRepository[AuthorityCenter]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, AuthorityCenter)

    async def add(self, address: str, owner: str) -> AuthorityCenter:
        return await self.create(AuthorityCenter(address=address, owner=owner))


class AuthorityRepository(BaseRepository[Authority]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Authority)

    async def exists(self, center_address: str, address: str) -> bool:
        return await self.get((center_address, address)) is not None

    async def add(self, center_address: str, address: str, added_at: int) -> Authority:
        return await self.create(
            Authority(center_address=center_address, address=address, added_at=added_at)
        )

    async def remove(self, authority: Authority) -> None:
        """
        Drop a membership row.

        Authority membership is a set, not a historical record; the event log
        keeps the AuthorityRemoved fact.
        """
        await self.db.delete(authority)
        await self.db.flush()

    async def list_addresses(self, center_address: str) -> list[str]:
        """Current members, oldest first"""
        result = await self.db.execute(
            select(Authority.address)
            .where(Authority.center_address == center_address)
            .order_by(Authority.added_at, Authority.address)
        )
        return list(result.scalars().all())


class FarmCertificationRepository(BaseRepository[FarmCertification]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, FarmCertification)

    async def add(
        self,
        center_address: str,
        farm_address: str,
        name: str,
        location: str,
        ipfs_hash: str,
        registered_at: int,
    ) -> FarmCertification:
        """Store a new, active certification"""
        return await self.create(
            FarmCertification(
                center_address=center_address,
                farm_address=farm_address,
                name=name,
                location=location,
                ipfs_hash=ipfs_hash,
                is_registered=True,
                registered_at=registered_at,
                removed_at=None,
            )
        )

    async def is_registered(self, center_address: str, farm_address: str) -> bool:
        record = await self.get((center_address, farm_address))
        return record is not None and record.is_registered
