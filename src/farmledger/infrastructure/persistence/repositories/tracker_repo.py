from sqlalchemy.ext.asyncio import AsyncSession

from farmledger.infrastructure.persistence.models.tracker import (
    ChickenEggTracker, TrackedChicken, TrackedEgg)
from farmledger.infrastructure.persistence.repositories.base import \
    BaseRepository


class ChickenEggTrackerRepository(BaseRepository[ChickenEggTracker]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, ChickenEggTracker)

    async def add(self, address: str, farm_address: str) -> ChickenEggTracker:
        return await self.create(ChickenEggTracker(address=address, farm_address=farm_address))


class TrackedChickenRepository(BaseRepository[TrackedChicken]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, TrackedChicken)

    async def add(
        self,
        tracker_address: str,
        chicken_id: str,
        breed: str,
        birth_date: str,
        ipfs_hash: str,
        registration_date: int,
    ) -> TrackedChicken:
        return await self.create(
            TrackedChicken(
                tracker_address=tracker_address,
                chicken_id=chicken_id,
                breed=breed,
                birth_date=birth_date,
                ipfs_hash=ipfs_hash,
                is_active=True,
                registration_date=registration_date,
            )
        )


class TrackedEggRepository(BaseRepository[TrackedEgg]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, TrackedEgg)

    async def add(
        self,
        tracker_address: str,
        egg_id: str,
        chicken_id: str,
        production_date: str,
        ipfs_hash: str,
        registration_date: int,
    ) -> TrackedEgg:
        return await self.create(
            TrackedEgg(
                tracker_address=tracker_address,
                egg_id=egg_id,
                chicken_id=chicken_id,
                production_date=production_date,
                ipfs_hash=ipfs_hash,
                is_active=True,
                registration_date=registration_date,
            )
        )
