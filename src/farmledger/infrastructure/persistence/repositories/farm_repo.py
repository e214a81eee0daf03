from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from farmledger.infrastructure.persistence.models.farm import Chicken, Egg, Farm
from farmledger.infrastructure.persistence.repositories.base import \
    BaseRepository


class FarmRepository(BaseRepository[Farm]):
    """
    Farm storage. Also serves the read-only cross-contract lookups other
    contracts make against a Farm (owner, chicken count).
    """

    def __init__(self, db: AsyncSession):
        super().__init__(db, Farm)

    async def add(
        self,
        address: str,
        owner: str,
        name: str,
        metadata_uri: str,
        authority_center: str | None = None,
        location: str = "",
    ) -> Farm:
        """Store a freshly deployed farm with both counters at zero"""
        return await self.create(
            Farm(
                address=address,
                owner=owner,
                authority_center=authority_center,
                name=name,
                location=location,
                metadata_uri=metadata_uri,
                chicken_count=0,
                egg_count=0,
            )
        )

    async def get_chicken_count(self, farm_address: str, *, for_update: bool = False) -> int | None:
        """
        None when no Farm is deployed at the address.

        for_update locks the farm row, so the count cannot change before the
        caller's transaction ends.
        """
        query = select(Farm.chicken_count).where(Farm.address == farm_address)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def get_owner(self, farm_address: str) -> str | None:
        result = await self.db.execute(select(Farm.owner).where(Farm.address == farm_address))
        return result.scalar_one_or_none()


class ChickenRepository(BaseRepository[Chicken]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Chicken)

    async def add(
        self, farm_address: str, chicken_id: int, birth_time: int, metadata_uri: str
    ) -> Chicken:
        return await self.create(
            Chicken(
                farm_address=farm_address,
                chicken_id=chicken_id,
                birth_time=birth_time,
                metadata_uri=metadata_uri,
                is_alive=True,
            )
        )

    async def get_by_farm(self, farm_address: str, skip: int = 0, limit: int = 100) -> list[Chicken]:
        """Chickens of a farm in id order"""
        result = await self.db.execute(
            select(Chicken)
            .where(Chicken.farm_address == farm_address)
            .order_by(Chicken.chicken_id)
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())


class EggRepository(BaseRepository[Egg]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Egg)

    async def add(
        self,
        farm_address: str,
        egg_id: int,
        chicken_id: int,
        birth_time: int,
        metadata_uri: str,
    ) -> Egg:
        return await self.create(
            Egg(
                farm_address=farm_address,
                egg_id=egg_id,
                chicken_id=chicken_id,
                birth_time=birth_time,
                metadata_uri=metadata_uri,
            )
        )

    async def get_by_farm(
        self,
        farm_address: str,
        chicken_id: int | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[Egg]:
        """Eggs of a farm in id order, optionally only those of one chicken"""
        query = select(Egg).where(Egg.farm_address == farm_address)
        if chicken_id is not None:
            query = query.where(Egg.chicken_id == chicken_id)
        result = await self.db.execute(query.order_by(Egg.egg_id).offset(skip).limit(limit))
        return list(result.scalars().all())
