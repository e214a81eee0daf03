from abc import ABC
from typing import Any, Generic, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import object_session

from farmledger.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(ABC, Generic[ModelType]):
    """
    Base repository implementing common storage operations.

    Ledger rows are never hard-deleted, so there is no delete().
    Writes flush immediately: the session runs with autoflush disabled and
    later reads in the same ledger transaction must see them.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]):
        self.db = db
        self.model = model

    async def get(self, primary_key: Any, *, for_update: bool = False) -> ModelType | None:
        """
        Get a single record by primary key (a tuple for composite keys).

        for_update takes a row lock on backends that support it.
        """
        return await self.db.get(self.model, primary_key, with_for_update=for_update)

    async def create(self, obj: ModelType) -> ModelType:
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def update(self, obj: ModelType) -> ModelType:
        """
        Flush pending attribute changes of a record.

        Handles potentially detached objects by merging back to session.
        """
        if object_session(obj) is None:
            obj = await self.db.merge(obj)
        await self.db.flush()
        return obj
