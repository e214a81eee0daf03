from sqlalchemy import (Boolean, CheckConstraint, ForeignKey,
                        ForeignKeyConstraint, Integer, String)
from sqlalchemy.orm import Mapped, mapped_column

from farmledger.domain.entities import ChickenEntity, EggEntity, FarmEntity
from farmledger.domain.value_objects import Address
from farmledger.infrastructure.persistence.database import Base
from farmledger.infrastructure.persistence.models.mixins import (
    ADDRESS_LENGTH, FarmScopedMixin)


class Farm(Base):
    """
    Farm contract storage.

    chicken_count and egg_count double as the last issued ids.
    """

    __tablename__ = "farm"

    address: Mapped[str] = mapped_column(
        String(ADDRESS_LENGTH),
        ForeignKey("contract_account.address", ondelete="CASCADE"),
        primary_key=True,
    )
    owner: Mapped[str] = mapped_column(String(ADDRESS_LENGTH), nullable=False, index=True)
    # Read-only reference, not an ownership relation
    authority_center: Mapped[str | None] = mapped_column(String(ADDRESS_LENGTH), nullable=True)
    name: Mapped[str] = mapped_column(String, nullable=False, default="")
    location: Mapped[str] = mapped_column(String, nullable=False, default="")
    metadata_uri: Mapped[str] = mapped_column(String, nullable=False, default="")
    chicken_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    egg_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        CheckConstraint("chicken_count >= 0", name="ck_farm_chicken_count"),
        CheckConstraint("egg_count >= 0", name="ck_farm_egg_count"),
    )

    def to_entity(self) -> FarmEntity:
        return FarmEntity(
            address=Address(self.address),
            owner=Address(self.owner),
            name=self.name,
            metadata_uri=self.metadata_uri,
            location=self.location,
            chicken_count=self.chicken_count,
            egg_count=self.egg_count,
            authority_center=Address(self.authority_center) if self.authority_center else None,
        )


class Chicken(FarmScopedMixin, Base):
    __tablename__ = "chicken"

    chicken_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    birth_time: Mapped[int] = mapped_column(Integer, nullable=False)
    metadata_uri: Mapped[str] = mapped_column(String, nullable=False, default="")
    is_alive: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    def to_entity(self) -> ChickenEntity:
        return ChickenEntity(
            id=self.chicken_id,
            farm_address=Address(self.farm_address),
            birth_time=self.birth_time,
            metadata_uri=self.metadata_uri,
            is_alive=self.is_alive,
        )


class Egg(FarmScopedMixin, Base):
    __tablename__ = "egg"

    egg_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    chicken_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    birth_time: Mapped[int] = mapped_column(Integer, nullable=False)
    metadata_uri: Mapped[str] = mapped_column(String, nullable=False, default="")

    __table_args__ = (
        ForeignKeyConstraint(
            ["farm_address", "chicken_id"],
            ["chicken.farm_address", "chicken.chicken_id"],
            name="fk_egg_parent_chicken",
        ),
    )

    def to_entity(self) -> EggEntity:
        return EggEntity(
            id=self.egg_id,
            farm_address=Address(self.farm_address),
            chicken_id=self.chicken_id,
            birth_time=self.birth_time,
            metadata_uri=self.metadata_uri,
        )
