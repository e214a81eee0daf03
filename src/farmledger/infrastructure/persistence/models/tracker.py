from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from farmledger.domain.entities import TrackedChickenEntity, TrackedEggEntity
from farmledger.infrastructure.persistence.database import Base
from farmledger.infrastructure.persistence.models.mixins import (
    ADDRESS_LENGTH, TrackerScopedMixin)


class ChickenEggTracker(Base):
    """Legacy string-keyed ledger bound to one Farm"""

    __tablename__ = "chicken_egg_tracker"

    address: Mapped[str] = mapped_column(
        String(ADDRESS_LENGTH),
        ForeignKey("contract_account.address", ondelete="CASCADE"),
        primary_key=True,
    )
    farm_address: Mapped[str] = mapped_column(
        String(ADDRESS_LENGTH), ForeignKey("farm.address"), nullable=False, index=True
    )


class TrackedChicken(TrackerScopedMixin, Base):
    __tablename__ = "tracked_chicken"

    chicken_id: Mapped[str] = mapped_column(String, primary_key=True)
    breed: Mapped[str] = mapped_column(String, nullable=False, default="")
    birth_date: Mapped[str] = mapped_column(String, nullable=False, default="")
    ipfs_hash: Mapped[str] = mapped_column(String, nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    registration_date: Mapped[int] = mapped_column(Integer, nullable=False)

    def to_entity(self) -> TrackedChickenEntity:
        return TrackedChickenEntity(
            chicken_id=self.chicken_id,
            breed=self.breed,
            birth_date=self.birth_date,
            ipfs_hash=self.ipfs_hash,
            is_active=self.is_active,
            registration_date=self.registration_date,
        )


class TrackedEgg(TrackerScopedMixin, Base):
    __tablename__ = "tracked_egg"

    egg_id: Mapped[str] = mapped_column(String, primary_key=True)
    chicken_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    production_date: Mapped[str] = mapped_column(String, nullable=False, default="")
    ipfs_hash: Mapped[str] = mapped_column(String, nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    registration_date: Mapped[int] = mapped_column(Integer, nullable=False)

    def to_entity(self) -> TrackedEggEntity:
        return TrackedEggEntity(
            egg_id=self.egg_id,
            chicken_id=self.chicken_id,
            production_date=self.production_date,
            ipfs_hash=self.ipfs_hash,
            is_active=self.is_active,
            registration_date=self.registration_date,
        )
