from sqlalchemy import Boolean, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from farmledger.domain.entities import FarmCertificationEntity
from farmledger.domain.value_objects import Address
from farmledger.infrastructure.persistence.database import Base
from farmledger.infrastructure.persistence.models.mixins import (
    ADDRESS_LENGTH, CenterScopedMixin)


class AuthorityCenter(Base):
    """Root access-control contract. The owner never changes."""

    __tablename__ = "authority_center"

    address: Mapped[str] = mapped_column(
        String(ADDRESS_LENGTH),
        ForeignKey("contract_account.address", ondelete="CASCADE"),
        primary_key=True,
    )
    owner: Mapped[str] = mapped_column(String(ADDRESS_LENGTH), nullable=False)


class Authority(CenterScopedMixin, Base):
    """Membership of an address in an AuthorityCenter's authority set"""

    __tablename__ = "authority"

    address: Mapped[str] = mapped_column(String(ADDRESS_LENGTH), primary_key=True)
    added_at: Mapped[int] = mapped_column(Integer, nullable=False)


class FarmCertification(CenterScopedMixin, Base):
    """
    Certification record of a farm.

    Never deleted: removal clears is_registered and stamps removed_at.
    """

    __tablename__ = "farm_certification"

    farm_address: Mapped[str] = mapped_column(String(ADDRESS_LENGTH), primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False, default="")
    location: Mapped[str] = mapped_column(String, nullable=False, default="")
    ipfs_hash: Mapped[str] = mapped_column(String, nullable=False, default="")
    is_registered: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    registered_at: Mapped[int] = mapped_column(Integer, nullable=False)
    removed_at: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def to_entity(self) -> FarmCertificationEntity:
        return FarmCertificationEntity(
            center_address=Address(self.center_address),
            farm_address=Address(self.farm_address),
            name=self.name,
            location=self.location,
            ipfs_hash=self.ipfs_hash,
            is_registered=self.is_registered,
            registered_at=self.registered_at,
            removed_at=self.removed_at,
        )
