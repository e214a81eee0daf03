"""
SQLAlchemy mixins for common ledger model patterns.

Contract-scoped mixins contribute the owning contract's address as the first
part of a composite primary key, the same way every storage slot of a contract
lives under that contract's address.
"""
from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from farmledger.shared.utils.generators import generate_cuid

ADDRESS_LENGTH = 42


class CuidMixin:
    """
    Mixin for models using CUID as primary key.

    Provides:
        - id: String primary key with automatic CUID generation
    """

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class CenterScopedMixin:
    """
    Mixin for rows owned by an AuthorityCenter.

    Provides:
        - center_address: primary key part, foreign key to authority_center
    """

    @declared_attr
    def center_address(cls) -> Mapped[str]:
        return mapped_column(
            String(ADDRESS_LENGTH),
            ForeignKey("authority_center.address", ondelete="CASCADE"),
            primary_key=True,
            sort_order=-1,
        )


class FarmScopedMixin:
    """
    Mixin for rows owned by a Farm.

    Provides:
        - farm_address: primary key part, foreign key to farm
    """

    @declared_attr
    def farm_address(cls) -> Mapped[str]:
        return mapped_column(
            String(ADDRESS_LENGTH),
            ForeignKey("farm.address", ondelete="CASCADE"),
            primary_key=True,
            sort_order=-1,
        )


class TrackerScopedMixin:
    """
    Mixin for rows owned by a ChickenEggTracker.

    Provides:
        - tracker_address: primary key part, foreign key to chicken_egg_tracker
    """

    @declared_attr
    def tracker_address(cls) -> Mapped[str]:
        return mapped_column(
            String(ADDRESS_LENGTH),
            ForeignKey("chicken_egg_tracker.address", ondelete="CASCADE"),
            primary_key=True,
            sort_order=-1,
        )
