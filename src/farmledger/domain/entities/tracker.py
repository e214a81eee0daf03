"""
ChickenEggTracker domain entities.

The tracker keeps its own chicken and egg records keyed by caller-supplied
string ids. Dates are free-form strings and are not validated.
"""

from dataclasses import dataclass


@dataclass
class TrackedChickenEntity:
    chicken_id: str
    breed: str
    birth_date: str
    ipfs_hash: str
    is_active: bool
    registration_date: int

    def as_tuple(self) -> tuple[str, str, str, str, bool, int]:
        """Field order of the getChickenInfo view."""
        return (
            self.chicken_id,
            self.breed,
            self.birth_date,
            self.ipfs_hash,
            self.is_active,
            self.registration_date,
        )


@dataclass
class TrackedEggEntity:
    egg_id: str
    chicken_id: str
    production_date: str
    ipfs_hash: str
    is_active: bool
    registration_date: int

    def as_tuple(self) -> tuple[str, str, str, str, bool, int]:
        """Field order of the getEggInfo view."""
        return (
            self.egg_id,
            self.chicken_id,
            self.production_date,
            self.ipfs_hash,
            self.is_active,
            self.registration_date,
        )
