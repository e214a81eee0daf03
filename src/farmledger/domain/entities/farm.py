"""
Farm domain entities.

A Farm owns two collections: chickens and eggs, both keyed by 1-based
integer ids handed out in registration order.
"""

from dataclasses import dataclass

from farmledger.domain.value_objects.core import Address


@dataclass
class FarmEntity:
    """Descriptive state of a deployed Farm contract."""

    address: Address
    owner: Address
    name: str
    metadata_uri: str
    location: str
    chicken_count: int
    egg_count: int
    authority_center: Address | None = None

    def is_owned_by(self, caller: Address) -> bool:
        return self.owner == caller

    def next_chicken_id(self) -> int:
        return self.chicken_count + 1

    def next_egg_id(self) -> int:
        return self.egg_count + 1

    def knows_chicken(self, chicken_id: int) -> bool:
        return 1 <= chicken_id <= self.chicken_count

    def knows_egg(self, egg_id: int) -> bool:
        return 1 <= egg_id <= self.egg_count


@dataclass
class ChickenEntity:
    """A chicken on a Farm. Dead chickens are read-only."""

    id: int
    farm_address: Address
    birth_time: int
    metadata_uri: str
    is_alive: bool

    def can_lay_eggs(self) -> bool:
        return self.is_alive

    def is_read_only(self) -> bool:
        return not self.is_alive


@dataclass
class EggEntity:
    """
    An egg laid by a chicken on the same Farm.

    Eggs are permanent historical records: the parent chicken only had to be
    alive when the egg was registered.
    """

    id: int
    farm_address: Address
    chicken_id: int
    birth_time: int
    metadata_uri: str
