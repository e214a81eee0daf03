"""
Authorization checks injectable into contracts.

FarmOwnerAuthorization resolves the owner of a Farm contract on every call,
which is how the ChickenEggTracker delegates its access control. The role table
variant answers from a fixed set of addresses instead.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from farmledger.domain.exceptions import OnlyFarmOwnerError
from farmledger.domain.value_objects import Address

if TYPE_CHECKING:
    from farmledger.application.interfaces.services import IFarmReader


class FarmOwnerAuthorization:
    """Caller must be the current owner of the referenced Farm"""

    def __init__(self, farm_reader: "IFarmReader", farm_address: Address) -> None:
        self.farm_reader = farm_reader
        self.farm_address = farm_address

    async def require(self, caller: Address) -> None:
        owner = await self.farm_reader.get_owner(self.farm_address.value)
        if owner is None or Address(owner) != caller:
            raise OnlyFarmOwnerError(caller.value)


class RoleTableAuthorization:
    """Caller must be one of a fixed set of addresses"""

    def __init__(self, allowed: Iterable[Address | str]) -> None:
        self.allowed = frozenset(Address.parse(address) for address in allowed)

    async def require(self, caller: Address) -> None:
        if caller not in self.allowed:
            raise OnlyFarmOwnerError(caller.value)
