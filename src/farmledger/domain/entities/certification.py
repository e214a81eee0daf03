"""
Farm certification domain entity.

Held by an AuthorityCenter. Records are never deleted: decertifying a farm only
clears the registered flag, so the name and location stay readable.
"""

from dataclasses import dataclass

from farmledger.domain.value_objects.core import Address


@dataclass
class FarmCertificationEntity:
    center_address: Address
    farm_address: Address
    name: str
    location: str
    ipfs_hash: str
    is_registered: bool
    registered_at: int
    removed_at: int | None = None

    def is_active(self) -> bool:
        """Business rule: only a registered record certifies its farm."""
        return self.is_registered
