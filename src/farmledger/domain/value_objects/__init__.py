"""Domain value objects."""

from farmledger.domain.value_objects.core import Address

__all__ = [
    "Address",
]
