"""
Core value objects for the ledger domain.

Value objects are immutable and validate themselves on construction.
"""

from dataclasses import dataclass

from web3 import Web3

from farmledger.domain.exceptions import ValidationException


@dataclass(frozen=True)
class Address:
    """
    A 20-byte account or contract address.

    Always stored in EIP-55 checksum form so that two spellings of the same
    address compare equal.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not Web3.is_address(self.value):
            raise ValidationException(f"Invalid address: {self.value!r}", field="address")
        # Mixed case means EIP-55; a wrong checksum is a typo, not another address
        digits = self.value[2:] if self.value[:2].lower() == "0x" else self.value
        if digits not in (digits.lower(), digits.upper()) and not Web3.is_checksum_address(
            self.value
        ):
            raise ValidationException(f"Invalid address checksum: {self.value!r}", field="address")
        object.__setattr__(self, "value", Web3.to_checksum_address(self.value))

    @classmethod
    def parse(cls, value: "str | Address") -> "Address":
        """Accept either a raw string or an existing Address."""
        if isinstance(value, Address):
            return value
        return cls(value)

    @classmethod
    def for_contract(cls, deployer: "Address", nonce: int) -> "Address":
        """
        Derive the address of a contract deployed by `deployer` with `nonce`.

        Deterministic: the same deployer and nonce always give the same address,
        and a deployer's nonce only grows, so addresses are never reused.
        """
        if nonce < 0:
            raise ValidationException("Nonce must not be negative", field="nonce")
        digest = Web3.keccak(Web3.to_bytes(hexstr=deployer.value) + nonce.to_bytes(32, "big"))
        return cls(Web3.to_checksum_address(bytes(digest[-20:])))

    def __str__(self) -> str:
        return self.value
