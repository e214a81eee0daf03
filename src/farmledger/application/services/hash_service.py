"""
Hash service for the event log hash chain.

Follows OCP - closed for modification, open for extension.
New hash algorithms can be added without modifying this class.
"""

import hashlib
import json
from abc import ABC, abstractmethod
from typing import Any


class HashAlgorithm(ABC):
    """Abstract base class for hash algorithms (OCP)"""

    @abstractmethod
    def hash(self, data: str) -> str:
        """Compute hash of the input data"""
        pass


class SHA256Algorithm(HashAlgorithm):
    """SHA-256 hash algorithm implementation"""

    def hash(self, data: str) -> str:
        return hashlib.sha256(data.encode()).hexdigest()


class SHA512Algorithm(HashAlgorithm):
    """SHA-512 hash algorithm implementation"""

    def hash(self, data: str) -> str:
        return hashlib.sha512(data.encode()).hexdigest()


ALGORITHMS: dict[str, type[HashAlgorithm]] = {
    "sha256": SHA256Algorithm,
    "sha512": SHA512Algorithm,
}


class HashService:
    """
    Single source of truth for event log hashes.

    Used both when appending to the log and when verifying it, so the two can
    never disagree about what an entry hashes to.
    """

    def __init__(self, algorithm: HashAlgorithm | None = None):
        self.algorithm = algorithm or SHA256Algorithm()

    @classmethod
    def from_name(cls, name: str) -> "HashService":
        """Build a service for a configured algorithm name"""
        try:
            return cls(ALGORITHMS[name]())
        except KeyError:
            raise ValueError(f"Unknown hash algorithm '{name}'") from None

    @staticmethod
    def canonical_json(data: dict[str, Any]) -> str:
        """Convert a dictionary to a canonical JSON string"""
        return json.dumps(data, sort_keys=True, separators=(",", ":"))

    def compute_hash(
        self,
        sequence: int,
        contract_address: str,
        event_type: str,
        block_time: int,
        args: dict[str, Any],
        previous_hash: str | None,
    ) -> str:
        """
        Compute the hash of one event log entry.

        Hash includes:
        - sequence: position in the log
        - contract_address: emitting contract
        - event_type: what happened
        - block_time: when it happened (unix seconds)
        - args: event arguments (canonicalized JSON)
        - previous_hash: link to previous entry (creates chain)
        """
        hash_content = {
            "sequence": sequence,
            "contract_address": contract_address,
            "event_type": event_type,
            "block_time": block_time,
            "args": args,
            "previous_hash": previous_hash,
        }
        return self.algorithm.hash(self.canonical_json(hash_content))
