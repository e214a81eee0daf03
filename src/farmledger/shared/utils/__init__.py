"""Shared utilities."""

from farmledger.shared.utils.generators import generate_cuid

__all__ = ["generate_cuid"]
