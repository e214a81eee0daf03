"""
Domain exceptions for the FarmLedger registry.

Every rejected contract call raises one of these. The four families mirror the
revert reasons a thin client pattern-matches on:

    UNAUTHORIZED   caller lacks the owner / authority / farm-owner role
    ALREADY_EXISTS duplicate registration
    NOT_FOUND      reference to a nonexistent authority, farm, chicken or egg
    INVALID_STATE  the referenced record is in a state that forbids the call

Messages are stable strings; do not reword them.
"""

from typing import Any


class LedgerException(Exception):
    """
    Base exception for all FarmLedger errors.

    Attributes:
        message: Human-readable error description (the revert reason)
        error_code: Machine-readable error code
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for client responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(LedgerException):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


# ---------------------------------------------------------------------------
# Taxonomy roots
# ---------------------------------------------------------------------------


class UnauthorizedError(LedgerException):
    """Caller lacks the role required for the attempted operation."""

    def __init__(self, message: str = "Not authorized", caller: str | None = None):
        details = {"caller": caller} if caller else {}
        super().__init__(message, "UNAUTHORIZED", details)


class AlreadyExistsError(LedgerException):
    """Attempted duplicate registration."""

    def __init__(self, message: str, resource_type: str, resource_id: Any):
        super().__init__(
            message,
            "ALREADY_EXISTS",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class NotFoundError(LedgerException):
    """Reference to a record that was never registered."""

    def __init__(self, message: str, resource_type: str, resource_id: Any):
        super().__init__(
            message,
            "NOT_FOUND",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


class InvalidStateError(LedgerException):
    """Record exists but its state forbids the operation."""

    def __init__(self, message: str, resource_type: str, resource_id: Any):
        super().__init__(
            message,
            "INVALID_STATE",
            {"resource_type": resource_type, "resource_id": str(resource_id)},
        )


# ---------------------------------------------------------------------------
# Authorization
# ---------------------------------------------------------------------------


class OnlyOwnerError(UnauthorizedError):
    def __init__(self, caller: str | None = None):
        super().__init__("Only owner can call this function", caller)


class OnlyAuthorityOrOwnerError(UnauthorizedError):
    def __init__(self, caller: str | None = None):
        super().__init__("Only authority or owner can call this function", caller)


class OnlyFarmOwnerError(UnauthorizedError):
    def __init__(self, caller: str | None = None):
        super().__init__("Only farm owner can call this function", caller)


# ---------------------------------------------------------------------------
# Duplicates
# ---------------------------------------------------------------------------


class AlreadyAuthorityError(AlreadyExistsError):
    def __init__(self, address: str):
        super().__init__("Already an authority", "authority", address)


class FarmAlreadyRegisteredError(AlreadyExistsError):
    def __init__(self, farm_address: str):
        super().__init__("Farm already registered", "farm", farm_address)


class ChickenAlreadyRegisteredError(AlreadyExistsError):
    def __init__(self, chicken_id: Any):
        super().__init__("Chicken already registered", "chicken", chicken_id)


class EggAlreadyRegisteredError(AlreadyExistsError):
    def __init__(self, egg_id: Any):
        super().__init__("Egg already registered", "egg", egg_id)


# ---------------------------------------------------------------------------
# Missing references
# ---------------------------------------------------------------------------


class NotAuthorityError(NotFoundError):
    def __init__(self, address: str):
        super().__init__("Not an authority", "authority", address)


class FarmNotRegisteredError(NotFoundError):
    def __init__(self, farm_address: str):
        super().__init__("Farm not registered", "farm", farm_address)


class ContractNotFoundError(NotFoundError):
    """No contract of the expected kind is deployed at the address."""

    def __init__(self, address: str, kind: str):
        super().__init__(f"{kind} contract not found", kind, address)


class ChickenNotFoundError(NotFoundError):
    def __init__(self, chicken_id: Any):
        super().__init__("Chicken does not exist", "chicken", chicken_id)


class ChickenNotRegisteredError(NotFoundError):
    """Egg references a parent chicken id that was never registered."""

    def __init__(self, chicken_id: Any):
        super().__init__("Chicken not registered", "chicken", chicken_id)


class EggNotFoundError(NotFoundError):
    def __init__(self, egg_id: Any):
        super().__init__("Egg does not exist", "egg", egg_id)


# ---------------------------------------------------------------------------
# State violations
# ---------------------------------------------------------------------------


class ChickenNotAliveError(InvalidStateError):
    def __init__(self, chicken_id: Any):
        super().__init__("Chicken is not alive", "chicken", chicken_id)


class FarmHasExistingChickensError(InvalidStateError):
    def __init__(self, farm_address: str, chicken_count: int):
        super().__init__("Farm already has chickens", "farm", farm_address)
        self.details["chicken_count"] = chicken_count
