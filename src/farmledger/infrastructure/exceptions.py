"""Infrastructure exceptions"""

from farmledger.domain.exceptions import LedgerException


class LedgerConfigurationError(LedgerException):
    """Ledger wiring is inconsistent (e.g. unsupported database URL)"""

    def __init__(self, message: str):
        super().__init__(message, "CONFIGURATION_ERROR")


class EventLogImmutableError(LedgerException):
    """Attempted to modify an appended event log entry"""

    def __init__(self):
        super().__init__(
            "Event log entries are immutable and cannot be updated.",
            "EVENT_LOG_IMMUTABLE",
        )
