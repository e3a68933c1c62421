"""Custom exception hierarchy for kyc-ledger."""

from kyc_ledger.models.enums import ViolationKind


class KycLedgerError(Exception):
    """Base exception for all kyc-ledger errors."""


class PreconditionViolation(KycLedgerError):
    """Raised when an operation's precondition does not hold.

    Nothing is mutated when this is raised: every check runs before the
    operation body.
    """

    def __init__(self, kind: ViolationKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"PreconditionViolation({self.kind.value}, {self.message!r})"


class UnknownOperationError(KycLedgerError):
    """Raised when a command names an operation the ledger does not have."""


class ConfigurationError(KycLedgerError):
    """Raised when configuration is invalid or missing."""


class SinkError(KycLedgerError):
    """Raised when a notification sink fails to publish."""
