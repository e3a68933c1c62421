"""Vote-driven KYC consensus ledger."""

from kyc_ledger.exceptions import KycLedgerError, PreconditionViolation
from kyc_ledger.ledger import KycLedger

__all__ = ["KycLedger", "KycLedgerError", "PreconditionViolation"]
