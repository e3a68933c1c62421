"""Domain models for the KYC ledger."""

from kyc_ledger.models.base import Command, Notification
from kyc_ledger.models.enums import Operation, ViolationKind
from kyc_ledger.models.kyc import Bank, Customer, KycRequest

__all__ = [
    "Bank",
    "Command",
    "Customer",
    "KycRequest",
    "Notification",
    "Operation",
    "ViolationKind",
]
