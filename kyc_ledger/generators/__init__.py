"""Synthetic participants for consensus simulations."""

from kyc_ledger.generators.bank import BankGenerator, BankProfile
from kyc_ledger.generators.customer import CustomerProfile, CustomerProfileGenerator, fingerprint_of

__all__ = [
    "BankGenerator",
    "BankProfile",
    "CustomerProfile",
    "CustomerProfileGenerator",
    "fingerprint_of",
]
