"""Registry records: customers, banks and verification requests."""

from dataclasses import dataclass


@dataclass
class Customer:
    """Identity record subject to cross-bank attestation."""

    name: str
    fingerprint: str  # opaque hash of the customer's underlying data
    bank: str  # identity of the owning bank
    verified: bool = True
    upvotes: int = 0
    downvotes: int = 0


@dataclass
class Bank:
    """Verification participant."""

    name: str
    identity: str
    reg_number: str
    kyc_permission: bool = True
    reports: int = 0
    kyc_count: int = 0  # customers verified by this bank


@dataclass
class KycRequest:
    """A bank's pending ask for attestation of a customer fingerprint."""

    fingerprint: str
    bank: str
    customer_name: str
