"""Keyed registry store with uniqueness indexes.

The store holds records and counters only. It never decides whether a
change is allowed; callers run the access-control guard first.
"""

import copy
from dataclasses import asdict, dataclass, field

from kyc_ledger.models import Bank, Customer, KycRequest


@dataclass
class RegistryStore:
    """In-memory store for customers, banks and pending requests."""

    # Primary collections
    customers: dict[str, Customer] = field(default_factory=dict)
    banks: dict[str, Bank] = field(default_factory=dict)
    requests: dict[str, KycRequest] = field(default_factory=dict)

    # Quorum denominator, owned by the administration workflow
    bank_count: int = 0

    # Secondary uniqueness indexes
    _fingerprint_owners: dict[str, str] = field(default_factory=dict)
    _reg_numbers: dict[str, str] = field(default_factory=dict)

    # Customers
    def add_customer(self, customer: Customer) -> None:
        """Add a customer to the store."""
        self.customers[customer.name] = customer
        self._fingerprint_owners[customer.fingerprint] = customer.name

    def get_customer(self, name: str) -> Customer | None:
        return self.customers.get(name)

    def has_customer(self, name: str) -> bool:
        return name in self.customers

    def fingerprint_holder(self, fingerprint: str) -> str | None:
        """Name of the customer whose data carries ``fingerprint``, if any."""
        return self._fingerprint_owners.get(fingerprint)

    def update_customer_data(self, name: str, fingerprint: str, bank: str) -> str:
        """Replace a customer's fingerprint and owner, resetting its votes.

        Returns
        -------
        str
            The fingerprint that was replaced.
        """
        customer = self.customers[name]
        old_fingerprint = customer.fingerprint
        self._fingerprint_owners.pop(old_fingerprint, None)
        customer.fingerprint = fingerprint
        customer.bank = bank
        customer.upvotes = 0
        customer.downvotes = 0
        self._fingerprint_owners[fingerprint] = name
        return old_fingerprint

    def record_vote(self, name: str, upvote: bool) -> Customer:
        """Increment one of a customer's vote counters."""
        customer = self.customers[name]
        if upvote:
            customer.upvotes += 1
        else:
            customer.downvotes += 1
        return customer

    def set_customer_verified(self, name: str, verified: bool) -> None:
        self.customers[name].verified = verified

    def delete_customer(self, name: str) -> Customer:
        """Remove a customer and return the deleted record."""
        customer = self.customers.pop(name)
        self._fingerprint_owners.pop(customer.fingerprint, None)
        return customer

    # Banks
    def add_bank(self, bank: Bank) -> None:
        """Add a bank and count it towards the quorum."""
        self.banks[bank.identity] = bank
        self._reg_numbers[bank.reg_number] = bank.identity
        self.bank_count += 1

    def get_bank(self, identity: str) -> Bank | None:
        return self.banks.get(identity)

    def has_bank(self, identity: str) -> bool:
        return identity in self.banks

    def has_reg_number(self, reg_number: str) -> bool:
        return reg_number in self._reg_numbers

    def set_bank_permission(self, identity: str, permission: bool) -> None:
        self.banks[identity].kyc_permission = permission

    def delete_bank(self, identity: str) -> Bank:
        """Remove a bank and drop it from the quorum.

        Customers and requests referencing the bank are left in place.
        """
        bank = self.banks.pop(identity)
        self._reg_numbers.pop(bank.reg_number, None)
        self.bank_count -= 1
        return bank

    # Verification requests
    def add_request(self, request: KycRequest) -> None:
        self.requests[request.fingerprint] = request

    def get_request(self, fingerprint: str) -> KycRequest | None:
        return self.requests.get(fingerprint)

    def has_request(self, fingerprint: str) -> bool:
        return fingerprint in self.requests

    def delete_request(self, fingerprint: str) -> KycRequest | None:
        """Remove the request for ``fingerprint``; absent keys are ignored."""
        return self.requests.pop(fingerprint, None)

    # Views
    def snapshot(self) -> dict:
        """Return a detached plain-dict copy of every record and counter."""
        return {
            "customers": {k: asdict(v) for k, v in sorted(self.customers.items())},
            "banks": {k: asdict(v) for k, v in sorted(self.banks.items())},
            "requests": {k: asdict(v) for k, v in sorted(self.requests.items())},
            "bank_count": self.bank_count,
        }

    def copy_customer(self, name: str) -> Customer:
        return copy.copy(self.customers[name])

    def copy_bank(self, identity: str) -> Bank:
        return copy.copy(self.banks[identity])

    def summary(self) -> dict[str, int]:
        """Return summary counts of all records."""
        return {
            "customers": len(self.customers),
            "verified_customers": sum(1 for c in self.customers.values() if c.verified),
            "banks": self.bank_count,
            "enabled_banks": sum(1 for b in self.banks.values() if b.kyc_permission),
            "requests": len(self.requests),
        }
