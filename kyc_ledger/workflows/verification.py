"""Customer lifecycle: requests, registration, modification and voting."""

import logging
from typing import Callable

from kyc_ledger import guard
from kyc_ledger.models import Bank, Customer, KycRequest, Operation
from kyc_ledger.policy import bank_is_valid, customer_is_valid
from kyc_ledger.store import RegistryStore

logger = logging.getLogger(__name__)

# (operation, actor, subject, data)
Notify = Callable[[Operation, str, str, dict], None]


class VerificationWorkflow:
    """Drive a customer from request to removal.

    Every mutating method enforces its preconditions first, then writes to
    the store, then reports one notification through ``notify``.
    """

    def __init__(self, store: RegistryStore, notify: Notify) -> None:
        self.store = store
        self._notify = notify

    # Verification requests
    def add_kyc_request(self, caller: str, name: str, fingerprint: str) -> None:
        """Open a request for other banks to attest ``fingerprint``."""
        guard.enforce(
            guard.bank_has_permission(self.store, caller),
            guard.fingerprint_given(fingerprint),
            guard.request_absent(self.store, fingerprint),
        )
        self.store.add_request(KycRequest(fingerprint=fingerprint, bank=caller, customer_name=name))
        logger.debug("KYC request opened for %s by %s", name, caller)
        self._notify(Operation.ADD_KYC_REQUEST, caller, fingerprint, {"customer_name": name})

    def remove_kyc_request(self, caller: str, name: str, fingerprint: str) -> None:
        """Close the request for ``fingerprint``.

        Any caller may close any request; only existence is checked.
        """
        guard.enforce(guard.request_exists(self.store, fingerprint))
        self.store.delete_request(fingerprint)
        logger.debug("KYC request for %s closed by %s", name, caller)
        self._notify(Operation.REMOVE_KYC_REQUEST, caller, fingerprint, {"customer_name": name})

    def _discard_request(self, fingerprint: str) -> None:
        # Cascade path: a missing request is not an error here
        if self.store.delete_request(fingerprint) is not None:
            logger.debug("Discarded KYC request for %s", fingerprint)

    # Customer lifecycle
    def add_customer(self, caller: str, name: str, fingerprint: str) -> None:
        """Register a customer owned by the calling bank."""
        guard.enforce(
            guard.bank_exists(self.store, caller),
            guard.bank_has_permission(self.store, caller),
            guard.customer_absent(self.store, name),
            guard.fingerprint_given(fingerprint),
            guard.fingerprint_unused(self.store, fingerprint),
        )
        self.store.add_customer(Customer(name=name, fingerprint=fingerprint, bank=caller))
        logger.debug("Customer %s registered by %s", name, caller)
        self._notify(Operation.ADD_CUSTOMER, caller, name, {"fingerprint": fingerprint})

    def remove_customer(self, caller: str, name: str) -> None:
        """Delete a customer and any request open for its current data."""
        guard.enforce(
            guard.bank_has_permission(self.store, caller),
            guard.customer_exists(self.store, name),
            guard.caller_is_owner(self.store, name, caller),
        )
        fingerprint = self.store.customers[name].fingerprint
        self._discard_request(fingerprint)
        self.store.delete_customer(name)
        logger.debug("Customer %s removed by %s", name, caller)
        self._notify(Operation.REMOVE_CUSTOMER, caller, name, {"fingerprint": fingerprint})

    def modify_customer(self, caller: str, name: str, fingerprint: str) -> None:
        """Replace a customer's data fingerprint.

        Prior votes attested the old data, so both counters restart at zero
        and the request keyed by the old fingerprint is closed.
        """
        guard.enforce(
            guard.bank_has_permission(self.store, caller),
            guard.customer_exists(self.store, name),
            guard.caller_is_owner(self.store, name, caller),
            guard.fingerprint_given(fingerprint),
            guard.fingerprint_unused(self.store, fingerprint, holder=name),
        )
        old_fingerprint = self.store.update_customer_data(name, fingerprint, caller)
        self._discard_request(old_fingerprint)
        logger.debug("Customer %s modified by %s", name, caller)
        self._notify(
            Operation.MODIFY_CUSTOMER,
            caller,
            name,
            {"fingerprint": fingerprint, "previous_fingerprint": old_fingerprint},
        )

    # Voting
    def upvote_customer(self, caller: str, name: str) -> None:
        self._vote(caller, name, upvote=True)

    def downvote_customer(self, caller: str, name: str) -> None:
        self._vote(caller, name, upvote=False)

    def _vote(self, caller: str, name: str, upvote: bool) -> None:
        guard.enforce(
            guard.bank_has_permission(self.store, caller),
            guard.customer_exists(self.store, name),
            guard.caller_is_not_owner(self.store, name, caller),
        )
        operation = Operation.UPVOTE_CUSTOMER if upvote else Operation.DOWNVOTE_CUSTOMER
        customer = self.store.record_vote(name, upvote)
        total = self.store.bank_count

        verified = customer_is_valid(customer.upvotes, customer.downvotes, total)
        self.store.set_customer_verified(name, verified)

        # The customer's downvotes stand in for its owner's reliability
        owner = self.store.get_bank(customer.bank)
        owner_permission = None
        if owner is None:
            logger.info("Owner %s of customer %s is no longer registered", customer.bank, name)
        else:
            owner_permission = bank_is_valid(customer.downvotes, total)
            if owner.kyc_permission and not owner_permission:
                logger.warning(
                    "KYC permission revoked for %s after %d downvotes on %s",
                    owner.identity,
                    customer.downvotes,
                    name,
                    extra={"operation": operation.value, "caller": caller, "subject": owner.identity},
                )
            self.store.set_bank_permission(owner.identity, owner_permission)

        self._notify(
            operation,
            caller,
            name,
            {
                "upvotes": customer.upvotes,
                "downvotes": customer.downvotes,
                "verified": verified,
                "owner_permission": owner_permission,
            },
        )

    # Queries
    def view_customer(self, name: str) -> tuple[str, str]:
        """Return the customer's name and data fingerprint."""
        guard.enforce(guard.customer_exists(self.store, name))
        customer = self.store.customers[name]
        return customer.name, customer.fingerprint

    def get_customer_status(self, name: str) -> bool:
        guard.enforce(guard.customer_exists(self.store, name))
        return self.store.customers[name].verified

    def get_bank_reports(self, identity: str) -> int:
        guard.enforce(guard.bank_exists(self.store, identity))
        return self.store.banks[identity].reports

    def get_bank_details(self, identity: str) -> Bank:
        """Return a detached copy of the bank record."""
        guard.enforce(guard.bank_exists(self.store, identity))
        return self.store.copy_bank(identity)
