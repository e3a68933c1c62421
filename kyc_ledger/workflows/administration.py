"""Bank membership management, restricted to the administrator."""

import logging

from kyc_ledger import guard
from kyc_ledger.models import Bank, Operation
from kyc_ledger.policy import bank_is_valid
from kyc_ledger.store import RegistryStore
from kyc_ledger.workflows.verification import Notify

logger = logging.getLogger(__name__)


class AdministrationWorkflow:
    """Add, review and remove banks.

    This is the only component that changes the registered bank count, and
    with it the quorum every threshold decision is measured against.
    """

    def __init__(self, store: RegistryStore, admin: str, notify: Notify) -> None:
        self.store = store
        self.admin = admin
        self._notify = notify

    def add_bank(self, caller: str, name: str, identity: str, reg_number: str) -> None:
        guard.enforce(
            guard.caller_is_admin(self.admin, caller),
            guard.bank_absent(self.store, identity),
            guard.reg_number_unused(self.store, reg_number),
        )
        self.store.add_bank(Bank(name=name, identity=identity, reg_number=reg_number))
        logger.info("Bank %s (%s) added, %d banks registered", name, identity, self.store.bank_count)
        self._notify(
            Operation.ADD_BANK,
            caller,
            identity,
            {"name": name, "reg_number": reg_number, "bank_count": self.store.bank_count},
        )

    def modify_bank_kyc_permission(self, caller: str, identity: str) -> bool:
        """Review a bank against its own report count.

        Can only revoke: a bank that passes keeps whatever permission it
        already had.

        Returns
        -------
        bool
            The bank's permission after the review.
        """
        guard.enforce(
            guard.caller_is_admin(self.admin, caller),
            guard.bank_exists(self.store, identity),
        )
        bank = self.store.banks[identity]
        if not bank_is_valid(bank.reports, self.store.bank_count):
            if bank.kyc_permission:
                logger.warning(
                    "KYC permission revoked for %s with %d reports",
                    identity,
                    bank.reports,
                    extra={"operation": Operation.MODIFY_BANK_KYC_PERMISSION.value, "subject": identity},
                )
            self.store.set_bank_permission(identity, False)
        permission = bank.kyc_permission
        self._notify(
            Operation.MODIFY_BANK_KYC_PERMISSION,
            caller,
            identity,
            {"reports": bank.reports, "kyc_permission": permission},
        )
        return permission

    def remove_bank(self, caller: str, identity: str) -> None:
        """Deregister a bank; its customers and requests stay behind."""
        guard.enforce(
            guard.caller_is_admin(self.admin, caller),
            guard.bank_exists(self.store, identity),
        )
        bank = self.store.delete_bank(identity)
        logger.info("Bank %s (%s) removed, %d banks registered", bank.name, identity, self.store.bank_count)
        self._notify(Operation.REMOVE_BANK, caller, identity, {"bank_count": self.store.bank_count})
