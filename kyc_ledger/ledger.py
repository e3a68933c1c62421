"""Single-writer facade over the registry and its workflows.

All operations, reads included, run under one re-entrant lock, so a query
never observes a half-applied mutation and mutations are applied one at a
time in call order. Each accepted mutation is recorded as a ``Command`` and
produces exactly one ``Notification``; replaying the command log into a
fresh ledger reproduces the same state and the same notifications.
"""

from __future__ import annotations

import copy
import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Iterable, Protocol

from kyc_ledger.exceptions import (
    ConfigurationError,
    PreconditionViolation,
    SinkError,
    UnknownOperationError,
)
from kyc_ledger.models import Bank, Command, Notification, Operation
from kyc_ledger.store import RegistryStore
from kyc_ledger.workflows import AdministrationWorkflow, VerificationWorkflow

if TYPE_CHECKING:
    from kyc_ledger.config import KycConfig

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    """Anything that accepts audit notifications."""

    def send(self, notification: Notification) -> None: ...

    def close(self) -> None: ...


class KycLedger:
    """Vote-driven KYC registry with role-gated mutation.

    Parameters
    ----------
    admin : str
        Identity of the administrator. Fixed for the ledger's lifetime.
    sinks : Iterable[NotificationSink] | None
        Sinks receiving every notification, in emission order.
    """

    def __init__(self, admin: str, sinks: Iterable[NotificationSink] | None = None) -> None:
        if not admin:
            raise ConfigurationError("Administrator identity must not be empty")
        self._admin = admin
        self._lock = threading.RLock()
        self._store = RegistryStore()
        self._sinks: list[NotificationSink] = list(sinks or [])
        self._notifications: list[Notification] = []
        self._commands: list[Command] = []
        self._pending: list[Notification] = []

        self._verification = VerificationWorkflow(self._store, self._record)
        self._administration = AdministrationWorkflow(self._store, admin, self._record)

        self._dispatch: dict[str, Callable[..., Any]] = {
            Operation.ADD_KYC_REQUEST.value: self.add_kyc_request,
            Operation.REMOVE_KYC_REQUEST.value: self.remove_kyc_request,
            Operation.ADD_CUSTOMER.value: self.add_customer,
            Operation.REMOVE_CUSTOMER.value: self.remove_customer,
            Operation.MODIFY_CUSTOMER.value: self.modify_customer,
            Operation.UPVOTE_CUSTOMER.value: self.upvote_customer,
            Operation.DOWNVOTE_CUSTOMER.value: self.downvote_customer,
            Operation.ADD_BANK.value: self.add_bank,
            Operation.MODIFY_BANK_KYC_PERMISSION.value: self.modify_bank_kyc_permission,
            Operation.REMOVE_BANK.value: self.remove_bank,
        }

    @classmethod
    def from_config(cls, config: KycConfig, sinks: Iterable[NotificationSink] | None = None) -> KycLedger:
        """Create a ledger for the administrator named in ``config``."""
        if not config.ledger.admin_address:
            raise ConfigurationError("KYC_ADMIN_ADDRESS is not set")
        return cls(config.ledger.admin_address, sinks=sinks)

    @classmethod
    def replay(
        cls,
        admin: str,
        commands: Iterable[Command],
        sinks: Iterable[NotificationSink] | None = None,
    ) -> KycLedger:
        """Build a fresh ledger and apply ``commands`` in order."""
        ledger = cls(admin, sinks=sinks)
        for command in commands:
            ledger.apply(command)
        return ledger

    @property
    def admin(self) -> str:
        return self._admin

    @property
    def notifications(self) -> list[Notification]:
        """Copies of the audit log; editing them leaves the log unchanged."""
        with self._lock:
            return [replace(n, data=copy.deepcopy(n.data)) for n in self._notifications]

    @property
    def commands(self) -> list[Command]:
        with self._lock:
            return list(self._commands)

    def add_sink(self, sink: NotificationSink) -> None:
        with self._lock:
            self._sinks.append(sink)

    def close(self) -> None:
        """Close every sink."""
        with self._lock:
            for sink in self._sinks:
                sink.close()

    # Command handling
    def apply(self, command: Command) -> Any:
        """Dispatch a recorded command to its operation."""
        handler = self._dispatch.get(command.operation)
        if handler is None:
            raise UnknownOperationError(f"Unknown operation {command.operation!r}")
        return handler(command.caller, *command.args)

    def _record(self, operation: Operation, actor: str, subject: str, data: dict) -> None:
        notification = Notification(
            sequence=len(self._notifications),
            operation=operation.value,
            actor=actor,
            subject=subject,
            data=data,
            emitted_at=datetime.now(timezone.utc),
        )
        self._notifications.append(notification)
        self._pending.append(notification)

    def _execute(
        self,
        operation: Operation,
        caller: str,
        args: tuple[Any, ...],
        body: Callable[..., Any],
    ) -> Any:
        with self._lock:
            try:
                result = body(caller, *args)
            except PreconditionViolation as exc:
                self._pending.clear()
                logger.info(
                    "%s by %s rejected: %s",
                    operation.value,
                    caller,
                    exc.message,
                    extra={"operation": operation.value, "kind": exc.kind.value, "caller": caller},
                )
                raise
            self._commands.append(Command(operation.value, caller, args))
            self._publish()
            return result

    def _publish(self) -> None:
        # The operation is already committed; every sink still gets every
        # notification and failures are reported together afterwards.
        pending, self._pending = self._pending, []
        failures: list[tuple[NotificationSink, Notification, Exception]] = []
        for notification in pending:
            for sink in self._sinks:
                try:
                    sink.send(notification)
                except Exception as exc:
                    logger.error(
                        "%s failed to publish notification %d: %s",
                        type(sink).__name__,
                        notification.sequence,
                        exc,
                        extra={"operation": notification.operation, "subject": notification.subject},
                    )
                    failures.append((sink, notification, exc))

        if failures:
            detail = "; ".join(
                f"{type(sink).__name__} on notification {notification.sequence}: {exc}"
                for sink, notification, exc in failures
            )
            raise SinkError(
                f"{len(failures)} sink delivery failure(s) after commit: {detail}"
            ) from failures[0][2]

    # Verification workflow
    def add_kyc_request(self, caller: str, name: str, fingerprint: str) -> None:
        self._execute(
            Operation.ADD_KYC_REQUEST, caller, (name, fingerprint), self._verification.add_kyc_request
        )

    def remove_kyc_request(self, caller: str, name: str, fingerprint: str) -> None:
        self._execute(
            Operation.REMOVE_KYC_REQUEST, caller, (name, fingerprint), self._verification.remove_kyc_request
        )

    def add_customer(self, caller: str, name: str, fingerprint: str) -> None:
        self._execute(Operation.ADD_CUSTOMER, caller, (name, fingerprint), self._verification.add_customer)

    def remove_customer(self, caller: str, name: str) -> None:
        self._execute(Operation.REMOVE_CUSTOMER, caller, (name,), self._verification.remove_customer)

    def modify_customer(self, caller: str, name: str, fingerprint: str) -> None:
        self._execute(
            Operation.MODIFY_CUSTOMER, caller, (name, fingerprint), self._verification.modify_customer
        )

    def upvote_customer(self, caller: str, name: str) -> None:
        self._execute(Operation.UPVOTE_CUSTOMER, caller, (name,), self._verification.upvote_customer)

    def downvote_customer(self, caller: str, name: str) -> None:
        self._execute(Operation.DOWNVOTE_CUSTOMER, caller, (name,), self._verification.downvote_customer)

    # Administration workflow
    def add_bank(self, caller: str, name: str, identity: str, reg_number: str) -> None:
        self._execute(
            Operation.ADD_BANK, caller, (name, identity, reg_number), self._administration.add_bank
        )

    def modify_bank_kyc_permission(self, caller: str, identity: str) -> bool:
        return self._execute(
            Operation.MODIFY_BANK_KYC_PERMISSION,
            caller,
            (identity,),
            self._administration.modify_bank_kyc_permission,
        )

    def remove_bank(self, caller: str, identity: str) -> None:
        self._execute(Operation.REMOVE_BANK, caller, (identity,), self._administration.remove_bank)

    # Queries
    def view_customer(self, name: str) -> tuple[str, str]:
        with self._lock:
            return self._verification.view_customer(name)

    def get_customer_status(self, name: str) -> bool:
        with self._lock:
            return self._verification.get_customer_status(name)

    def get_bank_reports(self, identity: str) -> int:
        with self._lock:
            return self._verification.get_bank_reports(identity)

    def get_bank_details(self, identity: str) -> Bank:
        with self._lock:
            return self._verification.get_bank_details(identity)

    @property
    def bank_count(self) -> int:
        with self._lock:
            return self._store.bank_count

    def snapshot(self) -> dict:
        """Detached copy of all records and the bank count."""
        with self._lock:
            return self._store.snapshot()

    def summary(self) -> dict[str, int]:
        with self._lock:
            return self._store.summary()
