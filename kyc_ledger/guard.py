"""Composable preconditions evaluated before any state mutation.

Each factory returns a ``Precondition`` whose check is a closure over the
store and the call arguments. Operations list their preconditions in order
and pass them to ``enforce``, which raises on the first one that fails.
Later checks may assume earlier ones held (ownership checks run after the
existence check for the same customer).
"""

from dataclasses import dataclass
from typing import Callable

from kyc_ledger.exceptions import PreconditionViolation
from kyc_ledger.models import ViolationKind
from kyc_ledger.store import RegistryStore


@dataclass(frozen=True)
class Precondition:
    """A named check paired with the violation it raises."""

    check: Callable[[], bool]
    kind: ViolationKind
    message: str

    def holds(self) -> bool:
        return bool(self.check())


def enforce(*preconditions: Precondition) -> None:
    """Raise ``PreconditionViolation`` for the first failing precondition."""
    for precondition in preconditions:
        if not precondition.holds():
            raise PreconditionViolation(precondition.kind, precondition.message)


# Existence and uniqueness
def customer_exists(store: RegistryStore, name: str) -> Precondition:
    return Precondition(
        lambda: store.has_customer(name),
        ViolationKind.NOT_FOUND,
        f"Customer {name!r} not found",
    )


def customer_absent(store: RegistryStore, name: str) -> Precondition:
    return Precondition(
        lambda: not store.has_customer(name),
        ViolationKind.ALREADY_EXISTS,
        f"Customer {name!r} already exists",
    )


def fingerprint_given(fingerprint: str) -> Precondition:
    return Precondition(
        lambda: bool(fingerprint),
        ViolationKind.INVALID_INPUT,
        "Customer data fingerprint must not be empty",
    )


def fingerprint_unused(
    store: RegistryStore, fingerprint: str, holder: str | None = None
) -> Precondition:
    """Fingerprint belongs to no customer, or only to ``holder``."""
    return Precondition(
        lambda: store.fingerprint_holder(fingerprint) in (None, holder),
        ViolationKind.ALREADY_EXISTS,
        f"Fingerprint {fingerprint!r} already belongs to another customer",
    )


def bank_exists(store: RegistryStore, identity: str) -> Precondition:
    return Precondition(
        lambda: store.has_bank(identity),
        ViolationKind.NOT_FOUND,
        f"Bank {identity!r} not found",
    )


def bank_absent(store: RegistryStore, identity: str) -> Precondition:
    return Precondition(
        lambda: not store.has_bank(identity),
        ViolationKind.ALREADY_EXISTS,
        f"Bank {identity!r} already exists",
    )


def reg_number_unused(store: RegistryStore, reg_number: str) -> Precondition:
    return Precondition(
        lambda: not store.has_reg_number(reg_number),
        ViolationKind.ALREADY_EXISTS,
        f"Registration number {reg_number!r} already in use",
    )


def request_exists(store: RegistryStore, fingerprint: str) -> Precondition:
    return Precondition(
        lambda: store.has_request(fingerprint),
        ViolationKind.NOT_FOUND,
        f"KYC request for {fingerprint!r} not found",
    )


def request_absent(store: RegistryStore, fingerprint: str) -> Precondition:
    return Precondition(
        lambda: not store.has_request(fingerprint),
        ViolationKind.ALREADY_EXISTS,
        f"KYC request for {fingerprint!r} already exists",
    )


# Roles and caller identity
def caller_is_owner(store: RegistryStore, name: str, caller: str) -> Precondition:
    return Precondition(
        lambda: store.customers[name].bank == caller,
        ViolationKind.NOT_AUTHORIZED,
        f"{caller!r} is not the bank that registered customer {name!r}",
    )


def caller_is_not_owner(store: RegistryStore, name: str, caller: str) -> Precondition:
    return Precondition(
        lambda: store.customers[name].bank != caller,
        ViolationKind.NOT_AUTHORIZED,
        f"{caller!r} cannot vote on its own customer {name!r}",
    )


def caller_is_admin(admin: str, caller: str) -> Precondition:
    return Precondition(
        lambda: caller == admin,
        ViolationKind.NOT_AUTHORIZED,
        f"{caller!r} is not the administrator",
    )


def bank_has_permission(store: RegistryStore, caller: str) -> Precondition:
    """Caller is a registered bank whose KYC permission is enabled."""

    def check() -> bool:
        bank = store.get_bank(caller)
        return bank is not None and bank.kyc_permission

    return Precondition(
        check,
        ViolationKind.NOT_PERMITTED,
        f"{caller!r} is not permitted to perform KYC actions",
    )
