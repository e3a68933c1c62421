"""Pytest configuration and fixtures."""

import pytest

from kyc_ledger.ledger import KycLedger

ADMIN = "0xadmin"
BANKS = ["0xbank-a", "0xbank-b", "0xbank-c", "0xbank-d", "0xbank-e"]


@pytest.fixture
def admin() -> str:
    """Administrator identity."""
    return ADMIN


@pytest.fixture
def bank_ids() -> list[str]:
    """Identities of the five banks in ``network``."""
    return list(BANKS)


@pytest.fixture
def ledger() -> KycLedger:
    """Empty ledger administered by ``ADMIN``."""
    return KycLedger(ADMIN)


@pytest.fixture
def network(ledger: KycLedger) -> KycLedger:
    """Ledger with five registered banks, enough to reach quorum."""
    for i, identity in enumerate(BANKS):
        ledger.add_bank(ADMIN, f"Bank {i}", identity, f"REG-{i:04d}")
    return ledger


@pytest.fixture
def small_network(ledger: KycLedger) -> KycLedger:
    """Ledger with three banks, below quorum."""
    for i, identity in enumerate(BANKS[:3]):
        ledger.add_bank(ADMIN, f"Bank {i}", identity, f"REG-{i:04d}")
    return ledger
