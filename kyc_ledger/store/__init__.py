"""In-memory registry of customers, banks and verification requests."""

from kyc_ledger.store.registry import RegistryStore

__all__ = ["RegistryStore"]
