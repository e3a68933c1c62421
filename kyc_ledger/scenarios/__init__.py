"""Scenarios simulating a network of banks voting on customers."""

from kyc_ledger.scenarios.consensus import ConsensusScenario

__all__ = ["ConsensusScenario"]
