"""Consensus scenario: banks register customers and vote on each other's."""

import logging
import random
from collections import Counter
from typing import Any

from kyc_ledger.config import ScenarioConfig
from kyc_ledger.exceptions import ConfigurationError, PreconditionViolation
from kyc_ledger.generators import BankGenerator, BankProfile, CustomerProfile, CustomerProfileGenerator
from kyc_ledger.ledger import KycLedger

logger = logging.getLogger(__name__)

DEFAULT_ADMIN = "0x" + "ad" * 20


class ConsensusScenario:
    """Simulate a KYC network from an empty ledger.

    This scenario:
    - has the administrator register ``num_banks`` banks
    - has random banks open requests for and register customers
    - drives a seeded mix of upvotes and downvotes from random banks,
      including owners voting on their own customers and disabled banks
      trying to act, both of which the ledger rejects
    - has owners occasionally change customer data, resetting votes

    Rejected operations are counted by violation kind rather than raised.
    """

    def __init__(
        self,
        num_banks: int = 7,
        num_customers: int = 20,
        votes_per_customer: int = 4,
        downvote_rate: float = 0.3,
        modify_rate: float = 0.1,
        seed: int | None = None,
        admin: str = DEFAULT_ADMIN,
    ) -> None:
        """Initialize consensus scenario.

        Parameters
        ----------
        num_banks : int
            Number of banks in the network.
        num_customers : int
            Number of customers to register.
        votes_per_customer : int
            Vote attempts per customer.
        downvote_rate : float
            Probability that a vote is a downvote (0.0 to 1.0).
        modify_rate : float
            Probability that an owner changes a customer's data mid-run.
        seed : int | None
            Random seed for reproducibility.
        admin : str
            Administrator identity.
        """
        if num_banks < 1:
            raise ConfigurationError(f"A consensus scenario needs at least one bank, got {num_banks}")

        self.num_banks = num_banks
        self.num_customers = num_customers
        self.votes_per_customer = votes_per_customer
        self.downvote_rate = downvote_rate
        self.modify_rate = modify_rate
        self.seed = seed
        self.admin = admin

        self._random = random.Random(seed)
        self._bank_gen = BankGenerator(seed=seed)
        self._customer_gen = CustomerProfileGenerator(seed=seed)

        self.ledger = KycLedger(admin)
        self.banks: list[BankProfile] = []
        self.customers: dict[str, CustomerProfile] = {}
        self.accepted: Counter[str] = Counter()
        self.rejected: Counter[str] = Counter()

    @classmethod
    def from_config(
        cls,
        config: ScenarioConfig,
        seed: int | None = None,
        admin: str = DEFAULT_ADMIN,
    ) -> "ConsensusScenario":
        """Create a scenario sized by ``config``."""
        return cls(
            num_banks=config.num_banks,
            num_customers=config.num_customers,
            votes_per_customer=config.votes_per_customer,
            downvote_rate=config.downvote_rate,
            modify_rate=config.modify_rate,
            seed=seed,
            admin=admin,
        )

    def _attempt(self, operation: str, *args: Any) -> bool:
        try:
            getattr(self.ledger, operation)(*args)
        except PreconditionViolation as exc:
            self.rejected[exc.kind.value] += 1
            return False
        self.accepted[operation] += 1
        return True

    def generate(self) -> KycLedger:
        """Run the simulation.

        Returns
        -------
        KycLedger
            Ledger holding the resulting state and audit trail.
        """
        logger.info(
            "Starting consensus scenario: %d banks, %d customers, %.0f%% downvotes",
            self.num_banks,
            self.num_customers,
            self.downvote_rate * 100,
        )

        for bank in self._bank_gen.generate_batch(self.num_banks):
            if self._attempt("add_bank", self.admin, bank.name, bank.identity, bank.reg_number):
                self.banks.append(bank)

        for profile in self._customer_gen.generate_batch(self.num_customers):
            owner = self._random.choice(self.banks).identity
            self._attempt("add_kyc_request", owner, profile.name, profile.fingerprint)
            if self._attempt("add_customer", owner, profile.name, profile.fingerprint):
                self.customers[profile.name] = profile

        logger.info("Registered %d customers", len(self.customers))

        for name in list(self.customers):
            for _ in range(self.votes_per_customer):
                voter = self._random.choice(self.banks).identity
                if self._random.random() < self.downvote_rate:
                    self._attempt("downvote_customer", voter, name)
                else:
                    self._attempt("upvote_customer", voter, name)

            if self._random.random() < self.modify_rate:
                self._modify(name)

        logger.info(
            "Scenario complete: %d accepted, %d rejected, summary=%s",
            sum(self.accepted.values()),
            sum(self.rejected.values()),
            self.ledger.summary(),
        )
        return self.ledger

    def _modify(self, name: str) -> None:
        owner = self.ledger.snapshot()["customers"][name]["bank"]
        updated = self._customer_gen.relocate(self.customers[name])
        if self._attempt("modify_customer", owner, name, updated.fingerprint):
            self.customers[name] = updated

    def get_statistics(self) -> dict[str, Any]:
        """Outcome counts for the finished run."""
        return {
            "accepted": dict(self.accepted),
            "rejected": dict(self.rejected),
            "notifications": len(self.ledger.notifications),
            **self.ledger.summary(),
        }

    def export(self, sinks: list[Any], topic: str = "kyc.notifications") -> None:
        """Export the audit trail to sinks.

        Parameters
        ----------
        sinks : list[Any]
            List of sink instances (ConsoleSink, JsonFileSink, KafkaSink).
        topic : str
            Topic the notifications are written under.
        """
        notifications = self.ledger.notifications
        for sink in sinks:
            sink.write_batch(topic, notifications)

        logger.info("Exported %d notifications to %d sinks", len(notifications), len(sinks))
