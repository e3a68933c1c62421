"""Customer profile generator.

The ledger never stores personal data, only a fingerprint of it. Profiles
keep the synthetic PII next to its fingerprint so a simulation can change
the data and register the new fingerprint.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from typing import Any, Iterator

from kyc_ledger.generators.base import BaseGenerator


def fingerprint_of(pii: dict[str, Any]) -> str:
    """SHA-256 hex digest of the canonical JSON form of ``pii``."""
    canonical = json.dumps(pii, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


@dataclass
class CustomerProfile:
    name: str
    pii: dict[str, Any] = field(default_factory=dict)

    @property
    def fingerprint(self) -> str:
        return fingerprint_of(self.pii)


class CustomerProfileGenerator(BaseGenerator):
    """Generate synthetic customers with fingerprintable identity data."""

    def generate(self) -> CustomerProfile:
        name = self.fake.unique.name()
        return CustomerProfile(
            name=name,
            pii={
                "full_name": name,
                "ssn": self.fake.unique.ssn(),
                "date_of_birth": self.fake.date_of_birth(minimum_age=18, maximum_age=90),
                "address": self.fake.address(),
            },
        )

    def generate_batch(self, count: int) -> Iterator[CustomerProfile]:
        for _ in range(count):
            yield self.generate()

    def relocate(self, profile: CustomerProfile) -> CustomerProfile:
        """Return the same customer with a new address, hence a new fingerprint."""
        return CustomerProfile(name=profile.name, pii={**profile.pii, "address": self.fake.address()})
