"""Bank participant generator."""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Iterator

from kyc_ledger.generators.base import BaseGenerator


@dataclass
class BankProfile:
    """Arguments for an ``add_bank`` call."""

    name: str
    identity: str
    reg_number: str


class BankGenerator(BaseGenerator):
    """Generate banks with unique identities and registration numbers."""

    def generate(self) -> BankProfile:
        """Generate a single bank.

        Returns
        -------
        BankProfile
            Generated bank.
        """
        return BankProfile(
            name=f"{self.fake.unique.last_name()} {self.random.choice(['Bank', 'Trust', 'Savings'])}",
            identity="0x" + self.fake.unique.hexify("^" * 40),
            reg_number=self.fake.unique.bothify("REG-####-??", letters=string.ascii_uppercase),
        )

    def generate_batch(self, count: int) -> Iterator[BankProfile]:
        """Generate multiple banks.

        Parameters
        ----------
        count : int
            Number of banks to generate.

        Yields
        ------
        BankProfile
            Generated banks.
        """
        for _ in range(count):
            yield self.generate()
