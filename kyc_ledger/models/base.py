"""Envelope types shared by the ledger, its sinks and its replay log."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class Notification:
    """Audit notification emitted by every accepted mutating operation."""

    sequence: int
    operation: str  # e.g. upvoteCustomer
    actor: str  # identity of the caller
    subject: str  # key of the affected record
    data: dict = field(default_factory=dict)
    emitted_at: datetime | None = None

    def key(self) -> tuple[int, str, str, str]:
        """Timestamp-free identity of the notification."""
        return (self.sequence, self.operation, self.actor, self.subject)


@dataclass(frozen=True)
class Command:
    """An accepted mutating call, as recorded for replay."""

    operation: str
    caller: str
    args: tuple[Any, ...] = ()
