"""Console sink for debugging and development."""

import json
from typing import Any

from kyc_ledger.models import Notification
from kyc_ledger.sinks.serialization import to_dict


class ConsoleSink:
    """Print notifications to stdout as they are emitted."""

    def __init__(self, pretty: bool = False, max_records: int | None = None) -> None:
        """Initialize console sink.

        Parameters
        ----------
        pretty : bool
            Pretty-print JSON output.
        max_records : int | None
            Maximum records to print per batch (None for all).
        """
        self.pretty = pretty
        self.max_records = max_records
        self._counts: dict[str, int] = {}

    def send(self, notification: Notification) -> None:
        """Print a single notification."""
        self._print(to_dict(notification))
        self._counts[notification.operation] = self._counts.get(notification.operation, 0) + 1

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Print a batch of records under a header."""
        print(f"\n{'='*60}")
        print(f"Topic: {topic} ({len(records)} records)")
        print("=" * 60)

        display_records = records[: self.max_records] if self.max_records else records
        for record in display_records:
            self._print(to_dict(record))

        if self.max_records and len(records) > self.max_records:
            print(f"... and {len(records) - self.max_records} more records")

        self._counts[topic] = self._counts.get(topic, 0) + len(records)

    def close(self) -> None:
        """Print summary and close."""
        print(f"\n{'='*60}")
        print("Console Sink Summary")
        print("=" * 60)
        for key, count in self._counts.items():
            print(f"  {key}: {count} records")

    def _print(self, data: dict) -> None:
        if self.pretty:
            print(json.dumps(data, indent=2, ensure_ascii=False, default=str))
        else:
            print(json.dumps(data, ensure_ascii=False, default=str))
