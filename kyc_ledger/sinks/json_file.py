"""JSON Lines file sink for a durable audit trail."""

import json
from pathlib import Path
from typing import Any

from kyc_ledger.models import Notification
from kyc_ledger.sinks.serialization import to_dict


class JsonFileSink:
    """Append notifications to ``<output_dir>/<topic>.jsonl``."""

    def __init__(self, output_dir: str | Path, topic: str = "kyc.notifications") -> None:
        """Initialize JSON file sink.

        Parameters
        ----------
        output_dir : str | Path
            Directory to write JSON Lines files.
        topic : str
            Audit topic; dots become underscores in the file name.
        """
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.topic = topic
        self._counts: dict[str, int] = {}

    def path_for(self, topic: str) -> Path:
        return self.output_dir / (topic.replace(".", "_") + ".jsonl")

    def send(self, notification: Notification) -> None:
        """Append one notification to the audit topic file."""
        self.write_batch(self.topic, [notification])

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Append a batch of records to the topic file."""
        with open(self.path_for(topic), "a", encoding="utf-8") as f:
            for record in records:
                f.write(json.dumps(to_dict(record), ensure_ascii=False, default=str) + "\n")

        self._counts[topic] = self._counts.get(topic, 0) + len(records)

    def close(self) -> None:
        """Print summary."""
        print(f"Audit files written to: {self.output_dir}")
        for topic, count in self._counts.items():
            print(f"  {topic}: {count} records")
