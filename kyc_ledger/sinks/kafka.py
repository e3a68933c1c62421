"""Kafka sink publishing audit notifications to a topic."""

import json
import logging
from dataclasses import dataclass, field
from typing import Any

from confluent_kafka import Producer

from kyc_ledger.config import KafkaConfig
from kyc_ledger.models import Notification
from kyc_ledger.sinks.serialization import to_dict

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "kyc.notifications"


@dataclass
class DeliveryStats:
    """Delivery outcome of the notifications handed to the producer."""

    sent: int = 0
    delivered: int = 0
    failed: int = 0
    # Keys (customer, bank or fingerprint) whose notification was lost
    failed_subjects: list[str] = field(default_factory=list)

    @property
    def in_flight(self) -> int:
        return self.sent - self.delivered - self.failed

    @property
    def success_rate(self) -> float:
        settled = self.delivered + self.failed
        return self.delivered / settled if settled > 0 else 0.0


class KafkaSink:
    """Publish notifications as JSON, keyed by the affected record.

    Keying by subject keeps every notification about one customer, bank or
    request on one partition, so consumers see them in ledger order.
    """

    def __init__(self, config: KafkaConfig | str, topic: str = DEFAULT_TOPIC) -> None:
        """Create the producer.

        Parameters
        ----------
        config : KafkaConfig | str
            Producer configuration or bootstrap servers string.
        topic : str
            Topic receiving notifications sent with ``send``.
        """
        if isinstance(config, str):
            config = KafkaConfig(bootstrap_servers=config)

        self.config = config
        self.topic = topic
        self.producer = Producer(config.to_dict())
        self.stats = DeliveryStats()

    def _on_delivery(self, err: Any, msg: Any) -> None:
        if err is None:
            self.stats.delivered += 1
            return
        self.stats.failed += 1
        key = msg.key()
        subject = key.decode("utf-8") if key else "<unkeyed>"
        self.stats.failed_subjects.append(subject)
        logger.error("Notification for %s not delivered to %s: %s", subject, msg.topic(), err)

    def _produce(self, topic: str, record: Any) -> None:
        key = record.subject.encode("utf-8") if isinstance(record, Notification) else None
        value = json.dumps(to_dict(record), ensure_ascii=False, default=str).encode("utf-8")
        self.producer.produce(topic=topic, key=key, value=value, callback=self._on_delivery)
        self.stats.sent += 1
        self.producer.poll(0)

    def send(self, notification: Notification) -> None:
        """Send a single notification to the audit topic."""
        self._produce(self.topic, notification)

    def write_batch(self, topic: str, records: list[Any]) -> None:
        """Publish an exported audit trail and wait for it to settle."""
        sequences = [r.sequence for r in records if isinstance(r, Notification)]
        if sequences:
            logger.info(
                "Publishing notifications %d..%d to %s",
                min(sequences),
                max(sequences),
                topic,
            )
        else:
            logger.info("Publishing %d records to %s", len(records), topic)

        for record in records:
            self._produce(topic, record)
        self.flush()

    def flush(self, timeout: float = 30.0) -> int:
        """Wait for outstanding deliveries; return how many are still queued."""
        remaining = self.producer.flush(timeout)
        if remaining:
            logger.warning("%d notifications still queued after %.0fs", remaining, timeout)
        return remaining

    def close(self) -> None:
        """Flush the producer and report what was lost."""
        self.flush()
        if self.stats.failed:
            logger.warning(
                "Kafka sink closed with %d of %d notifications undelivered: %s",
                self.stats.failed,
                self.stats.sent,
                ", ".join(sorted(set(self.stats.failed_subjects))),
            )
        else:
            logger.info("Kafka sink closed: %d notifications delivered", self.stats.delivered)
