"""Configuration management for kyc-ledger."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class KafkaConfig:
    """Kafka producer configuration for the audit topic."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class OutputConfig:
    """Audit log file output configuration.

    No JSON Lines audit file is written while ``audit_output_dir`` is unset.
    """

    audit_output_dir: Path | None = None
    pretty_json: bool = False


@dataclass
class LedgerConfig:
    """Ledger identity and audit routing."""

    admin_address: str = ""
    audit_topic: str = "kyc.notifications"


@dataclass
class ScenarioConfig:
    """Configuration for a consensus simulation run."""

    num_banks: int = 7
    num_customers: int = 20
    votes_per_customer: int = 4
    downvote_rate: float = 0.3
    modify_rate: float = 0.1


@dataclass
class KycConfig:
    """Main configuration for kyc-ledger."""

    ledger: LedgerConfig = field(default_factory=LedgerConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    scenario: ScenarioConfig = field(default_factory=ScenarioConfig)
    seed: int | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "KycConfig":
        """Create config from environment variables."""
        import os

        ledger = LedgerConfig(
            admin_address=os.getenv("KYC_ADMIN_ADDRESS", ""),
            audit_topic=os.getenv("AUDIT_TOPIC", "kyc.notifications"),
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
        )

        output = OutputConfig(
            audit_output_dir=Path(os.environ["OUTPUT_DIR"]) if os.getenv("OUTPUT_DIR") else None,
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        scenario = ScenarioConfig(
            num_banks=int(os.getenv("SCENARIO_BANKS", "7")),
            num_customers=int(os.getenv("SCENARIO_CUSTOMERS", "20")),
        )

        return cls(
            ledger=ledger,
            kafka=kafka,
            output=output,
            scenario=scenario,
            seed=int(os.getenv("SEED")) if os.getenv("SEED") else None,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
