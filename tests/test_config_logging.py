"""Tests for config and logging."""

import json
import logging
import sys
from pathlib import Path

import pytest

from kyc_ledger.config import (
    KafkaConfig,
    KycConfig,
    LedgerConfig,
    OutputConfig,
    ScenarioConfig,
)
from kyc_ledger.exceptions import PreconditionViolation
from kyc_ledger.ledger import KycLedger
from kyc_ledger.logging import JsonFormatter, LedgerFormatter, setup_logging

ENV_VARS = [
    "KYC_ADMIN_ADDRESS",
    "AUDIT_TOPIC",
    "KAFKA_BOOTSTRAP_SERVERS",
    "KAFKA_ACKS",
    "OUTPUT_DIR",
    "PRETTY_JSON",
    "SEED",
    "LOG_LEVEL",
    "SCENARIO_BANKS",
    "SCENARIO_CUSTOMERS",
]


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove every variable read by KycConfig.from_env."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestKafkaConfig:
    """Tests for KafkaConfig."""

    def test_default_values(self) -> None:
        config = KafkaConfig()

        assert config.bootstrap_servers == "localhost:9092"
        assert config.acks == "all"
        assert config.batch_size == 16384
        assert config.linger_ms == 5
        assert config.compression == "snappy"
        assert config.retries == 3

    def test_to_dict(self) -> None:
        config = KafkaConfig(bootstrap_servers="kafka:9092", acks="1", retries=5)

        result = config.to_dict()

        assert result["bootstrap.servers"] == "kafka:9092"
        assert result["acks"] == "1"
        assert result["batch.size"] == 16384
        assert result["linger.ms"] == 5
        assert result["compression.type"] == "snappy"
        assert result["retries"] == 5


class TestOutputAndLedgerConfig:
    """Tests for OutputConfig and LedgerConfig."""

    def test_output_defaults(self) -> None:
        config = OutputConfig()

        assert config.audit_output_dir is None
        assert config.pretty_json is False

    def test_ledger_defaults(self) -> None:
        config = LedgerConfig()

        assert config.admin_address == ""
        assert config.audit_topic == "kyc.notifications"


class TestScenarioConfig:
    """Tests for ScenarioConfig."""

    def test_default_values(self) -> None:
        config = ScenarioConfig()

        assert config.num_banks == 7
        assert config.num_customers == 20
        assert config.votes_per_customer == 4
        assert config.downvote_rate == 0.3
        assert config.modify_rate == 0.1


class TestKycConfig:
    """Tests for KycConfig."""

    def test_default_values(self) -> None:
        config = KycConfig()

        assert isinstance(config.ledger, LedgerConfig)
        assert isinstance(config.kafka, KafkaConfig)
        assert isinstance(config.output, OutputConfig)
        assert config.scenario == ScenarioConfig()
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_from_env_default(self, clean_env: pytest.MonkeyPatch) -> None:
        config = KycConfig.from_env()

        assert config.ledger.admin_address == ""
        assert config.ledger.audit_topic == "kyc.notifications"
        assert config.kafka.bootstrap_servers == "localhost:9092"
        assert config.output.audit_output_dir is None
        assert config.output.pretty_json is False
        assert config.scenario.num_banks == 7
        assert config.seed is None
        assert config.log_level == "INFO"

    def test_from_env_custom(self, clean_env: pytest.MonkeyPatch) -> None:
        values = {
            "KYC_ADMIN_ADDRESS": "0xroot",
            "AUDIT_TOPIC": "prod.kyc",
            "KAFKA_BOOTSTRAP_SERVERS": "kafka-cluster:9092",
            "KAFKA_ACKS": "1",
            "OUTPUT_DIR": "/data/audit",
            "PRETTY_JSON": "true",
            "SEED": "12345",
            "LOG_LEVEL": "DEBUG",
            "SCENARIO_BANKS": "12",
            "SCENARIO_CUSTOMERS": "50",
        }
        for name, value in values.items():
            clean_env.setenv(name, value)

        config = KycConfig.from_env()

        assert config.ledger.admin_address == "0xroot"
        assert config.ledger.audit_topic == "prod.kyc"
        assert config.kafka.bootstrap_servers == "kafka-cluster:9092"
        assert config.kafka.acks == "1"
        assert config.output.audit_output_dir == Path("/data/audit")
        assert config.output.pretty_json is True
        assert config.seed == 12345
        assert config.log_level == "DEBUG"
        assert config.scenario.num_banks == 12
        assert config.scenario.num_customers == 50

    def test_ledger_from_env_config(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("KYC_ADMIN_ADDRESS", "0xroot")

        ledger = KycLedger.from_config(KycConfig.from_env())

        assert ledger.admin == "0xroot"


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_setup_logging_default(self) -> None:
        setup_logging()

        assert logging.getLogger("kyc_ledger").level == logging.INFO

    def test_setup_logging_debug(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_invalid_level(self) -> None:
        setup_logging(level="INVALID")

        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_json_format(self) -> None:
        setup_logging(format_type="json")

        assert any(isinstance(h.formatter, JsonFormatter) for h in logging.getLogger().handlers)

    def test_setup_logging_replaces_handlers(self) -> None:
        root = logging.getLogger()
        root.addHandler(logging.StreamHandler())
        root.addHandler(logging.StreamHandler())

        setup_logging()

        assert len(root.handlers) == 1

    def test_external_loggers_quieted(self) -> None:
        setup_logging(level="DEBUG")

        assert logging.getLogger("confluent_kafka").level == logging.WARNING
        assert logging.getLogger("faker").level == logging.WARNING


class TestFormatters:
    """Tests for JsonFormatter and LedgerFormatter."""

    def _record(self, **kwargs) -> logging.LogRecord:
        defaults = dict(
            name="test.logger",
            level=logging.INFO,
            pathname="/path/to/file.py",
            lineno=42,
            msg="Test message",
            args=(),
            exc_info=None,
        )
        defaults.update(kwargs)
        return logging.LogRecord(**defaults)

    def test_format_basic(self) -> None:
        data = json.loads(JsonFormatter().format(self._record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "test.logger"
        assert data["message"] == "Test message"
        assert "timestamp" in data

    def test_format_with_exception(self) -> None:
        try:
            raise ValueError("Test error")
        except ValueError:
            exc_info = sys.exc_info()

        data = json.loads(JsonFormatter().format(self._record(level=logging.ERROR, exc_info=exc_info)))

        assert "ValueError" in data["exception"]

    def test_json_includes_operation_context(self) -> None:
        record = self._record()
        record.operation = "addCustomer"
        record.kind = "NOT_FOUND"

        data = json.loads(JsonFormatter().format(record))

        assert data["operation"] == "addCustomer"
        assert data["kind"] == "NOT_FOUND"
        assert "caller" not in data

    def test_json_ignores_unknown_attributes(self) -> None:
        record = self._record()
        record.internal = "hidden"

        data = json.loads(JsonFormatter().format(record))

        assert "internal" not in data

    def test_standard_appends_context(self) -> None:
        record = self._record()
        record.operation = "downvoteCustomer"
        record.subject = "0xbank-a"

        line = LedgerFormatter().format(record)

        assert line.endswith("| Test message | operation=downvoteCustomer subject=0xbank-a")

    def test_standard_without_context(self) -> None:
        line = LedgerFormatter().format(self._record())

        assert line.endswith("| INFO     | test.logger | Test message")


class TestOperationLogging:
    """Tests for log records emitted by ledger operations."""

    def test_rejection_logged_with_kind(self, network: KycLedger, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.INFO, logger="kyc_ledger")

        with pytest.raises(PreconditionViolation):
            network.remove_customer("0xbank-a", "ghost")

        record = next(r for r in caplog.records if "rejected" in r.getMessage())
        assert record.levelno == logging.INFO
        assert record.operation == "removeCustomer"
        assert record.kind == "NOT_FOUND"
        assert record.caller == "0xbank-a"

    def test_revocation_logged_as_warning(
        self, network: KycLedger, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.INFO, logger="kyc_ledger")
        network.add_customer("0xbank-a", "alice", "fp-1")
        network.downvote_customer("0xbank-b", "alice")
        network.downvote_customer("0xbank-c", "alice")

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "0xbank-a" in warnings[0].getMessage()
