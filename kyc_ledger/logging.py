"""Logging setup for kyc-ledger.

Ledger modules log through ``logging.getLogger(__name__)`` and attach the
operation they were handling as record attributes, e.g.
``extra={"operation": "addCustomer", "kind": "NOT_FOUND"}``. Both formatters
here know those attributes and render them when present.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# Record attributes set by the ledger, in output order
CONTEXT_FIELDS = ("operation", "kind", "caller", "subject")

STANDARD_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"


def operation_context(record: logging.LogRecord) -> dict[str, Any]:
    """Ledger context attached to ``record``, skipping unset fields."""
    return {
        name: getattr(record, name)
        for name in CONTEXT_FIELDS
        if getattr(record, name, None) is not None
    }


class LedgerFormatter(logging.Formatter):
    """Pipe-delimited formatter that appends the operation context."""

    def __init__(self) -> None:
        super().__init__(fmt=STANDARD_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = operation_context(record)
        if not context:
            return line
        return line + " | " + " ".join(f"{k}={v}" for k, v in context.items())


class JsonFormatter(logging.Formatter):
    """One JSON object per record, operation context as top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_data.update(operation_context(record))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Route all logging to stdout with the chosen formatter.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown names
        fall back to INFO.
    format_type : str
        "standard" or "json".
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter: logging.Formatter = JsonFormatter() if format_type == "json" else LedgerFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    logging.getLogger("kyc_ledger").setLevel(log_level)

    # Faker logs every provider lookup at DEBUG
    for noisy in ("faker", "confluent_kafka"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
