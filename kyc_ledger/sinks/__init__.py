"""Output sinks for the notification audit trail."""

from kyc_ledger.sinks.console import ConsoleSink
from kyc_ledger.sinks.json_file import JsonFileSink
from kyc_ledger.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
