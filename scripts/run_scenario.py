#!/usr/bin/env python3
"""Run a consensus simulation and publish its audit trail.

Builds a network of synthetic banks, lets them register and vote on
customers, then writes every ledger notification to the console, a JSON
Lines file and/or a Kafka topic.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from kyc_ledger.config import KycConfig, ScenarioConfig
from kyc_ledger.exceptions import ConfigurationError
from kyc_ledger.logging import setup_logging
from kyc_ledger.scenarios import ConsensusScenario
from kyc_ledger.scenarios.consensus import DEFAULT_ADMIN
from kyc_ledger.sinks import ConsoleSink, JsonFileSink, KafkaSink

logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point."""
    config = KycConfig.from_env()

    parser = argparse.ArgumentParser(description="Simulate banks voting on KYC customers")
    defaults = config.scenario
    parser.add_argument(
        "--banks",
        type=int,
        default=defaults.num_banks,
        help="Number of banks (default: $SCENARIO_BANKS or 7)",
    )
    parser.add_argument(
        "--customers",
        type=int,
        default=defaults.num_customers,
        help="Number of customers (default: $SCENARIO_CUSTOMERS or 20)",
    )
    parser.add_argument(
        "--votes-per-customer",
        type=int,
        default=defaults.votes_per_customer,
        help="Vote attempts per customer (default: %(default)s)",
    )
    parser.add_argument(
        "--downvote-rate",
        type=float,
        default=defaults.downvote_rate,
        help="Probability that a vote is a downvote (default: %(default)s)",
    )
    parser.add_argument(
        "--modify-rate",
        type=float,
        default=defaults.modify_rate,
        help="Probability that an owner changes customer data (default: %(default)s)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--admin",
        type=str,
        default=config.ledger.admin_address or DEFAULT_ADMIN,
        help="Administrator identity (default: $KYC_ADMIN_ADDRESS)",
    )
    parser.add_argument("--console", action="store_true", help="Print notifications to stdout")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=config.output.audit_output_dir,
        help="Write notifications as JSON Lines under this directory (default: $OUTPUT_DIR)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=None,
        help="Publish notifications to Kafka at these bootstrap servers",
    )
    parser.add_argument("--topic", type=str, default=config.ledger.audit_topic, help="Audit topic name")
    parser.add_argument("--log-level", type=str, default=config.log_level, help="Log level (default: INFO)")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")

    args = parser.parse_args()
    setup_logging(args.log_level, "json" if args.json_logs else "standard")

    scenario_config = ScenarioConfig(
        num_banks=args.banks,
        num_customers=args.customers,
        votes_per_customer=args.votes_per_customer,
        downvote_rate=args.downvote_rate,
        modify_rate=args.modify_rate,
    )
    try:
        scenario = ConsensusScenario.from_config(scenario_config, seed=args.seed, admin=args.admin)
    except ConfigurationError as exc:
        parser.error(str(exc))
    scenario.generate()

    sinks = []
    if args.console:
        sinks.append(ConsoleSink(pretty=config.output.pretty_json))
    if args.output_dir is not None:
        sinks.append(JsonFileSink(args.output_dir, topic=args.topic))
    if args.kafka_bootstrap:
        config.kafka.bootstrap_servers = args.kafka_bootstrap
        sinks.append(KafkaSink(config.kafka, topic=args.topic))

    scenario.export(sinks, topic=args.topic)
    for sink in sinks:
        sink.close()

    print(json.dumps(scenario.get_statistics(), indent=2))


if __name__ == "__main__":
    main()
