"""Command line interface for reconciling exported provider snapshots offline."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import ConfigurationError, ReconcilerConfig, load_configuration
from .io import load_snapshots, write_results
from .matcher import MATCH_STRATEGIES
from .orchestrator import ReconciliationService


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=prog,
        description="Attribute conversation transcripts to telephony calls and contact names",
    )
    parser.add_argument("conversations", help="Conversation export (JSON, CSV or XLSX)")
    parser.add_argument("calls", help="Telephony call export (JSON, CSV or XLSX)")
    parser.add_argument("output", help="Path where the enriched results should be written (CSV or XLSX)")
    parser.add_argument(
        "--contacts",
        default=None,
        help="Contacts directory export (JSON). Without it only phone numbers are shown",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a reconciliation configuration file (YAML or JSON)",
    )
    parser.add_argument(
        "--window-ms",
        type=float,
        default=None,
        help="Maximum gap in milliseconds between a conversation and its call (overrides the config)",
    )
    parser.add_argument(
        "--strategy",
        choices=MATCH_STRATEGIES,
        default=None,
        help="Call matching strategy (overrides the config)",
    )
    parser.add_argument(
        "--format-phones",
        action="store_true",
        help="Write phone numbers as (XXX) XXX-XXXX in the output",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING)",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def _resolve_config(args: argparse.Namespace) -> ReconcilerConfig:
    data = load_configuration(args.config) if args.config else {}
    section = data.get("reconciliation", data)
    if not isinstance(section, dict):
        raise ConfigurationError("'reconciliation' section must be a mapping")
    section = dict(section)
    if args.window_ms is not None:
        section["match_window_ms"] = args.window_ms
    if args.strategy is not None:
        section["match_strategy"] = args.strategy
    return ReconcilerConfig.from_mapping(section)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO))

    config = _resolve_config(args)
    snapshots = load_snapshots(args.conversations, args.calls, args.contacts)
    if not snapshots.conversations:
        logging.warning("No conversations found - nothing to reconcile")

    service = ReconciliationService(config)
    report = service.run(snapshots.conversations, snapshots.calls, snapshots.contacts)
    write_results(args.output, report.results, format_phones=args.format_phones)

    logging.info(
        "Matched %s of %s conversations, %s with contact names",
        report.matched,
        report.conversations,
        report.named,
    )
    logging.info("Enriched results written to %s", Path(args.output).resolve())
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
