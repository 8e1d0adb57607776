#!/usr/bin/env python3
"""Command-line interface for crypto price statistics and rankings."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TYPE_CHECKING

from cryptorec.config import (build_config, configure_logging, load_config,
                              parse_date)
from cryptorec.exceptions import ConfigError, CryptoRecError

if TYPE_CHECKING:
    from cryptorec.engine import CryptoPriceService
    from cryptorec.types import EngineConfig

logger = logging.getLogger(__name__)


def resolve_config(args: argparse.Namespace) -> EngineConfig:
    """Build configuration from ``--config`` or ``--data-dir`` plus overrides."""
    if args.config:
        config = load_config(args.config)
    elif args.data_dir:
        config = build_config({"data_dir": args.data_dir})
    else:
        raise ConfigError("Either --config or --data-dir is required")

    overrides = {}
    if args.timezone:
        overrides["timezone"] = args.timezone
    if args.log_level:
        overrides["log_level"] = args.log_level
    if overrides:
        config = build_config({**config.model_dump(), **overrides})
    return config


def build_service(config: EngineConfig) -> CryptoPriceService:
    """Load price history and wire up the query service."""
    from cryptorec.data import load_price_store, resolve_price_source
    from cryptorec.engine import CryptoPriceService

    source = resolve_price_source(config)
    store = load_price_store(source)
    return CryptoPriceService(store, config.zone_info())


def cmd_stats(service: CryptoPriceService, args: argparse.Namespace) -> int:
    """Show oldest, newest, min and max prices for one symbol."""
    stats = service.get_stats(
        args.symbol, parse_date(args.from_date), parse_date(args.to_date)
    )

    if args.json:
        print(stats.model_dump_json(indent=2))
        return 0

    print("=" * 60)
    print(f"STATS: {stats.symbol}")
    print("=" * 60)
    for label, point in (
        ("Oldest", stats.oldest),
        ("Newest", stats.newest),
        ("Min", stats.min),
        ("Max", stats.max),
    ):
        print(f"{label + ':':<9}{point.price:>20}  @ {point.timestamp.isoformat()}")
    return 0


def cmd_ranking(service: CryptoPriceService, args: argparse.Namespace) -> int:
    """List all symbols by normalized range, highest first."""
    ranking = service.get_ranking(parse_date(args.from_date), parse_date(args.to_date))

    if args.json:
        print(json.dumps([r.model_dump(mode="json") for r in ranking], indent=2))
        return 0

    print("=" * 40)
    print("NORMALIZED RANGE RANKING")
    print("=" * 40)
    if not ranking:
        print("No symbols with eligible data.")
        return 0

    print(f"{'#':>3}  {'Symbol':<10} {'Normalized Range':>20}")
    print("-" * 40)
    for i, result in enumerate(ranking):
        print(f"{i + 1:>3}  {result.symbol:<10} {result.value:>20}")
    return 0


def cmd_highest(service: CryptoPriceService, args: argparse.Namespace) -> int:
    """Show the symbol with the highest normalized range on one day."""
    day = parse_date(args.date)
    result = service.get_highest_for_day(day)

    if args.json:
        print(result.model_dump_json(indent=2))
        return 0

    print(f"Highest normalized range on {day.isoformat()}: {result.symbol} ({result.value})")
    return 0


COMMANDS = {
    "stats": cmd_stats,
    "ranking": cmd_ranking,
    "highest": cmd_highest,
}


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        description="Crypto price statistics and normalized-range rankings",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-c", "--config", help="Path to YAML configuration file")
    parser.add_argument(
        "-d", "--data-dir", help="Directory of SYMBOL_values.csv price files"
    )
    parser.add_argument(
        "--timezone", help="Timezone for calendar-day boundaries (default: UTC)"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: from config, INFO)",
    )
    parser.add_argument("--json", action="store_true", help="Emit JSON output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    stats_parser = subparsers.add_parser(
        "stats", help="Oldest, newest, min and max prices for a symbol"
    )
    stats_parser.add_argument("symbol", help="Crypto symbol (e.g., BTC)")
    stats_parser.add_argument(
        "--from", dest="from_date", help="Start date, inclusive (YYYY-MM-DD)"
    )
    stats_parser.add_argument(
        "--to", dest="to_date", help="End date, inclusive (YYYY-MM-DD)"
    )

    ranking_parser = subparsers.add_parser(
        "ranking", help="All symbols sorted by normalized range"
    )
    ranking_parser.add_argument(
        "--from", dest="from_date", help="Start date, inclusive (YYYY-MM-DD)"
    )
    ranking_parser.add_argument(
        "--to", dest="to_date", help="End date, inclusive (YYYY-MM-DD)"
    )

    highest_parser = subparsers.add_parser(
        "highest", help="Symbol with the highest normalized range on a day"
    )
    highest_parser.add_argument("date", help="Day to evaluate (YYYY-MM-DD)")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = resolve_config(args)
        configure_logging(config.log_level)
        service = build_service(config)
        return COMMANDS[args.command](service, args)
    except CryptoRecError as e:
        if args.json:
            print(e.to_error_payload().model_dump_json())
        else:
            print(f"Error [{e.code}]: {e}")
        logger.debug("Command %s failed", args.command, exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
