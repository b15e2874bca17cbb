"""Command-line interface for the position probe."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from .addresses import parse_pubkey
from .chains.solana import SolanaClient
from .config import load_config
from .errors import PositionQueryError
from .logging_setup import configure_logging
from .report import format_report
from .services import PositionService

logger = logging.getLogger(__name__)

EXAMPLE_ADDRESS = "53zSj4G935ZY2a5x2UnGAiJXSuXXmGHaLph2zhAUvYpg"


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="solpos",
        description="SOL, WSOL and LP position summary for a Solana wallet",
        epilog=f"Example: solpos {EXAMPLE_ADDRESS}",
    )
    parser.add_argument("address", nargs="?", help="Wallet address (base58)")
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser


async def _run(args: argparse.Namespace) -> str:
    """Execute one query and return the formatted report."""
    config = load_config(args.config)
    wallet = parse_pubkey(args.address)
    service = PositionService(SolanaClient(config.chain), config.pool)
    report = await service.fetch_report(wallet)
    return format_report(report)


def main(argv: list[str] | None = None) -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.address:
        parser.print_usage(sys.stderr)
        print(f"Example: {parser.prog} {EXAMPLE_ADDRESS}", file=sys.stderr)
        sys.exit(1)

    try:
        parse_pubkey(args.address)
    except ValueError:
        print(
            f"Invalid address. Good address example: {EXAMPLE_ADDRESS}",
            file=sys.stderr,
        )
        sys.exit(1)

    try:
        output = asyncio.run(_run(args))
    except (PositionQueryError, FileNotFoundError, ValueError) as e:
        logger.debug("Query failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(output)
