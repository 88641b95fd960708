"""
Game Price Resolver — Command-Line Entrypoint

Resolves each input concurrently and prints one JSON object per line.

Run via:
    python -m gameprice.main https://store.steampowered.com/app/1174180/ EP9000-PPSA01284_00
    python -m gameprice.main --preview EP9000-PPSA01284_00
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any

import structlog

from gameprice.config import settings
from gameprice.errors import ResolutionFailed
from gameprice.resolution import GamePriceResolver, Rejected


# ---------------------------------------------------------------------------
# Structlog Configuration
# ---------------------------------------------------------------------------


def configure_logging(log_level: str = "INFO") -> None:
    """
    Set up structured logging with JSON output on stderr.

    stdout is reserved for results.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Configure stdlib logging first (for third-party libraries)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


def _error_record(raw_input: str, error: ResolutionFailed) -> dict[str, Any]:
    return {
        "input": raw_input,
        "error": str(error),
        "errorType": type(error).__name__,
    }


async def run(inputs: list[str], preview: bool = False) -> list[dict[str, Any]]:
    """
    Resolve every input and return one response record per input, in order.

    With preview=True, PlayStation placeholder listings are built
    without any network access.
    """
    async with GamePriceResolver() as resolver:
        if preview:
            records: list[dict[str, Any]] = []
            for raw_input in inputs:
                try:
                    records.append(resolver.preview_playstation(raw_input).to_response())
                except ResolutionFailed as e:
                    records.append(_error_record(raw_input, e))
            return records

        outcomes = await asyncio.gather(
            *(resolver.resolve_outcome(raw_input) for raw_input in inputs)
        )

    return [
        _error_record(raw_input, outcome.error)
        if isinstance(outcome, Rejected)
        else outcome.listing.to_response()
        for raw_input, outcome in zip(inputs, outcomes)
    ]


# ---------------------------------------------------------------------------
# CLI Entry
# ---------------------------------------------------------------------------


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resolve Steam / PlayStation Store URLs or product codes into priced listings.",
    )
    parser.add_argument(
        "inputs",
        nargs="+",
        help="Store URLs, steam:// links or PlayStation product codes.",
    )
    parser.add_argument(
        "--preview",
        action="store_true",
        help="Build PlayStation placeholder listings without fetching.",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        help=f"Logging level (default: {settings.LOG_LEVEL}).",
    )
    return parser.parse_args(argv)


def cli(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    records = asyncio.run(run(args.inputs, preview=args.preview))
    for record in records:
        print(json.dumps(record, ensure_ascii=False))

    return 1 if any("error" in record for record in records) else 0


if __name__ == "__main__":
    sys.exit(cli())
