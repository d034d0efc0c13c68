"""CLI argument parsing for funding sheet."""

from __future__ import annotations

import argparse


def month_arg(value: str) -> int:
    month = int(value)
    if not 1 <= month <= 12:
        raise argparse.ArgumentTypeError(f"month must be between 1 and 12, got {month}")
    return month


def build_parser() -> argparse.ArgumentParser:
    """Create the CLI parser used by the main entrypoint."""
    parser = argparse.ArgumentParser(
        description="Funding sheet - write funding payments and margin borrow costs to Google Sheets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Current month, one sheet per open position
  funding-sheet

  # March 2023, every market combined into a single sheet with margin costs
  funding-sheet -y 2023 -m 3 --single

  # Keep running, refreshing the current month every hour
  funding-sheet --schedule

Environment Variables:
  API_KEY, API_SECRET            Exchange API credentials (required)
  SUBACCOUNT                     Exchange sub-account (overridden by CLI)
  GOOGLE_SHEET_ID                Target spreadsheet id (required)
  GOOGLE_SERVICE_ACCOUNT_EMAIL   Service account email (required)
  GOOGLE_PRIVATE_KEY             Service account private key (required)
  HKD_TO_USD_RATE                Conversion rate for the hkd summary cell (default: 7.78)
  CONCURRENCY_LIMIT              Max markets processed in parallel (default: 10)
        """,
    )

    parser.add_argument(
        "-y",
        "--year",
        type=int,
        default=None,
        help="Year to report (default: current year).",
    )
    parser.add_argument(
        "-m",
        "--month",
        type=month_arg,
        default=None,
        help="Month to report, 1-12 (default: current month).",
    )
    parser.add_argument(
        "--single",
        action="store_true",
        help="Combine all markets and margin borrow costs into one sheet.",
    )
    parser.add_argument(
        "--subaccount",
        type=str,
        default=None,
        help="Exchange sub-account to query (default: from env).",
    )
    parser.add_argument(
        "--schedule",
        action="store_true",
        help="Run now and then hourly until interrupted.",
    )
    parser.add_argument(
        "--concurrency",
        type=int,
        default=None,
        help="Max markets processed in parallel (default: from env, fallback 10).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable DEBUG logging.",
    )

    return parser
