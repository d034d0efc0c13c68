"""Report preview CLI: fetch and merge a month of records without writing a sheet."""

import argparse
import asyncio
import sys

from rich.console import Console
from rich.table import Table

from funding_sheet.cli import month_arg
from funding_sheet.exceptions import ConfigurationError
from funding_sheet.exchange.client import ClientConfig
from funding_sheet.exchange.ftx import (
    fetch_funding_payments,
    fetch_margin_history,
    fetch_positions,
)
from funding_sheet.reporting.date_window import resolve_window
from funding_sheet.reporting.merger import merge_records
from funding_sheet.settings import Settings
from funding_sheet.sheets.layout import SheetUpdate, build_sheet_update

console = Console()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Preview the sheets a report run would write, without touching Google Sheets"
    )
    parser.add_argument("-y", "--year", type=int, default=None, help="Year (default: current)")
    parser.add_argument(
        "-m", "--month", type=month_arg, default=None, help="Month 1-12 (default: current)"
    )
    parser.add_argument(
        "--market",
        type=str,
        default=None,
        help="Preview a single market sheet (default: combined sheet with margin history)",
    )
    parser.add_argument(
        "--positions",
        action="store_true",
        help="List open positions and exit",
    )
    parser.add_argument("--subaccount", type=str, default=None, help="Exchange sub-account")
    parser.add_argument(
        "--preview-limit",
        type=int,
        default=10,
        help="How many rows to show (default: 10)",
    )
    return parser


def _render_update(update: SheetUpdate, preview_limit: int) -> None:
    table = Table(title=update.sheet_name, show_header=True, header_style="bold magenta")
    for column in update.header:
        table.add_column(column, style="cyan" if column in ("future", "coin") else None)

    for row in update.rows[:preview_limit]:
        table.add_row(*(str(value) for value in row))

    if len(update.rows) > preview_limit:
        table.add_row(*("..." for _ in update.header))

    console.print(table)

    summary = Table(show_header=True, header_style="bold magenta")
    summary.add_column("Cell", style="cyan")
    summary.add_column("Label", style="yellow")
    summary.add_column("Formula", style="green")
    for cell in update.summary_cells:
        summary.add_row(cell.value_cell, cell.label, cell.formula)
    console.print(summary)


async def preview_report(args: argparse.Namespace, settings: Settings) -> bool:
    config = ClientConfig(
        api_key=settings.api_key or "",
        api_secret=settings.api_secret or "",
        subaccount=args.subaccount if args.subaccount is not None else settings.subaccount,
        base_url=settings.api_base_url,
    )
    try:
        config.validate()
    except ConfigurationError as exc:
        console.print(f"[bold red][FAIL][/bold red] {exc}")
        return False

    if args.positions:
        result = await fetch_positions(config)
        if not result.success:
            console.print(f"[bold red][FAIL][/bold red] {result.error}")
            return False
        console.print(f"[green][OK][/green] {len(result.records)} open positions")
        for position in result.records:
            console.print(f"  - {position.future}")
        return True

    window = resolve_window(args.year, args.month)
    console.print(f"\n[bold cyan]Previewing {window.label} {window.year}[/bold cyan]\n")

    if args.market:
        funding = await fetch_funding_payments(config, window, args.market)
        margin_records = []
    else:
        funding, margin = await asyncio.gather(
            fetch_funding_payments(config, window),
            fetch_margin_history(config, window),
        )
        if not margin.success:
            console.print(f"  [yellow][WARN][/yellow] Margin history unavailable: {margin.error}")
        margin_records = margin.records

    if not funding.success:
        console.print(f"  [bold red][FAIL][/bold red] Funding payments rejected: {funding.error}")
        return False

    console.print(
        f"  [green][OK][/green] {len(funding.records)} funding payments, "
        f"{len(margin_records)} margin records"
    )

    rows = merge_records(funding.records, margin_records)
    if not rows:
        console.print("  [yellow][WARN][/yellow] Nothing to write for this window")
        return True

    update = build_sheet_update(window, rows, settings.hkd_to_usd_rate, args.market)
    _render_update(update, args.preview_limit)
    return True


async def amain(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    if args.preview_limit < 1:
        console.print("[bold red][FAIL][/bold red] --preview-limit must be >= 1")
        return 1

    try:
        success = await preview_report(args, Settings())
    except Exception as exc:
        console.print(f"[bold red][FAIL][/bold red] Preview failed: {exc}")
        return 1
    return 0 if success else 1


def main() -> int:
    return asyncio.run(amain())


def entrypoint() -> None:
    sys.exit(main())
