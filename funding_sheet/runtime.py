"""Runtime configuration building for funding sheet startup."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass

from funding_sheet.exchange.client import ClientConfig
from funding_sheet.settings import Settings
from funding_sheet.sheets.writer import SheetCredentials

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeConfig:
    """Resolved startup configuration after CLI/ENV merge."""

    client: ClientConfig
    sheet: SheetCredentials
    year: int | None
    month: int | None
    single: bool
    schedule: bool
    concurrency_limit: int
    hkd_to_usd_rate: float


def build_runtime_config(args: argparse.Namespace, settings: Settings) -> RuntimeConfig:
    """Resolve final runtime configuration used by main().

    Raises ConfigurationError when exchange or spreadsheet credentials are missing,
    before anything touches the network.
    """
    subaccount = args.subaccount if args.subaccount is not None else settings.subaccount
    concurrency_limit = (
        args.concurrency if args.concurrency is not None else settings.concurrency_limit
    )

    if concurrency_limit <= 0:
        raise ValueError("CONCURRENCY_LIMIT must be greater than 0")

    client = ClientConfig(
        api_key=settings.api_key or "",
        api_secret=settings.api_secret or "",
        subaccount=subaccount or None,
        base_url=settings.api_base_url,
    )
    client.validate()

    sheet = SheetCredentials(
        sheet_id=settings.google_sheet_id or "",
        service_account_email=settings.google_service_account_email or "",
        private_key=settings.google_private_key or "",
    )
    sheet.validate()

    if subaccount:
        logger.info(f"Using sub-account {subaccount}")

    return RuntimeConfig(
        client=client,
        sheet=sheet,
        year=args.year,
        month=args.month,
        single=args.single,
        schedule=args.schedule,
        concurrency_limit=concurrency_limit,
        hkd_to_usd_rate=settings.hkd_to_usd_rate,
    )
