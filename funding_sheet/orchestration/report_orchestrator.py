"""Report orchestrator."""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol

from funding_sheet.exchange.client import ClientConfig
from funding_sheet.exchange.ftx import (
    fetch_funding_payments,
    fetch_margin_history,
    fetch_positions,
)
from funding_sheet.reporting.date_window import DateWindow, resolve_window
from funding_sheet.reporting.merger import merge_records
from funding_sheet.sheets.layout import SheetUpdate, build_sheet_update

logger = logging.getLogger(__name__)

COMBINED_MARKET = "ALL"


class SheetSink(Protocol):
    async def write(self, update: SheetUpdate) -> None: ...


class OutcomeStatus(str, Enum):
    WRITTEN = "written"
    EMPTY = "empty"
    REJECTED = "rejected"
    FAILED = "failed"


@dataclass(frozen=True)
class MarketOutcome:
    market: str
    status: OutcomeStatus
    rows: int = 0
    error: str | None = None


class ReportOrchestrator:
    """Fetches, merges and writes one month of records per run."""

    def __init__(
        self,
        client_config: ClientConfig,
        sink: SheetSink,
        hkd_rate: float,
        semaphore: asyncio.Semaphore,
        year: int | None = None,
        month: int | None = None,
        single: bool = False,
    ) -> None:
        self._client_config = client_config
        self._sink = sink
        self._hkd_rate = hkd_rate
        self._semaphore = semaphore
        self._year = year
        self._month = month
        self._single = single

    async def run(self) -> list[MarketOutcome]:
        """Resolve the window and write every sheet; exceptions per market are contained."""
        start_time = datetime.now()
        window = resolve_window(self._year, self._month)
        logger.info(f"Getting {window.label} {window.year} funding payments")

        if self._single:
            outcomes = [await self.update_combined(window)]
        else:
            outcomes = await self.update_markets(window)

        duration = datetime.now() - start_time
        counts = Counter(outcome.status for outcome in outcomes)
        logger.info(
            f"Report completed for {window.label} {window.year} in {duration} "
            f"({', '.join(f'{counts[s]} {s.value}' for s in OutcomeStatus)})"
        )
        return outcomes

    async def update(self) -> None:
        """Scheduler entry point: run() with top-level errors logged."""
        try:
            await self.run()
        except Exception as e:
            logger.error(f"Report run failed: {e}", exc_info=True)

    async def update_markets(self, window: DateWindow) -> list[MarketOutcome]:
        positions = await fetch_positions(self._client_config)

        if not positions.success:
            logger.warning(f"Could not list positions: {positions.error}")
            return []

        if not positions.records:
            logger.warning("No open positions found")
            return []

        markets = [position.future for position in positions.records]
        logger.debug(f"Processing {len(markets)} markets: {markets}")

        tasks = [self.update_market(window, market) for market in markets]
        return list(await asyncio.gather(*tasks))

    async def update_market(self, window: DateWindow, market: str) -> MarketOutcome:
        async with self._semaphore:
            try:
                result = await fetch_funding_payments(self._client_config, window, market)

                if not result.success:
                    return MarketOutcome(market, OutcomeStatus.REJECTED, error=result.error)

                if not result.records:
                    logger.warning(f"No funding payments found for {market} in {window.label}")
                    return MarketOutcome(market, OutcomeStatus.EMPTY)

                update = build_sheet_update(window, result.records, self._hkd_rate, market)
                await self._sink.write(update)
                return MarketOutcome(market, OutcomeStatus.WRITTEN, rows=len(update.rows))

            except Exception as e:
                logger.error(f"Failed to update {market}: {e}", exc_info=True)
                return MarketOutcome(market, OutcomeStatus.FAILED, error=str(e))

    async def update_combined(self, window: DateWindow) -> MarketOutcome:
        try:
            funding, margin = await asyncio.gather(
                fetch_funding_payments(self._client_config, window),
                fetch_margin_history(self._client_config, window),
            )

            if not funding.success:
                return MarketOutcome(COMBINED_MARKET, OutcomeStatus.REJECTED, error=funding.error)

            if not margin.success:
                logger.warning(f"Writing funding payments without margin history: {margin.error}")

            rows = merge_records(funding.records, margin.records)
            if not rows:
                logger.warning(f"No funding payments or margin history found in {window.label}")
                return MarketOutcome(COMBINED_MARKET, OutcomeStatus.EMPTY)

            update = build_sheet_update(window, rows, self._hkd_rate)
            await self._sink.write(update)
            return MarketOutcome(COMBINED_MARKET, OutcomeStatus.WRITTEN, rows=len(update.rows))

        except Exception as e:
            logger.error(f"Failed to update combined sheet: {e}", exc_info=True)
            return MarketOutcome(COMBINED_MARKET, OutcomeStatus.FAILED, error=str(e))
