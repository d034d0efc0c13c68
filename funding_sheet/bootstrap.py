"""Bootstrap functions wiring the report orchestrator.

This module builds the orchestrator from a resolved RuntimeConfig and, for
long-running mode, the scheduler that refreshes the report periodically.
"""

import asyncio
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.combining import OrTrigger
from apscheduler.triggers.cron import CronTrigger
from apscheduler.triggers.date import DateTrigger

from funding_sheet.orchestration import ReportOrchestrator
from funding_sheet.orchestration.report_orchestrator import SheetSink
from funding_sheet.runtime import RuntimeConfig
from funding_sheet.sheets.writer import SheetWriter

logger = logging.getLogger(__name__)


def build_orchestrator(
    config: RuntimeConfig, sink: SheetSink | None = None
) -> ReportOrchestrator:
    """Create the orchestrator; the sheet writer is built from config unless given."""
    return ReportOrchestrator(
        client_config=config.client,
        sink=sink if sink is not None else SheetWriter(config.sheet),
        hkd_rate=config.hkd_to_usd_rate,
        semaphore=asyncio.Semaphore(config.concurrency_limit),
        year=config.year,
        month=config.month,
        single=config.single,
    )


def bootstrap(orchestrator: ReportOrchestrator) -> AsyncIOScheduler:
    """Set up the scheduler running the report immediately and then hourly.

    Each run resolves its window afresh, so an unpinned report follows the
    current month across month boundaries.

    Returns:
        Configured AsyncIOScheduler ready to start
    """
    scheduler = AsyncIOScheduler(
        job_defaults={
            "coalesce": True,  # Skip missed runs if overlapping
            "max_instances": 1,  # Only one instance per job at a time
            "misfire_grace_time": 3600,  # Allow delayed starts within 1 hour
        }
    )

    scheduler.add_job(
        orchestrator.update,
        trigger=OrTrigger(
            [
                DateTrigger(),  # Run immediately on start
                CronTrigger(hour="*", minute=0, second=5),  # Then hourly
            ]
        ),
        name="funding_sheet_report",
    )
    logger.info("Registered report job (immediate + hourly)")

    return scheduler
