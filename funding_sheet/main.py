"""Entry point for funding sheet application."""

import asyncio
import logging
import sys

from funding_sheet.bootstrap import bootstrap, build_orchestrator
from funding_sheet.cli import build_parser
from funding_sheet.exceptions import ConfigurationError
from funding_sheet.logging_setup import configure_logging
from funding_sheet.orchestration import OutcomeStatus
from funding_sheet.runtime import RuntimeConfig, build_runtime_config
from funding_sheet.settings import Settings

logger = logging.getLogger(__name__)


async def run_once(config: RuntimeConfig) -> bool:
    """Run a single report; True when no sheet failed."""
    orchestrator = build_orchestrator(config)
    outcomes = await orchestrator.run()

    for outcome in outcomes:
        if outcome.status is OutcomeStatus.WRITTEN:
            logger.info(f"{outcome.market}: {outcome.rows} rows written")
        elif outcome.status is OutcomeStatus.EMPTY:
            logger.warning(f"{outcome.market}: not found")
        else:
            logger.error(f"{outcome.market}: {outcome.status.value} ({outcome.error})")

    return all(outcome.status is not OutcomeStatus.FAILED for outcome in outcomes)


async def run_scheduler(config: RuntimeConfig) -> None:
    """Bootstrap and run the report scheduler."""
    scheduler = bootstrap(build_orchestrator(config))
    scheduler.start()
    logger.info("Scheduler started, waiting for jobs...")

    # Block forever, keeping the scheduler running
    await asyncio.Event().wait()


def main(argv: list[str] | None = None) -> None:
    """Main entry point for funding sheet."""
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.debug)

    try:
        config = build_runtime_config(args, Settings())
    except (ConfigurationError, ValueError) as e:
        sys.exit(f"Configuration error: {e}")

    try:
        if config.schedule:
            asyncio.run(run_scheduler(config))
        elif not asyncio.run(run_once(config)):
            sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Application stopped by user")
    except Exception as e:
        logger.error(f"Error occurred: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
