"""Logging setup helpers for funding sheet startup."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

_NOISY_LOGGERS = ("httpx", "httpcore", "apscheduler", "gspread", "google", "urllib3")


def configure_logging(debug: bool = False) -> None:
    """Configure base logging and quiet third-party loggers."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    if debug:
        logging.getLogger("funding_sheet").setLevel(logging.DEBUG)
        logger.info("Enabling DEBUG logging for funding_sheet")
