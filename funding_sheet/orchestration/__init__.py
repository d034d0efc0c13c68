"""Orchestration layer for funding sheet.

The orchestrator combines fetchers, the merger and the sheet writer into the
workflow the CLI and the scheduler call:

Example:
    orchestrator = ReportOrchestrator(...)
    outcomes = await orchestrator.run()   # one MarketOutcome per sheet written
"""

from funding_sheet.orchestration.report_orchestrator import (
    MarketOutcome,
    OutcomeStatus,
    ReportOrchestrator,
)

__all__ = ["MarketOutcome", "OutcomeStatus", "ReportOrchestrator"]
