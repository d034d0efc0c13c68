"""Tests for the entry point and scheduler bootstrap."""

from unittest.mock import AsyncMock, patch

import pytest

from funding_sheet import main as main_module
from funding_sheet.bootstrap import bootstrap, build_orchestrator
from funding_sheet.cli import build_parser
from funding_sheet.orchestration import MarketOutcome, OutcomeStatus
from funding_sheet.runtime import build_runtime_config
from funding_sheet.settings import Settings


@pytest.fixture
def config():
    settings = Settings(
        _env_file=None,
        API_KEY="key",
        API_SECRET="secret",
        GOOGLE_SHEET_ID="sheet",
        GOOGLE_SERVICE_ACCOUNT_EMAIL="bot@example.com",
        GOOGLE_PRIVATE_KEY="pk",
    )
    return build_runtime_config(build_parser().parse_args(["-y", "2023", "-m", "1"]), settings)


def test_bootstrap_registers_report_job(config):
    scheduler = bootstrap(build_orchestrator(config, sink=AsyncMock()))

    (job,) = scheduler.get_jobs()
    assert job.name == "funding_sheet_report"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("status", "expected"),
    [
        (OutcomeStatus.WRITTEN, True),
        (OutcomeStatus.EMPTY, True),
        (OutcomeStatus.REJECTED, True),
        (OutcomeStatus.FAILED, False),
    ],
)
async def test_run_once_reports_failures(config, status, expected):
    outcomes = [
        MarketOutcome("BTC-PERP", OutcomeStatus.WRITTEN, rows=1),
        MarketOutcome("ETH-PERP", status),
    ]

    with patch(
        "funding_sheet.orchestration.ReportOrchestrator.run", AsyncMock(return_value=outcomes)
    ):
        assert await main_module.run_once(config) is expected


def test_main_exits_on_missing_configuration(monkeypatch):
    for name in ("API_KEY", "API_SECRET"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(main_module, "Settings", lambda: Settings(_env_file=None))

    with pytest.raises(SystemExit) as exc_info:
        main_module.main([])

    assert "Configuration error" in str(exc_info.value.code)
