"""Tests for the report orchestrator.

Fetchers are patched at the orchestrator module; the sheet sink is an AsyncMock.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from funding_sheet.exchange.client import ClientConfig
from funding_sheet.exchange.dto import (
    AccountPosition,
    FetchResult,
    FundingPayment,
    SpotMarginHistory,
)
from funding_sheet.orchestration import OutcomeStatus, ReportOrchestrator
from funding_sheet.sheets.layout import NARROW_HEADER, WIDE_HEADER

MODULE = "funding_sheet.orchestration.report_orchestrator"


def _payment(future: str, id_: int = 1) -> FundingPayment:
    return FundingPayment(
        future=future, id=id_, payment=-0.5, rate=0.0001, time="2023-01-01T00:00:00Z"
    )


def _borrow() -> SpotMarginHistory:
    return SpotMarginHistory(
        coin="USD", cost=0.2, rate=0.00001, size=1000.0, time="2023-01-01T00:00:00Z"
    )


@pytest.fixture
def sink() -> AsyncMock:
    return AsyncMock()


def _orchestrator(sink: AsyncMock, single: bool = False) -> ReportOrchestrator:
    return ReportOrchestrator(
        client_config=ClientConfig(api_key="k", api_secret="s"),
        sink=sink,
        hkd_rate=7.78,
        semaphore=asyncio.Semaphore(2),
        year=2023,
        month=1,
        single=single,
    )


class TestPerMarket:
    @pytest.mark.asyncio
    async def test_one_sheet_per_position(self, sink):
        positions = FetchResult.ok([AccountPosition("BTC-PERP"), AccountPosition("ETH-PERP")])

        async def funding(config, window, future=None):
            return FetchResult.ok([_payment(future)])

        with (
            patch(f"{MODULE}.fetch_positions", AsyncMock(return_value=positions)),
            patch(f"{MODULE}.fetch_funding_payments", side_effect=funding),
        ):
            outcomes = await _orchestrator(sink).run()

        assert [(o.market, o.status, o.rows) for o in outcomes] == [
            ("BTC-PERP", OutcomeStatus.WRITTEN, 1),
            ("ETH-PERP", OutcomeStatus.WRITTEN, 1),
        ]
        names = sorted(call.args[0].sheet_name for call in sink.write.await_args_list)
        assert names == ["JAN_BTC-PERP", "JAN_ETH-PERP"]
        assert all(call.args[0].header == NARROW_HEADER for call in sink.write.await_args_list)

    @pytest.mark.asyncio
    async def test_failure_does_not_mask_siblings(self, sink):
        positions = FetchResult.ok(
            [AccountPosition("BTC-PERP"), AccountPosition("ETH-PERP"), AccountPosition("SOL-PERP")]
        )

        async def funding(config, window, future=None):
            if future == "ETH-PERP":
                raise httpx.ConnectError("connection refused")
            if future == "SOL-PERP":
                return FetchResult.ok([])
            return FetchResult.ok([_payment(future)])

        with (
            patch(f"{MODULE}.fetch_positions", AsyncMock(return_value=positions)),
            patch(f"{MODULE}.fetch_funding_payments", side_effect=funding),
        ):
            outcomes = await _orchestrator(sink).run()

        statuses = {o.market: o.status for o in outcomes}
        assert statuses == {
            "BTC-PERP": OutcomeStatus.WRITTEN,
            "ETH-PERP": OutcomeStatus.FAILED,
            "SOL-PERP": OutcomeStatus.EMPTY,
        }
        assert "connection refused" in next(o.error for o in outcomes if o.market == "ETH-PERP")
        sink.write.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_rejected_funding_request(self, sink):
        positions = FetchResult.ok([AccountPosition("BTC-PERP")])
        rejected = FetchResult.failed("funding_payments: Not logged in")

        with (
            patch(f"{MODULE}.fetch_positions", AsyncMock(return_value=positions)),
            patch(f"{MODULE}.fetch_funding_payments", AsyncMock(return_value=rejected)),
        ):
            (outcome,) = await _orchestrator(sink).run()

        assert outcome.status is OutcomeStatus.REJECTED
        assert outcome.error == "funding_payments: Not logged in"
        sink.write.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_sink_error_is_contained(self, sink):
        sink.write.side_effect = RuntimeError("quota exceeded")
        positions = FetchResult.ok([AccountPosition("BTC-PERP")])

        with (
            patch(f"{MODULE}.fetch_positions", AsyncMock(return_value=positions)),
            patch(
                f"{MODULE}.fetch_funding_payments",
                AsyncMock(return_value=FetchResult.ok([_payment("BTC-PERP")])),
            ),
        ):
            (outcome,) = await _orchestrator(sink).run()

        assert outcome.status is OutcomeStatus.FAILED

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "positions", [FetchResult.ok([]), FetchResult.failed("positions: success=false")]
    )
    async def test_no_positions(self, sink, positions):
        funding = AsyncMock()

        with (
            patch(f"{MODULE}.fetch_positions", AsyncMock(return_value=positions)),
            patch(f"{MODULE}.fetch_funding_payments", funding),
        ):
            outcomes = await _orchestrator(sink).run()

        assert outcomes == []
        funding.assert_not_awaited()


class TestCombined:
    @pytest.mark.asyncio
    async def test_merges_margin_history_into_wide_sheet(self, sink):
        with (
            patch(
                f"{MODULE}.fetch_funding_payments",
                AsyncMock(return_value=FetchResult.ok([_payment("BTC-PERP")])),
            ),
            patch(
                f"{MODULE}.fetch_margin_history",
                AsyncMock(return_value=FetchResult.ok([_borrow(), _borrow()])),
            ),
        ):
            (outcome,) = await _orchestrator(sink, single=True).run()

        assert outcome.status is OutcomeStatus.WRITTEN
        assert outcome.rows == 2
        update = sink.write.await_args.args[0]
        assert update.sheet_name == "JAN"
        assert update.header == WIDE_HEADER
        assert update.rows[1][:4] == ["", "", "", ""]

    @pytest.mark.asyncio
    async def test_rejected_margin_falls_back_to_narrow(self, sink):
        with (
            patch(
                f"{MODULE}.fetch_funding_payments",
                AsyncMock(return_value=FetchResult.ok([_payment("BTC-PERP")])),
            ),
            patch(
                f"{MODULE}.fetch_margin_history",
                AsyncMock(return_value=FetchResult.failed("spot_margin/borrow_history: nope")),
            ),
        ):
            (outcome,) = await _orchestrator(sink, single=True).run()

        assert outcome.status is OutcomeStatus.WRITTEN
        assert sink.write.await_args.args[0].header == NARROW_HEADER

    @pytest.mark.asyncio
    async def test_nothing_found(self, sink):
        with (
            patch(f"{MODULE}.fetch_funding_payments", AsyncMock(return_value=FetchResult.ok([]))),
            patch(f"{MODULE}.fetch_margin_history", AsyncMock(return_value=FetchResult.ok([]))),
        ):
            (outcome,) = await _orchestrator(sink, single=True).run()

        assert outcome.status is OutcomeStatus.EMPTY
        sink.write.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_transport_error_is_reported(self, sink):
        with (
            patch(
                f"{MODULE}.fetch_funding_payments",
                AsyncMock(side_effect=httpx.ReadTimeout("timed out")),
            ),
            patch(f"{MODULE}.fetch_margin_history", AsyncMock(return_value=FetchResult.ok([]))),
        ):
            (outcome,) = await _orchestrator(sink, single=True).run()

        assert outcome.status is OutcomeStatus.FAILED


@pytest.mark.asyncio
async def test_update_logs_instead_of_raising(sink):
    orchestrator = _orchestrator(sink)

    with patch.object(orchestrator, "run", AsyncMock(side_effect=RuntimeError("boom"))):
        await orchestrator.update()
