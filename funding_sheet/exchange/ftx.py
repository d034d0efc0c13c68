"""Read-only account queries on the exchange REST API.

Every endpoint answers with an envelope ``{"success": bool, "result": [...]}``.
A rejected or malformed envelope becomes a failed ``FetchResult`` carrying the
reason, never an exception. Transport failures (timeouts, connection errors,
non-2xx statuses) propagate as ``httpx.HTTPError``.
"""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from funding_sheet.exchange.client import ClientConfig, signed_get
from funding_sheet.exchange.dto import (
    AccountPosition,
    FetchResult,
    FundingPayment,
    SpotMarginHistory,
)
from funding_sheet.infrastructure.http_client import JsonValue
from funding_sheet.reporting.date_window import DateWindow

logger = logging.getLogger(__name__)

T = TypeVar("T")

POSITIONS_ENDPOINT = "positions"
FUNDING_PAYMENTS_ENDPOINT = "funding_payments"
MARGIN_HISTORY_ENDPOINT = "spot_margin/borrow_history"


def parse_envelope(
    response: JsonValue, parse: Callable[[dict[str, Any]], T], endpoint: str
) -> FetchResult[T]:
    if not isinstance(response, dict):
        return FetchResult.failed(f"{endpoint}: unexpected response {type(response).__name__}")

    if response.get("success") is not True:
        reason = response.get("error") or "success=false"
        return FetchResult.failed(f"{endpoint}: {reason}")

    result = response.get("result")
    if not isinstance(result, list):
        return FetchResult.failed(f"{endpoint}: result is not a list")

    try:
        records = [parse(raw) for raw in result]
    except (KeyError, TypeError) as e:
        return FetchResult.failed(f"{endpoint}: malformed record ({e!r})")

    return FetchResult.ok(records)


async def _fetch(
    config: ClientConfig,
    endpoint: str,
    parse: Callable[[dict[str, Any]], T],
    params: dict[str, Any] | None = None,
) -> FetchResult[T]:
    response = await signed_get(config, endpoint, params)
    result = parse_envelope(response, parse, endpoint)

    if result.success:
        logger.debug(f"Fetched {len(result.records)} records from {endpoint}")
    else:
        logger.warning(f"Exchange rejected request: {result.error}")
    return result


async def fetch_positions(config: ClientConfig) -> FetchResult[AccountPosition]:
    result = await _fetch(config, POSITIONS_ENDPOINT, AccountPosition.from_api)
    if not result.success:
        return result

    seen: set[str] = set()
    unique = []
    for position in result.records:
        if position.future not in seen:
            seen.add(position.future)
            unique.append(position)
    return FetchResult.ok(unique)


async def fetch_funding_payments(
    config: ClientConfig, window: DateWindow, future: str | None = None
) -> FetchResult[FundingPayment]:
    params: dict[str, Any] = window.as_params()
    if future:
        params["future"] = future
    return await _fetch(config, FUNDING_PAYMENTS_ENDPOINT, FundingPayment.from_api, params)


async def fetch_margin_history(
    config: ClientConfig, window: DateWindow
) -> FetchResult[SpotMarginHistory]:
    return await _fetch(
        config, MARGIN_HISTORY_ENDPOINT, SpotMarginHistory.from_api, window.as_params()
    )


async def get_positions(config: ClientConfig) -> list[AccountPosition]:
    return (await fetch_positions(config)).records


async def get_funding_payments(
    config: ClientConfig, window: DateWindow, future: str | None = None
) -> list[FundingPayment]:
    return (await fetch_funding_payments(config, window, future)).records


async def get_margin_history(config: ClientConfig, window: DateWindow) -> list[SpotMarginHistory]:
    return (await fetch_margin_history(config, window)).records
