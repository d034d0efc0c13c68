"""Exchange API access: request signing, client construction and account queries."""

from funding_sheet.exchange.client import ClientConfig, build_client, signed_get
from funding_sheet.exchange.dto import (
    AccountPosition,
    FetchResult,
    FundingPayment,
    MergedRow,
    SpotMarginHistory,
)
from funding_sheet.exchange.ftx import (
    fetch_funding_payments,
    fetch_margin_history,
    fetch_positions,
    get_funding_payments,
    get_margin_history,
    get_positions,
)

__all__ = [
    "AccountPosition",
    "ClientConfig",
    "FetchResult",
    "FundingPayment",
    "MergedRow",
    "SpotMarginHistory",
    "build_client",
    "fetch_funding_payments",
    "fetch_margin_history",
    "fetch_positions",
    "get_funding_payments",
    "get_margin_history",
    "get_positions",
    "signed_get",
]
