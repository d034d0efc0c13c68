"""Shared test fixtures for the funding sheet reporter."""

from typing import Any

import pytest

from funding_sheet.reporting.date_window import DateWindow, resolve_window


@pytest.fixture
def window() -> DateWindow:
    return resolve_window(2023, 1)


@pytest.fixture
def funding_raw() -> list[dict[str, Any]]:
    return [
        {
            "future": "BTC-PERP",
            "id": 1,
            "payment": -0.5,
            "rate": 0.0001,
            "time": "2023-01-01T00:00:00+00:00",
        },
        {
            "future": "BTC-PERP",
            "id": 2,
            "payment": 0.25,
            "rate": -0.00005,
            "time": "2023-01-01T01:00:00+00:00",
        },
    ]


@pytest.fixture
def margin_raw() -> list[dict[str, Any]]:
    return [
        {
            "coin": "USD",
            "cost": 0.12,
            "rate": 0.00001,
            "size": 12000.0,
            "time": "2023-01-01T00:00:00+00:00",
        },
    ]
