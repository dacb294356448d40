"""Shared test configuration and fixtures."""

from __future__ import annotations

import pytest

from etfcalc.fees.calculator import CostBreakdown, compute, parse_trade_input
from etfcalc.fees.schedule import Regime


@pytest.fixture
def round_trip() -> tuple[str, str, str]:
    """Buy 100 units at 100, sell at 105, as typed into a form."""
    return "100", "105", "100"


@pytest.fixture
def intraday(round_trip) -> CostBreakdown:
    return compute(parse_trade_input(*round_trip, regime=Regime.INTRADAY))


@pytest.fixture
def delivery(round_trip) -> CostBreakdown:
    return compute(parse_trade_input(*round_trip, regime=Regime.DELIVERY))
