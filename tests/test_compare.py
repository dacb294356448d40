"""Tests for regime comparison and the calculator session."""

from __future__ import annotations

import pytest

from etfcalc.fees.compare import COMPARE_FIELDS, best_regime, compare_regimes
from etfcalc.fees.errors import MissingFieldError, NonPositiveError
from etfcalc.fees.schedule import Regime
from etfcalc.fees.session import CalculatorSession


class TestCompareRegimes:
    def test_shape(self, round_trip):
        df = compare_regimes(*round_trip)
        assert list(df.columns) == ["intraday", "delivery"]
        assert list(df.index) == COMPARE_FIELDS

    def test_values_match_breakdowns(self, round_trip, intraday, delivery):
        df = compare_regimes(*round_trip)
        assert df.loc["total_costs", "intraday"] == intraday.summary()["total_costs"]
        assert df.loc["total_costs", "delivery"] == delivery.summary()["total_costs"]
        assert df.loc["income_tax_rate", "delivery"] == 0.20

    def test_best_regime(self, round_trip):
        # Lower costs and 20% tax leave delivery ahead
        assert best_regime(compare_regimes(*round_trip)) is Regime.DELIVERY

    def test_invalid_input_propagates(self):
        with pytest.raises(NonPositiveError):
            compare_regimes("100", "105", "0")


class TestCalculatorSession:
    def test_calculate_stores_result(self):
        session = CalculatorSession(buy_price="100", sell_price="105", quantity="100")
        result = session.calculate()
        assert result.ok
        assert session.result is result
        assert session.result.breakdown.regime is Regime.INTRADAY

    def test_failed_calculation_has_no_breakdown(self):
        session = CalculatorSession(buy_price="100", sell_price="105")
        result = session.calculate()
        assert isinstance(result.error, MissingFieldError)
        assert result.breakdown is None

    def test_recalculate_replaces_result(self):
        session = CalculatorSession(buy_price="100", sell_price="105", quantity="100")
        first = session.calculate()
        session.regime = Regime.DELIVERY
        second = session.calculate()
        assert session.result is second
        assert first.breakdown.regime is Regime.INTRADAY
        assert second.breakdown.regime is Regime.DELIVERY

    def test_reset(self):
        session = CalculatorSession(
            regime=Regime.DELIVERY, buy_price="100", sell_price="105", quantity="100"
        )
        session.calculate()
        session.reset()
        assert session.result is None
        assert (session.buy_price, session.sell_price, session.quantity) == ("", "", "")
        assert session.regime is Regime.DELIVERY
