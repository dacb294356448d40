"""Caller-owned calculator form state."""

from __future__ import annotations

from dataclasses import dataclass

from etfcalc.fees.calculator import CalculationResult, calculate
from etfcalc.fees.schedule import Regime


@dataclass
class CalculatorSession:
    """The three raw input fields, the selected regime and the last result.

    ``calculate()`` replaces the last result; ``reset()`` clears the fields and
    discards it. The regime selection survives a reset.
    """

    regime: Regime = Regime.INTRADAY
    buy_price: str = ""
    sell_price: str = ""
    quantity: str = ""
    result: CalculationResult | None = None

    def calculate(self) -> CalculationResult:
        self.result = calculate(self.regime, self.buy_price, self.sell_price, self.quantity)
        return self.result

    def reset(self) -> None:
        self.buy_price = ""
        self.sell_price = ""
        self.quantity = ""
        self.result = None
