"""Side-by-side comparison of the same trade under both regimes."""

from __future__ import annotations

from typing import Any

import pandas as pd

from etfcalc.fees.calculator import compute, parse_trade_input
from etfcalc.fees.schedule import Regime

# Rows shown in the comparison, in display order
COMPARE_FIELDS = [
    "buy_amount",
    "sell_amount",
    "gross_profit",
    "total_brokerage",
    "stt",
    "stamp_duty",
    "exchange_and_reg_fees",
    "dp_charges",
    "gst",
    "total_costs",
    "cost_percentage",
    "net_profit_after_costs",
    "income_tax_rate",
    "income_tax",
    "net_profit_after_tax",
    "breakeven_sell_price",
]


def compare_regimes(buy_price: Any, sell_price: Any, quantity: Any) -> pd.DataFrame:
    """Return rounded breakdowns for every regime, one column per regime.

    Raises the same validation errors as ``parse_trade_input``.
    """
    columns = {}
    for regime in Regime:
        trade = parse_trade_input(buy_price, sell_price, quantity, regime)
        summary = compute(trade).summary()
        columns[regime.value] = [summary[f] for f in COMPARE_FIELDS]

    df = pd.DataFrame(columns, index=COMPARE_FIELDS)
    df.index.name = "field"
    return df


def best_regime(df: pd.DataFrame) -> Regime:
    """Regime leaving the most profit after tax in a comparison frame."""
    return Regime(df.loc["net_profit_after_tax"].idxmax())
