"""Round-trip cost and tax engine for ETF trades.

Given a buy price, sell price and quantity under one of two regimes
(intraday or delivery), computes brokerage, statutory charges, GST,
income tax and the resulting net profit.

Nothing is rounded here: every derived value is chained from unrounded
intermediates. Use ``CostBreakdown.summary()`` for two-decimal display values.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, fields
from typing import Any

import numpy as np

from etfcalc.core.logging_utils import get_logger
from etfcalc.core.utils import round_money, safe_div
from etfcalc.fees.errors import (
    InvalidInputError,
    MissingFieldError,
    NonPositiveError,
    NotANumberError,
)
from etfcalc.fees.schedule import FeeSchedule, Regime, schedule_for

logger = get_logger("fees.calculator")

FIELD_NAMES = ("buy_price", "sell_price", "quantity")

# ASCII decimal, optional sign and exponent
_DECIMAL = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


@dataclass(frozen=True)
class TradeInput:
    """A validated round trip: finite, strictly positive prices and quantity."""

    buy_price: float
    sell_price: float
    quantity: float
    regime: Regime = Regime.INTRADAY

    def __post_init__(self) -> None:
        object.__setattr__(self, "regime", Regime.parse(self.regime))
        values = dict(zip(FIELD_NAMES, (self.buy_price, self.sell_price, self.quantity)))

        bad = [
            name for name, v in values.items()
            if isinstance(v, bool) or not isinstance(v, (int, float)) or not np.isfinite(v)
        ]
        if bad:
            raise NotANumberError(bad)

        bad = [name for name, v in values.items() if v <= 0]
        if bad:
            raise NonPositiveError(bad)

        for name, v in values.items():
            object.__setattr__(self, name, float(v))


@dataclass(frozen=True)
class CostBreakdown:
    """Full cost/tax breakdown of one round trip. All values unrounded."""

    regime: Regime
    buy_price: float
    sell_price: float
    quantity: float

    buy_amount: float
    sell_amount: float
    gross_profit: float

    buy_brokerage: float
    sell_brokerage: float
    total_brokerage: float
    stt: float
    stamp_duty: float
    exchange_and_reg_fees: float
    dp_charges: float
    gst: float
    sebi_fee: float  # GST base only, not in total_costs

    total_costs: float
    net_profit_after_costs: float
    income_tax_rate: float
    income_tax: float
    net_profit_after_tax: float
    profit_margin: float
    cost_percentage: float

    @property
    def breakeven_sell_price(self) -> float:
        """Sell price per unit that recovers the current total costs."""
        return self.buy_price + self.total_costs / self.quantity

    def summary(self, decimals: int = 2) -> dict[str, Any]:
        """Display values, each field rounded independently (half-up)."""
        out: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name == "regime":
                out[f.name] = value.value
            elif f.name in ("income_tax_rate", "quantity"):
                out[f.name] = value
            else:
                out[f.name] = round_money(value, decimals)
        out["breakeven_sell_price"] = round_money(self.breakeven_sell_price, decimals)
        return out

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["regime"] = self.regime.value
        return d


def _brokerage(amount: float, schedule: FeeSchedule) -> float:
    return float(np.clip(amount * schedule.brokerage_rate, schedule.brokerage_min, schedule.brokerage_max))


def compute(trade: TradeInput) -> CostBreakdown:
    """Compute the cost and tax breakdown of a validated round trip.

    Raises NotANumberError when the trade value overflows a float.
    """
    schedule = schedule_for(trade.regime)

    buy_amount = trade.buy_price * trade.quantity
    sell_amount = trade.sell_price * trade.quantity
    turnover = buy_amount + sell_amount
    if not np.isfinite(turnover):
        raise NotANumberError(FIELD_NAMES, "trade value overflows")
    gross_profit = sell_amount - buy_amount

    buy_brokerage = _brokerage(buy_amount, schedule)
    sell_brokerage = _brokerage(sell_amount, schedule)
    total_brokerage = buy_brokerage + sell_brokerage

    stt = sell_amount * schedule.stt_sell_rate + turnover * schedule.stt_turnover_rate
    stamp_duty = buy_amount * schedule.stamp_duty_rate
    exchange_and_reg_fees = turnover * schedule.exchange_rate
    sebi_fee = turnover * schedule.sebi_rate
    dp_charges = schedule.dp_charge

    gst_base = 0.0
    if schedule.gst_on_brokerage:
        gst_base += total_brokerage
    if schedule.gst_on_dp:
        gst_base += dp_charges
    if schedule.gst_on_exchange:
        gst_base += exchange_and_reg_fees
    if schedule.gst_on_sebi:
        gst_base += sebi_fee
    gst = gst_base * schedule.gst_rate

    total_costs = total_brokerage + stt + stamp_duty + exchange_and_reg_fees + dp_charges + gst
    net_profit_after_costs = gross_profit - total_costs

    # No tax credit on a loss
    income_tax = max(0.0, net_profit_after_costs * schedule.income_tax_rate)
    net_profit_after_tax = net_profit_after_costs - income_tax

    nan = float("nan")
    breakdown = CostBreakdown(
        regime=trade.regime,
        buy_price=trade.buy_price,
        sell_price=trade.sell_price,
        quantity=trade.quantity,
        buy_amount=buy_amount,
        sell_amount=sell_amount,
        gross_profit=gross_profit,
        buy_brokerage=buy_brokerage,
        sell_brokerage=sell_brokerage,
        total_brokerage=total_brokerage,
        stt=stt,
        stamp_duty=stamp_duty,
        exchange_and_reg_fees=exchange_and_reg_fees,
        dp_charges=dp_charges,
        gst=gst,
        sebi_fee=sebi_fee,
        total_costs=total_costs,
        net_profit_after_costs=net_profit_after_costs,
        income_tax_rate=schedule.income_tax_rate,
        income_tax=income_tax,
        net_profit_after_tax=net_profit_after_tax,
        profit_margin=safe_div(gross_profit, buy_amount, default=nan) * 100,
        cost_percentage=safe_div(total_costs, buy_amount, default=nan) * 100,
    )
    logger.debug(
        "%s: buy=%.4f sell=%.4f qty=%.4f -> costs=%.4f net_after_tax=%.4f",
        trade.regime.value, trade.buy_price, trade.sell_price, trade.quantity,
        total_costs, net_profit_after_tax,
    )
    return breakdown


def _is_missing(raw: Any) -> bool:
    return raw is None or (isinstance(raw, str) and raw == "")


def _parse_number(raw: Any) -> float | None:
    """Parse one raw field; None when it is not a finite number."""
    if isinstance(raw, bool):
        return None
    try:
        if isinstance(raw, str):
            raw = raw.strip()
            if not _DECIMAL.fullmatch(raw):
                return None
        value = float(raw)
    except (TypeError, ValueError):
        return None
    return value if np.isfinite(value) else None


def parse_trade_input(
    buy_price: Any,
    sell_price: Any,
    quantity: Any,
    regime: Regime | str = Regime.INTRADAY,
) -> TradeInput:
    """Validate raw field values (text or numbers) into a TradeInput.

    Rules run in order across all three fields; the first failing rule wins:
    missing -> MissingFieldError, unparseable or non-finite -> NotANumberError,
    zero or negative -> NonPositiveError.
    """
    raw = dict(zip(FIELD_NAMES, (buy_price, sell_price, quantity)))

    missing = [name for name, v in raw.items() if _is_missing(v)]
    if missing:
        raise MissingFieldError(missing)

    parsed = {name: _parse_number(v) for name, v in raw.items()}
    bad = [name for name, v in parsed.items() if v is None]
    if bad:
        raise NotANumberError(bad)

    bad = [name for name, v in parsed.items() if v <= 0]
    if bad:
        raise NonPositiveError(bad)

    return TradeInput(regime=Regime.parse(regime), **parsed)


@dataclass(frozen=True)
class CalculationResult:
    """Either a breakdown or the validation error that prevented one."""

    breakdown: CostBreakdown | None = None
    error: InvalidInputError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def message(self) -> str:
        return self.error.user_message if self.error is not None else ""


def calculate(
    regime: Regime | str,
    buy_price: Any,
    sell_price: Any,
    quantity: Any,
) -> CalculationResult:
    """Validate and compute, returning failures as values instead of raising."""
    try:
        breakdown = compute(parse_trade_input(buy_price, sell_price, quantity, regime))
    except InvalidInputError as e:
        logger.debug("Rejected input: %s", e)
        return CalculationResult(error=e)
    return CalculationResult(breakdown=breakdown)
