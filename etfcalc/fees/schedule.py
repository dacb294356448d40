"""Fixed fee schedules for NSE equity/ETF trades.

Two regimes are supported. Rates are statutory/broker approximations and are
not user-configurable.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Regime(str, Enum):
    INTRADAY = "intraday"
    DELIVERY = "delivery"

    @classmethod
    def parse(cls, value: Regime | str) -> Regime:
        """Accept a Regime or its (case-insensitive) string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            valid = ", ".join(r.value for r in cls)
            raise ValueError(f"Unknown regime {value!r} (expected one of: {valid})") from None


class FeeSchedule(BaseModel):
    """Rates applied to one round trip.

    Brokerage is charged per leg as ``clamp(amount * brokerage_rate,
    brokerage_min, brokerage_max)``. The ``gst_on_*`` flags select which
    charges form the GST base.
    """

    model_config = ConfigDict(frozen=True)

    regime: Regime
    brokerage_rate: float = 0.0
    brokerage_min: float = 0.0
    brokerage_max: float = 0.0
    stt_sell_rate: float = 0.0
    stt_turnover_rate: float = 0.0  # on buy + sell
    stamp_duty_rate: float = 0.0  # buy side only
    exchange_rate: float = 0.0  # on turnover
    sebi_rate: float = 0.0  # on turnover
    dp_charge: float = 0.0  # flat, per round trip
    gst_rate: float = 0.18
    gst_on_brokerage: bool = False
    gst_on_dp: bool = False
    gst_on_exchange: bool = False
    gst_on_sebi: bool = False
    income_tax_rate: float = 0.0

    def rates(self) -> dict[str, float | bool]:
        """Return the schedule as a plain dict, without the regime tag."""
        return self.model_dump(exclude={"regime"})


INTRADAY = FeeSchedule(
    regime=Regime.INTRADAY,
    brokerage_rate=0.001,
    brokerage_min=5.0,
    brokerage_max=20.0,
    stt_sell_rate=0.00025,
    stamp_duty_rate=0.00003,
    # Exchange + SEBI lumped together
    exchange_rate=0.00003,
    dp_charge=18.0,
    gst_on_brokerage=True,
    gst_on_dp=True,
    # Business income, taxed at slab; 30% approximates the top slab
    income_tax_rate=0.30,
)

DELIVERY = FeeSchedule(
    regime=Regime.DELIVERY,
    stt_turnover_rate=0.001,
    stamp_duty_rate=0.00015,
    exchange_rate=0.0000345,
    # Enters the GST base only, never total costs
    sebi_rate=0.000001,
    dp_charge=15.93,
    gst_on_exchange=True,
    gst_on_sebi=True,
    # STCG
    income_tax_rate=0.20,
)

_SCHEDULES: dict[Regime, FeeSchedule] = {
    Regime.INTRADAY: INTRADAY,
    Regime.DELIVERY: DELIVERY,
}


def schedule_for(regime: Regime | str) -> FeeSchedule:
    """Look up the fee schedule of a regime."""
    return _SCHEDULES[Regime.parse(regime)]
