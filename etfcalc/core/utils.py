"""Common utility functions."""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def safe_div(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Division with zero-safe fallback."""
    if denominator == 0:
        return default
    return numerator / denominator


def round_money(value: float, decimals: int = 2) -> float:
    """Round half-up on the exact binary value of ``value``.

    Mirrors JavaScript's ``toFixed``: 2.625 -> 2.63, while a float that is
    really 0.61499... stays 0.61. Non-finite values pass through.
    """
    if not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-decimals)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))
