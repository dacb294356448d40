"""Configuration management with YAML loading and Pydantic validation."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel

from etfcalc.fees.schedule import Regime


class AppConfig(BaseModel):
    """Master application configuration.

    Fee rates are fixed per regime and deliberately absent here; see
    ``etfcalc.fees.schedule``.
    """

    default_regime: Regime = Regime.INTRADAY
    currency_symbol: str = "₹"
    log_level: str = "INFO"
    log_dir: str = "./logs"


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML file and return as dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load config from YAML, supporting 'inherits' for base config merging.

    A missing path yields the defaults.
    """
    if config_path is None:
        return AppConfig()

    path = Path(config_path)
    raw = load_yaml(path)

    # Handle inheritance; keys in this file override the base
    if "inherits" in raw:
        base_path = path.parent / raw.pop("inherits")
        base = load_yaml(base_path)
        merged = {**base, **raw}
    else:
        merged = raw

    return AppConfig(**merged)

