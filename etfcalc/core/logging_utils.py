"""Logging with Rich console and rotating file handlers."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)

APP_NAME = "etf-calc"

_LOG_FORMAT = "%(asctime)s | %(name)-25s | %(levelname)-8s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    level: str = "INFO",
    log_dir: str | Path | None = "./logs",
    app_name: str = APP_NAME,
) -> logging.Logger:
    """Configure the app logger with Rich console + rotating file handlers.

    Passing ``log_dir=None`` skips the file handler.
    """
    root = logging.getLogger(app_name)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    if root.handlers:
        return root

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(logging.DEBUG)
    root.addHandler(rich_handler)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir / f"{app_name}.log",
            maxBytes=1024 * 1024,  # 1 MB
            backupCount=3,
        )
        file_handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
        file_handler.setLevel(logging.DEBUG)
        root.addHandler(file_handler)

    return root


def get_logger(name: str) -> logging.Logger:
    """Get a child logger under the etf-calc namespace."""
    return logging.getLogger(f"{APP_NAME}.{name}")
