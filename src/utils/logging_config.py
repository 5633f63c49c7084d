# src/utils/logging_config.py
from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
NOISY_LOGGERS = ("yfinance", "urllib3", "peewee", "matplotlib", "PIL", "nltk")


class ExtraFormatter(logging.Formatter):
    """Appends `extra={...}` fields to the message as sorted key=value pairs."""

    _standard_keys = frozenset(
        vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
    ) | {"message", "asctime", "taskName"}

    def format(self, record: logging.LogRecord) -> str:
        rendered = super().format(record)
        fields = sorted(
            (k, v) for k, v in vars(record).items() if k not in self._standard_keys
        )
        if not fields:
            return rendered
        return rendered + " | " + " ".join(f"{k}={v}" for k, v in fields)


def _log_dir() -> Path:
    path = Path(os.getenv("LOG_DIR", "logs"))
    path.mkdir(parents=True, exist_ok=True)
    return path


def _with_formatter(handler: logging.Handler, formatter: logging.Formatter) -> logging.Handler:
    handler.setFormatter(formatter)
    return handler


def setup_logging(level: int = logging.INFO, log_file: str = "sentiment_volatility.log") -> None:
    """
    Project logging, to stdout and $LOG_DIR/<log_file>:
    2026-01-14 09:49:59 | INFO | module.name | message | key=value
    """
    root = logging.getLogger()
    root.setLevel(level)

    # calling twice only updates the level
    if root.handlers:
        return

    formatter = ExtraFormatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    root.addHandler(_with_formatter(logging.StreamHandler(sys.stdout), formatter))
    root.addHandler(
        _with_formatter(
            logging.FileHandler(_log_dir() / log_file, encoding="utf-8"), formatter
        )
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
