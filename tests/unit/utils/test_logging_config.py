# tests/unit/utils/test_logging_config.py

import logging

from src.utils import logging_config
from src.utils.logging_config import ExtraFormatter, setup_logging


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("src.test", logging.INFO, __file__, 1, "Prices fetched", (), None)
    for k, v in extra.items():
        setattr(record, k, v)
    return record


def test_extra_formatter_appends_sorted_extras():
    formatter = ExtraFormatter(fmt="%(levelname)s | %(message)s")

    out = formatter.format(_record(symbol="^DJI", count=3))

    assert out == "INFO | Prices fetched | count=3 symbol=^DJI"


def test_extra_formatter_without_extras_is_plain():
    formatter = ExtraFormatter(fmt="%(message)s")

    assert formatter.format(_record()) == "Prices fetched"


def test_setup_logging_writes_to_log_dir_and_is_idempotent(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []

    try:
        setup_logging(logging.INFO)
        handler_count = len(root.handlers)
        setup_logging(logging.DEBUG)

        assert handler_count == 2
        assert len(root.handlers) == 2
        assert root.level == logging.DEBUG
        assert (tmp_path / "logs" / "sentiment_volatility.log").exists()
        for name in logging_config.NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
    finally:
        for h in root.handlers:
            h.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)
