# src/domain/time/trading_calendar.py
from __future__ import annotations

from datetime import date, datetime, timezone

import pandas as pd


def normalize_to_trading_day(value: date | datetime | pd.Timestamp | str) -> date:
    """
    Normalize a date-like value to a plain calendar date.

    Domain rule:
    - Joins between headlines and prices happen at date granularity.
    - Timezone-aware values are converted to UTC before taking the date.
    - Naive values are taken as already expressed in the trading calendar.
    """
    if isinstance(value, str):
        value = parse_iso_date(value)

    if isinstance(value, pd.Timestamp):
        value = value.to_pydatetime()

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            return value.astimezone(timezone.utc).date()
        return value.date()

    if isinstance(value, date):
        return value

    raise TypeError(f"Cannot normalize {type(value).__name__} to a trading day")


def parse_iso_date(value: str) -> date:
    """
    Parse an ISO date/datetime string into a calendar date.

    Accepts "2016-07-01", "2016-07-01T15:30:00" and "2016-07-01T15:30:00Z".
    """
    v = value.strip()
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"

    if len(v) == 10:
        return date.fromisoformat(v)
    return normalize_to_trading_day(datetime.fromisoformat(v))
