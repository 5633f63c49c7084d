# src/entities/merged_record.py

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class MergedRecord:
    """
    One trading day after joining prices with daily sentiment.

    - score is None when no headlines exist for the day (left join)
    - log_return is None only for the first chronological row
    """

    day: date
    close: float
    score: Optional[int]
    log_return: Optional[float]

    def __post_init__(self) -> None:
        if isinstance(self.day, datetime) or not isinstance(self.day, date):
            raise TypeError("day must be a datetime.date instance")

        if self.close <= 0:
            raise ValueError("Close price must be positive")

        if self.log_return is not None and not math.isfinite(self.log_return):
            raise ValueError("log_return must be finite when provided")

    @property
    def has_sentiment(self) -> bool:
        return self.score is not None
