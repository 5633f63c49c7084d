# src/entities/sentiment_volatility_record.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class SentimentVolatilityRecord:
    """
    Row of the sentiment/volatility overlay.

    Only days that have sentiment make it here. conditional_std_dev is
    whatever the alignment step attached to the row and may be None when
    no estimate was available for that position/date.
    """

    day: date
    close: float
    score: int
    log_return: Optional[float]
    conditional_std_dev: Optional[float]

    @property
    def abs_return(self) -> Optional[float]:
        return None if self.log_return is None else abs(self.log_return)

    def rescaled_score(self, divisor: float = 100.0) -> float:
        return self.score / divisor
