# src/entities/volatility_estimate.py

import math
from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class VolatilityEstimate:
    day: date
    conditional_std_dev: float

    def __post_init__(self) -> None:
        if isinstance(self.day, datetime) or not isinstance(self.day, date):
            raise TypeError("day must be a datetime.date instance")

        if not math.isfinite(self.conditional_std_dev) or self.conditional_std_dev <= 0:
            raise ValueError("conditional_std_dev must be a positive finite number")
