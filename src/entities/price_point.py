# src/entities/price_point.py

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class PricePoint:
    """Adjusted close of one symbol on one trading day."""

    day: date
    close: float

    def __post_init__(self) -> None:
        if isinstance(self.day, datetime) or not isinstance(self.day, date):
            raise TypeError("day must be a datetime.date instance (no time component)")

        if self.close <= 0:
            raise ValueError("Close price must be positive")
