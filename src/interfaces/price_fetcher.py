# src/interfaces/price_fetcher.py
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from src.entities.price_point import PricePoint


class PriceFetcher(ABC):
    @abstractmethod
    def fetch_prices(
        self, symbol: str, start: date, end: date | None = None
    ) -> list[PricePoint]:
        """
        Daily adjusted closes for `symbol` in [start, end], ordered by day.
        end=None means today. Raises DataUnavailable when nothing is returned.
        """
        ...
