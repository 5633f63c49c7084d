# src/adapters/yfinance_price_fetcher.py

from __future__ import annotations

import logging
from datetime import date, timedelta

import yfinance as yf

from src.domain.errors import DataUnavailable
from src.entities.price_point import PricePoint
from src.interfaces.price_fetcher import PriceFetcher

logger = logging.getLogger(__name__)

PRICE_COLUMN = "Adj Close"


class YFinancePriceFetcher(PriceFetcher):
    """
    Adapter that downloads daily adjusted closes via yfinance.

    Contract:
    - start/end are inclusive calendar dates (yfinance `end` is exclusive,
      so one day is added here)
    - single attempt: any provider/network error surfaces as DataUnavailable
    - PricePoint.day is the exchange-local trading date reported by yfinance
    """

    def __init__(self, timeout: int = 10) -> None:
        self.timeout = timeout

    def fetch_prices(
        self, symbol: str, start: date, end: date | None = None
    ) -> list[PricePoint]:
        end = end or date.today()
        if start > end:
            raise ValueError("start must be <= end")

        logger.info(
            "Fetching prices",
            extra={"symbol": symbol, "start": start.isoformat(), "end": end.isoformat()},
        )

        try:
            df = yf.download(
                symbol,
                start=start.strftime("%Y-%m-%d"),
                end=(end + timedelta(days=1)).strftime("%Y-%m-%d"),
                interval="1d",
                progress=False,
                timeout=self.timeout,
                auto_adjust=False,
            )
        except Exception as e:
            logger.error(
                "Price download failed",
                extra={"symbol": symbol, "error": str(e)},
            )
            raise DataUnavailable(f"Failed to fetch prices for {symbol}: {e}") from e

        if df is None or df.empty:
            raise DataUnavailable(f"No price data returned for {symbol}")

        # Normalize MultiIndex (yfinance returns (field, ticker) columns)
        if getattr(df.columns, "nlevels", 1) > 1:
            df.columns = df.columns.get_level_values(0)

        if PRICE_COLUMN not in df.columns:
            raise DataUnavailable(
                f"Missing '{PRICE_COLUMN}' column for {symbol}: {sorted(map(str, df.columns))}"
            )

        closes = df[PRICE_COLUMN].rename("close").dropna()
        if closes.empty:
            raise DataUnavailable(f"No adjusted close values returned for {symbol}")

        by_day: dict[date, float] = {}
        for idx, value in closes.items():
            # exchange-local date; the last quote wins when a day repeats
            ts = idx.tz_localize(None) if idx.tzinfo is not None else idx
            by_day[ts.date()] = float(value)

        prices = [PricePoint(day=day, close=close) for day, close in sorted(by_day.items())]

        logger.info(
            "Prices fetched successfully",
            extra={"symbol": symbol, "count": len(prices)},
        )
        return prices
