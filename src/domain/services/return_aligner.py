# src/domain/services/return_aligner.py

from __future__ import annotations

import logging
import warnings
from typing import Iterable, List

import numpy as np
import pandas as pd

from src.domain.errors import JoinMismatch
from src.entities.merged_record import MergedRecord
from src.entities.price_point import PricePoint
from src.entities.sentiment_score import SentimentScore

logger = logging.getLogger(__name__)


class ReturnAligner:
    """
    Joins daily prices with daily sentiment and derives log returns.

    - left join on the price days (every trading day survives)
    - exact calendar-date equality as join key
    - log_return_t = ln(close_t / close_{t-1}); undefined for the first day
    """

    @staticmethod
    def _prices_to_df(prices: Iterable[PricePoint]) -> pd.DataFrame:
        df = pd.DataFrame(
            [{"day": p.day, "close": p.close} for p in prices],
            columns=["day", "close"],
        )
        if df["day"].duplicated().any():
            raise ValueError("Price series must be unique per day")
        df["close"] = df["close"].astype("float64")
        return df.sort_values("day").reset_index(drop=True)

    @staticmethod
    def _sentiment_to_df(sentiments: Iterable[SentimentScore]) -> pd.DataFrame:
        df = pd.DataFrame(
            [{"day": s.day, "score": s.score} for s in sentiments],
            columns=["day", "score"],
        )
        if df["day"].duplicated().any():
            raise ValueError("Sentiment series must be unique per day")
        df["score"] = df["score"].astype("Int64")
        return df

    def merge_frame(
        self,
        prices: Iterable[PricePoint],
        sentiments: Iterable[SentimentScore],
    ) -> pd.DataFrame:
        price_df = self._prices_to_df(prices)
        sentiment_df = self._sentiment_to_df(sentiments)

        if not price_df.empty and not sentiment_df.empty:
            shared = set(price_df["day"]) & set(sentiment_df["day"])
            if not shared:
                logger.warning(
                    "Price and sentiment series share no dates",
                    extra={
                        "price_days": len(price_df),
                        "sentiment_days": len(sentiment_df),
                    },
                )
                warnings.warn(
                    "Price and sentiment series share no dates; all scores will be null",
                    JoinMismatch,
                    stacklevel=2,
                )

        merged = price_df.merge(sentiment_df, on="day", how="left", validate="one_to_one")
        merged["log_return"] = np.log(merged["close"] / merged["close"].shift(1))
        return merged

    def align(
        self,
        prices: Iterable[PricePoint],
        sentiments: Iterable[SentimentScore],
    ) -> List[MergedRecord]:
        merged = self.merge_frame(prices, sentiments)

        records = [
            MergedRecord(
                day=row.day,
                close=float(row.close),
                score=None if pd.isna(row.score) else int(row.score),
                log_return=None if pd.isna(row.log_return) else float(row.log_return),
            )
            for row in merged.itertuples(index=False)
        ]

        logger.info(
            "Prices aligned with sentiment",
            extra={
                "rows": len(records),
                "with_sentiment": sum(1 for r in records if r.has_sentiment),
            },
        )
        return records

    @staticmethod
    def clean_returns(records: Iterable[MergedRecord]) -> pd.Series:
        """
        Return series ready for volatility estimation, indexed by day.

        Only the leading undefined return is expected here; anything else
        missing means the input was not produced by align().
        """
        records = list(records)
        series = pd.Series(
            [r.log_return for r in records],
            index=pd.DatetimeIndex([pd.Timestamp(r.day) for r in records], name="day"),
            name="log_return",
            dtype="float64",
        )
        cleaned = series.dropna()
        if len(series) - len(cleaned) > 1:
            raise ValueError("Only the first record may have an undefined return")
        return cleaned
