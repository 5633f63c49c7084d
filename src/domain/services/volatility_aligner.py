# src/domain/services/volatility_aligner.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional

from src.domain.errors import AlignmentDrift
from src.entities.merged_record import MergedRecord
from src.entities.sentiment_volatility_record import SentimentVolatilityRecord
from src.entities.volatility_estimate import VolatilityEstimate

logger = logging.getLogger(__name__)


class AlignmentMode(str, Enum):
    POSITIONAL = "positional"
    DATE = "date"


@dataclass(frozen=True)
class AlignmentReport:
    mode: AlignmentMode
    restricted_rows: int
    estimate_rows: int
    misaligned_rows: int
    unmatched_rows: int

    @property
    def drifted(self) -> bool:
        return self.misaligned_rows > 0


class VolatilityAligner:
    """
    Attaches conditional volatility estimates to the days that have sentiment.

    The estimates come from the return series of *every* trading day (minus
    the first), while the overlay only keeps days with headlines. Two modes:

    - POSITIONAL: the i-th sentiment day receives the i-th estimate, truncated
      to the number of sentiment days. Reproduces the historical notebook
      output; dates generally do not correspond, which is reported as drift.
    - DATE: each sentiment day receives the estimate of the same date.
    """

    def __init__(
        self,
        mode: AlignmentMode | str = AlignmentMode.POSITIONAL,
        fail_on_drift: bool = False,
    ) -> None:
        self.mode = AlignmentMode(mode)
        self.fail_on_drift = fail_on_drift

    @staticmethod
    def restrict_to_sentiment_days(
        records: Iterable[MergedRecord],
    ) -> List[MergedRecord]:
        """Intersection of price days and sentiment days (null scores excluded)."""
        return [r for r in records if r.has_sentiment]

    def attach(
        self,
        records: Iterable[MergedRecord],
        estimates: List[VolatilityEstimate],
    ) -> tuple[List[SentimentVolatilityRecord], AlignmentReport]:
        restricted = self.restrict_to_sentiment_days(records)

        if self.mode is AlignmentMode.POSITIONAL:
            attached, misaligned = self._attach_by_position(restricted, estimates)
        else:
            attached, misaligned = self._attach_by_date(restricted, estimates)

        report = AlignmentReport(
            mode=self.mode,
            restricted_rows=len(restricted),
            estimate_rows=len(estimates),
            misaligned_rows=misaligned,
            unmatched_rows=sum(1 for r in attached if r.conditional_std_dev is None),
        )

        if report.drifted:
            logger.warning(
                "Volatility estimates attached to rows of a different date",
                extra={
                    "mode": self.mode.value,
                    "restricted_rows": report.restricted_rows,
                    "estimate_rows": report.estimate_rows,
                    "misaligned_rows": report.misaligned_rows,
                },
            )
            if self.fail_on_drift:
                raise AlignmentDrift(
                    misaligned_rows=report.misaligned_rows,
                    restricted_rows=report.restricted_rows,
                    estimate_rows=report.estimate_rows,
                )
        else:
            logger.info(
                "Volatility estimates attached",
                extra={
                    "mode": self.mode.value,
                    "rows": report.restricted_rows,
                    "unmatched_rows": report.unmatched_rows,
                },
            )

        return attached, report

    @staticmethod
    def _to_overlay(record: MergedRecord, sigma: Optional[float]) -> SentimentVolatilityRecord:
        return SentimentVolatilityRecord(
            day=record.day,
            close=record.close,
            score=int(record.score),
            log_return=record.log_return,
            conditional_std_dev=sigma,
        )

    def _attach_by_position(
        self,
        restricted: List[MergedRecord],
        estimates: List[VolatilityEstimate],
    ) -> tuple[List[SentimentVolatilityRecord], int]:
        attached: list[SentimentVolatilityRecord] = []
        misaligned = 0

        # truncate-by-count: estimates beyond len(restricted) are discarded
        for i, record in enumerate(restricted):
            if i < len(estimates):
                estimate = estimates[i]
                if estimate.day != record.day:
                    misaligned += 1
                attached.append(self._to_overlay(record, estimate.conditional_std_dev))
            else:
                attached.append(self._to_overlay(record, None))

        return attached, misaligned

    def _attach_by_date(
        self,
        restricted: List[MergedRecord],
        estimates: List[VolatilityEstimate],
    ) -> tuple[List[SentimentVolatilityRecord], int]:
        by_day = {e.day: e.conditional_std_dev for e in estimates}
        attached = [self._to_overlay(r, by_day.get(r.day)) for r in restricted]
        return attached, 0
