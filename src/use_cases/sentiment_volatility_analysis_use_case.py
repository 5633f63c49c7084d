from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

from src.domain.errors import EstimationFailure
from src.domain.services.return_aligner import ReturnAligner
from src.domain.services.risk_diagnostics import RiskDiagnostics
from src.domain.services.sentiment_scorer import SentimentScorer
from src.domain.services.volatility_aligner import AlignmentReport, VolatilityAligner
from src.entities.merged_record import MergedRecord
from src.entities.sentiment_score import SentimentScore
from src.entities.sentiment_volatility_record import SentimentVolatilityRecord
from src.entities.volatility_estimate import VolatilityEstimate
from src.interfaces.headline_repository import HeadlineRepository
from src.interfaces.price_fetcher import PriceFetcher
from src.interfaces.volatility_model import VolatilityModel
from src.interfaces.volatility_plotter import VolatilityPlotter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SentimentVolatilityAnalysisResult:
    symbol: str
    start: date
    end: date | None
    prices: int
    headlines: int
    sentiment_days: int
    merged: list[MergedRecord]
    sentiment: list[SentimentScore]
    estimates: list[VolatilityEstimate]
    overlay: list[SentimentVolatilityRecord]
    alignment: AlignmentReport
    params: dict[str, float]
    var_exceedances: int
    plots: list[Path] = field(default_factory=list)


class SentimentVolatilityAnalysisUseCase:
    """
    Relates daily headline sentiment to GARCH volatility for one symbol.

    Flow:
      PriceFetcher -> PricePoint
      HeadlineRepository -> Headline -> SentimentScorer -> SentimentScore
      ReturnAligner -> MergedRecord (left join, log returns)
      VolatilityModel -> VolatilityFit (on cleaned returns)
      VolatilityAligner -> SentimentVolatilityRecord (sentiment days only)
      RiskDiagnostics + VolatilityPlotter -> PNG files

    No stage catches errors from another; any failure aborts the run.
    """

    def __init__(
        self,
        price_fetcher: PriceFetcher,
        headline_repository: HeadlineRepository,
        sentiment_scorer: SentimentScorer,
        return_aligner: ReturnAligner,
        volatility_model: VolatilityModel,
        volatility_aligner: VolatilityAligner,
        plotter: VolatilityPlotter | None = None,
        var_level: float = 0.01,
    ) -> None:
        self.price_fetcher = price_fetcher
        self.headline_repository = headline_repository
        self.sentiment_scorer = sentiment_scorer
        self.return_aligner = return_aligner
        self.volatility_model = volatility_model
        self.volatility_aligner = volatility_aligner
        self.plotter = plotter
        self.var_level = var_level

    def execute(
        self,
        symbol: str,
        start: date,
        end: date | None = None,
    ) -> SentimentVolatilityAnalysisResult:
        if end is not None and start > end:
            raise ValueError("start must be <= end")

        prices = self.price_fetcher.fetch_prices(symbol, start, end)
        headlines = self.headline_repository.load_headlines()
        sentiment = self.sentiment_scorer.score(headlines)

        merged = self.return_aligner.align(prices, sentiment)
        returns = self.return_aligner.clean_returns(merged)

        fit = self.volatility_model.fit(returns)
        if fit.observations != len(returns):
            raise EstimationFailure(
                f"Estimator returned {fit.observations} values for {len(returns)} returns"
            )
        estimates = fit.estimates()

        overlay, alignment = self.volatility_aligner.attach(merged, estimates)

        exceedances = RiskDiagnostics.var_exceedances(fit, self.var_level)

        plots: list[Path] = []
        if self.plotter is not None:
            var_band = RiskDiagnostics.value_at_risk(fit, self.var_level)
            news_impact = None
            if RiskDiagnostics.has_news_impact_curve(fit.params):
                news_impact = RiskDiagnostics.news_impact_curve(fit.params)
            else:
                logger.warning(
                    "News impact curve skipped for non-stationary or higher-order fit",
                    extra={
                        "symbol": symbol,
                        "persistence": RiskDiagnostics.persistence(fit.params),
                    },
                )
            plots = self.plotter.render(symbol, fit, var_band, news_impact, overlay)

        logger.info(
            "Sentiment volatility analysis completed",
            extra={
                "symbol": symbol,
                "prices": len(prices),
                "headlines": len(headlines),
                "sentiment_days": len(sentiment),
                "returns": len(returns),
                "overlay_rows": len(overlay),
                "misaligned_rows": alignment.misaligned_rows,
                "var_exceedances": exceedances,
                "plots": len(plots),
            },
        )

        return SentimentVolatilityAnalysisResult(
            symbol=symbol,
            start=start,
            end=end,
            prices=len(prices),
            headlines=len(headlines),
            sentiment_days=len(sentiment),
            merged=merged,
            sentiment=sentiment,
            estimates=estimates,
            overlay=overlay,
            alignment=alignment,
            params=dict(fit.params),
            var_exceedances=exceedances,
            plots=plots,
        )
