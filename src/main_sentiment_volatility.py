from __future__ import annotations

import argparse
import logging

from dotenv import load_dotenv

from src.adapters.arch_garch_volatility_model import ArchGarchVolatilityModel
from src.adapters.csv_headline_repository import CsvHeadlineRepository
from src.adapters.lexicon_providers import CsvLexiconProvider, NltkOpinionLexiconProvider
from src.adapters.matplotlib_volatility_plotter import MatplotlibVolatilityPlotter
from src.adapters.yfinance_price_fetcher import YFinancePriceFetcher
from src.domain.services.return_aligner import ReturnAligner
from src.domain.services.sentiment_scorer import SentimentScorer
from src.domain.services.volatility_aligner import AlignmentMode, VolatilityAligner
from src.domain.time.trading_calendar import parse_iso_date
from src.interfaces.lexicon_provider import LexiconProvider
from src.use_cases.sentiment_volatility_analysis_use_case import (
    SentimentVolatilityAnalysisUseCase,
)
from src.utils.analysis_config import AnalysisConfig, load_analysis_config
from src.utils.logging_config import setup_logging

logger = logging.getLogger(__name__)
load_dotenv()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Relate daily headline sentiment to GARCH volatility for one asset"
    )
    parser.add_argument("--config", default=None, help="Path to YAML config (default: config/sentiment_volatility.yaml)")
    parser.add_argument("--asset", default=None, help="Asset symbol override (e.g. ^DJI)")
    parser.add_argument("--start", default=None, help="Start date override (YYYY-MM-DD)")
    parser.add_argument("--end", default=None, help="End date override (YYYY-MM-DD, default: today)")
    parser.add_argument(
        "--alignment",
        choices=[m.value for m in AlignmentMode],
        default=None,
        help="How conditional volatility is attached to sentiment days",
    )
    return parser.parse_args()


def build_lexicon_provider(config: AnalysisConfig) -> LexiconProvider:
    if config.lexicon.source == "csv":
        return CsvLexiconProvider(config.lexicon.path)
    return NltkOpinionLexiconProvider()


def main() -> None:
    setup_logging(logging.INFO)

    args = parse_args()
    config = load_analysis_config(args.config).with_overrides(
        symbol=args.asset,
        start_date=parse_iso_date(args.start) if args.start else None,
        end_date=parse_iso_date(args.end) if args.end else None,
        alignment_mode=args.alignment,
    )

    logger.info(
        "Starting sentiment volatility pipeline",
        extra={
            "asset": config.asset.symbol,
            "start": config.asset.start_date.isoformat(),
            "end": config.asset.end_date.isoformat() if config.asset.end_date else "today",
            "headlines": str(config.headlines.path),
            "alignment": config.alignment.mode.value,
        },
    )

    lexicon = build_lexicon_provider(config).load()

    use_case = SentimentVolatilityAnalysisUseCase(
        price_fetcher=YFinancePriceFetcher(),
        headline_repository=CsvHeadlineRepository(
            path=config.headlines.path,
            date_column=config.headlines.date_column,
            text_column=config.headlines.text_column,
            delimiter=config.headlines.delimiter,
        ),
        sentiment_scorer=SentimentScorer(lexicon),
        return_aligner=ReturnAligner(),
        volatility_model=ArchGarchVolatilityModel(
            mean_lags=config.model.mean_lags,
            p=config.model.p,
            q=config.model.q,
            distribution=config.model.distribution,
            scale=config.model.scale,
            min_observations=config.model.min_observations,
        ),
        volatility_aligner=VolatilityAligner(
            mode=config.alignment.mode,
            fail_on_drift=config.alignment.fail_on_drift,
        ),
        plotter=MatplotlibVolatilityPlotter(
            output_dir=config.plots.output_dir,
            sentiment_divisor=config.plots.sentiment_divisor,
            acf_lags=config.plots.acf_lags,
        ),
        var_level=config.plots.var_level,
    )

    try:
        result = use_case.execute(
            symbol=config.asset.symbol,
            start=config.asset.start_date,
            end=config.asset.end_date,
        )
    except Exception:
        logger.exception("Sentiment volatility pipeline failed", extra={"asset": config.asset.symbol})
        raise

    logger.info(
        "Sentiment volatility pipeline finished",
        extra={
            "asset": result.symbol,
            "prices": result.prices,
            "sentiment_days": result.sentiment_days,
            "overlay_rows": len(result.overlay),
            "misaligned_rows": result.alignment.misaligned_rows,
            "plots": len(result.plots),
        },
    )


if __name__ == "__main__":
    main()
