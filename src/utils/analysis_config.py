# src/utils/analysis_config.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from src.domain.services.volatility_aligner import AlignmentMode
from src.domain.time.trading_calendar import parse_iso_date
from src.utils.path_resolver import resolve_data_path

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "sentiment_volatility.yaml"

LEXICON_SOURCES = ("nltk", "csv")


@dataclass(frozen=True)
class AssetConfig:
    symbol: str
    start_date: date
    end_date: date | None = None


@dataclass(frozen=True)
class HeadlineConfig:
    path: Path
    date_column: str = "Date"
    text_column: str = "News"
    delimiter: str = ","


@dataclass(frozen=True)
class LexiconConfig:
    source: str = "nltk"
    path: Path | None = None


@dataclass(frozen=True)
class ModelConfig:
    mean_lags: int = 1
    p: int = 1
    q: int = 1
    distribution: str = "normal"
    scale: float = 100.0
    min_observations: int = 30


@dataclass(frozen=True)
class AlignmentConfig:
    mode: AlignmentMode = AlignmentMode.POSITIONAL
    fail_on_drift: bool = False


@dataclass(frozen=True)
class PlotConfig:
    output_dir: Path = Path("reports") / "plots"
    var_level: float = 0.01
    sentiment_divisor: float = 100.0
    acf_lags: int = 20


@dataclass(frozen=True)
class AnalysisConfig:
    asset: AssetConfig
    headlines: HeadlineConfig
    lexicon: LexiconConfig = field(default_factory=LexiconConfig)
    model: ModelConfig = field(default_factory=ModelConfig)
    alignment: AlignmentConfig = field(default_factory=AlignmentConfig)
    plots: PlotConfig = field(default_factory=PlotConfig)

    def with_overrides(
        self,
        *,
        symbol: str | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        alignment_mode: str | None = None,
    ) -> "AnalysisConfig":
        asset = replace(
            self.asset,
            symbol=symbol.strip().upper() if symbol else self.asset.symbol,
            start_date=start_date or self.asset.start_date,
            end_date=end_date or self.asset.end_date,
        )
        alignment = self.alignment
        if alignment_mode:
            alignment = replace(alignment, mode=AlignmentMode(alignment_mode))

        cfg = replace(self, asset=asset, alignment=alignment)
        _validate(cfg)
        return cfg


def _positive_int(section: str, key: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{section}.{key} must be a positive integer, got {value!r}")
    return value


def _validate(cfg: AnalysisConfig) -> None:
    if not cfg.asset.symbol:
        raise ValueError("asset.symbol is required")
    if cfg.asset.end_date is not None and cfg.asset.start_date > cfg.asset.end_date:
        raise ValueError("asset.start_date must be <= asset.end_date")

    if cfg.lexicon.source not in LEXICON_SOURCES:
        raise ValueError(f"lexicon.source must be one of {LEXICON_SOURCES}, got {cfg.lexicon.source!r}")
    if cfg.lexicon.source == "csv" and cfg.lexicon.path is None:
        raise ValueError("lexicon.path is required when lexicon.source is 'csv'")

    _positive_int("model", "mean_lags", cfg.model.mean_lags)
    _positive_int("model", "p", cfg.model.p)
    _positive_int("model", "q", cfg.model.q)
    _positive_int("model", "min_observations", cfg.model.min_observations)
    if cfg.model.scale <= 0:
        raise ValueError("model.scale must be positive")

    if not 0.0 < cfg.plots.var_level < 1.0:
        raise ValueError("plots.var_level must be in (0, 1)")
    if cfg.plots.sentiment_divisor <= 0:
        raise ValueError("plots.sentiment_divisor must be positive")
    _positive_int("plots", "acf_lags", cfg.plots.acf_lags)


def parse_analysis_config(raw: dict[str, Any]) -> AnalysisConfig:
    asset_raw = raw.get("asset") or {}
    headlines_raw = raw.get("headlines") or {}
    lexicon_raw = raw.get("lexicon") or {}
    model_raw = raw.get("model") or {}
    alignment_raw = raw.get("alignment") or {}
    plots_raw = raw.get("plots") or {}

    if "symbol" not in asset_raw or "start_date" not in asset_raw:
        raise ValueError("asset.symbol and asset.start_date are required")
    if "path" not in headlines_raw:
        raise ValueError("headlines.path is required")

    end_raw = asset_raw.get("end_date")
    lexicon_path = lexicon_raw.get("path")

    try:
        alignment_mode = AlignmentMode(alignment_raw.get("mode", AlignmentMode.POSITIONAL.value))
    except ValueError as e:
        raise ValueError(f"alignment.mode: {e}") from e

    cfg = AnalysisConfig(
        asset=AssetConfig(
            symbol=str(asset_raw["symbol"]).strip().upper(),
            start_date=parse_iso_date(str(asset_raw["start_date"])),
            end_date=parse_iso_date(str(end_raw)) if end_raw else None,
        ),
        headlines=HeadlineConfig(
            path=resolve_data_path(headlines_raw["path"]),
            date_column=str(headlines_raw.get("date_column", "Date")),
            text_column=str(headlines_raw.get("text_column", "News")),
            delimiter=str(headlines_raw.get("delimiter", ",")),
        ),
        lexicon=LexiconConfig(
            source=str(lexicon_raw.get("source", "nltk")).lower(),
            path=resolve_data_path(lexicon_path) if lexicon_path else None,
        ),
        model=ModelConfig(
            mean_lags=model_raw.get("mean_lags", 1),
            p=model_raw.get("p", 1),
            q=model_raw.get("q", 1),
            distribution=str(model_raw.get("distribution", "normal")),
            scale=float(model_raw.get("scale", 100.0)),
            min_observations=model_raw.get("min_observations", 30),
        ),
        alignment=AlignmentConfig(
            mode=alignment_mode,
            fail_on_drift=bool(alignment_raw.get("fail_on_drift", False)),
        ),
        plots=PlotConfig(
            output_dir=resolve_data_path(plots_raw.get("output_dir", "reports/plots")),
            var_level=float(plots_raw.get("var_level", 0.01)),
            sentiment_divisor=float(plots_raw.get("sentiment_divisor", 100.0)),
            acf_lags=plots_raw.get("acf_lags", 20),
        ),
    )
    _validate(cfg)
    return cfg


def load_analysis_config(path: str | Path | None = None) -> AnalysisConfig:
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    cfg = parse_analysis_config(raw)
    logger.info(
        "Analysis config loaded",
        extra={"path": str(config_path), "symbol": cfg.asset.symbol},
    )
    return cfg
