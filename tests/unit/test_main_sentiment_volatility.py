from __future__ import annotations

from argparse import Namespace
from datetime import date
from pathlib import Path

import pytest

from src import main_sentiment_volatility
from src.domain.errors import DataUnavailable
from src.domain.services.volatility_aligner import AlignmentMode
from src.utils.analysis_config import parse_analysis_config


def _args(**overrides) -> Namespace:
    args = Namespace(config=None, asset=None, start=None, end=None, alignment=None)
    for k, v in overrides.items():
        setattr(args, k, v)
    return args


def _config(tmp_path: Path, lexicon: dict | None = None):
    return parse_analysis_config(
        {
            "asset": {"symbol": "^DJI", "start_date": "2008-08-08", "end_date": "2016-07-01"},
            "headlines": {"path": str(tmp_path / "news.csv")},
            "lexicon": lexicon or {"source": "csv", "path": str(tmp_path / "lexicon.csv")},
            "plots": {"output_dir": str(tmp_path / "plots")},
        }
    )


class _FakeLexiconProvider:
    def __init__(self, *args, **kwargs):
        pass

    def load(self):
        return "lexicon"


def _patch_common(monkeypatch, tmp_path, args, captured, config=None):
    monkeypatch.setattr(main_sentiment_volatility, "setup_logging", lambda *a, **k: None)
    monkeypatch.setattr(main_sentiment_volatility, "parse_args", lambda: args)

    def _load(path):
        captured["config_path"] = path
        return config or _config(tmp_path)

    monkeypatch.setattr(main_sentiment_volatility, "load_analysis_config", _load)
    monkeypatch.setattr(main_sentiment_volatility, "CsvLexiconProvider", _FakeLexiconProvider)
    monkeypatch.setattr(main_sentiment_volatility, "NltkOpinionLexiconProvider", _FakeLexiconProvider)
    monkeypatch.setattr(main_sentiment_volatility, "SentimentScorer", lambda lexicon: ("scorer", lexicon))
    monkeypatch.setattr(main_sentiment_volatility, "YFinancePriceFetcher", lambda: object())
    monkeypatch.setattr(main_sentiment_volatility, "MatplotlibVolatilityPlotter", lambda **_: object())


def test_main_wires_config_into_use_case(monkeypatch, tmp_path: Path) -> None:
    captured: dict = {}
    _patch_common(monkeypatch, tmp_path, _args(), captured)

    class _FakeUseCase:
        def __init__(self, **kwargs):
            captured["deps"] = kwargs

        def execute(self, symbol, start, end):
            captured.update(symbol=symbol, start=start, end=end)
            return type(
                "_R",
                (),
                {
                    "symbol": symbol,
                    "prices": 10,
                    "sentiment_days": 5,
                    "overlay": [],
                    "alignment": type("_A", (), {"misaligned_rows": 0})(),
                    "plots": [],
                },
            )()

    monkeypatch.setattr(main_sentiment_volatility, "SentimentVolatilityAnalysisUseCase", _FakeUseCase)

    main_sentiment_volatility.main()

    assert captured["config_path"] is None
    assert captured["symbol"] == "^DJI"
    assert captured["start"] == date(2008, 8, 8)
    assert captured["end"] == date(2016, 7, 1)
    assert captured["deps"]["sentiment_scorer"] == ("scorer", "lexicon")
    assert captured["deps"]["volatility_aligner"].mode is AlignmentMode.POSITIONAL
    assert captured["deps"]["volatility_model"].scale == 100.0
    assert captured["deps"]["var_level"] == 0.01


def test_main_cli_overrides_config(monkeypatch, tmp_path: Path) -> None:
    captured: dict = {}
    args = _args(config="custom.yaml", asset="aapl", start="2012-01-01", end="2012-12-31", alignment="date")
    _patch_common(monkeypatch, tmp_path, args, captured)

    class _FakeUseCase:
        def __init__(self, **kwargs):
            captured["deps"] = kwargs

        def execute(self, symbol, start, end):
            captured.update(symbol=symbol, start=start, end=end)
            raise DataUnavailable("stop here")

    monkeypatch.setattr(main_sentiment_volatility, "SentimentVolatilityAnalysisUseCase", _FakeUseCase)

    with pytest.raises(DataUnavailable):
        main_sentiment_volatility.main()

    assert captured["config_path"] == "custom.yaml"
    assert captured["symbol"] == "AAPL"
    assert captured["start"] == date(2012, 1, 1)
    assert captured["end"] == date(2012, 12, 31)
    assert captured["deps"]["volatility_aligner"].mode is AlignmentMode.DATE


def test_build_lexicon_provider_selects_source(tmp_path: Path) -> None:
    csv_cfg = _config(tmp_path)
    nltk_cfg = _config(tmp_path, lexicon={"source": "nltk"})

    assert isinstance(
        main_sentiment_volatility.build_lexicon_provider(csv_cfg),
        main_sentiment_volatility.CsvLexiconProvider,
    )
    assert isinstance(
        main_sentiment_volatility.build_lexicon_provider(nltk_cfg),
        main_sentiment_volatility.NltkOpinionLexiconProvider,
    )
