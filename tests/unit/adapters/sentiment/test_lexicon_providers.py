# tests/unit/adapters/sentiment/test_lexicon_providers.py

from types import SimpleNamespace

import pytest

from src.adapters import lexicon_providers as module
from src.adapters.lexicon_providers import CsvLexiconProvider, NltkOpinionLexiconProvider
from src.domain.errors import DataUnavailable
from src.entities.polarity_lexicon import Polarity


def test_csv_lexicon_loads_and_normalizes(tmp_path):
    path = tmp_path / "lexicon.csv"
    path.write_text("word,sentiment\nGood,positive\nbad ,Negative\n", encoding="utf-8")

    lexicon = CsvLexiconProvider(path).load()

    assert dict(lexicon) == {"good": Polarity.POSITIVE, "bad": Polarity.NEGATIVE}
    assert lexicon.name == "lexicon"


def test_csv_lexicon_drops_words_with_both_labels(tmp_path):
    path = tmp_path / "lexicon.csv"
    path.write_text(
        "word,sentiment\nenvious,positive\nenvious,negative\ngain,positive\n",
        encoding="utf-8",
    )

    lexicon = CsvLexiconProvider(path).load()

    assert "envious" not in lexicon
    assert lexicon.polarity_of("gain") is Polarity.POSITIVE


def test_csv_lexicon_rejects_unknown_labels(tmp_path):
    path = tmp_path / "lexicon.csv"
    path.write_text("word,sentiment\nmeh,neutral\n", encoding="utf-8")

    with pytest.raises(ValueError):
        CsvLexiconProvider(path).load()


def test_csv_lexicon_missing_file_raises(tmp_path):
    with pytest.raises(DataUnavailable):
        CsvLexiconProvider(tmp_path / "absent.csv").load()


def test_csv_lexicon_missing_columns_raises(tmp_path):
    path = tmp_path / "lexicon.csv"
    path.write_text("term,label\ngood,positive\n", encoding="utf-8")

    with pytest.raises(DataUnavailable):
        CsvLexiconProvider(path).load()


def test_csv_lexicon_empty_file_raises(tmp_path):
    path = tmp_path / "lexicon.csv"
    path.write_text("", encoding="utf-8")

    with pytest.raises(DataUnavailable):
        CsvLexiconProvider(path).load()


def test_csv_lexicon_malformed_file_raises(tmp_path):
    path = tmp_path / "lexicon.csv"
    path.write_text("word,sentiment\ngood,positive\nbad,negative,extra,field\n", encoding="utf-8")

    with pytest.raises(DataUnavailable):
        CsvLexiconProvider(path).load()


def test_nltk_provider_uses_installed_corpus(monkeypatch):
    monkeypatch.setattr(module.nltk.data, "find", lambda resource: resource)

    def _fail_download(*args, **kwargs):
        raise AssertionError("download must not be called when corpus is present")

    monkeypatch.setattr(module.nltk, "download", _fail_download)

    fake_corpus = SimpleNamespace(
        positive=lambda: ["good", "Gain"],
        negative=lambda: ["bad"],
    )
    import nltk.corpus

    monkeypatch.setattr(nltk.corpus, "opinion_lexicon", fake_corpus)

    lexicon = NltkOpinionLexiconProvider().load()

    assert lexicon.positive_words == frozenset({"good", "gain"})
    assert lexicon.negative_words == frozenset({"bad"})


def test_nltk_provider_raises_when_missing_and_download_disabled(monkeypatch):
    def _missing(resource):
        raise LookupError(resource)

    monkeypatch.setattr(module.nltk.data, "find", _missing)

    with pytest.raises(DataUnavailable):
        NltkOpinionLexiconProvider(download_if_missing=False).load()


def test_nltk_provider_raises_when_download_fails(monkeypatch):
    def _missing(resource):
        raise LookupError(resource)

    monkeypatch.setattr(module.nltk.data, "find", _missing)
    monkeypatch.setattr(module.nltk, "download", lambda *a, **k: False)

    with pytest.raises(DataUnavailable):
        NltkOpinionLexiconProvider().load()
