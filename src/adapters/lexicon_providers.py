# src/adapters/lexicon_providers.py

from __future__ import annotations

import logging
from pathlib import Path

import nltk
import pandas as pd

from src.domain.errors import DataUnavailable
from src.entities.polarity_lexicon import Polarity, PolarityLexicon
from src.interfaces.lexicon_provider import LexiconProvider

logger = logging.getLogger(__name__)


def _build_lexicon(
    positive: set[str], negative: set[str], name: str
) -> PolarityLexicon:
    # words listed under both labels would count both ways; drop them
    ambiguous = positive & negative
    entries: dict[str, Polarity] = {}
    entries.update({w: Polarity.POSITIVE for w in positive - ambiguous})
    entries.update({w: Polarity.NEGATIVE for w in negative - ambiguous})

    lexicon = PolarityLexicon(entries, name=name)
    logger.info(
        "Polarity lexicon loaded",
        extra={
            "lexicon": name,
            "positive": len(lexicon.positive_words),
            "negative": len(lexicon.negative_words),
            "ambiguous_dropped": len(ambiguous),
        },
    )
    return lexicon


class NltkOpinionLexiconProvider(LexiconProvider):
    """
    Hu & Liu (2004) opinion lexicon, as shipped by nltk.

    Downloads the corpus on first use when it is not installed.
    """

    corpus_id = "opinion_lexicon"

    def __init__(self, download_if_missing: bool = True) -> None:
        self.download_if_missing = download_if_missing

    def _ensure_corpus(self) -> None:
        try:
            nltk.data.find(f"corpora/{self.corpus_id}")
        except LookupError:
            if not self.download_if_missing:
                raise DataUnavailable(
                    f"nltk corpus '{self.corpus_id}' is not installed"
                ) from None
            logger.info("Downloading nltk corpus", extra={"corpus": self.corpus_id})
            if not nltk.download(self.corpus_id, quiet=True):
                raise DataUnavailable(f"Could not download nltk corpus '{self.corpus_id}'")

    def load(self) -> PolarityLexicon:
        self._ensure_corpus()

        from nltk.corpus import opinion_lexicon

        return _build_lexicon(
            positive={w.lower() for w in opinion_lexicon.positive()},
            negative={w.lower() for w in opinion_lexicon.negative()},
            name="opinion_lexicon",
        )


class CsvLexiconProvider(LexiconProvider):
    """
    Reads a `word,sentiment` file where sentiment is `positive` or `negative`.
    """

    def __init__(
        self,
        path: str | Path,
        word_column: str = "word",
        sentiment_column: str = "sentiment",
    ) -> None:
        self.path = Path(path)
        self.word_column = word_column
        self.sentiment_column = sentiment_column

    def load(self) -> PolarityLexicon:
        if not self.path.is_file():
            raise DataUnavailable(f"Lexicon file not found: {self.path.resolve()}")

        try:
            df = pd.read_csv(self.path, dtype="string")
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise DataUnavailable(f"Malformed lexicon file {self.path}: {e}") from e

        missing = {self.word_column, self.sentiment_column} - set(df.columns)
        if missing:
            raise DataUnavailable(f"Lexicon file {self.path} is missing columns: {sorted(missing)}")

        df = df.dropna(subset=[self.word_column, self.sentiment_column])
        words = df[self.word_column].str.strip().str.lower()
        labels = df[self.sentiment_column].str.strip().str.lower()

        unknown = sorted(set(labels) - {p.value for p in Polarity})
        if unknown:
            raise ValueError(f"Unknown sentiment labels in {self.path}: {unknown}")

        return _build_lexicon(
            positive=set(words[labels == Polarity.POSITIVE.value]),
            negative=set(words[labels == Polarity.NEGATIVE.value]),
            name=self.path.stem,
        )
