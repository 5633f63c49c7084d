# src/domain/services/sentiment_scorer.py

from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Iterable, List

from nltk.tokenize import RegexpTokenizer

from src.entities.headline import Headline, HeadlineBatch
from src.entities.polarity_lexicon import Polarity, PolarityLexicon
from src.entities.sentiment_score import SentimentScore

# unicode letters/digits, keeping internal apostrophes ("don't", "zürich's")
WORD_PATTERN = r"[^\W_]+(?:'[^\W_]+)*"
HEADLINE_SEPARATOR = " "


class SentimentScorer:
    """
    Domain Service that turns raw headlines into daily polarity counts.

    Strategy (bag of words):
        score_day = #positive tokens - #negative tokens

    Known limitations, kept on purpose:
    - no negation handling ("not good" counts as positive)
    - no stemming or lemmatization ("gains" != "gain")
    - no multi-word phrases, sarcasm or sentence structure
    """

    def __init__(self, lexicon: PolarityLexicon) -> None:
        self.lexicon = lexicon
        self._tokenizer = RegexpTokenizer(WORD_PATTERN)

    @staticmethod
    def group_by_day(headlines: Iterable[Headline]) -> List[HeadlineBatch]:
        grouped: dict[date, list[str]] = defaultdict(list)
        for headline in headlines:
            grouped[headline.day].append(headline.text)

        return [
            HeadlineBatch(day=day, text=HEADLINE_SEPARATOR.join(texts))
            for day, texts in sorted(grouped.items())
        ]

    def tokenize(self, text: str) -> List[str]:
        normalized = text.lower().replace("’", "'")
        return self._tokenizer.tokenize(normalized)

    def score_batch(self, batch: HeadlineBatch) -> SentimentScore:
        positive = 0
        negative = 0
        for token in self.tokenize(batch.text):
            polarity = self.lexicon.polarity_of(token)
            if polarity is Polarity.POSITIVE:
                positive += 1
            elif polarity is Polarity.NEGATIVE:
                negative += 1

        return SentimentScore(
            day=batch.day,
            positive_count=positive,
            negative_count=negative,
        )

    def score(self, headlines: Iterable[Headline]) -> List[SentimentScore]:
        """
        One SentimentScore per distinct day in the input, ordered by day.
        Days without any lexicon match still produce a row with score 0.
        """
        return [self.score_batch(batch) for batch in self.group_by_day(headlines)]
