# src/entities/sentiment_score.py

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class SentimentScore:
    """
    Daily lexicon polarity counts.

    score is always derived as positive_count - negative_count and
    cannot be passed in, so the two can never disagree.
    """

    day: date
    positive_count: int
    negative_count: int
    score: int = field(init=False)

    def __post_init__(self) -> None:
        if isinstance(self.day, datetime) or not isinstance(self.day, date):
            raise TypeError("day must be a datetime.date instance")

        for field_name in ("positive_count", "negative_count"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError(f"{field_name} must be an integer")
            if value < 0:
                raise ValueError(f"{field_name} must be >= 0")

        object.__setattr__(self, "score", self.positive_count - self.negative_count)
