# src/entities/headline.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime


def _require_plain_date(value: object) -> None:
    if isinstance(value, datetime) or not isinstance(value, date):
        raise TypeError("day must be a datetime.date instance (no time component)")


@dataclass(frozen=True, slots=True)
class Headline:
    """A single raw headline as read from the corpus."""

    day: date
    text: str

    def __post_init__(self) -> None:
        _require_plain_date(self.day)
        if not isinstance(self.text, str):
            raise TypeError("text must be a string")


@dataclass(frozen=True, slots=True)
class HeadlineBatch:
    """
    All headlines published on one calendar day, concatenated.

    Invariants:
    - one batch per day
    - text keeps word boundaries between the source headlines
    """

    day: date
    text: str

    def __post_init__(self) -> None:
        _require_plain_date(self.day)
        if not isinstance(self.text, str):
            raise TypeError("text must be a string")
