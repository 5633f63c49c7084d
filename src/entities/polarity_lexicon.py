# src/entities/polarity_lexicon.py

from __future__ import annotations

from collections.abc import Iterator, Mapping
from enum import Enum
from types import MappingProxyType


class Polarity(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"


class PolarityLexicon(Mapping[str, Polarity]):
    """
    Read-only word -> polarity mapping.

    Keys are stored lowercase; lookups are exact (no stemming).
    """

    def __init__(self, entries: Mapping[str, Polarity | str], name: str = "custom") -> None:
        normalized: dict[str, Polarity] = {}
        for word, polarity in entries.items():
            if not isinstance(word, str) or not word.strip():
                raise ValueError("lexicon words must be non-empty strings")
            normalized[word.strip().lower()] = Polarity(polarity)

        self._entries = MappingProxyType(normalized)
        self.name = name

    def __getitem__(self, word: str) -> Polarity:
        return self._entries[word]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def polarity_of(self, token: str) -> Polarity | None:
        return self._entries.get(token.lower())

    @property
    def positive_words(self) -> frozenset[str]:
        return frozenset(w for w, p in self._entries.items() if p is Polarity.POSITIVE)

    @property
    def negative_words(self) -> frozenset[str]:
        return frozenset(w for w, p in self._entries.items() if p is Polarity.NEGATIVE)

    def __repr__(self) -> str:
        return f"PolarityLexicon(name={self.name!r}, words={len(self)})"
