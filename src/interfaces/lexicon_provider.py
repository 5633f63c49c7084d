# src/interfaces/lexicon_provider.py
from __future__ import annotations

from abc import ABC, abstractmethod

from src.entities.polarity_lexicon import PolarityLexicon


class LexiconProvider(ABC):
    @abstractmethod
    def load(self) -> PolarityLexicon:
        """Return the word -> polarity lexicon used for scoring."""
        ...
