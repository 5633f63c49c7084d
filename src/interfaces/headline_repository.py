# src/interfaces/headline_repository.py
from __future__ import annotations

from abc import ABC, abstractmethod

from src.entities.headline import Headline


class HeadlineRepository(ABC):
    """
    Source of raw headline records.
    Implementations read the whole corpus in one pass.
    """

    @abstractmethod
    def load_headlines(self) -> list[Headline]:
        ...
