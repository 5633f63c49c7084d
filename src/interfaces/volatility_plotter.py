# src/interfaces/volatility_plotter.py
from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from src.entities.sentiment_volatility_record import SentimentVolatilityRecord
from src.interfaces.volatility_model import VolatilityFit


class VolatilityPlotter(ABC):
    @abstractmethod
    def render(
        self,
        symbol: str,
        fit: VolatilityFit,
        value_at_risk: pd.Series,
        news_impact: pd.DataFrame | None,
        overlay: list[SentimentVolatilityRecord],
    ) -> list[Path]:
        """Render diagnostic figures and return the written file paths."""
        ...
