# src/interfaces/volatility_model.py
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

import pandas as pd

from src.domain.time.trading_calendar import normalize_to_trading_day
from src.entities.volatility_estimate import VolatilityEstimate


@dataclass(frozen=True)
class VolatilityFit:
    """
    Output of a fitted conditional volatility model.

    Every series is positionally aligned to the return series that was
    fitted and indexed by the same dates.
    """

    returns: pd.Series
    conditional_mean: pd.Series
    conditional_std_dev: pd.Series
    standardized_residuals: pd.Series
    params: dict[str, float]
    log_likelihood: float
    aic: float
    bic: float
    distribution: str = "normal"
    model_name: str = "AR(1)-GARCH(1,1)"
    metadata: dict[str, float | int | str] = field(default_factory=dict)

    @property
    def observations(self) -> int:
        return int(len(self.returns))

    def estimates(self) -> list[VolatilityEstimate]:
        return [
            VolatilityEstimate(
                day=normalize_to_trading_day(idx),
                conditional_std_dev=float(value),
            )
            for idx, value in self.conditional_std_dev.items()
        ]


class VolatilityModel(ABC):
    @abstractmethod
    def fit(self, returns: pd.Series) -> VolatilityFit:
        """
        Fit the model to a return series with no missing values.
        Raises EstimationFailure when the optimizer does not converge.
        """
        raise NotImplementedError
