# src/domain/services/risk_diagnostics.py

from __future__ import annotations

import numpy as np
import pandas as pd
from scipy.stats import norm

from src.domain.errors import EstimationFailure
from src.interfaces.volatility_model import VolatilityFit


class RiskDiagnostics:
    """
    Post-fit diagnostics derived from a GARCH(1,1) fit with normal innovations.
    """

    @staticmethod
    def value_at_risk(fit: VolatilityFit, level: float = 0.01) -> pd.Series:
        """
        Parametric VaR band: mu_t + sigma_t * z_level.

        Positions where the conditional mean is undefined (AR warm-up) stay NaN.
        """
        if not 0.0 < level < 1.0:
            raise ValueError("level must be in (0, 1)")

        z = norm.ppf(level)
        band = fit.conditional_mean + fit.conditional_std_dev * z
        band.name = f"var_{level:g}"
        return band

    @classmethod
    def var_exceedances(cls, fit: VolatilityFit, level: float = 0.01) -> int:
        band = cls.value_at_risk(fit, level)
        valid = band.notna()
        return int((fit.returns[valid] < band[valid]).sum())

    @staticmethod
    def persistence(params: dict[str, float]) -> float:
        """Sum of every ARCH (alpha[i]) and GARCH (beta[j]) coefficient."""
        return float(
            sum(v for k, v in params.items() if k.startswith(("alpha[", "beta[")))
        )

    @classmethod
    def is_stationary(cls, params: dict[str, float]) -> bool:
        return cls.persistence(params) < 1.0

    @staticmethod
    def is_garch_1_1(params: dict[str, float]) -> bool:
        lags = {k for k in params if k.startswith(("alpha[", "beta["))}
        return lags == {"alpha[1]", "beta[1]"}

    @classmethod
    def has_news_impact_curve(cls, params: dict[str, float]) -> bool:
        return cls.is_garch_1_1(params) and cls.is_stationary(params)

    @staticmethod
    def news_impact_curve(
        params: dict[str, float],
        points: int = 100,
        span: float = 5.0,
    ) -> pd.DataFrame:
        """
        GARCH(1,1) news impact curve.

        sigma2_{t+1} = omega + alpha * eps_t^2 + beta * sigma_bar^2,
        with sigma_bar^2 = omega / (1 - alpha - beta) and
        eps over [-span * sigma_bar, +span * sigma_bar].
        """
        try:
            omega = float(params["omega"])
            alpha = float(params["alpha[1]"])
            beta = float(params["beta[1]"])
        except KeyError as e:
            raise EstimationFailure(f"Missing GARCH parameter: {e}") from e

        if not RiskDiagnostics.is_garch_1_1(params):
            raise EstimationFailure("News impact curve is only defined for GARCH(1,1) fits")

        persistence = alpha + beta
        if persistence >= 1.0:
            raise EstimationFailure(
                f"News impact curve undefined for non-stationary fit (alpha+beta={persistence:.4f})"
            )

        if points < 2:
            raise ValueError("points must be >= 2")

        long_run_variance = omega / (1.0 - persistence)
        sigma_bar = np.sqrt(long_run_variance)
        shocks = np.linspace(-span * sigma_bar, span * sigma_bar, points)
        variance = omega + alpha * shocks**2 + beta * long_run_variance

        return pd.DataFrame({"shock": shocks, "conditional_variance": variance})
