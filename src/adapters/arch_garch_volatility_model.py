# src/adapters/arch_garch_volatility_model.py

from __future__ import annotations

import logging

import numpy as np
import pandas as pd
from arch import arch_model

from src.domain.errors import EstimationFailure
from src.interfaces.volatility_model import VolatilityFit, VolatilityModel

logger = logging.getLogger(__name__)


class ArchGarchVolatilityModel(VolatilityModel):
    """
    Adapter around `arch` for an AR(mean_lags)-GARCH(p,q) model.

    Contract:
    - input: log returns with no missing values, indexed by day
    - returns are multiplied by `scale` before fitting and every output is
      converted back to return units
    - all output series have the same length and index as the input
    """

    def __init__(
        self,
        mean_lags: int = 1,
        p: int = 1,
        q: int = 1,
        distribution: str = "normal",
        scale: float = 100.0,
        min_observations: int = 30,
    ) -> None:
        if scale <= 0:
            raise ValueError("scale must be positive")

        self.mean_lags = mean_lags
        self.p = p
        self.q = q
        self.distribution = distribution
        self.scale = scale
        self.min_observations = min_observations

    @property
    def model_name(self) -> str:
        return f"AR({self.mean_lags})-GARCH({self.p},{self.q})"

    def _validate_input(self, returns: pd.Series) -> pd.Series:
        if returns.isna().any():
            raise EstimationFailure("Return series contains missing values; drop them before fitting")

        values = returns.astype("float64")
        if not np.isfinite(values.to_numpy()).all():
            raise EstimationFailure("Return series contains non-finite values")

        if len(values) < self.min_observations:
            raise EstimationFailure(
                f"Not enough observations to fit {self.model_name}: "
                f"{len(values)} < {self.min_observations}"
            )
        return values

    def _unscale_params(self, params: pd.Series) -> dict[str, float]:
        out: dict[str, float] = {}
        for name, value in params.items():
            if name == "Const":
                out[name] = float(value) / self.scale
            elif name == "omega":
                out[name] = float(value) / self.scale**2
            else:
                # AR coefficients, alpha and beta are scale-free
                out[name] = float(value)
        return out

    def fit(self, returns: pd.Series) -> VolatilityFit:
        values = self._validate_input(returns)
        scaled = values * self.scale

        logger.info(
            "Fitting volatility model",
            extra={
                "model": self.model_name,
                "dist": self.distribution,
                "observations": len(values),
                "scale": self.scale,
            },
        )

        model = arch_model(
            scaled,
            mean="AR",
            lags=self.mean_lags,
            vol="GARCH",
            p=self.p,
            q=self.q,
            dist=self.distribution,
            rescale=False,
        )

        try:
            result = model.fit(disp="off", show_warning=False)
        except Exception as e:
            logger.error(
                "Volatility model estimation raised",
                extra={"model": self.model_name, "error": str(e)},
            )
            raise EstimationFailure(f"{self.model_name} estimation failed: {e}") from e

        if result.convergence_flag != 0:
            raise EstimationFailure(
                f"{self.model_name} optimizer did not converge "
                f"(flag={result.convergence_flag})"
            )

        # AR warm-up leaves the first value(s) undefined; keep positional length
        sigma = (result.conditional_volatility / self.scale).bfill()
        resid = result.resid / self.scale
        conditional_mean = values - resid
        std_resid = resid / sigma

        if sigma.isna().any() or (sigma <= 0).any():
            raise EstimationFailure("Fitted conditional volatility is not strictly positive")

        params = self._unscale_params(result.params)

        logger.info(
            "Volatility model fitted",
            extra={
                "model": self.model_name,
                "loglik": round(float(result.loglikelihood), 4),
                "omega": params.get("omega"),
                "alpha": params.get("alpha[1]"),
                "beta": params.get("beta[1]"),
            },
        )

        return VolatilityFit(
            returns=values.rename("log_return"),
            conditional_mean=conditional_mean.rename("conditional_mean"),
            conditional_std_dev=sigma.rename("conditional_std_dev"),
            standardized_residuals=std_resid.rename("standardized_residual"),
            params=params,
            log_likelihood=float(result.loglikelihood),
            aic=float(result.aic),
            bic=float(result.bic),
            distribution=self.distribution,
            model_name=self.model_name,
            metadata={"scale": self.scale, "observations": len(values)},
        )
