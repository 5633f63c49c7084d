# src/adapters/matplotlib_volatility_plotter.py

from __future__ import annotations

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # non-interactive backend

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from scipy import stats
from statsmodels.graphics.tsaplots import plot_acf

from src.entities.sentiment_volatility_record import SentimentVolatilityRecord
from src.interfaces.volatility_model import VolatilityFit
from src.interfaces.volatility_plotter import VolatilityPlotter

logger = logging.getLogger(__name__)


def _or_nan(value: float | None) -> float:
    return np.nan if value is None else float(value)


class MatplotlibVolatilityPlotter(VolatilityPlotter):
    """
    Writes one PNG per diagnostic figure into `output_dir`.
    """

    def __init__(
        self,
        output_dir: str | Path,
        sentiment_divisor: float = 100.0,
        acf_lags: int = 20,
        dpi: int = 110,
    ) -> None:
        if sentiment_divisor <= 0:
            raise ValueError("sentiment_divisor must be positive")

        self.output_dir = Path(output_dir)
        if self.output_dir.exists() and not self.output_dir.is_dir():
            raise NotADirectoryError(
                f"Plot output_dir is not a directory: {self.output_dir.resolve()}"
            )
        self.sentiment_divisor = sentiment_divisor
        self.acf_lags = acf_lags
        self.dpi = dpi

    def _save(self, fig: plt.Figure, symbol: str, name: str) -> Path:
        asset_dir = self.output_dir / symbol.upper()
        asset_dir.mkdir(parents=True, exist_ok=True)
        path = asset_dir / f"{name}.png"
        fig.tight_layout()
        fig.savefig(path, dpi=self.dpi)
        plt.close(fig)
        return path

    def render(
        self,
        symbol: str,
        fit: VolatilityFit,
        value_at_risk: pd.Series,
        news_impact: pd.DataFrame | None,
        overlay: list[SentimentVolatilityRecord],
    ) -> list[Path]:
        paths = [
            self._plot_sigma_bands(symbol, fit),
            self._plot_value_at_risk(symbol, fit, value_at_risk),
            *self._plot_acfs(symbol, fit),
            self._plot_residual_density(symbol, fit),
            self._plot_residual_qq(symbol, fit),
        ]
        if news_impact is not None:
            paths.append(self._plot_news_impact(symbol, news_impact))
        if overlay:
            paths.append(self._plot_abs_return_vs_sentiment(symbol, overlay))
            paths.append(self._plot_sigma_vs_sentiment(symbol, overlay))

        logger.info(
            "Diagnostic plots written",
            extra={"symbol": symbol, "count": len(paths), "output_dir": str(self.output_dir)},
        )
        return paths

    def _plot_sigma_bands(self, symbol: str, fit: VolatilityFit) -> Path:
        fig, ax = plt.subplots(figsize=(11, 4))
        idx = fit.returns.index
        ax.plot(idx, fit.returns, color="steelblue", linewidth=0.7, label="log return")
        ax.plot(idx, 2 * fit.conditional_std_dev, color="firebrick", linewidth=0.8, label="+2 sigma")
        ax.plot(idx, -2 * fit.conditional_std_dev, color="firebrick", linewidth=0.8, label="-2 sigma")
        ax.set_title(f"{symbol} - returns with 2 conditional SD bands ({fit.model_name})")
        ax.set_xlabel("Date")
        ax.set_ylabel("Return")
        ax.legend(loc="upper right")
        ax.grid(True)
        return self._save(fig, symbol, "returns_sigma_bands")

    def _plot_value_at_risk(self, symbol: str, fit: VolatilityFit, var: pd.Series) -> Path:
        fig, ax = plt.subplots(figsize=(11, 4))
        idx = fit.returns.index
        ax.plot(idx, fit.returns, color="gray", linewidth=0.6, label="log return")
        ax.plot(idx, var, color="firebrick", linewidth=0.9, label=str(var.name))

        breaches = var.notna() & (fit.returns < var)
        ax.scatter(
            idx[breaches.to_numpy()],
            fit.returns[breaches],
            color="black",
            s=12,
            zorder=3,
            label=f"exceedances ({int(breaches.sum())})",
        )
        ax.set_title(f"{symbol} - value at risk")
        ax.set_xlabel("Date")
        ax.set_ylabel("Return")
        ax.legend(loc="lower left")
        ax.grid(True)
        return self._save(fig, symbol, "value_at_risk")

    def _plot_acfs(self, symbol: str, fit: VolatilityFit) -> list[Path]:
        lags = min(self.acf_lags, len(fit.returns) - 1)
        variants = {
            "acf_returns": ("returns", fit.returns),
            "acf_squared_returns": ("squared returns", fit.returns**2),
            "acf_abs_returns": ("absolute returns", fit.returns.abs()),
        }
        paths = []
        for name, (label, series) in variants.items():
            fig, ax = plt.subplots(figsize=(8, 4))
            plot_acf(series.to_numpy(), lags=lags, ax=ax, zero=False)
            ax.set_title(f"{symbol} - ACF of {label}")
            ax.set_xlabel("Lag")
            paths.append(self._save(fig, symbol, name))
        return paths

    def _plot_residual_density(self, symbol: str, fit: VolatilityFit) -> Path:
        resid = fit.standardized_residuals.dropna().to_numpy()
        grid = np.linspace(min(resid.min(), -4.0), max(resid.max(), 4.0), 200)

        fig, ax = plt.subplots(figsize=(8, 4))
        ax.hist(resid, bins=50, density=True, alpha=0.6, color="steelblue", label="standardized residuals")
        ax.plot(grid, stats.norm.pdf(grid), color="firebrick", label="N(0, 1)")
        ax.set_title(f"{symbol} - standardized residual density")
        ax.legend()
        ax.grid(True)
        return self._save(fig, symbol, "residual_density")

    def _plot_residual_qq(self, symbol: str, fit: VolatilityFit) -> Path:
        fig, ax = plt.subplots(figsize=(6, 6))
        stats.probplot(fit.standardized_residuals.dropna().to_numpy(), dist="norm", plot=ax)
        ax.set_title(f"{symbol} - normal QQ plot of standardized residuals")
        ax.grid(True)
        return self._save(fig, symbol, "residual_qq")

    def _plot_news_impact(self, symbol: str, news_impact: pd.DataFrame) -> Path:
        fig, ax = plt.subplots(figsize=(8, 4))
        ax.plot(news_impact["shock"], news_impact["conditional_variance"], color="darkgreen")
        ax.set_title(f"{symbol} - news impact curve")
        ax.set_xlabel("Shock (epsilon_t)")
        ax.set_ylabel("sigma^2_{t+1}")
        ax.grid(True)
        return self._save(fig, symbol, "news_impact_curve")

    def _overlay_frame(self, overlay: list[SentimentVolatilityRecord]) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "day": pd.to_datetime([r.day for r in overlay]),
                "abs_return": [_or_nan(r.abs_return) for r in overlay],
                "sigma": [_or_nan(r.conditional_std_dev) for r in overlay],
                "sentiment": [r.rescaled_score(self.sentiment_divisor) for r in overlay],
            }
        )

    def _plot_abs_return_vs_sentiment(
        self, symbol: str, overlay: list[SentimentVolatilityRecord]
    ) -> Path:
        df = self._overlay_frame(overlay)
        fig, ax = plt.subplots(figsize=(11, 4))
        ax.plot(df["day"], df["abs_return"], color="steelblue", linewidth=0.8, label="|log return|")
        ax.plot(
            df["day"],
            df["sentiment"],
            color="darkorange",
            linewidth=0.8,
            label=f"sentiment score / {self.sentiment_divisor:g}",
        )
        ax.set_title(f"{symbol} - absolute return vs sentiment")
        ax.set_xlabel("Date")
        ax.legend(loc="upper right")
        ax.grid(True)
        return self._save(fig, symbol, "abs_return_vs_sentiment")

    def _plot_sigma_vs_sentiment(
        self, symbol: str, overlay: list[SentimentVolatilityRecord]
    ) -> Path:
        df = self._overlay_frame(overlay)
        fig, ax = plt.subplots(figsize=(11, 4))
        ax.plot(df["day"], df["sigma"], color="firebrick", linewidth=0.8, label="conditional SD")
        ax.plot(
            df["day"],
            df["sentiment"],
            color="darkorange",
            linewidth=0.8,
            label=f"sentiment score / {self.sentiment_divisor:g}",
        )
        ax.set_title(f"{symbol} - conditional volatility vs sentiment")
        ax.set_xlabel("Date")
        ax.legend(loc="upper right")
        ax.grid(True)
        return self._save(fig, symbol, "sigma_vs_sentiment")
