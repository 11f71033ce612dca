"""Return calculations on price series."""

from __future__ import annotations

import pandas as pd


def compute_simple_returns(prices: pd.Series) -> pd.Series:
    """Period-over-period simple returns, 0 where the previous price is 0 or missing."""
    if prices.empty:
        return prices.astype(float)
    prev = prices.shift(1)
    returns = prices.diff() / prev
    usable = prev.notna() & (prev != 0)
    return returns.where(usable, 0.0)


def compute_total_return_pct(prices: pd.Series) -> float:
    """Percent change from the first to the last non-missing price."""
    usable = prices.dropna()
    if len(usable) < 2 or usable.iloc[0] == 0:
        return 0.0
    return float((usable.iloc[-1] / usable.iloc[0] - 1) * 100)


def compute_max_drawdown_pct(prices: pd.Series) -> float:
    """Largest peak-to-trough decline, as a non-positive percentage."""
    usable = prices.dropna()
    if usable.empty:
        return 0.0
    peaks = usable.cummax()
    drawdowns = (usable / peaks.where(peaks != 0) - 1) * 100
    worst = drawdowns.min()
    return 0.0 if pd.isna(worst) else float(worst)
