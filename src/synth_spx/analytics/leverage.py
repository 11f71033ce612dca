"""Synthetic leveraged equity curves built from compounded period returns."""

from __future__ import annotations

import math
from typing import Any

import numpy as np
import pandas as pd

from ..domain import PricePoint, Series
from .returns import compute_simple_returns

DEFAULT_BASE = 100.0


def coerce_base(base: Any) -> float:
    """Starting value for the synthetic curve; non-numeric or negative input becomes 0."""
    try:
        value = float(base)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def simulate(series: Series, leverage: int, base: Any = DEFAULT_BASE) -> Series:
    """Compound ``leverage`` times each period return of ``series`` starting at ``base``.

    The first point always equals ``base``. Returns are compounded rather than
    mirrored, so a negative leverage can still produce a positive curve.
    Leverage is not validated here; 0 yields a flat line at ``base``.
    """
    if not series:
        return []

    start = coerce_base(base)
    prices = pd.Series([point.value for point in series], dtype=float)
    returns = compute_simple_returns(prices).to_numpy()

    factors = 1.0 + leverage * returns
    factors[0] = start
    # left-to-right products match s[i] = s[i-1] * (1 + k * r[i]) exactly
    values = np.multiply.accumulate(factors)

    return [PricePoint(time=point.time, value=float(value)) for point, value in zip(series, values)]
