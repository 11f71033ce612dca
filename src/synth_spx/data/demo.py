"""Demo fallback series used when the proxy cannot be reached."""

from __future__ import annotations

import time
from typing import Optional

import numpy as np

from ..domain import PricePoint, Series

DEMO_POINTS = 240
DEMO_START_PRICE = 4500.0
DEMO_STEP_MS = 60 * 60 * 1000


def build_demo_series(n: int = DEMO_POINTS, now_ms: Optional[int] = None, seed: Optional[int] = None) -> Series:
    """Hourly random walk with a slow sine swing, ending at ``now_ms``."""
    n = n or DEMO_POINTS
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    rng = np.random.default_rng(seed)
    noise = rng.random(n)

    start = now_ms - n * DEMO_STEP_MS
    price = DEMO_START_PRICE
    series = []
    for i in range(n):
        shock = (np.sin(i / 12) + noise[i] - 0.5) * 5
        price = max(1.0, price * (1 + 0.0002) + shock)
        series.append(PricePoint(time=start + i * DEMO_STEP_MS, value=float(price)))
    return series
