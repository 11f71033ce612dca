"""yfinance-backed series provider."""

from __future__ import annotations

import logging

import yfinance as yf

from ..config import DEFAULT_SYMBOL
from ..domain import Series
from ..utils.errors import UpstreamError
from ..utils.yf_patch import patch_yfinance
from .normalization import normalize_yfinance_history
from .providers import SeriesProvider

logger = logging.getLogger(__name__)


class YFinanceSeriesProvider(SeriesProvider):
    """Adapter around ``Ticker.history`` that emits the canonical series."""

    def __init__(self, symbol: str = DEFAULT_SYMBOL, skip_cookie_check: bool = True) -> None:
        self.symbol = symbol
        patch_yfinance(skip_cookie_check)

    def fetch_series(self, range_: str, interval: str) -> Series:
        logger.info("Fetching %s via yfinance (period=%s, interval=%s)", self.symbol, range_, interval)
        try:
            raw = yf.Ticker(self.symbol).history(period=range_, interval=interval, auto_adjust=False)
        except Exception as err:  # pragma: no cover - defensive against network issues
            raise UpstreamError(f"yfinance history failed: {err}") from err

        if isinstance(raw, tuple):
            raw = raw[0]

        return normalize_yfinance_history(raw)
