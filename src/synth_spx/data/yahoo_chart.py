"""Client for the upstream chart endpoint that the proxy relays."""

from __future__ import annotations

import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from ..config import CHART_ENDPOINT, DEFAULT_HTTP_TIMEOUT, DEFAULT_SYMBOL
from ..domain import Series
from ..utils.errors import BadPayloadError, UpstreamError
from .normalization import normalize_chart_payload
from .providers import SeriesProvider

logger = logging.getLogger(__name__)

# the endpoint rejects requests without a browser-like agent
DEFAULT_HEADERS = {"User-Agent": "Mozilla/5.0 (X11; Linux x86_64) synth-spx/0.1"}


class YahooChartProvider(SeriesProvider):
    """Fetches ``/v8/finance/chart/<symbol>`` and normalizes the close prices."""

    def __init__(
        self,
        symbol: str = DEFAULT_SYMBOL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
        base_url: str = CHART_ENDPOINT,
    ) -> None:
        self.symbol = symbol
        self.timeout = timeout
        self.session = session or requests.Session()
        self.base_url = base_url

    @property
    def url(self) -> str:
        return self.base_url + quote(self.symbol, safe="")

    def fetch_chart(self, range_: str, interval: str) -> Any:
        try:
            response = self.session.get(
                self.url,
                params={"range": range_, "interval": interval},
                headers=DEFAULT_HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as err:
            raise UpstreamError(f"Upstream request failed: {err}") from err

        if not response.ok:
            raise UpstreamError("Upstream failed", status=response.status_code)

        try:
            return response.json()
        except ValueError as err:
            raise BadPayloadError("Bad upstream data") from err

    def fetch_series(self, range_: str, interval: str) -> Series:
        logger.info("Fetching %s chart (range=%s, interval=%s)", self.symbol, range_, interval)
        return normalize_chart_payload(self.fetch_chart(range_, interval))
