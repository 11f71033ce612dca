"""Dashboard-side client for the ``/api/spx`` proxy."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from ..config import DEFAULT_API_URL, DEFAULT_HTTP_TIMEOUT
from ..domain import Series
from ..utils.errors import BadPayloadError, DataRetrievalError, UpstreamError
from .normalization import normalize_series_payload
from .providers import SeriesProvider

logger = logging.getLogger(__name__)


class SpxApiClient(SeriesProvider):
    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch_series(self, range_: str, interval: str) -> Series:
        url = f"{self.base_url}/api/spx"
        try:
            response = self.session.get(url, params={"range": range_, "interval": interval}, timeout=self.timeout)
        except requests.RequestException as err:
            raise DataRetrievalError(f"Backend /api/spx unreachable: {err}") from err

        if not response.ok:
            raise UpstreamError(f"Backend /api/spx failed: {response.status_code}", status=response.status_code)

        try:
            payload = response.json()
        except ValueError as err:
            raise BadPayloadError("Malformed JSON from /api/spx") from err

        series = normalize_series_payload(payload)
        logger.info("Received %d points from /api/spx (range=%s, interval=%s)", len(series), range_, interval)
        return series
