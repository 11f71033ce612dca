"""Environment-driven settings for the dashboard and the proxy."""

from __future__ import annotations

import os
from dataclasses import dataclass

CHART_WIDTH = 1200
CHART_HEIGHT = 640
CHART_PAD = 40
CHART_RIGHT_MARGIN = 90

DEFAULT_SYMBOL = "^GSPC"
DEFAULT_API_URL = "http://127.0.0.1:5000"
DEFAULT_HTTP_TIMEOUT = 10.0
DEFAULT_PROXY_HOST = "127.0.0.1"
DEFAULT_PROXY_PORT = 5000
CHART_ENDPOINT = "https://query1.finance.yahoo.com/v8/finance/chart/"
UPSTREAMS = ("chart", "yfinance")

_TRUTHY = ("1", "true", "yes", "on")


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in _TRUTHY


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    upstream: str = "chart"
    symbol: str = DEFAULT_SYMBOL
    http_timeout: float = DEFAULT_HTTP_TIMEOUT
    proxy_host: str = DEFAULT_PROXY_HOST
    proxy_port: int = DEFAULT_PROXY_PORT
    skip_cookie_check: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        upstream = os.getenv("SPX_UPSTREAM", "chart").strip().lower()
        if upstream not in UPSTREAMS:
            upstream = "chart"
        return cls(
            api_url=os.getenv("SPX_API_URL", DEFAULT_API_URL).rstrip("/"),
            upstream=upstream,
            symbol=os.getenv("SPX_SYMBOL", DEFAULT_SYMBOL),
            http_timeout=_env_float("SPX_HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT),
            proxy_host=os.getenv("SPX_PROXY_HOST", DEFAULT_PROXY_HOST),
            proxy_port=_env_int("SPX_PROXY_PORT", DEFAULT_PROXY_PORT),
            skip_cookie_check=_env_bool("YFINANCE_SKIP_COOKIE_CHECK", "1"),
        )
