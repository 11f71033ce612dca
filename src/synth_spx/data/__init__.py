"""Data access layer."""

from .api_client import SpxApiClient
from .demo import build_demo_series
from .providers import SeriesProvider
from .yahoo_chart import YahooChartProvider

__all__ = ["SeriesProvider", "SpxApiClient", "YahooChartProvider", "build_demo_series"]
