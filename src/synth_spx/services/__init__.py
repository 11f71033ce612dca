"""Service layer entry points."""

from .series_service import (
    ChartView,
    LoadResult,
    SeriesLoader,
    build_view,
    choose_range,
    get_series,
    load_series_with_fallback,
)

__all__ = [
    "ChartView",
    "LoadResult",
    "SeriesLoader",
    "build_view",
    "choose_range",
    "get_series",
    "load_series_with_fallback",
]
