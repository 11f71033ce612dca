"""Return and leverage analytics."""

from .leverage import coerce_base, simulate
from .summary import build_summary, series_to_frame

__all__ = ["build_summary", "coerce_base", "series_to_frame", "simulate"]
