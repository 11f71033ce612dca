"""Utility helpers."""

from .errors import (
    BadPayloadError,
    DataRetrievalError,
    DegenerateIntervalError,
    InvalidIntervalError,
    InvalidLeverageError,
    UpstreamError,
)
from .logging import get_logger

__all__ = [
    "BadPayloadError",
    "DataRetrievalError",
    "DegenerateIntervalError",
    "InvalidIntervalError",
    "InvalidLeverageError",
    "UpstreamError",
    "get_logger",
]
