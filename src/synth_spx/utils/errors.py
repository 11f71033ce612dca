"""Custom exceptions."""

from __future__ import annotations

from typing import Optional


class DataRetrievalError(Exception):
    """Raised when a provider fails to return usable data."""


class UpstreamError(DataRetrievalError):
    """The upstream provider answered with a non-2xx status or was unreachable."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class BadPayloadError(DataRetrievalError):
    """A response did not contain the expected series shape."""


class InvalidLeverageError(ValueError):
    """Raised for leverage tokens outside [-10, 10] or equal to 0."""


class InvalidIntervalError(ValueError):
    """Raised for interval tokens that are not recognized."""


class DegenerateIntervalError(Exception):
    """Tick generation exceeded its iteration guard."""
