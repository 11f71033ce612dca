"""Provider protocol for fetching the reference index series."""

from __future__ import annotations

from typing import Protocol

from ..domain import Series


class SeriesProvider(Protocol):
    """Abstraction for price series sources."""

    def fetch_series(self, range_: str, interval: str) -> Series:
        """Fetch an ascending series for an upstream range and interval token."""
        raise NotImplementedError
