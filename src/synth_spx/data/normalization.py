"""Normalize upstream and proxy payloads into a canonical price series."""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

import pandas as pd

from ..domain import PricePoint, Series
from ..utils.errors import BadPayloadError

logger = logging.getLogger(__name__)

CLOSE_COLUMNS = ("Close", "close", "Adj Close")


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def normalize_chart_payload(payload: Any) -> Series:
    """Convert a chart-endpoint payload (seconds + closes) to a millisecond series.

    Points whose close is missing or non-finite are dropped.
    """
    try:
        result = payload["chart"]["result"][0]
        timestamps = result["timestamp"]
        closes = result["indicators"]["quote"][0]["close"]
    except (KeyError, IndexError, TypeError) as err:
        raise BadPayloadError("Bad upstream data") from err

    if not timestamps or not closes:
        raise BadPayloadError("Bad upstream data")

    series = [
        PricePoint(time=int(ts * 1000), value=float(close))
        for ts, close in zip(timestamps, closes)
        if is_finite_number(ts) and is_finite_number(close)
    ]
    dropped = len(timestamps) - len(series)
    if dropped:
        logger.debug("Dropped %d points with missing closes", dropped)
    return series


def normalize_yfinance_history(raw: Optional[pd.DataFrame]) -> Series:
    """Convert a yfinance ``history`` frame to a millisecond series of closes."""
    if raw is None or raw.empty:
        return []

    column = next((col for col in CLOSE_COLUMNS if col in raw.columns), None)
    if column is None:
        raise BadPayloadError("Bad upstream data")

    index = pd.DatetimeIndex(raw.index)
    index = index.tz_localize("UTC") if index.tz is None else index.tz_convert("UTC")
    millis = (index - pd.Timestamp(0, tz="UTC")) // pd.Timedelta(milliseconds=1)

    frame = pd.DataFrame({"time": millis, "value": pd.to_numeric(raw[column], errors="coerce").to_numpy()})
    frame = frame[frame["value"].map(math.isfinite)]
    frame = frame.sort_values("time", kind="stable")
    return [PricePoint(time=int(t), value=float(v)) for t, v in zip(frame["time"], frame["value"])]


def normalize_series_payload(payload: Any) -> Series:
    """Validate the proxy's ``{"series": [...]}`` response on the client side."""
    points = payload.get("series") if isinstance(payload, dict) else None
    if not isinstance(points, list):
        raise BadPayloadError("Missing series from /api/spx")

    series = []
    for point in points:
        if not isinstance(point, dict):
            continue
        time, value = point.get("time"), point.get("value")
        if is_finite_number(value) and is_finite_number(time):
            series.append(PricePoint(time=int(time), value=float(value)))
    return series


def series_to_payload(series: Series) -> dict[str, list[dict[str, float]]]:
    return {"series": [{"time": point.time, "value": point.value} for point in series]}


def filter_from_start(series: Series, start_ts: Optional[float]) -> Series:
    """Keep points at or after ``start_ts``; a start past the last point yields no data."""
    if not series or start_ts is None:
        return series

    min_ts, max_ts = series[0].time, series[-1].time
    if start_ts > max_ts:
        logger.debug("Start filter after last point (start=%s, max=%s): empty series", start_ts, max_ts)
        return []

    effective_start = max(start_ts, min_ts)
    filtered = [point for point in series if point.time >= effective_start]
    logger.debug(
        "Start filter: raw=%d filtered=%d start=%s effective=%s", len(series), len(filtered), start_ts, effective_start
    )
    return filtered
