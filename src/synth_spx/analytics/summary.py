"""Summary table helpers for the raw and synthetic series."""

from __future__ import annotations

import pandas as pd

from ..domain import Series
from .returns import compute_max_drawdown_pct, compute_total_return_pct

SUMMARY_COLUMNS = ["series", "start_value", "last_value", "total_return_pct", "max_drawdown_pct", "start", "end"]


def series_to_frame(series: Series) -> pd.DataFrame:
    """Long-form frame with a UTC ``date`` column and a ``value`` column."""
    if not series:
        return pd.DataFrame(columns=["time", "date", "value"])
    frame = pd.DataFrame({"time": [p.time for p in series], "value": [p.value for p in series]})
    frame["date"] = pd.to_datetime(frame["time"], unit="ms", utc=True)
    return frame[["time", "date", "value"]]


def build_summary(named_series: dict[str, Series]) -> pd.DataFrame:
    """Compute first/last value, total return and max drawdown per named series."""
    rows = []
    for name, series in named_series.items():
        frame = series_to_frame(series)
        if frame.empty:
            continue
        values = frame["value"]
        rows.append(
            {
                "series": name,
                "start_value": float(values.iloc[0]),
                "last_value": float(values.iloc[-1]),
                "total_return_pct": compute_total_return_pct(values),
                "max_drawdown_pct": compute_max_drawdown_pct(values),
                "start": frame["date"].iloc[0],
                "end": frame["date"].iloc[-1],
            }
        )

    if not rows:
        return pd.DataFrame(columns=SUMMARY_COLUMNS)
    return pd.DataFrame(rows)[SUMMARY_COLUMNS]
