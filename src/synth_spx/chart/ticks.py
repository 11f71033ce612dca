"""Interval-aware tick placement and labelling for the chart axes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from ..utils.errors import DegenerateIntervalError

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS

# None means calendar-aware stepping
STEP_MS: dict[str, Optional[int]] = {
    "1": MINUTE_MS,
    "5": 5 * MINUTE_MS,
    "15": 15 * MINUTE_MS,
    "60": HOUR_MS,
    "D": DAY_MS,
    "W": WEEK_MS,
    "M": None,
}
# floor-to-bucket alignment for the fixed-size intervals
BUCKET_MS = {"1": MINUTE_MS, "5": 5 * MINUTE_MS, "15": 15 * MINUTE_MS, "60": HOUR_MS, "D": DAY_MS}

TICK_GUARD = 5000
MIN_LABEL_GAP = 80
Y_TICK_COUNT = 6

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True)
class XTick:
    x: float
    ts: int


@dataclass(frozen=True, slots=True)
class XLabel:
    x: float
    label: str


@dataclass(frozen=True, slots=True)
class YTick:
    y: float
    value: float
    label: str


def to_datetime(ts: float) -> datetime:
    """UTC datetime for a millisecond timestamp (negative timestamps included)."""
    return _EPOCH + timedelta(milliseconds=math.floor(ts))


def to_timestamp(dt: datetime) -> int:
    return (dt - _EPOCH) // timedelta(milliseconds=1)


def step_ms(interval: str) -> Optional[int]:
    return STEP_MS.get(interval, DAY_MS)


def align_to_interval(ts: float, interval: str) -> int:
    """Floor ``ts`` to the start of its interval bucket, in UTC."""
    ms = math.floor(ts)
    if interval == "M":
        dt = to_datetime(ms).replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        return to_timestamp(dt)
    if interval == "W":
        day_start = ms - ms % DAY_MS
        return day_start - to_datetime(day_start).weekday() * DAY_MS
    bucket = BUCKET_MS.get(interval)
    if bucket is None:
        return ms
    return ms - ms % bucket


def add_interval(ts: int, interval: str) -> int:
    """Advance ``ts`` by one interval; months follow the calendar."""
    if interval == "M":
        dt = to_datetime(ts)
        year, month = (dt.year + 1, 1) if dt.month == 12 else (dt.year, dt.month + 1)
        first_of_next = dt.replace(year=year, month=month, day=1)
        # day overflow rolls into the following month, e.g. Jan 31 -> Mar 3
        return to_timestamp(first_of_next + timedelta(days=dt.day - 1))
    step = step_ms(interval) or DAY_MS
    return ts + step


def tick_label(ts: float, interval: str) -> str:
    dt = to_datetime(ts)
    if interval in ("1", "5", "15", "60"):
        return dt.strftime("%H:%M")
    if interval in ("D", "W"):
        return dt.strftime("%b %d")
    return dt.strftime("%b %y")


def generate_x_ticks(x_min: float, x_max: float, interval: str, x_scale: Callable[[float], float]) -> list[XTick]:
    """Interval-aligned ticks covering ``[x_min, x_max]``.

    Raises DegenerateIntervalError when more than TICK_GUARD ticks would be
    needed. Fewer than two aligned ticks are topped up with the window edges.
    """
    ticks: list[XTick] = []
    t = align_to_interval(x_min, interval)
    while t <= x_max:
        if len(ticks) >= TICK_GUARD:
            raise DegenerateIntervalError(
                f"Interval {interval!r} needs more than {TICK_GUARD} ticks between {x_min} and {x_max}"
            )
        ticks.append(XTick(x=x_scale(t), ts=t))
        t = add_interval(t, interval)

    if len(ticks) < 2:
        ticks.extend(edge_ticks(x_min, x_max, x_scale))
    return ticks


def edge_ticks(x_min: float, x_max: float, x_scale: Callable[[float], float]) -> list[XTick]:
    return [XTick(x=x_scale(x_min), ts=int(x_min)), XTick(x=x_scale(x_max), ts=int(x_max))]


def select_x_labels(ticks: list[XTick], interval: str, min_gap: float = MIN_LABEL_GAP) -> list[XLabel]:
    """Greedily label ticks at least ``min_gap`` px apart, keeping both ends when room allows.

    The first tick is always labelled; the last one is added when it sits more
    than ``min_gap / 2`` px from the last greedy label.
    """
    labels: list[XLabel] = []
    last_x = float("-inf")
    for tick in ticks:
        if tick.x - last_x >= min_gap:
            labels.append(XLabel(x=tick.x, label=tick_label(tick.ts, interval)))
            last_x = tick.x

    if labels:
        last_tick = ticks[-1]
        if abs(labels[-1].x - last_tick.x) > min_gap / 2:
            labels.append(XLabel(x=last_tick.x, label=tick_label(last_tick.ts, interval)))
    return labels


def generate_y_ticks(
    t_min: float,
    t_max: float,
    to_pixel: Callable[[float], float],
    inverse: Callable[[float], float],
    formatter: Callable[[float], str],
    count: int = Y_TICK_COUNT,
) -> list[YTick]:
    """``count`` evenly spaced ticks over the transformed range ``[t_min, t_max]``."""
    ticks = []
    for i in range(count):
        tv = t_min + (t_max - t_min) / (count - 1) * i
        raw = inverse(tv)
        ticks.append(YTick(y=to_pixel(tv), value=raw, label=formatter(raw)))
    return ticks
