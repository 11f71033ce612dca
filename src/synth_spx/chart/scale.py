"""Value transforms and chart geometry for a visible time window."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..domain import Domain, PricePoint, Series, YMode
from ..utils.errors import DegenerateIntervalError
from .ticks import XLabel, XTick, YTick, edge_ticks, generate_x_ticks, generate_y_ticks, select_x_labels

logger = logging.getLogger(__name__)

MIN_REFERENCE = 1e-9
RANGE_PAD_FRACTION = 0.1


@dataclass(frozen=True, slots=True)
class ValueTransform:
    """Maps raw values onto the Y axis and back for one rendering."""

    mode: YMode
    anchor: float

    @property
    def reference(self) -> float:
        return max(MIN_REFERENCE, self.anchor)

    def apply(self, value: float) -> float:
        if self.mode == "log":
            return math.log(value) if value > 0 else float("-inf")
        if self.mode == "percent":
            return (value / self.reference - 1) * 100
        return value

    def invert(self, value: float) -> float:
        if self.mode == "log":
            return math.exp(value)
        if self.mode == "percent":
            return self.reference * (1 + value / 100)
        return value

    def format(self, value: float) -> str:
        """Axis label for a raw value: a percentage from the anchor in percent mode."""
        if self.mode == "percent":
            label = f"{(value / self.reference - 1) * 100:.1f}%"
            return "0.0%" if label == "-0.0%" else label
        return f"{value:.2f}"


def choose_transform(values: list[float], y_mode: YMode, anchor: float) -> ValueTransform:
    """Log mode only applies when every visible value is strictly positive."""
    if y_mode == "log" and not all(v > 0 for v in values):
        return ValueTransform(mode="linear", anchor=anchor)
    if y_mode not in ("linear", "log", "percent"):
        return ValueTransform(mode="linear", anchor=anchor)
    return ValueTransform(mode=y_mode, anchor=anchor)


def padded_range(transformed: list[float]) -> tuple[float, float]:
    t_min, t_max = min(transformed), max(transformed)
    if not (math.isfinite(t_min) and math.isfinite(t_max)):
        t_min, t_max = 0.0, 1.0
    if t_min == t_max:
        t_min -= 1
        t_max += 1
    pad = (t_max - t_min) * RANGE_PAD_FRACTION
    return t_min - pad, t_max + pad


def visible_slice(series: Series, domain: Domain) -> tuple[Series, float, float]:
    """Points inside ``domain`` clamped to the data extent.

    An empty clamp falls back to the whole series and its full extent.
    """
    x_min = max(domain.x0, series[0].time)
    x_max = min(domain.x1, series[-1].time)
    window = [p for p in series if x_min <= p.time <= x_max]
    if not window:
        return list(series), series[0].time, series[-1].time
    return window, x_min, x_max


def _identity(value: float) -> float:
    return value


@dataclass(slots=True)
class ChartGeometry:
    path: str = ""
    x_ticks: list[XTick] = field(default_factory=list)
    x_labels: list[XLabel] = field(default_factory=list)
    y_ticks: list[YTick] = field(default_factory=list)
    x_scale: Callable[[float], float] = _identity
    y_scale: Callable[[float], float] = _identity
    transform: ValueTransform = field(default_factory=lambda: ValueTransform(mode="linear", anchor=0.0))
    last: Optional[PricePoint] = None
    anchor: float = 0.0
    x_min: float = 0.0
    x_max: float = 1.0
    notice: Optional[str] = None

    @property
    def y_mode(self) -> YMode:
        return self.transform.mode

    @property
    def is_empty(self) -> bool:
        return self.last is None

    def format_value(self, value: float) -> str:
        return self.transform.format(value)


def compute_geometry(
    series: Series,
    width: float,
    height: float,
    pad: float,
    interval: str,
    domain: Optional[Domain],
    y_mode: YMode,
    right_margin: float,
) -> ChartGeometry:
    """Derive path, ticks and scales for ``series`` inside ``domain``.

    ``domain=None`` fits the whole series. Degenerate inputs are handled by
    substitution so this never raises for a well-formed series.
    """
    if not series:
        return ChartGeometry()

    if domain is None:
        domain = Domain(series[0].time, series[-1].time)

    window, x_min, x_max = visible_slice(series, domain)
    anchor = window[0].value
    values = [p.value for p in window]

    transform = choose_transform(values, y_mode, anchor)
    t_min, t_max = padded_range([transform.apply(v) for v in values])

    plot_width = width - pad - right_margin
    plot_height = height - 2 * pad
    x_span = max(1, x_max - x_min)
    t_span = max(MIN_REFERENCE, t_max - t_min)

    def x_scale(t: float) -> float:
        return pad + (t - x_min) / x_span * plot_width

    def t_to_pixel(tv: float) -> float:
        return height - pad - (tv - t_min) / t_span * plot_height

    def y_scale(v: float) -> float:
        return t_to_pixel(transform.apply(v))

    path = build_path(window, x_scale, y_scale)

    notice = None
    try:
        x_ticks = generate_x_ticks(x_min, x_max, interval, x_scale)
    except DegenerateIntervalError as err:
        logger.warning("Falling back to edge ticks: %s", err)
        notice = str(err)
        x_ticks = edge_ticks(x_min, x_max, x_scale)

    return ChartGeometry(
        path=path,
        x_ticks=x_ticks,
        x_labels=select_x_labels(x_ticks, interval),
        y_ticks=generate_y_ticks(t_min, t_max, t_to_pixel, transform.invert, transform.format),
        x_scale=x_scale,
        y_scale=y_scale,
        transform=transform,
        last=window[-1],
        anchor=anchor,
        x_min=x_min,
        x_max=x_max,
        notice=notice,
    )


def build_path(points: Series, x_scale: Callable[[float], float], y_scale: Callable[[float], float]) -> str:
    """SVG polyline commands: move to the first point, line to the rest."""
    commands = []
    for i, point in enumerate(points):
        verb = "M" if i == 0 else "L"
        commands.append(f"{verb} {x_scale(point.time):.2f} {y_scale(point.value):.2f}")
    return " ".join(commands)
