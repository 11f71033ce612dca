"""Viewport state and the zoom / pan / crosshair transitions over it.

Every handler takes the current :class:`ViewportState` plus an event and
returns a new state; nothing is mutated in place. The pan gesture is an
explicit two-state machine (:class:`Idle` / :class:`Panning`).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Optional, Union

from ..config import CHART_HEIGHT, CHART_PAD, CHART_RIGHT_MARGIN, CHART_WIDTH
from ..domain import Domain, Series
from .scale import ChartGeometry

ZOOM_INTENSITY = 0.2
ZOOM_MIN_SPAN_DIVISOR = 500
PAN_MIN_SPAN_DIVISOR = 1000


@dataclass(frozen=True, slots=True)
class ChartLayout:
    width: float = CHART_WIDTH
    height: float = CHART_HEIGHT
    pad: float = CHART_PAD
    right_margin: float = CHART_RIGHT_MARGIN

    @property
    def plot_width(self) -> float:
        return max(1, self.width - self.pad - self.right_margin)

    def pixel_to_time(self, px: float, domain: Domain) -> float:
        return domain.x0 + (px - self.pad) / self.plot_width * domain.span


# --- events ---


@dataclass(frozen=True, slots=True)
class WheelEvent:
    px: float
    delta_y: float


@dataclass(frozen=True, slots=True)
class PointerDown:
    px: float


@dataclass(frozen=True, slots=True)
class PointerMove:
    px: float


@dataclass(frozen=True, slots=True)
class PointerUp:
    pass


@dataclass(frozen=True, slots=True)
class PointerLeave:
    pass


@dataclass(frozen=True, slots=True)
class FitToScreen:
    pass


ViewportEvent = Union[WheelEvent, PointerDown, PointerMove, PointerUp, PointerLeave, FitToScreen]


# --- state ---


@dataclass(frozen=True, slots=True)
class Idle:
    pass


@dataclass(frozen=True, slots=True)
class Panning:
    start_px: float
    origin: Domain


PanState = Union[Idle, Panning]
IDLE = Idle()


@dataclass(frozen=True, slots=True)
class Crosshair:
    x: float
    y: float
    ts: int
    value: float


@dataclass(frozen=True, slots=True)
class ViewportState:
    domain: Optional[Domain] = None
    pan: PanState = IDLE
    crosshair: Optional[Crosshair] = None

    @property
    def is_auto_fit(self) -> bool:
        return self.domain is None

    @property
    def is_panning(self) -> bool:
        return isinstance(self.pan, Panning)

    def active_domain(self, full: Domain) -> Domain:
        return self.domain if self.domain is not None else full


def full_domain(series: Series) -> Domain:
    if not series:
        return Domain(0, 1)
    return Domain(series[0].time, series[-1].time)


def _can_navigate(series: Series, full: Domain) -> bool:
    return len(series) > 1 and full.span > 0


def zoom(state: ViewportState, event: WheelEvent, series: Series, layout: ChartLayout) -> ViewportState:
    """Scale the window around the timestamp under the cursor.

    Positive ``delta_y`` zooms out. The result stays inside the full extent
    and never narrows below 1/500th of it.
    """
    full = full_domain(series)
    if not _can_navigate(series, full):
        return state

    active = state.active_domain(full)
    t = layout.pixel_to_time(event.px, active)
    direction = 1 if event.delta_y > 0 else -1
    scale = math.exp(direction * ZOOM_INTENSITY)

    new_x0 = t - (t - active.x0) * scale
    new_x1 = t + (active.x1 - t) * scale
    min_span = full.span / ZOOM_MIN_SPAN_DIVISOR
    x0 = max(full.x0, min(new_x0, new_x1 - min_span))
    x1 = min(full.x1, max(new_x1, new_x0 + min_span))
    return replace(state, domain=Domain(x0, x1))


def pointer_down(state: ViewportState, event: PointerDown, series: Series) -> ViewportState:
    """Idle -> Panning, capturing the pointer position and the window at this instant."""
    active = state.active_domain(full_domain(series))
    return replace(state, pan=Panning(start_px=event.px, origin=active))


def pointer_up(state: ViewportState) -> ViewportState:
    return replace(state, pan=IDLE)


def pointer_leave(state: ViewportState) -> ViewportState:
    return replace(state, crosshair=None)


def pointer_move(
    state: ViewportState,
    event: PointerMove,
    series: Series,
    layout: ChartLayout,
    geometry: ChartGeometry,
) -> ViewportState:
    """Update the crosshair and, while Panning, shift the window by the drag distance."""
    state = replace(state, crosshair=find_crosshair(state, event.px, series, layout, geometry))
    if isinstance(state.pan, Panning):
        state = replace(state, domain=pan_domain(state.pan, event.px, series, layout))
    return state


def pan_domain(pan: Panning, px: float, series: Series, layout: ChartLayout) -> Domain:
    """Window after dragging from ``pan.start_px`` to ``px``, clamped to the full extent."""
    full = full_domain(series)
    origin = pan.origin
    if not _can_navigate(series, full):
        return origin

    dt = -(px - pan.start_px) / layout.plot_width * origin.span
    span = max(origin.span, full.span / PAN_MIN_SPAN_DIVISOR)
    # left edge wins when the span is the whole extent
    x0 = max(full.x0, min(origin.x0 + dt, full.x1 - span))
    x1 = min(full.x1, x0 + span)
    return Domain(x0, x1)


def find_crosshair(
    state: ViewportState,
    px: float,
    series: Series,
    layout: ChartLayout,
    geometry: ChartGeometry,
) -> Optional[Crosshair]:
    """Nearest point in time to the cursor among points inside the active window."""
    if not series:
        return None

    active = state.active_domain(full_domain(series))
    px = min(max(px, 0), layout.width)
    ts = layout.pixel_to_time(px, active)

    visible = [p for p in series if active.x0 <= p.time <= active.x1]
    nearest = min(visible, key=lambda p: abs(p.time - ts)) if visible else series[0]
    return Crosshair(
        x=geometry.x_scale(nearest.time),
        y=geometry.y_scale(nearest.value),
        ts=nearest.time,
        value=nearest.value,
    )


def fit(state: ViewportState) -> ViewportState:
    """Drop the window override so the next render fits the full series."""
    return replace(state, domain=None)


def on_series_changed(state: ViewportState) -> ViewportState:
    """Series or start filter changed: back to auto-fit with no gesture in flight."""
    return ViewportState()


def handle_event(
    state: ViewportState,
    event: ViewportEvent,
    series: Series,
    layout: ChartLayout,
    geometry: ChartGeometry,
) -> ViewportState:
    if isinstance(event, WheelEvent):
        return zoom(state, event, series, layout)
    if isinstance(event, PointerDown):
        return pointer_down(state, event, series)
    if isinstance(event, PointerMove):
        return pointer_move(state, event, series, layout, geometry)
    if isinstance(event, PointerUp):
        return pointer_up(state)
    if isinstance(event, PointerLeave):
        return pointer_leave(state)
    if isinstance(event, FitToScreen):
        return fit(state)
    raise TypeError(f"Unsupported viewport event: {event!r}")
