"""Service helpers that UI layers call."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from ..analytics.leverage import simulate
from ..chart.scale import ChartGeometry, compute_geometry
from ..chart.viewport import ChartLayout, ViewportState
from ..data.demo import build_demo_series
from ..data.normalization import filter_from_start
from ..data.providers import SeriesProvider
from ..domain import INTERVAL_MAP, INTRADAY_INTERVALS, DashboardState, Series
from ..utils.errors import DataRetrievalError

logger = logging.getLogger(__name__)

YEAR_MS = 365 * 24 * 60 * 60 * 1000
FALLBACK_MESSAGE = "Failed to fetch data. Using demo series."


def choose_range(interval: str, start_ts: Optional[float], now_ms: Optional[float] = None) -> str:
    """Upstream range for an interval and an optional start timestamp."""
    if interval in INTRADAY_INTERVALS:
        return "5d"
    if not start_ts:
        return "10y"

    now_ms = time.time() * 1000 if now_ms is None else now_ms
    years = (now_ms - start_ts) / YEAR_MS
    if years > 10:
        return "max"
    if years > 5:
        return "10y"
    if years > 2:
        return "5y"
    return "2y"


def get_series(provider: SeriesProvider, range_: str, interval: str) -> Series:
    """Fetch the raw series, wrapping unexpected failures."""
    try:
        return provider.fetch_series(range_, interval)
    except Exception as err:
        if isinstance(err, DataRetrievalError):
            raise
        raise DataRetrievalError(f"Failed to fetch prices: {err}") from err


@dataclass(slots=True)
class LoadResult:
    series: Series
    range_: str
    interval: str
    advisory: Optional[str] = None

    @property
    def is_demo(self) -> bool:
        return self.advisory is not None


def load_series_with_fallback(
    provider: SeriesProvider,
    interval: str,
    start_ts: Optional[float] = None,
    now_ms: Optional[float] = None,
    demo_factory: Callable[[], Series] = build_demo_series,
) -> LoadResult:
    """Fetch the series for ``interval``; any fetch failure yields the demo series and an advisory."""
    range_ = choose_range(interval, start_ts, now_ms)
    upstream_interval = INTERVAL_MAP.get(interval, "1d")
    try:
        series = get_series(provider, range_, upstream_interval)
    except DataRetrievalError as err:
        logger.warning("Using demo series after fetch failure: %s", err)
        return LoadResult(series=demo_factory(), range_=range_, interval=interval, advisory=str(err) or FALLBACK_MESSAGE)
    return LoadResult(series=series, range_=range_, interval=interval)


class SeriesLoader:
    """Commits fetch results only if no newer fetch has started since.

    Each :meth:`begin` supersedes every earlier ticket, so a slow response
    for a stale interval or start date is dropped instead of replacing the
    current series.
    """

    def __init__(self, provider: SeriesProvider, demo_factory: Callable[[], Series] = build_demo_series) -> None:
        self.provider = provider
        self.demo_factory = demo_factory
        self.result: Optional[LoadResult] = None
        self.revision = 0
        self._generation = 0

    def begin(self) -> int:
        self._generation += 1
        return self._generation

    def is_current(self, ticket: int) -> bool:
        return ticket == self._generation

    def commit(self, ticket: int, result: LoadResult) -> bool:
        if not self.is_current(ticket):
            logger.debug("Discarding stale fetch %d (current %d)", ticket, self._generation)
            return False
        self.result = result
        self.revision += 1
        return True

    def load(self, interval: str, start_ts: Optional[float] = None, now_ms: Optional[float] = None) -> Optional[LoadResult]:
        ticket = self.begin()
        result = load_series_with_fallback(self.provider, interval, start_ts, now_ms, self.demo_factory)
        return result if self.commit(ticket, result) else None


@dataclass(slots=True)
class ChartView:
    filtered: Series
    synthetic: Series
    geometry: ChartGeometry
    layout: ChartLayout = field(default_factory=ChartLayout)

    @property
    def has_chart(self) -> bool:
        return len(self.synthetic) > 1


def build_view(
    raw: Series,
    state: DashboardState,
    viewport: ViewportState,
    layout: Optional[ChartLayout] = None,
) -> ChartView:
    """raw series -> start filter -> leverage simulation -> geometry for the active window."""
    layout = layout or ChartLayout()
    filtered = filter_from_start(raw, state.start)
    synthetic = simulate(filtered, state.leverage, state.base)
    geometry = compute_geometry(
        synthetic,
        layout.width,
        layout.height,
        layout.pad,
        state.interval,
        viewport.domain,
        state.y_mode,
        layout.right_margin,
    )
    return ChartView(filtered=filtered, synthetic=synthetic, geometry=geometry, layout=layout)
