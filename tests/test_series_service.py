import pytest

from synth_spx.chart.viewport import ViewportState
from synth_spx.domain import DashboardState, Domain
from synth_spx.services import SeriesLoader, build_view, choose_range, load_series_with_fallback
from synth_spx.services.series_service import YEAR_MS
from synth_spx.utils import UpstreamError
from synth_spx.viz import render_svg

from conftest import make_series

NOW = 60 * YEAR_MS


class StubProvider:
    def __init__(self, series=None, error: Exception | None = None) -> None:
        self.series = series or []
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def fetch_series(self, range_: str, interval: str):
        self.calls.append((range_, interval))
        if self.error is not None:
            raise self.error
        return self.series


def _demo():
    return make_series([1, 2, 3], start=10, step=10)


@pytest.mark.parametrize("interval", ["1", "5", "15", "60"])
def test_intraday_always_requests_five_days(interval) -> None:
    assert choose_range(interval, NOW - 20 * YEAR_MS, NOW) == "5d"


@pytest.mark.parametrize(
    "years_back, expected",
    [(None, "10y"), (11, "max"), (10, "10y"), (6, "10y"), (5, "5y"), (3, "5y"), (2, "2y"), (0.5, "2y")],
)
def test_range_policy_for_daily_and_longer(years_back, expected) -> None:
    start = None if years_back is None else NOW - years_back * YEAR_MS
    for interval in ("D", "W", "M"):
        assert choose_range(interval, start, NOW) == expected


def test_load_maps_interval_and_range() -> None:
    provider = StubProvider(make_series([1, 2]))

    result = load_series_with_fallback(provider, "D", None, NOW)

    assert provider.calls == [("10y", "1d")]
    assert result.advisory is None
    assert not result.is_demo
    assert len(result.series) == 2


@pytest.mark.parametrize("error", [UpstreamError("Backend /api/spx failed: 502", status=502), RuntimeError("boom")])
def test_fetch_failure_falls_back_to_demo(error) -> None:
    result = load_series_with_fallback(StubProvider(error=error), "60", demo_factory=_demo)

    assert result.is_demo
    assert result.series == _demo()
    assert result.range_ == "5d"
    assert result.advisory


def test_stale_fetch_is_discarded() -> None:
    loader = SeriesLoader(StubProvider(make_series([1, 2])))
    stale = loader.begin()
    current = loader.begin()

    fresh = load_series_with_fallback(loader.provider, "D")
    assert loader.commit(stale, fresh) is False
    assert loader.result is None
    assert loader.commit(current, fresh) is True
    assert loader.result is fresh
    assert loader.revision == 1


def test_loader_load_commits_latest() -> None:
    loader = SeriesLoader(StubProvider(error=RuntimeError("offline")), demo_factory=_demo)

    result = loader.load("W")

    assert result is loader.result
    assert result.series == _demo()


def test_build_view_applies_leverage_and_geometry() -> None:
    raw = make_series([100, 110, 99], start=0, step=60_000)
    view = build_view(raw, DashboardState(leverage=2, interval="1"), ViewportState())

    assert [p.value for p in view.synthetic] == pytest.approx([100, 120, 96])
    assert view.has_chart
    assert view.geometry.path.startswith("M ")


def test_start_after_last_point_renders_placeholder() -> None:
    raw = make_series([100, 110, 99], start=0, step=60_000)
    state = DashboardState(start=10 * 60_000)

    view = build_view(raw, state, ViewportState(domain=Domain(0, 1)))

    assert view.filtered == []
    assert view.synthetic == []
    assert not view.has_chart
    assert "No data to display" in render_svg(view.geometry, view.synthetic, state.leverage, state.base)
