"""Streamlit entrypoint for the synthetic leveraged S&P 500 chart."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Optional

# --- Ensure src is on path for local imports ---
ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.append(str(SRC))

import pandas as pd
import streamlit as st
import streamlit.components.v1 as components

from synth_spx import DashboardState  # noqa: E402
from synth_spx.analytics import build_summary  # noqa: E402
from synth_spx.chart.viewport import (  # noqa: E402
    ChartLayout,
    FitToScreen,
    PointerDown,
    PointerLeave,
    PointerMove,
    PointerUp,
    ViewportEvent,
    ViewportState,
    WheelEvent,
    handle_event,
    on_series_changed,
)
from synth_spx.config import Settings  # noqa: E402
from synth_spx.data import SpxApiClient  # noqa: E402
from synth_spx.domain import (  # noqa: E402
    INTERVAL_LABELS,
    Y_SCALE_LABELS,
    format_leverage,
    leverage_presets,
    parse_interval,
    parse_leverage,
    parse_theme,
    parse_y_mode,
)
from synth_spx.services import ChartView, SeriesLoader, build_view  # noqa: E402
from synth_spx.utils import InvalidLeverageError, get_logger  # noqa: E402
from synth_spx.viz import chart_title, make_comparison_chart, render_svg  # noqa: E402

logger = get_logger(__name__)

LAYOUT = ChartLayout()
PAN_STEP_PX = 120


def parse_start(raw: str) -> Optional[int]:
    """Millisecond timestamp for a user-entered datetime, or None when blank/invalid."""
    raw = raw.strip()
    if not raw:
        return None
    try:
        ts = pd.Timestamp(raw)
    except (ValueError, TypeError):
        return None
    if pd.isna(ts):
        return None
    ts = ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")
    return int(ts.value // 1_000_000)


def init_state() -> None:
    if "dashboard" not in st.session_state:
        st.session_state.dashboard = DashboardState()
    if "viewport" not in st.session_state:
        st.session_state.viewport = ViewportState()
    if "loader" not in st.session_state:
        settings = Settings.from_env()
        st.session_state.loader = SeriesLoader(SpxApiClient(settings.api_url, timeout=settings.http_timeout))
    st.session_state.setdefault("reload_key", 0)
    st.session_state.setdefault("fetched_key", None)
    st.session_state.setdefault("viewed_key", None)
    st.session_state.setdefault("show_crosshair", False)


def current_view() -> ChartView:
    loader: SeriesLoader = st.session_state.loader
    raw = loader.result.series if loader.result else []
    return build_view(raw, st.session_state.dashboard, st.session_state.viewport, LAYOUT)


def dispatch(*events: ViewportEvent) -> None:
    for event in events:
        view = current_view()
        st.session_state.viewport = handle_event(
            st.session_state.viewport, event, view.synthetic, LAYOUT, view.geometry
        )


def reload() -> None:
    st.session_state.reload_key += 1


def reset_all() -> None:
    st.session_state.dashboard = DashboardState()
    st.session_state.viewport = ViewportState()
    for key in ("leverage_token", "interval_token", "theme_token", "start_text", "base_value", "y_mode_token"):
        st.session_state.pop(key, None)
    reload()


def render_controls() -> DashboardState:
    st.sidebar.header("Chart Controls")
    presets = leverage_presets()
    labels = {token: label for label, token in presets}

    token = st.sidebar.selectbox(
        "Synthetic Leverage", options=list(labels), format_func=labels.get, key="leverage_token"
    )
    try:
        leverage = parse_leverage(token)
    except InvalidLeverageError as err:
        st.sidebar.error(str(err))
        leverage = st.session_state.dashboard.leverage

    interval = parse_interval(
        st.sidebar.selectbox(
            "Interval", options=list(INTERVAL_LABELS), index=3, format_func=INTERVAL_LABELS.get, key="interval_token"
        )
    )
    theme = parse_theme(st.sidebar.selectbox("Theme", options=["light", "dark"], key="theme_token"))
    start_text = st.sidebar.text_input("Start (YYYY-MM-DD HH:MM, UTC)", key="start_text", placeholder="2015-01-01")
    base = st.sidebar.number_input("Base (starting value)", min_value=0.0, value=100.0, step=1.0, key="base_value")
    y_mode = parse_y_mode(
        st.sidebar.radio("Y Scale", options=list(Y_SCALE_LABELS), format_func=Y_SCALE_LABELS.get, key="y_mode_token")
    )

    return DashboardState(
        leverage=leverage, interval=interval, y_mode=y_mode, base=base, start=parse_start(start_text), theme=theme
    )


def ensure_series(state: DashboardState) -> None:
    """Fetch when the interval, start or reload counter changed; refit on new data or start."""
    loader: SeriesLoader = st.session_state.loader
    fetch_key = (state.interval, state.start, st.session_state.reload_key)
    if st.session_state.fetched_key != fetch_key:
        with st.spinner("Fetching SPX series..."):
            loader.load(state.interval, state.start)
        st.session_state.fetched_key = fetch_key

    viewed_key = (loader.revision, state.start)
    if st.session_state.viewed_key != viewed_key:
        st.session_state.viewport = on_series_changed(st.session_state.viewport)
        st.session_state.viewed_key = viewed_key


def render_navigation() -> None:
    center = LAYOUT.pad + LAYOUT.plot_width / 2
    cols = st.columns([1, 1, 1, 1, 1, 1, 2])
    cols[0].button("Reload", on_click=reload, use_container_width=True)
    cols[1].button("Fit", on_click=dispatch, args=(FitToScreen(),), use_container_width=True)
    cols[2].button("Reset", on_click=reset_all, use_container_width=True)
    cols[3].button("Zoom in", on_click=dispatch, args=(WheelEvent(center, -1),), use_container_width=True)
    cols[4].button("Zoom out", on_click=dispatch, args=(WheelEvent(center, 1),), use_container_width=True)
    with cols[5]:
        left, right = st.columns(2)
        left.button(
            "◀",
            on_click=dispatch,
            args=(PointerDown(center), PointerMove(center + PAN_STEP_PX), PointerUp(), PointerLeave()),
            use_container_width=True,
        )
        right.button(
            "▶",
            on_click=dispatch,
            args=(PointerDown(center), PointerMove(center - PAN_STEP_PX), PointerUp(), PointerLeave()),
            use_container_width=True,
        )
    cols[6].checkbox("Crosshair", key="show_crosshair")


def main() -> None:
    st.set_page_config(page_title="Synthetic SPX", layout="wide")
    st.title("Live Synthetic S&P 500 (±1×…±10× SPX)")
    init_state()

    state = render_controls()
    st.session_state.dashboard = state
    ensure_series(state)
    render_navigation()

    loader: SeriesLoader = st.session_state.loader
    if loader.result and loader.result.advisory:
        st.warning(f"Data note: {loader.result.advisory}")

    if st.session_state.show_crosshair:
        px = st.slider(
            "Crosshair position (px)",
            min_value=int(LAYOUT.pad),
            max_value=int(LAYOUT.width - LAYOUT.right_margin),
            value=int(LAYOUT.pad + LAYOUT.plot_width / 2),
        )
        dispatch(PointerMove(px))
    elif st.session_state.viewport.crosshair is not None:
        dispatch(PointerLeave())

    view = current_view()
    if view.geometry.notice:
        st.caption(f"Axis note: {view.geometry.notice}")

    svg = render_svg(
        view.geometry,
        view.synthetic,
        state.leverage,
        state.base,
        theme=state.theme,
        crosshair=st.session_state.viewport.crosshair,
        start_ts=state.start,
        layout=LAYOUT,
    )
    components.html(svg, height=int(LAYOUT.height) + 20)
    st.caption(
        "Y-scale supports Linear, Log (if values > 0), and Percent (relative to the left edge of the visible range)."
    )

    tab_compare, tab_summary, tab_download = st.tabs(["📈 Comparison", "📊 Summary", "📥 Downloads"])
    synthetic_name = f"Synthetic {format_leverage(state.leverage)}x"

    with tab_compare:
        fig = make_comparison_chart(
            view.filtered,
            view.synthetic,
            title=chart_title(state.leverage, state.base),
            log_y=state.y_mode == "log",
            synthetic_name=synthetic_name,
        )
        st.plotly_chart(fig, use_container_width=True)

    with tab_summary:
        summary = build_summary({"SPX": view.filtered, synthetic_name: view.synthetic})
        if summary.empty:
            st.info("Summary not available for the selected inputs.")
        else:
            display = summary.set_index("series")
            display["total_return_pct"] = display["total_return_pct"].map("{:.2f}%".format)
            display["max_drawdown_pct"] = display["max_drawdown_pct"].map("{:.2f}%".format)
            st.dataframe(display, use_container_width=True)

    with tab_download:
        if view.synthetic:
            frame = pd.DataFrame(
                {
                    "time": [p.time for p in view.synthetic],
                    "spx": [p.value for p in view.filtered],
                    "synthetic": [p.value for p in view.synthetic],
                }
            )
            st.download_button(
                "Download series CSV",
                data=frame.to_csv(index=False),
                file_name=f"synthetic_spx_{date.today()}.csv",
                mime="text/csv",
            )
        else:
            st.info("Nothing to download yet.")


if __name__ == "__main__":
    main()
