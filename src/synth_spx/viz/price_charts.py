"""Plotly figure builders for price charts."""

from __future__ import annotations

import plotly.graph_objects as go

from ..analytics.summary import series_to_frame
from ..domain import Series


def make_comparison_chart(
    raw: Series,
    synthetic: Series,
    title: str,
    log_y: bool = False,
    synthetic_name: str = "Synthetic",
) -> go.Figure:
    """Overlay the reference index (rebased to the synthetic start) and the synthetic curve."""
    fig = go.Figure()

    if not raw or not synthetic:
        fig.add_annotation(text="No data to display", showarrow=False, x=0.5, y=0.5, xref="paper", yref="paper")
        fig.update_layout(title=title, template="plotly_white")
        return fig

    raw_frame = series_to_frame(raw)
    synth_frame = series_to_frame(synthetic)

    first = raw_frame["value"].iloc[0]
    rebased = raw_frame["value"] / first * synth_frame["value"].iloc[0] if first else raw_frame["value"]

    fig.add_trace(go.Scatter(x=raw_frame["date"], y=rebased, mode="lines", name="SPX (rebased)"))
    fig.add_trace(go.Scatter(x=synth_frame["date"], y=synth_frame["value"], mode="lines", name=synthetic_name))

    fig.update_layout(
        title=title,
        xaxis_title="Time",
        yaxis_title="Value",
        hovermode="x unified",
        template="plotly_white",
        legend_title="Series",
    )

    if log_y:
        fig.update_yaxes(type="log")

    return fig
