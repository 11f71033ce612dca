"""Render chart geometry as standalone SVG markup."""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import Optional

from ..chart.scale import ChartGeometry
from ..chart.ticks import to_datetime
from ..chart.viewport import ChartLayout, Crosshair
from ..domain import Series, Theme, format_leverage

NO_DATA_HTML = '<div class="synth-spx-empty" style="padding:24px;font-size:14px">No data to display.</div>'
GRID_COLOR = "#e5e7eb"
CROSS_COLOR = "#94a3b8"


@dataclass(frozen=True, slots=True)
class Palette:
    background: str
    foreground: str
    line: str
    badge: str


def palette(theme: Theme, leverage: int) -> Palette:
    dark = theme == "dark"
    if leverage >= 0:
        line = "#22c55e" if dark else "#16a34a"
    else:
        line = "#f87171" if dark else "#ef4444"
    return Palette(
        background="#0f172a" if dark else "#ffffff",
        foreground="#e2e8f0" if dark else "#0f172a",
        line=line,
        badge="#111827" if dark else "#f1f5f9",
    )


def format_timestamp(ts: float) -> str:
    return to_datetime(ts).strftime("%Y-%m-%d %H:%M UTC")


def chart_title(leverage: int, base: float) -> str:
    return f"Synthetic {format_leverage(leverage)}x SPX (base={base:g})"


def _value_label(geometry: ChartGeometry, value: float) -> str:
    text = f"{value:.2f}"
    if geometry.y_mode == "percent":
        text += f" ({geometry.format_value(value)})"
    return text


def _text(x: float, y: float, content: str, size: int, fill: str, anchor: Optional[str] = None) -> str:
    anchor_attr = f' text-anchor="{anchor}"' if anchor else ""
    return f'<text x="{x:.2f}" y="{y:.2f}" font-size="{size}" fill="{fill}"{anchor_attr}>{escape(content)}</text>'


def _line(x1: float, y1: float, x2: float, y2: float, stroke: str, width: float = 1, dash: str = "") -> str:
    dash_attr = f' stroke-dasharray="{dash}"' if dash else ""
    return (
        f'<line x1="{x1:.2f}" y1="{y1:.2f}" x2="{x2:.2f}" y2="{y2:.2f}" '
        f'stroke="{stroke}" stroke-width="{width}"{dash_attr}/>'
    )


def render_svg(
    geometry: ChartGeometry,
    synthetic: Series,
    leverage: int,
    base: float,
    theme: Theme = "light",
    crosshair: Optional[Crosshair] = None,
    start_ts: Optional[float] = None,
    layout: Optional[ChartLayout] = None,
) -> str:
    """SVG for the synthetic chart, or a placeholder when fewer than two points exist."""
    if len(synthetic) < 2 or geometry.is_empty:
        return NO_DATA_HTML

    layout = layout or ChartLayout()
    colors = palette(theme, leverage)
    w, h, pad = layout.width, layout.height, layout.pad
    axis_x = w - layout.right_margin
    top, bottom = 30, h - 30

    parts = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="100%" viewBox="0 0 {w:g} {h:g}" '
        f'role="img" aria-label="Synthetic S&amp;P 500 chart">',
        f'<rect x="0" y="0" width="{w:g}" height="{h:g}" fill="{colors.background}"/>',
        _line(axis_x, top, axis_x, bottom, GRID_COLOR),
    ]

    for tick in geometry.y_ticks:
        parts.append(_line(pad, tick.y, axis_x - 10, tick.y, GRID_COLOR, 0.5))
        parts.append(_text(5, tick.y + 4, tick.label, 10, colors.foreground))
    for tick in geometry.x_ticks:
        parts.append(_line(tick.x, bottom, tick.x, top, GRID_COLOR, 0.5))
    for label in geometry.x_labels:
        parts.append(_text(label.x, h - 10, label.label, 10, colors.foreground, anchor="middle"))

    parts.append(f'<path d="{geometry.path}" fill="none" stroke="{colors.line}" stroke-width="3"/>')

    last = geometry.last
    if last is not None:
        y = geometry.y_scale(last.value)
        parts.append(_line(pad, y, axis_x, y, colors.line, dash="6 4"))
        parts.append(_line(axis_x, y, axis_x + 6, y, colors.line))
        parts.append(
            f'<rect x="{axis_x + 10:.2f}" y="{y - 14:.2f}" width="120" height="28" rx="6" '
            f'fill="{colors.badge}" stroke="{colors.line}"/>'
        )
        parts.append(_text(axis_x + 16, y + 4, _value_label(geometry, last.value), 12, colors.foreground))

    if crosshair is not None:
        cx, cy = crosshair.x, crosshair.y
        parts.append(_line(cx, top, cx, bottom, CROSS_COLOR, dash="4 4"))
        parts.append(_line(pad, cy, axis_x - 10, cy, CROSS_COLOR, dash="4 4"))
        parts.append(f'<circle cx="{cx:.2f}" cy="{cy:.2f}" r="3" fill="{colors.line}"/>')
        parts.append(
            f'<rect x="{cx + 8:.2f}" y="{cy - 30:.2f}" width="220" height="28" rx="6" '
            f'fill="{colors.badge}" stroke="{CROSS_COLOR}"/>'
        )
        cross_label = f"{format_timestamp(crosshair.ts)} · {_value_label(geometry, crosshair.value)}"
        parts.append(_text(cx + 16, cy - 12, cross_label, 11, colors.foreground))

    parts.append(_text(50, 20, chart_title(leverage, base), 14, colors.foreground))
    if start_ts:
        parts.append(_text(400, 20, f"Start: {format_timestamp(start_ts)}", 12, colors.foreground))
    parts.append(_text(400, 36, f"Effective start: {format_timestamp(synthetic[0].time)}", 11, colors.foreground))
    final = synthetic[-1]
    parts.append(
        _text(axis_x - 280, 20, f"Last: {final.value:.2f} @ {format_timestamp(final.time)}", 12, colors.foreground)
    )

    parts.append("</svg>")
    return "\n".join(parts)
