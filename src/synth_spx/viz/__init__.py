"""Presentation helpers: SVG chart markup and plotly figures."""

from .price_charts import make_comparison_chart
from .svg_chart import chart_title, render_svg

__all__ = ["chart_title", "make_comparison_chart", "render_svg"]
