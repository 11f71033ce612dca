"""Chart geometry: scales, ticks and viewport handling."""

from .scale import ChartGeometry, ValueTransform, compute_geometry
from .viewport import ChartLayout, ViewportState, full_domain, handle_event

__all__ = [
    "ChartGeometry",
    "ChartLayout",
    "ValueTransform",
    "ViewportState",
    "compute_geometry",
    "full_domain",
    "handle_event",
]
