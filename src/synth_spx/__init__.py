"""synth_spx package: UI-agnostic logic for the synthetic leveraged SPX chart."""

from .domain import DashboardState, Domain, PricePoint, Series, YMode, parse_leverage

__all__ = ["DashboardState", "Domain", "PricePoint", "Series", "YMode", "parse_leverage"]
