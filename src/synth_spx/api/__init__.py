"""HTTP proxy for the reference index series."""

from .app import build_upstream_provider, create_app

__all__ = ["build_upstream_provider", "create_app"]
