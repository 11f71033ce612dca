"""Minimal logger helper shared by the dashboard and the proxy entrypoints."""

from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return ``name``'s logger, configuring the root logger on first use.

    The level comes from ``SPX_LOG_LEVEL`` (default ``INFO``).
    """
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        level = os.getenv("SPX_LOG_LEVEL", "INFO").upper()
        logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    return logger
