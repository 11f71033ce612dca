"""Patching yfinance to bypass blocked domain checks."""

import logging

import yfinance.data

logger = logging.getLogger(__name__)

_applied = False


def patch_yfinance(enabled: bool) -> bool:
    """Skip yfinance's fc.yahoo.com cookie probe when ``enabled``.

    Returns True when the patch is active after the call.
    """
    global _applied
    if not enabled:
        logger.info("yfinance patch skipped (YFINANCE_SKIP_COOKIE_CHECK disabled)")
        return _applied
    if _applied:
        return True

    logger.info("Applying yfinance cookie check bypass patch")

    def _get_cookie_basic_patched(self, timeout=30):
        return True

    yfinance.data.YfData._get_cookie_basic = _get_cookie_basic_patched
    _applied = True
    return True
