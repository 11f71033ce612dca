"""Flask proxy exposing ``GET /api/spx`` over the upstream index series."""

from __future__ import annotations

import logging
from typing import Optional

from flask import Flask, jsonify, request

from ..config import Settings
from ..data.normalization import series_to_payload
from ..data.providers import SeriesProvider
from ..data.yahoo_chart import YahooChartProvider
from ..utils.errors import BadPayloadError, UpstreamError
from ..utils.logging import get_logger

logger = logging.getLogger(__name__)

DEFAULT_RANGE = "2y"
DEFAULT_INTERVAL = "1d"


def build_upstream_provider(settings: Settings) -> SeriesProvider:
    if settings.upstream == "yfinance":
        from ..data.yfinance_provider import YFinanceSeriesProvider

        return YFinanceSeriesProvider(settings.symbol, skip_cookie_check=settings.skip_cookie_check)
    return YahooChartProvider(settings.symbol, timeout=settings.http_timeout)


def create_app(provider: Optional[SeriesProvider] = None, settings: Optional[Settings] = None) -> Flask:
    settings = settings or Settings.from_env()
    provider = provider or build_upstream_provider(settings)

    app = Flask(__name__)
    app.config["SPX_SYMBOL"] = settings.symbol

    @app.get("/api/spx")
    def spx():
        range_ = request.args.get("range", DEFAULT_RANGE)
        interval = request.args.get("interval", DEFAULT_INTERVAL)
        try:
            series = provider.fetch_series(range_, interval)
        except UpstreamError as err:
            logger.warning("Upstream failed for range=%s interval=%s: %s", range_, interval, err)
            return jsonify({"error": "Upstream failed", "status": err.status}), 502
        except BadPayloadError as err:
            logger.warning("Bad upstream data for range=%s interval=%s: %s", range_, interval, err)
            return jsonify({"error": "Bad upstream data"}), 500
        except Exception:
            logger.exception("Error in /api/spx")
            return jsonify({"error": "Internal error"}), 500

        return jsonify(series_to_payload(series))

    return app


def main() -> None:
    get_logger(__name__)
    settings = Settings.from_env()
    app = create_app(settings=settings)
    logger.info("Serving /api/spx for %s via %s upstream", settings.symbol, settings.upstream)
    app.run(host=settings.proxy_host, port=settings.proxy_port)


if __name__ == "__main__":
    main()
