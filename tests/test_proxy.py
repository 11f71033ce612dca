import pytest

from synth_spx.api import create_app
from synth_spx.config import Settings
from synth_spx.data.normalization import normalize_chart_payload
from synth_spx.data.yahoo_chart import YahooChartProvider
from synth_spx.utils import BadPayloadError, UpstreamError

from conftest import FakeResponse, FakeSession


class FakeProvider:
    def __init__(self, payload=None, error: Exception | None = None) -> None:
        self.payload = payload
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def fetch_series(self, range_: str, interval: str):
        self.calls.append((range_, interval))
        if self.error is not None:
            raise self.error
        return normalize_chart_payload(self.payload)


UPSTREAM_PAYLOAD = {
    "chart": {"result": [{"timestamp": [1000, 2000], "indicators": {"quote": [{"close": [50, float("nan")]}]}}]}
}


def _client(provider):
    app = create_app(provider=provider, settings=Settings())
    app.config["TESTING"] = True
    return app.test_client()


def test_proxy_returns_filtered_series() -> None:
    provider = FakeProvider(UPSTREAM_PAYLOAD)

    response = _client(provider).get("/api/spx?range=5d&interval=1m")

    assert response.status_code == 200
    assert response.get_json() == {"series": [{"time": 1_000_000, "value": 50.0}]}
    assert provider.calls == [("5d", "1m")]


def test_proxy_default_query() -> None:
    provider = FakeProvider(UPSTREAM_PAYLOAD)
    _client(provider).get("/api/spx")
    assert provider.calls == [("2y", "1d")]


@pytest.mark.parametrize(
    "error, status, body",
    [
        (UpstreamError("Upstream failed", status=404), 502, {"error": "Upstream failed", "status": 404}),
        (UpstreamError("connection refused"), 502, {"error": "Upstream failed", "status": None}),
        (BadPayloadError("Bad upstream data"), 500, {"error": "Bad upstream data"}),
        (RuntimeError("boom"), 500, {"error": "Internal error"}),
    ],
)
def test_proxy_error_mapping(error, status, body) -> None:
    response = _client(FakeProvider(error=error)).get("/api/spx")

    assert response.status_code == status
    assert response.get_json() == body


def test_chart_provider_fetches_encoded_symbol() -> None:
    session = FakeSession(FakeResponse(200, UPSTREAM_PAYLOAD))
    provider = YahooChartProvider("^GSPC", timeout=3, session=session)

    series = provider.fetch_series("10y", "1d")

    assert [p.time for p in series] == [1_000_000]
    call = session.calls[0]
    assert call["url"].endswith("/v8/finance/chart/%5EGSPC")
    assert call["params"] == {"range": "10y", "interval": "1d"}
    assert call["timeout"] == 3


def test_chart_provider_non_2xx_raises_with_status() -> None:
    provider = YahooChartProvider(session=FakeSession(FakeResponse(429, {})))

    with pytest.raises(UpstreamError) as excinfo:
        provider.fetch_series("2y", "1d")
    assert excinfo.value.status == 429


def test_chart_provider_transport_and_json_failures() -> None:
    import requests

    with pytest.raises(UpstreamError):
        YahooChartProvider(session=FakeSession(error=requests.ConnectionError("down"))).fetch_series("2y", "1d")

    with pytest.raises(BadPayloadError):
        YahooChartProvider(session=FakeSession(FakeResponse(200, json_error=True))).fetch_series("2y", "1d")


def test_end_to_end_through_proxy_with_chart_provider() -> None:
    session = FakeSession(FakeResponse(200, UPSTREAM_PAYLOAD))
    response = _client(YahooChartProvider(session=session)).get("/api/spx?range=5d&interval=60m")

    assert response.status_code == 200
    assert response.get_json()["series"] == [{"time": 1_000_000, "value": 50.0}]
