import pandas as pd
import pytest

from synth_spx.data.normalization import (
    filter_from_start,
    normalize_chart_payload,
    normalize_series_payload,
    normalize_yfinance_history,
    series_to_payload,
)
from synth_spx.domain import PricePoint
from synth_spx.utils import BadPayloadError

from conftest import make_series


def chart_payload(timestamps, closes) -> dict:
    return {"chart": {"result": [{"timestamp": timestamps, "indicators": {"quote": [{"close": closes}]}}]}}


def test_chart_payload_converts_seconds_and_drops_nan() -> None:
    series = normalize_chart_payload(chart_payload([1000, 2000], [50, float("nan")]))
    assert series == [PricePoint(time=1_000_000, value=50.0)]


def test_chart_payload_drops_missing_closes() -> None:
    series = normalize_chart_payload(chart_payload([1, 2, 3], [10.5, None, 11]))
    assert [p.time for p in series] == [1000, 3000]


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"chart": {"result": None}},
        {"chart": {"result": []}},
        {"chart": {"result": [{"timestamp": [1]}]}},
        chart_payload([], [1.0]),
        chart_payload([1], None),
        None,
    ],
)
def test_malformed_chart_payload(payload) -> None:
    with pytest.raises(BadPayloadError):
        normalize_chart_payload(payload)


def test_series_payload_round_trip_shape() -> None:
    series = make_series([1.5, 2.5], start=1000, step=1000)
    assert series_to_payload(series) == {"series": [{"time": 1000, "value": 1.5}, {"time": 2000, "value": 2.5}]}


def test_series_payload_filters_bad_points() -> None:
    payload = {
        "series": [
            {"time": 1000, "value": 1.0},
            {"time": "2000", "value": 2.0},
            {"time": 3000, "value": None},
            {"time": 4000, "value": float("inf")},
            "junk",
            {"time": 5000, "value": 5},
        ]
    }
    assert normalize_series_payload(payload) == [PricePoint(1000, 1.0), PricePoint(5000, 5.0)]


@pytest.mark.parametrize("payload", [{}, {"series": "nope"}, [], {"error": "Upstream failed"}])
def test_series_payload_missing_series(payload) -> None:
    with pytest.raises(BadPayloadError):
        normalize_series_payload(payload)


def test_yfinance_history_to_utc_millis() -> None:
    index = pd.to_datetime(["2024-01-02 09:30", "2024-01-02 09:31", "2024-01-02 09:32"]).tz_localize(
        "America/New_York"
    )
    raw = pd.DataFrame({"Open": [1, 2, 3], "Close": [4700.5, float("nan"), 4701.0]}, index=index)

    series = normalize_yfinance_history(raw)

    expected_first = pd.Timestamp("2024-01-02 14:30", tz="UTC").value // 1_000_000
    assert [p.time for p in series] == [expected_first, expected_first + 120_000]
    assert [p.value for p in series] == [4700.5, 4701.0]


def test_yfinance_history_empty_and_malformed() -> None:
    assert normalize_yfinance_history(None) == []
    assert normalize_yfinance_history(pd.DataFrame()) == []
    with pytest.raises(BadPayloadError):
        normalize_yfinance_history(pd.DataFrame({"Open": [1.0]}, index=pd.to_datetime(["2024-01-02"])))


def test_start_filter() -> None:
    series = make_series([1, 2, 3, 4], start=1000, step=1000)

    assert filter_from_start(series, None) == series
    assert filter_from_start(series, 0) == series
    assert [p.time for p in filter_from_start(series, 2500)] == [3000, 4000]
    assert filter_from_start(series, 4001) == []
    assert filter_from_start([], 10) == []
