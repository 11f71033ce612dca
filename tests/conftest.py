from __future__ import annotations

import pytest

from synth_spx.domain import PricePoint


def make_series(values, start: int = 0, step: int = 1) -> list[PricePoint]:
    return [PricePoint(time=start + i * step, value=float(v)) for i, v in enumerate(values)]


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, json_error: bool = False) -> None:
        self.status_code = status_code
        self._payload = payload
        self._json_error = json_error

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._json_error:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeSession:
    def __init__(self, response=None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict] = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def linear_series() -> list[PricePoint]:
    """1001 points one second apart, valued 100..1100."""
    return make_series([100 + i for i in range(1001)], start=0, step=1000)
