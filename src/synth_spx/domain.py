"""Domain models, option tokens and their parsers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

from .utils.errors import InvalidIntervalError, InvalidLeverageError

YMode = Literal["linear", "log", "percent"]
Theme = Literal["light", "dark"]

Y_MODES: tuple[YMode, ...] = ("linear", "log", "percent")
Y_SCALE_LABELS = {"linear": "Linear", "log": "Log", "percent": "% (from left)"}

# UI interval token -> upstream interval token
INTERVAL_MAP = {
    "1": "1m",
    "5": "5m",
    "15": "15m",
    "60": "60m",
    "D": "1d",
    "W": "1wk",
    "M": "1mo",
}
INTERVAL_LABELS = {"1": "1m", "5": "5m", "15": "15m", "60": "1h", "D": "1D", "W": "1W", "M": "1M"}
INTRADAY_INTERVALS = frozenset({"1", "5", "15", "60"})

MAX_LEVERAGE = 10
SYNTHETIC_PREFIX = "SYNTHETIC:"


@dataclass(frozen=True, slots=True)
class PricePoint:
    time: int
    value: float


Series = list[PricePoint]


@dataclass(frozen=True, slots=True)
class Domain:
    """Visible time window in milliseconds."""

    x0: float
    x1: float

    @property
    def span(self) -> float:
        return self.x1 - self.x0


@dataclass(slots=True)
class DashboardState:
    leverage: int = 1
    interval: str = "60"
    y_mode: YMode = "linear"
    base: float = 100.0
    start: Optional[int] = None
    theme: Theme = "light"


def leverage_presets() -> list[tuple[str, str]]:
    """(label, token) pairs for +1x..+10x followed by -1x..-10x."""
    presets = [(f"+{k}x SPX", f"+{k}") for k in range(1, MAX_LEVERAGE + 1)]
    presets += [(f"-{k}x SPX", f"-{k}") for k in range(1, MAX_LEVERAGE + 1)]
    return presets


def parse_leverage(token: str) -> int:
    """Parse a ``±k`` leverage token (optionally ``SYNTHETIC:``-prefixed)."""
    if not isinstance(token, str):
        raise InvalidLeverageError(f"Leverage token must be a string, got {token!r}")

    raw = token.strip()
    if raw.startswith(SYNTHETIC_PREFIX):
        raw = raw[len(SYNTHETIC_PREFIX):]

    sign = 1
    if raw[:1] in ("+", "-"):
        sign = -1 if raw[0] == "-" else 1
        raw = raw[1:]

    if not (raw.isascii() and raw.isdigit()):
        raise InvalidLeverageError(f"Unrecognized leverage token: {token!r}")

    value = sign * int(raw)
    if value == 0 or abs(value) > MAX_LEVERAGE:
        raise InvalidLeverageError(f"Leverage must be in [-{MAX_LEVERAGE}, {MAX_LEVERAGE}] excluding 0, got {value}")
    return value


def format_leverage(leverage: int) -> str:
    sign = "+" if leverage >= 0 else ""
    return f"{sign}{leverage}"


def parse_interval(token: str) -> str:
    if token not in INTERVAL_MAP:
        raise InvalidIntervalError(f"Unrecognized interval token: {token!r}")
    return token


def parse_y_mode(token: str) -> YMode:
    if token in Y_MODES:
        return token  # type: ignore[return-value]
    return "linear"


def parse_theme(token: str) -> Theme:
    return "dark" if token == "dark" else "light"
