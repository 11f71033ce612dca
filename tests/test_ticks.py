from datetime import datetime, timezone

import pytest

from synth_spx.chart.ticks import (
    DAY_MS,
    MINUTE_MS,
    TICK_GUARD,
    XTick,
    add_interval,
    align_to_interval,
    generate_x_ticks,
    generate_y_ticks,
    select_x_labels,
    tick_label,
)
from synth_spx.utils import DegenerateIntervalError


def _ms(*args) -> int:
    return int(datetime(*args, tzinfo=timezone.utc).timestamp() * 1000)


@pytest.mark.parametrize(
    "interval, expected",
    [
        ("M", (2024, 3, 1)),
        ("W", (2024, 3, 11)),
        ("D", (2024, 3, 14)),
        ("60", (2024, 3, 14, 13)),
        ("15", (2024, 3, 14, 13, 45)),
        ("5", (2024, 3, 14, 13, 45)),
        ("1", (2024, 3, 14, 13, 47)),
    ],
)
def test_align_to_interval(interval, expected) -> None:
    ts = _ms(2024, 3, 14, 13, 47, 31) + 500  # a Thursday

    assert align_to_interval(ts, interval) == _ms(*expected)


def test_week_alignment_from_sunday_goes_back_to_monday() -> None:
    assert align_to_interval(_ms(2024, 3, 17, 22, 0), "W") == _ms(2024, 3, 11)


def test_alignment_before_epoch() -> None:
    assert align_to_interval(_ms(1960, 6, 15, 12, 30), "M") == _ms(1960, 6, 1)
    assert align_to_interval(_ms(1960, 6, 15, 12, 30), "D") == _ms(1960, 6, 15)


def test_unknown_interval_aligns_to_itself() -> None:
    assert align_to_interval(1234.9, "2h") == 1234


def test_add_interval_steps() -> None:
    assert add_interval(_ms(2024, 1, 1), "M") == _ms(2024, 2, 1)
    assert add_interval(_ms(2024, 12, 1), "M") == _ms(2025, 1, 1)
    assert add_interval(_ms(2024, 1, 31), "M") == _ms(2024, 3, 2)
    assert add_interval(_ms(2024, 3, 11), "W") == _ms(2024, 3, 18)
    assert add_interval(0, "15") == 15 * MINUTE_MS
    assert add_interval(0, "unknown") == DAY_MS


def test_tick_labels_by_interval() -> None:
    ts = _ms(2024, 3, 15, 13, 45)
    assert tick_label(ts, "60") == "13:45"
    assert tick_label(ts, "D") == "Mar 15"
    assert tick_label(ts, "W") == "Mar 15"
    assert tick_label(ts, "M") == "Mar 24"


def test_monthly_ticks_follow_calendar() -> None:
    ticks = generate_x_ticks(_ms(2024, 1, 15), _ms(2024, 5, 2), "M", lambda t: t)
    assert [t.ts for t in ticks] == [_ms(2024, m, 1) for m in (1, 2, 3, 4, 5)]


def test_single_aligned_tick_is_topped_up_with_edges() -> None:
    x_min, x_max = _ms(2024, 3, 14, 10, 30), _ms(2024, 3, 14, 10, 50)

    ticks = generate_x_ticks(x_min, x_max, "60", lambda t: t)

    assert len(ticks) == 3
    assert ticks[-2].ts == x_min
    assert ticks[-1].ts == x_max


def test_tick_guard_allows_exactly_the_limit() -> None:
    ticks = generate_x_ticks(0, (TICK_GUARD - 1) * MINUTE_MS, "1", lambda t: t)
    assert len(ticks) == TICK_GUARD


def test_tick_guard_overflow_is_reported() -> None:
    with pytest.raises(DegenerateIntervalError):
        generate_x_ticks(0, TICK_GUARD * MINUTE_MS, "1", lambda t: t)


def _ticks_at(*xs) -> list[XTick]:
    return [XTick(x=x, ts=_ms(2024, 1, 1) + i * DAY_MS) for i, x in enumerate(xs)]


def test_labels_respect_minimum_gap() -> None:
    labels = select_x_labels(_ticks_at(0, 30, 60, 90, 120, 170), "D")
    assert [label.x for label in labels] == [0, 90, 170]


def test_last_tick_is_labelled_when_far_from_last_label() -> None:
    labels = select_x_labels(_ticks_at(0, 85, 140), "D")
    assert [label.x for label in labels] == [0, 85, 140]


def test_last_tick_is_skipped_when_close_to_last_label() -> None:
    labels = select_x_labels(_ticks_at(0, 50, 100, 130), "D")
    assert [label.x for label in labels] == [0, 100]


def test_y_ticks_are_evenly_spaced() -> None:
    ticks = generate_y_ticks(0.0, 10.0, lambda tv: 100 - tv, lambda tv: tv, lambda v: f"{v:.2f}")

    assert len(ticks) == 6
    assert [t.value for t in ticks] == pytest.approx([0, 2, 4, 6, 8, 10])
    assert ticks[0].y == pytest.approx(100)
    assert ticks[-1].label == "10.00"


def test_first_tick_is_always_labelled() -> None:
    labels = select_x_labels(_ticks_at(15, 40, 70, 95, 180), "D")
    assert labels[0].x == 15
    assert [label.x for label in labels] == [15, 95, 180]
    assert labels[0].label == "Jan 01"
