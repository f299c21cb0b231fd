"""Unit tests for axis tick generation."""

import math
from datetime import datetime

import pytest

from chronoscharts.chart.ticks import (
    even_time_ticks,
    expand_degenerate,
    linear_ticks,
    log_ticks,
    month_bands,
    month_ticks,
    nice_log_bounds,
    nice_step,
    uses_calendar_ticks,
    value_ticks,
)


def _is_nice(step: float) -> bool:
    normalized = step / 10 ** math.floor(math.log10(step))
    return any(math.isclose(normalized, m, rel_tol=1e-6) for m in (1, 2, 5, 10))


@pytest.mark.parametrize(
    "lo, hi",
    [
        (0, 100),
        (3.7, 91.2),
        (-12.5, 47.3),
        (0.013, 0.087),
        (1000, 123456),
        (-5, -1),
        (0.5, 0.51),
    ],
)
def test_linear_ticks_are_nice_and_bound_data(lo, hi):
    ticks = linear_ticks(lo, hi)
    assert len(ticks) >= 2
    assert ticks[0] <= lo
    assert ticks[-1] >= hi
    step = nice_step(lo, hi)
    assert _is_nice(step)
    for a, b in zip(ticks, ticks[1:]):
        assert b - a == pytest.approx(step)


def test_linear_ticks_exact_values():
    assert linear_ticks(0, 100) == [0, 20, 40, 60, 80, 100]
    assert linear_ticks(0, 1, 6) == [0, 0.2, 0.4, 0.6, 0.8, 1.0]


def test_nice_step_thresholds():
    assert nice_step(0, 100, 6) == 20
    assert nice_step(0, 50, 6) == 10
    assert nice_step(0, 35, 6) == 10
    assert nice_step(0, 5, 6) == 1
    assert nice_step(1, 1) == 0


def test_expand_degenerate():
    assert expand_degenerate(10) == pytest.approx((9, 11))
    assert expand_degenerate(0) == (-1, 1)
    assert expand_degenerate(-4) == (-5, -3)


def test_value_ticks_degenerate_range_still_bounds_value():
    ticks = value_ticks([5, 5, 5])
    assert ticks[0] < 5 < ticks[-1]


def test_value_ticks_empty():
    assert value_ticks([]) == []
    assert value_ticks([float("nan")]) == []


def test_log_ticks_enumerate_1_2_5():
    assert log_ticks(1, 100) == [1, 2, 5, 10, 20, 50, 100]


def test_log_ticks_clipped_to_range():
    assert log_ticks(3, 40) == [5, 10, 20]


def test_log_ticks_fractional_decades():
    assert log_ticks(0.01, 0.1) == pytest.approx([0.01, 0.02, 0.05, 0.1])


def test_log_ticks_non_positive():
    assert log_ticks(0, 10) == []
    assert log_ticks(-5, 10) == []


def test_nice_log_bounds():
    assert nice_log_bounds(3, 40) == (2, 50)
    assert nice_log_bounds(1, 1000) == (1, 1000)


def test_value_ticks_log_bounds_the_data():
    ticks = value_ticks([3, 40], log_scale=True)
    assert ticks == [2, 5, 10, 20, 50]


def test_value_ticks_log_without_positive_values_falls_back_to_linear():
    assert value_ticks([-10, 0], log_scale=True) == linear_ticks(-10, 0)


@pytest.mark.parametrize("span, expected", [(30, False), (90, False), (91, True), (365, True), (366, False)])
def test_uses_calendar_ticks(span, expected):
    assert uses_calendar_ticks(span) is expected


def test_month_ticks_start_at_first_month():
    ticks = month_ticks(datetime(2024, 1, 15), datetime(2024, 4, 10))
    assert ticks == [datetime(2024, 1, 1), datetime(2024, 2, 1), datetime(2024, 3, 1), datetime(2024, 4, 1)]


def test_month_bands_parity_against_dataset_start():
    ticks = month_ticks(datetime(2024, 1, 15), datetime(2024, 4, 10))
    bands = month_bands(ticks, datetime(2024, 1, 15))
    assert [b.shaded for b in bands] == [False, True, False, True]
    assert bands[0].end == datetime(2024, 2, 1)
    assert bands[-1].end == datetime(2024, 5, 1)


def test_month_bands_stable_while_panning():
    # same dataset start, visible window shifted by one month
    later = month_bands(month_ticks(datetime(2024, 2, 1), datetime(2024, 5, 1)), datetime(2024, 1, 15))
    assert [b.shaded for b in later] == [True, False, True, False]


def test_even_time_ticks():
    ticks = even_time_ticks(datetime(2024, 1, 1), datetime(2024, 1, 5), count=5)
    assert ticks == [datetime(2024, 1, d) for d in range(1, 6)]
    assert even_time_ticks(datetime(2024, 1, 1), datetime(2024, 1, 1)) == [datetime(2024, 1, 1)]


@pytest.mark.parametrize(
    "lo, hi",
    [
        (-240987.30464296648, -240987.30464296645),
        (1e15, 1e15 + 0.5),
        (123456.789, 123456.789 + 1e-10),
    ],
)
def test_linear_ticks_span_below_float_resolution(lo, hi):
    ticks = linear_ticks(lo, hi)
    assert len(ticks) >= 2
    assert len(set(ticks)) == len(ticks)
    assert ticks == sorted(ticks)
    assert ticks[0] <= lo
    assert ticks[-1] >= hi
