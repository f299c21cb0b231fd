"""Unit tests for calculate_stats and the StatId lookup table."""

import numpy as np
import pytest

from chronoscharts.analytics.stats import (
    StatId,
    StatsResult,
    calculate_stats,
    count_distinct_days,
    quantile,
    stat_value,
    stats_for_values,
    summarize_entries,
)


def test_empty_input_is_all_zero():
    result = calculate_stats([])
    assert result == StatsResult()
    assert all(v == 0 for v in result.to_dict().values())


def test_four_values():
    result = calculate_stats([10, 20, 30, 40], [10, 20, 30, 40])
    assert result.mean == 25
    assert result.sum == 100
    assert result.count == 4
    assert result.min == 10
    assert result.q1 == pytest.approx(17.5)
    assert result.median == pytest.approx(25)
    assert result.q3 == pytest.approx(32.5)
    assert result.max == 40
    assert result.first == 10
    assert result.last == 40


def test_first_last_follow_original_order():
    result = calculate_stats([1, 2, 3], [3, 1, 2])
    assert result.first == 3
    assert result.last == 2
    assert result.min == 1
    assert result.max == 3


def test_first_last_fall_back_to_sorted_extremes():
    result = calculate_stats([1, 2, 3])
    assert (result.first, result.last) == (1, 3)


def test_single_value():
    result = calculate_stats([7.5])
    assert result.q1 == result.median == result.q3 == 7.5
    assert result.count == 1


def test_inputs_not_mutated():
    sorted_values = [1.0, 2.0, 3.0]
    original = [3.0, 1.0, 2.0]
    calculate_stats(sorted_values, original)
    assert sorted_values == [1.0, 2.0, 3.0]
    assert original == [3.0, 1.0, 2.0]


@pytest.mark.parametrize(
    "values",
    [
        [1, 2, 3, 4, 5],
        [-3.5, 0, 0, 2, 100],
        [42],
        [5, 5, 5, 9],
    ],
)
def test_quantile_monotonic_in_q(values):
    ordered = sorted(values)
    results = [quantile(ordered, q) for q in np.linspace(0, 1, 41)]
    assert all(a <= b for a, b in zip(results, results[1:]))
    assert results[0] == ordered[0]
    assert results[-1] == ordered[-1]


def test_quantile_empty_and_clamped():
    assert quantile([], 0.5) == 0
    assert quantile([1, 2], -1) == 1
    assert quantile([1, 2], 2) == 2


def test_day_mean_counts_distinct_dates(make_entry):
    entries = [
        make_entry("2024-01-01T08:00:00", 1),
        make_entry("2024-01-01T20:00:00", 2),
        make_entry("2024-01-02T08:00:00", 3),
    ]
    assert count_distinct_days(entries) == 2
    result = calculate_stats([1, 2, 3], [1, 2, 3], entries)
    assert result.day_mean == pytest.approx(3.0)


def test_day_mean_zero_without_entries():
    assert calculate_stats([1, 2, 3]).day_mean == 0


def test_stat_lookup():
    result = calculate_stats([10, 20, 30, 40])
    assert stat_value(result, StatId.MEAN) == 25
    assert stat_value(result, "median") == 25
    assert result.get("count") == 4
    assert stat_value(result, "bogus") == 0
    assert stat_value(result, None) == 0


def test_stat_id_parse():
    assert StatId.parse("dayMean") is StatId.DAY_MEAN
    assert StatId.parse(StatId.Q3) is StatId.Q3
    assert StatId.parse("nope") is None


def test_to_dict_uses_stat_ids():
    d = calculate_stats([1.0]).to_dict()
    assert set(d) == {s.value for s in StatId}
    assert "dayMean" in d


def test_stats_for_values_sorts_but_keeps_first_last():
    result = stats_for_values([3, 1, 2])
    assert result.min == 1
    assert result.first == 3
    assert result.last == 2


def test_summarize_entries(daily_entries):
    result = summarize_entries(daily_entries)
    assert result.sum == 15
    assert result.day_mean == pytest.approx(3.0)
    assert result.first == 1
    assert result.last == 5
