"""
Summary statistics over a set of values - pure numpy.

calculate_stats() is the single statistics kernel used by period buckets,
running windows and series summaries.

Conventions:
  1. Inputs: values sorted ascending, plus (optionally) the same values in
     their original chronological order and the source entries. Nothing is
     re-sorted and no input is mutated.
  2. Empty input: every statistic is 0.
  3. Quantiles: linear interpolation between ranks, position = (n - 1) * q.
  4. dayMean: sum divided by the number of distinct calendar dates among the
     source entries; 0 when no entries are supplied.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Sequence, Union

import numpy as np

from chronoscharts.analytics.entries import Entry


class StatId(str, Enum):
    """Enumeration of the statistics a StatsResult carries."""

    MEAN = "mean"
    DAY_MEAN = "dayMean"
    SUM = "sum"
    COUNT = "count"
    MIN = "min"
    Q1 = "q1"
    MEDIAN = "median"
    Q3 = "q3"
    MAX = "max"
    FIRST = "first"
    LAST = "last"

    @classmethod
    def parse(cls, value: Any) -> Optional["StatId"]:
        """Resolve a statistic id, returning None for unknown ids."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value))
        except ValueError:
            return None


@dataclass(frozen=True)
class StatsResult:
    """Derived statistics for one value set. Always recomputed, never stored."""

    mean: float = 0.0
    day_mean: float = 0.0
    sum: float = 0.0
    count: int = 0
    min: float = 0.0
    q1: float = 0.0
    median: float = 0.0
    q3: float = 0.0
    max: float = 0.0
    first: float = 0.0
    last: float = 0.0

    def get(self, stat: Union[StatId, str]) -> float:
        """Return one statistic by id; unknown ids yield 0."""
        return stat_value(self, stat)

    def to_dict(self) -> dict[str, float]:
        """Serialize keyed by StatId values (e.g. 'dayMean')."""
        return {stat.value: STAT_GETTERS[stat](self) for stat in StatId}


# Fixed lookup table: StatId -> getter.
STAT_GETTERS: dict[StatId, Callable[[StatsResult], float]] = {
    StatId.MEAN: lambda r: r.mean,
    StatId.DAY_MEAN: lambda r: r.day_mean,
    StatId.SUM: lambda r: r.sum,
    StatId.COUNT: lambda r: r.count,
    StatId.MIN: lambda r: r.min,
    StatId.Q1: lambda r: r.q1,
    StatId.MEDIAN: lambda r: r.median,
    StatId.Q3: lambda r: r.q3,
    StatId.MAX: lambda r: r.max,
    StatId.FIRST: lambda r: r.first,
    StatId.LAST: lambda r: r.last,
}


def stat_value(result: StatsResult, stat: Union[StatId, str, None]) -> float:
    """Look up a statistic on a result. Unknown or missing ids return 0."""
    stat_id = StatId.parse(stat) if stat is not None else None
    if stat_id is None:
        return 0.0
    return STAT_GETTERS[stat_id](result)


def quantile(sorted_values: Sequence[float], q: float) -> float:
    """
    Rank-interpolated quantile of an ascending sequence.

    position = (n - 1) * q; the result interpolates linearly between the
    values at floor(position) and ceil(position). q is clamped to [0, 1].
    Empty input returns 0.
    """
    n = len(sorted_values)
    if n == 0:
        return 0.0
    q = min(1.0, max(0.0, float(q)))
    position = (n - 1) * q
    base = int(np.floor(position))
    remainder = position - base
    lower = float(sorted_values[base])
    if base + 1 < n:
        upper = float(sorted_values[base + 1])
        return lower + remainder * (upper - lower)
    return lower


def count_distinct_days(entries: Iterable[Entry]) -> int:
    """Number of distinct calendar dates among the entries' timestamps."""
    return len({e.timestamp.date() for e in entries})


def calculate_stats(
    sorted_values: Sequence[float],
    original_order: Optional[Sequence[float]] = None,
    entries: Optional[Sequence[Entry]] = None,
) -> StatsResult:
    """
    Compute summary statistics for a value set.

    Args:
        sorted_values: Values in ascending order.
        original_order: The same values in chronological order, used for
            first/last. Falls back to the sorted extremes when empty.
        entries: Source entries, used only to count distinct days for dayMean.

    Returns:
        StatsResult; all zeros for empty input.
    """
    n = len(sorted_values)
    if n == 0:
        return StatsResult()

    arr = np.asarray(sorted_values, dtype=float)
    total = float(arr.sum())
    mean = total / n

    day_mean = 0.0
    if entries:
        n_days = count_distinct_days(entries)
        day_mean = total / n_days if n_days > 0 else 0.0

    if original_order is not None and len(original_order) > 0:
        first = float(original_order[0])
        last = float(original_order[-1])
    else:
        first = float(arr[0])
        last = float(arr[-1])

    return StatsResult(
        mean=mean,
        day_mean=day_mean,
        sum=total,
        count=n,
        min=float(arr[0]),
        q1=quantile(arr, 0.25),
        median=quantile(arr, 0.5),
        q3=quantile(arr, 0.75),
        max=float(arr[-1]),
        first=first,
        last=last,
    )


def stats_for_values(
    values: Sequence[float],
    entries: Optional[Sequence[Entry]] = None,
) -> StatsResult:
    """Convenience wrapper: sort chronological values and compute stats."""
    return calculate_stats(sorted(values), list(values), entries)


def summarize_entries(entries: Sequence[Entry]) -> StatsResult:
    """Statistics for a list of entries in their given (chronological) order."""
    values = [e.value for e in entries]
    return calculate_stats(sorted(values), values, entries)
