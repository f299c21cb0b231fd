"""
Calendar period bucketing - pure pandas.

Groups entries into day/week/month/quarter/year buckets and computes the
full StatsResult per bucket. Output is a set of parallel arrays aligned to
the ordered bucket labels, ready to be plotted.

Week convention: weeks start on Sunday. The same convention is used for
every week computation in chronoscharts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Optional, Sequence, Union

import pandas as pd

from chronoscharts.analytics.entries import Entry
from chronoscharts.analytics.stats import StatId, StatsResult, calculate_stats, stat_value
from chronoscharts.utils.logging import get_logger

logger = get_logger(__name__)

# datetime.weekday() index of the first day of a week (Monday=0 ... Sunday=6).
WEEK_START_WEEKDAY = 6


class Period(str, Enum):
    """Calendar granularity for bucketing."""

    NONE = "none"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @classmethod
    def parse(cls, value: Any) -> "Period":
        """Resolve a period id; unknown ids map to NONE."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.NONE


def period_start(ts: Union[datetime, date], period: Union[Period, str]) -> Optional[date]:
    """
    First calendar day of the period containing ts.

    Returns None for Period.NONE.
    """
    period = Period.parse(period)
    d = ts.date() if isinstance(ts, datetime) else ts
    if period is Period.DAY:
        return d
    if period is Period.WEEK:
        days_since_start = (d.weekday() - WEEK_START_WEEKDAY) % 7
        return d - timedelta(days=days_since_start)
    if period is Period.MONTH:
        return d.replace(day=1)
    if period is Period.QUARTER:
        quarter_month = ((d.month - 1) // 3) * 3 + 1
        return date(d.year, quarter_month, 1)
    if period is Period.YEAR:
        return date(d.year, 1, 1)
    return None


def period_key(ts: Union[datetime, date], period: Union[Period, str]) -> Optional[str]:
    """ISO 'YYYY-MM-DD' key of the bucket containing ts; lexical order is chronological."""
    start = period_start(ts, period)
    return start.isoformat() if start is not None else None


def label_instant(label: str, period: Union[Period, str]) -> datetime:
    """
    Instant used to plot a bucket label on a time axis.

    Day buckets sit at midnight; longer buckets sit at noon of their first
    day so they do not collide with first-of-month gridlines.
    """
    d = date.fromisoformat(label)
    if Period.parse(period) is Period.DAY:
        return datetime.combine(d, time(0, 0))
    return datetime.combine(d, time(12, 0))


@dataclass(frozen=True)
class PeriodData:
    """Bucket labels plus one value array per statistic, index-aligned."""

    labels: tuple[str, ...] = ()
    datasets: dict[StatId, tuple[float, ...]] = field(default_factory=dict)
    period: Period = Period.NONE

    def __len__(self) -> int:
        return len(self.labels)

    @property
    def is_empty(self) -> bool:
        return len(self.labels) == 0

    def series(self, stat: Union[StatId, str]) -> list[float]:
        """Values for one statistic. Unknown ids yield zeros."""
        stat_id = StatId.parse(stat)
        if stat_id is None:
            return [0.0] * len(self.labels)
        return list(self.datasets.get(stat_id, ()))

    def instants(self) -> list[datetime]:
        """Plotting instants for the labels (see label_instant)."""
        return [label_instant(label, self.period) for label in self.labels]

    def to_dict(self) -> dict[str, Any]:
        return {
            "labels": list(self.labels),
            "datasets": {stat.value: list(values) for stat, values in self.datasets.items()},
        }


def bucket_entries(
    entries: Sequence[Entry],
    period: Union[Period, str],
) -> list[tuple[str, list[Entry]]]:
    """
    Group entries into (key, entries) buckets sorted chronologically.

    Within a bucket, entries keep their incoming order.
    """
    period = Period.parse(period)
    if period is Period.NONE or not entries:
        return []

    df = pd.DataFrame(
        {
            "key": [period_key(e.timestamp, period) for e in entries],
            "pos": range(len(entries)),
        }
    )
    buckets: list[tuple[str, list[Entry]]] = []
    for key, sub in df.groupby("key", sort=True):
        buckets.append((str(key), [entries[i] for i in sub["pos"].tolist()]))
    return buckets


def bucket_stats(bucket: Sequence[Entry]) -> StatsResult:
    """StatsResult for one bucket (values sorted, original order = bucket order)."""
    raw_values = [e.value for e in bucket]
    return calculate_stats(sorted(raw_values), raw_values, bucket)


def aggregate_by_period(
    entries: Sequence[Entry],
    period: Union[Period, str],
) -> PeriodData:
    """
    Bucket entries by calendar period and compute statistics per bucket.

    Args:
        entries: Entries in chronological order.
        period: Granularity; 'none' (or unknown) yields an empty result.

    Returns:
        PeriodData with ordered labels and one array per StatId.
    """
    period = Period.parse(period)
    buckets = bucket_entries(entries, period)
    if not buckets:
        return PeriodData(period=period)

    columns: dict[StatId, list[float]] = {stat: [] for stat in StatId}
    for _key, bucket in buckets:
        result = bucket_stats(bucket)
        for stat in StatId:
            columns[stat].append(stat_value(result, stat))

    logger.debug("aggregated %d entries into %d %s buckets", len(entries), len(buckets), period.value)
    return PeriodData(
        labels=tuple(key for key, _ in buckets),
        datasets={stat: tuple(values) for stat, values in columns.items()},
        period=period,
    )
