"""Series analytics: entries, statistics, periods, ranges and rolling metrics."""

from chronoscharts.analytics.datasets import ChartSettings, ComparisonSeries, build_series_datasets, view_days_for
from chronoscharts.analytics.entries import (
    Entry,
    Series,
    SeriesType,
    TimestampParseError,
    parse_timestamp,
    sort_chronologically,
)
from chronoscharts.analytics.periods import Period, PeriodData, aggregate_by_period
from chronoscharts.analytics.ranges import RelativeRange, filter_by_range
from chronoscharts.analytics.running import running_metric
from chronoscharts.analytics.stats import StatId, StatsResult, calculate_stats, quantile, stat_value
from chronoscharts.analytics.summary import SummaryConfig, series_summary

__all__ = [
    "ChartSettings",
    "ComparisonSeries",
    "Entry",
    "Period",
    "PeriodData",
    "RelativeRange",
    "Series",
    "SeriesType",
    "StatId",
    "StatsResult",
    "SummaryConfig",
    "TimestampParseError",
    "aggregate_by_period",
    "build_series_datasets",
    "calculate_stats",
    "filter_by_range",
    "parse_timestamp",
    "quantile",
    "running_metric",
    "series_summary",
    "sort_chronologically",
    "stat_value",
    "view_days_for",
]
