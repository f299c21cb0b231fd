"""One-line series summaries such as 'Avg: 12.5' or 'Total: 3h 20m'."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence

from chronoscharts.analytics.entries import Entry, Series
from chronoscharts.analytics.ranges import DEFAULT_CUSTOM_DAYS, RelativeRange, filter_by_range
from chronoscharts.analytics.stats import StatId, stat_value, summarize_entries
from chronoscharts.utils.formatting import format_duration, format_number
from chronoscharts.utils.logging import get_logger

logger = get_logger(__name__)

OPERATION_LABELS: dict[StatId, str] = {
    StatId.MEAN: "Avg",
    StatId.DAY_MEAN: "Daily Avg",
    StatId.SUM: "Total",
    StatId.COUNT: "Count",
    StatId.MIN: "Min",
    StatId.Q1: "Q1",
    StatId.MEDIAN: "Median",
    StatId.Q3: "Q3",
    StatId.MAX: "Max",
    StatId.FIRST: "First",
    StatId.LAST: "Last",
}

RANGE_LABELS: dict[RelativeRange, str] = {
    RelativeRange.ALL: "All",
    RelativeRange.DAY: "Today",
    RelativeRange.WEEK: "Week",
    RelativeRange.MONTH: "Month",
    RelativeRange.QUARTER: "Quarter",
    RelativeRange.YEAR: "Year",
}


@dataclass(frozen=True)
class SummaryConfig:
    """Which statistic to summarize over which relative range."""

    range: RelativeRange = RelativeRange.ALL
    operation: StatId = StatId.MEAN
    custom_days: int = DEFAULT_CUSTOM_DAYS

    @property
    def range_label(self) -> str:
        if self.range is RelativeRange.CUSTOM:
            return f"{self.custom_days}d"
        return RANGE_LABELS[self.range]

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.range.value,
            "operation": self.operation.value,
            "customDays": self.custom_days,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SummaryConfig":
        """Tolerant loader: unknown operations fall back to mean."""
        operation = StatId.parse(data.get("operation", StatId.MEAN.value))
        if operation is None:
            logger.warning(f"Unknown summary operation {data.get('operation')!r}, using 'mean'")
            operation = StatId.MEAN
        try:
            custom_days = int(data.get("customDays", data.get("custom_days", DEFAULT_CUSTOM_DAYS)))
        except (TypeError, ValueError):
            custom_days = DEFAULT_CUSTOM_DAYS
        if custom_days < 1:
            custom_days = DEFAULT_CUSTOM_DAYS
        return cls(
            range=RelativeRange.parse(data.get("period", data.get("range", RelativeRange.ALL.value))),
            operation=operation,
            custom_days=custom_days,
        )


def format_stat(value: float, series: Optional[Series] = None) -> str:
    """Format a statistic for display according to the series type."""
    if series is not None and series.is_duration:
        return format_duration(value)
    return format_number(value, 2)


def series_summary(
    series: Series,
    entries: Sequence[Entry],
    config: SummaryConfig = SummaryConfig(),
    now: Optional[datetime] = None,
) -> Optional[str]:
    """
    Summarize a series as '<label>: <value>'.

    Args:
        series: Series the entries belong to (selects number/duration formatting).
        entries: Entries in chronological order.
        config: Range and operation to summarize.
        now: Reference instant for the range filter.

    Returns:
        Summary string, or None when no entries fall inside the range.
    """
    filtered = filter_by_range(entries, config.range, now=now, custom_days=config.custom_days)
    if not filtered:
        return None
    value = stat_value(summarize_entries(filtered), config.operation)
    return f"{OPERATION_LABELS[config.operation]}: {format_stat(value, series)}"
