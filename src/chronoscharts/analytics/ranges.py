"""Relative time-range filtering.

Cutoffs are computed by calendar-aware subtraction: one month before
March 31 is the last day of February, not 30 days earlier. Every range
computation in chronoscharts goes through range_cutoff().
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional, Sequence, Union

import pandas as pd

from chronoscharts.analytics.entries import Entry, to_naive_utc

DEFAULT_CUSTOM_DAYS = 30


class RelativeRange(str, Enum):
    """A window ending at 'now'."""

    ALL = "all"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"
    CUSTOM = "custom"

    @classmethod
    def parse(cls, value: Any) -> "RelativeRange":
        """Resolve a range token; unknown tokens map to ALL."""
        if isinstance(value, cls):
            return value
        s = str(value).strip().lower()
        if s == "today":
            return cls.DAY
        try:
            return cls(s)
        except ValueError:
            return cls.ALL


_RANGE_OFFSETS: dict[RelativeRange, pd.DateOffset] = {
    RelativeRange.DAY: pd.DateOffset(days=1),
    RelativeRange.WEEK: pd.DateOffset(days=7),
    RelativeRange.MONTH: pd.DateOffset(months=1),
    RelativeRange.QUARTER: pd.DateOffset(months=3),
    RelativeRange.YEAR: pd.DateOffset(years=1),
}

# Nominal window length in days, used to size the chart viewport.
RANGE_VIEW_DAYS: dict[RelativeRange, int] = {
    RelativeRange.DAY: 1,
    RelativeRange.WEEK: 7,
    RelativeRange.MONTH: 30,
    RelativeRange.QUARTER: 90,
    RelativeRange.YEAR: 365,
}


def range_cutoff(
    range_: Union[RelativeRange, str],
    now: datetime,
    custom_days: int = DEFAULT_CUSTOM_DAYS,
) -> Optional[datetime]:
    """
    Earliest instant included in a relative range.

    Returns None for RelativeRange.ALL (no cutoff). An aware `now` is
    converted to naive UTC, matching parsed entry timestamps.
    """
    range_ = RelativeRange.parse(range_)
    if range_ is RelativeRange.ALL:
        return None
    if range_ is RelativeRange.CUSTOM:
        offset = pd.DateOffset(days=max(0, int(custom_days)))
    else:
        offset = _RANGE_OFFSETS[range_]
    return (pd.Timestamp(to_naive_utc(now)) - offset).to_pydatetime()


def filter_by_range(
    entries: Sequence[Entry],
    range_: Union[RelativeRange, str] = RelativeRange.ALL,
    now: Optional[datetime] = None,
    custom_days: int = DEFAULT_CUSTOM_DAYS,
) -> list[Entry]:
    """
    Keep entries with timestamp >= the range cutoff.

    Args:
        entries: Entries to filter (order preserved).
        range_: Relative range token. 'all' returns every entry.
        now: Reference instant; defaults to the current local time. Aware
            values are compared in UTC.
        custom_days: Day count for RelativeRange.CUSTOM.
    """
    if now is None:
        now = datetime.now()
    cutoff = range_cutoff(range_, now, custom_days)
    if cutoff is None:
        return list(entries)
    return [e for e in entries if to_naive_utc(e.timestamp) >= cutoff]
