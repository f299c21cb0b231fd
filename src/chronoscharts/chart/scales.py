"""
Axis scales: pure mappings from data values to pixel offsets.

A scale is a frozen, callable object that also carries the ticks it was
built with. Scales belong to the render cycle that created them and are
rebuilt whenever the data or viewport changes.

X (time): pixel 0 is the left edge of the visible window.
Y (value): pixel 0 is the top edge; larger values map closer to 0.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Iterable, Optional, Sequence

from chronoscharts.analytics.entries import parse_timestamp
from chronoscharts.chart.ticks import (
    DEFAULT_TIME_TICK_COUNT,
    DEFAULT_VALUE_TICK_COUNT,
    even_time_ticks,
    month_ticks,
    uses_calendar_ticks,
    value_ticks,
)
from chronoscharts.types import XValue
from chronoscharts.utils.formatting import format_date_label, format_value
from chronoscharts.utils.logging import get_logger

logger = get_logger(__name__)

SECONDS_PER_DAY = 86400.0

# Timestamps this close to a first-of-month tick are drawn on the tick.
SNAP_TOLERANCE = timedelta(days=2)


def to_datetime(value: XValue) -> datetime:
    """Coerce an x value to datetime (raises TimestampParseError when unparsable)."""
    if isinstance(value, datetime):
        return value
    return parse_timestamp(value)


# -----------------------------------------------------------------------------
# Time ranges
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class TimeRange:
    """Closed time interval [start, end]."""

    start: datetime
    end: datetime

    @property
    def span_days(self) -> float:
        return (self.end - self.start).total_seconds() / SECONDS_PER_DAY

    def contains(self, ts: datetime) -> bool:
        return self.start <= ts <= self.end


def data_time_range(values: Iterable[XValue]) -> Optional[TimeRange]:
    """[min, max] of the given x values, or None when there are none."""
    stamps = [to_datetime(v) for v in values]
    if not stamps:
        return None
    return TimeRange(start=min(stamps), end=max(stamps))


def total_days(values: Iterable[XValue]) -> float:
    """Span of the given x values in (fractional) days; 0 when empty."""
    domain = data_time_range(values)
    return domain.span_days if domain is not None else 0.0


def visible_time_range(
    domain: TimeRange,
    view_days: float = 0,
    pan_offset_days: float = 0,
) -> TimeRange:
    """
    Visible window of a bounded view over the full domain.

    With view_days > 0 the window ends pan_offset_days before the newest
    data and is view_days long, clamped to the domain. When the clamp hits the
    oldest data, the window is re-extended forward so it never spans less
    than the available data allows.
    """
    if view_days <= 0:
        return domain

    view = timedelta(days=view_days)
    pan = timedelta(days=max(0.0, pan_offset_days))

    visible_max = domain.end - pan
    visible_min = max(domain.start, visible_max - view)
    if visible_min == domain.start:
        visible_max = min(domain.end, visible_min + view)
    return TimeRange(start=visible_min, end=visible_max)


# -----------------------------------------------------------------------------
# X scale
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class TimeScale:
    """Time -> pixel mapping over the visible window."""

    domain: TimeRange
    visible: TimeRange
    width: float
    ticks: tuple[datetime, ...]
    calendar: bool = False

    @property
    def span_days(self) -> float:
        return self.visible.span_days

    def snap(self, ts: datetime) -> datetime:
        """Move ts onto the nearest month tick when within SNAP_TOLERANCE."""
        if not self.calendar or not self.ticks:
            return ts
        nearest = min(self.ticks, key=lambda tick: abs(tick - ts))
        if abs(nearest - ts) < SNAP_TOLERANCE:
            return nearest
        return ts

    def __call__(self, value: XValue) -> float:
        ts = self.snap(to_datetime(value))
        span = (self.visible.end - self.visible.start).total_seconds()
        if span <= 0:
            return self.width / 2
        return (ts - self.visible.start).total_seconds() / span * self.width

    def invert(self, px: float) -> datetime:
        """Pixel offset -> instant (no snapping)."""
        if self.width <= 0:
            return self.visible.start
        return self.visible.start + (self.visible.end - self.visible.start) * (px / self.width)

    def in_view(self, value: XValue) -> bool:
        px = self(value)
        return 0.0 <= px <= self.width

    def labels(self) -> list[str]:
        return [format_date_label(tick, self.span_days) for tick in self.ticks]


def build_x_scale(
    values: Sequence[XValue],
    width: float,
    view_days: float = 0,
    pan_offset_days: float = 0,
    tick_count: int = DEFAULT_TIME_TICK_COUNT,
) -> Optional[TimeScale]:
    """
    Build the time scale for a set of x values.

    Args:
        values: x values of every plotted point (datetimes or parseable).
        width: Drawable width in pixels.
        view_days: Length of the bounded view; 0 shows the whole domain.
        pan_offset_days: How far the view is shifted back from the newest data.
        tick_count: Number of evenly spaced ticks outside the calendar band.

    Returns:
        TimeScale, or None when there are no values.
    """
    domain = data_time_range(values)
    if domain is None:
        return None
    visible = visible_time_range(domain, view_days, pan_offset_days)

    calendar = uses_calendar_ticks(visible.span_days)
    if calendar:
        ticks = month_ticks(visible.start, visible.end)
    else:
        ticks = even_time_ticks(visible.start, visible.end, tick_count)

    logger.debug(
        "x scale: visible %s..%s (%.1f days), %d ticks, calendar=%s",
        visible.start, visible.end, visible.span_days, len(ticks), calendar,
    )
    return TimeScale(
        domain=domain,
        visible=visible,
        width=float(width),
        ticks=tuple(ticks),
        calendar=calendar,
    )


# -----------------------------------------------------------------------------
# Y scale
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class ValueScale:
    """Value -> pixel mapping; the tick extremes bound the drawn range."""

    ticks: tuple[float, ...]
    height: float
    log: bool = False

    @property
    def graph_min(self) -> float:
        return self.ticks[0] if self.ticks else 0.0

    @property
    def graph_max(self) -> float:
        return self.ticks[-1] if self.ticks else 0.0

    @property
    def is_degenerate(self) -> bool:
        return self.graph_min == self.graph_max

    def __call__(self, value: float) -> float:
        if self.is_degenerate:
            return self.height / 2
        if self.log:
            if value <= 0:
                return self.height
            lo = math.log10(self.graph_min)
            hi = math.log10(self.graph_max)
            return self.height - (math.log10(value) - lo) / (hi - lo) * self.height
        return self.height - (value - self.graph_min) / (self.graph_max - self.graph_min) * self.height

    def invert(self, px: float) -> float:
        """Pixel offset -> value."""
        if self.is_degenerate or self.height <= 0:
            return self.graph_min
        fraction = (self.height - px) / self.height
        if self.log:
            lo = math.log10(self.graph_min)
            hi = math.log10(self.graph_max)
            return 10 ** (lo + fraction * (hi - lo))
        return self.graph_min + fraction * (self.graph_max - self.graph_min)

    def labels(self, formatter: Optional[Callable[[float], str]] = None) -> list[str]:
        fmt = formatter if formatter is not None else format_value
        return [fmt(v) for v in self.ticks]


def build_y_scale(
    values: Sequence[float],
    height: float,
    log_scale: bool = False,
    tick_count: int = DEFAULT_VALUE_TICK_COUNT,
) -> ValueScale:
    """
    Build the value scale for a set of y values.

    Ticks are generated first; the mapping spans exactly from the lowest to the
    highest tick. Log mode is used only when at least one value is positive;
    non-positive values then map to the bottom edge.
    """
    ticks = value_ticks(values, tick_count, log_scale)
    use_log = bool(log_scale and ticks and ticks[0] > 0 and any(v > 0 for v in values))
    return ValueScale(ticks=tuple(ticks), height=float(height), log=use_log)
