"""
Series chart datasets.

Turns a series' entries plus its ChartSettings into the list of Datasets a
chart draws:

  - period 'none': the raw entries, plus an optional rolling statistic over
    the raw values;
  - any other period: one line per selected statistic over the period
    buckets, plus an optional rolling statistic over each of those lines.

Comparison series are drawn dashed: raw values, or their bucket means.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Sequence

from chronoscharts.analytics.entries import Entry
from chronoscharts.analytics.periods import Period, aggregate_by_period
from chronoscharts.analytics.ranges import (
    DEFAULT_CUSTOM_DAYS,
    RANGE_VIEW_DAYS,
    RelativeRange,
    filter_by_range,
)
from chronoscharts.analytics.running import MIN_WINDOW, running_metric
from chronoscharts.analytics.stats import StatId
from chronoscharts.types import Dataset, Point
from chronoscharts.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_WINDOW = 7

PRIMARY_COLOR = "#4f46e5"
RUNNING_COLOR = "#f59e0b"
COMPARISON_COLORS = ("#ec4899", "#10b981", "#f59e0b", "#06b6d4", "#8b5cf6", "#14b8a6", "#f97316")

METRIC_LABELS: dict[StatId, str] = {
    StatId.MEAN: "Mean",
    StatId.DAY_MEAN: "Day Mean",
    StatId.SUM: "Sum",
    StatId.COUNT: "Count",
    StatId.MIN: "Min",
    StatId.Q1: "Q1",
    StatId.MEDIAN: "Median",
    StatId.Q3: "Q3",
    StatId.MAX: "Max",
    StatId.FIRST: "First",
    StatId.LAST: "Last",
}

METRIC_COLORS: dict[StatId, str] = {
    StatId.MEAN: "#4f46e5",
    StatId.DAY_MEAN: "#10b981",
    StatId.SUM: "#10b981",
    StatId.COUNT: "#f59e0b",
    StatId.MIN: "#ef4444",
    StatId.Q1: "#8b5cf6",
    StatId.MEDIAN: "#ec4899",
    StatId.Q3: "#06b6d4",
    StatId.MAX: "#1e293b",
    StatId.FIRST: "#6366f1",
    StatId.LAST: "#6366f1",
}

DEFAULT_ANALYSIS_SELECTION: tuple[StatId, ...] = (StatId.MEAN, StatId.DAY_MEAN, StatId.COUNT)


@dataclass(frozen=True)
class ChartSettings:
    """Per-series chart configuration snapshot.

    Passed explicitly into every computation; never mutated. Use
    dataclasses.replace() to derive a changed copy.
    """

    period: Period = Period.NONE
    log_scale: bool = False
    running_metric: Optional[StatId] = None
    window: int = DEFAULT_WINDOW
    range: RelativeRange = RelativeRange.ALL
    custom_days: int = DEFAULT_CUSTOM_DAYS
    compare_series_ids: tuple[Any, ...] = ()
    analysis_selection: tuple[StatId, ...] = DEFAULT_ANALYSIS_SELECTION
    clip_to_range: bool = False  # filter entries to the range instead of only windowing the view

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period.value,
            "logScale": self.log_scale,
            "runningMetric": self.running_metric.value if self.running_metric else "",
            "window": self.window,
            "range": self.range.value,
            "customDays": self.custom_days,
            "compareSeriesIds": list(self.compare_series_ids),
            "analysisSelection": [s.value for s in self.analysis_selection],
            "clipToRange": self.clip_to_range,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartSettings":
        """
        Tolerant loader:
        - ignores unknown keys (with a warning)
        - unknown statistic ids are dropped (with a warning)
        - invalid numbers fall back to defaults
        """
        known_keys = {
            "period", "logScale", "runningMetric", "window", "range",
            "customDays", "compareSeriesIds", "analysisSelection", "clipToRange",
        }
        for key in data.keys():
            if key not in known_keys:
                logger.warning(f"Unknown key '{key}' in chart settings, ignoring")

        running = None
        raw_running = data.get("runningMetric") or ""
        if raw_running:
            running = StatId.parse(raw_running)
            if running is None:
                logger.warning(f"Unknown running metric {raw_running!r}, disabling rolling line")

        window = _int_or_default(data.get("window"), DEFAULT_WINDOW)
        custom_days = _int_or_default(data.get("customDays"), DEFAULT_CUSTOM_DAYS)

        selection: list[StatId] = []
        raw_selection = data.get("analysisSelection", [s.value for s in DEFAULT_ANALYSIS_SELECTION])
        if not isinstance(raw_selection, (list, tuple)):
            logger.warning("analysisSelection is not a list, using defaults")
            raw_selection = [s.value for s in DEFAULT_ANALYSIS_SELECTION]
        for raw in raw_selection:
            stat = StatId.parse(raw)
            if stat is None:
                logger.warning(f"Unknown statistic {raw!r} in analysisSelection, ignoring")
                continue
            selection.append(stat)

        compare = data.get("compareSeriesIds") or []
        if not isinstance(compare, (list, tuple)):
            compare = []

        return cls(
            period=Period.parse(data.get("period", Period.NONE.value)),
            log_scale=bool(data.get("logScale", False)),
            running_metric=running,
            window=window,
            range=RelativeRange.parse(data.get("range", RelativeRange.ALL.value)),
            custom_days=custom_days,
            compare_series_ids=tuple(compare),
            analysis_selection=tuple(selection),
            clip_to_range=bool(data.get("clipToRange", False)),
        )


def _int_or_default(value: Any, default: int) -> int:
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed > 0 else default


@dataclass(frozen=True)
class ComparisonSeries:
    """Another series drawn on the same chart for comparison."""

    label: str
    entries: Sequence[Entry] = field(default_factory=tuple)
    color: Optional[str] = None


def view_days_for(settings: ChartSettings, entries: Sequence[Entry]) -> float:
    """
    Length of the chart's visible window in days.

    A relative range maps to its nominal length (custom ranges use
    custom_days). 'all' shows the whole span of the entries, at least 1 day.
    """
    if settings.range is RelativeRange.CUSTOM:
        return float(settings.custom_days)
    if settings.range in RANGE_VIEW_DAYS:
        return float(RANGE_VIEW_DAYS[settings.range])
    if not entries:
        return 0.0
    stamps = [e.timestamp for e in entries]
    span_days = (max(stamps) - min(stamps)).total_seconds() / 86400.0
    return float(max(1, math.ceil(span_days)))


def _raw_points(entries: Sequence[Entry]) -> tuple[Point, ...]:
    return tuple(Point(x=e.timestamp, y=e.value) for e in entries)


def _rolling_label(stat: StatId) -> str:
    return f"Rolling {METRIC_LABELS[stat]}"


def _primary_raw(entries: Sequence[Entry], settings: ChartSettings, label: str) -> list[Dataset]:
    datasets = [Dataset(label=label, points=_raw_points(entries), color=PRIMARY_COLOR, tension=0.2)]
    stat = settings.running_metric
    if stat is not None and settings.window >= MIN_WINDOW and len(entries) >= settings.window:
        points = running_metric(
            [e.value for e in entries],
            [e.timestamp for e in entries],
            stat,
            settings.window,
            entries=entries,
        )
        if points:
            datasets.append(
                Dataset(
                    label=_rolling_label(stat),
                    points=tuple(points),
                    color=RUNNING_COLOR,
                    line_width=1.5,
                    dash=(10, 2),
                    hide_points=True,
                )
            )
    return datasets


def _primary_periods(entries: Sequence[Entry], settings: ChartSettings) -> list[Dataset]:
    agg = aggregate_by_period(entries, settings.period)
    if agg.is_empty:
        return []
    instants = agg.instants()
    stat = settings.running_metric

    datasets: list[Dataset] = []
    for metric in settings.analysis_selection:
        values = agg.series(metric)
        points = tuple(Point(x=x, y=y) for x, y in zip(instants, values))
        datasets.append(
            Dataset(label=METRIC_LABELS[metric], points=points, color=METRIC_COLORS[metric], tension=0.2)
        )
        if stat is not None and settings.window >= MIN_WINDOW and len(values) >= settings.window:
            rolling = running_metric(values, instants, stat, settings.window)
            if rolling:
                datasets.append(
                    Dataset(
                        label=f"{_rolling_label(metric)} ({stat.value})",
                        points=tuple(rolling),
                        color=METRIC_COLORS[metric],
                        line_width=1.5,
                        dash=(8, 4),
                        hide_points=True,
                    )
                )
    return datasets


def _comparison(entries: Sequence[Entry], settings: ChartSettings, label: str, color: str) -> Optional[Dataset]:
    if settings.period is Period.NONE:
        points = _raw_points(entries)
        name = label
    else:
        agg = aggregate_by_period(entries, settings.period)
        points = tuple(Point(x=x, y=y) for x, y in zip(agg.instants(), agg.series(StatId.MEAN)))
        name = f"{label} ({StatId.MEAN.value})"
    if not points:
        return None
    return Dataset(label=name, points=points, color=color, line_width=1.5, dash=(10, 2), tension=0.2)


def build_series_datasets(
    entries: Sequence[Entry],
    settings: ChartSettings = ChartSettings(),
    label: str = "Series",
    comparisons: Sequence[ComparisonSeries] = (),
    now: Optional[datetime] = None,
) -> list[Dataset]:
    """
    Build every dataset drawn on a series chart.

    Args:
        entries: The series' entries in chronological order.
        settings: Chart settings snapshot.
        label: Display name of the primary series.
        comparisons: Other series to overlay.
        now: Reference instant, used only when settings.clip_to_range is set.

    Returns:
        Datasets in drawing order: primary lines first, then comparisons.
    """
    def _clip(items: Sequence[Entry]) -> Sequence[Entry]:
        if not settings.clip_to_range:
            return items
        return filter_by_range(items, settings.range, now=now, custom_days=settings.custom_days)

    primary = _clip(entries)
    if settings.period is Period.NONE:
        datasets = _primary_raw(primary, settings, label) if primary else []
    else:
        datasets = _primary_periods(primary, settings)

    for i, comp in enumerate(comparisons):
        color = comp.color or COMPARISON_COLORS[i % len(COMPARISON_COLORS)]
        ds = _comparison(_clip(comp.entries), settings, comp.label, color)
        if ds is not None:
            datasets.append(ds)

    logger.debug("built %d datasets for %r (period=%s)", len(datasets), label, settings.period.value)
    return datasets
