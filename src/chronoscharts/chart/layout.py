"""
Chart layout: everything needed to draw one chart frame, in pixels.

build_chart_layout() combines the scales, tick generation, month bands and
path interpolation into a ChartLayout. It does no drawing itself; a
renderer (see chronoscharts.chart.figure) only has to copy the geometry out.

Coordinates are absolute within the chart canvas: the plot area starts at
(padding.left, padding.top).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Sequence

from chronoscharts.analytics.datasets import ChartSettings, view_days_for
from chronoscharts.analytics.entries import Entry
from chronoscharts.chart.path import (
    DEFAULT_TENSION,
    PathSegment,
    XY,
    interpolate_path,
    path_to_svg,
)
from chronoscharts.chart.scales import TimeScale, ValueScale, build_x_scale, build_y_scale
from chronoscharts.chart.theme import dataset_color
from chronoscharts.chart.ticks import DEFAULT_TIME_TICK_COUNT, DEFAULT_VALUE_TICK_COUNT, month_bands
from chronoscharts.types import Dataset
from chronoscharts.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Padding:
    top: float = 40
    right: float = 40
    bottom: float = 60
    left: float = 60

    def to_dict(self) -> dict[str, float]:
        return {"top": self.top, "right": self.right, "bottom": self.bottom, "left": self.left}


@dataclass(frozen=True)
class ChartOptions:
    """Canvas size and drawing options for one chart."""

    width: float = 600
    height: float = 400
    padding: Padding = field(default_factory=Padding)
    tension: float = DEFAULT_TENSION
    view_days: float = 0  # 0 shows the whole domain
    log_scale: bool = False
    show_points: bool = True
    line_width: float = 2.0
    point_radius: float = 4.0
    x_tick_count: int = DEFAULT_TIME_TICK_COUNT
    y_tick_count: int = DEFAULT_VALUE_TICK_COUNT

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Chart size must be non-negative, got {self.width}x{self.height}")

    @property
    def chart_width(self) -> float:
        """Width of the plot area inside the padding (never negative)."""
        return max(0.0, self.width - self.padding.left - self.padding.right)

    @property
    def chart_height(self) -> float:
        return max(0.0, self.height - self.padding.top - self.padding.bottom)

    def to_dict(self) -> dict[str, Any]:
        return {
            "width": self.width,
            "height": self.height,
            "padding": self.padding.to_dict(),
            "tension": self.tension,
            "viewDays": self.view_days,
            "logScale": self.log_scale,
            "showPoints": self.show_points,
            "lineWidth": self.line_width,
            "pointRadius": self.point_radius,
            "xTickCount": self.x_tick_count,
            "yTickCount": self.y_tick_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ChartOptions":
        """
        Tolerant loader:
        - ignores unknown keys (with a warning)
        - missing keys keep their defaults
        """
        mapping = {
            "width": "width",
            "height": "height",
            "tension": "tension",
            "viewDays": "view_days",
            "logScale": "log_scale",
            "showPoints": "show_points",
            "lineWidth": "line_width",
            "pointRadius": "point_radius",
            "xTickCount": "x_tick_count",
            "yTickCount": "y_tick_count",
        }
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            if key == "padding":
                if isinstance(value, dict):
                    sides = {k: float(v) for k, v in value.items() if k in ("top", "right", "bottom", "left")}
                    kwargs["padding"] = Padding(**sides)
                continue
            if key not in mapping:
                logger.warning(f"Unknown key '{key}' in chart options, ignoring")
                continue
            kwargs[mapping[key]] = value
        return cls(**kwargs)

    @classmethod
    def for_settings(cls, settings: ChartSettings, entries: Sequence[Entry], **overrides: Any) -> "ChartOptions":
        """Options for a series chart: view window and log flag come from ChartSettings."""
        kwargs: dict[str, Any] = {
            "view_days": view_days_for(settings, entries),
            "log_scale": settings.log_scale,
        }
        kwargs.update(overrides)
        return cls(**kwargs)


@dataclass(frozen=True)
class AxisTick:
    """One tick: its pixel position along the axis and its label."""

    position: float
    label: str


@dataclass(frozen=True)
class BandRect:
    """Shaded month band clipped to the plot area (x0 < x1)."""

    x0: float
    x1: float


@dataclass(frozen=True)
class DatasetGeometry:
    """Pixel geometry of one dataset."""

    label: str
    color: str
    line_width: float
    dash: tuple[float, ...]
    segments: tuple[PathSegment, ...]
    markers: tuple[XY, ...]  # empty when points are hidden

    @property
    def svg_path(self) -> str:
        return path_to_svg(self.segments)


@dataclass(frozen=True)
class ChartLayout:
    """Geometry for one chart frame."""

    options: ChartOptions
    x_scale: TimeScale
    y_scale: ValueScale
    x_ticks: tuple[AxisTick, ...]
    y_ticks: tuple[AxisTick, ...]
    bands: tuple[BandRect, ...]
    datasets: tuple[DatasetGeometry, ...]

    @property
    def plot_left(self) -> float:
        return self.options.padding.left

    @property
    def plot_top(self) -> float:
        return self.options.padding.top

    @property
    def plot_right(self) -> float:
        return self.options.padding.left + self.options.chart_width

    @property
    def plot_bottom(self) -> float:
        return self.options.padding.top + self.options.chart_height


def _visible_x_ticks(scale: TimeScale, left: float) -> list[AxisTick]:
    ticks: list[AxisTick] = []
    for tick, label in zip(scale.ticks, scale.labels()):
        px = scale(tick)
        if 0.0 <= px <= scale.width:
            ticks.append(AxisTick(position=left + px, label=label))
    return ticks


def _band_rects(scale: TimeScale, left: float) -> list[BandRect]:
    if not scale.calendar:
        return []
    rects: list[BandRect] = []
    for band in month_bands(scale.ticks, scale.domain.start):
        if not band.shaded:
            continue
        x0 = max(0.0, scale(band.start))
        x1 = min(scale.width, scale(band.end))
        if x1 > x0:
            rects.append(BandRect(x0=left + x0, x1=left + x1))
    return rects


def build_chart_layout(
    datasets: Sequence[Dataset],
    options: ChartOptions = ChartOptions(),
    pan_offset_days: float = 0.0,
    value_formatter: Optional[Callable[[float], str]] = None,
) -> Optional[ChartLayout]:
    """
    Lay out datasets on a chart.

    Args:
        datasets: Lines to draw.
        options: Canvas and drawing options.
        pan_offset_days: Current viewport pan offset (see ViewportController).
        value_formatter: Y tick label formatter (default: format_value).

    Returns:
        ChartLayout, or None when no dataset has any point.
    """
    all_points = [p for ds in datasets for p in ds.points]
    if not all_points:
        return None

    chart_width = options.chart_width
    chart_height = options.chart_height
    left = options.padding.left
    top = options.padding.top

    x_scale = build_x_scale(
        [p.x for p in all_points],
        chart_width,
        view_days=options.view_days,
        pan_offset_days=pan_offset_days,
        tick_count=options.x_tick_count,
    )
    if x_scale is None:
        return None

    # Y range covers every point so the axis stays fixed while panning.
    y_scale = build_y_scale([p.y for p in all_points], chart_height, options.log_scale, options.y_tick_count)

    y_ticks = [
        AxisTick(position=top + y_scale(v), label=label)
        for v, label in zip(y_scale.ticks, y_scale.labels(value_formatter))
    ]

    geometry: list[DatasetGeometry] = []
    for i, ds in enumerate(datasets):
        pixels = [(left + x_scale(p.x), top + y_scale(p.y)) for p in ds.points]
        tension = options.tension if ds.tension is None else ds.tension
        segments = interpolate_path(pixels, tension)
        show_markers = options.show_points and not ds.hide_points
        markers: tuple[XY, ...] = ()
        if show_markers:
            markers = tuple((x, y) for x, y in pixels if left <= x <= left + chart_width)
        geometry.append(
            DatasetGeometry(
                label=ds.label,
                color=ds.color or dataset_color(i),
                line_width=ds.line_width,
                dash=tuple(ds.dash),
                segments=tuple(segments),
                markers=markers,
            )
        )

    logger.debug("layout: %d datasets, %d points, %.0fx%.0f", len(datasets), len(all_points), options.width, options.height)
    return ChartLayout(
        options=options,
        x_scale=x_scale,
        y_scale=y_scale,
        x_ticks=tuple(_visible_x_ticks(x_scale, left)),
        y_ticks=tuple(y_ticks),
        bands=tuple(_band_rects(x_scale, left)),
        datasets=tuple(geometry),
    )
