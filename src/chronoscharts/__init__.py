"""
chronoscharts: Time-series analytics and chart geometry.

This package provides:
- Entry parsing, descriptive statistics, period buckets and rolling metrics
- Relative range filtering and one-line series summaries
- Axis scales, ticks, month bands, smoothed line paths and a pannable viewport
- Logging utilities for library and application use

Rendering to Plotly lives in chronoscharts.chart.figure and is imported
only on demand, so the analytics layer never loads plotly.

For logging configuration in standalone scripts:
    ```python
    from chronoscharts.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from chronoscharts.utils.logging import configure_logging, get_logger

from chronoscharts.analytics import (
    ChartSettings,
    Entry,
    Period,
    RelativeRange,
    Series,
    StatId,
    StatsResult,
    aggregate_by_period,
    build_series_datasets,
    calculate_stats,
    filter_by_range,
    running_metric,
    series_summary,
)
from chronoscharts.chart import ChartOptions, ViewportController, build_chart_layout, interpolate_path
from chronoscharts.types import Dataset, Point

# Ensure chronoscharts logger has NullHandler so logs don't propagate to root
# when no application has configured logging.
_logger = logging.getLogger("chronoscharts")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "ChartOptions",
    "ChartSettings",
    "Dataset",
    "Entry",
    "Period",
    "Point",
    "RelativeRange",
    "Series",
    "StatId",
    "StatsResult",
    "ViewportController",
    "aggregate_by_period",
    "build_chart_layout",
    "build_series_datasets",
    "calculate_stats",
    "configure_logging",
    "filter_by_range",
    "get_logger",
    "interpolate_path",
    "running_metric",
    "series_summary",
]

__version__ = "0.1.0"
