"""Chart geometry: scales, ticks, paths, layout and viewport.

chronoscharts.chart.figure (Plotly output) is not imported here.
"""

from chronoscharts.chart.layout import ChartLayout, ChartOptions, Padding, build_chart_layout
from chronoscharts.chart.path import PathSegment, interpolate_path, path_to_svg
from chronoscharts.chart.scales import TimeScale, ValueScale, build_x_scale, build_y_scale
from chronoscharts.chart.viewport import PanState, ViewportController

__all__ = [
    "ChartLayout",
    "ChartOptions",
    "Padding",
    "PanState",
    "PathSegment",
    "TimeScale",
    "ValueScale",
    "ViewportController",
    "build_chart_layout",
    "build_x_scale",
    "build_y_scale",
    "interpolate_path",
    "path_to_svg",
]
