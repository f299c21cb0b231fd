"""
Running (rolling) statistics over a sliding window.

For a window of W values sliding over N chronological values, every full
window produces one point located at the window's middle label:
x = labels[floor(i + (W - 1) / 2)]. Exactly max(0, N - W + 1) points are
returned; windows smaller than 2 produce nothing.
"""

from __future__ import annotations

from typing import Optional, Sequence, Union

import numpy as np

from chronoscharts.analytics.entries import Entry
from chronoscharts.analytics.stats import StatId, calculate_stats, stat_value
from chronoscharts.types import Point, XValue

MIN_WINDOW = 2


def middle_index(start: int, window: int) -> int:
    """Index of the label a window starting at `start` is reported at."""
    return int(np.floor(start + (window - 1) / 2))


def running_metric(
    values: Sequence[float],
    labels: Sequence[XValue],
    metric: Union[StatId, str],
    window: int,
    entries: Optional[Sequence[Entry]] = None,
) -> list[Point]:
    """
    Compute a statistic over every full sliding window.

    Args:
        values: Chronological values.
        labels: x values aligned to `values` (timestamps or bucket labels).
            If fewer labels than values are given, only the aligned prefix
            is used.
        metric: Statistic to report; unknown ids report 0.
        window: Window size W (>= 2).
        entries: Optional source entries aligned to `values`, used for dayMean.

    Returns:
        List of Point(x=middle label, y=statistic).
    """
    n = min(len(values), len(labels))
    if window < MIN_WINDOW or n < window:
        return []

    arr = np.asarray(values[:n], dtype=float)
    windows = np.lib.stride_tricks.sliding_window_view(arr, window)
    stat = StatId.parse(metric)

    points: list[Point] = []
    for i, win in enumerate(windows):
        window_entries = list(entries[i : i + window]) if entries is not None else None
        result = calculate_stats(np.sort(win), win, window_entries)
        points.append(Point(x=labels[middle_index(i, window)], y=stat_value(result, stat)))
    return points
