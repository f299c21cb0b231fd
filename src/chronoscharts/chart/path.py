"""
Line path construction from pixel-space points.

interpolate_path() returns a list of PathSegment records (move / line /
cubic curve) that a renderer turns into a drawable shape; path_to_svg()
produces an SVG path string ('M x y L x y ...' or '... C c1 c2 p').

Smoothing: for each consecutive pair (p1, p2), the control points are
  c1 = p1 + (p2 - p0) * tension / 6
  c2 = p2 - (p3 - p1) * tension / 6
where p0 and p3 are the neighbours before p1 and after p2 (the endpoint
itself when there is none). This is a cardinal-spline style curve passing
through every point.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

XY = tuple[float, float]

DEFAULT_TENSION = 0.2


class SegmentKind(str, Enum):
    MOVE = "M"
    LINE = "L"
    CURVE = "C"


@dataclass(frozen=True)
class PathSegment:
    """One path command. CURVE carries (control1, control2, end); others carry (end,)."""

    kind: SegmentKind
    points: tuple[XY, ...]

    @property
    def end(self) -> XY:
        return self.points[-1]

    def to_svg(self) -> str:
        coords = ", ".join(f"{_num(x)} {_num(y)}" for x, y in self.points)
        return f"{self.kind.value} {coords}"


def _num(v: float) -> str:
    return f"{v:.6g}"


def interpolate_path(points: Sequence[XY], tension: float = DEFAULT_TENSION) -> list[PathSegment]:
    """
    Convert ordered points into path segments.

    - fewer than 2 points: empty path
    - tension 0, or exactly 2 points: straight LINE segments
    - otherwise: one cubic CURVE per consecutive pair
    Tension is clamped to [0, 1].
    """
    n = len(points)
    if n < 2:
        return []
    tension = min(1.0, max(0.0, float(tension)))
    pts = [(float(x), float(y)) for x, y in points]

    segments = [PathSegment(SegmentKind.MOVE, (pts[0],))]
    if tension == 0 or n == 2:
        for p in pts[1:]:
            segments.append(PathSegment(SegmentKind.LINE, (p,)))
        return segments

    k = tension / 6
    for i in range(1, n):
        x0, y0 = pts[max(0, i - 2)]
        x1, y1 = pts[i - 1]
        x2, y2 = pts[i]
        x3, y3 = pts[min(n - 1, i + 1)]
        c1 = (x1 + (x2 - x0) * k, y1 + (y2 - y0) * k)
        c2 = (x2 - (x3 - x1) * k, y2 - (y3 - y1) * k)
        segments.append(PathSegment(SegmentKind.CURVE, (c1, c2, (x2, y2))))
    return segments


def path_to_svg(segments: Sequence[PathSegment]) -> str:
    """SVG path data for a segment list ('' for an empty path)."""
    return " ".join(seg.to_svg() for seg in segments)


def project_points(
    points: Sequence[tuple[object, float]],
    x_scale: Callable[[object], float],
    y_scale: Callable[[float], float],
    offset_x: float = 0.0,
    offset_y: float = 0.0,
) -> list[XY]:
    """Map (x, y) data points to pixel space, shifted by the chart padding."""
    return [(offset_x + x_scale(x), offset_y + y_scale(y)) for x, y in points]
