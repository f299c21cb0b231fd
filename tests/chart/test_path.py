"""Unit tests for line path interpolation."""

import pytest

from chronoscharts.chart.path import (
    PathSegment,
    SegmentKind,
    interpolate_path,
    path_to_svg,
    project_points,
)


def _kinds(segments):
    return [seg.kind for seg in segments]


@pytest.mark.parametrize("points", [[], [(1, 1)]])
def test_fewer_than_two_points_is_empty(points):
    assert interpolate_path(points) == []
    assert path_to_svg(interpolate_path(points)) == ""


def test_two_points_ignore_tension():
    segments = interpolate_path([(0, 0), (10, 5)], tension=0.9)
    assert _kinds(segments) == [SegmentKind.MOVE, SegmentKind.LINE]
    assert segments[1].end == (10, 5)


def test_zero_tension_gives_one_line_per_pair():
    points = [(0, 0), (10, 10), (20, 0), (30, 5)]
    segments = interpolate_path(points, tension=0)
    assert _kinds(segments) == [SegmentKind.MOVE] + [SegmentKind.LINE] * 3
    assert [seg.end for seg in segments] == points


def test_curves_pass_through_every_point():
    points = [(0, 0), (10, 10), (20, 0), (30, 5)]
    segments = interpolate_path(points, tension=0.2)
    assert _kinds(segments) == [SegmentKind.MOVE] + [SegmentKind.CURVE] * 3
    assert [seg.end for seg in segments] == points


def test_control_points_reuse_endpoints():
    segments = interpolate_path([(0, 0), (10, 10), (20, 0)], tension=0.2)
    c1, c2, end = segments[1].points
    assert c1 == pytest.approx((10 / 30, 10 / 30))
    assert c2 == pytest.approx((10 - 20 / 30, 10))
    assert end == (10, 10)


def test_tension_is_clamped():
    points = [(0, 0), (10, 10), (20, 0)]
    assert interpolate_path(points, tension=5) == interpolate_path(points, tension=1)
    assert interpolate_path(points, tension=-1) == interpolate_path(points, tension=0)


def test_svg_output():
    assert path_to_svg(interpolate_path([(0, 0), (10, 10.5)])) == "M 0 0 L 10 10.5"
    curve = PathSegment(SegmentKind.CURVE, ((1, 2), (3, 4), (5, 6)))
    assert curve.to_svg() == "C 1 2, 3 4, 5 6"


def test_project_points_applies_offset():
    pixels = project_points([(1, 2), (3, 4)], lambda x: x * 10, lambda y: 100 - y, offset_x=5, offset_y=7)
    assert pixels == [(15, 105), (35, 103)]
