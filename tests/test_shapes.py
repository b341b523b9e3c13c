"""Tests for the shape path factories."""

import math

import pytest

from motionpath.point import MpPoint
from motionpath.shapes import MpShapes


def _assert_point(actual: MpPoint, expected, tol: float = 1e-9):
    assert actual.is_close(MpPoint.of(expected), tolerance=tol), f"{actual} != {expected}"


def test_line_path_defaults():
    """The default line runs from the origin one unit to the right."""
    path = MpShapes.line_path()
    assert [c.cmd for c in path.commands] == ["M", "L"]
    assert path.get_length() == pytest.approx(1.0)


def test_polygon_path():
    """Polygons are closed, empty vertices give an empty path."""
    assert MpShapes.polygon_path([]).is_empty
    triangle = MpShapes.polygon_path([(0, 0), (3, 0), (3, 4)])
    assert [c.cmd for c in triangle.commands] == ["M", "L", "L", "Z"]
    assert triangle.get_length() == pytest.approx(12.0)


def test_rectangle_path_vertex_order():
    """Rectangle vertices run top-left, top-right, bottom-right, bottom-left."""
    path = MpShapes.rectangle_path()
    corners = [c.end for c in path.commands[:4]]
    assert corners == [MpPoint(-1, -0.5), MpPoint(1, -0.5), MpPoint(1, 0.5), MpPoint(-1, 0.5)]
    assert path.get_length() == pytest.approx(6.0)
    assert path.bounding_box() == pytest.approx((-1.0, -0.5, 1.0, 0.5))


def test_arc_path_default_quarter():
    """The default arc is one cubic from angle 0 to pi/2."""
    path = MpShapes.arc_path()
    assert [c.cmd for c in path.commands] == ["M", "C"]
    _assert_point(path.get_point_at(0.0), (1, 0))
    _assert_point(path.get_point_at(1.0), (0, 1))
    assert path.get_point_at(0.5).length() == pytest.approx(1.0, abs=1e-3)


@pytest.mark.parametrize(
    "end_angle, pieces",
    [(math.pi, 2), (1.5 * math.pi + 0.1, 4), (-math.pi / 2, 1), (0.0, 1)],
)
def test_arc_path_piece_count(end_angle, pieces):
    """Sweeps are split into pieces of at most 90 degrees."""
    path = MpShapes.arc_path(1.0, 0.0, end_angle)
    assert path.command_count == pieces + 1
    _assert_point(path.get_point_at(1.0), (math.cos(end_angle), math.sin(end_angle)))


def test_circle_path():
    """A circle is four quarter arcs and a close."""
    path = MpShapes.circle_path(2.0)
    assert [c.cmd for c in path.commands] == ["M", "C", "C", "C", "C", "Z"]
    assert path.get_length() == pytest.approx(4.0 * math.pi, abs=1e-2)
    for point in path.get_points(17):
        assert point.length() == pytest.approx(2.0, abs=2e-3)
