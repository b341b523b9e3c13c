"""Tests for MpPath: building, length cache, sampling and conversions."""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from motionpath.path import MpPath, join_paths
from motionpath.path_support import MpPathCommand
from motionpath.point import MpPoint


def _line(start=(0, 0), end=(10, 0)) -> MpPath:
    return MpPath().move_to(start).line_to(end)


def _arch() -> MpPath:
    return MpPath().move_to((0, 0)).cubic_to((0, 10), (10, 10), (10, 0))


def _assert_point(actual: MpPoint, expected, tol: float = 1e-9):
    assert actual.is_close(MpPoint.of(expected), tolerance=tol), f"{actual} != {expected}"


class TestMpPathBuilder:
    """Command building."""

    def test_builder_chains_and_counts(self):
        """Builder methods return the path and append one command each."""
        path = MpPath()
        assert path.move_to((0, 0)) is path
        path.line_to((1, 0)).quadratic_to((2, 1), (3, 0)).cubic_to((4, 1), (5, 1), (6, 0)).close_path()
        assert path.command_count == 5
        assert len(path) == 5
        assert [c.cmd for c in path.get_commands()] == ["M", "L", "Q", "C", "Z"]

    def test_close_targets_subpath_start(self):
        """A close ends at the start of its own subpath."""
        path = MpPath().move_to((0, 0)).line_to((1, 0)).close_path()
        path.move_to((5, 5)).line_to((6, 5)).close_path()
        assert path.commands[2].end == MpPoint(0, 0)
        assert path.commands[5].end == MpPoint(5, 5)
        assert path.current_point == MpPoint(5, 5)

    def test_close_without_move_returns_to_origin(self):
        """Commands before the first move are anchored at the origin."""
        path = MpPath().line_to((10, 0)).close_path()
        assert path.commands[-1].end == MpPoint.ZERO
        assert path.get_length() == pytest.approx(20.0)

    def test_append_command_retargets_close(self):
        """A prebuilt close is re-targeted to the current subpath start."""
        path = MpPath().move_to((2, 2)).line_to((4, 2))
        path.append_command(MpPathCommand.close(MpPoint(99, 99)))
        assert path.commands[-1].end == MpPoint(2, 2)

    def test_get_commands_is_a_snapshot(self):
        """Modifying the returned list does not touch the path."""
        path = _line()
        commands = path.get_commands()
        commands.append(MpPathCommand.line(MpPoint(1, 1)))
        assert path.command_count == 2

    def test_equality(self):
        """Paths compare by their commands."""
        assert _line() == _line()
        assert _line() != _line(end=(5, 0))
        assert _line() != "not a path"

    def test_start_point(self):
        """Start point is the first move, origin otherwise."""
        assert _line((3, 4)).start_point == MpPoint(3, 4)
        assert MpPath().start_point == MpPoint.ZERO


class TestMpPathLength:
    """Length cache."""

    def test_line_length(self):
        """A straight line has its Euclidean length."""
        assert _line().get_length() == pytest.approx(10.0)

    def test_empty_and_move_only_paths_have_zero_length(self):
        """No drawing command means no length."""
        assert MpPath().get_length() == 0.0
        assert MpPath().move_to((3, 4)).get_length() == 0.0

    def test_cache_is_invalidated_on_append(self):
        """Appending after a length query updates the length."""
        path = _line()
        assert path.get_length() == pytest.approx(10.0)
        path.line_to((10, 5))
        assert path.get_length() == pytest.approx(15.0)

    def test_segment_and_cumulative_lengths(self):
        """One entry per command, moves contribute zero."""
        path = _line().move_to((20, 0)).line_to((20, 3))
        assert_allclose(path.segment_lengths, [0.0, 10.0, 0.0, 3.0])
        assert_allclose(path.cumulative_lengths, [0.0, 10.0, 10.0, 13.0])

    def test_length_arrays_are_read_only(self):
        """The cached arrays cannot be modified through the properties."""
        path = _line()
        with pytest.raises(ValueError):
            path.segment_lengths[0] = 1.0
        with pytest.raises(ValueError):
            path.cumulative_lengths[0] = 1.0

    def test_degenerate_curves_have_zero_length(self):
        """Curves collapsed to a single point off the origin have no length."""
        cubic = MpPath().move_to((3, 3)).cubic_to((3, 3), (3, 3), (3, 3))
        quadratic = MpPath().move_to((3, 3)).quadratic_to((3, 3), (3, 3))
        for path in (cubic, quadratic):
            assert path.get_length() == 0.0
            assert path.get_point_at(0.5) == MpPoint(3, 3)
            assert path.get_tangent_at(0.5) == MpPath.DEFAULT_TANGENT
            assert path.get_partial_path(0.5) == path

    def test_incomplete_curve_contributes_zero(self):
        """A cubic without control points has no length but moves the cursor."""
        path = MpPath([MpPathCommand.move(MpPoint(0, 0)), MpPathCommand("C", MpPoint(10, 0))])
        path.line_to((10, 5))
        assert path.get_length() == pytest.approx(5.0)

    @pytest.mark.parametrize(
        "path",
        [MpPath(), _line(), _arch(), MpPath().move_to((1, 1)).quadratic_to((1, 1), (1, 1)).close_path()],
    )
    def test_length_is_never_negative(self, path):
        """Length is non-negative for any path."""
        assert path.get_length() >= 0.0


class TestMpPathSampling:
    """Point and tangent lookup."""

    def test_line_points(self):
        """Points along a line interpolate linearly."""
        path = _line()
        _assert_point(path.get_point_at(0.0), (0, 0))
        _assert_point(path.get_point_at(0.5), (5, 0))
        _assert_point(path.get_point_at(1.0), (10, 0))

    def test_t_is_clamped(self):
        """t outside 0..1 returns the end points."""
        path = _line()
        _assert_point(path.get_point_at(-1.0), (0, 0))
        _assert_point(path.get_point_at(2.0), (10, 0))

    def test_zero_length_paths(self):
        """Empty paths sample the origin, degenerate ones their last point."""
        assert MpPath().get_point_at(0.5) == MpPoint.ZERO
        assert MpPath().move_to((3, 4)).get_point_at(0.5) == MpPoint(3, 4)
        assert MpPath().get_tangent_at(0.5) == MpPath.DEFAULT_TANGENT == MpPoint.RIGHT

    def test_polyline_points_and_tangents(self):
        """Lookups find the segment covering the target length."""
        path = _line().line_to((10, 10))
        _assert_point(path.get_point_at(0.5), (10, 0))
        _assert_point(path.get_point_at(0.75), (10, 5))
        _assert_point(path.get_tangent_at(0.25), MpPoint.RIGHT)
        _assert_point(path.get_tangent_at(0.75), MpPoint.DOWN)

    def test_moves_between_subpaths_are_skipped(self):
        """A move carries no length; sampling jumps to the next subpath."""
        path = _line().move_to((20, 0)).line_to((30, 0))
        assert path.get_length() == pytest.approx(20.0)
        _assert_point(path.get_point_at(0.75), (25, 0))

    def test_close_segment_is_sampled(self):
        """The closing line is part of the path length."""
        path = MpPath().move_to((0, 0)).line_to((10, 0)).line_to((10, 10)).close_path()
        assert path.get_length() == pytest.approx(20.0 + math.sqrt(200.0))
        _assert_point(path.get_point_at(1.0), (0, 0))
        _assert_point(path.get_tangent_at(1.0), (-math.sqrt(0.5), -math.sqrt(0.5)))

    def test_cubic_tangents_at_ends(self):
        """Tangents follow the control polygon at the ends of a cubic."""
        path = _arch()
        _assert_point(path.get_tangent_at(0.0), MpPoint.DOWN)
        _assert_point(path.get_tangent_at(1.0), MpPoint.UP)

    def test_tangent_falls_back_to_chord(self):
        """A vanishing derivative uses the chord direction."""
        path = MpPath().move_to((0, 0)).cubic_to((0, 0), (5, 5), (10, 0))
        _assert_point(path.get_tangent_at(0.0), MpPoint.RIGHT)

    def test_tangent_is_unit_length(self):
        """Tangents are normalized."""
        path = _arch()
        for t in np.linspace(0.0, 1.0, 11):
            assert path.get_tangent_at(float(t)).length() == pytest.approx(1.0)

    @pytest.mark.parametrize("count", [1, 2, 5, 17])
    def test_get_points_count(self, count):
        """get_points returns exactly count points."""
        assert len(_arch().get_points(count)) == count

    def test_get_points_spacing(self):
        """Points are evenly spaced by length."""
        points = _line().get_points(5)
        assert [p.x for p in points] == pytest.approx([0.0, 2.5, 5.0, 7.5, 10.0])
        assert _line().get_points(1) == [MpPoint(0, 0)]
        assert not _line().get_points(0)


class TestMpPathCopiesAndConversions:
    """Clone, cubic conversion, polygonize and dict conversion."""

    def test_clone_is_independent(self):
        """Changing a clone does not change the original."""
        path = _line()
        clone = path.clone()
        assert clone == path
        clone.line_to((10, 10))
        assert path.command_count == 2
        assert path.get_length() == pytest.approx(10.0)
        assert clone.get_length() == pytest.approx(20.0)

    def test_to_cubic_preserves_endpoints(self):
        """Every drawing command becomes a cubic, start and end stay."""
        path = MpPath().move_to((0, 0)).line_to((3, 0)).quadratic_to((4, 2), (6, 0)).close_path()
        cubic = path.to_cubic()
        assert [c.cmd for c in cubic.commands] == ["M", "C", "C", "C"]
        _assert_point(cubic.get_point_at(0.0), path.get_point_at(0.0))
        _assert_point(cubic.get_point_at(1.0), path.get_point_at(1.0))
        assert path.commands[1].cmd == "L"

    def test_to_cubic_keeps_shape(self):
        """Converted lines keep their length."""
        assert _line().to_cubic().get_length() == pytest.approx(10.0)

    def test_polygonize_and_bounding_box(self):
        """Curves are sampled, the box covers all samples."""
        polyline = _arch().polygonize(steps=10)
        assert polyline.shape == (11, 2)
        xmin, ymin, xmax, ymax = _arch().bounding_box()
        assert (xmin, ymin, xmax) == pytest.approx((0.0, 0.0, 10.0))
        assert ymax == pytest.approx(7.5)
        assert MpPath().bounding_box() == (0.0, 0.0, 0.0, 0.0)

    def test_dict_roundtrip_is_lossless(self):
        """All command types survive to_dict / from_dict."""
        path = MpPath().move_to((0, 0)).line_to((1, 0)).quadratic_to((2, 1), (3, 0))
        path.cubic_to((4, 1), (5, 1), (6, 0)).close_path()
        data = path.to_dict()
        assert data["commands"][2] == {
            "type": "Q",
            "end": {"x": 3.0, "y": 0.0},
            "control1": {"x": 2.0, "y": 1.0},
        }
        assert MpPath.from_dict(data) == path

    def test_from_dict_rejects_unknown_type(self):
        """Unknown command tags raise ValueError."""
        with pytest.raises(ValueError):
            MpPath.from_dict({"commands": [{"type": "A", "end": {"x": 0, "y": 0}}]})

    def test_from_commands_and_join(self):
        """Paths can be rebuilt from commands and joined."""
        path = MpPath.from_commands(_line().commands)
        assert path == _line()
        joined = join_paths([_line(), _line((0, 5), (10, 5))])
        assert joined.command_count == 4
        assert joined.get_length() == pytest.approx(20.0)
