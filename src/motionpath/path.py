"""Vector path handling: command building, length caching and sampling at animation time."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from motionpath.bezier import BezierCurve
from motionpath.path_support import MpPathCommand, PathCommandProcessor, PathCursor
from motionpath.point import MpPoint, PointLike

logger = logging.getLogger(__name__)

###############################################################################
# MpPath
###############################################################################


class MpPath:
    """Vector path represented by an ordered sequence of path commands.

    A path contains 0..n subpaths; each subpath usually starts with M, is
    followed by an arbitrary mix of L/Q/C, and may end with Z. Commands that
    appear before the first M are anchored at the origin.
    A path may also be empty (no commands).

    Paths are grown with the builder methods (move_to, line_to, quadratic_to,
    cubic_to, close_path). Query, morphing and partial-path operations never
    modify the path they are called on, they return new instances.

    Attributes:
        _commands: List of path commands in drawing order
        _cursor: Cursor after the last command (used by the builder)
        _length: Cached total length, None if the cache is invalid
        _segment_lengths: Cached length per command
        _cumulative_lengths: Cached running total of segment lengths per command
    """

    # Direction returned by get_tangent_at() when the path has no length
    DEFAULT_TANGENT: MpPoint = MpPoint.RIGHT

    def __init__(self, commands: Optional[Iterable[MpPathCommand]] = None):
        """
        Initialize an MpPath, optionally from existing commands.

        Args:
            commands: Commands appended in order via append_command().
        """
        self._commands: List[MpPathCommand] = []
        self._cursor = PathCursor()
        self._length: Optional[float] = None  # caching variable
        self._segment_lengths: Optional[NDArray[np.float64]] = None  # caching variable
        self._cumulative_lengths: Optional[NDArray[np.float64]] = None  # caching variable
        if commands is not None:
            for command in commands:
                self.append_command(command)

    ###########################################################################
    # Builder
    ###########################################################################

    def _append(self, command: MpPathCommand) -> MpPath:
        self._invalidate_cache()
        self._commands.append(command)
        self._cursor.advance(command)
        return self

    def move_to(self, point: PointLike) -> MpPath:
        """Start a new subpath at point."""
        return self._append(MpPathCommand.move(MpPoint.of(point)))

    def line_to(self, point: PointLike) -> MpPath:
        """Add a straight line from the current point to point."""
        return self._append(MpPathCommand.line(MpPoint.of(point)))

    def quadratic_to(self, control: PointLike, end: PointLike) -> MpPath:
        """Add a quadratic Bezier curve from the current point to end."""
        return self._append(MpPathCommand.quadratic(MpPoint.of(control), MpPoint.of(end)))

    def cubic_to(self, control1: PointLike, control2: PointLike, end: PointLike) -> MpPath:
        """Add a cubic Bezier curve from the current point to end."""
        return self._append(MpPathCommand.cubic(MpPoint.of(control1), MpPoint.of(control2), MpPoint.of(end)))

    def close_path(self) -> MpPath:
        """
        Close the current subpath by a straight line back to its start point.
        Without a preceding move_to the path is closed to the origin.
        """
        return self._append(MpPathCommand.close(self._cursor.subpath_start))

    def append_command(self, command: MpPathCommand) -> MpPath:
        """Append a prebuilt command.

        A close command is re-targeted to the start point of the current
        subpath, so its end always matches the point it actually closes to.
        """
        if command.cmd == "Z":
            return self.close_path()
        return self._append(command)

    @classmethod
    def from_commands(cls, commands: Iterable[MpPathCommand]) -> MpPath:
        """Create an MpPath from a sequence of commands."""
        return cls(commands)

    ###########################################################################
    # Accessors
    ###########################################################################

    def get_commands(self) -> List[MpPathCommand]:
        """Return a snapshot copy of the commands of this path."""
        return list(self._commands)

    @property
    def commands(self) -> Tuple[MpPathCommand, ...]:
        """
        The commands of this path as read-only tuple.
        """
        return tuple(self._commands)

    @property
    def command_count(self) -> int:
        """Number of commands (including moves and closes) in this path."""
        return len(self._commands)

    @property
    def is_empty(self) -> bool:
        """Return True if the path has no commands."""
        return not self._commands

    @property
    def current_point(self) -> MpPoint:
        """The cursor position after the last command."""
        return self._cursor.position

    @property
    def start_point(self) -> MpPoint:
        """The cursor position before the first drawing command (origin if the path is empty)."""
        if self._commands and self._commands[0].cmd == "M":
            return self._commands[0].end
        return MpPoint.ZERO

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self):
        return iter(tuple(self._commands))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MpPath):
            return NotImplemented
        return self._commands == other._commands

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"MpPath(commands={len(self._commands)}, cmds='{''.join(c.cmd for c in self._commands)}')"

    def clone(self) -> MpPath:
        """Return a deep, independent copy of this path.

        The cached lengths are not copied; the clone rebuilds them on demand.
        """
        new_path = MpPath()
        new_path._commands = list(self._commands)
        new_path._cursor = self._cursor.copy()
        return new_path

    ###########################################################################
    # Length cache
    ###########################################################################

    def _invalidate_cache(self) -> None:
        """Drop the cached length data. Called on every modification."""
        self._length = None
        self._segment_lengths = None
        self._cumulative_lengths = None

    def _ensure_cache(self) -> None:
        """Build the per-segment and cumulative length tables if not yet valid."""
        if self._length is not None:
            return

        walk = PathCommandProcessor.walk(self._commands)
        segment_lengths = np.fromiter(
            (PathCommandProcessor.segment_length(cmd, cursor) for cmd, cursor in walk),
            dtype=np.float64,
            count=len(self._commands),
        )
        self._segment_lengths = segment_lengths
        self._cumulative_lengths = np.cumsum(segment_lengths)
        self._length = float(self._cumulative_lengths[-1]) if segment_lengths.size else 0.0
        logger.debug("Rebuilt length cache for %d commands, total length %g", len(self._commands), self._length)

    @property
    def segment_lengths(self) -> NDArray[np.float64]:
        """Length of each command (0.0 for moves), as read-only array."""
        self._ensure_cache()
        view = self._segment_lengths.view()
        view.flags.writeable = False
        return view

    @property
    def cumulative_lengths(self) -> NDArray[np.float64]:
        """Running total of segment lengths per command, as read-only array."""
        self._ensure_cache()
        view = self._cumulative_lengths.view()
        view.flags.writeable = False
        return view

    def get_length(self) -> float:
        """Return the total (approximated) length of the path."""
        self._ensure_cache()
        return self._length

    ###########################################################################
    # Sampling
    ###########################################################################

    def _locate(self, t: float) -> Tuple[int, float]:
        """Return (command index, local t) of the position at fraction t of the total length.

        Requires a valid cache and a total length greater than zero.
        """
        t = min(max(t, 0.0), 1.0)
        target = t * self._length
        cumulative = self._cumulative_lengths
        segment_lengths = self._segment_lengths

        # first segment whose cumulative length reaches the target
        index = int(np.searchsorted(cumulative, target, side="left"))
        last = len(cumulative) - 1
        index = min(index, last)
        # moves and other zero-length segments carry no position along the path
        while index < last and segment_lengths[index] == 0.0:
            index += 1

        segment_length = segment_lengths[index]
        segment_start = cumulative[index] - segment_length
        local_t = (target - segment_start) / segment_length if segment_length > 0.0 else 0.0
        return index, min(max(float(local_t), 0.0), 1.0)

    def get_point_at(self, t: float) -> MpPoint:
        """Return the point at the normalized position t (clamped to 0..1) along the path.

        A path without length returns the end point of its last command
        (the origin for an empty path).
        """
        self._ensure_cache()
        if self._length == 0.0:
            return self._commands[-1].end if self._commands else MpPoint.ZERO

        index, local_t = self._locate(t)
        cursor = PathCommandProcessor.cursor_before(self._commands, index)
        return PathCommandProcessor.point_on_segment(self._commands[index], cursor, local_t)

    def get_tangent_at(self, t: float) -> MpPoint:
        """Return the unit tangent at the normalized position t (clamped to 0..1) along the path.

        A path without length has no meaningful tangent and returns DEFAULT_TANGENT.
        Where a curve's derivative vanishes (coincident control points at an
        end), the direction of the segment's chord is used instead.
        """
        self._ensure_cache()
        if self._length == 0.0:
            return self.DEFAULT_TANGENT

        index, local_t = self._locate(t)
        command = self._commands[index]
        cursor = PathCommandProcessor.cursor_before(self._commands, index)

        tangent = PathCommandProcessor.derivative_on_segment(command, cursor, local_t).normalize()
        if tangent == MpPoint.ZERO:
            target = cursor.subpath_start if command.cmd == "Z" else command.end
            tangent = (target - cursor.position).normalize()
        if tangent == MpPoint.ZERO:
            return self.DEFAULT_TANGENT
        return tangent

    def get_points(self, count: int) -> List[MpPoint]:
        """Return count points evenly spaced (by length) along the path, both ends included."""
        if count <= 0:
            return []
        if count == 1:
            return [self.get_point_at(0.0)]
        return [self.get_point_at(i / (count - 1)) for i in range(count)]

    def polygonize(self, steps: int = 20) -> NDArray[np.float64]:
        """Return the path flattened to a polyline of shape (n, 2).

        Curves are sampled with steps segments each; moves start new runs
        without a separating marker, so this is meant for single subpaths
        and bounds computations.
        """
        points: List[Tuple[float, float]] = []
        for command, cursor in PathCommandProcessor.walk(self._commands):
            start = cursor.position
            if command.cmd in ("M", "L"):
                points.append(command.end.to_tuple())
            elif command.cmd == "Z":
                points.append(cursor.subpath_start.to_tuple())
            elif command.is_complete:
                if command.cmd == "Q":
                    curve = BezierCurve.polygonize_quadratic_curve((start, command.control1, command.end), steps)
                else:
                    curve = BezierCurve.polygonize_cubic_curve(
                        (start, command.control1, command.control2, command.end), steps
                    )
                points.extend(map(tuple, curve[1:]))
            else:
                points.append(command.end.to_tuple())
        if not points:
            return np.empty((0, 2), dtype=np.float64)
        return np.array(points, dtype=np.float64)

    def bounding_box(self) -> Tuple[float, float, float, float]:
        """
        Return the bounding box (xmin, ymin, xmax, ymax) of the polygonized path.
        An empty path returns a box of size 0 at the origin.
        """
        polyline = self.polygonize()
        if not polyline.size:
            return (0.0, 0.0, 0.0, 0.0)
        xmin, ymin = polyline.min(axis=0)
        xmax, ymax = polyline.max(axis=0)
        return (float(xmin), float(ymin), float(xmax), float(ymax))

    ###########################################################################
    # Conversions
    ###########################################################################

    def to_cubic(self) -> MpPath:
        """Return a new path where every drawing command is an equivalent cubic curve."""
        # pylint: disable=import-outside-toplevel
        from motionpath.path_morphing import MpPathMorpher

        return MpPath(MpPathMorpher.to_cubic_commands(self._commands))

    @staticmethod
    def match_points(path1: MpPath, path2: MpPath) -> Tuple[MpPath, MpPath]:
        """Return cubic-normalized copies of both paths with equal command counts."""
        # pylint: disable=import-outside-toplevel
        from motionpath.path_morphing import MpPathMorpher

        return MpPathMorpher.match_points(path1, path2)

    @staticmethod
    def interpolate(path1: MpPath, path2: MpPath, t: float) -> MpPath:
        """Return the morph between path1 (t=0) and path2 (t=1)."""
        # pylint: disable=import-outside-toplevel
        from motionpath.path_morphing import MpPathMorpher

        return MpPathMorpher.interpolate(path1, path2, t)

    def get_partial_path(self, t: float) -> MpPath:
        """Return the prefix of this path covering fraction t of its length."""
        # pylint: disable=import-outside-toplevel
        from motionpath.path_partial import get_partial_path

        return get_partial_path(self, t)

    @classmethod
    def from_dict(cls, data: dict) -> MpPath:
        """Create an MpPath instance from a dictionary.

        Raises:
            ValueError: If a command has an unknown type.
        """
        return cls(MpPathCommand.from_dict(item) for item in data.get("commands", []))

    def to_dict(self) -> dict:
        """Convert the MpPath instance to a dictionary."""
        return {"commands": [command.to_dict() for command in self._commands]}


def join_paths(paths: Sequence[MpPath]) -> MpPath:
    """Join paths into a single MpPath by concatenating their commands in order."""
    result = MpPath()
    for path in paths:
        for command in path.commands:
            result.append_command(command)
    return result
