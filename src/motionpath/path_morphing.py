"""Path morphing module for aligning and interpolating dissimilar paths."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from motionpath.bezier import BezierCurve
from motionpath.common import SUBDIVIDE_SPLIT_T
from motionpath.path import MpPath
from motionpath.path_support import MpPathCommand, PathCommandProcessor
from motionpath.point import MpPoint, PointLike

logger = logging.getLogger(__name__)


class MpPathMorpher:
    """Match the structure of two paths and interpolate between them.

    Morphing works in three steps:
    1. Normalize both paths so every drawing command is a cubic curve
       (lines, quadratics and closes are converted exactly)
    2. Equalize the command counts by splitting cubics of the shorter path
       at their parameter midpoint until both paths have the same length
    3. Interpolate control points and end points index by index

    Subdivision is a loop over passes, each pass splitting as many cubics as
    still needed, so large count differences never grow the call stack.
    """

    SPLIT_T: float = SUBDIVIDE_SPLIT_T

    ###########################################################################
    # Normalization
    ###########################################################################

    @classmethod
    def to_cubic_commands(cls, commands: Sequence[MpPathCommand]) -> List[MpPathCommand]:
        """Rewrite commands so that every drawing command is a cubic curve.

        Conversions are exact degree elevations, the shape is unchanged:
        - L(p0 -> p1)      -> C(p0 + (p1-p0)/3, p1 - (p1-p0)/3, p1)
        - Q(p0, q1, p1)    -> C(p0 + 2/3*(q1-p0), p1 + 2/3*(q1-p1), p1)
        - Z                -> like L, back to the subpath start
        - M and C are kept. Curves missing control points are dropped.

        Args:
            commands: Commands of the source path.

        Returns:
            New list containing only M and C commands.
        """
        result: List[MpPathCommand] = []

        for command, cursor in PathCommandProcessor.walk(commands):
            start = cursor.position

            if command.cmd == "M":
                result.append(command)
            elif command.cmd == "L":
                control1, control2 = BezierCurve.line_to_cubic_controls(start, command.end)
                result.append(MpPathCommand.cubic(control1, control2, command.end))
            elif command.cmd == "Z":
                control1, control2 = BezierCurve.line_to_cubic_controls(start, cursor.subpath_start)
                result.append(MpPathCommand.cubic(control1, control2, cursor.subpath_start))
            elif not command.is_complete:
                logger.debug("Dropping incomplete '%s' command ending at %s", command.cmd, command.end)
            elif command.cmd == "Q":
                control1, control2 = BezierCurve.quadratic_to_cubic_controls(start, command.control1, command.end)
                result.append(MpPathCommand.cubic(control1, control2, command.end))
            else:
                result.append(command)

        return result

    ###########################################################################
    # Subdivision
    ###########################################################################

    @classmethod
    def split_cubic_at(
        cls, start: MpPoint, control1: MpPoint, control2: MpPoint, end: MpPoint, t: float
    ) -> Tuple[MpPathCommand, MpPathCommand]:
        """Split a cubic curve at t (clamped to 0..1) into two cubic commands.

        The first command starts at start, the second at the end of the first;
        together they reproduce the original curve.
        """
        t = min(max(t, 0.0), 1.0)
        first, second = BezierCurve.split_cubic_at(start, control1, control2, end, t)
        return (
            MpPathCommand.cubic(first[1], first[2], first[3]),
            MpPathCommand.cubic(second[1], second[2], second[3]),
        )

    @classmethod
    def split_quadratic_at(
        cls, start: MpPoint, control: MpPoint, end: MpPoint, t: float
    ) -> Tuple[MpPathCommand, MpPathCommand]:
        """Split a quadratic curve at t (clamped to 0..1) into two quadratic commands."""
        t = min(max(t, 0.0), 1.0)
        first, second = BezierCurve.split_quadratic_at(start, control, end, t)
        return (
            MpPathCommand.quadratic(first[1], first[2]),
            MpPathCommand.quadratic(second[1], second[2]),
        )

    @classmethod
    def subdivide_commands(cls, commands: Sequence[MpPathCommand], target_count: int) -> List[MpPathCommand]:
        """Split cubic commands until the command list reaches target_count entries.

        Each pass walks the list once and splits up to the number of still
        needed cubics at SPLIT_T; passes repeat while the count is too small.
        Cubics missing control points are kept unsplit. A list without any
        complete cubic (e.g. a single move) is padded with zero-length cubics
        at its last point instead.

        Args:
            commands: Cubic-normalized commands (only M and C).
            target_count: Requested number of commands.

        Returns:
            New list of commands with len == max(len(commands), target_count).
        """
        current = list(commands)
        passes = 0

        while len(current) < target_count:
            needed = target_count - len(current)

            if not any(command.cmd == "C" and command.is_complete for command in current):
                point = current[-1].end if current else MpPoint.ZERO
                logger.debug("No cubic to split, padding %d degenerate cubics at %s", needed, point)
                current.extend(MpPathCommand.cubic(point, point, point) for _ in range(needed))
                break

            result: List[MpPathCommand] = []
            splits = 0
            for command, cursor in PathCommandProcessor.walk(current):
                if command.cmd == "C" and command.is_complete and splits < needed:
                    result.extend(
                        cls.split_cubic_at(cursor.position, command.control1, command.control2, command.end, cls.SPLIT_T)
                    )
                    splits += 1
                else:
                    result.append(command)

            current = result
            passes += 1

        if passes:
            logger.debug("Subdivided path to %d commands in %d passes", len(current), passes)
        return current

    ###########################################################################
    # Matching and interpolation
    ###########################################################################

    @classmethod
    def match_points(cls, path1: MpPath, path2: MpPath) -> Tuple[MpPath, MpPath]:
        """Return cubic-normalized copies of path1 and path2 with equal command counts.

        The path with fewer commands is subdivided; the inputs are not modified.
        """
        commands1 = cls.to_cubic_commands(path1.commands)
        commands2 = cls.to_cubic_commands(path2.commands)

        if len(commands1) < len(commands2):
            commands1 = cls.subdivide_commands(commands1, len(commands2))
        elif len(commands2) < len(commands1):
            commands2 = cls.subdivide_commands(commands2, len(commands1))

        return MpPath(commands1), MpPath(commands2)

    @classmethod
    def interpolate(cls, path1: MpPath, path2: MpPath, t: float) -> MpPath:
        """Interpolate between path1 (t=0) and path2 (t=1).

        Both paths are matched first. Per index, move/move pairs interpolate
        their point and cubic/cubic pairs interpolate both control points and
        the end point. A move paired with a cubic becomes a move to the
        interpolated end point. t is not clamped so easing curves may overshoot.
        """
        matched1, matched2 = cls.match_points(path1, path2)
        result = MpPath()

        for command1, command2 in zip(matched1.commands, matched2.commands):
            end = command1.end.lerp(command2.end, t)
            if command1.cmd == "C" and command2.cmd == "C":
                result.cubic_to(
                    command1.control1.lerp(command2.control1, t),
                    command1.control2.lerp(command2.control2, t),
                    end,
                )
            else:
                result.move_to(end)

        return result

    @classmethod
    def interpolate_path_lists(
        cls,
        sources: Sequence[MpPath],
        targets: Sequence[MpPath],
        t: float,
        anchor: Optional[PointLike] = None,
    ) -> List[MpPath]:
        """Interpolate two lists of paths index by index.

        The shorter list is padded with single-point paths at anchor (origin
        if None), so extra paths grow out of, or shrink into, that point.

        Args:
            sources: Paths at t=0.
            targets: Paths at t=1.
            t: Interpolation parameter.
            anchor: Point used for padding paths.

        Returns:
            List with max(len(sources), len(targets)) interpolated paths.
        """
        anchor_point = MpPoint.ZERO if anchor is None else MpPoint.of(anchor)
        result: List[MpPath] = []

        for index in range(max(len(sources), len(targets))):
            source = sources[index] if index < len(sources) else MpPath().move_to(anchor_point)
            target = targets[index] if index < len(targets) else MpPath().move_to(anchor_point)
            result.append(cls.interpolate(source, target, t))

        return result
