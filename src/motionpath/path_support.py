"""Supporting types and utilities for MpPath.

This module contains the path command model, command metadata, the cursor
that replays a command sequence, and per-segment geometry helpers used by the
core path implementation, the morphing and the partial-path modules.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple

from motionpath.bezier import BezierCurve
from motionpath.common import MpPathCmds
from motionpath.point import MpPoint

###############################################################################
# PathCommandInfo
###############################################################################


@dataclass(frozen=True)
class PathCommandInfo:
    """Metadata for path commands.

    Attributes:
        name: Human readable name of the command
        control_points: Number of control points the command carries besides its end point
        is_curve: Whether this command represents a curve
        is_drawing: Whether this command draws (vs. move)
    """

    name: str
    control_points: int
    is_curve: bool
    is_drawing: bool = True


# Command registry with metadata
COMMAND_INFO = {
    "M": PathCommandInfo("Move", 0, False, False),  # MoveTo - not drawing
    "L": PathCommandInfo("Line", 0, False, True),  # LineTo - drawing
    "Q": PathCommandInfo("Quadratic", 1, True, True),  # Quadratic - curve, drawing
    "C": PathCommandInfo("Cubic", 2, True, True),  # Cubic - curve, drawing
    "Z": PathCommandInfo("Close", 0, False, True),  # ClosePath - drawing, end is the subpath start
}


###############################################################################
# MpPathCommand
###############################################################################


@dataclass(frozen=True)
class MpPathCommand:
    """A single path command (segment) relative to the cursor left by its predecessor.

    Commands are immutable values; copying a list of commands yields an
    independent command sequence.

    Attributes:
        cmd: Command type, one of "M", "L", "Q", "C", "Z"
        end: End point of the segment (for "Z" the start point of the subpath)
        control1: Control point of "Q", first control point of "C"
        control2: Second control point of "C"
    """

    cmd: MpPathCmds
    end: MpPoint
    control1: Optional[MpPoint] = field(default=None)
    control2: Optional[MpPoint] = field(default=None)

    @classmethod
    def move(cls, end: MpPoint) -> MpPathCommand:
        """Create a MoveTo command."""
        return cls("M", end)

    @classmethod
    def line(cls, end: MpPoint) -> MpPathCommand:
        """Create a LineTo command."""
        return cls("L", end)

    @classmethod
    def quadratic(cls, control: MpPoint, end: MpPoint) -> MpPathCommand:
        """Create a quadratic Bezier command."""
        return cls("Q", end, control)

    @classmethod
    def cubic(cls, control1: MpPoint, control2: MpPoint, end: MpPoint) -> MpPathCommand:
        """Create a cubic Bezier command."""
        return cls("C", end, control1, control2)

    @classmethod
    def close(cls, subpath_start: MpPoint) -> MpPathCommand:
        """Create a ClosePath command back to subpath_start."""
        return cls("Z", subpath_start)

    @property
    def info(self) -> PathCommandInfo:
        """Metadata of this command's type."""
        return COMMAND_INFO[self.cmd]

    @property
    def is_complete(self) -> bool:
        """
        Return True if all control points required by the command type are present.

        Incomplete curve commands are tolerated: they contribute no geometry,
        but still move the cursor to their end point.
        """
        if self.cmd == "Q":
            return self.control1 is not None
        if self.cmd == "C":
            return self.control1 is not None and self.control2 is not None
        return True

    @classmethod
    def from_dict(cls, data: dict) -> MpPathCommand:
        """Create an MpPathCommand from a dictionary.

        Accepts both the short command letters and the long names ("Move", "Line", ...).

        Raises:
            ValueError: If the command type is unknown.
        """
        raw_type = data.get("type")
        cmd = _COMMAND_BY_NAME.get(raw_type, raw_type)
        if cmd not in COMMAND_INFO:
            raise ValueError(f"Unknown path command type '{raw_type}'")

        control1 = MpPoint.from_dict(data["control1"]) if data.get("control1") is not None else None
        control2 = MpPoint.from_dict(data["control2"]) if data.get("control2") is not None else None
        return cls(cmd, MpPoint.from_dict(data.get("end", {})), control1, control2)

    def to_dict(self) -> dict:
        """Convert the MpPathCommand to a dictionary. Absent control points are omitted."""
        result = {"type": self.cmd, "end": self.end.to_dict()}
        if self.control1 is not None:
            result["control1"] = self.control1.to_dict()
        if self.control2 is not None:
            result["control2"] = self.control2.to_dict()
        return result


_COMMAND_BY_NAME = {info.name: cmd for cmd, info in COMMAND_INFO.items()}


###############################################################################
# PathCursor
###############################################################################


@dataclass
class PathCursor:
    """Tracks the current point and the active subpath start while replaying commands.

    A fresh cursor starts at the origin, which is where commands without a
    preceding MoveTo are anchored.
    """

    position: MpPoint = MpPoint.ZERO
    subpath_start: MpPoint = MpPoint.ZERO

    def advance(self, command: MpPathCommand) -> None:
        """Move the cursor past command."""
        if command.cmd == "M":
            self.position = command.end
            self.subpath_start = command.end
        elif command.cmd == "Z":
            self.position = self.subpath_start
        else:
            self.position = command.end

    def copy(self) -> PathCursor:
        """Return an independent copy of this cursor."""
        return PathCursor(self.position, self.subpath_start)


###############################################################################
# PathCommandProcessor
###############################################################################


class PathCommandProcessor:
    """Per-segment geometry of commands interpreted against a cursor."""

    @staticmethod
    def walk(commands) -> Iterator[Tuple[MpPathCommand, PathCursor]]:
        """Yield each command together with the cursor state before it.

        The yielded cursor is a snapshot; it is not affected by later steps.
        """
        cursor = PathCursor()
        for command in commands:
            yield command, cursor.copy()
            cursor.advance(command)

    @staticmethod
    def cursor_before(commands, index: int) -> PathCursor:
        """Return the cursor state before the command at index by replaying all prior commands."""
        cursor = PathCursor()
        for command in commands[:index]:
            cursor.advance(command)
        return cursor

    @staticmethod
    def segment_length(command: MpPathCommand, cursor: PathCursor) -> float:
        """Return the (approximated) length of command starting at cursor.

        MoveTo and incomplete curve commands have zero length.
        """
        start = cursor.position
        if command.cmd == "L":
            return start.distance_to(command.end)
        if command.cmd == "Z":
            return start.distance_to(cursor.subpath_start)
        if command.cmd == "Q" and command.is_complete:
            return BezierCurve.quadratic_length(start, command.control1, command.end)
        if command.cmd == "C" and command.is_complete:
            return BezierCurve.cubic_length(start, command.control1, command.control2, command.end)
        return 0.0

    @staticmethod
    def point_on_segment(command: MpPathCommand, cursor: PathCursor, local_t: float) -> MpPoint:
        """Return the point at local parameter local_t of command starting at cursor."""
        start = cursor.position
        if command.cmd == "L":
            return start.lerp(command.end, local_t)
        if command.cmd == "Z":
            return start.lerp(cursor.subpath_start, local_t)
        if command.cmd == "Q" and command.is_complete:
            return BezierCurve.evaluate_quadratic(start, command.control1, command.end, local_t)
        if command.cmd == "C" and command.is_complete:
            return BezierCurve.evaluate_cubic(start, command.control1, command.control2, command.end, local_t)
        return command.end

    @staticmethod
    def derivative_on_segment(command: MpPathCommand, cursor: PathCursor, local_t: float) -> MpPoint:
        """Return the (not normalized) direction of command at local parameter local_t.

        Lines and closes return their chord; MoveTo returns the zero vector.
        """
        start = cursor.position
        if command.cmd == "L":
            return command.end - start
        if command.cmd == "Z":
            return cursor.subpath_start - start
        if command.cmd == "Q" and command.is_complete:
            return BezierCurve.evaluate_quadratic_derivative(start, command.control1, command.end, local_t)
        if command.cmd == "C" and command.is_complete:
            return BezierCurve.evaluate_cubic_derivative(
                start, command.control1, command.control2, command.end, local_t
            )
        return MpPoint.ZERO
