"""Partial path extraction by arc-length fraction and the reveal helpers built on it."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

from motionpath.bezier import BezierCurve
from motionpath.path import MpPath
from motionpath.path_support import MpPathCommand, PathCommandProcessor, PathCursor

logger = logging.getLogger(__name__)


def _truncate_command(command: MpPathCommand, cursor: PathCursor, local_t: float) -> MpPathCommand:
    """Return the part of command from its start up to local_t."""
    start = cursor.position
    if command.cmd == "C":
        first, _ = BezierCurve.split_cubic_at(start, command.control1, command.control2, command.end, local_t)
        return MpPathCommand.cubic(first[1], first[2], first[3])
    # Q is approximated by a line to the point on the curve
    return MpPathCommand.line(PathCommandProcessor.point_on_segment(command, cursor, local_t))


def get_partial_path(path: MpPath, t: float) -> MpPath:
    """Return the prefix of path that covers fraction t of its total length.

    Commands are copied in order while the running length stays within
    t * total, curves missing control points are left out. The first command
    crossing that target is cut at the matching local parameter and ends the
    result:
    - L and Z become a line to the interpolated point
    - C becomes the first part of a De Casteljau split
    - Q becomes a line to the point on the curve (linear approximation)

    Args:
        path: Source path, not modified.
        t: Fraction of the total length; t <= 0 gives an empty path,
           t >= 1 a full copy.

    Returns:
        New MpPath holding the prefix.
    """
    if t <= 0.0:
        return MpPath()
    total = path.get_length()
    if t >= 1.0 or total == 0.0:
        return path.clone()

    target = t * total
    cumulative = path.cumulative_lengths
    segment_lengths = path.segment_lengths
    result = MpPath()

    for index, (command, cursor) in enumerate(PathCommandProcessor.walk(path.commands)):
        if not command.is_complete:
            continue
        if cumulative[index] <= target:
            result.append_command(command)
            continue

        segment_start = cumulative[index] - segment_lengths[index]
        local_t = float((target - segment_start) / segment_lengths[index])
        result.append_command(_truncate_command(command, cursor, local_t))
        logger.debug("Partial path cut command %d ('%s') at local t=%g", index, command.cmd, local_t)
        break

    return result


class MpPathReveal:
    """Progress-driven stroke reveal of a list of paths.

    All methods are pure functions of their inputs: they return new paths and
    leave the given paths untouched. Progress is the animation fraction 0..1.
    """

    # progress at which draw() switches from stroke reveal to fill fade-in
    DRAW_STROKE_PHASE: float = 0.5

    @staticmethod
    def create(paths: Sequence[MpPath], progress: float) -> List[MpPath]:
        """Return every path revealed up to progress."""
        return [get_partial_path(path, progress) for path in paths]

    @staticmethod
    def unwrite(paths: Sequence[MpPath], progress: float) -> List[MpPath]:
        """Return every path erased from its end; the reverse of create()."""
        if progress >= 1.0:
            return []
        if progress <= 0.0:
            return [path.clone() for path in paths]
        return [get_partial_path(path, 1.0 - progress) for path in paths]

    @classmethod
    def draw(cls, paths: Sequence[MpPath], progress: float) -> Tuple[List[MpPath], float]:
        """Reveal the strokes during the first phase, then fade the fill in.

        Returns:
            Tuple (paths, fill_fraction). fill_fraction is 0.0 until the stroke
            is complete and then rises linearly to 1.0.
        """
        if progress <= 0.0:
            return [], 0.0
        phase = cls.DRAW_STROKE_PHASE
        if progress < phase:
            return [get_partial_path(path, progress / phase) for path in paths], 0.0
        fill_fraction = min((progress - phase) / (1.0 - phase), 1.0)
        return [path.clone() for path in paths], fill_fraction
