"""Conversion between MpPath and SVG path data (the "d" attribute)."""

from __future__ import annotations

import re
from typing import Callable, ClassVar, List, Optional

from motionpath.path import MpPath
from motionpath.point import MpPoint


def _offset(origin: MpPoint, x_value: float, y_value: float) -> MpPoint:
    return MpPoint(x_value + origin.x, y_value + origin.y)


class MpSvgPath:
    """
    This class provides static methods to convert MpPaths to SVG path strings and back.
    A SVG-path is characterized by a string describing a sequence of points.
    Supported commands (command : number of values : command-character):
        MoveTo:           2: Mm
        LineTo:           2: Ll   1: Hh(x)   1:Vv(y)
        CubicBezier:      6: Cc
        QuadraticBezier:  4: Qq
        ClosePath:        0: Zz
    Smooth curves (Ss, Tt) and arcs (Aa) are recognized but rejected.
    """

    # Command letters:
    SVG_CMDS: ClassVar[str] = "MmLlHhVvCcSsQqTtAaZz"
    # Command letters that MpPath cannot represent:
    UNSUPPORTED_CMDS: ClassVar[str] = "SsTtAa"
    # Definition of a number:
    SVG_ARGS: ClassVar[str] = r"[-+]?(?:[0-9]*\.[0-9]+|[0-9]+\.?)(?:[eE][-+]?[0-9]+)?"
    # Number of values per command repetition:
    BATCH_SIZES: ClassVar[dict] = {"M": 2, "L": 2, "H": 1, "V": 1, "Q": 4, "C": 6, "Z": 0}

    @staticmethod
    def to_path_string(path: MpPath, round_func: Optional[Callable] = None) -> str:
        """
        Return the SVG path string of _path_ using absolute commands.
            Each coordinate is formatted by "g", after applying _round_func_ if given.

        Args:
            path (MpPath): the path to convert
            round_func (Optional[Callable], optional):
                a function that takes a float and returns a float. Defaults to None.

        Raises:
            ValueError: If a curve command misses a control point.

        Returns:
            str: the path string, e.g. "M 0 0 L 10 0 Z"
        """

        def fmt(point: MpPoint) -> List[str]:
            if round_func:
                return [f"{round_func(point.x):g}", f"{round_func(point.y):g}"]
            return [f"{point.x:g}", f"{point.y:g}"]

        ret_commands: List[str] = []
        for command in path.commands:
            if not command.is_complete:
                raise ValueError(f"Cannot write incomplete '{command.cmd}' command to SVG path data")
            ret_commands.append(command.cmd)
            if command.cmd == "Z":
                continue
            if command.control1 is not None:
                ret_commands.extend(fmt(command.control1))
            if command.control2 is not None:
                ret_commands.extend(fmt(command.control2))
            ret_commands.extend(fmt(command.end))

        return " ".join(ret_commands)

    @staticmethod
    def from_path_string(path_string: str) -> MpPath:
        """Parse the SVG _path_string_ into a new MpPath.

        Relative commands are resolved against the current point, H and V keep
        the other coordinate. Additional value groups repeat the command; after
        a MoveTo they are treated as LineTo (relative for "m").

        Args:
            path_string (str): SVG path string input

        Raises:
            ValueError: If the string contains unsupported commands (arcs,
                smooth curves), data before the first command, unknown
                characters or an incomplete number of values.

        Returns:
            MpPath: the parsed path
        """
        stripped = path_string.strip()
        if stripped and stripped[0] not in MpSvgPath.SVG_CMDS:
            raise ValueError(f"SVG path data must start with a command: '{path_string}'")

        org_commands = re.findall(f"[{MpSvgPath.SVG_CMDS}][^{MpSvgPath.SVG_CMDS}]*", stripped)
        path = MpPath()

        for command in org_commands:
            command_letter = command[0]
            if command_letter in MpSvgPath.UNSUPPORTED_CMDS:
                raise ValueError(f"Unsupported SVG path command '{command_letter}'")

            body = command[1:]
            if re.sub(MpSvgPath.SVG_ARGS, "", body).strip(" \t\r\n,"):
                raise ValueError(f"Invalid SVG path data in '{command.strip()}'")
            args = [float(arg) for arg in re.findall(MpSvgPath.SVG_ARGS, body)]

            upper = command_letter.upper()
            batch_size = MpSvgPath.BATCH_SIZES[upper]
            if batch_size == 0:
                if args:
                    raise ValueError(f"Command '{command_letter}' takes no values, got {len(args)}")
                path.close_path()
                continue
            if not args or len(args) % batch_size:
                raise ValueError(
                    f"Command '{command_letter}' needs a multiple of {batch_size} values, got {len(args)}"
                )

            relative = command_letter.islower()
            for i in range(0, len(args), batch_size):
                values = args[i : i + batch_size]
                origin = path.current_point if relative else MpPoint.ZERO

                if upper == "M":
                    if i == 0:
                        path.move_to(_offset(origin, values[0], values[1]))
                    else:
                        path.line_to(_offset(origin, values[0], values[1]))
                elif upper == "L":
                    path.line_to(_offset(origin, values[0], values[1]))
                elif upper == "H":
                    current = path.current_point
                    path.line_to(MpPoint(values[0] + (current.x if relative else 0.0), current.y))
                elif upper == "V":
                    current = path.current_point
                    path.line_to(MpPoint(current.x, values[0] + (current.y if relative else 0.0)))
                elif upper == "Q":
                    path.quadratic_to(_offset(origin, values[0], values[1]), _offset(origin, values[2], values[3]))
                else:
                    path.cubic_to(
                        _offset(origin, values[0], values[1]),
                        _offset(origin, values[2], values[3]),
                        _offset(origin, values[4], values[5]),
                    )

        return path
