"""Path factories for basic shapes (lines, polygons, rectangles, arcs and circles)."""

from __future__ import annotations

import math
from typing import Sequence

from motionpath.path import MpPath
from motionpath.point import MpPoint, PointLike

###############################################################################
# MpShapes
###############################################################################


class MpShapes:
    """Collection of static factories building paths for shape primitives.

    All shapes are centered at the origin unless points are given explicitly.
    Coordinates follow screen orientation (y down).
    """

    # Arcs are split into cubic pieces of at most this sweep angle
    ARC_MAX_SEGMENT_ANGLE: float = math.pi / 2

    @staticmethod
    def line_path(start: PointLike = MpPoint.ZERO, end: PointLike = MpPoint.RIGHT) -> MpPath:
        """Return an open path with one straight line from start to end."""
        return MpPath().move_to(start).line_to(end)

    @staticmethod
    def polygon_path(vertices: Sequence[PointLike]) -> MpPath:
        """
        Return a closed polygon through vertices.
        Without vertices the path is empty.
        """
        path = MpPath()
        if not vertices:
            return path
        path.move_to(vertices[0])
        for vertex in vertices[1:]:
            path.line_to(vertex)
        return path.close_path()

    @classmethod
    def rectangle_path(cls, width: float = 2.0, height: float = 1.0) -> MpPath:
        """Return a closed rectangle centered at the origin.

        Vertices are ordered top-left, top-right, bottom-right, bottom-left.
        """
        half_w = width / 2.0
        half_h = height / 2.0
        return cls.polygon_path(
            [
                (-half_w, -half_h),
                (half_w, -half_h),
                (half_w, half_h),
                (-half_w, half_h),
            ]
        )

    @classmethod
    def arc_path(cls, radius: float = 1.0, start_angle: float = 0.0, end_angle: float = math.pi / 2) -> MpPath:
        """Return an open circular arc around the origin approximated by cubic curves.

        The sweep is divided into equal pieces of at most ARC_MAX_SEGMENT_ANGLE.
        Each piece with sweep theta uses control points at distance
        radius * k along the tangents, k = 4/3 * tan(theta/4).

        Args:
            radius: Radius of the arc.
            start_angle: Start angle in radians.
            end_angle: End angle in radians; end < start sweeps backwards.

        Returns:
            MpPath starting with a move to the start point followed by cubics.
        """
        sweep = end_angle - start_angle
        count = max(1, math.ceil(abs(sweep) / cls.ARC_MAX_SEGMENT_ANGLE))
        step = sweep / count
        handle = radius * (4.0 / 3.0) * math.tan(step / 4.0)

        def on_circle(angle: float) -> MpPoint:
            return MpPoint(radius * math.cos(angle), radius * math.sin(angle))

        def tangent(angle: float) -> MpPoint:
            return MpPoint(-math.sin(angle), math.cos(angle))

        path = MpPath().move_to(on_circle(start_angle))
        for i in range(count):
            angle0 = start_angle + i * step
            angle1 = angle0 + step
            end = on_circle(angle1)
            path.cubic_to(
                on_circle(angle0) + tangent(angle0) * handle,
                end - tangent(angle1) * handle,
                end,
            )
        return path

    @classmethod
    def circle_path(cls, radius: float = 1.0) -> MpPath:
        """Return a closed circle around the origin built from four cubic quarter arcs."""
        return cls.arc_path(radius, 0.0, 2.0 * math.pi).close_path()
