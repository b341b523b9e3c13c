"""Bezier curve handling utilities: evaluation, derivatives, length estimation and splitting."""

from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from motionpath.common import CUBIC_LENGTH_STEPS, QUADRATIC_LENGTH_STEPS
from motionpath.point import MpPoint

CubicControlPoints = Tuple[MpPoint, MpPoint, MpPoint, MpPoint]
QuadraticControlPoints = Tuple[MpPoint, MpPoint, MpPoint]


class BezierCurve:
    """Class to handle quadratic and cubic Bezier curve operations.

    Scalar evaluation works on MpPoint and plain Python floats, which is the
    fastest option for single points. Sampling many points at once
    (polygonization, length estimation) uses vectorized NumPy evaluation.

    None of the methods clamp the curve parameter t; callers are responsible
    for passing t in [0, 1].
    """

    ###########################################################################
    # Evaluation
    ###########################################################################

    @staticmethod
    def evaluate_quadratic(p0: MpPoint, p1: MpPoint, p2: MpPoint, t: float) -> MpPoint:
        """Return the point of a quadratic Bezier curve at parameter t.

        B(t) = (1-t)^2*P0 + 2*(1-t)*t*P1 + t^2*P2
        """
        omt = 1.0 - t
        w0 = omt * omt
        w1 = 2.0 * omt * t
        w2 = t * t
        return MpPoint(
            w0 * p0.x + w1 * p1.x + w2 * p2.x,
            w0 * p0.y + w1 * p1.y + w2 * p2.y,
        )

    @staticmethod
    def evaluate_cubic(p0: MpPoint, p1: MpPoint, p2: MpPoint, p3: MpPoint, t: float) -> MpPoint:
        """Return the point of a cubic Bezier curve at parameter t.

        B(t) = (1-t)^3*P0 + 3*(1-t)^2*t*P1 + 3*(1-t)*t^2*P2 + t^3*P3
        """
        omt = 1.0 - t
        omt2 = omt * omt
        t2 = t * t
        w0 = omt2 * omt
        w1 = 3.0 * omt2 * t
        w2 = 3.0 * omt * t2
        w3 = t2 * t
        return MpPoint(
            w0 * p0.x + w1 * p1.x + w2 * p2.x + w3 * p3.x,
            w0 * p0.y + w1 * p1.y + w2 * p2.y + w3 * p3.y,
        )

    @staticmethod
    def evaluate_quadratic_derivative(p0: MpPoint, p1: MpPoint, p2: MpPoint, t: float) -> MpPoint:
        """Return the first derivative of a quadratic Bezier curve at parameter t.

        B'(t) = 2*(1-t)*(P1-P0) + 2*t*(P2-P1)
        """
        a = 2.0 * (1.0 - t)
        b = 2.0 * t
        return MpPoint(
            a * (p1.x - p0.x) + b * (p2.x - p1.x),
            a * (p1.y - p0.y) + b * (p2.y - p1.y),
        )

    @staticmethod
    def evaluate_cubic_derivative(p0: MpPoint, p1: MpPoint, p2: MpPoint, p3: MpPoint, t: float) -> MpPoint:
        """Return the first derivative of a cubic Bezier curve at parameter t.

        B'(t) = 3*(1-t)^2*(P1-P0) + 6*(1-t)*t*(P2-P1) + 3*t^2*(P3-P2)
        """
        omt = 1.0 - t
        a = 3.0 * omt * omt
        b = 6.0 * omt * t
        c = 3.0 * t * t
        return MpPoint(
            a * (p1.x - p0.x) + b * (p2.x - p1.x) + c * (p3.x - p2.x),
            a * (p1.y - p0.y) + b * (p2.y - p1.y) + c * (p3.y - p2.y),
        )

    ###########################################################################
    # Polygonization
    ###########################################################################

    @staticmethod
    def _as_xy_array(points: Union[Sequence[MpPoint], Sequence[Tuple[float, float]], NDArray[np.float64]]) -> NDArray:
        """Convert control points into an array of shape (n, 2)."""
        if isinstance(points, np.ndarray):
            return points[:, :2].astype(np.float64, copy=False)
        return np.array([(p.x, p.y) if isinstance(p, MpPoint) else (p[0], p[1]) for p in points], dtype=np.float64)

    @classmethod
    def polygonize_quadratic_curve(
        cls,
        points: Union[Sequence[MpPoint], Sequence[Tuple[float, float]], NDArray[np.float64]],
        steps: int,
    ) -> NDArray[np.float64]:
        """
        Polygonize a quadratic Bezier curve into line segments.
        Uses direct evaluation with vectorized operations.

        Args:
            points: Control points (start, control, end) as MpPoints, (x, y) tuples or array
            steps: Number of segments to divide the curve into

        Returns:
            NDArray[np.float64] of shape (steps+1, 2) containing the sampled points
        """
        points_array = cls._as_xy_array(points)

        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)
        omt = 1.0 - t
        t2 = t**2

        # relative to the start point, so coincident control points give identical samples
        origin = points_array[0]
        relative = points_array - origin

        result = np.empty((steps + 1, 2), dtype=np.float64)
        for axis in (0, 1):
            result[:, axis] = 2 * omt * t * relative[1, axis] + t2 * relative[2, axis] + origin[axis]
        return result

    @classmethod
    def polygonize_cubic_curve(
        cls,
        points: Union[Sequence[MpPoint], Sequence[Tuple[float, float]], NDArray[np.float64]],
        steps: int,
    ) -> NDArray[np.float64]:
        """
        Polygonize a cubic Bezier curve into line segments.
        Uses direct evaluation with vectorized operations.

        Args:
            points: Control points (start, control1, control2, end) as MpPoints, (x, y) tuples or array
            steps: Number of segments to divide the curve into

        Returns:
            NDArray[np.float64] of shape (steps+1, 2) containing the sampled points
        """
        points_array = cls._as_xy_array(points)

        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)
        omt = 1.0 - t
        omt2 = omt**2
        t2 = t**2
        t3 = t2 * t

        origin = points_array[0]
        relative = points_array - origin

        result = np.empty((steps + 1, 2), dtype=np.float64)
        for axis in (0, 1):
            result[:, axis] = (
                3 * omt2 * t * relative[1, axis]
                + 3 * omt * t2 * relative[2, axis]
                + t3 * relative[3, axis]
                + origin[axis]
            )
        return result

    ###########################################################################
    # Length estimation
    ###########################################################################

    @staticmethod
    def polyline_length(polyline: NDArray[np.float64]) -> float:
        """Return the summed chord length of a polyline given as array of shape (n, 2)."""
        if polyline.shape[0] < 2:
            return 0.0
        deltas = np.diff(polyline, axis=0)
        return float(np.sum(np.hypot(deltas[:, 0], deltas[:, 1])))

    @classmethod
    def quadratic_length(cls, p0: MpPoint, p1: MpPoint, p2: MpPoint) -> float:
        """Approximate the arc length of a quadratic curve by a fixed-step polyline.

        The curve is sampled at QUADRATIC_LENGTH_STEPS equal parameter steps.
        Accuracy is bounded by the step count, not by curvature.
        """
        return cls.polyline_length(cls.polygonize_quadratic_curve((p0, p1, p2), QUADRATIC_LENGTH_STEPS))

    @classmethod
    def cubic_length(cls, p0: MpPoint, p1: MpPoint, p2: MpPoint, p3: MpPoint) -> float:
        """Approximate the arc length of a cubic curve by a fixed-step polyline.

        The curve is sampled at CUBIC_LENGTH_STEPS equal parameter steps.
        Accuracy is bounded by the step count, not by curvature.
        """
        return cls.polyline_length(cls.polygonize_cubic_curve((p0, p1, p2, p3), CUBIC_LENGTH_STEPS))

    ###########################################################################
    # Splitting and degree elevation
    ###########################################################################

    @staticmethod
    def split_cubic_at(
        p0: MpPoint, p1: MpPoint, p2: MpPoint, p3: MpPoint, t: float
    ) -> Tuple[CubicControlPoints, CubicControlPoints]:
        """Split a cubic Bezier curve at t using De Casteljau's construction.

        Returns:
            Two tuples (start, control1, control2, end) covering [0, t] and [t, 1].
            Their concatenation reproduces the original curve exactly.
        """
        # first level
        p01 = p0.lerp(p1, t)
        p12 = p1.lerp(p2, t)
        p23 = p2.lerp(p3, t)
        # second level
        p012 = p01.lerp(p12, t)
        p123 = p12.lerp(p23, t)
        # third level - the split point
        p0123 = p012.lerp(p123, t)

        return (p0, p01, p012, p0123), (p0123, p123, p23, p3)

    @staticmethod
    def split_quadratic_at(
        p0: MpPoint, p1: MpPoint, p2: MpPoint, t: float
    ) -> Tuple[QuadraticControlPoints, QuadraticControlPoints]:
        """Split a quadratic Bezier curve at t using De Casteljau's construction.

        Returns:
            Two tuples (start, control, end) covering [0, t] and [t, 1].
        """
        p01 = p0.lerp(p1, t)
        p12 = p1.lerp(p2, t)
        p012 = p01.lerp(p12, t)
        return (p0, p01, p012), (p012, p12, p2)

    @staticmethod
    def line_to_cubic_controls(p0: MpPoint, p1: MpPoint) -> Tuple[MpPoint, MpPoint]:
        """Return the two cubic control points that reproduce the straight line p0 -> p1."""
        delta = p1 - p0
        return p0 + delta / 3.0, p1 - delta / 3.0

    @staticmethod
    def quadratic_to_cubic_controls(p0: MpPoint, q1: MpPoint, p1: MpPoint) -> Tuple[MpPoint, MpPoint]:
        """Return the two cubic control points of the exact degree elevation of a quadratic.

        CP1 = P0 + 2/3*(Q1-P0), CP2 = P1 + 2/3*(Q1-P1)
        """
        return p0 + (q1 - p0) * (2.0 / 3.0), p1 + (q1 - p1) * (2.0 / 3.0)
