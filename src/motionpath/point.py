"""Immutable 2D point used for path coordinates, control points and directions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from motionpath.common import POINT_TOLERANCE


@dataclass(frozen=True)
class MpPoint:
    """
    A 2D point or direction with value semantics.

    All operations return new instances; a point is never modified in place.
    Orientation follows screen coordinates, i.e. UP is (0, -1).

    Attributes:
        x (float): The x-coordinate.
        y (float): The y-coordinate.
    """

    x: float
    y: float

    ZERO: ClassVar[MpPoint]
    RIGHT: ClassVar[MpPoint]
    LEFT: ClassVar[MpPoint]
    UP: ClassVar[MpPoint]
    DOWN: ClassVar[MpPoint]

    @classmethod
    def of(cls, value: Union[MpPoint, Sequence[float]]) -> MpPoint:
        """Return value as MpPoint. Accepts an MpPoint or an (x, y) sequence.

        Raises:
            TypeError: If value is neither an MpPoint nor a sequence of two numbers.
        """
        if isinstance(value, MpPoint):
            return value
        if isinstance(value, np.ndarray):
            if value.shape != (2,):
                raise TypeError(f"Expected array of shape (2,), got shape {value.shape}")
            return cls(float(value[0]), float(value[1]))
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence) or len(value) != 2:
            raise TypeError(f"Expected MpPoint or (x, y) sequence, got {value!r}")
        return cls(float(value[0]), float(value[1]))

    def __add__(self, other: MpPoint) -> MpPoint:
        return MpPoint(self.x + other.x, self.y + other.y)

    def __sub__(self, other: MpPoint) -> MpPoint:
        return MpPoint(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> MpPoint:
        return MpPoint(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> MpPoint:
        return MpPoint(self.x / scalar, self.y / scalar)

    def __neg__(self) -> MpPoint:
        return MpPoint(-self.x, -self.y)

    def dot(self, other: MpPoint) -> float:
        """Dot product of this point and other (both taken as vectors)."""
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        """Euclidean length of this point taken as vector."""
        return math.hypot(self.x, self.y)

    def distance_to(self, other: MpPoint) -> float:
        """Euclidean distance between this point and other."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def normalize(self) -> MpPoint:
        """
        Return the unit vector pointing in the same direction.

        The zero vector has no direction and is returned unchanged.
        """
        length = self.length()
        if length == 0.0:
            return MpPoint.ZERO
        return MpPoint(self.x / length, self.y / length)

    def lerp(self, other: MpPoint, t: float) -> MpPoint:
        """Linear interpolation from this point (t=0) to other (t=1); t is not clamped."""
        return MpPoint(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def is_close(self, other: MpPoint, tolerance: float = POINT_TOLERANCE) -> bool:
        """Return True if both coordinates differ by less than tolerance."""
        return abs(self.x - other.x) < tolerance and abs(self.y - other.y) < tolerance

    def to_tuple(self) -> Tuple[float, float]:
        """The point as Tuple (x, y)."""
        return (self.x, self.y)

    def to_array(self) -> NDArray[np.float64]:
        """The point as numpy array of shape (2,)."""
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_dict(cls, data: dict) -> MpPoint:
        """Create an MpPoint instance from a dictionary."""
        return cls(float(data.get("x", 0.0)), float(data.get("y", 0.0)))

    def to_dict(self) -> dict:
        """Convert the MpPoint instance to a dictionary."""
        return {"x": self.x, "y": self.y}

    def __str__(self) -> str:
        return f"MpPoint(x={self.x:g}, y={self.y:g})"


MpPoint.ZERO = MpPoint(0.0, 0.0)
MpPoint.RIGHT = MpPoint(1.0, 0.0)
MpPoint.LEFT = MpPoint(-1.0, 0.0)
MpPoint.UP = MpPoint(0.0, -1.0)
MpPoint.DOWN = MpPoint(0.0, 1.0)

PointLike = Union[MpPoint, Sequence[float]]
"""Anything accepted by MpPoint.of(): an MpPoint or an (x, y) sequence."""
