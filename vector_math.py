"""
bezierrope - 2D vector helpers
Plain value type for control points, targets and velocities.
"""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point2:
    """2D point/vector in viewport units (origin top-left, y down)"""
    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Point2") -> "Point2":
        return Point2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point2") -> "Point2":
        return Point2(self.x - other.x, self.y - other.y)

    def __mul__(self, scale: float) -> "Point2":
        return Point2(self.x * scale, self.y * scale)

    __rmul__ = __mul__

    def __neg__(self) -> "Point2":
        return Point2(-self.x, -self.y)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


ZERO = Point2(0.0, 0.0)


def normalize(v: Point2) -> Point2:
    """Unit vector along v; the zero vector when v has zero length."""
    length = v.length()
    if length == 0:
        return ZERO
    return Point2(v.x / length, v.y / length)
