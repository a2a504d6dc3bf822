"""
bezierrope - Tilt to target mapping

Roll sweeps the targets horizontally, pitch vertically:

    midX = width  * (0.5 + roll / pi * horizontal_span)
    midY = height * (0.5 - pitch / (pi/2) * vertical_span)
    target1 = (midX - offset_x, midY - offset_y)
    target2 = (midX + offset_x, midY + offset_y)

Angle ranges are not validated. Pitch is nominally in [-pi/2, pi/2] and roll
in [-pi, pi]; anything beyond maps outside the nominal band of the viewport.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from config import TiltConfig
from vector_math import Point2


@dataclass(frozen=True)
class TiltSample:
    """Device attitude in radians"""
    pitch: float
    roll: float


def map_tilt_to_targets(pitch: float, roll: float, width: float, height: float,
                        tilt: Optional[TiltConfig] = None) -> Tuple[Point2, Point2]:
    """Return (target1, target2) for the given attitude and viewport size."""
    tilt = tilt if tilt is not None else TiltConfig()
    mid_x = width * (0.5 + roll / math.pi * tilt.horizontal_span)
    mid_y = height * (0.5 - pitch / (math.pi / 2) * tilt.vertical_span)
    target1 = Point2(mid_x - tilt.offset_x, mid_y - tilt.offset_y)
    target2 = Point2(mid_x + tilt.offset_x, mid_y + tilt.offset_y)
    return target1, target2


def pointer_to_tilt(x: float, y: float, width: float, height: float) -> TiltSample:
    """Emulate device tilt from a pointer position inside the viewport.

    The viewport centre is level; the left/right edges are full roll and the
    top/bottom edges are full pitch (top = tilted forward = positive pitch).
    """
    if width <= 0 or height <= 0:
        return TiltSample(0.0, 0.0)
    fx = max(0.0, min(1.0, x / width))
    fy = max(0.0, min(1.0, y / height))
    roll = (fx * 2.0 - 1.0) * math.pi
    pitch = (1.0 - fy * 2.0) * (math.pi / 2)
    return TiltSample(pitch=pitch, roll=roll)
