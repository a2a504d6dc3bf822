"""
bezierrope - Cubic Bezier evaluation

Mathematical form:
    B(t)  = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3
    B'(t) = 3(1-t)^2 (P1-P0) + 6(1-t) t (P2-P1) + 3 t^2 (P3-P2)

t is not clamped: values outside [0, 1] extrapolate the polynomial.
The scalar functions work on Point2; the sampling helpers evaluate many t
values at once with numpy and return arrays ready for plotting.
"""

from typing import Sequence

import numpy as np

from vector_math import Point2


def bezier_point(t: float, p0: Point2, p1: Point2, p2: Point2, p3: Point2) -> Point2:
    """Point on the curve at parameter t."""
    u = 1.0 - t
    tt = t * t
    uu = u * u
    b0 = uu * u
    b1 = 3.0 * uu * t
    b2 = 3.0 * u * tt
    b3 = tt * t
    return Point2(
        b0 * p0.x + b1 * p1.x + b2 * p2.x + b3 * p3.x,
        b0 * p0.y + b1 * p1.y + b2 * p2.y + b3 * p3.y,
    )


def bezier_tangent(t: float, p0: Point2, p1: Point2, p2: Point2, p3: Point2) -> Point2:
    """First derivative dB/dt at parameter t (not normalized)."""
    u = 1.0 - t
    c0 = 3.0 * u * u
    c1 = 6.0 * u * t
    c2 = 3.0 * t * t
    return Point2(
        c0 * (p1.x - p0.x) + c1 * (p2.x - p1.x) + c2 * (p3.x - p2.x),
        c0 * (p1.y - p0.y) + c1 * (p2.y - p1.y) + c2 * (p3.y - p2.y),
    )


def _control_array(p0: Point2, p1: Point2, p2: Point2, p3: Point2) -> np.ndarray:
    return np.array([p0.as_tuple(), p1.as_tuple(), p2.as_tuple(), p3.as_tuple()], dtype=np.float64)


def bezier_points(ts: Sequence[float], p0: Point2, p1: Point2, p2: Point2, p3: Point2) -> np.ndarray:
    """Evaluate the curve at every t in ts. Returns an (N, 2) array."""
    t = np.asarray(ts, dtype=np.float64).reshape(-1, 1)
    u = 1.0 - t
    basis = np.hstack([u ** 3, 3.0 * u ** 2 * t, 3.0 * u * t ** 2, t ** 3])
    return basis @ _control_array(p0, p1, p2, p3)


def bezier_tangents(ts: Sequence[float], p0: Point2, p1: Point2, p2: Point2, p3: Point2) -> np.ndarray:
    """Evaluate dB/dt at every t in ts. Returns an (N, 2) array."""
    t = np.asarray(ts, dtype=np.float64).reshape(-1, 1)
    u = 1.0 - t
    ctrl = _control_array(p0, p1, p2, p3)
    deltas = np.diff(ctrl, axis=0)  # P1-P0, P2-P1, P3-P2
    basis = np.hstack([3.0 * u ** 2, 6.0 * u * t, 3.0 * t ** 2])
    return basis @ deltas


def sample_curve(p0: Point2, p1: Point2, p2: Point2, p3: Point2, steps: int = 100) -> np.ndarray:
    """Uniform polyline through the curve at t = i/steps for i in 0..steps."""
    ts = np.arange(steps + 1, dtype=np.float64) / steps
    return bezier_points(ts, p0, p1, p2, p3)


def sample_tangent_segments(p0: Point2, p1: Point2, p2: Point2, p3: Point2,
                            params: Sequence[float], length: float = 40.0) -> np.ndarray:
    """
    Short tangent-direction segments along the curve.

    Returns an (N, 2, 2) array where row i is [start, end]: start is the curve
    point at params[i] and end is start + length * unit tangent. A zero
    tangent yields a zero-length segment.
    """
    starts = bezier_points(params, p0, p1, p2, p3)
    tangents = bezier_tangents(params, p0, p1, p2, p3)
    lengths = np.hypot(tangents[:, 0], tangents[:, 1]).reshape(-1, 1)
    safe = np.where(lengths > 0, lengths, 1.0)
    units = np.where(lengths > 0, tangents / safe, 0.0)
    ends = starts + units * length
    return np.stack([starts, ends], axis=1)
