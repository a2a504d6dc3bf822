"""
bezierrope - Simulation context

Holds everything one rope needs between ticks: the fixed endpoints P0/P3,
spring states for P1/P2, their targets and the tuning constants. The frame
loop passes the context explicitly to the functions below.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from bezier import sample_curve, sample_tangent_segments
from config import Config, LayoutConfig, RenderConfig, SpringConfig, TiltConfig
from spring import SpringState, spring_update
from tilt_mapper import TiltSample, map_tilt_to_targets
from vector_math import Point2


@dataclass
class RopeContext:
    p0: Point2
    p3: Point2
    p1: SpringState
    p2: SpringState
    target1: Point2
    target2: Point2
    spring: SpringConfig = field(default_factory=SpringConfig)
    tilt: TiltConfig = field(default_factory=TiltConfig)
    tick_count: int = 0

    def control_points(self) -> Tuple[Point2, Point2, Point2, Point2]:
        return (self.p0, self.p1.position, self.p2.position, self.p3)


@dataclass(frozen=True)
class RopeFrame:
    """Render output for one tick"""
    curve: np.ndarray                                      # (steps + 1, 2) polyline
    tangents: np.ndarray                                   # (N, 2, 2) [start, end] pairs
    control_points: Tuple[Point2, Point2, Point2, Point2]  # P0, P1, P2, P3
    tick: int = 0


def _at(fraction, width: float, height: float) -> Point2:
    return Point2(width * fraction[0], height * fraction[1])


def create_context(width: float, height: float, config: Optional[Config] = None) -> RopeContext:
    """Lay out the rope for a width x height viewport with springs at rest."""
    config = config if config is not None else Config()
    layout: LayoutConfig = config.layout
    p1 = _at(layout.p1, width, height)
    p2 = _at(layout.p2, width, height)
    return RopeContext(
        p0=_at(layout.p0, width, height),
        p3=_at(layout.p3, width, height),
        p1=SpringState(position=p1),
        p2=SpringState(position=p2),
        target1=p1,
        target2=p2,
        spring=config.spring,
        tilt=config.tilt,
    )


def apply_tilt(ctx: RopeContext, sample: TiltSample, width: float, height: float) -> None:
    """Overwrite both targets from a tilt sample. Last write wins."""
    ctx.target1, ctx.target2 = map_tilt_to_targets(
        sample.pitch, sample.roll, width, height, ctx.tilt)


def step_springs(ctx: RopeContext) -> None:
    """Advance P1 and P2 one timestep toward their current targets."""
    spring_update(ctx.p1, ctx.target1, ctx.spring)
    spring_update(ctx.p2, ctx.target2, ctx.spring)
    ctx.tick_count += 1


def build_frame(ctx: RopeContext, render: Optional[RenderConfig] = None) -> RopeFrame:
    """Sample curve, tangents and markers from the current control points."""
    render = render if render is not None else RenderConfig()
    points = ctx.control_points()
    curve = sample_curve(*points, steps=render.curve_steps)
    tangents = sample_tangent_segments(*points, params=render.tangent_params,
                                       length=render.tangent_length)
    return RopeFrame(curve=curve, tangents=tangents, control_points=points, tick=ctx.tick_count)
