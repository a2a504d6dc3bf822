"""
bezierrope - Spring integrator

Semi-implicit Euler step of a damped spring pulling a point toward a target:

    acceleration = -stiffness * (position - target) - damping * velocity
    velocity    += acceleration * dt
    position    += velocity * dt * frame_rate_scale

With the default frame_rate_scale of 60 the position step is tied to a
nominal 60 Hz cadence regardless of dt. Set frame_rate_scale to 1.0 for the
plain velocity * dt update.
"""

from dataclasses import dataclass, field

from config import SpringConfig
from vector_math import Point2


@dataclass
class SpringState:
    """Position and velocity of one dynamic control point"""
    position: Point2 = field(default_factory=Point2)
    velocity: Point2 = field(default_factory=Point2)


def spring_update(state: SpringState, target: Point2, params: SpringConfig) -> None:
    """Advance state one fixed timestep toward target (in place)."""
    k = params.stiffness
    c = params.damping
    dt = params.dt

    pos = state.position
    vel = state.velocity

    ax = -k * (pos.x - target.x) - c * vel.x
    ay = -k * (pos.y - target.y) - c * vel.y

    vx = vel.x + ax * dt
    vy = vel.y + ay * dt

    step = dt * params.frame_rate_scale
    state.velocity = Point2(vx, vy)
    state.position = Point2(pos.x + vx * step, pos.y + vy * step)


def is_settled(state: SpringState, target: Point2, tolerance: float) -> bool:
    return ((state.position - target).length() <= tolerance
            and state.velocity.length() <= tolerance)


def settle(state: SpringState, target: Point2, params: SpringConfig,
           tolerance: float = 1e-3, max_steps: int = 100_000) -> int:
    """Step until the spring rests on target. Returns the number of steps taken."""
    steps = 0
    while steps < max_steps and not is_settled(state, target, tolerance):
        spring_update(state, target, params)
        steps += 1
    return steps
