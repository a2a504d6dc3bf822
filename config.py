# bezierrope Configuration
# All default values and tuning constants

import math
from dataclasses import dataclass, field, is_dataclass
from enum import IntEnum
from typing import List

from logging_utils import log_event


CURRENT_CONFIG_VERSION = 1

DEFAULT_TANGENT_PARAMS = [0.10, 0.25, 0.40, 0.55, 0.70, 0.85]


class SensorSource(IntEnum):
    """Where tilt samples come from"""
    NONE = 0      # No sensor: targets never move, curve settles and stays put
    MOUSE = 1     # Pointer position over the canvas emulates pitch/roll
    UDP = 2       # pitch/roll datagrams streamed from a phone or IMU bridge


@dataclass
class SpringConfig:
    """Damped spring driving P1/P2 toward their targets"""
    stiffness: float = 0.12
    damping: float = 0.18
    dt: float = 1.0 / 60.0            # Fixed timestep (s), also the tick interval
    frame_rate_scale: float = 60.0    # Position update uses velocity * dt * this (1.0 = plain dt)


@dataclass
class TiltConfig:
    """Pitch/roll -> target mapping"""
    horizontal_span: float = 0.4      # Fraction of width swept by roll in [-pi, pi]
    vertical_span: float = 0.3        # Fraction of height swept by pitch in [-pi/2, pi/2]
    offset_x: float = 80.0            # Half distance between the two targets on x
    offset_y: float = 60.0            # Half distance between the two targets on y


@dataclass
class LayoutConfig:
    """Initial control point placement as fractions of the viewport"""
    p0: List[float] = field(default_factory=lambda: [0.15, 0.5])
    p1: List[float] = field(default_factory=lambda: [0.35, 0.3])
    p2: List[float] = field(default_factory=lambda: [0.65, 0.7])
    p3: List[float] = field(default_factory=lambda: [0.85, 0.5])


@dataclass
class RenderConfig:
    """Curve sampling and drawing styles"""
    curve_steps: int = 100            # Curve polyline has curve_steps + 1 samples
    tangent_params: List[float] = field(default_factory=lambda: list(DEFAULT_TANGENT_PARAMS))
    tangent_length: float = 40.0
    background: str = "#1F1F1F"
    curve_color: str = "#40C8E0"
    curve_width: float = 4.0
    tangent_color: str = "#FF453A"
    tangent_width: float = 2.0
    marker_color: str = "#0A84FF"
    marker_alpha: float = 0.7
    marker_outline: str = "#FFFFFF"
    marker_outline_width: float = 2.0
    marker_radius: float = 10.0
    antialias: bool = True


@dataclass
class SensorConfig:
    """Tilt input settings"""
    source: SensorSource = SensorSource.MOUSE
    host: str = "0.0.0.0"
    port: int = 5555
    recv_timeout_ms: int = 100        # Worker wakes up this often to check for stop


@dataclass
class WindowConfig:
    width: int = 800
    height: int = 600
    title: str = "Bezier Rope"


@dataclass
class Config:
    """Master configuration"""
    version: int = 1                  # Schema version for persisted configs
    spring: SpringConfig = field(default_factory=SpringConfig)
    tilt: TiltConfig = field(default_factory=TiltConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    sensor: SensorConfig = field(default_factory=SensorConfig)
    window: WindowConfig = field(default_factory=WindowConfig)
    log_level: str = "INFO"           # Logging level (DEBUG/INFO/WARNING/ERROR)


def apply_dict_to_dataclass(target, data) -> None:
    """Recursively apply values from a dict onto a dataclass instance.
    Unknown keys are ignored; IntEnum fields are coerced when possible."""
    if not isinstance(data, dict):
        return

    for key, value in data.items():
        if not hasattr(target, key):
            continue

        current = getattr(target, key)

        if is_dataclass(current):
            if isinstance(value, dict):
                apply_dict_to_dataclass(current, value)
            else:
                log_event("WARNING", "Config", f"Section {key} is not an object, keeping defaults",
                          value=value)
            continue

        if isinstance(current, IntEnum):
            try:
                setattr(target, key, current.__class__(value))
            except (ValueError, TypeError):
                log_event("WARNING", "Config",
                          f"Could not convert {key} to {current.__class__.__name__}, keeping default",
                          value=value)
            continue

        setattr(target, key, value)


def _positive_float(value, default: float) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if result > 0 else default


def _float_pair(value, default: List[float]) -> List[float]:
    try:
        x, y = value
        return [float(x), float(y)]
    except (TypeError, ValueError):
        return list(default)


def _float_or_default(value, default: float) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return result if math.isfinite(result) else default


def _float_list(value, default: List[float]) -> List[float]:
    if isinstance(value, (str, bytes)):
        return list(default)
    try:
        result = [float(v) for v in value]
    except (TypeError, ValueError):
        return list(default)
    return result if result and all(math.isfinite(v) for v in result) else list(default)


def migrate_config(config: Config, loaded_version) -> None:
    """Upgrade older config structures to the current schema.
    Replaces missing or invalid values with defaults and bumps version."""
    defaults = Config()

    config.spring.stiffness = _positive_float(config.spring.stiffness, defaults.spring.stiffness)
    config.spring.dt = _positive_float(config.spring.dt, defaults.spring.dt)
    config.spring.frame_rate_scale = _positive_float(
        config.spring.frame_rate_scale, defaults.spring.frame_rate_scale)
    try:
        config.spring.damping = max(0.0, float(config.spring.damping))
    except (TypeError, ValueError):
        config.spring.damping = defaults.spring.damping

    config.tilt.horizontal_span = _float_or_default(
        config.tilt.horizontal_span, defaults.tilt.horizontal_span)
    config.tilt.vertical_span = _float_or_default(
        config.tilt.vertical_span, defaults.tilt.vertical_span)
    config.tilt.offset_x = _float_or_default(config.tilt.offset_x, defaults.tilt.offset_x)
    config.tilt.offset_y = _float_or_default(config.tilt.offset_y, defaults.tilt.offset_y)

    for name in ("p0", "p1", "p2", "p3"):
        setattr(config.layout, name,
                _float_pair(getattr(config.layout, name), getattr(defaults.layout, name)))

    try:
        config.render.curve_steps = max(1, int(config.render.curve_steps))
    except (TypeError, ValueError):
        config.render.curve_steps = defaults.render.curve_steps
    config.render.tangent_params = _float_list(config.render.tangent_params, DEFAULT_TANGENT_PARAMS)
    config.render.tangent_length = _positive_float(
        config.render.tangent_length, defaults.render.tangent_length)
    try:
        alpha = float(config.render.marker_alpha)
    except (TypeError, ValueError):
        alpha = defaults.render.marker_alpha
    config.render.marker_alpha = max(0.0, min(1.0, alpha))

    try:
        port = int(config.sensor.port)
    except (TypeError, ValueError):
        port = defaults.sensor.port
    config.sensor.port = port if 0 <= port <= 65535 else defaults.sensor.port

    for name in ("width", "height"):
        try:
            size = int(getattr(config.window, name))
        except (TypeError, ValueError, OverflowError):
            size = 0
        setattr(config.window, name, size if size > 0 else getattr(defaults.window, name))
    if not isinstance(config.window.title, str):
        config.window.title = defaults.window.title

    if not isinstance(config.log_level, str) or not config.log_level:
        config.log_level = defaults.log_level

    try:
        version = int(loaded_version) if loaded_version is not None else 0
    except (TypeError, ValueError):
        version = 0
    if version < CURRENT_CONFIG_VERSION:
        log_event("INFO", "Config", "Migrated config", from_version=version,
                  to_version=CURRENT_CONFIG_VERSION)

    config.version = CURRENT_CONFIG_VERSION

