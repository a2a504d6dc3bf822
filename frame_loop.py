"""
bezierrope - Frame Loop
Fixed-timestep driver: each tick maps the newest tilt sample to targets,
advances both springs, samples the curve and hands the frame to a renderer.
"""

from typing import Callable, Optional, Protocol, Tuple

from config import RenderConfig
from logging_utils import log_event
from rope_context import RopeContext, RopeFrame, apply_tilt, build_frame, step_springs
from sensor_input import LatestTiltSlot


class TickSource(Protocol):
    """Anything that calls back at a roughly constant cadence"""

    def start(self, callback: Callable[[], None], interval_s: float) -> None: ...

    def stop(self) -> None: ...


class FrameRenderer(Protocol):
    def draw_frame(self, frame: RopeFrame) -> None: ...


class ManualTickSource:
    """Tick source driven by the caller (tests, headless runs)."""

    def __init__(self):
        self.callback: Optional[Callable[[], None]] = None
        self.interval_s: float = 0.0

    @property
    def active(self) -> bool:
        return self.callback is not None

    def start(self, callback: Callable[[], None], interval_s: float) -> None:
        self.callback = callback
        self.interval_s = interval_s

    def stop(self) -> None:
        self.callback = None

    def fire(self, count: int = 1) -> None:
        for _ in range(count):
            if self.callback is None:
                break
            self.callback()


class FrameLoop:
    """
    Owns the per-tick ordering for one RopeContext.

    Both springs are advanced before the frame is sampled, so every rendered
    frame reflects this tick's positions only.
    """

    def __init__(self, context: RopeContext, tick_source: TickSource,
                 renderer: Optional[FrameRenderer] = None,
                 tilt_slot: Optional[LatestTiltSlot] = None,
                 viewport: Optional[Callable[[], Tuple[float, float]]] = None,
                 render_config: Optional[RenderConfig] = None):
        if context.spring.dt <= 0:
            raise ValueError(f"dt must be positive, got {context.spring.dt}")
        if tilt_slot is not None and viewport is None:
            raise ValueError("viewport is required when a tilt slot is given")

        self.context = context
        self.tick_source = tick_source
        self.renderer = renderer
        self.tilt_slot = tilt_slot
        self.viewport = viewport
        self.render_config = render_config if render_config is not None else RenderConfig()

        self.running = False
        self.last_frame: Optional[RopeFrame] = None

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        self.tick_source.start(self.tick, self.context.spring.dt)
        log_event("INFO", "FrameLoop", "Started",
                  interval_ms=self.context.spring.dt * 1000)

    def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        self.tick_source.stop()
        log_event("INFO", "FrameLoop", "Stopped", ticks=self.context.tick_count)

    def tick(self) -> RopeFrame:
        ctx = self.context

        if self.tilt_slot is not None:
            sample = self.tilt_slot.take()
            if sample is not None:
                width, height = self.viewport()
                apply_tilt(ctx, sample, width, height)

        step_springs(ctx)
        frame = build_frame(ctx, self.render_config)
        self.last_frame = frame

        if self.renderer is not None:
            self.renderer.draw_frame(frame)
        return frame
