#!/usr/bin/env python3
"""
bezierrope - Tilt-driven Bezier rope

Spring-damped cubic Bezier curve whose inner control points chase targets
derived from device pitch/roll (UDP stream or mouse emulation).
"""

import argparse
import cProfile
import sys
import time
from functools import partial
from pathlib import Path

from config import Config, SensorSource
from config_persistence import load_config
from frame_loop import FrameLoop, ManualTickSource
from logging_utils import log_event, set_log_level
from rope_context import create_context
from sensor_input import LatestTiltSlot, UdpTiltReceiver


def run_headless(config: Config, ticks: int) -> int:
    """Run the simulation without a window and log where the rope ended up."""
    width, height = float(config.window.width), float(config.window.height)
    context = create_context(width, height, config)
    tick_source = ManualTickSource()

    slot = None
    receiver = None
    if config.sensor.source == SensorSource.UDP:
        slot = LatestTiltSlot()
        receiver = UdpTiltReceiver(config, slot)
        if not receiver.start():
            return 1

    loop = FrameLoop(context, tick_source, tilt_slot=slot,
                     viewport=lambda: (width, height), render_config=config.render)
    loop.start()
    try:
        for _ in range(ticks):
            tick_source.fire()
            if receiver is not None:
                time.sleep(config.spring.dt)
    finally:
        loop.stop()
        if receiver is not None:
            receiver.stop()

    _, p1, p2, _ = context.control_points()
    log_event("INFO", "Headless", "Done", ticks=context.tick_count,
              p1=p1, p2=p2, target1=context.target1, target2=context.target2)
    return 0


def run_app(config: Config, app_argv: list[str]) -> int:
    # Qt is only needed for the windowed mode
    from PyQt6.QtWidgets import QApplication
    from main import BezierRopeWindow

    app = QApplication(app_argv)
    app.setStyle("Fusion")

    window = BezierRopeWindow(config)
    window.show()
    return app.exec()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run the tilt-driven Bezier rope")
    parser.add_argument("--config", type=Path, default=None,
                        help="Path to a JSON config file (default: ~/.bezierrope/config.json)")
    parser.add_argument("--source", choices=[s.name.lower() for s in SensorSource],
                        default=None, help="Tilt input source (overrides config)")
    parser.add_argument("--udp-port", type=int, default=None,
                        help="UDP port for tilt packets (overrides config)")
    parser.add_argument("--log-level", default=None,
                        help="DEBUG/INFO/WARNING/ERROR (overrides config)")
    parser.add_argument("--headless-ticks", type=int, default=None, metavar="N",
                        help="Run N ticks without a window and log the final control points")
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Enable cProfile and save stats to --profile-out",
    )
    parser.add_argument(
        "--profile-out",
        default="profile.prof",
        help="Path to save cProfile stats (default: profile.prof)",
    )
    return parser


def apply_cli_overrides(config: Config, args: argparse.Namespace) -> Config:
    if args.source is not None:
        config.sensor.source = SensorSource[args.source.upper()]
    if args.udp_port is not None:
        config.sensor.port = args.udp_port
    if args.log_level is not None:
        config.log_level = args.log_level
    return config


def main() -> None:
    args = build_parser().parse_args()
    config = apply_cli_overrides(load_config(args.config), args)
    set_log_level(config.log_level)

    if args.headless_ticks is not None:
        target = partial(run_headless, config, max(0, args.headless_ticks))
    else:
        # Keep Qt argument list clean; avoid passing our flags downstream
        target = partial(run_app, config, [sys.argv[0]])

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        exit_code = target()
        profiler.disable()
        profiler.dump_stats(args.profile_out)
    else:
        exit_code = target()

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
