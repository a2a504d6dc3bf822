"""
bezierrope - Main Application
Qt window that runs the spring-driven Bezier rope and draws it every tick.
"""

import sys
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtWidgets import QApplication, QLabel, QMainWindow

import pyqtgraph as pg

from config import Config, SensorSource
from config_persistence import load_config
from frame_loop import FrameLoop
from logging_utils import log_event, set_log_level
from qt_tick import QTimerTickSource
from rope_canvas import RopeCanvas
from rope_context import create_context
from sensor_input import LatestTiltSlot, UdpTiltReceiver
from tilt_mapper import pointer_to_tilt


class SignalBridge(QObject):
    """Bridge for thread-safe signal emission"""
    status_changed = pyqtSignal(str, bool)


class BezierRopeWindow(QMainWindow):
    """Main window: canvas + frame loop + tilt input"""

    def __init__(self, config: Optional[Config] = None):
        super().__init__()
        self.config = config if config is not None else Config()

        pg.setConfigOptions(antialias=self.config.render.antialias)

        self.setWindowTitle(self.config.window.title)
        self.resize(self.config.window.width, self.config.window.height)

        self.canvas = RopeCanvas(self.config.render, parent=self)
        self.setCentralWidget(self.canvas)

        self.status_label = QLabel("")
        self.statusBar().addWidget(self.status_label)

        self.signals = SignalBridge()
        self.signals.status_changed.connect(self._on_status_changed)

        self.tilt_slot = LatestTiltSlot()
        self.tick_source = QTimerTickSource(self)
        self.receiver: Optional[UdpTiltReceiver] = None
        self.frame_loop: Optional[FrameLoop] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def showEvent(self, event):
        super().showEvent(event)
        if self.frame_loop is None:
            self._start_simulation()

    def _start_simulation(self) -> None:
        """Lay out anchors from the current canvas size and start ticking."""
        width, height = self.canvas.viewport_size()
        context = create_context(width, height, self.config)
        log_event("INFO", "Window", "Scene ready", width=width, height=height,
                  p0=context.p0, p3=context.p3)

        self.frame_loop = FrameLoop(
            context,
            self.tick_source,
            renderer=self.canvas,
            tilt_slot=self.tilt_slot,
            viewport=self.canvas.viewport_size,
            render_config=self.config.render,
        )
        self._start_input()
        self.frame_loop.start()

    def _start_input(self) -> None:
        source = self.config.sensor.source
        if source == SensorSource.MOUSE:
            self.canvas.pointer_moved.connect(self._on_pointer_moved)
            self._on_status_changed("Tilt: move the pointer over the canvas", True)
        elif source == SensorSource.UDP:
            self.receiver = UdpTiltReceiver(
                self.config, self.tilt_slot,
                status_callback=self.signals.status_changed.emit,
            )
            self.receiver.start()
        else:
            self._on_status_changed("Tilt: no sensor, rope stays at rest", False)

    def _shutdown(self) -> None:
        """Stop input and the frame loop together"""
        if self.receiver is not None:
            self.receiver.stop()
            self.receiver = None
        if self.frame_loop is not None:
            self.frame_loop.stop()

    def closeEvent(self, event):
        """Cleanup on close - stop the sensor thread before UI is destroyed"""
        self._shutdown()
        event.accept()

    # ------------------------------------------------------------------
    # Slots
    # ------------------------------------------------------------------

    def _on_pointer_moved(self, x: float, y: float) -> None:
        width, height = self.canvas.viewport_size()
        self.tilt_slot.put(pointer_to_tilt(x, y, width, height))

    def _on_status_changed(self, message: str, active: bool) -> None:
        color = "#7CD992" if active else "#AAAAAA"
        self.status_label.setStyleSheet(f"color: {color};")
        self.status_label.setText(message)


def main():
    """Main entry point - backup if not launched via run.py"""
    config = load_config()
    set_log_level(config.log_level)

    app = QApplication(sys.argv)
    app.setStyle('Fusion')

    window = BezierRopeWindow(config)
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
