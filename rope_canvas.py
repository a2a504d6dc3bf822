"""
bezierrope - Rope Canvas
pyqtgraph view that draws a RopeFrame: curve polyline, tangent ticks and
control point markers. View coordinates match widget pixels (origin
top-left, y down) so simulation units and screen units are the same.
"""

from typing import Optional

import numpy as np
import pyqtgraph as pg
from PyQt6.QtCore import pyqtSignal
from PyQt6.QtGui import QColor

from config import RenderConfig
from rope_context import RopeFrame


def _color(hex_color: str, alpha: float = 1.0) -> QColor:
    color = QColor(hex_color)
    color.setAlphaF(max(0.0, min(1.0, alpha)))
    return color


class RopeCanvas(pg.PlotWidget):
    """Renderer adapter for the rope simulation"""

    pointer_moved = pyqtSignal(float, float)

    def __init__(self, render_config: Optional[RenderConfig] = None, parent=None):
        super().__init__(parent)
        self.render_config = render_config if render_config is not None else RenderConfig()
        cfg = self.render_config

        self.setBackground(cfg.background)
        self.setMouseEnabled(x=False, y=False)
        self.setMenuEnabled(False)
        self.hideButtons()
        self.hideAxis('left')
        self.hideAxis('bottom')
        self.getPlotItem().setContentsMargins(0, 0, 0, 0)
        self.getPlotItem().invertY(True)
        self.getPlotItem().vb.setDefaultPadding(0.0)
        self.setAntialiasing(cfg.antialias)

        # Curve underneath, tangents above it, markers on top
        self.curve_item = pg.PlotCurveItem(
            pen=pg.mkPen(_color(cfg.curve_color), width=cfg.curve_width),
        )
        self.addItem(self.curve_item)

        self.tangent_item = pg.PlotCurveItem(
            pen=pg.mkPen(_color(cfg.tangent_color), width=cfg.tangent_width),
            connect='pairs',
        )
        self.addItem(self.tangent_item)
        self.tangent_item.setZValue(1)

        self.marker_item = pg.ScatterPlotItem(
            pen=pg.mkPen(_color(cfg.marker_outline), width=cfg.marker_outline_width),
            brush=pg.mkBrush(_color(cfg.marker_color, cfg.marker_alpha)),
            size=cfg.marker_radius * 2,
        )
        self.addItem(self.marker_item)
        self.marker_item.setZValue(2)

        self.scene().sigMouseMoved.connect(self._on_mouse_moved)
        self._fit_view()

    def viewport_size(self):
        """(width, height) of the drawing area in view units"""
        return float(self.width()), float(self.height())

    def _fit_view(self) -> None:
        width, height = self.viewport_size()
        self.setXRange(0, max(1.0, width), padding=0)
        self.setYRange(0, max(1.0, height), padding=0)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        if 'marker_item' in self.__dict__:
            self._fit_view()

    def _on_mouse_moved(self, scene_pos):
        view_pos = self.getPlotItem().vb.mapSceneToView(scene_pos)
        self.pointer_moved.emit(float(view_pos.x()), float(view_pos.y()))

    def draw_frame(self, frame: RopeFrame) -> None:
        """Draw one frame"""
        self.curve_item.setData(frame.curve[:, 0], frame.curve[:, 1])

        if len(frame.tangents):
            segments = frame.tangents.reshape(-1, 2)
            self.tangent_item.setData(segments[:, 0], segments[:, 1])
        else:
            self.tangent_item.setData([], [])

        markers = np.array([p.as_tuple() for p in frame.control_points], dtype=np.float64)
        self.marker_item.setData(markers[:, 0], markers[:, 1])
