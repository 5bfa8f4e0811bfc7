"""MandelCanvas: displays rendered frames and the live orbit overlay.

Tracks the mouse into a Cursor, retraces the orbit on every move, and paints
the last frame followed by the orbit polyline.
"""

from __future__ import annotations

import numpy as np
from PyQt6.QtCore import Qt, QPointF, pyqtSignal
from PyQt6.QtGui import QColor, QPainter, QPen, QPolygonF
from PyQt6.QtWidgets import QWidget

from mandelbrot.coloring import rgba_to_qimage
from mandelbrot.config import RenderConfig
from mandelbrot.coords import Cursor, ScreenPoint, to_plane
from mandelbrot.orbit import trace_orbit

BACKGROUND = QColor(20, 20, 30)
ORBIT_COLOR = QColor(230, 40, 40)
PLACEHOLDER_COLOR = QColor(100, 100, 120)


class MandelCanvas(QWidget):
    """Fixed-size W x H surface for the frame and orbit overlay.

    Signals:
        pointer_moved(re, im): plane coordinate under the pointer, with the
            imaginary axis pointing up.
        pointer_left(): pointer left the canvas.
    """

    pointer_moved = pyqtSignal(float, float)
    pointer_left = pyqtSignal()

    def __init__(self, config: RenderConfig, parent=None):
        super().__init__(parent)
        self._config = config
        self._cursor = Cursor(config.screen_size)
        self._image = None
        self._orbit: list[ScreenPoint] = []

        self.setFixedSize(config.width, config.height)
        self.setMouseTracking(True)
        self.setCursor(Qt.CursorShape.CrossCursor)

    @property
    def orbit(self) -> list[ScreenPoint]:
        """Current overlay points (empty when nothing is drawn)."""
        return self._orbit

    def set_frame(self, pixels: np.ndarray) -> None:
        """Show a new (H, W, 4) RGBA frame."""
        self._image = rgba_to_qimage(pixels)
        self.update()

    def mouseMoveEvent(self, event):
        pos = event.position()
        if not self._cursor.update(int(pos.x()), int(pos.y())):
            return

        pointer = self._cursor.position
        self._orbit = trace_orbit(pointer, self._config)

        c = to_plane(
            ScreenPoint(pointer.x, self._config.height - pointer.y),
            self._config.screen_size, self._config.x_range, self._config.y_range,
        )
        self.pointer_moved.emit(c.re, c.im)
        self.update()

    def leaveEvent(self, event):
        self._orbit = []
        self.pointer_left.emit()
        self.update()
        super().leaveEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.fillRect(self.rect(), BACKGROUND)

        if self._image is None:
            painter.setPen(PLACEHOLDER_COLOR)
            painter.drawText(
                self.rect(), Qt.AlignmentFlag.AlignCenter, "Rendering...",
            )
            painter.end()
            return

        painter.drawImage(0, 0, self._image)

        if len(self._orbit) > 1:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            pen = QPen(ORBIT_COLOR)
            pen.setWidthF(1.0)
            painter.setPen(pen)
            painter.drawPolyline(
                QPolygonF([QPointF(p.x, p.y) for p in self._orbit])
            )

        painter.end()
