"""Shared UI widgets for the desktop host.

Contains LoadingOverlay, shown over the canvas until the first frame (and
the JIT compile behind it) is done.
"""

import math

from PyQt6.QtCore import Qt, QTimer, QPointF, QRectF
from PyQt6.QtGui import QPainter, QPen, QBrush, QColor, QFont
from PyQt6.QtWidgets import QWidget


class LoadingOverlay(QWidget):
    """Semi-transparent overlay with an orbiting-dot loading animation."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.message = "Rendering..."
        self.t = 0.0
        self._timer = QTimer()
        self._timer.setInterval(16)  # ~60 fps
        self._timer.timeout.connect(self._tick)
        self.hide()

    def start(self, message="Rendering..."):
        self.message = message
        self.t = 0.0
        if self.parentWidget():
            self.resize(self.parentWidget().size())
        self.show()
        self.raise_()
        self._timer.start()

    def stop(self):
        self._timer.stop()
        self.hide()

    def _tick(self):
        self.t += 0.016
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        w, h = self.width(), self.height()

        # Dim background
        painter.fillRect(self.rect(), QColor(20, 20, 30, 180))

        cx, cy = w / 2, h / 2 - 15
        radius = 28

        # Track ring
        ring_pen = QPen(QColor(90, 90, 110))
        ring_pen.setWidthF(2)
        painter.setPen(ring_pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawEllipse(QPointF(cx, cy), radius, radius)

        # Three dots chasing each other round the ring
        painter.setPen(Qt.PenStyle.NoPen)
        for i in range(3):
            angle = 2 * math.pi * (self.t / 1.4 - i * 0.08)
            dx = radius * math.cos(angle)
            dy = radius * math.sin(angle)
            alpha = 255 - i * 70
            painter.setBrush(QBrush(QColor(255, 170, 0, alpha)))
            painter.drawEllipse(QPointF(cx + dx, cy + dy), 5 - i, 5 - i)

        painter.setPen(QColor(255, 255, 255, 200))
        font = QFont()
        font.setPointSizeF(14)
        font.setBold(True)
        painter.setFont(font)
        text_rect = QRectF(0, cy + radius + 20, w, 40)
        painter.drawText(
            text_rect,
            Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop,
            self.message,
        )

        painter.end()
