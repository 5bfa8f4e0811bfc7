"""App window: canvas, status bar, and the frame refresh loop.

Owns the RenderWorker lifecycle. In continuous mode a QTimer requests a new
frame every refresh; a tick that arrives while a frame is still rendering is
dropped rather than queued.
"""

import logging

from PyQt6.QtCore import QTimer
from PyQt6.QtWidgets import QMainWindow, QStatusBar, QLabel

from mandelbrot.canvas import MandelCanvas
from mandelbrot.worker import RenderWorker
from ui_common import LoadingOverlay

logger = logging.getLogger(__name__)

# ~60 fps
DEFAULT_REFRESH_MS = 16


class AppWindow(QMainWindow):
    """Top-level window hosting the Mandelbrot canvas."""

    def __init__(self, config, backend, continuous=False, refresh_ms=DEFAULT_REFRESH_MS):
        super().__init__()
        self.setWindowTitle("Mandelbrot Orbit Explorer")

        self._config = config
        self._backend = backend
        self._worker: RenderWorker | None = None
        self._frames_rendered = 0

        # --- Canvas ---
        self.canvas = MandelCanvas(config)
        self.setCentralWidget(self.canvas)
        self.loading_overlay = LoadingOverlay(self.canvas)

        # --- Status bar ---
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

        self._coord_label = QLabel()
        self._frame_label = QLabel()
        self._backend_label = QLabel(
            f"  Backend: {type(backend).__name__}  "
            f"Budget: {config.escape_budget}  "
            f"Colors: {config.color_policy.value}  "
        )
        self._status_bar.addWidget(self._coord_label)
        self._status_bar.addWidget(self._frame_label)
        self._status_bar.addPermanentWidget(self._backend_label)

        self.canvas.pointer_moved.connect(self._on_pointer_moved)
        self.canvas.pointer_left.connect(lambda: self._coord_label.setText(""))

        # --- Refresh loop ---
        self._refresh_timer = QTimer()
        self._refresh_timer.setInterval(refresh_ms)
        self._refresh_timer.timeout.connect(self._request_frame)
        self._continuous = continuous

        self.loading_overlay.start("Rendering...")
        self._request_frame()
        if continuous:
            self._refresh_timer.start()

    def _request_frame(self) -> None:
        """Start a render unless one is already in flight."""
        if self._worker is not None and self._worker.isRunning():
            logger.debug("Frame still rendering, skipping refresh")
            return

        self._worker = RenderWorker(self._config, self._backend)
        self._worker.frame_ready.connect(self._on_frame_ready)
        self._worker.failed.connect(self._on_render_failed)
        self._worker.start()

    def _on_frame_ready(self, pixels, elapsed: float) -> None:
        self._frames_rendered += 1
        if self._frames_rendered == 1:
            self.loading_overlay.stop()
            logger.info("First frame ready in %.2f s", elapsed)

        self.canvas.set_frame(pixels)
        self._frame_label.setText(
            f"  Frame {self._frames_rendered}: {elapsed * 1000:.0f} ms  "
        )

    def _on_render_failed(self, message: str) -> None:
        self._refresh_timer.stop()
        self.loading_overlay.stop()
        self._frame_label.setText(f"  Render failed: {message}  ")

    def _on_pointer_moved(self, re: float, im: float) -> None:
        orbit_len = max(0, len(self.canvas.orbit) - 1)
        self._coord_label.setText(
            f"  c = {re:+.4f} {im:+.4f}i   orbit: {orbit_len}  "
        )

    def closeEvent(self, event):
        self._refresh_timer.stop()
        if self._worker is not None and self._worker.isRunning():
            self._worker.wait(5000)
        super().closeEvent(event)
