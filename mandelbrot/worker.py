"""Render worker: QThread that renders one frame off the GUI thread."""

from __future__ import annotations

import logging
import time

from PyQt6.QtCore import QThread, pyqtSignal

from mandelbrot.compute import RenderBackend, render_array
from mandelbrot.config import RenderConfig

logger = logging.getLogger(__name__)


class RenderWorker(QThread):
    """Background worker for a single full-frame render.

    Emits frame_ready with the (H, W, 4) uint8 array and the render time in
    seconds, or failed with the error text.
    """

    frame_ready = pyqtSignal(object, float)  # pixels, elapsed seconds
    failed = pyqtSignal(str)

    def __init__(self, config: RenderConfig, backend: RenderBackend):
        super().__init__()
        self._config = config
        self._backend = backend

    def run(self) -> None:
        start = time.perf_counter()
        try:
            pixels = render_array(self._config, self._backend)
        except Exception as exc:
            logger.exception("Frame render failed")
            self.failed.emit(str(exc))
            return
        self.frame_ready.emit(pixels, time.perf_counter() - start)
