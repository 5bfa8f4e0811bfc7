"""Frame rendering: RenderBackend Protocol, backend selection, render entry points.

The RenderBackend Protocol abstracts the full-frame fill. Two backends are
registered by name:
  numba (default) > numpy
Both produce the same RGBA layout: C-contiguous (H, W, 4) uint8, one
disjoint 4-byte slot per pixel at offset (y * W + x) * 4.
"""

from __future__ import annotations

import logging
import time
from typing import Protocol

import numpy as np

from mandelbrot.config import BYTES_PER_PIXEL, ConfigurationError, RenderConfig
from mandelbrot.coloring import build_color_lut

logger = logging.getLogger(__name__)

DEFAULT_BACKEND = "numba"
BACKEND_NAMES = ("numba", "numpy")


class RenderBackend(Protocol):
    """Protocol for pluggable rasterizer backends."""

    def render_frame(self, config: RenderConfig, lut: np.ndarray) -> np.ndarray:
        """Return a fresh (H, W, 4) uint8 RGBA frame for ``config``.

        ``lut`` is the (escape_budget + 1, 4) color table; pixel color is
        ``lut[escape_count]``.
        """
        ...


def get_backend(name: str | None = None, *, parallelism: int | None = None) -> RenderBackend:
    """Create a backend by name.

    Args:
        name: "numba" or "numpy". None selects DEFAULT_BACKEND.
        parallelism: Thread count for numba, worker count for numpy.
            None lets the backend use every core.

    Raises:
        ConfigurationError: Unknown backend name.
    """
    name = name or DEFAULT_BACKEND

    if name == "numba":
        from mandelbrot._numba_backend import NumbaBackend
        logger.info("Using Numba render backend")
        return NumbaBackend(n_threads=parallelism)

    if name == "numpy":
        from mandelbrot._numpy_backend import NumpyBackend
        logger.info("Using NumPy render backend")
        return NumpyBackend(workers=parallelism)

    raise ConfigurationError(
        f"Unknown backend {name!r}, expected one of {', '.join(BACKEND_NAMES)}"
    )


def render_array(config: RenderConfig, backend: RenderBackend | None = None) -> np.ndarray:
    """Render one frame as a (H, W, 4) uint8 array."""
    if backend is None:
        backend = get_backend()

    lut = build_color_lut(config.color_policy, config.escape_budget)

    start = time.perf_counter()
    pixels = backend.render_frame(config, lut)
    elapsed = time.perf_counter() - start

    expected = (config.height, config.width, BYTES_PER_PIXEL)
    if pixels.shape != expected or pixels.dtype != np.uint8:
        raise RuntimeError(
            f"{type(backend).__name__} returned {pixels.dtype} {pixels.shape}, "
            f"expected uint8 {expected}"
        )

    logger.debug(
        "Rendered %dx%d frame (budget %d) in %.1f ms via %s",
        config.width, config.height, config.escape_budget,
        elapsed * 1000.0, type(backend).__name__,
    )
    return np.ascontiguousarray(pixels)


def render(config: RenderConfig, backend: RenderBackend | None = None) -> bytes:
    """Render one frame as raw RGBA bytes, exactly W * H * 4 long."""
    return render_array(config, backend).tobytes()
