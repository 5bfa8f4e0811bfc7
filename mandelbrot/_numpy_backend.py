"""NumPy vectorized rasterizer backend.

A band of rows advances through each iteration step simultaneously as a
float32 (rows, W) array pair. Bands run on a thread pool (NumPy releases the
GIL inside its ufunc loops) and each band writes only its own rows of the
shared output array, so no locking is needed.

The recurrence matches iteration.py operation for operation; see
test_numpy_backend.py for the cross-check against the scalar path.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from mandelbrot.config import RenderConfig
from mandelbrot.coords import plane_axes
from mandelbrot.coloring import colorize

logger = logging.getLogger(__name__)

# Bands per worker; more bands than workers evens out the interior rows
BANDS_PER_WORKER = 4


def escape_counts(
    c_re: np.ndarray,
    c_im: np.ndarray,
    escape_budget: int,
) -> np.ndarray:
    """Escape-time counts for a grid of plane coordinates.

    Args:
        c_re, c_im: float32 arrays of the same shape (broadcast allowed).
        escape_budget: Iteration cap.

    Returns:
        int32 array of counts in [0, escape_budget].

    Escaped points are frozen at their first outside value, which stays
    small, so the masked update never overflows.
    """
    c_re, c_im = np.broadcast_arrays(
        np.asarray(c_re, dtype=np.float32), np.asarray(c_im, dtype=np.float32),
    )
    zr = np.zeros(c_re.shape, dtype=np.float32)
    zi = np.zeros(c_re.shape, dtype=np.float32)
    counts = np.zeros(c_re.shape, dtype=np.int32)
    limit = np.float32(4.0)
    two = np.float32(2.0)

    for _ in range(escape_budget):
        active = zr * zr + zi * zi <= limit
        if not active.any():
            break

        new_zr = zr * zr - zi * zi + c_re
        new_zi = two * zr * zi + c_im
        zr = np.where(active, new_zr, zr)
        zi = np.where(active, new_zi, zi)
        counts = counts + active

    return counts


def _row_bands(height: int, n_bands: int) -> list[tuple[int, int]]:
    """Split [0, height) into at most n_bands contiguous (start, stop) ranges."""
    n_bands = max(1, min(n_bands, height))
    edges = np.linspace(0, height, n_bands + 1).astype(np.int64)
    return [
        (int(lo), int(hi)) for lo, hi in zip(edges[:-1], edges[1:]) if hi > lo
    ]


class NumpyBackend:
    """Pure NumPy rasterizer, parallel across row bands."""

    def __init__(self, workers: int | None = None):
        if workers is None:
            workers = os.cpu_count() or 1
        self.workers = max(1, int(workers))

    def render_frame(self, config: RenderConfig, lut: np.ndarray) -> np.ndarray:
        """Fill a (H, W, 4) uint8 RGBA frame.

        Args:
            config: Validated render configuration.
            lut: (escape_budget + 1, 4) uint8 color table.

        Returns:
            C-contiguous (H, W, 4) uint8 array.
        """
        width, height = config.screen_size
        re_axis, im_axis = plane_axes(config.screen_size, config.x_range, config.y_range)
        out = np.empty((height, width, 4), dtype=np.uint8)

        def fill_band(band: tuple[int, int]) -> None:
            lo, hi = band
            counts = escape_counts(
                re_axis[np.newaxis, :], im_axis[lo:hi, np.newaxis],
                config.escape_budget,
            )
            out[lo:hi] = colorize(counts, lut)

        bands = _row_bands(height, self.workers * BANDS_PER_WORKER)
        if self.workers == 1:
            for band in bands:
                fill_band(band)
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                # list() re-raises any worker exception here
                list(pool.map(fill_band, bands))

        logger.debug(
            "NumPy backend filled %d bands with %d workers", len(bands), self.workers,
        )
        return out
