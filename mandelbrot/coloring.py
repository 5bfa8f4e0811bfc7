"""Color mapping: iteration count to RGBA, LUT construction, QImage hand-off.

Two policies:
  - CYCLIC (canonical): 16-entry palette indexed by ``count % 16``. Points
    that hit the escape budget are colored like any other count.
  - GRAYSCALE: six thresholds at fractions of the budget, getting darker as
    the count grows, solid black for the interior.

Rasterizers never call ``map_color`` per pixel: they index a pre-built
(budget + 1, 4) lookup table, which ``build_color_lut`` fills from
``map_color`` so both paths agree by construction.
"""

from __future__ import annotations

import numpy as np
from PyQt6.QtGui import QImage

from mandelbrot.config import ColorPolicy, DEFAULT_ESCAPE_BUDGET

PALETTE_SIZE = 16

# RGBA, brown -> deep blue -> white -> orange
PALETTE = np.array(
    [
        [66, 30, 15, 255],
        [25, 7, 26, 255],
        [9, 1, 47, 255],
        [4, 4, 73, 255],
        [0, 7, 100, 255],
        [12, 44, 138, 255],
        [24, 82, 177, 255],
        [57, 125, 209, 255],
        [134, 181, 229, 255],
        [211, 236, 248, 255],
        [241, 233, 191, 255],
        [248, 201, 95, 255],
        [255, 170, 0, 255],
        [204, 128, 0, 255],
        [153, 87, 0, 255],
        [106, 52, 3, 255],
    ],
    dtype=np.uint8,
)
PALETTE.setflags(write=False)

# (budget divisor, gray level): first level whose threshold
# budget // divisor exceeds the count wins
GRAYSCALE_LEVELS = (
    (512, 255),
    (300, 150),
    (256, 128),
    (128, 64),
    (64, 32),
    (16, 16),
)

INTERIOR_COLOR = (0, 0, 0, 255)


def map_color(
    iterations: int,
    policy: ColorPolicy = ColorPolicy.CYCLIC,
    escape_budget: int = DEFAULT_ESCAPE_BUDGET,
) -> tuple[int, int, int, int]:
    """Return the (R, G, B, A) color for an iteration count."""
    if policy is ColorPolicy.CYCLIC:
        r, g, b, a = PALETTE[iterations % PALETTE_SIZE]
        return int(r), int(g), int(b), int(a)

    for divisor, level in GRAYSCALE_LEVELS:
        if iterations < escape_budget // divisor:
            return level, level, level, 255
    return INTERIOR_COLOR


def build_color_lut(policy: ColorPolicy, escape_budget: int) -> np.ndarray:
    """Build the count-indexed color table.

    Returns:
        (escape_budget + 1, 4) uint8 array; row k is ``map_color(k)``.
    """
    counts = np.arange(escape_budget + 1)

    if policy is ColorPolicy.CYCLIC:
        return np.ascontiguousarray(PALETTE[counts % PALETTE_SIZE])

    lut = np.empty((escape_budget + 1, 4), dtype=np.uint8)
    lut[:] = INTERIOR_COLOR
    # Walk from darkest to brightest so brighter (lower) bands overwrite
    for divisor, level in reversed(GRAYSCALE_LEVELS):
        mask = counts < escape_budget // divisor
        lut[mask, :3] = level
    return lut


def colorize(counts: np.ndarray, lut: np.ndarray) -> np.ndarray:
    """Map an (H, W) array of iteration counts to (H, W, 4) RGBA."""
    return lut[counts]


def rgba_to_qimage(rgba: np.ndarray) -> QImage:
    """Create a QImage from an RGBA pixel array with GC safety.

    Args:
        rgba: (H, W, 4) uint8 array in R, G, B, A byte order.

    Returns:
        QImage with Format_RGBA8888. The numpy array is attached to the
        QImage as _numpy_ref so the buffer outlives the image.
    """
    h, w = rgba.shape[:2]
    data = np.ascontiguousarray(rgba)
    stride = 4 * w
    image = QImage(data.data, w, h, stride, QImage.Format.Format_RGBA8888)
    image._numpy_ref = data
    return image
