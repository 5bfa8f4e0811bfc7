"""Orbit tracer: the pointer's orbit as a screen-space polyline.

The plane is drawn with the imaginary axis pointing up, so pointer rows are
flipped (y' = H - y) before mapping and flipped back after.
"""

from __future__ import annotations

import logging
from itertools import islice

from mandelbrot.config import RenderConfig
from mandelbrot.coords import ScreenPoint, to_plane, to_screen
from mandelbrot.iteration import EscapeTimeIterator

logger = logging.getLogger(__name__)

# Points this far out escape on the first check; nothing to draw
ORBIT_ESCAPE_BOUND = 2.0


def trace_orbit(
    pointer: ScreenPoint,
    config: RenderConfig,
    max_len: int | None = None,
) -> list[ScreenPoint]:
    """Trace the orbit of the plane point under ``pointer``.

    Args:
        pointer: Pointer position in screen coordinates.
        config: Render configuration (frame size, plane window, limits).
        max_len: Maximum number of orbit iterates. Defaults to
            ``config.orbit_max_len``.

    Returns:
        ``[pointer, p1, p2, ...]`` for drawing a connected line, or an empty
        list when the pointer is off-frame, the point sits within
        ``config.orbit_epsilon`` of the origin, or lies at distance >= 2.
    """
    if max_len is None:
        max_len = config.orbit_max_len

    if not config.contains(pointer.x, pointer.y):
        return []

    screen_size = config.screen_size
    height = config.height

    c = to_plane(
        ScreenPoint(pointer.x, height - pointer.y), screen_size,
        config.x_range, config.y_range,
    )
    distance = c.norm()
    if distance < config.orbit_epsilon or distance >= ORBIT_ESCAPE_BOUND:
        logger.debug("Skipping orbit for c=(%.4f, %.4f), |c|=%.4f", c.re, c.im, distance)
        return []

    points = [pointer]
    for z in islice(EscapeTimeIterator(c), max_len):
        p = to_screen(z, screen_size, config.x_range, config.y_range)
        points.append(ScreenPoint(p.x, height - p.y))
    return points
