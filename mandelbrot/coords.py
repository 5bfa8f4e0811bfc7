"""Coordinate mapping between the pixel raster and the complex plane.

Screen -> plane mapping is done in single precision with the same operation
order as the rasterizer kernels, so a pixel tested through ``to_plane`` sees
exactly the ``c`` the full-frame render used for it.
"""

from __future__ import annotations

import math
from typing import NamedTuple, Protocol

import numpy as np

from mandelbrot.config import X_RANGE, Y_RANGE


class Plottable(Protocol):
    """Anything with a 2D coordinate pair and a distance from the origin."""

    @property
    def coordinates(self) -> tuple: ...

    def norm(self) -> float: ...


def _norm(a: float, b: float) -> float:
    return math.hypot(a, b)


class ScreenPoint(NamedTuple):
    """Integer pixel position. y grows downward."""

    x: int
    y: int

    @property
    def coordinates(self) -> tuple[int, int]:
        return self.x, self.y

    def norm(self) -> float:
        return _norm(self.x, self.y)


class PlaneCoordinate(NamedTuple):
    """Point of the complex plane, re + i*im."""

    re: float
    im: float

    @property
    def coordinates(self) -> tuple[float, float]:
        return self.re, self.im

    def norm_sq(self) -> float:
        return self.re * self.re + self.im * self.im

    def norm(self) -> float:
        return _norm(self.re, self.im)


class Cursor:
    """Latest pointer sample, kept inside the frame.

    Samples outside [0, W) x [0, H) are ignored rather than clamped, so the
    cursor always holds the last position that was actually on the image.
    """

    def __init__(self, screen_size: tuple[int, int], x: int = 0, y: int = 0):
        self._width, self._height = screen_size
        self._x = x
        self._y = y

    @property
    def coordinates(self) -> tuple[int, int]:
        return self._x, self._y

    @property
    def position(self) -> ScreenPoint:
        return ScreenPoint(self._x, self._y)

    def norm(self) -> float:
        return _norm(self._x, self._y)

    def update(self, x: int, y: int) -> bool:
        """Move to (x, y). Returns False (and keeps the old position) if off-frame."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            return False
        self._x = x
        self._y = y
        return True


def to_plane(
    p: ScreenPoint,
    screen_size: tuple[int, int],
    x_range: tuple[float, float] = X_RANGE,
    y_range: tuple[float, float] = Y_RANGE,
) -> PlaneCoordinate:
    """Map a pixel to its plane coordinate (float32 arithmetic)."""
    width, height = screen_size
    x_min, x_max = x_range
    y_min, y_max = y_range

    re = np.float32(x_max - x_min) * np.float32(p[0]) / np.float32(width) + np.float32(x_min)
    im = np.float32(y_max - y_min) * np.float32(p[1]) / np.float32(height) + np.float32(y_min)
    return PlaneCoordinate(float(re), float(im))


def to_screen(
    q: PlaneCoordinate,
    screen_size: tuple[int, int],
    x_range: tuple[float, float] = X_RANGE,
    y_range: tuple[float, float] = Y_RANGE,
) -> ScreenPoint:
    """Map a plane coordinate back to a pixel, truncating toward zero.

    No clamping: points outside the visible window land outside the frame.
    """
    width, height = screen_size
    x_min, x_max = x_range
    y_min, y_max = y_range

    x = int((q[0] - x_min) * width / (x_max - x_min))
    y = int((q[1] - y_min) * height / (y_max - y_min))
    return ScreenPoint(x, y)


def plane_axes(
    screen_size: tuple[int, int],
    x_range: tuple[float, float] = X_RANGE,
    y_range: tuple[float, float] = Y_RANGE,
) -> tuple[np.ndarray, np.ndarray]:
    """Plane coordinate of every column and every row.

    Returns:
        (re_axis, im_axis): float32 arrays of length W and H. Element-wise
        identical to ``to_plane`` for the matching pixel.
    """
    width, height = screen_size
    x_min, x_max = x_range
    y_min, y_max = y_range

    cols = np.arange(width, dtype=np.float32)
    rows = np.arange(height, dtype=np.float32)
    re_axis = np.float32(x_max - x_min) * cols / np.float32(width) + np.float32(x_min)
    im_axis = np.float32(y_max - y_min) * rows / np.float32(height) + np.float32(y_min)
    return re_axis.astype(np.float32), im_axis.astype(np.float32)
