"""Render configuration: plane window, frame size, escape budget, orbit limits.

All process-wide constants live here. A RenderConfig is validated once at
construction and is read-only afterwards; every other module receives it
explicitly instead of reading globals.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

# Visible window of the complex plane
X_RANGE = (-2.0, 1.0)
Y_RANGE = (-1.0, 1.0)

# Pixels per plane unit: 350 gives a 1050x700 frame
DEFAULT_FACTOR = 350
DEFAULT_ESCAPE_BUDGET = 1024

DEFAULT_ORBIT_MAX_LEN = 256
# Plane distance from the origin below which no orbit is drawn
DEFAULT_ORBIT_EPSILON = 0.01

# QImage addresses its buffer with a signed 32-bit int
MAX_FRAME_BYTES = 2**31 - 1

BYTES_PER_PIXEL = 4


class ConfigurationError(ValueError):
    """Raised when a render configuration cannot produce a valid frame."""


class ColorPolicy(Enum):
    """How iteration counts are turned into colors."""

    CYCLIC = "cyclic"
    GRAYSCALE = "grayscale"


def _check_range(name: str, bounds: tuple[float, float]) -> None:
    lo, hi = bounds
    if not (math.isfinite(lo) and math.isfinite(hi)):
        raise ConfigurationError(f"{name} must be finite, got {bounds}")
    if hi - lo <= 0.0:
        raise ConfigurationError(f"{name} must have positive width, got {bounds}")


@dataclass(frozen=True)
class RenderConfig:
    """Immutable description of one rendering setup.

    Frame size is derived from the plane ranges and ``factor``:
    ``width = x_width * factor`` and ``height = y_width * factor``.
    """

    factor: int = DEFAULT_FACTOR
    escape_budget: int = DEFAULT_ESCAPE_BUDGET
    x_range: tuple[float, float] = X_RANGE
    y_range: tuple[float, float] = Y_RANGE
    color_policy: ColorPolicy = ColorPolicy.CYCLIC
    orbit_max_len: int = DEFAULT_ORBIT_MAX_LEN
    orbit_epsilon: float = DEFAULT_ORBIT_EPSILON

    def __post_init__(self) -> None:
        if self.escape_budget < 1:
            raise ConfigurationError(
                f"escape_budget must be >= 1, got {self.escape_budget}"
            )
        if self.factor < 1:
            raise ConfigurationError(f"factor must be >= 1, got {self.factor}")
        _check_range("x_range", self.x_range)
        _check_range("y_range", self.y_range)
        if not isinstance(self.color_policy, ColorPolicy):
            raise ConfigurationError(f"Unknown color policy {self.color_policy!r}")
        if self.orbit_max_len < 1:
            raise ConfigurationError(
                f"orbit_max_len must be >= 1, got {self.orbit_max_len}"
            )
        if not (self.orbit_epsilon > 0.0 and math.isfinite(self.orbit_epsilon)):
            raise ConfigurationError(
                f"orbit_epsilon must be a positive number, got {self.orbit_epsilon}"
            )

        width, height = self.screen_size
        if width < 1 or height < 1:
            raise ConfigurationError(
                f"Frame size must be at least 1x1, got {width}x{height}"
            )
        if self.frame_bytes > MAX_FRAME_BYTES:
            raise ConfigurationError(
                f"Frame {width}x{height} needs {self.frame_bytes} bytes, "
                f"limit is {MAX_FRAME_BYTES}"
            )

    @property
    def x_width(self) -> float:
        return self.x_range[1] - self.x_range[0]

    @property
    def y_width(self) -> float:
        return self.y_range[1] - self.y_range[0]

    @property
    def width(self) -> int:
        return int(round(self.x_width * self.factor))

    @property
    def height(self) -> int:
        return int(round(self.y_width * self.factor))

    @property
    def screen_size(self) -> tuple[int, int]:
        """(W, H) in pixels."""
        return self.width, self.height

    @property
    def frame_bytes(self) -> int:
        return self.width * self.height * BYTES_PER_PIXEL

    def contains(self, x: int, y: int) -> bool:
        """True if pixel (x, y) lies inside the frame."""
        return 0 <= x < self.width and 0 <= y < self.height
