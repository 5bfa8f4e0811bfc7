"""Escape-time iteration of z <- z*z + c.

Scalar reference implementation. The rasterizer backends run the same
float32 recurrence in bulk; this module is what the orbit tracer and the
tests use directly.
"""

from __future__ import annotations

from itertools import islice

import numpy as np

from mandelbrot.coords import PlaneCoordinate

# |z| > 2 tested on the squared magnitude
ESCAPE_RADIUS_SQ = np.float32(4.0)

_TWO = np.float32(2.0)


class EscapeTimeIterator:
    """Lazy orbit of ``c`` starting from z = 0.

    Each ``next()`` first checks whether the current value has already left
    the radius-2 disc. If so the iterator is finished for good; otherwise it
    advances one step and yields the new value. The sequence is finite only
    for escaping points, so callers cap it (see ``escape_count``).
    """

    __slots__ = ("_zr", "_zi", "_cr", "_ci", "_escaped")

    def __init__(self, c: PlaneCoordinate):
        self._cr = np.float32(c[0])
        self._ci = np.float32(c[1])
        self._zr = np.float32(0.0)
        self._zi = np.float32(0.0)
        self._escaped = False

    @property
    def escaped(self) -> bool:
        return self._escaped

    @property
    def current(self) -> PlaneCoordinate:
        return PlaneCoordinate(float(self._zr), float(self._zi))

    def __iter__(self) -> EscapeTimeIterator:
        return self

    def __next__(self) -> PlaneCoordinate:
        if self._escaped:
            raise StopIteration
        zr, zi = self._zr, self._zi
        if zr * zr + zi * zi > ESCAPE_RADIUS_SQ:
            self._escaped = True
            raise StopIteration

        self._zr = zr * zr - zi * zi + self._cr
        self._zi = _TWO * zr * zi + self._ci
        return PlaneCoordinate(float(self._zr), float(self._zi))


def escape_count(c: PlaneCoordinate, escape_budget: int) -> int:
    """Number of iterates produced before escape, capped at ``escape_budget``.

    A result equal to ``escape_budget`` means the point did not escape and is
    treated as inside the set.
    """
    return sum(1 for _ in islice(EscapeTimeIterator(c), escape_budget))
