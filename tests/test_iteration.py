"""Tests for mandelbrot/iteration.py: the escape-time recurrence."""

from itertools import islice

import numpy as np
import pytest

from mandelbrot.coords import PlaneCoordinate
from mandelbrot.iteration import EscapeTimeIterator, escape_count


class TestEscapeTimeIterator:
    """Test the lazy orbit sequence."""

    def test_known_escape_orbit(self):
        """c = 1+1i: 0 -> 1+1i -> 1+3i, then |1+3i|^2 = 10 > 4 ends it."""
        values = list(EscapeTimeIterator(PlaneCoordinate(1.0, 1.0)))
        assert values == [PlaneCoordinate(1.0, 1.0), PlaneCoordinate(1.0, 3.0)]

    def test_far_point_emits_at_most_one(self):
        """|c| > 2: the first iterate is c itself, which already fails the check."""
        values = list(EscapeTimeIterator(PlaneCoordinate(3.0, 0.0)))
        assert values == [PlaneCoordinate(3.0, 0.0)]

    @pytest.mark.parametrize("c", [(2.5, 0.0), (0.0, -2.1), (1.8, 1.8), (-3.0, 4.0)])
    def test_boundedness_outside_radius(self, c):
        assert len(list(EscapeTimeIterator(PlaneCoordinate(*c)))) <= 1

    def test_origin_never_escapes(self):
        """c = 0 stays at 0 forever."""
        budget = 500
        it = EscapeTimeIterator(PlaneCoordinate(0.0, 0.0))
        values = list(islice(it, budget))
        assert len(values) == budget
        assert all(v == PlaneCoordinate(0.0, 0.0) for v in values)
        assert all(v.norm() <= 2.0 for v in values)
        assert not it.escaped

    def test_period_two_orbit(self):
        """c = -1 cycles 0, -1, 0, -1, ..."""
        values = list(islice(EscapeTimeIterator(PlaneCoordinate(-1.0, 0.0)), 6))
        assert [v.re for v in values] == [-1.0, 0.0, -1.0, 0.0, -1.0, 0.0]
        assert all(v.im == 0.0 for v in values)

    def test_not_restartable(self):
        """Once escaped, the iterator stays exhausted."""
        it = EscapeTimeIterator(PlaneCoordinate(1.0, 1.0))
        assert len(list(it)) == 2
        assert it.escaped
        assert list(it) == []
        with pytest.raises(StopIteration):
            next(it)

    def test_current_tracks_last_value(self):
        it = EscapeTimeIterator(PlaneCoordinate(1.0, 1.0))
        assert it.current == PlaneCoordinate(0.0, 0.0)
        next(it)
        assert it.current == PlaneCoordinate(1.0, 1.0)

    def test_values_are_single_precision(self):
        c = PlaneCoordinate(-0.7453, 0.1127)
        for v in islice(EscapeTimeIterator(c), 50):
            assert float(np.float32(v.re)) == v.re
            assert float(np.float32(v.im)) == v.im

    def test_iter_returns_self(self):
        it = EscapeTimeIterator(PlaneCoordinate(0.0, 0.0))
        assert iter(it) is it


class TestEscapeCount:
    """Test the capped count used by the rasterizers."""

    def test_known_escape(self):
        assert escape_count(PlaneCoordinate(1.0, 1.0), 1024) == 2

    def test_far_point(self):
        assert escape_count(PlaneCoordinate(3.0, 0.0), 1024) == 1

    def test_interior_hits_budget(self):
        assert escape_count(PlaneCoordinate(0.0, 0.0), 128) == 128
        assert escape_count(PlaneCoordinate(-1.0, 0.0), 64) == 64

    def test_never_exceeds_budget(self):
        for budget in (1, 2, 7, 33):
            assert escape_count(PlaneCoordinate(-0.1, 0.1), budget) == budget

    def test_cap_cuts_escaping_orbit(self):
        """A budget below the escape time returns the budget."""
        assert escape_count(PlaneCoordinate(1.0, 1.0), 1) == 1

    def test_boundary_point_escapes_slowly(self):
        """Points just outside the set take many steps but do escape."""
        count = escape_count(PlaneCoordinate(0.26, 0.0), 1024)
        assert 10 < count < 1024
