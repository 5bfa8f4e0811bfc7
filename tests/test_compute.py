"""Tests for mandelbrot/compute.py: backend selection and render entry points."""

import numpy as np
import pytest

from mandelbrot.config import RenderConfig, ConfigurationError, ColorPolicy
from mandelbrot.coloring import map_color
from mandelbrot.compute import (
    BACKEND_NAMES, DEFAULT_BACKEND, get_backend, render, render_array,
)
from mandelbrot.coords import ScreenPoint, to_plane
from mandelbrot.iteration import escape_count
from mandelbrot._numba_backend import NumbaBackend
from mandelbrot._numpy_backend import NumpyBackend


class TestGetBackend:
    """Test backend selection by name."""

    def test_default_is_numba(self):
        assert DEFAULT_BACKEND == "numba"
        assert isinstance(get_backend(), NumbaBackend)

    def test_numpy_by_name(self):
        backend = get_backend("numpy", parallelism=3)
        assert isinstance(backend, NumpyBackend)
        assert backend.workers == 3

    def test_numba_parallelism(self):
        backend = get_backend("numba", parallelism=2)
        assert backend.n_threads == 2

    def test_all_names_resolve(self):
        for name in BACKEND_NAMES:
            assert hasattr(get_backend(name), "render_frame")

    def test_unknown_name(self):
        with pytest.raises(ConfigurationError):
            get_backend("cuda")


class TestRender:
    """Test the byte-buffer entry point."""

    @pytest.mark.parametrize("name", BACKEND_NAMES)
    def test_buffer_length(self, name):
        config = RenderConfig(factor=10, escape_budget=32)
        frame = render(config, get_backend(name))
        assert isinstance(frame, bytes)
        assert len(frame) == config.width * config.height * 4

    def test_default_backend(self):
        config = RenderConfig(factor=5, escape_budget=16)
        assert len(render(config)) == config.frame_bytes

    def test_pixel_offsets(self):
        """Pixel (x, y) occupies bytes [(y*W + x)*4, (y*W + x)*4 + 4)."""
        config = RenderConfig(factor=6, escape_budget=48)
        frame = render(config, get_backend("numpy", parallelism=2))
        width = config.width
        for x, y in [(0, 0), (12, 6), (17, 11), (5, 3)]:
            offset = (y * width + x) * 4
            count = escape_count(to_plane(ScreenPoint(x, y), config.screen_size), 48)
            assert tuple(frame[offset:offset + 4]) == map_color(count, config.color_policy, 48)

    @pytest.mark.parametrize("name", BACKEND_NAMES)
    def test_repeatable(self, name):
        """Same configuration twice gives the same bytes."""
        config = RenderConfig(factor=12, escape_budget=64)
        backend = get_backend(name)
        assert render(config, backend) == render(config, backend)

    def test_parallelism_independent(self):
        """Different thread/worker counts give identical frames."""
        config = RenderConfig(factor=12, escape_budget=64)
        assert (
            render(config, get_backend("numpy", parallelism=1))
            == render(config, get_backend("numpy", parallelism=4))
        )
        assert (
            render(config, get_backend("numba", parallelism=1))
            == render(config, get_backend("numba", parallelism=4))
        )

    def test_grayscale_interior_black(self):
        config = RenderConfig(factor=10, escape_budget=64, color_policy=ColorPolicy.GRAYSCALE)
        pixels = render_array(config, get_backend("numpy"))
        # pixel (20, 10) is c = 0, which never escapes
        assert tuple(pixels[10, 20]) == (0, 0, 0, 255)


class TestRenderArray:
    """Test the array entry point and backend output checks."""

    def test_shape(self):
        config = RenderConfig(factor=5, escape_budget=8)
        pixels = render_array(config, get_backend("numpy"))
        assert pixels.shape == (10, 15, 4)
        assert pixels.dtype == np.uint8

    def test_fresh_buffer_per_call(self):
        config = RenderConfig(factor=5, escape_budget=8)
        backend = get_backend("numpy")
        a = render_array(config, backend)
        b = render_array(config, backend)
        assert a is not b
        assert not np.shares_memory(a, b)

    def test_broken_backend_rejected(self):
        class WrongShapeBackend:
            def render_frame(self, config, lut):
                return np.zeros((1, 1, 4), dtype=np.uint8)

        with pytest.raises(RuntimeError):
            render_array(RenderConfig(factor=5, escape_budget=8), WrongShapeBackend())
