"""Tests for mandelbrot/config.py: defaults, derived sizes, validation."""

import math

import pytest

from mandelbrot.config import (
    RenderConfig, ColorPolicy, ConfigurationError,
    DEFAULT_ESCAPE_BUDGET, DEFAULT_FACTOR, MAX_FRAME_BYTES,
)


class TestRenderConfigDefaults:
    """Test default configuration and derived properties."""

    def test_default_frame_size(self):
        """Default factor 350 over re in [-2, 1], im in [-1, 1]."""
        config = RenderConfig()
        assert config.factor == DEFAULT_FACTOR
        assert config.screen_size == (1050, 700)

    def test_default_budget_and_policy(self):
        config = RenderConfig()
        assert config.escape_budget == DEFAULT_ESCAPE_BUDGET
        assert config.color_policy is ColorPolicy.CYCLIC

    def test_frame_size_scales_with_factor(self):
        config = RenderConfig(factor=10)
        assert config.width == 30
        assert config.height == 20

    def test_frame_bytes(self):
        config = RenderConfig(factor=10)
        assert config.frame_bytes == 30 * 20 * 4

    def test_range_widths(self):
        config = RenderConfig()
        assert config.x_width == pytest.approx(3.0)
        assert config.y_width == pytest.approx(2.0)

    def test_immutable(self):
        config = RenderConfig()
        with pytest.raises(AttributeError):
            config.escape_budget = 64


class TestContains:
    """Test the frame bounds check."""

    def test_corners(self):
        config = RenderConfig(factor=10)
        assert config.contains(0, 0)
        assert config.contains(29, 19)

    def test_outside(self):
        config = RenderConfig(factor=10)
        assert not config.contains(30, 0)
        assert not config.contains(0, 20)
        assert not config.contains(-1, 5)


class TestValidation:
    """Invalid configurations are rejected at construction time."""

    def test_zero_budget(self):
        with pytest.raises(ConfigurationError):
            RenderConfig(escape_budget=0)

    def test_zero_factor(self):
        with pytest.raises(ConfigurationError):
            RenderConfig(factor=0)

    def test_zero_width_range(self):
        with pytest.raises(ConfigurationError):
            RenderConfig(x_range=(1.0, 1.0))

    def test_inverted_range(self):
        with pytest.raises(ConfigurationError):
            RenderConfig(y_range=(1.0, -1.0))

    def test_non_finite_range(self):
        with pytest.raises(ConfigurationError):
            RenderConfig(x_range=(-math.inf, 1.0))
        with pytest.raises(ConfigurationError):
            RenderConfig(y_range=(math.nan, 1.0))

    def test_range_too_small_for_one_pixel(self):
        """A range that rounds to a 0-pixel frame is rejected."""
        with pytest.raises(ConfigurationError):
            RenderConfig(factor=1, y_range=(0.0, 0.1))

    def test_oversized_frame(self):
        """Frames larger than MAX_FRAME_BYTES are a fatal precondition."""
        factor = int(math.sqrt(MAX_FRAME_BYTES / 24)) + 1
        with pytest.raises(ConfigurationError):
            RenderConfig(factor=factor)

    def test_bad_orbit_limits(self):
        with pytest.raises(ConfigurationError):
            RenderConfig(orbit_max_len=0)
        with pytest.raises(ConfigurationError):
            RenderConfig(orbit_epsilon=0.0)

    def test_unknown_policy(self):
        with pytest.raises(ConfigurationError):
            RenderConfig(color_policy="rainbow")

    def test_is_value_error(self):
        """Callers catching ValueError also catch configuration errors."""
        assert issubclass(ConfigurationError, ValueError)
