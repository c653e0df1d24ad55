"""
Unit tests for alpha-weighted average sampling.

Tests the sampling pipeline components:
- stride selection under the sample budget
- alpha weighting and the fully transparent case
- grid traversal from the raster origin
"""

import math

import pytest
from PIL import Image

from themescore.services.colors.colorspace import srgb_to_linear
from themescore.services.colors.sampler import (
    BLACK, MAX_SAMPLES, average_linear_rgb, sample_linear_average, sampling_step
)
from themescore.services.imaging import PillowRaster, Raster, decode_raster

from image_factory import solid_png, split_png


class CountingRaster(Raster):
    """Uniform raster that records every coordinate it is asked for."""

    format = "TEST"

    def __init__(self, bounds, rgba=(65535, 65535, 65535, 65535)):
        self._bounds = bounds
        self._rgba = rgba
        self.visited = []

    @property
    def bounds(self):
        return self._bounds

    def rgba(self, x, y):
        self.visited.append((x, y))
        return self._rgba


class TestSamplingStep:
    """Test stride selection"""

    @pytest.mark.parametrize("width,height,expected", [
        (1, 1, 1),
        (64, 64, 1),
        (100, 10, 1),
        (128, 128, 2),
        (1000, 1000, 15),
        (4096, 4096, 64),
        (0, 0, 1),
    ])
    def test_formula(self, width, height, expected):
        assert sampling_step(width, height) == expected

    def test_matches_documented_formula(self):
        for width, height in [(640, 480), (1920, 1080), (333, 4444), (5000, 3)]:
            expected = max(1, math.floor(math.sqrt(width * height / MAX_SAMPLES)))
            assert sampling_step(width, height) == expected


class TestSampleBudget:
    """Test that visited pixels stay within a constant multiple of the budget"""

    @pytest.mark.parametrize("width,height", [
        (65, 65), (640, 480), (1000, 1000), (1920, 1080), (4097, 3), (3000, 50), (8191, 1),
    ])
    def test_visited_pixels_bounded(self, width, height):
        raster = CountingRaster((0, 0, width, height))
        sampled = sample_linear_average(raster)
        step = sampling_step(width, height)

        expected = math.ceil(width / step) * math.ceil(height / step)
        assert len(raster.visited) == sampled.samples == expected
        assert len(raster.visited) <= 4 * MAX_SAMPLES

    def test_grid_starts_at_origin(self):
        raster = CountingRaster((10, 20, 14, 23))
        sample_linear_average(raster)
        assert raster.visited[0] == (10, 20)
        assert raster.visited[-1] == (13, 22)
        assert len(raster.visited) == 12

    def test_partial_edges_skipped(self):
        """Pixels past the last grid line are never read"""
        raster = CountingRaster((0, 0, 128, 130))
        sample_linear_average(raster)
        assert max(y for _, y in raster.visited) == 128
        assert max(x for x, _ in raster.visited) == 126


class TestAverageLinearRgb:
    """Test the alpha-weighted mean"""

    def test_opaque_solid_color(self):
        avg = average_linear_rgb(decode_raster(solid_png((51, 102, 153, 255))))
        assert avg.r == pytest.approx(srgb_to_linear(51 / 255), abs=1e-12)
        assert avg.g == pytest.approx(srgb_to_linear(102 / 255), abs=1e-12)
        assert avg.b == pytest.approx(srgb_to_linear(153 / 255), abs=1e-12)

    def test_fully_transparent_is_black(self):
        sampled = sample_linear_average(decode_raster(solid_png((255, 255, 255, 0))))
        assert sampled.color == BLACK
        assert sampled.weight == 0.0
        assert sampled.samples == 64

    def test_empty_raster_is_black(self):
        raster = CountingRaster((0, 0, 0, 0))
        sampled = sample_linear_average(raster)
        assert sampled.color == BLACK
        assert sampled.samples == 0

    def test_transparent_pixels_contribute_nothing(self):
        raster = decode_raster(split_png((255, 0, 0, 255), (0, 0, 255, 0)))
        avg = average_linear_rgb(raster)
        assert avg.r == pytest.approx(1.0)
        assert avg.g == 0.0
        assert avg.b == 0.0

    def test_not_an_unweighted_mean(self):
        """Half-alpha black pulls the average down by its weight only"""
        image = Image.new("RGBA", (2, 1), (255, 255, 255, 255))
        image.putpixel((1, 0), (0, 0, 0, 128))
        avg = average_linear_rgb(PillowRaster(image))

        half = 128 * 257 / 65535
        assert avg.r == pytest.approx(1.0 / (1.0 + half))
        assert avg.r != pytest.approx(0.5)

    def test_uniform_counting_raster(self):
        avg = average_linear_rgb(CountingRaster((0, 0, 300, 200)))
        assert tuple(avg) == pytest.approx((1.0, 1.0, 1.0))
