"""
Scaling Tests
=============

Tests for nearest-neighbor thumbnail scaling and the Raster model.
"""

import math

import numpy as np
import pytest

from screenshot_thumbnails.errors import ImageDecodeError
from screenshot_thumbnails.models.frame import Raster
from screenshot_thumbnails.rendering import THUMBNAIL_HEIGHT, scale_image_to_thumbnail

from conftest import pattern_raster, solid_raster


class TestRaster:
    """Tests for Raster invariants."""

    def test_from_bytes_round_trip(self):
        buffer = bytes(range(2 * 3 * 4))
        raster = Raster.from_bytes(2, 3, buffer)

        assert raster.data.shape == (3, 2, 4)
        assert raster.tobytes() == buffer
        # Pixel (x=1, y=0) starts at byte 4
        assert list(raster.data[0, 1]) == [4, 5, 6, 7]

    def test_from_bytes_rejects_wrong_length(self):
        with pytest.raises(ValueError):
            Raster.from_bytes(2, 2, bytes(15))

    def test_rejects_mismatched_shape(self):
        with pytest.raises(ValueError):
            Raster(width=3, height=2, data=np.zeros((3, 2, 4), dtype=np.uint8))

    def test_rejects_non_rgba(self):
        with pytest.raises(ValueError):
            Raster(width=2, height=2, data=np.zeros((2, 2, 3), dtype=np.uint8))

    def test_rejects_wrong_dtype(self):
        with pytest.raises(ValueError):
            Raster(width=2, height=2, data=np.zeros((2, 2, 4), dtype=np.float32))


class TestScaleImageToThumbnail:
    """Tests for scale_image_to_thumbnail."""

    def test_pattern_is_copied_from_even_pixels(self):
        """200x200 -> 100x100 copies source (2i, 2j) exactly."""
        source = pattern_raster(200, 200)
        scaled = scale_image_to_thumbnail(source)

        assert (scaled.width, scaled.height) == (100, 100)
        for j in range(scaled.height):
            for i in range(scaled.width):
                assert tuple(scaled.data[j, i]) == tuple(source.data[2 * j, 2 * i])

    def test_channels_preserved(self):
        scaled = scale_image_to_thumbnail(solid_raster(300, 200, (12, 34, 56, 78)))
        assert np.all(scaled.data == np.array([12, 34, 56, 78], dtype=np.uint8))

    def test_height_is_fixed(self):
        for width, height in [(1280, 720), (412, 732), (100, 100), (333, 101)]:
            scaled = scale_image_to_thumbnail(pattern_raster(width, height))
            assert scaled.height == THUMBNAIL_HEIGHT

    def test_aspect_ratio_preserved(self):
        """Width is floor(width / scale)."""
        scaled = scale_image_to_thumbnail(pattern_raster(1280, 720))
        assert scaled.width == 177  # floor(1280 / 7.2)

        scaled = scale_image_to_thumbnail(pattern_raster(412, 732))
        assert scaled.width == 56  # floor(412 / 7.32)

        ratio = scaled.width / scaled.height
        assert ratio == pytest.approx(412 / 732, abs=1 / THUMBNAIL_HEIGHT)

    def test_non_integer_scale_uses_floor(self):
        source = pattern_raster(150, 150)
        scaled = scale_image_to_thumbnail(source)

        assert scaled.width == 100
        # scale 1.5: output 3 -> source floor(4.5) = 4
        assert tuple(scaled.data[3, 3]) == tuple(source.data[4, 4])
        assert tuple(scaled.data[99, 99]) == tuple(source.data[148, 148])

    def test_same_height_is_identity(self):
        source = pattern_raster(64, 100)
        scaled = scale_image_to_thumbnail(source)
        assert scaled.width == 64
        assert np.array_equal(scaled.data, source.data)

    def test_custom_height(self):
        scaled = scale_image_to_thumbnail(pattern_raster(40, 20), height=5)
        assert (scaled.width, scaled.height) == (10, 5)
        assert scaled.tobytes() == scaled.data.tobytes()
        assert len(scaled.tobytes()) == 10 * 5 * 4

    def test_short_source_is_upsampled(self):
        """80x60 -> 133x100, every output pixel copies source (floor(i*0.6), floor(j*0.6))."""
        source = pattern_raster(80, 60)
        scaled = scale_image_to_thumbnail(source)

        assert (scaled.width, scaled.height) == (133, 100)
        scale_factor = 60 / 100
        for j in range(scaled.height):
            for i in range(scaled.width):
                orig_x = math.floor(i * scale_factor)
                orig_y = math.floor(j * scale_factor)
                assert tuple(scaled.data[j, i]) == tuple(source.data[orig_y, orig_x])
        assert tuple(scaled.data[99, 132]) == tuple(source.data[59, 79])

    def test_empty_source_rejected(self):
        with pytest.raises(ImageDecodeError):
            scale_image_to_thumbnail(solid_raster(10, 0))

    def test_source_is_not_modified(self):
        source = pattern_raster(200, 200)
        before = source.data.copy()
        scale_image_to_thumbnail(source)
        assert np.array_equal(source.data, before)
