"""Tests for pseudocolor lookup and interleaving."""

import numpy as np
import pytest
from PIL import Image

from spectrascope.render.colormap import (
    TABLE_SCALE,
    PseudocolorMapper,
    apply_lookup_table,
    build_lookup_table,
    interleave,
    to_image,
)


class TestBuildLookupTable:
    def test_shape_and_dtype(self):
        table = build_lookup_table(32)
        assert table.shape == (32, 3)
        assert table.dtype == np.uint16

    def test_zero_entry_is_black(self):
        """Brightness is sqrt(0) at the first entry."""
        np.testing.assert_array_equal(build_lookup_table(32)[0], [0, 0, 0])

    def test_last_entry_is_full_green(self):
        r, g, b = build_lookup_table(32)[-1]
        assert g == TABLE_SCALE
        assert r == 0
        assert b == 0

    def test_low_entries_are_blue(self):
        table = build_lookup_table(32)
        for level in (1, 2, 3):
            r, g, b = table[level]
            assert b > r
            assert b > g

    def test_brightness_increases(self):
        table = build_lookup_table(32).astype(np.int64)
        peak = table.max(axis=1)
        assert np.all(np.diff(peak) >= 0)

    def test_table_read_only(self):
        with pytest.raises(ValueError):
            build_lookup_table(8)[0, 0] = 1


class TestApplyLookupTable:
    """Tests for interpolated table application."""

    @pytest.fixture
    def table(self):
        return build_lookup_table(32)

    def test_planar_shapes(self, table):
        values = np.random.rand(12, 20).astype(np.float32)
        red, green, blue = apply_lookup_table(values, table)

        for channel in (red, green, blue):
            assert channel.shape == (12, 20)
            assert channel.min() >= 0.0
            assert channel.max() <= 1.0 + 1e-6

    def test_zero_input(self, table):
        red, green, blue = apply_lookup_table(np.zeros((1, 1)), table)
        assert red[0, 0] == pytest.approx(0.0)
        assert green[0, 0] == pytest.approx(0.0)
        assert blue[0, 0] >= red[0, 0]

    def test_one_is_full_green(self, table):
        red, green, blue = apply_lookup_table(np.ones((1, 1)), table)
        assert red[0, 0] == pytest.approx(0.0, abs=1e-6)
        assert green[0, 0] == pytest.approx(1.0)
        assert blue[0, 0] == pytest.approx(0.0, abs=1e-6)

    def test_midpoint_is_red(self, table):
        red, green, blue = apply_lookup_table(np.full((1, 1), 0.5), table)
        assert red[0, 0] > 0.5
        assert red[0, 0] > 5 * green[0, 0]
        assert red[0, 0] > 5 * blue[0, 0]

    def test_near_zero_is_dark_blue(self, table):
        red, green, blue = apply_lookup_table(np.full((1, 1), 1.0 / 31), table)
        assert blue[0, 0] > red[0, 0]
        assert blue[0, 0] > green[0, 0]
        assert blue[0, 0] < 0.5

    def test_linear_interpolation_between_entries(self, table):
        """Halfway between two levels gives the average of both entries."""
        value = np.full((1, 1), 10.5 / 31, dtype=np.float32)
        red, green, blue = apply_lookup_table(value, table)

        expected = (table[10].astype(np.float64) + table[11]) / 2 / TABLE_SCALE
        np.testing.assert_allclose([red[0, 0], green[0, 0], blue[0, 0]], expected, atol=1e-4)

    def test_out_of_domain_clamped(self, table):
        low = apply_lookup_table(np.array([[-40.0]]), table)
        high = apply_lookup_table(np.array([[12.0]]), table)
        zero = apply_lookup_table(np.zeros((1, 1)), table)
        one = apply_lookup_table(np.ones((1, 1)), table)

        for a, b in zip(low, zero):
            np.testing.assert_array_equal(a, b)
        for a, b in zip(high, one):
            np.testing.assert_array_equal(a, b)

    def test_nan_treated_as_zero(self, table):
        red, green, blue = apply_lookup_table(np.array([[np.nan]]), table)
        assert np.isfinite(red[0, 0])
        assert green[0, 0] == pytest.approx(0.0)


class TestInterleave:
    def test_shape_and_order(self):
        red = np.full((2, 3), 0.1, dtype=np.float32)
        green = np.full((2, 3), 0.2, dtype=np.float32)
        blue = np.full((2, 3), 0.3, dtype=np.float32)

        pixels = interleave(red, green, blue)
        assert pixels.shape == (2, 3, 3)
        np.testing.assert_allclose(pixels[1, 2], [0.1, 0.2, 0.3])

    def test_uint8(self):
        one = np.ones((2, 2), dtype=np.float32)
        zero = np.zeros((2, 2), dtype=np.float32)

        pixels = interleave(one, zero, one, dtype="uint8")
        assert pixels.dtype == np.uint8
        np.testing.assert_array_equal(pixels[0, 0], [255, 0, 255])


class TestPseudocolorMapper:
    def test_render_shape(self):
        mapper = PseudocolorMapper(entries_per_channel=32)
        pixels = mapper.render(np.random.rand(16, 40))

        assert pixels.shape == (16, 40, 3)
        assert pixels.dtype == np.float32

    def test_render_deterministic(self):
        mapper = PseudocolorMapper()
        values = np.random.rand(8, 8)
        np.testing.assert_array_equal(mapper.render(values), mapper.render(values))

    def test_uint8_output(self):
        mapper = PseudocolorMapper(dtype="uint8")
        assert mapper.render(np.random.rand(4, 4)).dtype == np.uint8


class TestToImage:
    def test_float_buffer(self):
        pixels = np.random.rand(10, 30, 3).astype(np.float32)
        img = to_image(pixels)

        assert isinstance(img, Image.Image)
        assert img.mode == "RGB"
        assert img.size == (30, 10)

    def test_uint8_buffer_passthrough(self):
        pixels = np.random.randint(0, 255, (5, 7, 3), dtype=np.uint8)
        np.testing.assert_array_equal(np.asarray(to_image(pixels)), pixels)
