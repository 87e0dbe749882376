"""
Tests for Point and random colors.
"""

import dataclasses

import numpy as np
import pytest

from bestfit.model.point import MAX_COLOR, Point, random_color


class TestPoint:

    def test_is_immutable(self):
        p = Point(1.0, 2.0, 0x123456)
        with pytest.raises(dataclasses.FrozenInstanceError):
            p.x = 5.0

    def test_hex_and_rgb(self):
        p = Point(0, 0, 0x0A0B0C)
        assert p.hex_color == "#0a0b0c"
        assert p.rgb == (10, 11, 12)

    @pytest.mark.parametrize("color", [-1, MAX_COLOR + 1])
    def test_rejects_out_of_range_color(self, color):
        with pytest.raises(ValueError):
            Point(0, 0, color)


class TestRandomColor:

    def test_within_24_bits(self, rng):
        colors = [random_color(rng) for _ in range(500)]
        assert all(0 <= c <= MAX_COLOR for c in colors)
        assert len(set(colors)) > 450

    def test_deterministic_for_seed(self):
        rng_a, rng_b = np.random.default_rng(7), np.random.default_rng(7)
        a = [random_color(rng_a) for _ in range(3)]
        b = [random_color(rng_b) for _ in range(3)]
        assert a == b
        # successive draws advance the stream
        assert len(set(a)) == 3
