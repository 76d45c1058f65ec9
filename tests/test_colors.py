"""
Tests for color conversion and high-contrast color generation.
"""

import random

import pytest

from starlanes.ui.colors import (
    assign_faction_colors,
    blend,
    contrast_ratio,
    generate_high_contrast_color,
    generate_high_contrast_colors,
    hex_to_rgb,
    hsv_to_rgb,
    relative_luminance,
    rgb_to_hex,
    valid_luminance_ranges,
)


class TestConversion:
    """Tests for hex/RGB/HSV helpers."""

    def test_hex_to_rgb(self):
        assert hex_to_rgb("#FFD700") == (255, 215, 0)
        assert hex_to_rgb("8b95a5") == (139, 149, 165)

    def test_rgb_to_hex_clamps(self):
        assert rgb_to_hex(255, 215, 0) == "#ffd700"
        assert rgb_to_hex(300, -5, 127.6) == "#ff0080"

    def test_hsv_primaries(self):
        assert hsv_to_rgb(0, 1, 1) == pytest.approx((255, 0, 0))
        assert hsv_to_rgb(120, 1, 1) == pytest.approx((0, 255, 0))
        assert hsv_to_rgb(240, 1, 1) == pytest.approx((0, 0, 255))

    def test_blend(self):
        assert blend((0, 0, 0), (255, 255, 255), 0.0) == (0, 0, 0)
        assert blend((0, 0, 0), (255, 255, 255), 1.0) == (255, 255, 255)
        assert blend((0, 100, 200), (100, 200, 0), 0.5) == (50, 150, 100)


class TestContrast:
    """Tests for luminance and contrast ratio."""

    def test_luminance_extremes(self):
        assert relative_luminance(0, 0, 0) == 0.0
        assert relative_luminance(255, 255, 255) == pytest.approx(1.0)

    def test_black_white_ratio(self):
        assert contrast_ratio("#000000", "#FFFFFF") == pytest.approx(21.0)

    def test_ratio_is_symmetric(self):
        assert contrast_ratio("#FF5733", "#111827") == contrast_ratio("#111827", "#FF5733")

    def test_no_existing_colors_allows_everything(self):
        assert valid_luminance_ranges([], 4.5) == [(0.0, 1.0)]

    def test_black_forbids_dark_range(self):
        ranges = valid_luminance_ranges([0.0], 4.5)
        assert len(ranges) == 1
        low, high = ranges[0]
        assert low == pytest.approx(0.175)
        assert high == 1.0

    def test_impossible_ratio_leaves_no_range(self):
        assert valid_luminance_ranges([0.0, 1.0], 21.0) == []


class TestGeneration:
    """Tests for random high-contrast colors."""

    def test_contrasts_with_existing(self):
        color = generate_high_contrast_color(["#000000"], 4.5, rng=random.Random(3))
        assert color is not None
        assert contrast_ratio(color, "#000000") >= 4.5

    def test_first_color_without_existing(self):
        color = generate_high_contrast_color([], rng=random.Random(1))
        assert color.startswith("#")
        assert len(color) == 7

    def test_accepts_colors_without_hash(self):
        color = generate_high_contrast_color(["000000"], 3.0, rng=random.Random(5))
        assert color is not None

    def test_batch_keeps_existing_first(self):
        colors = generate_high_contrast_colors(2, ["#111827"], 1.5, rng=random.Random(7))
        assert colors[0] == "#111827"
        assert 1 <= len(colors) <= 3

    def test_faction_colors_are_stable(self):
        reserved = ["#111827", "#FFD700"]
        first = assign_faction_colors(["Zorg", "Kree", "Zorg"], reserved)
        second = assign_faction_colors(["Zorg", "Kree"], reserved)
        assert first == second
        assert set(first) <= {"Zorg", "Kree"}
        assert all(color not in reserved for color in first.values())

    def test_no_factions(self):
        assert assign_faction_colors([], ["#111827"]) == {}
