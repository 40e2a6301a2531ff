"""Tests for table_grid_detector.geometry — normalized → pixel conversion."""

import pytest

from table_grid_detector.geometry import to_image_rect, words_in_image_space
from table_grid_detector.structures import NormalizedObservation


class TestToImageRect:
    def test_flips_origin_to_top_left(self):
        x, y, w, h = to_image_rect(0.25, 0.5, 0.5, 0.25, (200.0, 400.0))
        assert x == 50.0
        assert w == 100.0
        assert h == 100.0
        # bottom-left rect spans y 200..300, so top-left y = 400 - 300
        assert y == 100.0

    def test_full_image_box(self):
        assert to_image_rect(0.0, 0.0, 1.0, 1.0, (640.0, 480.0)) == (0.0, 0.0, 640.0, 480.0)

    def test_no_rounding(self):
        x, y, w, h = to_image_rect(0.1, 0.2, 0.3, 0.05, (333.0, 777.0))
        assert x == 0.1 * 333.0
        assert w == 0.3 * 333.0
        assert h == 0.05 * 777.0
        assert y == 777.0 - (0.2 * 777.0 + 0.05 * 777.0)


class TestWordsInImageSpace:
    def test_converts_every_observation(self):
        obs = [
            NormalizedObservation("top", 0.0, 0.9, 0.1, 0.1),
            NormalizedObservation("bottom", 0.0, 0.0, 0.1, 0.1),
        ]
        words = words_in_image_space(obs, (100.0, 100.0))
        assert [w.text for w in words] == ["top", "bottom"]
        assert words[0].yc < words[1].yc

    def test_keeps_blank_text(self):
        obs = [NormalizedObservation("  ", 0.1, 0.1, 0.1, 0.1), NormalizedObservation("x", 0.1, 0.1, 0.1, 0.1)]
        assert [w.text for w in words_in_image_space(obs, (10.0, 10.0))] == ["  ", "x"]

    @pytest.mark.parametrize("size", [(0.0, 100.0), (100.0, 0.0), (-5.0, 10.0)])
    def test_invalid_image_size_yields_nothing(self, size):
        obs = [NormalizedObservation("x", 0.1, 0.1, 0.1, 0.1)]
        assert words_in_image_space(obs, size) == []

    def test_empty_input(self):
        assert words_in_image_space([], (100.0, 100.0)) == []
