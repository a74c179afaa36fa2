"""
Tests for the grid colours.
"""

import re

from structgrid.palette import (
    DARK,
    LIGHT,
    band_color,
    field_background_colors,
    field_text_colors,
)

HEX = re.compile(r"^#[0-9a-f]{6}$")


class TestPalette:

    def test_bands_alternate(self):
        assert band_color(0) == DARK.bands[0]
        assert band_color(1) == DARK.bands[1]
        assert band_color(-3, LIGHT) == LIGHT.bands[1]

    def test_field_colors_are_stable(self):
        assert field_text_colors(5) == field_text_colors(5)
        assert field_background_colors(5)[:3] == field_background_colors(3)

    def test_field_colors_distinct(self):
        colors = field_text_colors(8)
        assert len(set(colors)) == 8
        assert all(HEX.match(c) for c in colors + field_background_colors(8))

    def test_text_brighter_than_background(self):
        for text, background in zip(field_text_colors(4), field_background_colors(4)):
            assert sum(int(text[i:i + 2], 16) for i in (1, 3, 5)) > \
                sum(int(background[i:i + 2], 16) for i in (1, 3, 5))
