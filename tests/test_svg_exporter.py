"""
Tests for the SVG snapshot of the grid.
"""

from structgrid.palette import DARK, LIGHT, field_background_colors, field_text_colors
from structgrid.svg_exporter import create_svg


class TestCreateSvg:

    def test_document(self, default_layout):
        svg = create_svg(default_layout)
        assert svg.startswith("<svg")
        assert svg.rstrip().endswith("</svg>")

    def test_all_levels_labelled(self, default_layout):
        svg = create_svg(default_layout, view_start=0.0, width=1400)
        for label in ("u8 0", "u16 0", "u32 0", "u64 0", "u128 0", "MyStruct 0"):
            assert f">{label}</text>" in svg

    def test_hover_addresses(self, default_layout):
        svg = create_svg(default_layout, view_start=1600.0, width=1600, cell_width=50.0)
        assert "MyStruct 1" in svg
        assert "<title>address: 32</title>" in svg
        assert "address: 48" in svg

    def test_padding_drawn(self, default_layout):
        assert DARK.padding in create_svg(default_layout)
        assert LIGHT.padding in create_svg(default_layout, theme=LIGHT)

    def test_font_shrinks_for_large_byte_indices(self, default_layout):
        svg = create_svg(default_layout, view_start=50.0 * 20000, width=400)
        assert 'font-size="10.0"' in svg

    def test_empty_structure(self, empty_layout):
        svg = create_svg(empty_layout)
        assert "MyStruct (empty)" in svg
        assert DARK.padding not in svg

    def test_title_escaped(self, default_layout):
        svg = create_svg(default_layout, title="struct <MyStruct>")
        assert "struct &lt;MyStruct&gt;" in svg

    def test_field_labels_use_text_colors(self, default_layout):
        svg = create_svg(default_layout)
        for color in field_text_colors(2):
            assert f'fill="{color}" text-anchor="middle"' in svg
        for color in field_background_colors(2):
            assert f'fill="{color}" stroke=' in svg
