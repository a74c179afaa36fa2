import html

from structgrid.grid import all_levels, label_font_size, struct_overlay, visible_cells
from structgrid.palette import DARK, band_color, field_background_colors, field_text_colors


def _rect(svg, x, y, w, h, fill, hover=None, stroke=None):
    stroke_attr = f' stroke="{stroke}" stroke-width="1"' if stroke else ''
    if hover is None:
        svg.append(f'<rect x="{x:.2f}" y="{y:.2f}" width="{w:.2f}" height="{h:.2f}" fill="{fill}"{stroke_attr}/>')
    else:
        svg.append(f'<rect x="{x:.2f}" y="{y:.2f}" width="{w:.2f}" height="{h:.2f}" fill="{fill}"{stroke_attr}>'
                   f'<title>{html.escape(hover)}</title></rect>')


def _text(svg, x, y, text, size, color):
    svg.append(f'<text x="{x:.2f}" y="{y:.2f}" font-size="{size}" fill="{color}" '
               f'text-anchor="middle" dominant-baseline="central" class="label">{html.escape(text)}</text>')


def create_svg(layout, view_start=0.0, width=1400, cell_width=50.0, theme=DARK, title=None):
    """
    Render the visible part of the address grid as an SVG document.

    Args:
        layout: LayoutResult of the current structure
        view_start: Left edge of the viewport on the infinite scroll axis, in pixels
        width: Viewport width in pixels
        cell_width: Pixel width of one byte
        theme: GridTheme used for bands, padding and text

    Returns:
        SVG string
    """
    view_end = view_start + width
    row_h = cell_width
    levels = all_levels(layout)
    height = (len(levels) + 2) * row_h

    svg = []
    svg.append(f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" viewBox="0 0 {width} {height}">')
    svg.append('''
    <defs>
        <style>
            .label { font-family: 'Fira Code', monospace; }
        </style>
        <clipPath id="viewport"><rect x="0" y="0" width="100%" height="100%"/></clipPath>
    </defs>''')
    svg.append(f'<rect width="100%" height="100%" fill="{theme.background}"/>')
    if title:
        svg.append(f'<desc>{html.escape(title)}</desc>')
    svg.append('<g clip-path="url(#viewport)">')

    colors = field_background_colors(len(layout.fields))
    label_colors = field_text_colors(len(layout.fields))

    for position, level in enumerate(levels):
        y = position * row_h + row_h / 2
        for cell in visible_cells(level, view_start, view_end, cell_width):
            x = cell.x0 - view_start
            _rect(svg, x, y, cell.width, row_h, band_color(cell.index, theme),
                  hover=f"address: {cell.address}")
            size = 12.0 if level.is_structure else label_font_size(position, cell.index)
            _text(svg, x + cell.width / 2, y + row_h / 2, cell.label, size, theme.text)

            if not level.is_structure:
                continue

            y2 = y + row_h
            for block in struct_overlay(cell, layout, cell_width):
                bx = block.x0 - view_start
                bw = block.x1 - block.x0
                if block.is_padding:
                    _rect(svg, bx, y2, bw, row_h, theme.padding)
                    continue
                _rect(svg, bx, y2, bw, row_h, colors[block.field_index],
                      hover=f"{block.name} @ +{block.offset}\naddress: {block.address}",
                      stroke=theme.field_border)
                _text(svg, bx + bw / 2, y2 + row_h / 2, block.name, 12.0, label_colors[block.field_index])

    svg.append('</g>')
    svg.append('</svg>')
    return "\n".join(svg)
