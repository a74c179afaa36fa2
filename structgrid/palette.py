"""
Colours for the address grid.

Cells alternate between two band colours by index parity, padding is drawn
in red, and fields get distinct hues spaced by the golden ratio so that
neighbouring fields never share a colour.
"""

import colorsys
from dataclasses import dataclass
from typing import List, Tuple

GOLDEN_RATIO_CONJUGATE = 0.618033988749895


@dataclass(frozen=True)
class GridTheme:
    bands: Tuple[str, str]
    text: str
    padding: str
    field_border: str
    background: str


DARK = GridTheme(
    bands=("#3c3c3c", "#262626"),
    text="#eeeeee",
    padding="#c0392b",
    field_border="#3b6cff",
    background="#151515",
)

LIGHT = GridTheme(
    bands=("#d6d6d6", "#ececec"),
    text="#1a1a1a",
    padding="#e74c3c",
    field_border="#1f4fd8",
    background="#fafafa",
)


def band_color(index: int, theme: GridTheme = DARK) -> str:
    return theme.bands[index & 1]


def generate_golden_ratio_colors(n, saturation=0.85, value=0.95, start_hue=0.0):
    """
    Distinct colours for n fields. The start hue is fixed so a field keeps
    its colour from one frame to the next.
    """
    h = start_hue
    colors = []
    for _ in range(n):
        h += GOLDEN_RATIO_CONJUGATE
        h %= 1
        r, g, b = colorsys.hsv_to_rgb(h, saturation, value)
        colors.append('#{:02x}{:02x}{:02x}'.format(int(r*255), int(g*255), int(b*255)))
    return colors


def field_background_colors(n) -> List[str]:
    # Dark enough for light label text on top
    return generate_golden_ratio_colors(n, saturation=0.7, value=0.35)


def field_text_colors(n) -> List[str]:
    return generate_golden_ratio_colors(n, saturation=0.9, value=1.0)
