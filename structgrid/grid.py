"""
Infinite multi-resolution address grid.

Every level is a periodic strip of cells over all integers: cell i of a level
with byte size s covers addresses [i*s, (i+1)*s) and pixels
[i*s*cell_width, (i+1)*s*cell_width). Nothing is materialized beyond the
cells that intersect the current viewport.
"""

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional

from structgrid.layout import FieldSize, LayoutResult, PaddingSpan

STRUCT_NAME = "MyStruct"


@dataclass(frozen=True)
class GridLevel:
    name: str
    byte_size: int
    is_structure: bool = False

    def pixel_width(self, cell_width: float) -> float:
        return self.byte_size * cell_width


BYTE_LEVELS = tuple(GridLevel(f.label, f.size) for f in FieldSize.all())


def structure_level(layout: LayoutResult, name: str = STRUCT_NAME) -> GridLevel:
    return GridLevel(name, layout.total_size, is_structure=True)


def all_levels(layout: LayoutResult) -> List[GridLevel]:
    return list(BYTE_LEVELS) + [structure_level(layout)]


@dataclass(frozen=True)
class Cell:
    level: GridLevel
    index: int
    x0: float
    x1: float
    degenerate: bool = False

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def address(self) -> int:
        return self.index * self.level.byte_size

    @property
    def band(self) -> int:
        return self.index & 1

    @property
    def label(self) -> str:
        if self.degenerate:
            return f"{self.level.name} (empty)"
        return f"{self.level.name} {self.index}"


@dataclass(frozen=True)
class OverlayBlock:
    kind: str  # 'field' or 'padding'
    name: str
    offset: int
    size: int
    x0: float
    x1: float
    address: int
    field_index: int = -1

    @property
    def is_padding(self) -> bool:
        return self.kind == "padding"


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def cell_at(level: GridLevel, index: int, cell_width: float) -> Cell:
    cw = level.pixel_width(cell_width)
    return Cell(level, index, index * cw, (index + 1) * cw)


def first_visible_index(level: GridLevel, view_start: float, cell_width: float) -> int:
    """Index of the first cell to draw, looking back half a cell so rounding never drops the leftmost one"""
    cw = level.pixel_width(cell_width)
    return _round_half_away((view_start - cw) / cw)


def visible_cells(level: GridLevel, view_start: float, view_end: float,
                  cell_width: float) -> Iterator[Cell]:
    """
    Yield the cells of a level intersecting [view_start, view_end).

    A structure level of size 0 yields a single degenerate cell spanning
    the viewport.
    """
    if level.byte_size == 0:
        yield Cell(level, 0, view_start, max(view_start, view_end), degenerate=True)
        return

    index = first_visible_index(level, view_start, cell_width)
    while True:
        cell = cell_at(level, index, cell_width)
        yield cell
        index += 1
        if cell.x1 > view_end:
            break


def cell_at_pixel(level: GridLevel, x: float, cell_width: float) -> Optional[Cell]:
    if level.byte_size == 0:
        return None
    return cell_at(level, math.floor(x / level.pixel_width(cell_width)), cell_width)


def label_font_size(level_position: int, index: int) -> float:
    """Font size for a cell label; only the single-byte level shrinks as indices grow"""
    if index < 1000 or level_position > 0:
        return 12.0
    elif index < 10000:
        return 11.0
    elif index < 100000:
        return 10.0
    elif index < 1000000:
        return 9.5
    return 9.0


def struct_overlay(cell: Cell, layout: LayoutResult, cell_width: float) -> List[OverlayBlock]:
    """Field and padding blocks for one repetition of the structure"""
    if cell.degenerate or layout.is_empty:
        return []

    blocks = []
    for item in layout.items():
        if isinstance(item, PaddingSpan):
            kind, name, offset, size, field_index = "padding", "_", item.start, item.length, -1
        else:
            kind, name, offset, size, field_index = "field", item.name, item.offset, item.size, item.index
        blocks.append(OverlayBlock(
            kind=kind,
            name=name,
            offset=offset,
            size=size,
            x0=cell.x0 + cell_width * offset,
            x1=cell.x0 + cell_width * (offset + size),
            address=cell.address + offset,
            field_index=field_index,
        ))
    return blocks
