import math

from textual.binding import Binding
from textual.geometry import Size
from textual.message import Message
from textual.reactive import reactive
from textual.scroll_view import ScrollView
from textual.strip import Strip
from rich.segment import Segment
from rich.style import Style

from structgrid.grid import BYTE_LEVELS, all_levels, cell_at_pixel, struct_overlay, visible_cells
from structgrid.layout import DEFAULT_FIELDS, compute_layout
from structgrid.palette import DARK, band_color, field_background_colors, field_text_colors


class AddressGrid(ScrollView, can_focus=True):
    """
    Horizontally scrolling address grid: one row per byte level, one row for
    the structure level and one row with the field breakdown of every
    visible structure repetition. Columns are terminal cells; one byte is
    CELL_WIDTH columns wide.
    """

    CELL_WIDTH = 8
    ROW_HEIGHT = 3
    SCROLL_CELLS = 1 << 20

    DEFAULT_CSS = """
    AddressGrid {
        height: 100%;
        width: 1fr;
    }
    """

    BINDINGS = [
        Binding("left", "scroll_bytes(-1)", "Scroll Left", show=False),
        Binding("h", "scroll_bytes(-1)", "Scroll Left", show=False),
        Binding("right", "scroll_bytes(1)", "Scroll Right", show=False),
        Binding("l", "scroll_bytes(1)", "Scroll Right", show=False),
        Binding("pageup", "scroll_bytes(-16)", "Page Left", show=False),
        Binding("pagedown", "scroll_bytes(16)", "Page Right", show=False),
        Binding("home", "goto_address(0)", "Go to Start", show=False),
    ]

    struct_layout = reactive(compute_layout(DEFAULT_FIELDS))
    grid_theme = reactive(DARK)

    class HoverAddress(Message):
        def __init__(self, description, *args, **kwargs):
            self.description = description
            super().__init__(*args, **kwargs)

    def __init__(self, *args, cell_width=None, **kwargs):
        super().__init__(*args, **kwargs)
        if cell_width is not None:
            self.CELL_WIDTH = cell_width

    def on_mount(self):
        self.virtual_size = Size(self.SCROLL_CELLS * self.CELL_WIDTH, self.row_count * self.ROW_HEIGHT)

    @property
    def levels(self):
        return all_levels(self.struct_layout)

    @property
    def row_count(self):
        # byte levels + structure level + overlay
        return len(BYTE_LEVELS) + 2

    @property
    def view_window(self):
        view_start = self.scroll_offset.x
        return view_start, view_start + self.size.width

    def _paint(self, chars, styles, x0, x1, style, text="", fill=" "):
        width = len(chars)
        c0 = max(int(math.floor(x0)), 0)
        c1 = min(int(math.floor(x1)), width)
        for col in range(c0, c1):
            chars[col] = fill
            styles[col] = style
        if not text:
            return
        span = int(math.floor(x1)) - int(math.floor(x0))
        if span <= 1:
            return
        text = text[:span - 1]
        start = int(math.floor(x0)) + (span - len(text)) // 2
        for offset, ch in enumerate(text):
            col = start + offset
            if 0 <= col < width:
                chars[col] = ch

    def _level_line(self, level, line, view_start, view_end, chars, styles):
        theme = self.grid_theme
        for cell in visible_cells(level, view_start, view_end, self.CELL_WIDTH):
            style = Style(color=theme.text, bgcolor=band_color(cell.index, theme))
            text = cell.label if line == self.ROW_HEIGHT // 2 else ""
            self._paint(chars, styles, cell.x0 - view_start, cell.x1 - view_start, style, text)

    def _overlay_line(self, line, view_start, view_end, chars, styles):
        theme = self.grid_theme
        layout = self.struct_layout
        struct_level = self.levels[-1]
        colors = field_background_colors(len(layout.fields))
        label_colors = field_text_colors(len(layout.fields))
        for cell in visible_cells(struct_level, view_start, view_end, self.CELL_WIDTH):
            for block in struct_overlay(cell, layout, self.CELL_WIDTH):
                x0, x1 = block.x0 - view_start, block.x1 - view_start
                if block.is_padding:
                    self._paint(chars, styles, x0, x1, Style(color=theme.text, bgcolor=theme.padding), fill="░")
                    continue
                style = Style(color=label_colors[block.field_index], bgcolor=colors[block.field_index])
                text = block.name if line == self.ROW_HEIGHT // 2 else ""
                self._paint(chars, styles, x0, x1, style, text)
                border = math.floor(x0)
                if 0 <= border < len(chars):
                    chars[border] = "▏"
                    styles[border] = style + Style(color=theme.field_border)

    def render_line(self, y):
        scroll_x, scroll_y = self.scroll_offset
        y += scroll_y
        width = self.size.width
        row, line = divmod(y, self.ROW_HEIGHT)
        levels = self.levels
        if width <= 0 or row > len(levels):
            return Strip.blank(max(width, 0), self.rich_style)

        view_start, view_end = scroll_x, scroll_x + width
        chars = [" "] * width
        styles = [Style(bgcolor=self.grid_theme.background)] * width
        if row < len(levels):
            self._level_line(levels[row], line, view_start, view_end, chars, styles)
        else:
            self._overlay_line(line, view_start, view_end, chars, styles)

        segments = []
        run_start = 0
        for col in range(1, width + 1):
            if col == width or styles[col] != styles[run_start]:
                segments.append(Segment("".join(chars[run_start:col]), styles[run_start]))
                run_start = col
        return Strip(segments, width)

    def describe_position(self, x, y):
        """Hover text for a position in scroll coordinates (columns, lines)"""
        row = y // self.ROW_HEIGHT
        levels = self.levels
        if row < 0 or row > len(levels):
            return None
        layout = self.struct_layout
        level = levels[min(row, len(levels) - 1)]
        cell = cell_at_pixel(level, x, self.CELL_WIDTH)
        if cell is None:
            return "empty structure"
        if row < len(levels):
            return f"{cell.label}\naddress: {cell.address}"

        offset = int((x - cell.x0) // self.CELL_WIDTH)
        field = layout.field_at(offset)
        if field is None:
            return f"padding\naddress: {cell.address + offset}"
        return (
            f"{level.name} {cell.index}.{field.name}: {field.field_size.label} @ +{field.offset}\n"
            f"address: {cell.address + field.offset}"
        )

    def on_mouse_move(self, event):
        scroll_x, scroll_y = self.scroll_offset
        description = self.describe_position(event.x + scroll_x, event.y + scroll_y)
        self.tooltip = description
        if description is not None:
            self.post_message(self.HoverAddress(description))

    def on_leave(self, event):
        self.tooltip = None

    def action_scroll_bytes(self, count):
        self.scroll_to(x=max(self.scroll_offset.x + count * self.CELL_WIDTH, 0), animate=False)

    def action_goto_address(self, address):
        self.scroll_to(x=max(address * self.CELL_WIDTH, 0), animate=False)
