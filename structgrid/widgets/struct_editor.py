from textual.binding import Binding
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget
from rich.text import Text

from typing import List

from structgrid.layout import DEFAULT_FIELDS, FieldSize, PaddingSpan, compute_layout


class StructEditor(Widget, can_focus=True):
    """
    Textual struct view: the #[repr(C)] declaration of the current field
    list, with the padding the compiler would insert, plus keys to add,
    remove and resize fields.
    """

    DEFAULT_CSS = """
    StructEditor {
        height: auto;
        padding: 0 1;
    }
    """

    BINDINGS = [
        Binding("a", "add_field", "Add field"),
        Binding("plus", "add_field", "Add field", show=False),
        Binding("d", "remove_field", "Remove field"),
        Binding("minus", "remove_field", "Remove field", show=False),
        Binding("up", "select(-1)", "Previous field", show=False),
        Binding("k", "select(-1)", "Previous field", show=False),
        Binding("down", "select(1)", "Next field", show=False),
        Binding("j", "select(1)", "Next field", show=False),
        Binding("left", "resize(-1)", "Smaller", show=False),
        Binding("right", "resize(1)", "Larger", show=False),
        Binding("1", "set_size(1)", "u8", show=False),
        Binding("2", "set_size(2)", "u16", show=False),
        Binding("3", "set_size(4)", "u32", show=False),
        Binding("4", "set_size(8)", "u64", show=False),
        Binding("5", "set_size(16)", "u128", show=False),
    ]

    fields = reactive(lambda: list(DEFAULT_FIELDS))
    selected = reactive(0)

    class FieldsChanged(Message):
        def __init__(self, fields: List[FieldSize], *args, **kwargs):
            self.fields = fields
            super().__init__(*args, **kwargs)

    def render(self):
        layout = compute_layout(self.fields)
        lines = layout.struct_declaration()
        text = Text()
        text.append(lines[0] + "\n", style="dim")
        text.append(lines[1] + "\n", style="bold")
        # one declaration line per field or padding span, in address order
        for line, item in zip(lines[2:-1], layout.items()):
            if isinstance(item, PaddingSpan):
                code, _, comment = line.partition(" //")
                text.append(code, style="red")
                text.append(f" //{comment}\n", style="dim")
                continue
            selected = self.has_focus and item.index == self.selected
            text.append(line, style="reverse" if selected else "")
            text.append(f" // offset {item.offset}\n", style="dim")
        text.append(lines[-1] + "\n", style="bold")
        text.append(
            f"// size {layout.total_size}, align {layout.alignment}, {layout.padding_bytes} padding bytes",
            style="dim",
        )
        return text

    def on_focus(self):
        self.refresh()

    def on_blur(self):
        self.refresh()

    def _replace_fields(self, fields):
        self.fields = fields
        self.selected = min(self.selected, max(len(fields) - 1, 0))
        self.post_message(self.FieldsChanged(list(fields)))

    def action_add_field(self):
        self._replace_fields(self.fields + [FieldSize.U8])
        self.selected = len(self.fields) - 1

    def action_remove_field(self):
        if not self.fields:
            return
        fields = list(self.fields)
        del fields[self.selected]
        self._replace_fields(fields)

    def action_select(self, step):
        if self.fields:
            self.selected = (self.selected + step) % len(self.fields)

    def action_resize(self, step):
        if not self.fields:
            return
        fields = list(self.fields)
        current = fields[self.selected]
        fields[self.selected] = current.next_larger() if step > 0 else current.next_smaller()
        self._replace_fields(fields)

    def action_set_size(self, size):
        if not self.fields:
            return
        fields = list(self.fields)
        fields[self.selected] = FieldSize(size)
        self._replace_fields(fields)
