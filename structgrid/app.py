from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Footer, Log, TabbedContent, TabPane, TextArea

import os

from structgrid.construct_layout import construct_source, sample_report
from structgrid.layout import DEFAULT_FIELDS, compute_layout
from structgrid.palette import DARK, LIGHT
from structgrid.persistence import DEFAULT_STATE_PATH, FieldListError, load_fields, save_fields
from structgrid.svg_exporter import create_svg
from structgrid.widgets.address_grid import AddressGrid
from structgrid.widgets.struct_editor import StructEditor


class StructGridApp(App):
    TITLE = "StructGrid"

    DEFAULT_CSS = '''
    Screen {
        layers: below log;
    }

    #editor-pane {
        layer: below;
        width: 40;
        min-width: 25%;
    }

    #construct-source {
        height: 100%;
    }

    #address-grid {
        layer: below;
        height: 100%;
    }

    #log-panel {
        layer: log;
        width: 50%;
        height: 50%;
        border: solid $primary;
        background: $panel;
        visibility: hidden;
    }
    '''

    BINDINGS = [
        ("ctrl+e", "export", "Export SVG"),
        ("ctrl+t", "toggle_grid_theme", "Light/Dark grid"),
        ("ctrl+l", "toggle_log", "Toggle Log Panel"),
        ("ctrl+s", "save", "Save field list"),
        ("ctrl+q", "quit", "Quit"),
    ]

    EXPORT_CELL_WIDTH = 50.0

    def __init__(self, state_path=DEFAULT_STATE_PATH, fields=None, cell_width=None):
        super().__init__()
        self.state_path = state_path
        self.cell_width = cell_width
        self.initial_fields = fields
        self.export_count = 0
        self._pending_messages = []
        self.fields = None

    def load_initial_fields(self):
        if self.initial_fields is not None:
            return list(self.initial_fields)
        try:
            return load_fields(self.state_path)
        except (OSError, FieldListError) as e:
            self._pending_messages.append((f"Could not load {self.state_path}: {e}; using defaults", "warning"))
            return list(DEFAULT_FIELDS)

    def log_message(self, message: str, level: str = "info") -> None:
        """Log a message to the log panel."""
        if level == "error":
            formatted_message = f"ERROR: {message}"
        elif level == "warning":
            formatted_message = f"WARN: {message}"
        else:
            formatted_message = f"INFO: {message}"
        self.query_one("#log-panel", Log).write_line(formatted_message)

    def compose(self) -> ComposeResult:
        with Horizontal():
            with Vertical(id="editor-pane"):
                with TabbedContent(id="tabbed-content"):
                    with TabPane("repr(C)", id="struct-pane"):
                        yield StructEditor(id="struct-editor")
                    with TabPane("construct", id="construct-pane"):
                        yield TextArea(id="construct-source", read_only=True)
            yield AddressGrid(id="address-grid", cell_width=self.cell_width)
        yield Log(id="log-panel", auto_scroll=True)
        yield Footer()

    def on_mount(self):
        editor = self.query_one("#struct-editor", StructEditor)
        self.fields = self.load_initial_fields()
        editor.fields = list(self.fields)
        for message, level in self._pending_messages:
            self.log_message(message, level=level)
        self._pending_messages.clear()
        self.update_layout(editor.fields)
        self.set_focus(editor)
        self.log_message("Application Started!")

    def update_layout(self, fields):
        layout = compute_layout(fields)
        self.query_one("#address-grid", AddressGrid).struct_layout = layout
        self.query_one("#construct-source", TextArea).text = construct_source(layout) + "\n\n" + sample_report(layout)
        return layout

    def on_struct_editor_fields_changed(self, msg: StructEditor.FieldsChanged) -> None:
        self.fields = list(msg.fields)
        layout = self.update_layout(self.fields)
        self.log_message(
            f"Layout: {len(layout.fields)} fields, size {layout.total_size}, "
            f"align {layout.alignment}, {layout.padding_bytes} padding bytes"
        )

    def on_address_grid_hover_address(self, msg: AddressGrid.HoverAddress) -> None:
        self.sub_title = msg.description.replace("\n", " - ")

    def action_toggle_log(self):
        log = self.query_one("#log-panel")
        log.visible = not log.visible

    def action_toggle_grid_theme(self):
        grid = self.query_one("#address-grid", AddressGrid)
        grid.grid_theme = LIGHT if grid.grid_theme is DARK else DARK

    def action_export(self):
        grid = self.query_one("#address-grid", AddressGrid)
        scale = self.EXPORT_CELL_WIDTH / grid.CELL_WIDTH
        view_start, view_end = grid.view_window
        filename = f"structgrid_{self.export_count}.svg"
        try:
            with open(filename, "w", encoding="utf-8") as f:
                f.write(create_svg(
                    grid.struct_layout,
                    view_start=view_start * scale,
                    width=max(view_end - view_start, 1) * scale,
                    cell_width=self.EXPORT_CELL_WIDTH,
                    theme=grid.grid_theme,
                ))
        except OSError as e:
            self.log_message(f"Error exporting SVG: {e}", level="error")
            return
        self.export_count += 1
        self.log_message(f"Exported to {os.path.abspath(filename)}")

    def save_state(self) -> str:
        """Write the current field list to the state file and return its path"""
        return save_fields(self.fields, self.state_path)

    def action_save(self):
        try:
            path = self.save_state()
        except OSError as e:
            self.log_message(f"Error saving field list: {e}", level="error")
            return
        self.log_message(f"Saved field list to: {path}")

    def on_unmount(self):
        if self.fields is None:
            return
        # The log panel is gone by now, so failures go to the devtools log
        try:
            self.save_state()
        except OSError as e:
            self.log.error(f"Error saving field list: {e}")
