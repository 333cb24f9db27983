"""Keyboard reference."""

from rich.table import Table
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

KEYMAP: list[tuple[str, list[tuple[str, str]]]] = [
    (
        "Navigation",
        [
            ("h l ← →", "Previous / next column"),
            ("k j ↑ ↓", "Previous / next task"),
            ("g G", "First / last task in column"),
        ],
    ),
    (
        "Tasks",
        [
            ("n", "New task at the top of the column"),
            ("e", "Edit in $EDITOR"),
            ("Enter", "Preview"),
            ("H L", "Move to previous / next column"),
            ("K J", "Move up / down in the column"),
            ("d", "Delete"),
        ],
    ),
    (
        "Board",
        [
            ("c", "Integrity check, f to autofix"),
            ("x", "Export to kanban-export-YYYY-MM-DD.json"),
            ("i", "Import from a JSON export"),
            ("A", "Audit report"),
            ("m", "Toggle review mode"),
            ("R", "Rubric summary"),
        ],
    ),
    (
        "Query (/ to open, Esc to clear)",
        [
            ("words", "Title or description contains them"),
            ("tag:x", "Some tag contains x, repeatable"),
            ("p:high", "Priority low, medium or high"),
            ("due:overdue", "Past due, or due:week for the next 7 days"),
            ("est:<60", "Estimate in minutes, with < <= > >= ="),
        ],
    ),
]


def keymap_table(title: str, rows: list[tuple[str, str]]) -> Table:
    """Two-column table for one keymap section."""
    table = Table(title=title, title_justify="left", show_header=False, box=None, expand=True)
    table.add_column(style="bold", width=14)
    table.add_column(style="dim")
    for keys, action in rows:
        table.add_row(keys, action)
    return table


class HelpScreen(ModalScreen):
    """Lists every key binding. Any key closes it."""

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > VerticalScroll {
        width: 72;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        border: solid $primary;
        background: $surface;
    }

    HelpScreen Static {
        margin-bottom: 1;
    }
    """

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            for title, rows in KEYMAP:
                yield Static(keymap_table(title, rows))
            yield Static("[dim]? help · q quit · any key closes[/]")

    def on_key(self, event) -> None:
        event.stop()
        self.dismiss()
