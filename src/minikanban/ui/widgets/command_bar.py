"""Query bar docked at the bottom of the board."""

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Input, Static

QUERY_HINT = "tag:  p:low|medium|high  due:overdue|week  est:<60"


class CommandBar(Widget):
    """Single-line query input. Hidden until opened with ``/``."""

    DEFAULT_CSS = """
    CommandBar {
        height: 1;
        dock: bottom;
        display: none;
        layer: command;
        background: $surface;
    }

    CommandBar.-open {
        display: block;
    }

    CommandBar #query-label {
        width: auto;
        padding: 0 1;
        background: $accent;
        color: $text;
    }

    CommandBar #query-input {
        width: 1fr;
        border: none;
        background: $surface;
    }

    CommandBar #query-hint {
        width: auto;
        padding: 0 1;
        color: $text-muted;
    }
    """

    def __init__(self) -> None:
        super().__init__()
        self._expression = ""

    def compose(self) -> ComposeResult:
        with Horizontal():
            yield Static("Query", id="query-label")
            yield Input(placeholder="text or filters, Enter to apply", id="query-input")
            yield Static(QUERY_HINT, id="query-hint")

    @property
    def expression(self) -> str:
        """The last applied expression."""
        return self._expression

    @property
    def is_open(self) -> bool:
        return self.has_class("-open")

    def open(self) -> None:
        """Show the bar with the applied expression ready to edit."""
        self.add_class("-open")
        query_input = self.query_one("#query-input", Input)
        query_input.value = self._expression
        query_input.focus()

    def close(self) -> None:
        self.remove_class("-open")

    def remember(self, expression: str) -> None:
        self._expression = expression.strip()

    def clear(self) -> None:
        self._expression = ""
        self.query_one("#query-input", Input).value = ""
