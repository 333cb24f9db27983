"""Read-only text dialog (import errors, audit report, review summary)."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static


class MessageModal(ModalScreen[None]):
    """Modal showing a title and plain-text lines."""

    DEFAULT_CSS = """
    MessageModal {
        align: center middle;
    }

    MessageModal > Vertical {
        width: 90;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        background: $surface;
        border: solid $primary;
    }

    MessageModal.-error > Vertical {
        border: solid $error;
    }

    MessageModal .modal-title {
        text-style: bold;
        padding-bottom: 1;
    }

    MessageModal VerticalScroll {
        height: auto;
        max-height: 30;
    }

    MessageModal .modal-footer {
        color: $text-muted;
        padding-top: 1;
    }
    """

    BINDINGS = [
        Binding("escape", "close", "Close"),
        Binding("q", "close", "Close", show=False),
        Binding("enter", "close", "Close", show=False),
    ]

    def __init__(self, title: str, lines: list[str], is_error: bool = False) -> None:
        super().__init__(classes="-error" if is_error else None)
        self.title_text = title
        self.lines = lines

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(self.title_text, classes="modal-title", markup=False)
            with VerticalScroll():
                # User data may contain square brackets
                yield Static("\n".join(self.lines), classes="modal-body", markup=False)
            yield Static("Esc / Enter to close", classes="modal-footer")

    def action_close(self) -> None:
        self.dismiss(None)
