"""Read-only task view, rendered the way the editor will show it."""

from rich.syntax import Syntax
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

from ...models import Task


class TaskPreviewModal(ModalScreen[bool]):
    """Shows the editor document of a task.

    Dismisses with True when the user asks to edit, False otherwise.
    """

    DEFAULT_CSS = """
    TaskPreviewModal {
        align: center middle;
    }

    TaskPreviewModal > Vertical {
        width: 90%;
        height: 90%;
        border: solid $primary;
        background: $surface;
    }

    TaskPreviewModal #preview-title {
        height: 1;
        background: $primary-darken-2;
        text-align: center;
    }

    TaskPreviewModal #preview-meta {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }

    TaskPreviewModal #preview-body {
        height: 1fr;
        padding: 0 1;
    }

    TaskPreviewModal #preview-keys {
        height: 1;
        color: $text-muted;
        text-align: center;
    }
    """

    BINDINGS = [
        Binding("e", "edit", "Edit"),
        Binding("escape,q,enter", "close", "Close"),
    ]

    def __init__(self, task: Task, content: str) -> None:
        super().__init__()
        self.board_task = task
        self.content = content

    def compose(self) -> ComposeResult:
        task = self.board_task
        with Vertical():
            yield Static(task.title, id="preview-title", markup=False)
            yield Static(
                f"{task.status} · created {task.created_at} · id {task.id}",
                id="preview-meta",
                markup=False,
            )
            with VerticalScroll(id="preview-body"):
                yield Static(
                    Syntax(self.content, "markdown", theme="github-dark", word_wrap=True)
                )
            yield Static("e edit · esc close", id="preview-keys", markup=False)

    def action_edit(self) -> None:
        self.dismiss(True)

    def action_close(self) -> None:
        self.dismiss(False)
