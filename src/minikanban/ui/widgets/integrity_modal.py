"""Integrity report dialog with the one-shot autofix."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Center, Vertical, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Button, Static

from ...services.integrity_service import IntegrityIssue


class IntegrityModal(ModalScreen[bool]):
    """Lists integrity issues. Dismisses with True when the user asks to fix."""

    DEFAULT_CSS = """
    IntegrityModal {
        align: center middle;
    }

    IntegrityModal > Vertical {
        width: 80;
        height: auto;
        max-height: 90%;
        padding: 1 2;
        background: $surface;
        border: solid $warning;
    }

    IntegrityModal .modal-title {
        text-style: bold;
        padding-bottom: 1;
    }

    IntegrityModal VerticalScroll {
        height: auto;
        max-height: 20;
    }

    IntegrityModal .buttons {
        width: 100%;
        height: auto;
        padding-top: 1;
    }

    IntegrityModal Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("f", "fix", "Fix all"),
        Binding("escape", "close", "Close"),
        Binding("q", "close", "Close", show=False),
    ]

    def __init__(self, issues: list[IntegrityIssue]) -> None:
        super().__init__()
        self.issues = issues

    @property
    def fixable_count(self) -> int:
        """Number of issues the autofix can repair."""
        return sum(1 for issue in self.issues if issue.fixable)

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Static(self._title_text, classes="modal-title")
            with VerticalScroll():
                for issue in self.issues:
                    yield Static(self._format_issue(issue), classes="issue-row")
            with Center(classes="buttons"):
                if self.fixable_count:
                    yield Button(f"Fix {self.fixable_count}", id="fix", variant="warning")
                yield Button("Close", id="close", variant="primary")

    @property
    def _title_text(self) -> str:
        if not self.issues:
            return "No integrity issues found"
        return f"Integrity: {len(self.issues)} issue(s), {self.fixable_count} fixable"

    def _format_issue(self, issue: IntegrityIssue) -> str:
        marker = "[yellow]fixable[/]" if issue.fixable else "[dim]manual[/]"
        return f"{marker} [b]{issue.title}[/] {issue.detail} [dim]{issue.task_id}[/]"

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "fix")

    def action_fix(self) -> None:
        self.dismiss(self.fixable_count > 0)

    def action_close(self) -> None:
        self.dismiss(False)
