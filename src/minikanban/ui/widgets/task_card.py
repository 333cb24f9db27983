"""Task card widget."""

from __future__ import annotations

import math

from rich.markup import escape
from textual.app import ComposeResult
from textual.widget import Widget
from textual.widgets import Static

from ...models import STATUS_DONE, Task
from ...utils import now_utc, parse_iso

PRIORITY_STYLE: dict[str, tuple[str, str]] = {
    "high": ("red", "▲"),
    "medium": ("yellow", "●"),
    "low": ("green", "▼"),
}

MAX_TAGS = 3
TITLE_WIDTH = 40
DESCRIPTION_WIDTH = 50


def shorten(text: str, width: int) -> str:
    """Single-line text cut to width with an ellipsis."""
    text = " ".join(text.split())
    return text if len(text) <= width else text[: width - 1] + "…"


class TaskCard(Widget, can_focus=True):
    """Focusable summary of one task."""

    def __init__(self, task: Task, elevated: bool = False, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.board_task = task
        self.elevated = elevated

    def compose(self) -> ComposeResult:
        task = self.board_task
        yield Static(shorten(task.title, TITLE_WIDTH), classes="task-title", markup=False)
        yield Static(self.meta_line(), classes="task-meta")

        if task.tags:
            yield Static(self.tag_line(), classes="task-tags")

        if self.elevated:
            yield Static(self.review_line(), classes="task-review")
        elif task.description:
            yield Static(
                shorten(task.description, DESCRIPTION_WIDTH),
                classes="task-preview",
                markup=False,
            )

    def meta_line(self) -> str:
        """Priority, estimate and due date, as markup."""
        task = self.board_task
        color, symbol = PRIORITY_STYLE.get(task.priority, ("white", "●"))
        parts = [f"[{color}]{symbol}[/] {task.priority}"]

        minutes = task.estimate_minutes
        if minutes and math.isfinite(minutes):
            parts.append(f"[dim]{minutes:g}m[/]")

        due = parse_iso(task.due_at)
        if due is not None:
            overdue = due < now_utc() and task.status != STATUS_DONE
            style = "red" if overdue else "dim"
            parts.append(f"[{style}]due {due:%Y-%m-%d}[/]")

        return "  ".join(parts)

    def tag_line(self) -> str:
        tags = self.board_task.tags
        line = " ".join(f"[dim]#{escape(tag)}[/]" for tag in tags[:MAX_TAGS])
        if len(tags) > MAX_TAGS:
            line += f" [dim]+{len(tags) - MAX_TAGS}[/]"
        return line

    def review_line(self) -> str:
        score = self.board_task.rubric_score
        if score is None:
            return "[dim]not scored[/]"
        return f"[cyan]score {score:g}/10[/]"
