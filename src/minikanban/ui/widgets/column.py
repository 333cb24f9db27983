"""Board column widget."""

from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.widget import Widget
from textual.widgets import Static

from ...models import Task
from .task_card import TaskCard


class TaskListScroll(VerticalScroll, inherit_bindings=False):
    """Card list without scroll key bindings, so arrows and vim keys reach the app."""


class EmptyColumnMessage(Static):
    """Placeholder for a column with nothing to show."""


class KanbanColumn(Widget):
    """One status column: header with count and the ordered task cards."""

    def __init__(self, title: str, status: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.title = title
        self.status = status
        self._tasks: list[Task] = []
        self._elevated = False

    def compose(self) -> ComposeResult:
        yield Static(self._header_text, classes="column-header", id=f"header-{self.status}")
        yield TaskListScroll(classes="column-content", id=f"content-{self.status}")

    def on_mount(self) -> None:
        if self._tasks:
            self.call_after_refresh(self._rebuild)

    @property
    def _header_text(self) -> str:
        return f"{self.title} [dim]({len(self._tasks)})[/]"

    def _card_id(self, index: int) -> str:
        # Task ids come from imports and may hold any text, so cards are keyed by position
        return f"card-{self.status}-{index}"

    @property
    def tasks(self) -> list[Task]:
        return self._tasks

    @property
    def task_count(self) -> int:
        return len(self._tasks)

    def set_tasks(self, tasks: list[Task], elevated: bool = False) -> None:
        """Replace the cards. Tasks must already be in board order."""
        self._tasks = tasks
        self._elevated = elevated
        self.call_after_refresh(self._rebuild)

    async def _rebuild(self) -> None:
        try:
            content = self.query_one(f"#content-{self.status}", TaskListScroll)
        except Exception as e:
            self.log.error(f"Column {self.status} has no card list: {e}")
            return

        await content.remove_children()
        if self._tasks:
            await content.mount_all(
                TaskCard(task, elevated=self._elevated, id=self._card_id(index))
                for index, task in enumerate(self._tasks)
            )
        else:
            await content.mount(EmptyColumnMessage("No matching tasks"))

        self.query_one(f"#header-{self.status}", Static).update(self._header_text)

    def get_task(self, index: int) -> Task | None:
        if 0 <= index < len(self._tasks):
            return self._tasks[index]
        return None

    def focus_task(self, index: int) -> bool:
        """Focus and reveal the card at index. False if it isn't mounted (yet)."""
        if self.get_task(index) is None:
            return False
        try:
            card = self.query_one(f"#{self._card_id(index)}", TaskCard)
        except Exception:
            return False
        card.focus()
        card.scroll_visible()
        return True
