"""Board screen: the three status columns plus status lines and query bar."""

from dataclasses import dataclass

from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from ...models import BoardConfig, Task
from ...services import Query
from ..widgets.column import KanbanColumn
from ..widgets.command_bar import CommandBar


@dataclass
class Cursor:
    """Focused card position: column index and row within the column."""

    column: int = 0
    row: int = 0


class BoardScreen(Screen):
    """Columns in board order with keyboard focus tracking.

    Rebuilding columns is asynchronous, so focus is re-applied after the
    refresh completes: on a followed task when one is requested, otherwise
    on the previous position clamped to what is still visible.
    """

    LAYERS = ["base", "command"]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.cursor = Cursor()
        self._query: Query | None = None
        self._follow_id: str | None = None
        self._restore = Cursor()

    @property
    def board_config(self) -> BoardConfig:
        return self.app.config_service.get_board_config()  # pyrefly: ignore[missing-attribute]

    @property
    def column_ids(self) -> list[str]:
        return self.board_config.column_ids

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="board-container"), Horizontal(id="columns"):
            for col in self.board_config.columns:
                yield KanbanColumn(title=col.title, status=col.id, id=f"column-{col.id}")
        yield Static("", id="review-status", classes="review-status-bar")
        yield Static("", id="filter-status", classes="filter-status-bar")
        yield CommandBar()
        yield Footer()

    def on_mount(self) -> None:
        self.load_tasks()
        self.call_after_refresh(self._focus_cursor)

    # Data

    def set_query(self, query: Query | None, expression: str = "") -> None:
        """Filter the columns with query (None shows everything)."""
        self._query = query
        self._show_query_status(expression, query.warnings if query else [])

    def load_tasks(self) -> None:
        """Fill every column from the current store state."""
        state = self.app.store.get_state()  # pyrefly: ignore[missing-attribute]
        elevated = state.settings.elevated_mode
        for status, _title, tasks in self.app.board_service.load_columns(self._query):  # pyrefly: ignore[missing-attribute]
            column = self._column_by_status(status)
            if column is None:
                self.log.error(f"No column widget for status {status}")
                continue
            column.set_tasks(tasks, elevated=elevated)
        self._show_review_status(elevated)

    def refresh_board(self, focus_task_id: str | None = None) -> None:
        """Reload columns and re-apply focus once they are rebuilt."""
        self._restore = Cursor(self.cursor.column, self.cursor.row)
        self._follow_id = focus_task_id
        self.load_tasks()
        # Columns rebuild after their own refresh, so wait two cycles
        self.call_after_refresh(lambda: self.call_after_refresh(self._settle_focus))

    def follow_task(self, task_id: str) -> None:
        """Put focus on task_id after the pending refresh."""
        self._follow_id = task_id

    def _settle_focus(self) -> None:
        if self._follow_id is not None:
            found = self._locate(self._follow_id)
            self._follow_id = None
            if found is not None:
                self.cursor = found
                self._focus_cursor()
                return

        column_index = min(self._restore.column, len(self.column_ids) - 1)
        self.cursor = Cursor(column_index, self._clamp_row(column_index, self._restore.row))
        self._focus_cursor()

    def _locate(self, task_id: str) -> Cursor | None:
        for column_index in range(len(self.column_ids)):
            column = self._column_at(column_index)
            if column is None:
                continue
            for row, task in enumerate(column.tasks):
                if task.id == task_id:
                    return Cursor(column_index, row)
        return None

    # Navigation

    def navigate_column(self, delta: int) -> None:
        target = max(0, min(self.cursor.column + delta, len(self.column_ids) - 1))
        if target == self.cursor.column:
            return
        self.cursor = Cursor(target, self._clamp_row(target, self.cursor.row))
        self._focus_cursor()

    def navigate_task(self, delta: int) -> None:
        row = self._clamp_row(self.cursor.column, self.cursor.row + delta)
        if row != self.cursor.row:
            self.cursor.row = row
            self._focus_cursor()

    def navigate_to_task(self, index: int) -> None:
        """Focus row index of the current column. -1 means the last row."""
        column = self._column_at(self.cursor.column)
        if column is None or column.task_count == 0:
            return
        if index < 0:
            index = column.task_count - 1
        self.cursor.row = self._clamp_row(self.cursor.column, index)
        self._focus_cursor()

    def _clamp_row(self, column_index: int, row: int) -> int:
        column = self._column_at(column_index)
        if column is None or column.task_count == 0:
            return 0
        return max(0, min(row, column.task_count - 1))

    def _column_by_status(self, status: str) -> KanbanColumn | None:
        try:
            return self.query_one(f"#column-{status}", KanbanColumn)
        except NoMatches:
            return None

    def _column_at(self, index: int) -> KanbanColumn | None:
        if not 0 <= index < len(self.column_ids):
            return None
        return self._column_by_status(self.column_ids[index])

    def _focus_cursor(self) -> None:
        column = self._column_at(self.cursor.column)
        if column is not None:
            column.focus_task(self.cursor.row)

    def get_current_task(self) -> Task | None:
        column = self._column_at(self.cursor.column)
        return column.get_task(self.cursor.row) if column else None

    @property
    def current_column_status(self) -> str:
        index = self.cursor.column if 0 <= self.cursor.column < len(self.column_ids) else 0
        return self.column_ids[index]

    # Status lines

    def _show_query_status(self, expression: str, warnings: list[str]) -> None:
        try:
            line = self.query_one("#filter-status", Static)
        except NoMatches:
            return
        if not expression.strip():
            line.update("")
            line.display = False
            return
        text = f"[dim]Query:[/] {escape(expression)} [dim](Esc to clear)[/]"
        if warnings:
            text += "  [yellow]" + escape("; ".join(warnings)) + "[/]"
        line.update(text)
        line.display = True

    def _show_review_status(self, elevated: bool) -> None:
        try:
            line = self.query_one("#review-status", Static)
        except NoMatches:
            return
        line.display = elevated
        if not elevated:
            line.update("")
            return
        summary = self.app.review_service.summary(self.app.store.get_state())  # pyrefly: ignore[missing-attribute]
        average = "-" if summary.average is None else f"{summary.average:g}"
        line.update(
            f"[b]Review mode[/]  average {average}  "
            f"[dim]{summary.scored} scored, {summary.unscored} pending[/]"
        )
