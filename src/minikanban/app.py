"""minikanban TUI application."""

from pathlib import Path

from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen

from .config import Settings
from .models import BoardState, Task, TaskInput
from .repositories import FilesystemRepository
from .services import (
    AuditService,
    BoardService,
    ConfigService,
    IntegrityService,
    ReviewService,
    TaskService,
    TransferService,
)
from .store import BoardStore, ImportState
from .ui.screens.board import BoardScreen
from .ui.screens.help import HelpScreen
from .ui.widgets import (
    CommandBar,
    ConfirmModal,
    IntegrityModal,
    MessageModal,
    PathPromptModal,
    TaskPreviewModal,
)


class MinikanbanApp(App):
    """minikanban - terminal task board."""

    TITLE = "minikanban"

    CSS_PATH = "ui/styles.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("?", "help", "Help"),
        # Focus movement, vim keys and arrows
        Binding("h,left", "nav_column(-1)", "← Column", show=False),
        Binding("l,right", "nav_column(1)", "→ Column", show=False),
        Binding("k,up", "nav_task(-1)", "↑ Task", show=False),
        Binding("j,down", "nav_task(1)", "↓ Task", show=False),
        Binding("g,home", "nav_jump(0)", "First", show=False),
        Binding("G,end", "nav_jump(-1)", "Last", show=False),
        # Task changes
        Binding("n", "new_task", "New"),
        Binding("e", "edit_task", "Edit"),
        Binding("enter", "preview_task", "Preview", show=False),
        Binding("H,shift+left", "move_task(-1)", "Move ←", show=False),
        Binding("L,shift+right", "move_task(1)", "Move →", show=False),
        Binding("K,shift+up", "reorder_task(-1)", "Move ↑", show=False),
        Binding("J,shift+down", "reorder_task(1)", "Move ↓", show=False),
        Binding("d", "delete_task", "Delete", show=False),
        # Whole board
        Binding("c", "check_integrity", "Check"),
        Binding("x", "export_board", "Export"),
        Binding("i", "import_board", "Import"),
        Binding("A", "audit_report", "Audit", show=False),
        Binding("m", "toggle_elevated", "Review mode"),
        Binding("R", "review_summary", "Review", show=False),
        Binding("/", "open_query", "Query"),
        Binding("escape", "escape", "Back", show=False, priority=True),
    ]

    SCREENS = {
        "board": BoardScreen,
    }

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._unsubscribe = None
        self._init_services()

    def _init_services(self) -> None:
        """Wire the store, repository and services together."""
        self.config_service = ConfigService(self.settings.data_dir)
        board_config = self.config_service.get_board_config()

        self.repository = FilesystemRepository(self.settings.data_dir)
        self.store = BoardStore(self.repository, seed_demo=board_config.seed_demo)

        self.task_service = TaskService(self.store, self.settings.editor)
        self.board_service = BoardService(self.store, self.config_service)
        self.query_service = self.board_service.query_service
        self.integrity_service = IntegrityService(board_config.placeholder_title)
        self.transfer_service = TransferService()
        self.audit_service = AuditService()
        self.review_service = ReviewService()

    def on_mount(self) -> None:
        self.repository.ensure_directory()
        self.store.open()
        self._unsubscribe = self.store.subscribe(self._on_state_change)
        self.push_screen("board")

        if self.config_service.has_config_error:
            self.notify(
                f"{self.config_service.config_error} (using defaults)",
                severity="warning",
                timeout=5,
            )

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_state_change(self, _state: BoardState) -> None:
        # The board may sit under a modal, so look through the whole stack
        for screen in self.screen_stack:
            if isinstance(screen, BoardScreen):
                screen.refresh_board()
                return

    @property
    def elevated(self) -> bool:
        """Whether reviewer fields are shown and editable."""
        return self.store.get_state().settings.elevated_mode

    def _board(self) -> BoardScreen | None:
        """The active screen when it is the board."""
        screen = self.screen
        return screen if isinstance(screen, BoardScreen) else None

    def _focused(self) -> tuple[BoardScreen, Task] | None:
        """Board screen and its focused task, when both exist."""
        screen = self._board()
        if screen is None:
            return None
        task = screen.get_current_task()
        return (screen, task) if task is not None else None

    def action_help(self) -> None:
        self.push_screen(HelpScreen())

    def action_nav_column(self, delta: int) -> None:
        screen = self._board()
        if screen is not None:
            screen.navigate_column(delta)

    def action_nav_task(self, delta: int) -> None:
        screen = self._board()
        if screen is not None:
            screen.navigate_task(delta)

    def action_nav_jump(self, index: int) -> None:
        """Focus the first (0) or last (-1) task of the column."""
        screen = self._board()
        if screen is not None:
            screen.navigate_to_task(index)

    # Task actions

    def action_new_task(self) -> None:
        """Create a task at the top of the focused column from the editor."""
        screen = self._board()
        if screen is None:
            return

        with self.suspend():
            task_input = self.task_service.edit_input(TaskInput(title=""), self.elevated)

        if not self._check_input(task_input, "Task not created"):
            return

        task = self.task_service.create_task(screen.current_column_status, task_input)
        screen.follow_task(task.id)
        self.notify("Task created", timeout=2)

    def action_edit_task(self) -> None:
        """Edit the focused task in the external editor."""
        focused = self._focused()
        if focused is None:
            return
        screen, current = focused

        task = self.task_service.get_task(current.id)
        if task is None:
            return

        with self.suspend():
            task_input = self.task_service.edit_input(TaskInput.from_task(task), self.elevated)

        if not self._check_input(task_input, "Task not updated"):
            return

        self.task_service.update_task(task.id, task_input)
        screen.follow_task(task.id)

    def _check_input(self, task_input: TaskInput | None, failure: str) -> bool:
        """Notify and return False when editor output can't be saved."""
        if task_input is None:
            self.notify(f"{failure}: editor failed or invalid fields", severity="warning")
            return False
        problem = task_input.title_error()
        if problem is not None:
            self.notify(f"{failure}: {problem}", severity="warning")
            return False
        return True

    def action_preview_task(self) -> None:
        focused = self._focused()
        if focused is None:
            return
        _screen, task = focused

        content = self.task_service.format_for_editing(TaskInput.from_task(task), self.elevated)
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            TaskPreviewModal(task, content),
            callback=self._handle_preview_result,
        )

    def _handle_preview_result(self, edit_requested: bool) -> None:
        if edit_requested:
            self.action_edit_task()

    def action_move_task(self, direction: int) -> None:
        """Move the focused task one column left (-1) or right (1)."""
        focused = self._focused()
        if focused is None:
            return
        screen, task = focused

        if direction < 0:
            result = self.board_service.move_task_left(task.id)
        else:
            result = self.board_service.move_task_right(task.id)
        if result and result.status != task.status:
            screen.follow_task(task.id)
            title = self.config_service.get_board_config().column_title(result.status)
            self.notify(f"Moved to {title}", timeout=2)

    def action_reorder_task(self, delta: int) -> None:
        """Move the focused task up or down inside its column."""
        focused = self._focused()
        if focused is None:
            return
        screen, task = focused

        if self.board_service.reorder_task(task.id, delta):
            screen.follow_task(task.id)

    def action_delete_task(self) -> None:
        focused = self._focused()
        if focused is None:
            return
        _screen, task = focused

        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            ConfirmModal(
                f"Delete '{task.title}'?",
                detail="The full task is kept in the audit log.",
                confirm_label="Delete",
            ),
            callback=self._handle_delete_confirm,
        )

    def _handle_delete_confirm(self, confirmed: bool) -> None:
        if not confirmed:
            return
        focused = self._focused()
        if focused and self.task_service.delete_task(focused[1].id):
            self.notify("Task deleted", timeout=2)

    # Board actions

    def action_toggle_elevated(self) -> None:
        """Toggle elevated review mode."""
        value = self.board_service.toggle_elevated_mode()
        self.notify(f"Review mode {'on' if value else 'off'}", timeout=2)

    def action_review_summary(self) -> None:
        """Show rubric score summary."""
        summary = self.review_service.summary(self.store.get_state())
        average = "-" if summary.average is None else f"{summary.average:g}"
        lines = [
            f"Average score: {average}",
            f"Scored: {summary.scored}",
            f"Pending: {summary.unscored}",
        ]
        if summary.pending_titles:
            lines.append("")
            lines.append("Still to evaluate:")
            lines.extend(f"- {title}" for title in summary.pending_titles)
        self.push_screen(MessageModal("Review summary", lines))

    def action_check_integrity(self) -> None:
        """Show integrity issues with the autofix option."""
        issues = self.integrity_service.check(self.store.get_state())
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            IntegrityModal(issues),
            callback=self._handle_integrity_result,
        )

    def _handle_integrity_result(self, fix: bool) -> None:
        if not fix:
            return
        count = self.integrity_service.fix_all(self.store)
        self.notify(f"Fixed {count} task(s)", timeout=2)

    def action_export_board(self) -> None:
        """Export the board into the current directory."""
        try:
            path = self.transfer_service.write_export(self.store.get_state(), Path.cwd())
        except OSError as e:
            self.notify(f"Export failed: {e}", severity="error")
            return
        self.notify(f"Exported to {path.name}", timeout=3)

    def action_import_board(self) -> None:
        """Ask for a file and replace the board with it."""
        self.push_screen(  # pyrefly: ignore[no-matching-overload]
            PathPromptModal("Import board from JSON file:", "kanban-export-YYYY-MM-DD.json"),
            callback=self._handle_import_path,
        )

    def _handle_import_path(self, path: str | None) -> None:
        if not path:
            return

        result = self.transfer_service.read_import_file(
            Path(path).expanduser(), self.store.get_state().audit
        )
        if not result.ok:
            self.push_screen(MessageModal("Import failed", result.errors, is_error=True))
            return

        self.store.dispatch(ImportState(result.state))
        message = f"Imported {len(result.state.tasks)} task(s)"
        if result.appended:
            message += f", repaired {len(result.appended)} id(s)"
        self.notify(message, timeout=3)

    def action_audit_report(self) -> None:
        """Show the audit report."""
        report = self.audit_service.summarize(self.store.get_state().audit)
        self.push_screen(MessageModal("Audit report", report.splitlines()))

    # Query actions

    def action_open_query(self) -> None:
        screen = self._board()
        if screen is not None:
            screen.query_one(CommandBar).open()

    def action_escape(self) -> None:
        """Close a modal, then the query bar, then clear the active query."""
        if isinstance(self.screen, ModalScreen):
            self.screen.dismiss()
            return

        screen = self._board()
        if screen is None:
            return

        command_bar = screen.query_one(CommandBar)
        if command_bar.is_open:
            command_bar.close()
        elif command_bar.expression:
            command_bar.clear()
            self._apply_query(screen, "")

    def on_input_submitted(self, event) -> None:
        """Apply the expression typed in the query bar."""
        screen = self._board()
        if screen is None or event.input.id != "query-input":
            return
        command_bar = screen.query_one(CommandBar)
        command_bar.remember(event.value)
        command_bar.close()
        self._apply_query(screen, event.value)

    def _apply_query(self, screen: BoardScreen, expression: str) -> None:
        if expression.strip():
            screen.set_query(self.query_service.parse(expression), expression)
        else:
            screen.set_query(None)
        screen.refresh_board()


def run(settings: Settings | None = None) -> None:
    """Run the minikanban application."""
    app = MinikanbanApp(settings)
    app.run()
