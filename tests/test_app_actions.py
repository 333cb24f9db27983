"""Tests for app action handlers.

Services are mocked; these tests check what the app dispatches and which
feedback (notifications, dialogs) it shows.
"""

from contextlib import contextmanager
from unittest.mock import MagicMock, PropertyMock, patch

import pytest

from conftest import build_state, build_task
from minikanban.models import TaskInput
from minikanban.services import ImportFailure, ImportSuccess, QueryService
from minikanban.store import ImportState


@pytest.fixture
def app():
    from minikanban.app import MinikanbanApp

    app = MinikanbanApp.__new__(MinikanbanApp)
    app.notify = MagicMock()
    app.push_screen = MagicMock()
    app.store = MagicMock()
    app.store.get_state.return_value = build_state(build_task(id="a", title="Tarea A"))
    app.config_service = MagicMock()
    app.task_service = MagicMock()
    app.board_service = MagicMock()
    app.integrity_service = MagicMock()
    app.transfer_service = MagicMock()
    app.audit_service = MagicMock()
    app.review_service = MagicMock()
    app.query_service = QueryService()
    return app


@pytest.fixture
def screen():
    screen = MagicMock()
    screen.current_column_status = "todo"
    screen.get_current_task.return_value = build_task(id="a", title="Tarea A")
    return screen


@contextmanager
def on_board(app, screen):
    """Make the (mocked) board screen the active screen."""
    from minikanban.app import MinikanbanApp

    with (
        patch.object(MinikanbanApp, "screen", new_callable=PropertyMock, return_value=screen),
        patch("minikanban.app.isinstance", return_value=True),
        patch.object(app, "suspend"),
    ):
        yield


class TestNewTask:
    def test_creates_task_and_follows_it(self, app, screen):
        created = build_task(id="new", title="Nueva tarea")
        app.task_service.edit_input.return_value = TaskInput(title="Nueva tarea")
        app.task_service.create_task.return_value = created

        with on_board(app, screen):
            app.action_new_task()

        app.task_service.create_task.assert_called_once_with(
            "todo", TaskInput(title="Nueva tarea")
        )
        screen.follow_task.assert_called_once_with("new")
        app.notify.assert_called_once_with("Task created", timeout=2)

    def test_editor_failure_creates_nothing(self, app, screen):
        app.task_service.edit_input.return_value = None

        with on_board(app, screen):
            app.action_new_task()

        app.task_service.create_task.assert_not_called()
        assert app.notify.call_args.kwargs["severity"] == "warning"

    def test_short_title_rejected(self, app, screen):
        app.task_service.edit_input.return_value = TaskInput(title=" ab ")

        with on_board(app, screen):
            app.action_new_task()

        app.task_service.create_task.assert_not_called()
        assert "at least 3 characters" in app.notify.call_args.args[0]


class TestEditAndDelete:
    def test_edit_updates_task(self, app, screen):
        task = screen.get_current_task.return_value
        app.task_service.get_task.return_value = task
        edited = TaskInput(title="Tarea A editada")
        app.task_service.edit_input.return_value = edited

        with on_board(app, screen):
            app.action_edit_task()

        app.task_service.edit_input.assert_called_once_with(TaskInput.from_task(task), False)
        app.task_service.update_task.assert_called_once_with("a", edited)
        screen.follow_task.assert_called_once_with("a")

    def test_delete_after_confirmation(self, app, screen):
        app.task_service.delete_task.return_value = True

        with on_board(app, screen):
            app._handle_delete_confirm(True)

        app.task_service.delete_task.assert_called_once_with("a")
        app.notify.assert_called_once_with("Task deleted", timeout=2)

    def test_delete_cancelled(self, app, screen):
        app._handle_delete_confirm(False)
        app.task_service.delete_task.assert_not_called()


class TestBoardActions:
    def test_import_failure_shows_errors(self, app):
        app.transfer_service.read_import_file.return_value = ImportFailure(
            errors=["version: Input should be 1"]
        )

        with patch("minikanban.app.MessageModal") as modal:
            app._handle_import_path("backup.json")

        app.store.dispatch.assert_not_called()
        modal.assert_called_once_with(
            "Import failed", ["version: Input should be 1"], is_error=True
        )
        app.push_screen.assert_called_once_with(modal.return_value)

    def test_import_success_dispatches(self, app):
        state = build_state(build_task(id="z"))
        app.transfer_service.read_import_file.return_value = ImportSuccess(state=state)

        app._handle_import_path("backup.json")

        app.store.dispatch.assert_called_once_with(ImportState(state))
        app.notify.assert_called_once_with("Imported 1 task(s)", timeout=3)

    def test_import_cancelled(self, app):
        app._handle_import_path(None)
        app.transfer_service.read_import_file.assert_not_called()

    def test_integrity_dialog(self, app):
        app.integrity_service.check.return_value = []
        with patch("minikanban.app.IntegrityModal") as modal:
            app.action_check_integrity()
        modal.assert_called_once_with([])
        assert app.push_screen.call_args.kwargs["callback"] == app._handle_integrity_result

    def test_integrity_fix(self, app):
        app.integrity_service.fix_all.return_value = 2
        app._handle_integrity_result(True)
        app.integrity_service.fix_all.assert_called_once_with(app.store)
        app.notify.assert_called_once_with("Fixed 2 task(s)", timeout=2)

    def test_integrity_closed_without_fix(self, app):
        app._handle_integrity_result(False)
        app.integrity_service.fix_all.assert_not_called()

    def test_export_failure_notifies(self, app):
        app.transfer_service.write_export.side_effect = OSError("disk full")
        app.action_export_board()
        assert app.notify.call_args.kwargs["severity"] == "error"

    def test_toggle_elevated(self, app):
        app.board_service.toggle_elevated_mode.return_value = True
        app.action_toggle_elevated()
        app.notify.assert_called_once_with("Review mode on", timeout=2)

    def test_audit_report(self, app):
        app.audit_service.summarize.return_value = "AUDIT REPORT\nRange: a -> b"
        with patch("minikanban.app.MessageModal") as modal:
            app.action_audit_report()
        modal.assert_called_once_with("Audit report", ["AUDIT REPORT", "Range: a -> b"])


class TestMovesAndQuery:
    def test_move_right_follows_task(self, app, screen):
        app.board_service.move_task_right.return_value = build_task(id="a", status="doing")
        app.config_service.get_board_config.return_value.column_title.return_value = "En curso"

        with on_board(app, screen):
            app.action_move_task(1)

        app.board_service.move_task_right.assert_called_once_with("a")
        screen.follow_task.assert_called_once_with("a")
        app.notify.assert_called_once_with("Moved to En curso", timeout=2)

    def test_move_at_edge_is_silent(self, app, screen):
        app.board_service.move_task_left.return_value = build_task(id="a", status="todo")

        with on_board(app, screen):
            app.action_move_task(-1)

        screen.follow_task.assert_not_called()
        app.notify.assert_not_called()

    def test_reorder_follows_task(self, app, screen):
        app.board_service.reorder_task.return_value = True

        with on_board(app, screen):
            app.action_reorder_task(-1)

        app.board_service.reorder_task.assert_called_once_with("a", -1)
        screen.follow_task.assert_called_once_with("a")

    def test_submitted_query_is_applied(self, app, screen):
        event = MagicMock()
        event.input.id = "query-input"
        event.value = "p:high bomba"

        with on_board(app, screen):
            app.on_input_submitted(event)

        query, expression = screen.set_query.call_args.args
        assert query.priority == "high"
        assert query.text == "bomba"
        assert expression == "p:high bomba"
        screen.refresh_board.assert_called_once()
        screen.query_one.return_value.remember.assert_called_once_with("p:high bomba")

    def test_blank_query_clears_filter(self, app, screen):
        event = MagicMock()
        event.input.id = "query-input"
        event.value = "   "

        with on_board(app, screen):
            app.on_input_submitted(event)

        screen.set_query.assert_called_once_with(None)
