"""Tests for the pure board reducer."""

import pytest

from conftest import build_state, build_task
from minikanban.models import STATUSES, BoardState, TaskInput
from minikanban.store import (
    CreateTask,
    DeleteTask,
    ImportState,
    Init,
    IntegrityAutofix,
    MoveTask,
    SetMode,
    TaskPatch,
    UpdateTask,
    reduce,
)
from minikanban.store.reducer import insert_at


def assert_consistent(state: BoardState) -> None:
    """Every listed id exists, sits in its own status column and appears once."""
    listed = state.order.all_ids()
    assert len(listed) == len(set(listed))
    for status in STATUSES:
        for task_id in state.order.column(status):
            assert state.tasks[task_id].status == status


@pytest.fixture
def board() -> BoardState:
    return build_state(
        build_task(id="a", title="Tarea A"),
        build_task(id="b", title="Tarea B"),
        build_task(id="c", title="Tarea C", status="doing"),
    )


class TestCreate:
    """Tests for CreateTask."""

    @pytest.mark.parametrize("title", ["", "ab", "  x  \n "])
    def test_short_title_is_noop(self, board: BoardState, title: str):
        assert reduce(board, CreateTask("todo", TaskInput(title=title))) is board

    def test_inserts_at_front_of_column(self, board: BoardState):
        state = reduce(board, CreateTask("todo", TaskInput(title="Nueva tarea")))
        new_id = state.order.todo[0]
        assert state.order.todo[1:] == ["a", "b"]
        assert state.tasks[new_id].title == "Nueva tarea"
        assert state.tasks[new_id].status == "todo"
        assert_consistent(state)

    def test_normalizes_input(self, board: BoardState):
        task_input = TaskInput(
            title="  Revisar   bomba ",
            tags=[" ot ", ""],
            estimate_minutes=-10,
            rubric_score=15,
        )
        state = reduce(board, CreateTask("doing", task_input))
        task = state.tasks[state.order.doing[0]]
        assert task.title == "Revisar bomba"
        assert task.tags == ["ot"]
        assert task.estimate_minutes == 0
        assert task.rubric_score == 10
        assert task.created_at.endswith("Z")

    def test_records_create_event_with_full_task(self, board: BoardState):
        state = reduce(board, CreateTask("todo", TaskInput(title="Nueva tarea")))
        event = state.audit[0]
        assert event.action == "CREATE"
        assert event.task_id == state.order.todo[0]
        assert event.diff.before is None
        assert event.diff.after["title"] == "Nueva tarea"
        assert event.diff.after["status"] == "todo"
        assert "estimateMinutes" in event.diff.after

    def test_does_not_mutate_input_state(self, board: BoardState):
        reduce(board, CreateTask("todo", TaskInput(title="Nueva tarea")))
        assert len(board.tasks) == 3
        assert board.order.todo == ["a", "b"]
        assert board.audit == []


class TestUpdate:
    """Tests for UpdateTask."""

    def test_diff_holds_only_changed_fields(self, board: BoardState):
        task_input = TaskInput.from_task(board.tasks["a"]).model_copy(
            update={"title": "Tarea A revisada"}
        )
        state = reduce(board, UpdateTask("a", task_input))
        event = state.audit[0]
        assert event.action == "UPDATE"
        assert event.diff.before == {"id": "a", "title": "Tarea A"}
        assert event.diff.after == {"id": "a", "title": "Tarea A revisada"}

    def test_keeps_identity_fields(self, board: BoardState):
        state = reduce(board, UpdateTask("c", TaskInput(title="Otra", priority="high")))
        task = state.tasks["c"]
        assert task.status == "doing"
        assert task.created_at == board.tasks["c"].created_at
        assert task.priority == "high"

    def test_same_tags_are_not_a_change(self):
        board = build_state(build_task(id="a", tags=["x", "y"]))
        task_input = TaskInput.from_task(board.tasks["a"]).model_copy(update={"priority": "low"})
        state = reduce(board, UpdateTask("a", task_input))
        assert "tags" not in state.audit[0].diff.after

    def test_unchanged_update_still_audited(self, board: BoardState):
        state = reduce(board, UpdateTask("a", TaskInput.from_task(board.tasks["a"])))
        assert state.audit[0].diff.before == {"id": "a"}

    def test_unknown_task_is_noop(self, board: BoardState):
        assert reduce(board, UpdateTask("zzz", TaskInput(title="Nada"))) is board

    def test_short_title_is_noop(self, board: BoardState):
        assert reduce(board, UpdateTask("a", TaskInput(title=" ab "))) is board


class TestDelete:
    """Tests for DeleteTask."""

    def test_removes_task_and_order_entry(self, board: BoardState):
        state = reduce(board, DeleteTask("a"))
        assert "a" not in state.tasks
        assert state.order.todo == ["b"]
        assert_consistent(state)

    def test_records_full_snapshot_before(self, board: BoardState):
        state = reduce(board, DeleteTask("a"))
        event = state.audit[0]
        assert event.action == "DELETE"
        assert event.diff.before["title"] == "Tarea A"
        assert event.diff.after is None

    def test_unknown_task_is_noop(self, board: BoardState):
        assert reduce(board, DeleteTask("zzz")) is board


class TestMove:
    """Tests for MoveTask."""

    def test_cross_column_move_to_top(self, board: BoardState):
        state = reduce(board, MoveTask("a", "doing"))
        assert state.tasks["a"].status == "doing"
        assert state.order.doing == ["a", "c"]
        assert state.order.todo == ["b"]
        assert_consistent(state)

    def test_cross_column_move_audited(self, board: BoardState):
        state = reduce(board, MoveTask("a", "done"))
        event = state.audit[0]
        assert event.action == "MOVE"
        assert event.diff.before == {"id": "a", "status": "todo"}
        assert event.diff.after == {"id": "a", "status": "done"}

    def test_index_is_clamped(self, board: BoardState):
        state = reduce(board, MoveTask("a", "doing", index=99))
        assert state.order.doing == ["c", "a"]

    def test_negative_index_means_top(self, board: BoardState):
        state = reduce(board, MoveTask("a", "doing", index=-4))
        assert state.order.doing == ["a", "c"]

    def test_same_column_reorder_not_audited(self, board: BoardState):
        state = reduce(board, MoveTask("a", "todo", index=1))
        assert state.order.todo == ["b", "a"]
        assert state.audit == []
        assert state.tasks == board.tasks

    def test_unknown_task_is_noop(self, board: BoardState):
        assert reduce(board, MoveTask("zzz", "done")) is board


class TestAutofix:
    """Tests for IntegrityAutofix."""

    def test_batch_order_matches_updates(self, board: BoardState):
        command = IntegrityAutofix(
            updates=(
                TaskPatch("b", {"estimate_minutes": 0, "title": "Tarea B fija"}),
                TaskPatch("a", {"tags": ["x"]}),
            )
        )
        state = reduce(board, command)
        assert [e.task_id for e in state.audit[:2]] == ["b", "a"]
        assert all(e.action == "UPDATE" for e in state.audit[:2])
        assert state.tasks["b"].title == "Tarea B fija"
        assert state.tasks["a"].tags == ["x"]

    def test_batch_goes_on_top_of_history(self, board: BoardState):
        board = reduce(board, DeleteTask("c"))
        state = reduce(board, IntegrityAutofix(updates=(TaskPatch("a", {"tags": ["x"]}),)))
        assert [e.action for e in state.audit] == ["UPDATE", "DELETE"]

    def test_protected_fields_ignored(self, board: BoardState):
        patch = {"status": "done", "id": "hijack", "title": "Nuevo titulo"}
        state = reduce(board, IntegrityAutofix(updates=(TaskPatch("a", patch),)))
        task = state.tasks["a"]
        assert task.id == "a"
        assert task.status == "todo"
        assert task.title == "Nuevo titulo"
        assert_consistent(state)

    def test_unknown_tasks_only_is_noop(self, board: BoardState):
        command = IntegrityAutofix(updates=(TaskPatch("zzz", {"title": "Nada"}),))
        assert reduce(board, command) is board


class TestOtherCommands:
    """Tests for Init, ImportState, SetMode and unknown commands."""

    def test_init_and_import_replace_state(self, board: BoardState):
        other = BoardState.default()
        assert reduce(board, Init(other)) is other
        assert reduce(board, ImportState(other)) is other

    def test_set_mode_not_audited(self, board: BoardState):
        state = reduce(board, SetMode(True))
        assert state.settings.elevated_mode is True
        assert state.audit == []

    def test_unknown_command_returns_same_state(self, board: BoardState):
        assert reduce(board, object()) is board

    def test_sequence_keeps_board_consistent(self, board: BoardState):
        state = reduce(board, CreateTask("done", TaskInput(title="Cerrar orden")))
        new_id = state.order.done[0]
        for command in (
            MoveTask("a", "doing"),
            MoveTask(new_id, "todo", index=1),
            DeleteTask("b"),
            MoveTask("c", "done"),
            MoveTask("a", "doing", index=5),
        ):
            state = reduce(state, command)
            assert_consistent(state)
        assert set(state.order.all_ids()) == set(state.tasks)


class TestInsertAt:
    def test_none_inserts_at_top(self):
        assert insert_at(["a", "b"], "x", None) == ["x", "a", "b"]

    def test_middle(self):
        assert insert_at(["a", "b"], "x", 1) == ["a", "x", "b"]
