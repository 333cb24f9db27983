"""Tests for integrity checks and the autofix batch."""

import math

import pytest

from conftest import build_state, build_task
from minikanban.models import BoardState
from minikanban.services import IntegrityService
from minikanban.store import BoardStore, Init, TaskPatch


@pytest.fixture
def service() -> IntegrityService:
    return IntegrityService(placeholder_title="Sin título (revisar)")


def open_store(state: BoardState) -> BoardStore:
    store = BoardStore(seed_demo=False)
    store.dispatch(Init(state))
    return store


class TestCheck:
    """Tests for detection."""

    def test_clean_board_has_no_issues(self, service: IntegrityService):
        state = build_state(build_task(id="a", tags=["ot"], estimate_minutes=30))
        assert service.check(state) == []

    def test_short_title(self, service: IntegrityService):
        (issue,) = service.check(build_state(build_task(title=" ab ")))
        assert issue.title == "Title too short"
        assert issue.fixable
        assert issue.patch == {"title": "Sin título (revisar)"}

    @pytest.mark.parametrize("estimate", [-5, math.nan, math.inf])
    def test_invalid_estimate(self, service: IntegrityService, estimate: float):
        (issue,) = service.check(build_state(build_task(estimate_minutes=estimate)))
        assert issue.title == "Invalid estimate"
        assert issue.patch == {"estimate_minutes": 0}

    def test_dirty_tags(self, service: IntegrityService):
        (issue,) = service.check(build_state(build_task(tags=[" ot", "", "plc"])))
        assert issue.title == "Tags need cleaning"
        assert issue.patch == {"tags": ["ot", "plc"]}

    def test_due_before_creation(self, service: IntegrityService):
        task = build_task(created_at="2026-02-01T00:00:00.000Z", due_at="2026-01-01T00:00:00.000Z")
        (issue,) = service.check(build_state(task))
        assert issue.title == "Due date before creation"
        assert issue.patch == {"due_at": None}

    def test_unparseable_due_is_not_flagged(self, service: IntegrityService):
        assert service.check(build_state(build_task(due_at="whenever"))) == []

    def test_check_is_read_only(self, service: IntegrityService):
        state = build_state(build_task(estimate_minutes=-1))
        service.check(state)
        assert state.tasks["t1"].estimate_minutes == -1


class TestAutofix:
    """Tests for building and applying the autofix batch."""

    def test_patches_merged_per_task(self, service: IntegrityService):
        state = build_state(
            build_task(id="a", title="ab", estimate_minutes=-5),
            build_task(id="b", tags=[""]),
        )
        patches = service.group_patches(service.check(state))
        assert patches == [
            TaskPatch("a", {"title": "Sin título (revisar)", "estimate_minutes": 0}),
            TaskPatch("b", {"tags": []}),
        ]

    def test_nothing_to_fix(self, service: IntegrityService):
        assert service.build_autofix([]) is None
        store = open_store(build_state(build_task()))
        assert service.fix_all(store) == 0
        assert store.get_state().audit == []

    def test_negative_estimate_fixed_with_one_update(self, service: IntegrityService):
        store = open_store(build_state(build_task(id="a", estimate_minutes=-5)))

        assert service.fix_all(store) == 1

        state = store.get_state()
        assert state.tasks["a"].estimate_minutes == 0
        assert len(state.audit) == 1
        event = state.audit[0]
        assert event.action == "UPDATE"
        assert event.diff.before == {"id": "a", "estimateMinutes": -5}
        assert event.diff.after == {"id": "a", "estimateMinutes": 0}

    def test_fix_all_clears_every_fixable_issue(self, service: IntegrityService):
        store = open_store(
            build_state(
                build_task(id="a", title="x", tags=[" y "]),
                build_task(id="b", estimate_minutes=math.nan, status="doing"),
            )
        )

        assert service.fix_all(store) == 2

        state = store.get_state()
        assert service.check(state) == []
        assert [e.task_id for e in state.audit] == ["a", "b"]
