"""Tests for audit filtering and the text report."""

import pytest

from minikanban.models import AuditDiff, AuditEvent
from minikanban.services import AuditService


def event(action: str, task_id: str, timestamp: str, **diff) -> AuditEvent:
    return AuditEvent(timestamp=timestamp, action=action, task_id=task_id, diff=AuditDiff(**diff))


@pytest.fixture
def events() -> list[AuditEvent]:
    # Newest first, as stored on the board
    return [
        event("MOVE", "task-a", "2026-01-03T00:00:00.000Z",
              before={"id": "task-a", "status": "todo"}, after={"id": "task-a", "status": "done"}),
        event("UPDATE", "task-b", "2026-01-02T00:00:00.000Z",
              before={"id": "task-b", "title": "x"}, after={"id": "task-b", "title": "xyz"}),
        event("CREATE", "task-b", "2026-01-01T12:00:00.000Z", after={"id": "task-b", "title": "x"}),
        event("CREATE", "task-a", "2026-01-01T00:00:00.000Z", after={"id": "task-a"}),
    ]


class TestFilter:
    def test_no_filters_keeps_all(self, events):
        assert AuditService().filter(events) == events

    def test_by_action(self, events):
        result = AuditService().filter(events, action="CREATE")
        assert [e.task_id for e in result] == ["task-b", "task-a"]

    def test_by_task_id_substring(self, events):
        result = AuditService().filter(events, task_id="  -b ")
        assert [e.action for e in result] == ["UPDATE", "CREATE"]

    def test_combined(self, events):
        assert AuditService().filter(events, action="MOVE", task_id="task-b") == []


class TestSummarize:
    def test_empty(self):
        assert AuditService().summarize([]) == "Audit log is empty."

    def test_report_sections(self, events):
        report = AuditService().summarize(events)
        lines = report.splitlines()

        assert lines[0] == "AUDIT REPORT"
        assert "Range: 2026-01-01T00:00:00.000Z -> 2026-01-03T00:00:00.000Z" in lines
        assert "- CREATE: 2" in lines
        assert "- task-a: 2 events" in lines
        assert "- [2026-01-03T00:00:00.000Z] MOVE task=task-a changes=status" in lines

    def test_actions_sorted_by_count(self, events):
        lines = AuditService().summarize(events).splitlines()
        start = lines.index("Events per action:") + 1
        assert lines[start] == "- CREATE: 2"

    def test_event_without_changes(self):
        report = AuditService().summarize([event("UPDATE", "a", "2026-01-01T00:00:00.000Z",
                                                 before={"id": "a"}, after={"id": "a"})])
        assert "changes=-" in report

    def test_recent_events_limited(self):
        many = [event("UPDATE", f"t{i}", f"2026-01-{i + 1:02d}T00:00:00.000Z") for i in range(12)]
        lines = AuditService().summarize(many).splitlines()
        latest = lines[lines.index("Latest events:") + 1 :]
        assert len(latest) == AuditService.RECENT_EVENTS
