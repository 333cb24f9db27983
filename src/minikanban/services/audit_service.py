"""Service for browsing and summarizing the audit log."""

from __future__ import annotations

from collections import Counter

from ..models import AuditAction, AuditEvent


class AuditService:
    """Filters and plain-text reports over audit events (newest first)."""

    TOP_TASKS = 5
    RECENT_EVENTS = 8
    MAX_FIELDS = 6

    def filter(
        self,
        events: list[AuditEvent],
        action: AuditAction | None = None,
        task_id: str = "",
    ) -> list[AuditEvent]:
        """Events matching an action and containing task_id, order kept."""
        needle = task_id.strip()
        result: list[AuditEvent] = []
        for event in events:
            if action is not None and event.action != action:
                continue
            if needle and needle not in event.task_id:
                continue
            result.append(event)
        return result

    def summarize(self, events: list[AuditEvent]) -> str:
        """
        Build a copyable report.

        Sections: time range, events per action, most modified tasks and
        the latest events with the fields they changed.
        """
        if not events:
            return "Audit log is empty."

        timestamps = sorted(e.timestamp for e in events)
        by_action = Counter(e.action for e in events)
        by_task = Counter(e.task_id for e in events)

        action_lines = [f"- {action}: {count}" for action, count in by_action.most_common()]
        task_lines = [
            f"- {task_id}: {count} events"
            for task_id, count in by_task.most_common(self.TOP_TASKS)
        ]
        recent_lines = [self._describe(e) for e in events[: self.RECENT_EVENTS]]

        return "\n".join(
            [
                "AUDIT REPORT",
                f"Range: {timestamps[0]} -> {timestamps[-1]}",
                "",
                "Events per action:",
                *action_lines,
                "",
                "Most modified tasks:",
                *task_lines,
                "",
                "Latest events:",
                *recent_lines,
            ]
        )

    def _describe(self, event: AuditEvent) -> str:
        fields = event.diff.changed_keys()[: self.MAX_FIELDS]
        changes = ", ".join(fields) or "-"
        return f"- [{event.timestamp}] {event.action} task={event.task_id} changes={changes}"
