"""Service for parsing and applying board queries.

Query syntax (whitespace separated, order does not matter):

- ``tag:<value>``: task has a tag containing the value
- ``p:low`` / ``p:medium`` / ``p:high``: priority equals the value
- ``due:overdue``: due date is in the past
- ``due:week``: due date is within the next seven days
- ``est:<op><minutes>``: estimate comparison, op is one of ``< <= > >= =``
  and defaults to ``=``
- anything else: free text searched in title and description

Tag and text matching ignore case and accents. Invalid tokens never fail
the parse; they are reported in ``Query.warnings`` and ignored.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Literal

from ..models import PRIORITIES, BoardState, Priority, Status, Task
from ..utils import normalize_search, now_utc, parse_iso

logger = logging.getLogger(__name__)

DueFilter = Literal["overdue", "week"]
EstimateOp = Literal["<", "<=", ">", ">=", "="]

DUE_FILTERS: tuple[DueFilter, ...] = ("overdue", "week")
DUE_WEEK = timedelta(days=7)


@dataclass(frozen=True)
class EstimateFilter:
    """Comparison against ``estimate_minutes``."""

    op: EstimateOp
    value: int

    def matches(self, minutes: float) -> bool:
        """Compare minutes against the filter; non-finite values never match."""
        if not math.isfinite(minutes):
            return False
        if self.op == "<":
            return minutes < self.value
        if self.op == "<=":
            return minutes <= self.value
        if self.op == ">":
            return minutes > self.value
        if self.op == ">=":
            return minutes >= self.value
        return minutes == self.value


@dataclass
class Query:
    """Represents a parsed query expression."""

    text: str = ""  # Normalized free text
    tags: list[str] = field(default_factory=list)  # Normalized tag fragments
    priority: Priority | None = None
    due: DueFilter | None = None
    estimate: EstimateFilter | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """True when no filter is active."""
        return not (self.text or self.tags or self.priority or self.due or self.estimate)


class QueryService:
    """Service for parsing and applying queries to tasks."""

    # est:<op><digits>
    ESTIMATE_PATTERN = re.compile(r"^(<=|>=|<|>|=)?\s*(\d+)$", re.ASCII)

    def parse(self, expression: str) -> Query:
        """Parse a query expression. Never raises."""
        q = Query()
        text_parts: list[str] = []

        for token in expression.split():
            if token.startswith("tag:"):
                value = token[4:].strip()
                if not value:
                    q.warnings.append(f'empty tag in "{token}"')
                else:
                    q.tags.append(normalize_search(value))

            elif token.startswith("p:"):
                value = token[2:].strip().lower()
                if value in PRIORITIES:
                    q.priority = value  # type: ignore[assignment]
                else:
                    q.warnings.append(f'invalid priority in "{token}"')

            elif token.startswith("due:"):
                value = token[4:].strip().lower()
                if value in DUE_FILTERS:
                    q.due = value  # type: ignore[assignment]
                else:
                    q.warnings.append(f'invalid due filter in "{token}"')

            elif token.startswith("est:"):
                match = self.ESTIMATE_PATTERN.match(token[4:].strip())
                if match is None:
                    q.warnings.append(f'invalid estimate in "{token}"')
                else:
                    op = match.group(1) or "="
                    q.estimate = EstimateFilter(op=op, value=int(match.group(2)))  # type: ignore[arg-type]

            else:
                text_parts.append(token)

        q.text = normalize_search(" ".join(text_parts))
        return q

    def apply(self, tasks: list[Task], query: Query, now: datetime | None = None) -> list[Task]:
        """Filter tasks, keeping their input order."""
        now = now or now_utc()
        return [task for task in tasks if self._matches(task, query, now)]

    def sort_by_order(self, tasks: list[Task], order_ids: list[str]) -> list[Task]:
        """
        Sort tasks by their position in order_ids.

        Stable: tasks missing from order_ids go last, in their original order.
        """
        positions = {task_id: idx for idx, task_id in enumerate(order_ids)}
        unknown = len(order_ids)
        return sorted(tasks, key=lambda t: positions.get(t.id, unknown))

    def tasks_in_status(self, tasks: list[Task], status: Status) -> list[Task]:
        """Tasks whose status matches."""
        return [t for t in tasks if t.status == status]

    def column_view(
        self,
        state: BoardState,
        status: Status,
        query: Query | None = None,
        now: datetime | None = None,
    ) -> list[Task]:
        """Filtered tasks of one column, in board order."""
        tasks = self.tasks_in_status(state.task_list(), status)
        if query is not None and not query.is_empty:
            tasks = self.apply(tasks, query, now)
        return self.sort_by_order(tasks, state.order.column(status))

    def _matches(self, task: Task, q: Query, now: datetime) -> bool:
        """Check if a task matches every active filter."""
        if q.text:
            haystack = normalize_search(f"{task.title} {task.description or ''}")
            if q.text not in haystack:
                return False

        if q.tags:
            task_tags = [normalize_search(t) for t in task.tags]
            for tag in q.tags:
                if not any(tag in task_tag for task_tag in task_tags):
                    return False

        if q.priority and task.priority != q.priority:
            return False

        if q.due:
            due = parse_iso(task.due_at)
            if due is None:
                return False
            if q.due == "overdue" and not due < now:
                return False
            if q.due == "week" and not (now <= due <= now + DUE_WEEK):
                return False

        if q.estimate and not q.estimate.matches(task.estimate_minutes):
            return False

        return True
