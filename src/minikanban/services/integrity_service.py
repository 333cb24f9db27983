"""Service for detecting and repairing inconsistent task data."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..models import MIN_TITLE_LENGTH, BoardState, Task
from ..models.board_config import DEFAULT_PLACEHOLDER_TITLE
from ..models.task import clean_tags
from ..store import IntegrityAutofix, TaskPatch
from ..utils import parse_iso, safe_trim

if TYPE_CHECKING:
    from ..store import BoardStore

logger = logging.getLogger(__name__)


@dataclass
class IntegrityIssue:
    """A problem found on one task, with an optional fix."""

    task_id: str
    title: str  # Short issue label
    detail: str
    fixable: bool = False
    patch: dict[str, Any] = field(default_factory=dict)  # Python field names


class IntegrityService:
    """Read-only scan over board tasks plus the one-shot autofix."""

    def __init__(self, placeholder_title: str = DEFAULT_PLACEHOLDER_TITLE) -> None:
        self.placeholder_title = placeholder_title

    def check(self, state: BoardState) -> list[IntegrityIssue]:
        """Scan every task and list the issues found."""
        issues: list[IntegrityIssue] = []
        for task in state.task_list():
            issues.extend(self.check_task(task))
        return issues

    def check_task(self, task: Task) -> list[IntegrityIssue]:
        """Issues for a single task."""
        issues: list[IntegrityIssue] = []

        if len(safe_trim(task.title)) < MIN_TITLE_LENGTH:
            issues.append(
                IntegrityIssue(
                    task_id=task.id,
                    title="Title too short",
                    detail=f"“{task.title}”",
                    fixable=True,
                    patch={"title": self.placeholder_title},
                )
            )

        estimate = task.estimate_minutes
        if not math.isfinite(estimate) or estimate < 0:
            issues.append(
                IntegrityIssue(
                    task_id=task.id,
                    title="Invalid estimate",
                    detail=f"estimateMinutes={estimate}",
                    fixable=True,
                    patch={"estimate_minutes": 0},
                )
            )

        cleaned = clean_tags(task.tags)
        if cleaned != task.tags:
            issues.append(
                IntegrityIssue(
                    task_id=task.id,
                    title="Tags need cleaning",
                    detail=f"tags=[{', '.join(task.tags)}]",
                    fixable=True,
                    patch={"tags": cleaned},
                )
            )

        if task.due_at:
            due = parse_iso(task.due_at)
            created = parse_iso(task.created_at)
            if due is not None and created is not None and due < created:
                # Clear the date rather than guess a new one
                issues.append(
                    IntegrityIssue(
                        task_id=task.id,
                        title="Due date before creation",
                        detail=f"created={task.created_at} / due={task.due_at}",
                        fixable=True,
                        patch={"due_at": None},
                    )
                )

        return issues

    def group_patches(self, issues: list[IntegrityIssue]) -> list[TaskPatch]:
        """Merge fixable patches per task, in first-seen task order."""
        merged: dict[str, dict[str, Any]] = {}
        for issue in issues:
            if not (issue.fixable and issue.patch):
                continue
            merged.setdefault(issue.task_id, {}).update(issue.patch)
        return [TaskPatch(task_id=task_id, patch=patch) for task_id, patch in merged.items()]

    def build_autofix(self, issues: list[IntegrityIssue]) -> IntegrityAutofix | None:
        """Autofix command for the fixable issues, or None if nothing to fix."""
        updates = self.group_patches(issues)
        if not updates:
            return None
        return IntegrityAutofix(updates=tuple(updates))

    def fix_all(self, store: BoardStore) -> int:
        """
        Check the current board and apply every available fix in one batch.

        Returns:
            Number of tasks updated.
        """
        command = self.build_autofix(self.check(store.get_state()))
        if command is None:
            logger.debug("Integrity check found nothing to fix")
            return 0
        store.dispatch(command)
        logger.info("Integrity autofix applied to %d task(s)", len(command.updates))
        return len(command.updates)
