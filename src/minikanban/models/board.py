"""Board state models."""

from __future__ import annotations

from pydantic import Field

from .audit import AuditEvent
from .base import WireModel
from .task import STATUSES, Status, Task


class BoardOrder(WireModel):
    """Ordered task ids for each column."""

    todo: list[str] = Field(default_factory=list)
    doing: list[str] = Field(default_factory=list)
    done: list[str] = Field(default_factory=list)

    def column(self, status: Status) -> list[str]:
        """Get the id sequence of a column."""
        return getattr(self, status)

    def with_column(self, status: Status, task_ids: list[str]) -> BoardOrder:
        """Copy with one column replaced."""
        return self.model_copy(update={status: list(task_ids)})

    def without(self, task_id: str) -> BoardOrder:
        """Copy with task_id removed from every column."""
        return self.model_copy(
            update={status: [x for x in self.column(status) if x != task_id] for status in STATUSES}
        )

    def keep_only(self, task_ids: set[str] | dict[str, Task]) -> BoardOrder:
        """Copy keeping only ids found in task_ids."""
        return self.model_copy(
            update={status: [x for x in self.column(status) if x in task_ids] for status in STATUSES}
        )

    def find_status(self, task_id: str) -> Status | None:
        """Find which column holds task_id."""
        for status in STATUSES:
            if task_id in self.column(status):
                return status
        return None

    def all_ids(self) -> list[str]:
        """All ids in column order."""
        return [task_id for status in STATUSES for task_id in self.column(status)]

    @property
    def is_empty(self) -> bool:
        """True when every column is empty."""
        return not any(self.column(status) for status in STATUSES)


class BoardSettings(WireModel):
    """Board-wide settings."""

    elevated_mode: bool = False


class BoardState(WireModel):
    """Aggregate root: tasks, column order, audit log (newest first) and settings."""

    tasks: dict[str, Task] = Field(default_factory=dict)
    order: BoardOrder = Field(default_factory=BoardOrder)
    audit: list[AuditEvent] = Field(default_factory=list)
    settings: BoardSettings = Field(default_factory=BoardSettings)

    @classmethod
    def default(cls) -> BoardState:
        """Empty board."""
        return cls()

    @property
    def is_empty(self) -> bool:
        """No tasks and no ids in any column."""
        return not self.tasks and self.order.is_empty

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by id."""
        return self.tasks.get(task_id)

    def task_list(self) -> list[Task]:
        """Tasks in insertion order of the task map."""
        return list(self.tasks.values())

    def without_orphans(self) -> BoardState:
        """Copy whose order only references existing tasks."""
        return self.model_copy(update={"order": self.order.keep_only(self.tasks)})
