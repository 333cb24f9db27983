"""Board commands.

The command set is closed: the reducer handles exactly these classes and
treats anything else as a no-op.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from ..models import BoardState, Status, TaskInput


@dataclass(frozen=True)
class Init:
    """Replace the whole state (bootstrap)."""

    state: BoardState


@dataclass(frozen=True)
class SetMode:
    """Turn elevated review mode on or off."""

    value: bool


@dataclass(frozen=True)
class CreateTask:
    """Create a task at the top of a column."""

    status: Status
    task_input: TaskInput


@dataclass(frozen=True)
class UpdateTask:
    """Replace the editable fields of a task."""

    task_id: str
    task_input: TaskInput


@dataclass(frozen=True)
class DeleteTask:
    """Remove a task from the board."""

    task_id: str


@dataclass(frozen=True)
class MoveTask:
    """Move a task to a column position (index defaults to the top)."""

    task_id: str
    to: Status
    index: int | None = None


@dataclass(frozen=True)
class ImportState:
    """Replace the state with an already validated and repaired import."""

    state: BoardState


@dataclass(frozen=True)
class TaskPatch:
    """Field updates for one task, keyed by Python field name."""

    task_id: str
    patch: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class IntegrityAutofix:
    """Apply a batch of integrity patches, one audited UPDATE per task."""

    updates: tuple[TaskPatch, ...] = ()


Command = (
    Init
    | SetMode
    | CreateTask
    | UpdateTask
    | DeleteTask
    | MoveTask
    | ImportState
    | IntegrityAutofix
)
