"""Pure board state transitions.

``reduce(state, command)`` never mutates ``state`` and never raises for
unknown commands. Every transition keeps two invariants: order sequences
only reference existing tasks, and each task id sits in the sequence of
its own status.
"""

from __future__ import annotations

import logging

from ..models import AuditEvent, BoardState, Status, Task
from ..utils import clamp, new_id, now_iso
from .commands import (
    CreateTask,
    DeleteTask,
    ImportState,
    Init,
    IntegrityAutofix,
    MoveTask,
    SetMode,
    UpdateTask,
)

logger = logging.getLogger(__name__)

# Autofix patches may not rewrite identity or column membership
PROTECTED_FIELDS = frozenset({"id", "created_at", "status"})


def reduce(state: BoardState, command: object) -> BoardState:
    """Apply one command and return the next state."""
    if isinstance(command, (Init, ImportState)):
        return command.state

    if isinstance(command, SetMode):
        settings = state.settings.model_copy(update={"elevated_mode": command.value})
        return state.model_copy(update={"settings": settings})

    if isinstance(command, CreateTask):
        return _create_task(state, command)

    if isinstance(command, UpdateTask):
        return _update_task(state, command)

    if isinstance(command, DeleteTask):
        return _delete_task(state, command)

    if isinstance(command, MoveTask):
        return _move_task(state, command)

    if isinstance(command, IntegrityAutofix):
        return _autofix(state, command)

    logger.debug("Ignoring unknown command: %r", command)
    return state


def update_event(task_id: str, before: Task, after: Task) -> AuditEvent:
    """UPDATE event holding only the fields that differ, on both sides."""
    changed = before.changed_fields(after)
    return AuditEvent.record(
        "UPDATE",
        task_id,
        before=before.partial(changed),
        after=after.partial(changed),
    )


def insert_at(task_ids: list[str], task_id: str, index: int | None) -> list[str]:
    """Insert task_id at index clamped to [0, len]; None means the top."""
    idx = int(clamp(index if index is not None else 0, 0, len(task_ids)))
    return [*task_ids[:idx], task_id, *task_ids[idx:]]


def _unused_id(state: BoardState) -> str:
    task_id = new_id()
    while task_id in state.tasks:
        task_id = new_id()
    return task_id


def _create_task(state: BoardState, command: CreateTask) -> BoardState:
    problem = command.task_input.title_error()
    if problem is not None:
        logger.warning("create: rejected input, %s", problem)
        return state

    task_id = _unused_id(state)
    created = Task(
        id=task_id,
        created_at=now_iso(),
        status=command.status,
        **command.task_input.to_fields(),
    )

    tasks = {**state.tasks, task_id: created}
    column = [task_id, *state.order.column(command.status)]
    order = state.order.with_column(command.status, column)
    audit = [AuditEvent.record("CREATE", task_id, after=created.snapshot()), *state.audit]

    logger.info("Task created: %s (status=%s)", task_id, command.status)
    return state.model_copy(update={"tasks": tasks, "order": order, "audit": audit})


def _update_task(state: BoardState, command: UpdateTask) -> BoardState:
    prev = state.tasks.get(command.task_id)
    if prev is None:
        logger.debug("update: task not found: %s", command.task_id)
        return state

    problem = command.task_input.title_error()
    if problem is not None:
        logger.warning("update %s: rejected input, %s", command.task_id, problem)
        return state

    updated = prev.model_copy(update=command.task_input.to_fields())
    tasks = {**state.tasks, command.task_id: updated}
    audit = [update_event(command.task_id, prev, updated), *state.audit]

    logger.info("Task updated: %s", command.task_id)
    return state.model_copy(update={"tasks": tasks, "audit": audit})


def _delete_task(state: BoardState, command: DeleteTask) -> BoardState:
    prev = state.tasks.get(command.task_id)
    if prev is None:
        logger.debug("delete: task not found: %s", command.task_id)
        return state

    tasks = {k: v for k, v in state.tasks.items() if k != command.task_id}
    order = state.order.without(command.task_id)
    audit = [AuditEvent.record("DELETE", command.task_id, before=prev.snapshot()), *state.audit]

    logger.info("Task deleted: %s", command.task_id)
    return state.model_copy(update={"tasks": tasks, "order": order, "audit": audit})


def _move_task(state: BoardState, command: MoveTask) -> BoardState:
    prev = state.tasks.get(command.task_id)
    if prev is None:
        logger.debug("move: task not found: %s", command.task_id)
        return state

    to: Status = command.to
    if prev.status == to:
        # Reorder within the column, not audited
        remaining = [x for x in state.order.column(to) if x != command.task_id]
        order = state.order.with_column(to, insert_at(remaining, command.task_id, command.index))
        logger.debug("Task reordered: %s (%s)", command.task_id, to)
        return state.model_copy(update={"order": order})

    from_status = prev.status
    tasks = {**state.tasks, command.task_id: prev.model_copy(update={"status": to})}
    cleaned = state.order.without(command.task_id)
    order = cleaned.with_column(to, insert_at(cleaned.column(to), command.task_id, command.index))
    audit = [
        AuditEvent.record(
            "MOVE",
            command.task_id,
            before={"id": command.task_id, "status": from_status},
            after={"id": command.task_id, "status": to},
        ),
        *state.audit,
    ]

    logger.info("Task moved: %s (%s -> %s)", command.task_id, from_status, to)
    return state.model_copy(update={"tasks": tasks, "order": order, "audit": audit})


def _autofix(state: BoardState, command: IntegrityAutofix) -> BoardState:
    tasks = dict(state.tasks)
    events: list[AuditEvent] = []

    for update in command.updates:
        prev = tasks.get(update.task_id)
        if prev is None:
            logger.debug("autofix: task not found: %s", update.task_id)
            continue
        patch = {
            k: v
            for k, v in update.patch.items()
            if k in Task.model_fields and k not in PROTECTED_FIELDS
        }
        fixed = prev.model_copy(update=patch)
        tasks[update.task_id] = fixed
        events.append(update_event(update.task_id, prev, fixed))

    if not events:
        return state

    # Batch goes on top of history in the same order as the updates
    audit = [*events, *state.audit]
    logger.info("Autofix applied to %d task(s)", len(events))
    return state.model_copy(update={"tasks": tasks, "audit": audit})
