"""Shared test helpers."""

from collections.abc import Callable
from typing import Any

import pytest

from minikanban.models import BoardOrder, BoardState, Task

CREATED = "2026-01-01T09:00:00.000Z"


def build_task(**overrides: Any) -> Task:
    """Task with sensible defaults, overridable per test."""
    data: dict[str, Any] = {
        "id": "t1",
        "title": "Revisar bomba de agua",
        "created_at": CREATED,
    }
    data.update(overrides)
    return Task(**data)


def build_state(*tasks: Task) -> BoardState:
    """Board holding tasks, each listed in its status column in given order."""
    order = BoardOrder()
    for task in tasks:
        order = order.with_column(task.status, [*order.column(task.status), task.id])
    return BoardState(tasks={t.id: t for t in tasks}, order=order)


@pytest.fixture
def make_task() -> Callable[..., Task]:
    return build_task


@pytest.fixture
def make_state() -> Callable[..., BoardState]:
    return build_state
