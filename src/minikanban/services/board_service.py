"""Service for column views, moves and board settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models import Status, Task
from ..models.board_config import BoardConfig
from ..store import MoveTask, SetMode
from .query_service import Query, QueryService

if TYPE_CHECKING:
    from ..store import BoardStore
    from .config_service import ConfigService

logger = logging.getLogger(__name__)


class BoardService:
    """Service for board state management."""

    def __init__(
        self,
        store: BoardStore,
        config_service: ConfigService | None = None,
        query_service: QueryService | None = None,
    ) -> None:
        self.store = store
        self._config_service = config_service
        self.query_service = query_service or QueryService()

    def _get_board_config(self) -> BoardConfig:
        """Get board config, using default if no config service."""
        if self._config_service:
            return self._config_service.get_board_config()
        return BoardConfig.default()

    @property
    def column_ids(self) -> list[Status]:
        """Column ids in display order."""
        return self._get_board_config().column_ids

    def load_columns(self, query: Query | None = None) -> list[tuple[Status, str, list[Task]]]:
        """
        Get every column with its (optionally filtered) tasks.

        Returns:
            List of (status, title, tasks) tuples in display order.
        """
        state = self.store.get_state()
        config = self._get_board_config()
        return [
            (col.id, col.title, self.query_service.column_view(state, col.id, query))
            for col in config.columns
        ]

    def move_task(self, task_id: str, to: Status, index: int | None = None) -> Task | None:
        """Move a task to a column position (top by default)."""
        state = self.store.get_state()
        if task_id not in state.tasks:
            logger.debug("move_task: task not found: %s", task_id)
            return None
        state = self.store.dispatch(MoveTask(task_id=task_id, to=to, index=index))
        return state.tasks[task_id]

    def move_task_left(self, task_id: str) -> Task | None:
        """Move task to the previous column (e.g., doing -> todo)."""
        return self._move_by(task_id, -1)

    def move_task_right(self, task_id: str) -> Task | None:
        """Move task to the next column (e.g., todo -> doing)."""
        return self._move_by(task_id, 1)

    def reorder_task(self, task_id: str, delta: int) -> bool:
        """
        Reorder task within its column.

        Args:
            task_id: Task ID to reorder
            delta: -1 to move up, 1 to move down

        Returns:
            True if task was moved
        """
        state = self.store.get_state()
        task = state.get_task(task_id)
        if task is None:
            logger.debug("reorder_task: task not found: %s", task_id)
            return False

        column = state.order.column(task.status)
        if task_id not in column:
            logger.debug("reorder_task: task not in column order: %s", task_id)
            return False

        current_idx = column.index(task_id)
        new_idx = current_idx + delta
        if new_idx < 0 or new_idx >= len(column):
            logger.debug("reorder_task: at boundary, cannot move: %s", task_id)
            return False

        self.store.dispatch(MoveTask(task_id=task_id, to=task.status, index=new_idx))
        return True

    def set_elevated_mode(self, value: bool) -> None:
        """Turn elevated review mode on or off."""
        self.store.dispatch(SetMode(value=value))
        logger.info("Elevated review mode %s", "on" if value else "off")

    def toggle_elevated_mode(self) -> bool:
        """Flip elevated review mode and return the new value."""
        value = not self.store.get_state().settings.elevated_mode
        self.set_elevated_mode(value)
        return value

    def _move_by(self, task_id: str, delta: int) -> Task | None:
        task = self.store.get_state().get_task(task_id)
        if task is None:
            return None

        column_ids = self.column_ids
        idx = column_ids.index(task.status) + delta
        if idx < 0 or idx >= len(column_ids):
            return task  # Already at the edge

        return self.move_task(task_id, column_ids[idx])
