"""Service for task create/update/delete and editor-based editing."""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import tempfile
from datetime import UTC, date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

import frontmatter
import yaml
from pydantic import ValidationError

from ..models import PRIORITIES, Status, Task, TaskInput
from ..store import CreateTask, DeleteTask, UpdateTask
from ..utils import to_iso

if TYPE_CHECKING:
    from ..store import BoardStore

logger = logging.getLogger(__name__)

REVIEW_FIELDS = ("reviewer_notes", "rubric_score", "rubric_comment")

FIELD_COMMENTS = {
    "priority": f"Valid: {', '.join(PRIORITIES)}",
    "estimate_minutes": "Minutes, 0 for none",
    "due_at": "ISO date (2026-05-01 or 2026-05-01T09:00:00Z), blank for none",
    "rubric_score": "0-10, blank for none",
}


class TaskService:
    """Service for task CRUD operations."""

    def __init__(self, store: BoardStore, editor: str | None = None) -> None:
        self.store = store
        self.editor = editor

    def create_task(self, status: Status, task_input: TaskInput) -> Task:
        """Create a task at the top of the status column.

        Raises:
            ValueError: If the title is too short to store.
        """
        _require_title(task_input)
        state = self.store.dispatch(CreateTask(status=status, task_input=task_input))
        task_id = state.order.column(status)[0]
        return state.tasks[task_id]

    def update_task(self, task_id: str, task_input: TaskInput) -> Task | None:
        """Replace the editable fields of a task. Returns None if not found.

        Raises:
            ValueError: If the title is too short to store.
        """
        _require_title(task_input)
        state = self.store.dispatch(UpdateTask(task_id=task_id, task_input=task_input))
        return state.get_task(task_id)

    def delete_task(self, task_id: str) -> bool:
        """Delete a task by id. Returns False if it did not exist."""
        if self.get_task(task_id) is None:
            logger.debug("delete_task: task not found: %s", task_id)
            return False
        self.store.dispatch(DeleteTask(task_id=task_id))
        return True

    def get_task(self, task_id: str) -> Task | None:
        """Get a task by id."""
        return self.store.get_state().get_task(task_id)

    def get_all_tasks(self) -> list[Task]:
        """Get all tasks."""
        return self.store.get_state().task_list()

    # --- Editor support ---

    def edit_input(self, initial: TaskInput, elevated: bool = False) -> TaskInput | None:
        """
        Let the user edit task fields in their editor.

        The task is written as markdown with YAML front matter; the body is
        the description. Reviewer fields are only offered when elevated is
        True, otherwise their current values are kept.

        Returns the edited input, or None if the editor failed or the
        result could not be parsed.
        """
        content = self.format_for_editing(initial, elevated)

        with tempfile.NamedTemporaryFile(
            mode="w",
            suffix=".md",
            delete=False,
            prefix="minikanban-task-",
            encoding="utf-8",
        ) as f:
            f.write(content)
            temp_path = Path(f.name)

        try:
            if not self._run_editor(temp_path):
                logger.debug("Editor returned non-zero exit code")
                return None

            edited = temp_path.read_text(encoding="utf-8")
            if edited == content:
                logger.debug("No changes detected after editing")
                return initial

            try:
                return self.parse_edited(edited, initial, elevated)
            except (ValueError, ValidationError, yaml.YAMLError) as e:
                logger.warning("Could not parse edited task: %s", e)
                return None
        finally:
            temp_path.unlink(missing_ok=True)

    def format_for_editing(self, task_input: TaskInput, elevated: bool = False) -> str:
        """Render a task input as front matter plus description body.

        Constrained fields carry a trailing YAML comment listing valid values.
        """
        post = frontmatter.Post(task_input.description or "")
        metadata: dict[str, Any] = {
            "title": task_input.title,
            "priority": task_input.priority,
            "tags": list(task_input.tags),
            "estimate_minutes": task_input.estimate_minutes,
            "due_at": task_input.due_at or "",
        }
        if elevated:
            metadata["reviewer_notes"] = task_input.reviewer_notes or ""
            metadata["rubric_score"] = task_input.rubric_score
            metadata["rubric_comment"] = task_input.rubric_comment or ""
        post.metadata = metadata

        lines = []
        boundaries = 0
        for line in frontmatter.dumps(post, sort_keys=False).splitlines():
            if line == "---" and boundaries < 2:
                boundaries += 1
            elif boundaries == 1 and ":" in line:
                comment = FIELD_COMMENTS.get(line.split(":", 1)[0])
                if comment:
                    line = f"{line}  # {comment}"
            lines.append(line)
        return "\n".join(lines) + "\n"

    def parse_edited(
        self, content: str, initial: TaskInput, elevated: bool = False
    ) -> TaskInput:
        """Parse edited content back into a TaskInput.

        Raises:
            ValueError: If the content has no title or it is too short.
            ValidationError: If a field has an invalid value.
        """
        post = frontmatter.loads(content)
        meta = post.metadata

        title = meta.get("title")
        if not title:
            raise ValueError("title is required")

        data: dict[str, Any] = {
            "title": str(title),
            "description": post.content.strip() or None,
            "priority": meta.get("priority", initial.priority),
            "tags": _as_tags(meta.get("tags")),
            "estimate_minutes": meta.get("estimate_minutes", initial.estimate_minutes) or 0,
            "due_at": _as_iso(meta.get("due_at")),
        }
        for name in REVIEW_FIELDS:
            if elevated:
                value = meta.get(name)
                data[name] = None if value == "" else value
            else:
                data[name] = getattr(initial, name)

        edited = TaskInput(**data)
        _require_title(edited)
        return edited

    def _run_editor(self, filepath: Path) -> bool:
        """Run the user's editor on a file."""
        editor = self.editor or os.environ.get("EDITOR") or os.environ.get("VISUAL")
        if not editor:
            for candidate in ["nvim", "vim", "vi", "nano"]:
                if shutil.which(candidate) is not None:
                    editor = candidate
                    break
            else:
                return False

        # Handle editors with arguments (e.g., "code --wait")
        editor_cmd = [*shlex.split(editor), str(filepath.absolute())]

        try:
            result = subprocess.run(editor_cmd, check=False)
            return result.returncode == 0
        except FileNotFoundError:
            logger.warning("Editor not found: %s", editor)
            return False


def _require_title(task_input: TaskInput) -> None:
    problem = task_input.title_error()
    if problem is not None:
        raise ValueError(problem)


def _as_iso(value: Any) -> str | None:
    """Normalize a YAML due date value (string, date or datetime) to ISO text.

    YAML loads unquoted dates as date/datetime objects; naive values are UTC.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return to_iso(value)
    if isinstance(value, date):
        return to_iso(datetime(value.year, value.month, value.day, tzinfo=UTC))
    return str(value)


def _as_tags(value: Any) -> list[str]:
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return [str(tag) for tag in value]
