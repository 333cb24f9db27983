"""Task domain model."""

from __future__ import annotations

import math
from typing import Any, ClassVar, Literal

from pydantic import Field

from ..utils import clamp, safe_trim
from .base import WireModel

Status = Literal["todo", "doing", "done"]
Priority = Literal["low", "medium", "high"]

# Status constants, in column order
STATUS_TODO = "todo"
STATUS_DOING = "doing"
STATUS_DONE = "done"
STATUSES: tuple[Status, ...] = (STATUS_TODO, STATUS_DOING, STATUS_DONE)

PRIORITY_LOW = "low"
PRIORITY_MEDIUM = "medium"
PRIORITY_HIGH = "high"
PRIORITIES: tuple[Priority, ...] = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH)

RUBRIC_MIN = 0
RUBRIC_MAX = 10

# Shortest title, after trimming, that a stored task may carry
MIN_TITLE_LENGTH = 3


def clean_tags(tags: list[str]) -> list[str]:
    """Trim every tag and drop the ones left empty. Order is kept."""
    cleaned = [safe_trim(tag) for tag in tags]
    return [tag for tag in cleaned if tag]


def clean_estimate(value: float) -> float:
    """Floor an estimate at 0; non-finite estimates become 0."""
    if not math.isfinite(value):
        return 0
    return max(0, value)


def clean_rubric_score(value: float | None) -> float | None:
    """Clamp a rubric score into [0, 10], keeping None."""
    if value is None:
        return None
    return clamp(value, RUBRIC_MIN, RUBRIC_MAX)


def clean_optional_text(value: str | None) -> str | None:
    """Strip optional text, mapping blank values to None."""
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


class Task(WireModel):
    """A maintenance order on the board."""

    id: str
    title: str
    description: str | None = None
    priority: Priority = PRIORITY_MEDIUM
    tags: list[str] = Field(default_factory=list)
    estimate_minutes: float = 0
    created_at: str  # ISO timestamp, set once
    due_at: str | None = None  # ISO timestamp
    status: Status = STATUS_TODO

    # Reviewer fields, shown only in elevated review mode
    reviewer_notes: str | None = None
    rubric_score: float | None = None  # 0..10
    rubric_comment: str | None = None

    # Fields compared when computing audit diffs
    DIFF_FIELDS: ClassVar[tuple[str, ...]] = (
        "title",
        "description",
        "priority",
        "tags",
        "estimate_minutes",
        "due_at",
        "status",
        "reviewer_notes",
        "rubric_score",
        "rubric_comment",
    )

    @classmethod
    def wire_name(cls, field_name: str) -> str:
        """camelCase name used for a field in payloads and audit diffs."""
        field = cls.model_fields[field_name]
        return field.alias or field_name

    def snapshot(self) -> dict[str, Any]:
        """Full task as a wire-keyed dict, used for CREATE/DELETE diffs."""
        return self.model_dump(by_alias=True)

    def normalized(self) -> Task:
        """Copy with title, tags, estimate and rubric score cleaned."""
        return self.model_copy(
            update={
                "title": safe_trim(self.title),
                "tags": clean_tags(self.tags),
                "estimate_minutes": clean_estimate(self.estimate_minutes),
                "rubric_score": clean_rubric_score(self.rubric_score),
            }
        )

    def changed_fields(self, other: Task) -> list[str]:
        """Names of the diff fields whose values differ between self and other.

        Lists are compared by content and order, not identity.
        """
        return [name for name in self.DIFF_FIELDS if getattr(self, name) != getattr(other, name)]

    def partial(self, field_names: list[str]) -> dict[str, Any]:
        """Wire-keyed dict with the task id and the given fields."""
        data: dict[str, Any] = {"id": self.id}
        for name in field_names:
            value = getattr(self, name)
            data[self.wire_name(name)] = list(value) if isinstance(value, list) else value
        return data


class TaskInput(WireModel):
    """User-editable task fields, as submitted by a create or edit form."""

    title: str
    description: str | None = None
    priority: Priority = PRIORITY_MEDIUM
    tags: list[str] = Field(default_factory=list)
    estimate_minutes: float = 0
    due_at: str | None = None
    reviewer_notes: str | None = None
    rubric_score: float | None = None
    rubric_comment: str | None = None

    def title_error(self) -> str | None:
        """Why the title can't be stored, or None when it is long enough."""
        if len(safe_trim(self.title)) < MIN_TITLE_LENGTH:
            return f"title needs at least {MIN_TITLE_LENGTH} characters"
        return None

    def to_fields(self) -> dict[str, Any]:
        """Normalized field values ready to be written onto a Task."""
        return {
            "title": safe_trim(self.title),
            "description": clean_optional_text(self.description),
            "priority": self.priority,
            "tags": clean_tags(self.tags),
            "estimate_minutes": clean_estimate(self.estimate_minutes),
            "due_at": clean_optional_text(self.due_at),
            "reviewer_notes": clean_optional_text(self.reviewer_notes),
            "rubric_score": clean_rubric_score(self.rubric_score),
            "rubric_comment": clean_optional_text(self.rubric_comment),
        }

    @classmethod
    def from_task(cls, task: Task) -> TaskInput:
        """Build an input pre-filled with a task's editable fields."""
        return cls(
            title=task.title,
            description=task.description,
            priority=task.priority,
            tags=list(task.tags),
            estimate_minutes=task.estimate_minutes,
            due_at=task.due_at,
            reviewer_notes=task.reviewer_notes,
            rubric_score=task.rubric_score,
            rubric_comment=task.rubric_comment,
        )
