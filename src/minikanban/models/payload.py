"""Versioned payload schema for persisted state, exports and imports.

The schema is stricter than the domain models. Only the description, due
date and reviewer fields may be absent, types are not coerced (pydantic
strict mode), task titles need at least three characters and the format
version must be the literal ``1``. Validation never raises to callers;
failures come back as a list of ``"path: message"`` strings.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, ValidationError

from .audit import AuditDiff, AuditEvent
from .base import WireModel
from .board import BoardOrder, BoardSettings, BoardState
from .task import Priority, Status, Task

FORMAT_VERSION = 1


class TaskSchema(Task):
    """Task as accepted from an untrusted payload."""

    id: str = Field(min_length=1)
    title: str = Field(min_length=3)
    priority: Priority
    tags: list[str]
    estimate_minutes: float
    status: Status

    def to_task(self) -> Task:
        """Convert to the plain domain model."""
        return Task(**self.model_dump())


class AuditEventSchema(AuditEvent):
    """Audit event as accepted from an untrusted payload."""

    diff: AuditDiff
    actor_label: Literal["Alumno/a"]


class BoardOrderSchema(BoardOrder):
    """Column order with all three columns required."""

    todo: list[str]
    doing: list[str]
    done: list[str]


class BoardSettingsSchema(BoardSettings):
    """Settings with every flag required."""

    elevated_mode: bool


class ImportPayloadSchema(WireModel):
    """Wire representation of a board: state plus format version."""

    version: Literal[1]
    tasks: dict[str, TaskSchema]
    order: BoardOrderSchema
    audit: list[AuditEventSchema]
    settings: BoardSettingsSchema

    def to_state(self) -> BoardState:
        """Convert to domain models, keeping map keys and order as given."""
        return BoardState(
            tasks={key: task.to_task() for key, task in self.tasks.items()},
            order=BoardOrder(**self.order.model_dump()),
            audit=[AuditEvent(**event.model_dump()) for event in self.audit],
            settings=BoardSettings(**self.settings.model_dump()),
        )


class ImportPayload(BoardState):
    """BoardState tagged with the format version, as exported."""

    version: Literal[1] = FORMAT_VERSION

    @classmethod
    def from_state(cls, state: BoardState) -> ImportPayload:
        """Tag a state with the current format version."""
        return cls(
            version=FORMAT_VERSION,
            tasks=state.tasks,
            order=state.order,
            audit=state.audit,
            settings=state.settings,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict using wire names."""
        return self.model_dump(by_alias=True)


def format_errors(exc: ValidationError) -> list[str]:
    """Render validation errors as ``dotted.path: message`` strings."""
    errors: list[str] = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"])
        errors.append(f"{path}: {err['msg']}")
    return errors


def validate_payload(raw: Any) -> ImportPayloadSchema | list[str]:
    """Validate an untrusted payload.

    Returns:
        The parsed schema on success, otherwise the list of error strings.
    """
    try:
        return ImportPayloadSchema.model_validate(raw, strict=True)
    except ValidationError as e:
        return format_errors(e)
