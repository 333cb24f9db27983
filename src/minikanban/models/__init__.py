"""Data models."""

from .audit import ACTOR_LABEL, AUDIT_ACTIONS, AuditAction, AuditDiff, AuditEvent
from .board import BoardOrder, BoardSettings, BoardState
from .board_config import BoardConfig, ColumnConfig, MinikanbanConfig
from .payload import (
    FORMAT_VERSION,
    ImportPayload,
    ImportPayloadSchema,
    validate_payload,
)
from .task import (
    MIN_TITLE_LENGTH,
    PRIORITIES,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    STATUS_DOING,
    STATUS_DONE,
    STATUS_TODO,
    STATUSES,
    Priority,
    Status,
    Task,
    TaskInput,
)

__all__ = [
    "ACTOR_LABEL",
    "AUDIT_ACTIONS",
    "FORMAT_VERSION",
    "MIN_TITLE_LENGTH",
    "PRIORITIES",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "STATUSES",
    "STATUS_DOING",
    "STATUS_DONE",
    "STATUS_TODO",
    "AuditAction",
    "AuditDiff",
    "AuditEvent",
    "BoardConfig",
    "BoardOrder",
    "BoardSettings",
    "BoardState",
    "ColumnConfig",
    "ImportPayload",
    "ImportPayloadSchema",
    "MinikanbanConfig",
    "Priority",
    "Status",
    "Task",
    "TaskInput",
    "validate_payload",
]
