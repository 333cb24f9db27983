"""Audit log models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from ..utils import now_iso
from .base import WireModel

AuditAction = Literal["CREATE", "UPDATE", "DELETE", "MOVE", "IMPORT_FIXUP"]

AUDIT_ACTIONS: tuple[AuditAction, ...] = ("CREATE", "UPDATE", "DELETE", "MOVE", "IMPORT_FIXUP")

# Single implicit user
ACTOR_LABEL = "Alumno/a"


class AuditDiff(WireModel):
    """Partial task fields before and after a change, keyed by wire names."""

    before: dict[str, Any] | None = None
    after: dict[str, Any] | None = None

    def changed_keys(self) -> list[str]:
        """Field names present on either side, excluding the id, first-seen order."""
        keys: list[str] = []
        for side in (self.before or {}, self.after or {}):
            for key in side:
                if key != "id" and key not in keys:
                    keys.append(key)
        return keys


class AuditEvent(WireModel):
    """Immutable record of one board mutation."""

    timestamp: str
    action: AuditAction
    task_id: str = Field(min_length=1)
    diff: AuditDiff = Field(default_factory=AuditDiff)
    actor_label: Literal["Alumno/a"] = ACTOR_LABEL

    @classmethod
    def record(
        cls,
        action: AuditAction,
        task_id: str,
        before: dict[str, Any] | None = None,
        after: dict[str, Any] | None = None,
    ) -> AuditEvent:
        """Create an event stamped with the current time."""
        return cls(
            timestamp=now_iso(),
            action=action,
            task_id=task_id,
            diff=AuditDiff(before=before, after=after),
        )
