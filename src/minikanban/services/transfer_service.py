"""Service for exporting boards and importing untrusted payloads.

Import is all-or-nothing: a payload that fails schema validation is
rejected with a list of ``path: message`` errors. A payload that passes is
repaired (duplicate or mismatched ids regenerated, tasks normalized, column
order reconciled) and returned as a new state for the caller to commit.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from ..models import (
    STATUSES,
    AuditEvent,
    BoardOrder,
    BoardState,
    ImportPayload,
    Task,
    validate_payload,
)
from ..utils import new_id, now_utc, safe_trim

logger = logging.getLogger(__name__)

INVALID_FILE_ERROR = "Invalid file or malformed JSON"


@dataclass
class ImportSuccess:
    """A validated and repaired board ready to be committed."""

    state: BoardState
    appended: list[AuditEvent] = field(default_factory=list)  # IMPORT_FIXUP events added

    ok: bool = True


@dataclass
class ImportFailure:
    """An import rejected before touching any state."""

    errors: list[str] = field(default_factory=list)

    ok: bool = False


ImportResult = ImportSuccess | ImportFailure


class TransferService:
    """Service for board export and import."""

    EXPORT_PREFIX = "kanban-export-"

    def export_state(self, state: BoardState) -> ImportPayload:
        """Tag the state with the format version."""
        return ImportPayload.from_state(state)

    def dump_payload(self, payload: ImportPayload) -> str:
        """Pretty-printed JSON for a payload."""
        return json.dumps(payload.to_dict(), indent=2, ensure_ascii=False)

    def export_filename(self, today: date | None = None) -> str:
        """File name for an export made on the given day."""
        today = today or now_utc().date()
        return f"{self.EXPORT_PREFIX}{today.isoformat()}.json"

    def write_export(self, state: BoardState, directory: Path, today: date | None = None) -> Path:
        """Write the export file into directory and return its path."""
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / self.export_filename(today)
        path.write_text(self.dump_payload(self.export_state(state)), encoding="utf-8")
        logger.info("Board exported: %s (%d tasks)", path, len(state.tasks))
        return path

    def read_import_file(self, path: Path, prior_audit: list[AuditEvent]) -> ImportResult:
        """Read, parse and import a user-selected file. Never raises for bad input."""
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Import failed reading %s: %s", path, e)
            return ImportFailure(errors=[INVALID_FILE_ERROR])
        return self.import_state(prior_audit, raw)

    def import_state(self, prior_audit: list[AuditEvent], raw: Any) -> ImportResult:
        """
        Validate and repair an untrusted payload.

        Args:
            prior_audit: Audit history of the board being replaced. It is
                discarded: a successful import carries its own history.
            raw: Decoded JSON payload.

        Returns:
            ImportSuccess with the reconciled state, or ImportFailure with
            the validation errors.
        """
        parsed = validate_payload(raw)
        if isinstance(parsed, list):
            logger.info("Import rejected with %d error(s)", len(parsed))
            return ImportFailure(errors=parsed)

        payload = parsed.to_state()
        logger.debug("Import replaces %d prior audit event(s)", len(prior_audit))

        tasks, id_map, fixups = self._repair_ids(payload.tasks)
        order = self._reconcile_order(payload.order, tasks, id_map)

        state = BoardState(
            tasks=tasks,
            order=order,
            audit=[*payload.audit, *fixups],
            settings=payload.settings,
        )
        logger.info("Import accepted: %d tasks, %d id fixup(s)", len(tasks), len(fixups))
        return ImportSuccess(state=state, appended=fixups)

    def _repair_ids(
        self, entries: dict[str, Task]
    ) -> tuple[dict[str, Task], dict[str, str], list[AuditEvent]]:
        """Regenerate ids that mismatch their key or repeat, normalizing every task."""
        seen: set[str] = set()
        id_map: dict[str, str] = {}  # old -> new
        fixups: list[AuditEvent] = []
        tasks: dict[str, Task] = {}

        for key, task in entries.items():
            internal_id = safe_trim(task.id)
            final_id = internal_id

            if key != internal_id or internal_id in seen:
                final_id = new_id()
                while final_id in seen or final_id in entries:
                    final_id = new_id()
                id_map[internal_id] = final_id
                fixups.append(
                    AuditEvent.record(
                        "IMPORT_FIXUP",
                        final_id,
                        before={"id": internal_id},
                        after={"id": final_id},
                    )
                )

            seen.add(final_id)
            tasks[final_id] = task.model_copy(update={"id": final_id}).normalized()

        return tasks, id_map, fixups

    def _reconcile_order(
        self,
        order: BoardOrder,
        tasks: dict[str, Task],
        id_map: dict[str, str],
    ) -> BoardOrder:
        """Remap ids, drop duplicates and dangling refs, then place unlisted tasks.

        Task status is the source of truth for column membership; order only
        provides positions within a column.
        """
        columns: dict[str, list[str]] = {}
        for status in STATUSES:
            remapped: list[str] = []
            for task_id in order.column(status):
                task_id = id_map.get(task_id, task_id)
                if not task_id or task_id in remapped or task_id not in tasks:
                    continue
                if tasks[task_id].status != status:
                    # Wrong column, appended to its own column below
                    continue
                remapped.append(task_id)
            columns[status] = remapped

        listed = {task_id for ids in columns.values() for task_id in ids}
        for task in tasks.values():
            if task.id not in listed:
                columns[task.status].append(task.id)

        return BoardOrder(**columns)
